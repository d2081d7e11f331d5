"""
Centralized Configuration Management

This module provides type-safe configuration using Pydantic Settings.
All environment variables are validated and typed.
"""

import os
import logging
from typing import Optional
from functools import lru_cache


from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    The .env file is automatically loaded if present.
    """

    # MongoDB (read-only roster source)
    mongo_connection_str: str = Field(
        default="",
        validation_alias="MONGO_CONNECTION_STR",
        description="MongoDB connection string",
    )
    mongo_database: str = Field(
        default="campus",
        validation_alias="MONGO_DATABASE",
        description="MongoDB database holding the students and colleges collections",
    )

    # JSON roster source
    roster_file: str = Field(
        default="",
        validation_alias="ROSTER_FILE",
        description="Path to a JSON roster export",
    )

    # Academic calendar
    timezone: str = Field(
        default="Asia/Kolkata",
        validation_alias="DASHBOARD_TIMEZONE",
        description="Timezone used to read the current date",
    )
    academic_year_cutover_month: int = Field(
        default=7,
        ge=1,
        le=12,
        validation_alias="ACADEMIC_YEAR_CUTOVER_MONTH",
        description="Calendar month (1-12) on which the academic year rolls over",
    )

    # Dashboard
    students_per_page: int = Field(
        default=10,
        ge=1,
        validation_alias="STUDENTS_PER_PAGE",
        description="Rows per page in the student table",
    )
    job_cgpa_threshold: float = Field(
        default=85.0,
        validation_alias="JOB_CGPA_THRESHOLD",
        description="CGPA above which a student counts toward the job selection card",
    )
    intern_cgpa_threshold: float = Field(
        default=80.0,
        validation_alias="INTERN_CGPA_THRESHOLD",
        description="CGPA above which a student counts toward the internship selection card",
    )

    # Daemon Mode
    daemon_mode: bool = Field(
        default=False,
        validation_alias="DAEMON_MODE",
        description="Run in daemon mode (suppress stdout)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level",
    )
    log_file: str = Field(
        default="logs/roster_analytics.log",
        validation_alias="LOG_FILE",
        description="Log file path",
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


# Global daemon mode flag
_DAEMON_MODE = False


def set_daemon_mode(enabled: bool = True) -> None:
    """Set the global daemon mode flag"""
    global _DAEMON_MODE
    _DAEMON_MODE = enabled


def safe_print(*args, **kwargs) -> None:
    """Print only if not in daemon mode"""
    if not _DAEMON_MODE:
        print(*args, **kwargs)
    else:
        logger = logging.getLogger("RosterAnalytics")
        msg = " ".join(str(arg) for arg in args)
        if msg:
            logger.info(msg)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get settings instance (cached).

    Settings are loaded once and cached for the lifetime of the process.
    """
    from dotenv import load_dotenv

    load_dotenv()
    return Settings()


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Setup logging configuration.

    Args:
        settings: Optional settings object. If None, uses get_settings().

    Returns:
        Application logger instance
    """
    settings = settings or get_settings()

    # Create logs directory if needed
    log_dir = os.path.dirname(settings.log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    log_format = (
        "%(asctime)s - %(name)s - %(levelname)s - "
        "%(funcName)s:%(lineno)d - %(message)s"
    )
    date_format = "%Y-%m-%d %H:%M:%S"

    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [
        logging.FileHandler(settings.log_file, mode="a", encoding="utf-8")
    ]

    if not settings.daemon_mode:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=handlers,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("pymongo").setLevel(logging.WARNING)

    logger = logging.getLogger("RosterAnalytics")
    logger.info(
        f"Logging initialized. Level: {settings.log_level}, "
        f"Daemon: {settings.daemon_mode}"
    )

    return logger
