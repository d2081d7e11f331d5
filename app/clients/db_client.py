"""
Database Client

Handles the raw MongoDB connection and provides access to the collections
the dashboard reads. Decoupled from roster loading logic.
"""

import logging
from typing import Optional
from pymongo import MongoClient

from core.config import get_settings, safe_print


class DBClient:
    """
    Database client for handling MongoDB connections.
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        database_name: Optional[str] = None,
    ):
        """
        Initialize database client.

        Args:
            connection_string: MongoDB connection string. If None, read from settings.
            database_name: Database name. If None, read from settings.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        settings = get_settings()
        self.connection_string = connection_string or settings.mongo_connection_str
        self.database_name = database_name or settings.mongo_database

        self.client: Optional[MongoClient] = None
        self.db = None

        # Collections
        self._students_collection = None
        self._colleges_collection = None

    def connect(self) -> None:
        """Establish database connection"""
        self.logger.info("Attempting to connect to MongoDB")
        try:
            if not self.connection_string:
                error_msg = "MONGO_CONNECTION_STR not found in environment variables"
                self.logger.error(error_msg)
                raise ValueError(error_msg)

            self.client = MongoClient(self.connection_string)
            self.db = self.client[self.database_name]

            self._students_collection = self.db["collegestudents"]
            self._colleges_collection = self.db["colleges"]

            # Test connection
            self.client.admin.command("ping")
            success_msg = "Successfully connected to MongoDB"
            self.logger.info(success_msg)
            safe_print(success_msg)

        except Exception as e:
            error_msg = f"Failed to connect to MongoDB: {e}"
            self.logger.error(error_msg, exc_info=True)
            safe_print(error_msg)
            raise

    def close_connection(self) -> None:
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            self.logger.info("MongoDB connection closed")

    @property
    def students_collection(self):
        return self._students_collection

    @property
    def colleges_collection(self):
        return self._colleges_collection
