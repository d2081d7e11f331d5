"""
Roster Data Models

Pydantic models for the records the dashboard reads. Records are owned by
the upstream data store; the models only normalize missing fields so the
services never have to special-case partial documents.
"""

from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)


UNKNOWN_DEPARTMENT = "Unknown"


class RosterValidationError(ValueError):
    """Raised when a roster record carries a value that cannot be interpreted."""

    def __init__(self, message: str, record_id: Optional[str] = None):
        super().__init__(message)
        self.record_id = record_id


def parse_year(value: Any, field_name: str = "year") -> Optional[int]:
    """
    Interpret a year field coming from loosely typed input.

    Returns None for missing/blank values.

    Raises:
        RosterValidationError: for values that are not whole numbers
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise RosterValidationError(f"{field_name} must be a number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise RosterValidationError(f"{field_name} must be a whole number, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            raise RosterValidationError(
                f"{field_name} must be a number, got {value!r}"
            ) from None
    raise RosterValidationError(f"{field_name} must be a number, got {value!r}")


class EntryStatus(str, Enum):
    APPLIED = "applied"
    SELECTED = "selected"
    OTHER = "other"


class PlacementType(str, Enum):
    ON_CAMPUS = "onCampus"
    OFF_CAMPUS = "offCampus"


class ApplicationEntry(BaseModel):
    """A job application or internship attempt."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: EntryStatus = EntryStatus.OTHER

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> EntryStatus:
        try:
            return EntryStatus(value)
        except ValueError:
            return EntryStatus.OTHER

    @property
    def is_selected(self) -> bool:
        return self.status == EntryStatus.SELECTED


class StudentRecord(BaseModel):
    """Student document as exported by the college portal."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    department: str = UNKNOWN_DEPARTMENT
    enrollment_year: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("enrollment_year", "enrollmentYear", "joiningYear"),
    )
    graduation_year: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("graduation_year", "graduationYear"),
    )
    batch: Optional[str] = None
    cgpa: float = 0.0
    applications: Tuple[ApplicationEntry, ...] = ()
    internships: Tuple[ApplicationEntry, ...] = ()
    companies: Tuple[Any, ...] = ()
    placement_type: PlacementType = Field(
        default=PlacementType.OFF_CAMPUS,
        validation_alias=AliasChoices("placement_type", "placementType"),
    )
    is_verified: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_verified", "isCollegeVerified"),
    )
    campus_score: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("campus_score", "campusScore"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        # Mongo hands back ObjectId instances
        return "" if value is None else str(value)

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: Any) -> str:
        return "" if value is None else value

    @field_validator("department", mode="before")
    @classmethod
    def _default_department(cls, value: Any) -> str:
        if value is None or value == "":
            return UNKNOWN_DEPARTMENT
        return value

    @field_validator("enrollment_year", "graduation_year", mode="before")
    @classmethod
    def _parse_year(cls, value: Any, info: ValidationInfo) -> Optional[int]:
        return parse_year(value, info.field_name)

    @field_validator("cgpa", mode="before")
    @classmethod
    def _default_cgpa(cls, value: Any) -> Any:
        return 0.0 if value is None or value == "" else value

    @field_validator("applications", "internships", "companies", mode="before")
    @classmethod
    def _default_sequence(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("placement_type", mode="before")
    @classmethod
    def _coerce_placement_type(cls, value: Any) -> PlacementType:
        # Everything that is not explicitly on-campus lands in the off-campus bucket
        if value == PlacementType.ON_CAMPUS.value:
            return PlacementType.ON_CAMPUS
        return PlacementType.OFF_CAMPUS

    @field_validator("is_verified", mode="before")
    @classmethod
    def _default_verified(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def is_on_campus(self) -> bool:
        return self.placement_type == PlacementType.ON_CAMPUS

    @property
    def selected_applications(self) -> int:
        return sum(1 for app in self.applications if app.is_selected)

    @property
    def selected_internships(self) -> int:
        return sum(1 for intern in self.internships if intern.is_selected)


class Department(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str


class CollegeProfile(BaseModel):
    """College document; only the fields the dashboard reads."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    departments: Tuple[Department, ...] = ()

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("departments", mode="before")
    @classmethod
    def _coerce_departments(cls, value: Any) -> Any:
        if value is None:
            return ()
        return [{"name": d} if isinstance(d, str) else d for d in value]

    @property
    def department_names(self) -> List[str]:
        return [d.name for d in self.departments]


def load_students(documents: List[dict]) -> List[StudentRecord]:
    """
    Validate raw student documents into records.

    Raises:
        RosterValidationError: naming the first document that fails validation
    """
    students: List[StudentRecord] = []
    for index, doc in enumerate(documents):
        try:
            students.append(StudentRecord.model_validate(doc))
        except ValidationError as e:
            record_id = str(doc.get("_id") or doc.get("id") or index)
            raise RosterValidationError(
                f"Invalid student record {record_id}: {e.errors()[0]['msg']}",
                record_id=record_id,
            ) from e
    return students
