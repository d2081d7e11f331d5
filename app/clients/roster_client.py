"""
Roster Clients

Read-only sources that hand the dashboard a roster snapshot:

- JsonRosterClient: a JSON export on disk
- MongoRosterClient: the portal's MongoDB collections

Both validate documents into StudentRecord / CollegeProfile models and
raise RosterValidationError for records that cannot be interpreted.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from bson import ObjectId

from clients.db_client import DBClient
from core.config import safe_print
from core.models import CollegeProfile, StudentRecord, load_students


class RosterClient(Protocol):
    """Anything that can supply students and the college they belong to."""

    def get_students(self, college_id: Optional[str] = None) -> List[StudentRecord]: ...

    def get_college(self, college_id: Optional[str] = None) -> Optional[CollegeProfile]: ...


class JsonRosterClient:
    """
    Roster source backed by a JSON file.

    Accepts either a bare array of student documents or an object of the
    form {"college": {...}, "students": [...]}.
    """

    def __init__(self, path: Union[str, Path]):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.path = Path(path)
        self._payload: Optional[Any] = None

    def _load(self) -> Any:
        if self._payload is None:
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    self._payload = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                error_msg = f"Failed to read roster file {self.path}: {e}"
                self.logger.error(error_msg)
                safe_print(error_msg)
                raise
        return self._payload

    def get_students(self, college_id: Optional[str] = None) -> List[StudentRecord]:
        payload = self._load()
        documents = payload.get("students", []) if isinstance(payload, dict) else payload

        if college_id:
            documents = [d for d in documents if str(d.get("college", "")) == college_id]

        students = load_students(documents)
        self.logger.info(f"Loaded {len(students)} students from {self.path}")
        return students

    def get_college(self, college_id: Optional[str] = None) -> Optional[CollegeProfile]:
        payload = self._load()
        if not isinstance(payload, dict) or not payload.get("college"):
            return None
        return CollegeProfile.model_validate(payload["college"])


class MongoRosterClient:
    """
    Roster source backed by the portal's MongoDB.

    Uses dependency injection for the DBClient; a client is created and
    connected when none is given.
    """

    def __init__(self, db_client: Optional[DBClient] = None):
        self.logger = logging.getLogger(self.__class__.__name__)
        if db_client:
            self.db_client = db_client
        else:
            self.db_client = DBClient()
            self.db_client.connect()

    @staticmethod
    def _id_query(value: str) -> Dict[str, Any]:
        """Match an id stored either as ObjectId or as a plain string."""
        if ObjectId.is_valid(value):
            return {"$in": [ObjectId(value), value]}
        return {"$eq": value}

    def get_students(self, college_id: Optional[str] = None) -> List[StudentRecord]:
        query: Dict[str, Any] = {}
        if college_id:
            query["college"] = self._id_query(college_id)

        documents = list(self.db_client.students_collection.find(query))
        students = load_students(documents)
        self.logger.info(f"Fetched {len(students)} students for college {college_id}")
        return students

    def get_college(self, college_id: Optional[str] = None) -> Optional[CollegeProfile]:
        if not college_id:
            return None
        document = self.db_client.colleges_collection.find_one(
            {"_id": self._id_query(college_id)}
        )
        if document is None:
            self.logger.warning(f"College {college_id} not found")
            return None
        return CollegeProfile.model_validate(document)
