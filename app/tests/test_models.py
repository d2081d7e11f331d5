"""
Unit Tests for Roster Data Models

Partial documents must always normalize; unreadable year fields must not.
"""

import pytest
from pydantic import ValidationError

from core.models import (
    UNKNOWN_DEPARTMENT,
    CollegeProfile,
    EntryStatus,
    PlacementType,
    RosterValidationError,
    StudentRecord,
    load_students,
)


class TestStudentRecordDefaults:
    """Missing fields are defaulted, never raised"""

    def test_minimal_document(self):
        student = StudentRecord.model_validate({"_id": "abc", "name": "Asha"})
        assert student.id == "abc"
        assert student.department == UNKNOWN_DEPARTMENT
        assert student.cgpa == 0.0
        assert student.applications == ()
        assert student.internships == ()
        assert student.companies == ()
        assert student.placement_type == PlacementType.OFF_CAMPUS
        assert student.is_verified is False
        assert student.enrollment_year is None
        assert student.graduation_year is None

    @pytest.mark.parametrize("department", [None, ""])
    def test_blank_department_is_unknown(self, department):
        student = StudentRecord.model_validate({"department": department})
        assert student.department == UNKNOWN_DEPARTMENT

    def test_null_collections(self):
        student = StudentRecord.model_validate(
            {"applications": None, "internships": None, "companies": None, "cgpa": None}
        )
        assert student.applications == ()
        assert student.cgpa == 0.0

    def test_portal_aliases(self):
        student = StudentRecord.model_validate(
            {
                "joiningYear": "2022",
                "graduationYear": 2026,
                "placementType": "onCampus",
                "isCollegeVerified": True,
                "campusScore": 61.5,
            }
        )
        assert student.enrollment_year == 2022
        assert student.graduation_year == 2026
        assert student.is_on_campus
        assert student.is_verified
        assert student.campus_score == 61.5

    def test_unknown_statuses_become_other(self):
        student = StudentRecord.model_validate(
            {"applications": [{"status": "rejected"}, {}, {"status": "selected"}]}
        )
        assert [a.status for a in student.applications] == [
            EntryStatus.OTHER,
            EntryStatus.OTHER,
            EntryStatus.SELECTED,
        ]
        assert student.selected_applications == 1

    def test_unknown_placement_type_is_off_campus(self):
        student = StudentRecord.model_validate({"placementType": "referral"})
        assert student.placement_type == PlacementType.OFF_CAMPUS


class TestStudentRecordValidation:
    """Unreadable values are rejected"""

    def test_non_numeric_year_raises(self):
        with pytest.raises(ValidationError):
            StudentRecord.model_validate({"enrollmentYear": "twenty-twenty"})

    def test_records_are_frozen(self):
        student = StudentRecord.model_validate({"name": "Asha"})
        with pytest.raises(ValidationError):
            student.name = "Other"

    def test_load_students_names_bad_record(self):
        docs = [
            {"_id": "ok", "enrollmentYear": 2022},
            {"_id": "bad", "graduationYear": "soon"},
        ]
        with pytest.raises(RosterValidationError) as exc_info:
            load_students(docs)
        assert exc_info.value.record_id == "bad"

    def test_load_students(self):
        students = load_students([{"_id": 1}, {"_id": 2}])
        assert [s.id for s in students] == ["1", "2"]


class TestCollegeProfile:
    """College documents"""

    def test_department_dicts_and_strings(self):
        college = CollegeProfile.model_validate(
            {"_id": "c1", "name": "Tech Institute", "departments": [{"name": "CS"}, "EE"]}
        )
        assert college.department_names == ["CS", "EE"]

    def test_missing_departments(self):
        college = CollegeProfile.model_validate({"name": "Tech Institute", "departments": None})
        assert college.department_names == []
