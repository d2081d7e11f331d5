"""
Unit Tests for the Roster Sorter
"""

from services.roster_sort_service import is_graduated, sort_roster


def ids(students):
    return [s.id for s in students]


class TestSortRoster:
    """Most current, most advanced first"""

    def test_progress_order(self, make_student, march_2024):
        roster = [
            make_student(_id="p2022", enrollmentYear=2018, graduationYear=2022),
            make_student(_id="y1", enrollmentYear=2023, graduationYear=2027),
            make_student(_id="p2023", enrollmentYear=2019, graduationYear=2023),
            make_student(_id="y3-2025", enrollmentYear=2021, graduationYear=2025),
            make_student(_id="y2", enrollmentYear=2022, graduationYear=2026),
            make_student(_id="y3-2026", enrollmentYear=2021, graduationYear=2026),
        ]

        assert ids(sort_roster(roster, march_2024)) == [
            "y3-2026",
            "y3-2025",
            "y2",
            "y1",
            "p2023",
            "p2022",
        ]

    def test_current_students_before_passed_out(self, make_student, march_2024):
        roster = [
            make_student(_id="old", enrollmentYear=2019, graduationYear=2023),
            make_student(_id="new", enrollmentYear=2023, graduationYear=2027),
        ]
        assert ids(sort_roster(roster, march_2024)) == ["new", "old"]

    def test_missing_years_sort_after_classified_current_students(
        self, make_student, march_2024
    ):
        roster = [
            make_student(_id="none", enrollmentYear=None, graduationYear=None),
            make_student(_id="passed", enrollmentYear=2019, graduationYear=2023),
            make_student(_id="y1", enrollmentYear=2023, graduationYear=2027),
        ]
        assert ids(sort_roster(roster, march_2024)) == ["y1", "none", "passed"]

    def test_idempotent(self, make_student, march_2024):
        roster = [
            make_student(_id=str(i), enrollmentYear=2018 + i % 6, graduationYear=2022 + i % 6)
            for i in range(12)
        ]
        once = sort_roster(roster, march_2024)
        assert sort_roster(once, march_2024) == once

    def test_stable_for_equal_keys(self, make_student, march_2024):
        roster = [make_student(_id=name) for name in ("first", "second", "third")]
        assert ids(sort_roster(roster, march_2024)) == ["first", "second", "third"]

    def test_input_is_not_mutated(self, make_student, march_2024):
        roster = [
            make_student(_id="p", enrollmentYear=2019, graduationYear=2023),
            make_student(_id="c", enrollmentYear=2022, graduationYear=2026),
        ]
        sort_roster(roster, march_2024)
        assert ids(roster) == ["p", "c"]

    def test_is_graduated(self, make_student, march_2024):
        assert is_graduated(make_student(graduationYear=2023), march_2024)
        assert not is_graduated(make_student(graduationYear=2024), march_2024)
        assert not is_graduated(make_student(graduationYear=None), march_2024)
