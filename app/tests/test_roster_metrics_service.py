"""
Unit Tests for the Roster Metrics Calculator Service

Covers:
1. Degenerate (empty) rosters
2. Overall and department averages
3. Selection rates and roster-level counts
4. Campus score consistency across cards
"""

import pytest

from services.campus_score_service import calculate_campus_score
from services.roster_metrics_service import (
    RosterMetricsCalculatorService,
    format_cgpa,
    format_score,
    safe_average,
    selection_rate,
)


@pytest.fixture
def calculator():
    return RosterMetricsCalculatorService()


# =============================================================================
# HELPERS
# =============================================================================
class TestHelpers:
    """Division and rounding helpers"""

    def test_safe_average(self):
        assert safe_average(10, 4) == 2.5
        assert safe_average(10, 0) == 0.0

    def test_selection_rate(self):
        assert selection_rate(1, 4) == 25.0
        assert selection_rate(3, 0) == 0.0

    def test_formatting(self):
        assert format_cgpa(0) == "0.00"
        assert format_cgpa(80) == "80.00"
        assert format_score(33.333) == "33.3"


# =============================================================================
# EMPTY ROSTER
# =============================================================================
class TestEmptyRoster:
    """Aggregating nothing must not fail"""

    def test_empty_roster_display(self, calculator):
        display = calculator.calculate_metrics([]).to_dict()

        assert display["total_students"] == 0
        assert display["avg_cgpa"] == "0.00"
        assert display["avg_campus_score"] == "0.0"
        assert display["department_stats"] == {}
        assert display["companies_visited"] == 0
        assert display["job_selection_rate"] == "0.0"
        assert display["intern_selection_rate"] == "0.0"
        assert display["campus_comparison"] == {
            "on_campus": {"count": 0, "avg_score": "0.0"},
            "off_campus": {"count": 0, "avg_score": "0.0"},
        }


# =============================================================================
# AVERAGES
# =============================================================================
class TestAverages:
    """Overall and per-department averages"""

    def test_three_student_scenario(self, calculator, make_student):
        roster = [
            make_student(department="CS", cgpa=90),
            make_student(department="CS", cgpa=70),
            make_student(department="EE", cgpa=80),
        ]
        display = calculator.calculate_metrics(roster).to_dict()

        assert display["avg_cgpa"] == "80.00"
        assert display["department_stats"]["CS"]["avg_cgpa"] == "80.00"
        assert display["department_stats"]["EE"]["avg_cgpa"] == "80.00"
        assert display["department_stats"]["CS"]["count"] == 2
        assert display["department_stats"]["EE"]["count"] == 1

    def test_department_counts_sum_to_roster_size(self, calculator, make_student):
        roster = [
            make_student(department=dept)
            for dept in ("CS", "EE", None, "CS", "ME", "", "EE")
        ]
        metrics = calculator.calculate_metrics(roster)

        assert sum(d.count for d in metrics.department_stats.values()) == len(roster)
        assert metrics.department_stats["Unknown"].count == 2

    def test_raw_values_kept(self, calculator, make_student):
        roster = [make_student(cgpa=8), make_student(cgpa=9), make_student(cgpa=9)]
        metrics = calculator.calculate_metrics(roster)

        assert metrics.avg_cgpa == pytest.approx(26 / 3)
        assert metrics.to_dict()["avg_cgpa"] == "8.67"


# =============================================================================
# SELECTIONS
# =============================================================================
class TestSelections:
    """Application and internship outcomes"""

    def test_department_selection_rates(self, calculator, make_student):
        roster = [
            make_student(
                department="CS",
                applications=[
                    {"status": "selected"},
                    {"status": "applied"},
                    {"status": "applied"},
                ],
            ),
            make_student(department="CS", applications=[{"status": "applied"}]),
        ]
        cs = calculator.calculate_metrics(roster).department_stats["CS"]

        assert cs.jobs_applied == 4
        assert cs.jobs_selected == 1
        assert cs.job_selection_rate == 25.0
        assert cs.interns_applied == 0
        assert cs.intern_selection_rate == 0.0
        assert cs.to_dict()["intern_selection_rate"] == "0.0"

    def test_roster_level_counts_students(self, calculator, make_student):
        roster = [
            make_student(
                applications=[{"status": "selected"}, {"status": "selected"}],
                internships=[{"status": "applied"}],
            ),
            make_student(applications=[{"status": "applied"}]),
            make_student(),
        ]
        metrics = calculator.calculate_metrics(roster)

        assert metrics.jobs_applied == 2
        assert metrics.jobs_selected == 1
        assert metrics.interns_applied == 1
        assert metrics.interns_selected == 0

    def test_companies_visited_counts_students(self, calculator, make_student):
        roster = [
            make_student(companies=["Acme", "Globex", "Initech"]),
            make_student(companies=["Acme"]),
            make_student(companies=[]),
            make_student(),
        ]
        assert calculator.calculate_metrics(roster).companies_visited == 2

    def test_cgpa_threshold_rates(self, calculator, make_student):
        roster = [make_student(cgpa=90), make_student(cgpa=82), make_student(cgpa=70)]
        display = calculator.calculate_metrics(roster).to_dict()

        assert display["job_selection_rate"] == "33.3"
        assert display["intern_selection_rate"] == "66.7"

    def test_custom_thresholds(self, make_student):
        calculator = RosterMetricsCalculatorService(
            job_cgpa_threshold=8.0, intern_cgpa_threshold=7.0
        )
        roster = [make_student(cgpa=8.5), make_student(cgpa=7.5)]
        metrics = calculator.calculate_metrics(roster)

        assert metrics.job_selection_rate == 50.0
        assert metrics.intern_selection_rate == 100.0


# =============================================================================
# CAMPUS SCORE
# =============================================================================
class TestCampusScoreConsistency:
    """Every card uses the same campus score"""

    def test_all_cards_agree_with_calculator(self, calculator, make_student):
        roster = [
            make_student(
                department="CS",
                cgpa=9.1,
                placementType="onCampus",
                applications=[{"status": "selected"}, {"status": "applied"}],
            ),
            make_student(
                department="CS",
                cgpa=7.4,
                placementType="offCampus",
                internships=[{"status": "selected"}],
            ),
            make_student(department="EE", cgpa=6.2, placementType="onCampus"),
        ]
        scores = [calculate_campus_score(s) for s in roster]
        metrics = calculator.calculate_metrics(roster)

        assert metrics.avg_campus_score == pytest.approx(sum(scores) / 3)
        assert metrics.department_stats["CS"].avg_campus_score == pytest.approx(
            (scores[0] + scores[1]) / 2
        )
        assert metrics.department_stats["EE"].avg_campus_score == pytest.approx(scores[2])
        assert metrics.on_campus.count == 2
        assert metrics.on_campus.avg_score == pytest.approx((scores[0] + scores[2]) / 2)
        assert metrics.off_campus.count == 1
        assert metrics.off_campus.avg_score == pytest.approx(scores[1])

    def test_missing_placement_type_is_off_campus(self, calculator, make_student):
        metrics = calculator.calculate_metrics([make_student()])
        assert metrics.off_campus.count == 1
        assert metrics.on_campus.count == 0
        assert metrics.to_dict()["campus_comparison"]["on_campus"]["avg_score"] == "0.0"


class TestFilteredMetrics:
    """Filtering before aggregation"""

    def test_department_filter(self, calculator, make_student, march_2024):
        roster = [
            make_student(department="CS", cgpa=90),
            make_student(department="EE", cgpa=60),
        ]
        metrics = calculator.calculate_filtered_metrics(roster, march_2024, department="EE")

        assert metrics.total_students == 1
        assert list(metrics.department_stats) == ["EE"]
        assert metrics.avg_cgpa == 60.0

    def test_year_filter_excludes_passed_out(self, calculator, make_student, march_2024):
        roster = [
            make_student(enrollmentYear=2019, graduationYear=2023),
            make_student(enrollmentYear=2020, graduationYear=2024),
        ]
        metrics = calculator.calculate_filtered_metrics(roster, march_2024, year="4th")
        assert metrics.total_students == 1
