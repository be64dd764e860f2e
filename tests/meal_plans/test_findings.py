"""Tests for finding kinds, severities and rendered messages."""

import pytest

from mealwise.plans.findings import (
    RENDERERS,
    SEVERITY_BY_KIND,
    FindingKind,
    Severity,
    make_finding,
    render_finding,
)


@pytest.mark.parametrize("kind", list(FindingKind))
def test_every_kind_has_severity_and_renderer(kind: FindingKind):
    assert kind in SEVERITY_BY_KIND
    assert kind in RENDERERS


def test_make_finding_uses_registered_severity():
    error = make_finding(FindingKind.COOLDOWN_VIOLATION, days=["Monday", "Wednesday"])
    warning = make_finding(FindingKind.SERVINGS_SHORTFALL, days=["Monday"])

    assert error.severity == Severity.ERROR
    assert error.is_error
    assert warning.severity == Severity.WARNING
    assert not warning.is_error


def test_servings_and_history_findings_are_warnings():
    assert SEVERITY_BY_KIND[FindingKind.SERVINGS_SHORTFALL] == Severity.WARNING
    assert SEVERITY_BY_KIND[FindingKind.HISTORY_COOLDOWN] == Severity.WARNING
    assert SEVERITY_BY_KIND[FindingKind.MACRO_PROTEIN_LOW] == Severity.WARNING


@pytest.mark.parametrize(
    "kind",
    [FindingKind.UNRESOLVED_DAY, FindingKind.INVALID_WEEK_START, FindingKind.BATCH_UNKNOWN_SOURCE_DAY],
)
def test_unplaceable_days_block_the_plan(kind: FindingKind):
    assert SEVERITY_BY_KIND[kind] == Severity.ERROR


def test_unknown_source_day_message():
    finding = make_finding(
        FindingKind.BATCH_UNKNOWN_SOURCE_DAY,
        recipe_id="stew",
        recipe_name="Stew",
        days=["Tuesday"],
        declared_source_day="Someday",
    )

    assert finding.message.startswith(
        'Batch cooking error: "Stew" on Tuesday references batchCookSourceDay="Someday", '
        "which is not a day of this week."
    )


def test_cooldown_message():
    finding = make_finding(
        FindingKind.COOLDOWN_VIOLATION,
        recipe_id="chili",
        recipe_name="Chili",
        days=["Monday", "Wednesday"],
        gap_days=2,
        cooldown_days=5,
        meal_label="Dinners",
    )

    assert finding.message == (
        'Cooldown violation: "Chili" used on Monday and Wednesday '
        "(2 days apart, requires 5 day cooldown for Dinners - set in Meal Plan Settings)"
    )


def test_source_mismatch_message():
    finding = make_finding(
        FindingKind.BATCH_SOURCE_MISMATCH,
        recipe_id="chili",
        recipe_name="Chili",
        days=["Thursday", "Tuesday"],
        declared_source_day="Friday",
    )

    assert 'on Thursday references batchCookSourceDay="Friday" but should reference "Tuesday"' in finding.message


def test_message_falls_back_to_recipe_id_then_placeholder():
    by_id = make_finding(FindingKind.BATCH_NOTE_MISSING, recipe_id="chili", days=["Monday"])
    anonymous = make_finding(FindingKind.BATCH_NOTE_MISSING, days=["Monday"])

    assert '"chili" on Monday' in by_id.message
    assert '"Unnamed recipe" on Monday' in anonymous.message


class TestMacroMessages:
    """Tests for calorie/protein/soft-band rendering."""

    @pytest.fixture
    def calorie_data(self) -> dict:
        return {
            "band": "week",
            "average": 2300,
            "target": 2000,
            "deviation_pct": 15,
            "mode": "strict",
            "min": 1900,
            "max": 2100,
            "coverage_pct": 100,
            "tolerance_pct": 5,
        }

    def test_calories_exceeded(self, calorie_data: dict):
        finding = make_finding(FindingKind.MACRO_CALORIES_HIGH, **calorie_data)

        assert finding.message.startswith(
            "Calorie target exceeded: averaging 2300 cal/day (+15% above target of 2000). "
            "Allowed range with strict mode: 1900-2100 cal/day."
        )

    def test_partial_coverage_is_noted(self, calorie_data: dict):
        calorie_data.update(coverage_pct=75, target=1500)
        finding = make_finding(FindingKind.MACRO_CALORIES_HIGH, **calorie_data)

        assert "(plan covers 75% of daily calories)" in finding.message

    def test_band_is_named_outside_whole_week(self, calorie_data: dict):
        calorie_data.update(band="weekend")
        finding = make_finding(FindingKind.MACRO_CALORIES_HIGH, **calorie_data)

        assert finding.message.startswith("Calorie target exceeded on weekend:")

    def test_soft_band_sign(self):
        finding = make_finding(
            FindingKind.MACRO_SOFT_BAND,
            nutrient="Fat",
            band="week",
            average=50,
            target=70,
            deviation_pct=-29,
            min=63,
            max=77,
        )

        assert finding.message == (
            "Fat outside target range: averaging 50g/day (-29% vs target of 70g). Allowed range: 63-77g/day."
        )


def test_render_finding_matches_message_property():
    finding = make_finding(FindingKind.MACRO_DATA_COVERAGE, nutrition_coverage_pct=40)

    assert render_finding(finding) == finding.message
    assert finding.message.startswith("Only 40% of recipes have nutrition data.")
