"""Tests for batch-cooking consistency validation.

Tests enforce that:
- A properly declared batch (first cooks, later uses are leftovers from its day) passes
- A wrong or future source day is an error, and so is one that is not a day of the week
- Undeclared repeats are errors, product recipes and exempt families are not
- Servings shortfall and stale leftovers are warnings, never errors
"""

from mealwise.plans.findings import FindingKind
from mealwise.plans.types import PlanSettings
from mealwise.plans.validators.batch_cooking import validate_batch_cooking


def _kinds(result) -> list[FindingKind]:
    return [f.kind for f in result.findings]


def test_tuesday_week_batch_is_valid(make_meal, tuesday_week):
    meals = [
        make_meal("Tuesday", servings=7, notes="Batch cook 7 servings"),
        make_meal("Thursday", servings=3, is_leftover=True, source_day="Tuesday"),
    ]

    result = validate_batch_cooking(meals, tuesday_week)

    assert result.is_valid
    assert result.errors == []


def test_wrong_source_day_is_single_mismatch_error(make_meal, tuesday_week):
    meals = [
        make_meal("Tuesday", servings=7, notes="Batch cook 7 servings"),
        make_meal("Thursday", servings=3, is_leftover=True, source_day="Friday"),
    ]

    result = validate_batch_cooking(meals, tuesday_week)

    assert not result.is_valid
    mismatches = [e for e in result.errors if "should reference" in e]
    assert len(mismatches) == 1
    assert 'references batchCookSourceDay="Friday" but should reference "Tuesday"' in mismatches[0]


def test_leftover_from_the_future_is_error(make_meal, monday_week):
    meals = [make_meal("Wednesday", is_leftover=True, source_day="Friday")]

    result = validate_batch_cooking(meals, monday_week)

    assert _kinds(result) == [FindingKind.BATCH_FUTURE_REFERENCE]
    assert "Cannot use leftovers from the future" in result.errors[0]


def test_leftover_from_same_day_is_error(make_meal, monday_week):
    meals = [make_meal("Wednesday", is_leftover=True, source_day="Wednesday")]

    result = validate_batch_cooking(meals, monday_week)

    assert _kinds(result) == [FindingKind.BATCH_FUTURE_REFERENCE]


def test_future_check_follows_week_start(make_meal, tuesday_week):
    """Monday is the last day of a Tuesday-start week, so Sunday cannot reheat it."""
    meals = [make_meal("Sunday", is_leftover=True, source_day="Monday")]

    result = validate_batch_cooking(meals, tuesday_week)

    assert _kinds(result) == [FindingKind.BATCH_FUTURE_REFERENCE]


def test_unknown_source_day_is_error(make_meal, monday_week):
    meals = [make_meal("Tuesday", "stew", is_leftover=True, source_day="Someday")]

    result = validate_batch_cooking(meals, monday_week)

    assert not result.is_valid
    assert _kinds(result) == [FindingKind.BATCH_UNKNOWN_SOURCE_DAY]
    assert 'batchCookSourceDay="Someday", which is not a day of this week' in result.errors[0]


def test_unknown_source_day_in_batch_reports_mismatch_only(make_meal, monday_week):
    meals = [
        make_meal("Monday", servings=4, notes="Batch cook 4 servings"),
        make_meal("Wednesday", servings=None, is_leftover=True, source_day="monday"),
    ]

    result = validate_batch_cooking(meals, monday_week)

    assert _kinds(result) == [FindingKind.BATCH_SOURCE_MISMATCH]


def test_unknown_source_day_on_first_occurrence_is_error(make_meal, monday_week):
    meals = [
        make_meal("Monday", servings=4, notes="Batch cook 4 servings", source_day="Funday"),
        make_meal("Wednesday", servings=None, is_leftover=True, source_day="Monday"),
    ]

    result = validate_batch_cooking(meals, monday_week)

    assert _kinds(result) == [FindingKind.BATCH_UNKNOWN_SOURCE_DAY]


def test_source_day_not_checked_without_week_start(make_meal):
    meals = [make_meal("Tuesday", "stew", is_leftover=True, source_day="Someday")]

    result = validate_batch_cooking(meals, "not-a-date")

    assert result.findings == []


def test_chronology_errors_sit_beside_their_leftover(make_meal, monday_week):
    meals = [
        make_meal("Tuesday", servings=6, notes="Batch cook 6 servings"),
        make_meal("Wednesday", servings=None, is_leftover=True, source_day="Thursday"),
        make_meal("Thursday", servings=None, source_day="Tuesday"),
    ]

    result = validate_batch_cooking(meals, monday_week)

    assert [(f.kind, f.days[0]) for f in result.findings] == [
        (FindingKind.BATCH_SOURCE_MISMATCH, "Wednesday"),
        (FindingKind.BATCH_FUTURE_REFERENCE, "Wednesday"),
        (FindingKind.BATCH_MISSING_FLAG, "Thursday"),
    ]


def test_undeclared_repeat_is_error(make_meal, monday_week):
    meals = [make_meal("Monday"), make_meal("Friday")]

    result = validate_batch_cooking(meals, monday_week)

    assert _kinds(result) == [FindingKind.BATCH_UNDECLARED_REPEAT]
    assert "used 2 times (Monday, Friday) but not marked as batch cooking" in result.errors[0]


def test_batch_note_alone_declares_repeat(make_meal, monday_week):
    meals = [make_meal("Monday", notes="Leftovers for Wednesday"), make_meal("Wednesday")]

    result = validate_batch_cooking(meals, monday_week)

    assert FindingKind.BATCH_UNDECLARED_REPEAT not in _kinds(result)
    assert FindingKind.BATCH_MISSING_FLAG in _kinds(result)


def test_first_occurrence_marked_leftover_is_error(make_meal, monday_week):
    meals = [
        make_meal("Monday", servings=4, notes="Batch cook 4 servings", is_leftover=True),
        make_meal("Wednesday", servings=None, is_leftover=True, source_day="Monday"),
    ]

    result = validate_batch_cooking(meals, monday_week)

    assert _kinds(result) == [FindingKind.BATCH_FIRST_IS_LEFTOVER]
    assert "(first occurrence) is marked as leftover" in result.errors[0]


def test_later_use_without_flag_is_error(make_meal, monday_week):
    meals = [
        make_meal("Monday", servings=4, notes="Batch cook 4 servings"),
        make_meal("Wednesday", servings=None, source_day="Monday"),
    ]

    result = validate_batch_cooking(meals, monday_week)

    assert _kinds(result) == [FindingKind.BATCH_MISSING_FLAG]
    assert "should be marked as leftover (isLeftover=true) since it was cooked on Monday" in result.errors[0]


def test_first_occurrence_found_by_day_not_position(make_meal, monday_week):
    meals = [
        make_meal("Thursday", servings=None, is_leftover=True, source_day="Monday"),
        make_meal("Monday", servings=4, notes="Batch cook 4 servings"),
    ]

    result = validate_batch_cooking(meals, monday_week)

    assert result.is_valid
    assert result.findings == []


def test_missing_batch_note_is_warning(make_meal, monday_week):
    meals = [
        make_meal("Monday", servings=4),
        make_meal("Tuesday", servings=None, is_leftover=True, source_day="Monday"),
    ]

    result = validate_batch_cooking(meals, monday_week)

    assert result.is_valid
    assert _kinds(result) == [FindingKind.BATCH_NOTE_MISSING]


def test_servings_shortfall_is_warning(make_meal, monday_week):
    meals = [
        make_meal("Monday", servings=2, notes="Batch cook"),
        make_meal("Tuesday", servings=2, is_leftover=True, source_day="Monday"),
    ]

    result = validate_batch_cooking(meals, monday_week)

    assert result.is_valid
    assert _kinds(result) == [FindingKind.SERVINGS_SHORTFALL]
    assert "cooks 2 servings, but total needed across all days is 4 servings" in result.warnings[0]


def test_leftover_older_than_limit_is_warning(make_meal, monday_week):
    settings = PlanSettings(max_leftover_days=4)
    meals = [
        make_meal("Monday", servings=4, notes="Batch cook 4 servings"),
        make_meal("Saturday", servings=None, is_leftover=True, source_day="Monday"),
    ]

    result = validate_batch_cooking(meals, monday_week, settings)

    assert result.is_valid
    assert _kinds(result) == [FindingKind.LEFTOVER_TOO_OLD]
    assert result.findings[0].data["age_days"] == 5


class TestExemptions:
    """Tests for product recipes and exempt meal families."""

    def test_product_recipes_are_exempt(self, make_meal, monday_week):
        meals = [make_meal(day, "protein-bar", "snack") for day in ("Monday", "Tuesday", "Wednesday")]

        result = validate_batch_cooking(meals, monday_week, product_recipe_ids={"protein-bar"})

        assert result.findings == []
        assert any(entry.message == "product recipe exempt" for entry in result.diagnostics)

    def test_product_recipes_skip_future_check(self, make_meal, monday_week):
        meals = [make_meal("Monday", "protein-bar", "snack", is_leftover=True, source_day="Friday")]

        result = validate_batch_cooking(meals, monday_week, product_recipe_ids={"protein-bar"})

        assert result.findings == []

    def test_exempt_meal_family(self, make_meal, monday_week):
        meals = [make_meal(day, "oats", "breakfast") for day in ("Monday", "Tuesday", "Wednesday")]

        result = validate_batch_cooking(meals, monday_week, skip_for_meal_types=["breakfast"])

        assert result.findings == []

    def test_family_exemption_needs_every_use_in_family(self, make_meal, monday_week):
        meals = [make_meal("Monday", "oats", "breakfast"), make_meal("Thursday", "oats", "dinner")]

        result = validate_batch_cooking(meals, monday_week, skip_for_meal_types=["breakfast"])

        assert _kinds(result) == [FindingKind.BATCH_UNDECLARED_REPEAT]
