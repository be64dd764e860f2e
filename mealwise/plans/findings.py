"""Validation findings as tagged variants.

Each finding carries its kind, a severity, the recipe and day(s) involved, and
the numbers behind the rule it breaches. The human-readable message is
rendered from those fields by one renderer per kind, so the text stays
suitable for feeding straight back to the plan generator as a correction.

Adding a FindingKind requires adding its severity and renderer; the
registries are checked for completeness in the test suite.
"""

from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

FindingValue = str | int | float | list[str]


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class FindingKind(StrEnum):
    """Every rule the engine can report."""

    UNRESOLVED_DAY = "unresolved_day"
    INVALID_WEEK_START = "invalid_week_start"
    COOLDOWN_VIOLATION = "cooldown_violation"
    HISTORY_COOLDOWN = "history_cooldown"
    BATCH_UNDECLARED_REPEAT = "batch_undeclared_repeat"
    BATCH_FIRST_IS_LEFTOVER = "batch_first_is_leftover"
    BATCH_NOTE_MISSING = "batch_note_missing"
    BATCH_MISSING_FLAG = "batch_missing_flag"
    BATCH_SOURCE_MISMATCH = "batch_source_mismatch"
    BATCH_FUTURE_REFERENCE = "batch_future_reference"
    BATCH_UNKNOWN_SOURCE_DAY = "batch_unknown_source_day"
    LEFTOVER_TOO_OLD = "leftover_too_old"
    SERVINGS_SHORTFALL = "servings_shortfall"
    SLOT_MISMATCH = "slot_mismatch"
    MACRO_DATA_COVERAGE = "macro_data_coverage"
    MACRO_CALORIES_LOW = "macro_calories_low"
    MACRO_CALORIES_HIGH = "macro_calories_high"
    MACRO_PROTEIN_LOW = "macro_protein_low"
    MACRO_PROTEIN_HIGH = "macro_protein_high"
    MACRO_SOFT_BAND = "macro_soft_band"


SEVERITY_BY_KIND: dict[FindingKind, Severity] = {
    FindingKind.UNRESOLVED_DAY: Severity.ERROR,
    FindingKind.INVALID_WEEK_START: Severity.ERROR,
    FindingKind.COOLDOWN_VIOLATION: Severity.ERROR,
    FindingKind.HISTORY_COOLDOWN: Severity.WARNING,
    FindingKind.BATCH_UNDECLARED_REPEAT: Severity.ERROR,
    FindingKind.BATCH_FIRST_IS_LEFTOVER: Severity.ERROR,
    FindingKind.BATCH_NOTE_MISSING: Severity.WARNING,
    FindingKind.BATCH_MISSING_FLAG: Severity.ERROR,
    FindingKind.BATCH_SOURCE_MISMATCH: Severity.ERROR,
    FindingKind.BATCH_FUTURE_REFERENCE: Severity.ERROR,
    FindingKind.BATCH_UNKNOWN_SOURCE_DAY: Severity.ERROR,
    FindingKind.LEFTOVER_TOO_OLD: Severity.WARNING,
    FindingKind.SERVINGS_SHORTFALL: Severity.WARNING,
    FindingKind.SLOT_MISMATCH: Severity.ERROR,
    FindingKind.MACRO_DATA_COVERAGE: Severity.WARNING,
    FindingKind.MACRO_CALORIES_LOW: Severity.ERROR,
    FindingKind.MACRO_CALORIES_HIGH: Severity.ERROR,
    FindingKind.MACRO_PROTEIN_LOW: Severity.WARNING,
    FindingKind.MACRO_PROTEIN_HIGH: Severity.WARNING,
    FindingKind.MACRO_SOFT_BAND: Severity.WARNING,
}


class Finding(BaseModel):
    """A single rule violation or advisory.

    Attributes:
        kind: Rule that produced the finding
        severity: ERROR blocks the plan, WARNING is advisory
        recipe_id: Recipe involved, if any
        recipe_name: Recipe name used in the message
        days: Day names involved, in the order the message cites them
        data: Numbers and labels the message is rendered from
    """

    model_config = ConfigDict(frozen=True)

    kind: FindingKind
    severity: Severity
    recipe_id: str | None = None
    recipe_name: str | None = None
    days: list[str] = Field(default_factory=list)
    data: dict[str, FindingValue] = Field(default_factory=dict)

    @property
    def message(self) -> str:
        return render_finding(self)

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR


def make_finding(
    kind: FindingKind,
    *,
    recipe_id: str | None = None,
    recipe_name: str | None = None,
    days: list[str] | None = None,
    **data: FindingValue,
) -> Finding:
    """Build a finding with the severity registered for its kind."""
    return Finding(
        kind=kind,
        severity=SEVERITY_BY_KIND[kind],
        recipe_id=recipe_id,
        recipe_name=recipe_name,
        days=days or [],
        data=data,
    )


def _name(finding: Finding) -> str:
    return finding.recipe_name or finding.recipe_id or "Unnamed recipe"


def _signed(value: FindingValue) -> str:
    return f"+{value}" if isinstance(value, int | float) and value >= 0 else f"{value}"


def _coverage_note(finding: Finding) -> str:
    coverage = finding.data.get("coverage_pct", 100)
    if isinstance(coverage, int | float) and coverage < 100:
        return f" (plan covers {coverage}% of daily calories)"
    return ""


def _band_note(finding: Finding) -> str:
    band = finding.data.get("band")
    return f" on {band}" if band and band != "week" else ""


def _render_unresolved_day(f: Finding) -> str:
    return (
        f'Unrecognized day "{f.data["day"]}" for {f.data["meal_type"]} ({_name(f)}). '
        'Cooldown and leftover timing cannot be checked for this meal. Use a full day name such as "Monday".'
    )


def _render_invalid_week_start(f: Finding) -> str:
    return (
        f'Week start date "{f.data["week_start"]}" is not a valid ISO date. '
        "Day ordering cannot be resolved, so cooldown and leftover timing cannot be checked."
    )


def _render_cooldown_violation(f: Finding) -> str:
    first_day, second_day = f.days
    return (
        f'Cooldown violation: "{_name(f)}" used on {first_day} and {second_day} '
        f"({f.data['gap_days']} days apart, requires {f.data['cooldown_days']} day cooldown for "
        f"{f.data['meal_label']} - set in Meal Plan Settings)"
    )


def _render_history_cooldown(f: Finding) -> str:
    return (
        f'Recent usage: "{_name(f)}" was used {f.data["days_since_last_use"]} days ago '
        f"(requires {f.data['cooldown_days']} day cooldown for {f.data['meal_label']} - set in Meal Plan Settings)"
    )


def _render_batch_undeclared_repeat(f: Finding) -> str:
    return (
        f'Recipe "{_name(f)}" used {f.data["uses"]} times ({", ".join(f.days)}) but not marked as batch cooking. '
        "Either set up batch cooking or use different recipes."
    )


def _render_batch_first_is_leftover(f: Finding) -> str:
    return (
        f'Batch cooking error: "{_name(f)}" on {f.days[0]} (first occurrence) is marked as leftover. '
        "First meal should have isLeftover=false."
    )


def _render_batch_note_missing(f: Finding) -> str:
    return (
        f'Batch cooking note missing: "{_name(f)}" on {f.days[0]} should have '
        "batch cooking note explaining total servings."
    )


def _render_batch_missing_flag(f: Finding) -> str:
    meal_day, source_day = f.days
    return (
        f'Batch cooking error: "{_name(f)}" on {meal_day} should be marked as leftover '
        f"(isLeftover=true) since it was cooked on {source_day}."
    )


def _render_batch_source_mismatch(f: Finding) -> str:
    meal_day, expected_day = f.days
    return (
        f'Batch cooking error: "{_name(f)}" on {meal_day} references '
        f'batchCookSourceDay="{f.data["declared_source_day"]}" but should reference "{expected_day}" '
        "(the chronologically first occurrence)."
    )


def _render_batch_future_reference(f: Finding) -> str:
    meal_day, source_day = f.days
    return (
        f'Chronological error: "{_name(f)}" on {meal_day} claims to be leftover from {source_day}, '
        "but that day comes AFTER or is the same day. Cannot use leftovers from the future!"
    )


def _render_batch_unknown_source_day(f: Finding) -> str:
    return (
        f'Batch cooking error: "{_name(f)}" on {f.days[0]} references '
        f'batchCookSourceDay="{f.data["declared_source_day"]}", which is not a day of this week. '
        'Use a full day name such as "Monday".'
    )


def _render_leftover_too_old(f: Finding) -> str:
    meal_day, source_day = f.days
    return (
        f'Leftover too old: "{_name(f)}" on {meal_day} reheats food cooked on {source_day} '
        f"({f.data['age_days']} days later, maximum is {f.data['max_leftover_days']} leftover days)."
    )


def _render_servings_shortfall(f: Finding) -> str:
    return (
        f'Servings mismatch: "{_name(f)}" on {f.days[0]} cooks {f.data["cooked_servings"]} servings, '
        f"but total needed across all days is {f.data['needed_servings']} servings. "
        "First meal should cook the TOTAL amount."
    )


def _render_slot_mismatch(f: Finding) -> str:
    meal_type = f.data["meal_type"]
    allowed = f.data["allowed_meal_types"]
    allowed_text = ", ".join(allowed) if isinstance(allowed, list) else str(allowed)
    return (
        f'Meal type mismatch: "{_name(f)}" is assigned to {meal_type} on {f.days[0]}, '
        f"but this recipe is only designated for: {allowed_text}. "
        f"Please assign a recipe that supports {meal_type}."
    )


def _render_macro_data_coverage(f: Finding) -> str:
    return (
        f"Only {f.data['nutrition_coverage_pct']}% of recipes have nutrition data. "
        "Add calorie/macro information to more recipes for accurate tracking."
    )


def _render_macro_calories_low(f: Finding) -> str:
    return (
        f"Calorie target not met{_band_note(f)}: averaging {f.data['average']} cal/day "
        f"({f.data['deviation_pct']}% below target of {f.data['target']}){_coverage_note(f)}. "
        f"Allowed range with {f.data['mode']} mode: {f.data['min']}-{f.data['max']} cal/day. "
        "Select higher-calorie recipes to meet target."
    )


def _render_macro_calories_high(f: Finding) -> str:
    return (
        f"Calorie target exceeded{_band_note(f)}: averaging {f.data['average']} cal/day "
        f"({_signed(f.data['deviation_pct'])}% above target of {f.data['target']}){_coverage_note(f)}. "
        f"Allowed range with {f.data['mode']} mode: {f.data['min']}-{f.data['max']} cal/day. "
        "Select lower-calorie recipes to meet target."
    )


def _render_macro_protein_low(f: Finding) -> str:
    return (
        f"Protein below target{_band_note(f)}: averaging {f.data['average']}g/day "
        f"({f.data['deviation_pct']}% below target of {f.data['target']}g). "
        "Consider selecting more protein-rich recipes."
    )


def _render_macro_protein_high(f: Finding) -> str:
    return (
        f"Protein above target{_band_note(f)}: averaging {f.data['average']}g/day "
        f"({_signed(f.data['deviation_pct'])}% above target of {f.data['target']}g). "
        "This is generally fine, but noted for awareness."
    )


def _render_macro_soft_band(f: Finding) -> str:
    return (
        f"{f.data['nutrient']} outside target range{_band_note(f)}: averaging {f.data['average']}g/day "
        f"({_signed(f.data['deviation_pct'])}% vs target of {f.data['target']}g). "
        f"Allowed range: {f.data['min']}-{f.data['max']}g/day."
    )


RENDERERS: dict[FindingKind, Callable[[Finding], str]] = {
    FindingKind.UNRESOLVED_DAY: _render_unresolved_day,
    FindingKind.INVALID_WEEK_START: _render_invalid_week_start,
    FindingKind.COOLDOWN_VIOLATION: _render_cooldown_violation,
    FindingKind.HISTORY_COOLDOWN: _render_history_cooldown,
    FindingKind.BATCH_UNDECLARED_REPEAT: _render_batch_undeclared_repeat,
    FindingKind.BATCH_FIRST_IS_LEFTOVER: _render_batch_first_is_leftover,
    FindingKind.BATCH_NOTE_MISSING: _render_batch_note_missing,
    FindingKind.BATCH_MISSING_FLAG: _render_batch_missing_flag,
    FindingKind.BATCH_SOURCE_MISMATCH: _render_batch_source_mismatch,
    FindingKind.BATCH_FUTURE_REFERENCE: _render_batch_future_reference,
    FindingKind.BATCH_UNKNOWN_SOURCE_DAY: _render_batch_unknown_source_day,
    FindingKind.LEFTOVER_TOO_OLD: _render_leftover_too_old,
    FindingKind.SERVINGS_SHORTFALL: _render_servings_shortfall,
    FindingKind.SLOT_MISMATCH: _render_slot_mismatch,
    FindingKind.MACRO_DATA_COVERAGE: _render_macro_data_coverage,
    FindingKind.MACRO_CALORIES_LOW: _render_macro_calories_low,
    FindingKind.MACRO_CALORIES_HIGH: _render_macro_calories_high,
    FindingKind.MACRO_PROTEIN_LOW: _render_macro_protein_low,
    FindingKind.MACRO_PROTEIN_HIGH: _render_macro_protein_high,
    FindingKind.MACRO_SOFT_BAND: _render_macro_soft_band,
}


def render_finding(finding: Finding) -> str:
    """Render a finding as the advisory text shown to users and fed back to the generator."""
    return RENDERERS[finding.kind](finding)
