"""Batch-cooking consistency validation.

When a recipe appears more than once, the repetition must be a coherent
"cook once, reheat later" setup:
- The repeat is declared (a leftover flag or a batch/leftover note)
- The chronologically first occurrence is the cooking event, not a leftover
- Every later occurrence is a leftover pointing back at the first one's day
- A source day is a day of the week, and no leftover comes from the future
- No leftover sits longer than max_leftover_days
- The first occurrence cooks enough servings for the whole group

Pre-packaged products and caller-exempted meal families bypass these rules.
"""

from collections.abc import Sequence

from mealwise.plans.constants import BATCH_NOTE_MARKERS
from mealwise.plans.days import UNRESOLVED_DAY_INDEX, WeekStart, get_day_index, parse_week_start
from mealwise.plans.diagnostics import DiagnosticLog
from mealwise.plans.findings import Finding, FindingKind, make_finding
from mealwise.plans.grouping import RecipeGroup, ScheduleIndex, index_schedule
from mealwise.plans.result import ValidationResult
from mealwise.plans.slots import matches_slot_list
from mealwise.plans.types import PlanSettings, ScheduledMeal

CHECK_NAME = "batch_cooking"


def _mentions_batch(notes: str | None) -> bool:
    if not notes:
        return False
    lowered = notes.lower()
    return any(marker in lowered for marker in BATCH_NOTE_MARKERS)


def _is_exempt(
    schedule: ScheduleIndex,
    group: RecipeGroup,
    skip_for_meal_types: Sequence[str],
    log: DiagnosticLog,
) -> bool:
    if skip_for_meal_types and all(
        matches_slot_list(meal.meal_type, list(skip_for_meal_types)) for meal in schedule.group_meals(group)
    ):
        log.note("meal family exempt", recipe_id=group.recipe_id, uses=len(group))
        return True

    return False


def _source_day_finding(
    schedule: ScheduleIndex,
    meal_idx: int,
    week_start: WeekStart,
) -> Finding | None:
    meal = schedule.meal(meal_idx)
    if not meal.batch_cook_source_day:
        return None

    source_idx = get_day_index(meal.batch_cook_source_day, week_start)
    if source_idx == UNRESOLVED_DAY_INDEX:
        # an unparseable week start is reported once by the orchestrator
        if parse_week_start(week_start) is None:
            return None
        return make_finding(
            FindingKind.BATCH_UNKNOWN_SOURCE_DAY,
            recipe_id=meal.recipe_id,
            recipe_name=meal.display_name,
            days=[meal.day_of_week],
            declared_source_day=meal.batch_cook_source_day,
        )
    if source_idx < schedule.day_index(meal_idx):
        return None

    return make_finding(
        FindingKind.BATCH_FUTURE_REFERENCE,
        recipe_id=meal.recipe_id,
        recipe_name=meal.display_name,
        days=[meal.day_of_week, meal.batch_cook_source_day],
        day_index=schedule.day_index(meal_idx),
        source_day_index=source_idx,
    )


def _group_findings(
    schedule: ScheduleIndex,
    group: RecipeGroup,
    settings: PlanSettings,
    week_start: WeekStart,
) -> list[Finding]:
    findings: list[Finding] = []
    meals = schedule.group_meals(group)
    first_idx = group.meal_indices[0]
    first = schedule.meal(first_idx)
    first_day_index = schedule.day_index(first_idx)
    name = first.display_name

    def add_source_day_finding(meal_idx: int) -> None:
        finding = _source_day_finding(schedule, meal_idx, week_start)
        if finding is not None:
            findings.append(finding)

    if not any(m.is_leftover for m in meals) and not any(_mentions_batch(m.notes) for m in meals):
        findings.append(
            make_finding(
                FindingKind.BATCH_UNDECLARED_REPEAT,
                recipe_id=group.recipe_id,
                recipe_name=name,
                days=[m.day_of_week for m in meals],
                uses=len(meals),
            )
        )
        for meal_idx in group.meal_indices:
            add_source_day_finding(meal_idx)
        return findings

    if first.is_leftover:
        findings.append(
            make_finding(
                FindingKind.BATCH_FIRST_IS_LEFTOVER,
                recipe_id=group.recipe_id,
                recipe_name=name,
                days=[first.day_of_week],
            )
        )

    if not (first.notes and "batch" in first.notes.lower()):
        findings.append(
            make_finding(
                FindingKind.BATCH_NOTE_MISSING,
                recipe_id=group.recipe_id,
                recipe_name=name,
                days=[first.day_of_week],
            )
        )

    add_source_day_finding(first_idx)

    for meal_idx in group.meal_indices[1:]:
        meal = schedule.meal(meal_idx)

        if not meal.is_leftover:
            findings.append(
                make_finding(
                    FindingKind.BATCH_MISSING_FLAG,
                    recipe_id=group.recipe_id,
                    recipe_name=meal.display_name,
                    days=[meal.day_of_week, first.day_of_week],
                )
            )

        mismatched = bool(meal.batch_cook_source_day) and meal.batch_cook_source_day != first.day_of_week
        if mismatched:
            findings.append(
                make_finding(
                    FindingKind.BATCH_SOURCE_MISMATCH,
                    recipe_id=group.recipe_id,
                    recipe_name=meal.display_name,
                    days=[meal.day_of_week, first.day_of_week],
                    declared_source_day=meal.batch_cook_source_day,
                )
            )

        source_finding = _source_day_finding(schedule, meal_idx, week_start)
        # the mismatch message already names the day to use instead
        if source_finding is not None and not (
            mismatched and source_finding.kind == FindingKind.BATCH_UNKNOWN_SOURCE_DAY
        ):
            findings.append(source_finding)

        age = schedule.day_index(meal_idx) - first_day_index
        if meal.is_leftover and age > settings.max_leftover_days:
            findings.append(
                make_finding(
                    FindingKind.LEFTOVER_TOO_OLD,
                    recipe_id=group.recipe_id,
                    recipe_name=meal.display_name,
                    days=[meal.day_of_week, first.day_of_week],
                    age_days=age,
                    max_leftover_days=settings.max_leftover_days,
                )
            )

    needed = sum(m.servings or 0 for m in meals)
    cooked = first.servings or 0
    if cooked < needed:
        findings.append(
            make_finding(
                FindingKind.SERVINGS_SHORTFALL,
                recipe_id=group.recipe_id,
                recipe_name=name,
                days=[first.day_of_week],
                cooked_servings=cooked,
                needed_servings=needed,
            )
        )

    return findings


def validate_batch_cooking(
    meals: Sequence[ScheduledMeal],
    week_start_date: WeekStart,
    settings: PlanSettings | None = None,
    skip_for_meal_types: Sequence[str] = (),
    product_recipe_ids: set[str] | frozenset[str] = frozenset(),
    *,
    schedule: ScheduleIndex | None = None,
) -> ValidationResult:
    """Validate batch-cooking setup for every repeated recipe.

    Also checks, for every meal that names a source day (repeated or not),
    that the source day is a day of the week and comes strictly before the
    meal's own day. For repeated recipes these findings sit beside the
    leftover they concern.

    Args:
        meals: Candidate schedule
        week_start_date: Week start anchoring day order
        settings: Plan settings (for max_leftover_days); product defaults when None
        skip_for_meal_types: Meal families where repeats need no batch setup
        product_recipe_ids: Recipe ids of pre-packaged products
        schedule: Pre-built schedule index, to share grouping across validators

    Returns:
        ValidationResult with batch-cooking errors and warnings
    """
    settings = settings or PlanSettings()
    schedule = schedule or index_schedule(meals, week_start_date)
    log = DiagnosticLog(CHECK_NAME)
    products = set(product_recipe_ids)
    findings: list[Finding] = []

    for group in schedule.groups:
        if group.recipe_id in products:
            if len(group) > 1:
                log.note("product recipe exempt", recipe_id=group.recipe_id)
            continue

        if len(group) < 2:
            finding = _source_day_finding(schedule, group.meal_indices[0], week_start_date)
            if finding is not None:
                findings.append(finding)
            continue

        if _is_exempt(schedule, group, skip_for_meal_types, log):
            continue
        log.note("checking repeated recipe", recipe_id=group.recipe_id, uses=len(group))
        findings.extend(_group_findings(schedule, group, settings, week_start_date))

    return ValidationResult.from_findings(findings, log.entries)
