"""Meal-plan validation entry point.

Runs every validator against a candidate plan and reduces their findings to
one verdict. The call is pure and does no I/O or logging. A
non-empty error list means "reject and regenerate"; warnings are advisory
text for the user.
"""

from collections.abc import Sequence

from mealwise.plans.days import WeekStart, parse_week_start
from mealwise.plans.diagnostics import DiagnosticLog
from mealwise.plans.findings import Finding, FindingKind, make_finding
from mealwise.plans.grouping import ScheduleIndex, index_schedule
from mealwise.plans.result import SkipReason, ValidationResult, merge_results
from mealwise.plans.types import PlanSettings, ScheduledMeal, UsageHistoryEntry, ValidationOptions
from mealwise.plans.validators.batch_cooking import validate_batch_cooking
from mealwise.plans.validators.cooldown import validate_cooldowns
from mealwise.plans.validators.macros import CHECK_NAME as MACROS_CHECK
from mealwise.plans.validators.macros import validate_macros
from mealwise.plans.validators.slot_compatibility import CHECK_NAME as SLOTS_CHECK
from mealwise.plans.validators.slot_compatibility import RecipeSlotCatalog, validate_meal_slots

SCHEDULE_CHECK = "schedule"


def _schedule_findings(schedule: ScheduleIndex, week_start_date: WeekStart) -> ValidationResult:
    log = DiagnosticLog(SCHEDULE_CHECK)
    findings: list[Finding] = []

    if parse_week_start(week_start_date) is None:
        findings.append(make_finding(FindingKind.INVALID_WEEK_START, week_start=str(week_start_date)))
        return ValidationResult.from_findings(findings, log.entries)

    for meal_idx in schedule.unresolved:
        meal = schedule.meal(meal_idx)
        findings.append(
            make_finding(
                FindingKind.UNRESOLVED_DAY,
                recipe_id=meal.recipe_id,
                recipe_name=meal.display_name,
                days=[meal.day_of_week],
                day=meal.day_of_week,
                meal_type=meal.meal_type,
            )
        )

    log.note(
        "schedule indexed",
        meals=len(schedule.meals),
        recipe_groups=len(schedule.groups),
        unresolved=len(schedule.unresolved),
    )
    return ValidationResult.from_findings(findings, log.entries)


def validate_meal_plan(
    meals: Sequence[ScheduledMeal],
    settings: PlanSettings,
    week_start_date: WeekStart,
    history: Sequence[UsageHistoryEntry] = (),
    recipe_slot_catalog: RecipeSlotCatalog | None = None,
    options: ValidationOptions | None = None,
) -> ValidationResult:
    """Validate a candidate weekly meal plan.

    A meal whose day cannot be placed in the week, or an unparseable week
    start, makes the plan invalid. Cooldown and batch-cooking checks always
    run. Meal-slot compatibility runs
    when a slot catalog is supplied; macro validation runs when the options
    carry both nutrition profiles and recipe nutrition.

    Args:
        meals: Candidate schedule
        settings: Cooldown, macro mode and priority configuration
        week_start_date: Date the plan's week starts on
        history: Prior recipe uses, dated before the week
        recipe_slot_catalog: Recipe id -> eligible slot labels
        options: Exemptions, cross-compatibility flag and nutrition inputs

    Returns:
        Merged ValidationResult; is_valid is the AND of every validator
    """
    options = options or ValidationOptions()
    schedule = index_schedule(meals, week_start_date)

    results = [
        _schedule_findings(schedule, week_start_date),
        validate_cooldowns(meals, settings, week_start_date, history, schedule=schedule),
        validate_batch_cooking(
            meals,
            week_start_date,
            settings,
            skip_for_meal_types=options.skip_batch_cooking_for_meal_types,
            product_recipe_ids=options.product_recipe_ids,
            schedule=schedule,
        ),
    ]

    if recipe_slot_catalog:
        results.append(
            validate_meal_slots(
                meals,
                recipe_slot_catalog,
                allow_dinner_for_lunch=options.allow_dinner_for_lunch,
            )
        )
    else:
        results.append(ValidationResult.skip(SLOTS_CHECK, SkipReason.NO_SLOT_CATALOG))

    if options.profiles is not None and options.recipe_nutrition is not None:
        results.append(validate_macros(meals, settings, options.profiles, options.recipe_nutrition))
    else:
        results.append(ValidationResult.skip(MACROS_CHECK, SkipReason.NUTRITION_NOT_PROVIDED))

    return merge_results(results)
