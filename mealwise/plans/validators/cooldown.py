"""Recipe cooldown validation.

Enforces minimum spacing between repeated uses of a recipe:
- Within the candidate week: a violation is an error
- Against prior usage history: a violation is a warning only, since a user
  may deliberately repeat a comfort-food favourite

Leftover meals are skipped: reheating batch-cooked food is not a new use.
"""

from collections.abc import Sequence

from mealwise.plans.days import WeekStart, date_for_day_index, parse_week_start
from mealwise.plans.diagnostics import DiagnosticLog
from mealwise.plans.findings import Finding, FindingKind, make_finding
from mealwise.plans.grouping import RecipeGroup, ScheduleIndex, index_schedule
from mealwise.plans.result import ValidationResult
from mealwise.plans.slots import cooldown_for_slot, slot_label
from mealwise.plans.types import PlanSettings, ScheduledMeal, UsageHistoryEntry

CHECK_NAME = "cooldown"


def _within_week_findings(
    schedule: ScheduleIndex,
    group: RecipeGroup,
    settings: PlanSettings,
    log: DiagnosticLog,
) -> list[Finding]:
    findings: list[Finding] = []
    name = schedule.meal(group.meal_indices[0]).display_name

    for earlier_idx, later_idx in zip(group.meal_indices, group.meal_indices[1:]):
        earlier = schedule.meal(earlier_idx)
        later = schedule.meal(later_idx)

        if later.is_leftover:
            log.note(
                "leftover exempt from cooldown",
                recipe_id=group.recipe_id,
                day=later.day_of_week,
            )
            continue

        gap = schedule.day_index(later_idx) - schedule.day_index(earlier_idx)
        cooldown = cooldown_for_slot(earlier.meal_type, settings)
        if gap < cooldown:
            findings.append(
                make_finding(
                    FindingKind.COOLDOWN_VIOLATION,
                    recipe_id=group.recipe_id,
                    recipe_name=name,
                    days=[earlier.day_of_week, later.day_of_week],
                    gap_days=gap,
                    cooldown_days=cooldown,
                    meal_label=slot_label(earlier.meal_type),
                )
            )

    return findings


def _history_finding(
    schedule: ScheduleIndex,
    group: RecipeGroup,
    settings: PlanSettings,
    week_start: WeekStart,
    history: Sequence[UsageHistoryEntry],
    log: DiagnosticLog,
) -> Finding | None:
    start = parse_week_start(week_start)
    if start is None:
        return None

    prior = [h for h in history if h.recipe_id == group.recipe_id and h.used_date < start]
    if not prior:
        return None

    most_recent = max(prior, key=lambda h: h.used_date)
    earliest_idx = group.meal_indices[0]
    earliest_date = date_for_day_index(start, schedule.day_index(earliest_idx))
    if earliest_date is None:
        return None

    days_since = (earliest_date - most_recent.used_date).days
    if days_since < 0:
        return None

    cooldown = cooldown_for_slot(most_recent.meal_type, settings)
    log.note(
        "history compared",
        recipe_id=group.recipe_id,
        last_used=most_recent.used_date.isoformat(),
        days_since=days_since,
        cooldown=cooldown,
    )
    if days_since >= cooldown:
        return None

    return make_finding(
        FindingKind.HISTORY_COOLDOWN,
        recipe_id=group.recipe_id,
        recipe_name=schedule.meal(earliest_idx).display_name,
        days=[schedule.meal(earliest_idx).day_of_week],
        days_since_last_use=days_since,
        cooldown_days=cooldown,
        meal_label=slot_label(most_recent.meal_type),
        last_used=most_recent.used_date.isoformat(),
    )


def validate_cooldowns(
    meals: Sequence[ScheduledMeal],
    settings: PlanSettings,
    week_start_date: WeekStart,
    history: Sequence[UsageHistoryEntry] = (),
    *,
    schedule: ScheduleIndex | None = None,
) -> ValidationResult:
    """Validate cooldown periods for every recipe in the plan.

    Within the week, consecutive uses of a recipe must be at least the
    cooldown of the earlier use's meal family apart, unless the later use is a
    leftover. Against history, the most recent prior use of each recipe is
    compared with its earliest use in the plan.

    Args:
        meals: Candidate schedule
        settings: Cooldown configuration
        week_start_date: Week start anchoring day order
        history: Prior recipe uses (entries on/after the week start are ignored)
        schedule: Pre-built schedule index, to share grouping across validators

    Returns:
        ValidationResult with cooldown errors and history warnings
    """
    schedule = schedule or index_schedule(meals, week_start_date)
    log = DiagnosticLog(CHECK_NAME)
    findings: list[Finding] = []

    for group in schedule.groups:
        if len(group) > 1:
            findings.extend(_within_week_findings(schedule, group, settings, log))

    for group in schedule.groups:
        finding = _history_finding(schedule, group, settings, week_start_date, history, log)
        if finding is not None:
            findings.append(finding)

    return ValidationResult.from_findings(findings, log.entries)
