"""Macro target validation.

Compares the plan's average daily nutrition with a profile's targets.

KEY CONCEPT: a plan that does not cover every meal of the day is judged
against proportionally scaled targets. A plan with only lunch + dinner
covers 75% of a day (35% + 40%), so it is compared with 75% of the daily
targets.

Severity:
- Calories outside the band are errors
- Protein outside the band is a warning (protein targets are aspirational)
- Carbs and fat outside the band are warnings

Calorie banking uses a flat daily band; weekday deficit vs weekend surplus
is not integrated over the week.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from mealwise.plans.constants import (
    BALANCED_TOLERANCE,
    BREAKFAST_COVERAGE_PCT,
    CALORIE_BANKING_TOLERANCE,
    DAYS_PER_WEEK,
    DINNER_COVERAGE_PCT,
    LUNCH_COVERAGE_PCT,
    MACRO_PRIORITY_CUTOFF,
    MAIN_MEAL_SCALE_WITH_SNACKS,
    MIN_NUTRITION_DATA_PCT,
    SNACK_COVERAGE_PCT,
    STRICT_TOLERANCE,
    WEEKDAY_DAYS,
    WEEKDAY_DISCIPLINE_WEEKDAY_TOLERANCE,
    WEEKDAY_DISCIPLINE_WEEKEND_TOLERANCE,
    WEEKEND_DAYS,
)
from mealwise.plans.diagnostics import DiagnosticLog
from mealwise.plans.findings import Finding, FindingKind, make_finding
from mealwise.plans.result import SkipReason, ValidationResult
from mealwise.plans.slots import MealFamily, slot_family
from mealwise.plans.types import MacroMode, NutritionProfile, PlanSettings, RecipeNutrition, ScheduledMeal

CHECK_NAME = "macros"


@dataclass(frozen=True)
class MacroSkipped:
    """Macro validation does not apply to this plan."""

    reason: SkipReason


@dataclass(frozen=True)
class DayBand:
    """Days averaged together and the tolerance they are held to.

    Attributes:
        name: "week", "weekdays" or "weekend"
        days: Day names in the band
        tolerance: Allowed fractional deviation from target
    """

    name: str
    days: frozenset[str]
    tolerance: float


@dataclass
class _Totals:
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def macro_applicability(
    settings: PlanSettings,
    profiles: Sequence[NutritionProfile],
) -> NutritionProfile | MacroSkipped:
    """Decide whether macro validation applies, before any nutrition is summed.

    Args:
        settings: Plan settings (priority order)
        profiles: Household nutrition profiles

    Returns:
        The profile to validate against, or MacroSkipped with the reason
    """
    if "macros" not in settings.priority_order[:MACRO_PRIORITY_CUTOFF]:
        return MacroSkipped(SkipReason.MACROS_NOT_PRIORITIZED)

    tracking = [p for p in profiles if p.macro_tracking_enabled]
    if not tracking:
        return MacroSkipped(SkipReason.NO_TRACKING_PROFILE)

    for profile in tracking:
        if profile.daily_calorie_target or profile.daily_protein_target:
            return profile

    return MacroSkipped(SkipReason.NO_TARGETS)


def get_tolerance_for_macro_mode(macro_mode: MacroMode, day_of_week: str | None = None) -> float:
    """Get tolerance (as a fraction) for a macro mode.

    Args:
        macro_mode: Macro tracking mode from settings
        day_of_week: Day name, only used by weekday_discipline

    Returns:
        Tolerance as decimal (e.g., 0.10 for 10%)
    """
    if macro_mode == "strict":
        return STRICT_TOLERANCE
    if macro_mode == "weekday_discipline":
        if day_of_week in WEEKEND_DAYS:
            return WEEKDAY_DISCIPLINE_WEEKEND_TOLERANCE
        return WEEKDAY_DISCIPLINE_WEEKDAY_TOLERANCE
    if macro_mode == "calorie_banking":
        return CALORIE_BANKING_TOLERANCE
    return BALANCED_TOLERANCE


def day_bands(macro_mode: MacroMode) -> list[DayBand]:
    """Bands of days averaged and checked together under a macro mode."""
    if macro_mode == "weekday_discipline":
        return [
            DayBand("weekdays", WEEKDAY_DAYS, WEEKDAY_DISCIPLINE_WEEKDAY_TOLERANCE),
            DayBand("weekend", WEEKEND_DAYS, WEEKDAY_DISCIPLINE_WEEKEND_TOLERANCE),
        ]
    return [DayBand("week", WEEKDAY_DAYS | WEEKEND_DAYS, get_tolerance_for_macro_mode(macro_mode))]


def calculate_plan_coverage(meals: Sequence[ScheduledMeal]) -> int:
    """Percentage of a full day's nutrition the plan's meal families account for.

    Without snacks: breakfast 25 + lunch 35 + dinner 40 = 100.
    With snacks: main meals scaled to 80% (20 + 28 + 32) and snacks add 20.
    """
    families = {slot_family(m.meal_type) for m in meals if not m.is_leftover}
    has_snacks = MealFamily.SNACK in families
    scale = MAIN_MEAL_SCALE_WITH_SNACKS if has_snacks else 1.0

    coverage = 0.0
    if MealFamily.BREAKFAST in families:
        coverage += BREAKFAST_COVERAGE_PCT * scale
    if MealFamily.LUNCH in families:
        coverage += LUNCH_COVERAGE_PCT * scale
    if MealFamily.DINNER in families:
        coverage += DINNER_COVERAGE_PCT * scale
    if has_snacks:
        coverage += SNACK_COVERAGE_PCT

    return round_half_up(coverage)


def _band_findings(
    band: DayBand,
    averages: _Totals,
    targets: _Totals,
    settings: PlanSettings,
    coverage_pct: int,
) -> list[Finding]:
    findings: list[Finding] = []
    tolerance = band.tolerance

    def limits(target: float) -> tuple[float, float]:
        low = target * (1 - tolerance)
        high = target * (1 + tolerance)
        return low, high

    def deviation(average: float, target: float) -> int:
        return round_half_up((average - target) / target * 100)

    if targets.calories > 0:
        low, high = limits(targets.calories)
        common = {
            "band": band.name,
            "average": round_half_up(averages.calories),
            "target": round_half_up(targets.calories),
            "deviation_pct": deviation(averages.calories, targets.calories),
            "mode": settings.macro_mode,
            "min": round_half_up(low),
            "max": round_half_up(high),
            "coverage_pct": coverage_pct,
            "tolerance_pct": round_half_up(tolerance * 100),
        }
        if averages.calories < low:
            findings.append(make_finding(FindingKind.MACRO_CALORIES_LOW, **common))
        elif averages.calories > high:
            findings.append(make_finding(FindingKind.MACRO_CALORIES_HIGH, **common))

    if targets.protein > 0:
        low, high = limits(targets.protein)
        common = {
            "band": band.name,
            "average": round_half_up(averages.protein),
            "target": round_half_up(targets.protein),
            "deviation_pct": deviation(averages.protein, targets.protein),
            "min": round_half_up(low),
            "max": round_half_up(high),
        }
        if averages.protein < low:
            findings.append(make_finding(FindingKind.MACRO_PROTEIN_LOW, **common))
        elif averages.protein > high:
            findings.append(make_finding(FindingKind.MACRO_PROTEIN_HIGH, **common))

    for nutrient, average, target in (
        ("Carbs", averages.carbs, targets.carbs),
        ("Fat", averages.fat, targets.fat),
    ):
        if target <= 0:
            continue
        low, high = limits(target)
        if low <= average <= high:
            continue
        findings.append(
            make_finding(
                FindingKind.MACRO_SOFT_BAND,
                nutrient=nutrient,
                band=band.name,
                average=round_half_up(average),
                target=round_half_up(target),
                deviation_pct=deviation(average, target),
                min=round_half_up(low),
                max=round_half_up(high),
            )
        )

    return findings


def validate_macros(
    meals: Sequence[ScheduledMeal],
    settings: PlanSettings,
    profiles: Sequence[NutritionProfile],
    recipe_nutrition: Sequence[RecipeNutrition],
) -> ValidationResult:
    """Validate macro targets for the plan.

    Only runs when "macros" is among the top three priorities and a profile
    has tracking enabled with a calorie or protein target; otherwise the
    result is valid and carries the skip reason.

    Leftovers are excluded from totals: reheating adds no new food.

    Args:
        meals: Candidate schedule
        settings: Macro mode and priorities
        profiles: Household nutrition profiles
        recipe_nutrition: Per-serving nutrition by recipe

    Returns:
        ValidationResult with calorie errors and protein/carb/fat warnings
    """
    log = DiagnosticLog(CHECK_NAME)

    applicable = macro_applicability(settings, profiles)
    if isinstance(applicable, MacroSkipped):
        log.note("macro validation skipped", reason=applicable.reason.value)
        return ValidationResult.skip(CHECK_NAME, applicable.reason, log.entries)
    profile = applicable

    coverage_pct = calculate_plan_coverage(meals)
    multiplier = coverage_pct / 100
    targets = _Totals(
        calories=round_half_up((profile.daily_calorie_target or 0) * multiplier),
        protein=round_half_up((profile.daily_protein_target or 0) * multiplier),
        carbs=round_half_up((profile.daily_carbs_target or 0) * multiplier),
        fat=round_half_up((profile.daily_fat_target or 0) * multiplier),
    )
    log.note(
        "targets scaled to plan coverage",
        coverage_pct=coverage_pct,
        full_day_calories=profile.daily_calorie_target,
        plan_calories=targets.calories,
    )

    nutrition_by_recipe = {r.recipe_id: r for r in recipe_nutrition}
    bands = day_bands(settings.macro_mode)
    band_totals = {band.name: _Totals() for band in bands}
    total_meals = 0
    meals_with_nutrition = 0

    for meal in meals:
        if meal.is_leftover:
            continue
        total_meals += 1

        nutrition = nutrition_by_recipe.get(meal.recipe_id) if meal.recipe_id else None
        if nutrition is None or not nutrition.calories_per_serving:
            continue
        meals_with_nutrition += 1

        band = bands[0] if len(bands) == 1 else next((b for b in bands if meal.day_of_week in b.days), None)
        if band is None:
            log.note("meal outside every day band", recipe_id=meal.recipe_id, day=meal.day_of_week)
            continue
        totals = band_totals[band.name]
        totals.calories += nutrition.calories_per_serving
        totals.protein += nutrition.protein_per_serving or 0
        totals.carbs += nutrition.carbs_per_serving or 0
        totals.fat += nutrition.fat_per_serving or 0

    data_pct = meals_with_nutrition / total_meals * 100 if total_meals else 0.0
    if data_pct < MIN_NUTRITION_DATA_PCT:
        log.note("insufficient nutrition data", nutrition_coverage_pct=round_half_up(data_pct))
        return ValidationResult.from_findings(
            [make_finding(FindingKind.MACRO_DATA_COVERAGE, nutrition_coverage_pct=round_half_up(data_pct))],
            log.entries,
        )

    findings: list[Finding] = []
    for band in bands:
        totals = band_totals[band.name]
        day_count = len(band.days) or DAYS_PER_WEEK
        averages = _Totals(
            calories=round_half_up(totals.calories / day_count),
            protein=round_half_up(totals.protein / day_count),
            carbs=round_half_up(totals.carbs / day_count),
            fat=round_half_up(totals.fat / day_count),
        )
        log.note(
            "band averages",
            band=band.name,
            tolerance=band.tolerance,
            calories=averages.calories,
            protein=averages.protein,
            carbs=averages.carbs,
            fat=averages.fat,
        )
        findings.extend(_band_findings(band, averages, targets, settings, coverage_pct))

    return ValidationResult.from_findings(findings, log.entries)
