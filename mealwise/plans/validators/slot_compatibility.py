"""Meal-slot compatibility validation.

A recipe that declares eligible meal slots may only fill one of them, with
two controlled cross-compatibilities:
- "main-course" and "supper" recipes satisfy both lunch and dinner
- With allow_dinner_for_lunch, dinner recipes may fill lunch (never the reverse)
"""

from collections.abc import Mapping, Sequence

from mealwise.plans.constants import MAIN_COURSE_SLOTS
from mealwise.plans.diagnostics import DiagnosticLog
from mealwise.plans.findings import Finding, FindingKind, make_finding
from mealwise.plans.result import ValidationResult
from mealwise.plans.slots import canonical_slot
from mealwise.plans.types import ScheduledMeal

CHECK_NAME = "slot_compatibility"

RecipeSlotCatalog = Mapping[str, Sequence[str]]


def is_slot_compatible(assigned: str, allowed: Sequence[str], *, allow_dinner_for_lunch: bool = True) -> bool:
    """Check whether a recipe eligible for ``allowed`` slots may fill ``assigned``.

    Args:
        assigned: Slot the plan put the recipe in
        allowed: Slots the recipe declares
        allow_dinner_for_lunch: Let dinner recipes fill lunch slots

    Returns:
        True if any eligible slot satisfies the assigned slot
    """
    target = canonical_slot(assigned)
    for slot in allowed:
        candidate = canonical_slot(slot)
        if candidate == target:
            return True
        if candidate in MAIN_COURSE_SLOTS and target in {"lunch", "dinner"}:
            return True
        if allow_dinner_for_lunch and target == "lunch" and candidate == "dinner":
            return True
    return False


def validate_meal_slots(
    meals: Sequence[ScheduledMeal],
    recipe_slot_catalog: RecipeSlotCatalog,
    *,
    allow_dinner_for_lunch: bool = True,
) -> ValidationResult:
    """Validate that every recipe sits in a slot it is designated for.

    Meals without a recipe, and recipes with no catalog entry (or an empty
    one), cannot be checked and are passed.

    Args:
        meals: Candidate schedule
        recipe_slot_catalog: Recipe id -> eligible slot labels
        allow_dinner_for_lunch: Let dinner recipes fill lunch slots

    Returns:
        ValidationResult with one error per mismatched meal
    """
    log = DiagnosticLog(CHECK_NAME)
    findings: list[Finding] = []

    for meal in meals:
        if not meal.recipe_id:
            continue

        allowed = list(recipe_slot_catalog.get(meal.recipe_id) or [])
        if not allowed:
            log.note("no slot designation", recipe_id=meal.recipe_id)
            continue

        if is_slot_compatible(meal.meal_type, allowed, allow_dinner_for_lunch=allow_dinner_for_lunch):
            continue

        findings.append(
            make_finding(
                FindingKind.SLOT_MISMATCH,
                recipe_id=meal.recipe_id,
                recipe_name=meal.display_name,
                days=[meal.day_of_week],
                meal_type=meal.meal_type,
                allowed_meal_types=[canonical_slot(s) for s in allowed],
            )
        )

    return ValidationResult.from_findings(findings, log.entries)
