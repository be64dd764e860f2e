"""Meal-plan validators."""

from mealwise.plans.validators.batch_cooking import validate_batch_cooking
from mealwise.plans.validators.cooldown import validate_cooldowns
from mealwise.plans.validators.macros import (
    MacroSkipped,
    calculate_plan_coverage,
    get_tolerance_for_macro_mode,
    macro_applicability,
    validate_macros,
)
from mealwise.plans.validators.slot_compatibility import is_slot_compatible, validate_meal_slots

__all__ = [
    "MacroSkipped",
    "calculate_plan_coverage",
    "get_tolerance_for_macro_mode",
    "is_slot_compatible",
    "macro_applicability",
    "validate_batch_cooking",
    "validate_cooldowns",
    "validate_macros",
    "validate_meal_slots",
]
