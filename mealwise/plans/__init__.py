"""Plans module - meal-plan validation engine.

This module provides:
- Day index resolution relative to any week start
- Recipe cooldown, batch-cooking, meal-slot and macro validators
- A single validate_meal_plan entry point merging their verdicts
- Correction feedback and a regenerate-until-valid loop for plan generators

The engine is pure: validators return findings and diagnostics and never log.
"""

from mealwise.plans.days import get_day_index, ordered_days, parse_week_start
from mealwise.plans.findings import Finding, FindingKind, Severity, render_finding
from mealwise.plans.result import SkipReason, ValidationResult, merge_results
from mealwise.plans.types import (
    NutritionProfile,
    PlanSettings,
    RecipeNutrition,
    ScheduledMeal,
    UsageHistoryEntry,
    ValidationOptions,
)
from mealwise.plans.validate import validate_meal_plan

__all__ = [
    "Finding",
    "FindingKind",
    "NutritionProfile",
    "PlanSettings",
    "RecipeNutrition",
    "ScheduledMeal",
    "Severity",
    "SkipReason",
    "UsageHistoryEntry",
    "ValidationOptions",
    "ValidationResult",
    "get_day_index",
    "merge_results",
    "ordered_days",
    "parse_week_start",
    "render_finding",
    "validate_meal_plan",
]
