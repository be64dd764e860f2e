"""Regenerate-until-valid loop around a meal-plan generator."""

from mealwise.plans.regenerate.errors import RegenerationError
from mealwise.plans.regenerate.feedback import build_correction_feedback
from mealwise.plans.regenerate.regeneration_service import regenerate_until_valid
from mealwise.plans.regenerate.types import RegenerationAttempt, RegenerationOutcome

__all__ = [
    "RegenerationAttempt",
    "RegenerationError",
    "RegenerationOutcome",
    "build_correction_feedback",
    "regenerate_until_valid",
]
