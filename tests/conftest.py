"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

import sys
from collections.abc import Callable

import pytest
from loguru import logger

from mealwise.plans.types import PlanSettings, ScheduledMeal

# 2024-01-01 is a Monday, 2024-01-02 a Tuesday
MONDAY_WEEK = "2024-01-01"
TUESDAY_WEEK = "2024-01-02"

MealFactory = Callable[..., ScheduledMeal]


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore a plain stderr sink after tests that reconfigure loguru."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="INFO")


@pytest.fixture
def make_meal() -> MealFactory:
    """Factory for scheduled meals with dinner/servings defaults."""

    def _make_meal(
        day: str,
        recipe_id: str | None = "chili",
        meal_type: str = "dinner",
        *,
        recipe_name: str | None = None,
        servings: int | None = 2,
        notes: str | None = None,
        is_leftover: bool = False,
        source_day: str | None = None,
    ) -> ScheduledMeal:
        return ScheduledMeal(
            day_of_week=day,
            meal_type=meal_type,
            recipe_id=recipe_id,
            recipe_name=recipe_name or (recipe_id.replace("-", " ").title() if recipe_id else None),
            servings=servings,
            notes=notes,
            is_leftover=is_leftover,
            batch_cook_source_day=source_day,
        )

    return _make_meal


@pytest.fixture
def plan_settings() -> PlanSettings:
    """Default settings (dinner cooldown 14, balanced macros)."""
    return PlanSettings()


@pytest.fixture
def monday_week() -> str:
    return MONDAY_WEEK


@pytest.fixture
def tuesday_week() -> str:
    return TUESDAY_WEEK
