"""Meal-plan validation input models.

These are the plain-data shapes the validation engine judges. The engine
never mutates them: meals and history entries are frozen, and settings are
only read.

Field names are snake_case; every model also accepts the camelCase names used
by generated plans and JSON payloads (``dayOfWeek``, ``isLeftover``,
``batchCookSourceDay``, ...).
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from mealwise.plans.constants import (
    DEFAULT_BREAKFAST_COOLDOWN,
    DEFAULT_DINNER_COOLDOWN,
    DEFAULT_LUNCH_COOLDOWN,
    DEFAULT_MAX_LEFTOVER_DAYS,
    DEFAULT_SNACK_COOLDOWN,
)
from mealwise.plans.days import parse_week_start

MacroMode = Literal["balanced", "strict", "weekday_discipline", "calorie_banking"]
PriorityType = Literal["macros", "ratings", "variety", "shopping", "prep", "time"]

DEFAULT_PRIORITY_ORDER: list[PriorityType] = ["macros", "ratings", "variety", "shopping", "prep", "time"]


class _PlanModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScheduledMeal(_PlanModel):
    """One cell of a candidate plan.

    Attributes:
        day_of_week: Day name ("Monday", ...)
        meal_type: Meal slot label ("dinner", "afternoon-snack", ...)
        recipe_id: Recipe reference, None for an empty slot
        recipe_name: Denormalized recipe name used in messages
        servings: Servings this meal needs (for a batch source: servings it cooks)
        notes: Free-text note from the generator
        is_leftover: True when this meal reheats food cooked on an earlier day
        batch_cook_source_day: Day whose cooking produced this leftover
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    day_of_week: str
    meal_type: str
    recipe_id: str | None = None
    recipe_name: str | None = None
    servings: int | None = Field(default=None, ge=0)
    notes: str | None = None
    is_leftover: bool = False
    batch_cook_source_day: str | None = None

    @property
    def display_name(self) -> str:
        return self.recipe_name or self.recipe_id or "Unnamed recipe"


class UsageHistoryEntry(_PlanModel):
    """A recipe use recorded before the candidate week.

    ``used_date`` also accepts a timestamp (``"2023-12-29T18:30:00.000Z"``);
    only its calendar date is kept.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    recipe_id: str
    used_date: date
    meal_type: str

    @field_validator("used_date", mode="before")
    @classmethod
    def date_part_of_timestamp(cls, value: object) -> object:
        if isinstance(value, datetime | str):
            return parse_week_start(value) or value
        return value


class PlanSettings(_PlanModel):
    """Per-user variety, macro and batch-cooking settings.

    Attributes:
        dinner_cooldown: Minimum days between two dinners of the same recipe
        lunch_cooldown: Minimum days between two lunches of the same recipe
        breakfast_cooldown: Minimum days between two breakfasts of the same recipe
        snack_cooldown: Minimum days between two snacks/desserts of the same recipe
        macro_mode: Tolerance band selection for macro validation
        priority_order: Planning priorities, highest first
        max_leftover_days: Longest a batch-cooked dish should sit before being eaten
    """

    dinner_cooldown: int = Field(default=DEFAULT_DINNER_COOLDOWN, ge=0)
    lunch_cooldown: int = Field(default=DEFAULT_LUNCH_COOLDOWN, ge=0)
    breakfast_cooldown: int = Field(default=DEFAULT_BREAKFAST_COOLDOWN, ge=0)
    snack_cooldown: int = Field(default=DEFAULT_SNACK_COOLDOWN, ge=0)
    macro_mode: MacroMode = "balanced"
    priority_order: list[PriorityType] = Field(default_factory=lambda: list(DEFAULT_PRIORITY_ORDER))
    max_leftover_days: int = Field(default=DEFAULT_MAX_LEFTOVER_DAYS, ge=0)


class NutritionProfile(_PlanModel):
    """A household member's daily targets."""

    name: str | None = None
    macro_tracking_enabled: bool = False
    daily_calorie_target: float | None = Field(default=None, ge=0)
    daily_protein_target: float | None = Field(default=None, ge=0)
    daily_carbs_target: float | None = Field(default=None, ge=0)
    daily_fat_target: float | None = Field(default=None, ge=0)


class RecipeNutrition(_PlanModel):
    """Per-serving nutrition for one recipe."""

    recipe_id: str
    recipe_name: str | None = None
    calories_per_serving: float | None = Field(default=None, ge=0)
    protein_per_serving: float | None = Field(default=None, ge=0)
    carbs_per_serving: float | None = Field(default=None, ge=0)
    fat_per_serving: float | None = Field(default=None, ge=0)


class ValidationOptions(_PlanModel):
    """Optional inputs that switch validators on or relax them.

    Attributes:
        allow_dinner_for_lunch: Dinner-only recipes may fill lunch slots
        skip_batch_cooking_for_meal_types: Meal families where repeats need no batch setup
            (e.g. the user asked for the same breakfast every day)
        product_recipe_ids: Pre-packaged products grabbed from the pantry, never batch cooked
        profiles: Nutrition profiles; macro validation runs only with recipe_nutrition too
        recipe_nutrition: Per-recipe nutrition for macro validation
    """

    allow_dinner_for_lunch: bool = True
    skip_batch_cooking_for_meal_types: list[str] = Field(default_factory=list)
    product_recipe_ids: set[str] = Field(default_factory=set)
    profiles: list[NutritionProfile] | None = None
    recipe_nutrition: list[RecipeNutrition] | None = None


class ValidationContext(_PlanModel):
    """Everything validate_meal_plan needs besides the meals themselves.

    Lets a plan generator be re-validated attempt after attempt against the
    same settings, history and options.
    """

    settings: PlanSettings = Field(default_factory=PlanSettings)
    week_start_date: date | str
    history: list[UsageHistoryEntry] = Field(default_factory=list)
    recipe_slot_catalog: dict[str, list[str]] | None = None
    options: ValidationOptions = Field(default_factory=ValidationOptions)
