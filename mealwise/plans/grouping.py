"""Recipe grouping over the candidate schedule.

The meals stay in the one sequence the caller passed in; groups hold indices
into it, never copies. Grouping is two explicit stages: resolve every meal's
day index once, then bucket resolved meals by recipe id in chronological order.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from mealwise.plans.days import UNRESOLVED_DAY_INDEX, WeekStart, get_day_index
from mealwise.plans.types import ScheduledMeal


@dataclass(frozen=True)
class RecipeGroup:
    """All resolved uses of one recipe, chronologically ordered.

    Attributes:
        recipe_id: Recipe shared by the group
        meal_indices: Indices into the schedule, sorted by day index (stable for ties)
    """

    recipe_id: str
    meal_indices: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.meal_indices)


@dataclass(frozen=True)
class ScheduleIndex:
    """Day indices and recipe groups for one schedule.

    Attributes:
        meals: The schedule, unchanged
        day_indices: Day index per meal (-1 when unresolved)
        groups: Recipe groups in order of first appearance in the schedule
        unresolved: Indices of meals whose day could not be resolved
    """

    meals: Sequence[ScheduledMeal]
    day_indices: tuple[int, ...]
    groups: tuple[RecipeGroup, ...] = field(default=())
    unresolved: tuple[int, ...] = field(default=())

    def meal(self, index: int) -> ScheduledMeal:
        return self.meals[index]

    def day_index(self, index: int) -> int:
        return self.day_indices[index]

    def group_meals(self, group: RecipeGroup) -> list[ScheduledMeal]:
        return [self.meals[i] for i in group.meal_indices]


def index_schedule(meals: Sequence[ScheduledMeal], week_start: WeekStart) -> ScheduleIndex:
    """Resolve day indices and group meals by recipe.

    Meals without a recipe are not grouped. Meals whose day cannot be resolved
    are reported in ``unresolved`` and left out of every group, since their
    timing cannot be compared.

    Args:
        meals: Candidate schedule
        week_start: Week start anchoring the day indices

    Returns:
        ScheduleIndex over the schedule
    """
    day_indices = tuple(get_day_index(meal.day_of_week, week_start) for meal in meals)

    buckets: dict[str, list[int]] = {}
    unresolved: list[int] = []
    for i, meal in enumerate(meals):
        if day_indices[i] == UNRESOLVED_DAY_INDEX:
            unresolved.append(i)
            continue
        if not meal.recipe_id:
            continue
        buckets.setdefault(meal.recipe_id, []).append(i)

    groups = tuple(
        RecipeGroup(recipe_id=recipe_id, meal_indices=tuple(sorted(indices, key=lambda i: day_indices[i])))
        for recipe_id, indices in buckets.items()
    )
    return ScheduleIndex(
        meals=meals,
        day_indices=day_indices,
        groups=groups,
        unresolved=tuple(unresolved),
    )
