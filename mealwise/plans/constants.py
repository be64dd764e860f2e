"""Meal-Plan Validation Rules - Single Source of Truth.

Every numeric rule the validators enforce lives here, along with the product
defaults for per-user plan settings.
"""

# Canonical day names, Sunday first (0=Sunday ... 6=Saturday)
CANONICAL_DAYS: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

WEEKEND_DAYS: frozenset[str] = frozenset({"Saturday", "Sunday"})
WEEKDAY_DAYS: frozenset[str] = frozenset(set(CANONICAL_DAYS) - WEEKEND_DAYS)

DAYS_PER_WEEK = 7

# Macro tolerance bands (fraction of target)
STRICT_TOLERANCE = 0.05
BALANCED_TOLERANCE = 0.10
WEEKDAY_DISCIPLINE_WEEKDAY_TOLERANCE = 0.05
WEEKDAY_DISCIPLINE_WEEKEND_TOLERANCE = 0.25
# Flat daily band; weekday deficit vs weekend surplus is not integrated over the week
CALORIE_BANKING_TOLERANCE = 0.15

# Share of a full day's nutrition per meal family (percent)
BREAKFAST_COVERAGE_PCT = 25
LUNCH_COVERAGE_PCT = 35
DINNER_COVERAGE_PCT = 40
SNACK_COVERAGE_PCT = 20
# Main meals are rescaled when any snack/dessert is in the plan so the total stays 100
MAIN_MEAL_SCALE_WITH_SNACKS = 0.80

# Below this share of non-leftover meals with nutrition data, macro checks are skipped
MIN_NUTRITION_DATA_PCT = 50

# Macros are only enforced when ranked within this many top priorities
MACRO_PRIORITY_CUTOFF = 3

# Free-text markers that declare a repeat as intentional batch cooking
BATCH_NOTE_MARKERS: tuple[str, ...] = ("batch", "leftover")

# Recipe slot labels that satisfy both lunch and dinner
MAIN_COURSE_SLOTS: frozenset[str] = frozenset({"main-course", "supper"})

# Product defaults for plan settings
DEFAULT_DINNER_COOLDOWN = 14
DEFAULT_LUNCH_COOLDOWN = 7
DEFAULT_BREAKFAST_COOLDOWN = 3
DEFAULT_SNACK_COOLDOWN = 2
DEFAULT_MAX_LEFTOVER_DAYS = 4
