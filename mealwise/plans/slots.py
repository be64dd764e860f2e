"""Meal slot normalization and family mapping.

Slot labels arrive in many cosmetic forms ("Afternoon Snack", "afternoon-snack",
"evening-snack"). They are normalized once here and mapped to one of four
families, each with its own cooldown setting.
"""

from enum import StrEnum

from mealwise.plans.types import PlanSettings

_SNACK_VARIANTS = ("morning-snack", "afternoon-snack", "evening-snack")


class MealFamily(StrEnum):
    DINNER = "dinner"
    LUNCH = "lunch"
    BREAKFAST = "breakfast"
    SNACK = "snack"


def normalize_slot(slot: str) -> str:
    """Lowercase a slot label and join words with hyphens ("Morning Snack" -> "morning-snack")."""
    return "-".join(slot.lower().split())


def canonical_slot(slot: str) -> str:
    """Normalize a slot label and fold snack variants into "snack"."""
    normalized = normalize_slot(slot)
    for variant in _SNACK_VARIANTS:
        normalized = normalized.replace(variant, "snack")
    return normalized


def slot_family(slot: str) -> MealFamily | None:
    """Map a slot label to its meal family.

    Returns:
        The family, or None for labels that name no known family
    """
    normalized = normalize_slot(slot)
    if "dinner" in normalized:
        return MealFamily.DINNER
    if "lunch" in normalized:
        return MealFamily.LUNCH
    if "breakfast" in normalized:
        return MealFamily.BREAKFAST
    if "snack" in normalized or "dessert" in normalized:
        return MealFamily.SNACK
    return None


def cooldown_for_slot(slot: str, settings: PlanSettings) -> int:
    """Get the configured cooldown (days) for a slot's family.

    Slots outside the four families use the dinner cooldown.
    """
    family = slot_family(slot)
    if family == MealFamily.LUNCH:
        return settings.lunch_cooldown
    if family == MealFamily.BREAKFAST:
        return settings.breakfast_cooldown
    if family == MealFamily.SNACK:
        return settings.snack_cooldown
    return settings.dinner_cooldown


def slot_label(slot: str) -> str:
    """Human-readable plural label used in messages ("afternoon-snack" -> "Afternoon snacks")."""
    normalized = normalize_slot(slot)
    if not normalized:
        return "Meals"
    text = normalized.replace("-", " ")
    return f"{text[0].upper()}{text[1:]}s"


def matches_slot_list(slot: str, candidates: list[str]) -> bool:
    """Check a slot against a caller-supplied list of slot labels.

    Either side may be the more specific label ("breakfast" matches
    "weekend-breakfast" and vice versa).
    """
    normalized = normalize_slot(slot)
    if not normalized:
        return False
    for candidate in candidates:
        other = normalize_slot(candidate)
        if not other:
            continue
        if normalized == other or other in normalized or normalized in other:
            return True
    return False
