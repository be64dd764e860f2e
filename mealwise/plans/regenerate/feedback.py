"""Correction feedback for plan generators."""

from mealwise.plans.result import ValidationResult

FEEDBACK_HEADER = "The previous meal plan was rejected. Fix every issue below and regenerate the full plan:"


def build_correction_feedback(result: ValidationResult) -> str:
    """Render a rejected plan's errors as a numbered correction block.

    Warnings are left out: they are advisory and do not cause a rejection.

    Args:
        result: Validation result of the rejected plan

    Returns:
        Prompt-ready text, or an empty string when there are no errors
    """
    errors = result.errors
    if not errors:
        return ""
    lines = [FEEDBACK_HEADER]
    lines.extend(f"{i}. {error}" for i, error in enumerate(errors, start=1))
    return "\n".join(lines)
