"""Regeneration attempt and outcome models."""

from pydantic import BaseModel, Field

from mealwise.plans.result import ValidationResult
from mealwise.plans.types import ScheduledMeal


class RegenerationAttempt(BaseModel):
    """Record of one generate-then-validate attempt.

    Attributes:
        attempt: 1-based attempt number
        is_valid: Whether the generated plan passed validation
        errors: Validation errors of the generated plan
        warnings: Validation warnings of the generated plan
        generation_error: Message of the exception the generator raised, if it failed
    """

    attempt: int = Field(..., ge=1)
    is_valid: bool = False
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    generation_error: str | None = None


class RegenerationOutcome(BaseModel):
    """Result of regenerate_until_valid.

    Attributes:
        succeeded: True when an attempt produced a valid plan
        attempts: Every attempt, in order
        meals: Meals of the last plan that was validated (the valid one on success)
        result: Validation result for those meals, None if no plan was ever validated
    """

    succeeded: bool
    attempts: list[RegenerationAttempt] = Field(default_factory=list)
    meals: list[ScheduledMeal] = Field(default_factory=list)
    result: ValidationResult | None = None

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)
