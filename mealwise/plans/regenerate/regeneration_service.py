"""Regenerate a meal plan until it validates.

The generator is called with the previous attempt's errors (empty on the first
attempt), its plan is validated, and the loop stops on the first valid plan or
after max_attempts. This is the only blocking piece around the engine: it
sleeps between failed attempts.
"""

import time
from collections.abc import Callable, Sequence

from loguru import logger

from mealwise.config.settings import settings
from mealwise.plans.logging import log_validation_result
from mealwise.plans.regenerate.errors import GENERATION_FAILED, RegenerationError
from mealwise.plans.regenerate.types import RegenerationAttempt, RegenerationOutcome
from mealwise.plans.result import ValidationResult
from mealwise.plans.types import ScheduledMeal, ValidationContext
from mealwise.plans.validate import validate_meal_plan

PlanGenerator = Callable[[list[str]], Sequence[ScheduledMeal]]


def regenerate_until_valid(
    generate: PlanGenerator,
    context: ValidationContext,
    *,
    max_attempts: int | None = None,
    retry_delay_seconds: float | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RegenerationOutcome:
    """Generate and validate plans until one passes.

    Args:
        generate: Produces a plan from the previous attempt's error strings
        context: Settings, week start, history and options to validate against
        max_attempts: Attempt limit (defaults to settings.regeneration_max_attempts)
        retry_delay_seconds: Pause between attempts (defaults to settings)
        sleep: Sleep function, injectable for tests

    Returns:
        RegenerationOutcome; succeeded is False when every attempt was invalid

    Raises:
        RegenerationError: If the generator raises on the final attempt
        ValueError: If max_attempts is less than 1
    """
    attempts_allowed = max_attempts if max_attempts is not None else settings.regeneration_max_attempts
    delay = retry_delay_seconds if retry_delay_seconds is not None else settings.regeneration_retry_delay_seconds
    if attempts_allowed < 1:
        raise ValueError(f"max_attempts must be at least 1, got {attempts_allowed}")

    feedback: list[str] = []
    attempts: list[RegenerationAttempt] = []
    last_meals: list[ScheduledMeal] = []
    last_result: ValidationResult | None = None

    for attempt in range(1, attempts_allowed + 1):
        logger.info(f"Generating meal plan (attempt {attempt}/{attempts_allowed})")

        try:
            meals = list(generate(feedback))
        except Exception as e:
            logger.bind(context="regeneration", attempt=attempt, error=str(e)).warning("Meal plan generation failed")
            attempts.append(RegenerationAttempt(attempt=attempt, generation_error=str(e)))
            if attempt == attempts_allowed:
                raise RegenerationError(
                    GENERATION_FAILED,
                    [f"attempt {a.attempt}: {a.generation_error}" for a in attempts if a.generation_error],
                ) from e
            sleep(delay)
            continue

        result = validate_meal_plan(
            meals,
            context.settings,
            context.week_start_date,
            context.history,
            context.recipe_slot_catalog,
            context.options,
        )
        log_validation_result(result, context=f"regeneration attempt {attempt}")
        attempts.append(
            RegenerationAttempt(
                attempt=attempt,
                is_valid=result.is_valid,
                errors=result.errors,
                warnings=result.warnings,
            )
        )
        last_meals, last_result = meals, result

        if result.is_valid:
            logger.info(f"Meal plan valid after {attempt} attempt(s)")
            return RegenerationOutcome(succeeded=True, attempts=attempts, meals=meals, result=result)

        feedback = result.errors
        if attempt < attempts_allowed:
            logger.warning(f"Meal plan rejected with {len(feedback)} errors. Retrying...")
            sleep(delay)

    logger.error(f"Meal plan still invalid after {attempts_allowed} attempts")
    return RegenerationOutcome(succeeded=False, attempts=attempts, meals=last_meals, result=last_result)
