"""Logging helpers for validation outcomes.

Validators never log; callers that want a validation run in the application
log pass the result here.
"""

from loguru import logger

from mealwise.plans.result import ValidationResult


def log_validation_result(result: ValidationResult, context: str = "meal_plan") -> None:
    """Log a validation verdict with its findings and diagnostics.

    Valid plans log at info, invalid plans at warning. Each error is logged at
    warning and each advisory at info; diagnostics go to debug.

    Args:
        result: Merged or single-validator result
        context: Label for the run (e.g. "api", "cli", "regeneration attempt 2")
    """
    bound = logger.bind(
        context=context,
        is_valid=result.is_valid,
        errors=len(result.errors),
        warnings=len(result.warnings),
        skipped=sorted(result.skipped),
    )
    if result.is_valid:
        bound.info(f"Meal plan valid ({context}): {len(result.warnings)} warnings")
    else:
        bound.warning(f"Meal plan invalid ({context}): {len(result.errors)} errors, {len(result.warnings)} warnings")

    for finding in result.findings:
        finding_logger = logger.bind(context=context, kind=finding.kind.value, recipe_id=finding.recipe_id)
        if finding.is_error:
            finding_logger.warning(finding.message)
        else:
            finding_logger.info(finding.message)

    for check, reason in result.skipped.items():
        logger.bind(context=context, check=check).debug(f"Check skipped: {reason.value}")

    for entry in result.diagnostics:
        logger.bind(context=context, check=entry.check, details=entry.context).debug(entry.message)
