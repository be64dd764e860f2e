"""Meal-plan validation API endpoints."""

from fastapi import APIRouter
from loguru import logger

from mealwise.plans.logging import log_validation_result
from mealwise.plans.validate import validate_meal_plan
from mealwise.schemas.meal_plan_validation import MealPlanValidationRequest, MealPlanValidationResponse

router = APIRouter(prefix="/meal-plans", tags=["meal-plans"])


@router.post("/validate", response_model=MealPlanValidationResponse)
def validate_plan(request: MealPlanValidationRequest) -> MealPlanValidationResponse:
    """Validate a candidate weekly meal plan.

    Args:
        request: Meals, settings, week start, history and options

    Returns:
        MealPlanValidationResponse with errors, warnings and structured findings
    """
    logger.info(f"Meal plan validation requested: {len(request.meals)} meals, week of {request.week_start_date}")

    result = validate_meal_plan(
        request.meals,
        request.settings,
        request.week_start_date,
        request.history,
        request.recipe_slot_catalog,
        request.options,
    )
    log_validation_result(result, context="api")

    return MealPlanValidationResponse.from_result(result, include_diagnostics=request.include_diagnostics)
