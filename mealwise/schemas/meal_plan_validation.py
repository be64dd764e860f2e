"""Meal-plan validation request and response schemas.

Requests accept camelCase or snake_case field names, matching the plan
payloads produced by generators. Responses are snake_case.
"""

from pydantic import BaseModel, Field

from mealwise.plans.diagnostics import DiagnosticEntry
from mealwise.plans.findings import Finding, FindingKind, FindingValue, Severity
from mealwise.plans.result import SkipReason, ValidationResult
from mealwise.plans.types import ScheduledMeal, ValidationContext


class MealPlanValidationRequest(ValidationContext):
    """A candidate plan plus everything needed to validate it."""

    meals: list[ScheduledMeal] = Field(default_factory=list, description="Candidate schedule")
    include_diagnostics: bool = Field(False, description="Return the validators' diagnostic entries")


class FindingResponse(BaseModel):
    """A finding with its rendered message."""

    kind: FindingKind = Field(..., description="Rule that produced the finding")
    severity: Severity = Field(..., description="'error' blocks the plan, 'warning' is advisory")
    message: str = Field(..., description="Human-readable message")
    recipe_id: str | None = Field(None, description="Recipe involved")
    recipe_name: str | None = Field(None, description="Recipe name")
    days: list[str] = Field(default_factory=list, description="Day names involved")
    data: dict[str, FindingValue] = Field(default_factory=dict, description="Numbers behind the rule")

    @classmethod
    def from_finding(cls, finding: Finding) -> "FindingResponse":
        return cls(
            kind=finding.kind,
            severity=finding.severity,
            message=finding.message,
            recipe_id=finding.recipe_id,
            recipe_name=finding.recipe_name,
            days=finding.days,
            data=finding.data,
        )


class MealPlanValidationResponse(BaseModel):
    """Validation verdict for a candidate plan."""

    is_valid: bool = Field(..., description="False when any error was found")
    errors: list[str] = Field(default_factory=list, description="Error messages; non-empty means regenerate")
    warnings: list[str] = Field(default_factory=list, description="Advisory messages for the user")
    findings: list[FindingResponse] = Field(default_factory=list, description="Structured findings")
    skipped: dict[str, SkipReason] = Field(default_factory=dict, description="Checks that did not run, with reasons")
    diagnostics: list[DiagnosticEntry] = Field(default_factory=list, description="Diagnostic entries, when requested")

    @classmethod
    def from_result(cls, result: ValidationResult, *, include_diagnostics: bool = False) -> "MealPlanValidationResponse":
        return cls(
            is_valid=result.is_valid,
            errors=result.errors,
            warnings=result.warnings,
            findings=[FindingResponse.from_finding(f) for f in result.findings],
            skipped=result.skipped,
            diagnostics=result.diagnostics if include_diagnostics else [],
        )
