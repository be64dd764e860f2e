"""Validation result model and merging."""

from enum import StrEnum

from pydantic import BaseModel, Field, computed_field

from mealwise.plans.diagnostics import DiagnosticEntry
from mealwise.plans.findings import Finding


class SkipReason(StrEnum):
    """Why a check did not run (distinct from running and passing)."""

    MACROS_NOT_PRIORITIZED = "macros_not_prioritized"
    NO_TRACKING_PROFILE = "no_tracking_profile"
    NO_TARGETS = "no_targets"
    NUTRITION_NOT_PROVIDED = "nutrition_not_provided"
    NO_SLOT_CATALOG = "no_slot_catalog"


class ValidationResult(BaseModel):
    """Verdict of one validator, or of the whole engine after merging.

    Attributes:
        is_valid: False when any contributing validator found an error
        findings: Findings in the order they were produced
        diagnostics: Side-channel diagnostic entries
        skipped: Check name -> reason, for checks that did not run
    """

    is_valid: bool = True
    findings: list[Finding] = Field(default_factory=list)
    diagnostics: list[DiagnosticEntry] = Field(default_factory=list)
    skipped: dict[str, SkipReason] = Field(default_factory=dict)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def errors(self) -> list[str]:
        return [f.message for f in self.findings if f.is_error]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warnings(self) -> list[str]:
        return [f.message for f in self.findings if not f.is_error]

    @classmethod
    def from_findings(
        cls,
        findings: list[Finding],
        diagnostics: list[DiagnosticEntry] | None = None,
    ) -> "ValidationResult":
        return cls(
            is_valid=not any(f.is_error for f in findings),
            findings=findings,
            diagnostics=diagnostics or [],
        )

    @classmethod
    def skip(
        cls,
        check: str,
        reason: SkipReason,
        diagnostics: list[DiagnosticEntry] | None = None,
    ) -> "ValidationResult":
        return cls(is_valid=True, skipped={check: reason}, diagnostics=diagnostics or [])


def merge_results(results: list[ValidationResult]) -> ValidationResult:
    """Concatenate findings and diagnostics; validity is the AND of every result."""
    merged = ValidationResult()
    for result in results:
        merged.is_valid = merged.is_valid and result.is_valid
        merged.findings.extend(result.findings)
        merged.diagnostics.extend(result.diagnostics)
        merged.skipped.update(result.skipped)
    return merged
