"""Side-channel diagnostic log for validation runs.

Validators append what they decided and why (groups skipped, coverage,
bands applied) to a DiagnosticLog instead of logging globally. The log is
returned on the ValidationResult; callers decide whether to surface it
(see mealwise.plans.logging).
"""

from pydantic import BaseModel, ConfigDict, Field

DiagnosticValue = str | int | float | bool | None


class DiagnosticEntry(BaseModel):
    """One diagnostic record.

    Attributes:
        check: Validator that wrote the entry ("cooldown", "batch_cooking", ...)
        message: Short event description
        context: Structured values behind the message
    """

    model_config = ConfigDict(frozen=True)

    check: str
    message: str
    context: dict[str, DiagnosticValue] = Field(default_factory=dict)


class DiagnosticLog:
    """Append-only diagnostic entries for a single check."""

    def __init__(self, check: str) -> None:
        self.check = check
        self._entries: list[DiagnosticEntry] = []

    def note(self, message: str, **context: DiagnosticValue) -> None:
        self._entries.append(DiagnosticEntry(check=self.check, message=message, context=context))

    @property
    def entries(self) -> list[DiagnosticEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
