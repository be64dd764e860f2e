"""Regeneration error types.

Standard error codes:
- GENERATION_FAILED: The plan generator raised on the final attempt
"""

GENERATION_FAILED = "GENERATION_FAILED"


class RegenerationError(RuntimeError):
    """Raised when the plan generator itself keeps failing.

    Running out of attempts on invalid plans is not an error; it is reported
    as an unsuccessful RegenerationOutcome.

    Attributes:
        code: Error code (e.g., "GENERATION_FAILED")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")
