"""
Schemas
File: verification.py

Purpose: Audit report format for distribution artifacts.
The auditor reports one CheckResult per concern instead of raising,
so a single run can surface every problem in an artifact at once.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# "warn" checks never fail an audit; they flag artifacts that are valid
# but likely not what the operator intended (e.g. duplicate recipients).
CheckSeverity = Literal["info", "warn", "error"]


class CheckResult(BaseModel):
    """
    Outcome of one audit check against an artifact.
    """

    model_config = ConfigDict(extra="forbid")

    check_id: str = Field(
        ...,
        description="Stable check name, e.g. 'root_rederived'",
        min_length=1,
    )
    ok: bool = Field(..., description="False only for error-level failures")
    severity: CheckSeverity = Field(..., description="info, warn or error")
    message: str = Field(..., description="One-line summary for CLI output")
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Offending indices, recipients or expected/actual values",
    )

    @property
    def is_error(self) -> bool:
        return not self.ok and self.severity == "error"

    @property
    def is_warning(self) -> bool:
        return self.severity == "warn"

    @classmethod
    def passed(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=True, severity="info", message=message, details=details or {})

    @classmethod
    def warning(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=True, severity="warn", message=message, details=details or {})

    @classmethod
    def failed(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=False, severity="error", message=message, details=details or {})


class VerificationResult(BaseModel):
    """
    Aggregated audit of one artifact.

    `ok` is the conjunction of the individual checks; build it with
    `from_checks` rather than setting it by hand.
    """

    model_config = ConfigDict(extra="forbid")

    ok: bool = Field(..., description="True when no check failed at error level")
    checks: list[CheckResult] = Field(
        default_factory=list,
        description="Checks in the order they ran",
    )

    @property
    def has_warnings(self) -> bool:
        return any(check.is_warning for check in self.checks)

    @property
    def error_count(self) -> int:
        return sum(1 for check in self.checks if check.is_error)

    @property
    def passed_count(self) -> int:
        return sum(1 for check in self.checks if check.ok)

    def get_check(self, check_id: str) -> CheckResult | None:
        """Look up a check by id, or None if it did not run."""
        return next((check for check in self.checks if check.check_id == check_id), None)

    def get_error_messages(self) -> list[str]:
        return [check.message for check in self.checks if check.is_error]

    def get_warning_messages(self) -> list[str]:
        return [check.message for check in self.checks if check.is_warning]

    @classmethod
    def from_checks(cls, checks: list[CheckResult]) -> "VerificationResult":
        return cls(ok=all(check.ok for check in checks), checks=checks)
