"""ValidationIssue and ValidationReport — the validator's output contract.

Python attributes are snake_case; serialization with ``by_alias=True``
produces the camelCase keys consumers pattern-match on
(``typeErrors``, ``valueErrors``, ``summary.totalErrors`` ...).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from recordcheck.domain.types import ErrorCategory

# Issue codes
CODE_MISSING = "missing"
CODE_WRONG_TYPE = "wrong_type"
CODE_FORMAT = "format"
CODE_PATTERN = "pattern"
CODE_MIN_LENGTH = "min_length"
CODE_MINIMUM = "minimum"
CODE_MISMATCH = "mismatch"
CODE_PATTERN_MISMATCH = "pattern_mismatch"

_CAMEL = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ValidationIssue(BaseModel):
    """Structured record behind one report line."""

    model_config = _CAMEL

    path: str
    category: ErrorCategory
    code: str
    message: str
    expected: Any = None
    actual: Any = None


class ReportSummary(BaseModel):
    model_config = _CAMEL

    total_errors: int = 0
    type_error_count: int = 0
    value_error_count: int = 0


class ValidationReport(BaseModel):
    """Categorized result of comparing an actual record to an expected one.

    Attributes:
        valid: True iff there are no type errors and no value errors.
        errors: ``type_errors`` followed by ``value_errors``.
        type_errors: One line per presence, type, or format violation.
        value_errors: One line per value mismatch.
        summary: Counts per category.
        issues: Structured issues in the same order as ``errors``.
    """

    model_config = _CAMEL

    valid: bool = True
    errors: list[str] = Field(default_factory=list)
    type_errors: list[str] = Field(default_factory=list)
    value_errors: list[str] = Field(default_factory=list)
    summary: ReportSummary = Field(default_factory=ReportSummary)
    issues: list[ValidationIssue] = Field(default_factory=list)

    @classmethod
    def from_issues(cls, issues: Sequence[ValidationIssue]) -> ValidationReport:
        """Aggregate issues into a report, type errors first.

        Declaration order is preserved within each category.
        """
        type_issues = [i for i in issues if i.category is ErrorCategory.TYPE]
        value_issues = [i for i in issues if i.category is ErrorCategory.VALUE]
        type_errors = [i.message for i in type_issues]
        value_errors = [i.message for i in value_issues]
        return cls(
            valid=not type_errors and not value_errors,
            errors=type_errors + value_errors,
            type_errors=type_errors,
            value_errors=value_errors,
            summary=ReportSummary(
                total_errors=len(type_errors) + len(value_errors),
                type_error_count=len(type_errors),
                value_error_count=len(value_errors),
            ),
            issues=type_issues + value_issues,
        )

    def for_path(self, path: str) -> list[ValidationIssue]:
        """Issues recorded for exactly *path*."""
        return [i for i in self.issues if i.path == path]

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the camelCase contract keys."""
        return self.model_dump(mode="json", by_alias=True)
