"""Input validation errors shared by every calculator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ValidationIssue:
    """A single problem with one input field."""

    field: str
    message: str


class InvalidInputError(ValueError):
    """Raised when a calculator receives structurally invalid input.

    ``field`` and ``message`` describe the first problem found; ``issues``
    holds every problem so callers can annotate a whole form at once.
    """

    def __init__(
        self,
        field: str,
        message: str,
        issues: Optional[list[ValidationIssue]] = None,
    ):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.issues = issues or [ValidationIssue(field=field, message=message)]

    @classmethod
    def from_issues(cls, issues: list[ValidationIssue]) -> InvalidInputError:
        first = issues[0]
        return cls(field=first.field, message=first.message, issues=list(issues))


def raise_for_issues(issues: list[ValidationIssue]) -> None:
    """Raise InvalidInputError if any validation issues were collected."""
    if issues:
        raise InvalidInputError.from_issues(issues)
