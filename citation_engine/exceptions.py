"""Citation engine exceptions and diagnostics."""

from typing import List, Optional
from dataclasses import dataclass


@dataclass
class LintIssue:
    """Single advisory diagnostic produced by the static analyzer."""
    message: str
    severity: str = "error"
    index: Optional[int] = None


@dataclass
class ValidationError:
    """Single style suite validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class MalformedTemplateError(Exception):
    """Raised when the evaluator cannot make sense of a template's group structure.

    The message is a single line suitable for display; the offending text is
    kept on the exception for callers that want to point at it.
    """

    def __init__(self, message: str, text: str = ""):
        self.text = text
        super().__init__(message)


class SuiteValidationError(Exception):
    """Raised when a style suite fails validation.

    All problems found while loading are collected first so the CLI can report
    every one of them and map the failure to its exit code.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Validation error at {error.path}: {error.message}")
            else:
                messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))
