"""
Module: core.errors

Purpose:
    Exception hierarchy for user-input validation failures raised at
    stage transitions (setup submit, preview generation) and for invalid
    session transitions.

Key Classes:
    - ExamValidationError: Base class, carries path and individual errors
    - MissingFieldError: Required field left empty
    - AllocationMismatchError: Allocated marks differ from total marks
    - InvalidCountError: Allocation with a non-positive question count
    - IncompleteMcqError: MCQ with a blank option or no correct answer
    - SessionError: Stage transition not allowed from the current stage

Used By:
    - setup.resolver.SetupResolver.submit
    - bank.builder.QuestionBank.finalize
    - session.ExamSession
    - gui.widgets: surfaced to the user as warning dialogs
"""

from __future__ import annotations

from typing import Sequence


class ExamValidationError(Exception):
    """Raised when user input blocks advancing to the next stage."""

    def __init__(self, message: str, path: str = "", errors: Sequence[str] | None = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.errors = list(errors or [])


class MissingFieldError(ExamValidationError):
    """A required field (name, subject, class, question text...) is empty."""


class AllocationError(ExamValidationError):
    """Marks allocation is inconsistent."""


class AllocationMismatchError(AllocationError):
    """
    Allocated marks do not add up to the exam total.

    Attributes:
        allocated: Sum of allocation marks
        total: Declared exam total marks
    """

    def __init__(self, allocated: float, total: float):
        super().__init__(
            f"Total allocated marks ({_fmt(allocated)}) must equal "
            f"total marks ({_fmt(total)})",
            path="question_types",
        )
        self.allocated = allocated
        self.total = total


class InvalidCountError(AllocationError):
    """An allocation asks for zero (or fewer) questions."""


class IncompleteMcqError(ExamValidationError):
    """An MCQ has a blank option or no correct answer selected."""


class SessionError(Exception):
    """Stage transition requested from a stage that does not allow it."""


def _fmt(value: float) -> str:
    """Show whole numbers without a trailing .0 (60 rather than 60.0)."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
