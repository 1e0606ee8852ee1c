"""
Exam Builder Core Package

Shared data models and validation errors. These models are the single
source of truth passed between the setup, question bank and render
stages.
"""

from .models import (
    ExamSetup,
    ImagePosition,
    ImageRef,
    ImageSize,
    MatchPair,
    Question,
    QuestionType,
    QuestionTypeAllocation,
    SubQuestion,
)
from .errors import (
    AllocationError,
    AllocationMismatchError,
    ExamValidationError,
    IncompleteMcqError,
    InvalidCountError,
    MissingFieldError,
    SessionError,
)

__all__ = [
    "ExamSetup",
    "ImagePosition",
    "ImageRef",
    "ImageSize",
    "MatchPair",
    "Question",
    "QuestionType",
    "QuestionTypeAllocation",
    "SubQuestion",
    "AllocationError",
    "AllocationMismatchError",
    "ExamValidationError",
    "IncompleteMcqError",
    "InvalidCountError",
    "MissingFieldError",
    "SessionError",
]
