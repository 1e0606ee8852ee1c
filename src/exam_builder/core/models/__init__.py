"""
Core Models Package

Immutable, validated data models for an exam paper. All models are
frozen dataclasses: the question bank never mutates a record in place,
it swaps in a new instance built with dataclasses.replace().
"""

from .question_types import QuestionType, PayloadKind
from .images import ImageRef, ImageSize, ImagePosition
from .allocation import QuestionTypeAllocation, ExamSetup
from .questions import (
    OPTION_LABELS,
    MatchPair,
    MatchPayload,
    McqPayload,
    ParagraphPayload,
    Question,
    SubQuestion,
    new_id,
)

__all__ = [
    "QuestionType",
    "PayloadKind",
    "ImageRef",
    "ImageSize",
    "ImagePosition",
    "QuestionTypeAllocation",
    "ExamSetup",
    "OPTION_LABELS",
    "MatchPair",
    "MatchPayload",
    "McqPayload",
    "ParagraphPayload",
    "Question",
    "SubQuestion",
    "new_id",
]
