"""
Module: questions

Purpose:
    Provides the Question dataclass and its type-specific payloads. The
    payload is a tagged union keyed by the question type: an MCQ carries
    only McqPayload, a paragraph question only ParagraphPayload, a match
    question only MatchPayload, and every other type carries nothing.

Key Classes:
    - Question: One question in the paper
    - McqPayload: Four options and the correct-answer label
    - ParagraphPayload: Paragraph text and its sub-questions
    - MatchPayload: Left/right match pairs
    - SubQuestion: Question under a paragraph
    - MatchPair: One left/right pair

Key Functions:
    - new_id(prefix): Fresh unique id for questions, sub-questions, pairs
    - Question.blank(question_type, marks): Empty question for a type

Used By:
    - bank.builder.QuestionBank: Creation and edits (via dataclasses.replace)
    - render: Document and preview rendering
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional, Union

from .images import ImageRef
from .question_types import PayloadKind, QuestionType

OPTION_LABELS = ("A", "B", "C", "D")


def new_id(prefix: str) -> str:
    """Create a unique id like 'short-answer-3f9c1a2b7d4e'."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


# ─────────────────────────────────────────────────────────────────────────────
# Children
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SubQuestion:
    """
    Question asked about a paragraph (immutable).

    Attributes:
        id: Unique within the parent question
        text: Sub-question text
        marks: Marks for this sub-question, starts at 0
        image: Optional image reference
    """

    id: str
    text: str = ""
    marks: float = 0
    image: Optional[ImageRef] = None

    def __post_init__(self) -> None:
        if self.marks < 0:
            raise ValueError(f"Sub-question marks cannot be negative: {self.marks}")


@dataclass(frozen=True)
class MatchPair:
    """One row of a match-the-following question (immutable)."""

    id: str
    left: str = ""
    right: str = ""


# ─────────────────────────────────────────────────────────────────────────────
# Payloads
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class McqPayload:
    """
    Multiple-choice body.

    Attributes:
        options: Exactly four option texts, labeled A-D in order
        correct_answer: One of "A".."D", or None while unset

    Example:
        >>> McqPayload(("2", "3", "4", "5"), "C").is_complete
        True
    """

    options: tuple[str, str, str, str] = ("", "", "", "")
    correct_answer: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.options, tuple):
            object.__setattr__(self, "options", tuple(self.options))
        if len(self.options) != len(OPTION_LABELS):
            raise ValueError(f"MCQ needs exactly 4 options, got {len(self.options)}")
        if self.correct_answer == "":
            object.__setattr__(self, "correct_answer", None)
        if self.correct_answer is not None and self.correct_answer not in OPTION_LABELS:
            raise ValueError(f"Invalid correct answer: {self.correct_answer!r}")

    @property
    def kind(self) -> PayloadKind:
        return PayloadKind.MCQ

    @property
    def is_complete(self) -> bool:
        """All four options filled in and an answer selected."""
        return all(option.strip() for option in self.options) and self.correct_answer is not None


@dataclass(frozen=True)
class ParagraphPayload:
    """Paragraph text followed by sub-questions about it."""

    paragraph: str = ""
    sub_questions: tuple[SubQuestion, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.sub_questions, tuple):
            object.__setattr__(self, "sub_questions", tuple(self.sub_questions))

    @property
    def kind(self) -> PayloadKind:
        return PayloadKind.PARAGRAPH

    @property
    def sub_question_marks(self) -> float:
        """Running total of sub-question marks."""
        return sum(sq.marks for sq in self.sub_questions)


@dataclass(frozen=True)
class MatchPayload:
    """Match-the-following pairs, any number of them."""

    pairs: tuple[MatchPair, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.pairs, tuple):
            object.__setattr__(self, "pairs", tuple(self.pairs))

    @property
    def kind(self) -> PayloadKind:
        return PayloadKind.MATCH


Payload = Union[McqPayload, ParagraphPayload, MatchPayload]

_EMPTY_PAYLOADS = {
    PayloadKind.MCQ: McqPayload,
    PayloadKind.PARAGRAPH: ParagraphPayload,
    PayloadKind.MATCH: MatchPayload,
}


# ─────────────────────────────────────────────────────────────────────────────
# Question
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Question:
    """
    One question of the paper (immutable).

    Attributes:
        id: Unique identifier like "mcq-3f9c1a2b7d4e"
        question_type: Type tag, decides which payload is allowed
        text: Question text
        marks: Marks value, initialized from the allocation then freely edited
        image: Optional image reference
        payload: Type-specific body, or None for plain types

    Invariants:
        - payload kind matches question_type.payload_kind
        - marks >= 0

    Example:
        >>> q = Question.blank(QuestionType.MCQ, marks=2.0)
        >>> q.payload.options
        ('', '', '', '')
    """

    id: str
    question_type: QuestionType
    text: str = ""
    marks: float = 0
    image: Optional[ImageRef] = None
    payload: Optional[Payload] = None

    def __post_init__(self) -> None:
        if self.marks < 0:
            raise ValueError(f"Question marks cannot be negative: {self.marks}")

        expected = self.question_type.payload_kind
        if expected is PayloadKind.NONE:
            if self.payload is not None:
                raise ValueError(
                    f"{self.question_type.label!r} questions carry no payload, "
                    f"got {type(self.payload).__name__}"
                )
        elif self.payload is None or self.payload.kind is not expected:
            raise ValueError(
                f"{self.question_type.label!r} questions need a "
                f"{_EMPTY_PAYLOADS[expected].__name__}, got {type(self.payload).__name__}"
            )

    @classmethod
    def blank(
        cls,
        question_type: QuestionType,
        marks: float,
        question_id: Optional[str] = None,
    ) -> Question:
        """
        Create an empty question with the type-appropriate empty payload.

        MCQ gets four blank options and no answer, paragraph questions an
        empty paragraph with no sub-questions, match questions no pairs.
        """
        kind = question_type.payload_kind
        payload = None if kind is PayloadKind.NONE else _EMPTY_PAYLOADS[kind]()
        return cls(
            id=question_id or new_id(question_type.slug),
            question_type=question_type,
            marks=marks,
            payload=payload,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Typed payload access
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def mcq(self) -> McqPayload:
        return self._payload_as(McqPayload)

    @property
    def paragraph(self) -> ParagraphPayload:
        return self._payload_as(ParagraphPayload)

    @property
    def match(self) -> MatchPayload:
        return self._payload_as(MatchPayload)

    def _payload_as(self, payload_cls: type) -> Payload:
        if not isinstance(self.payload, payload_cls):
            raise TypeError(
                f"Question {self.id} ({self.question_type.label}) has no {payload_cls.__name__}"
            )
        return self.payload

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())

    def __repr__(self) -> str:
        return f"Question({self.id!r}, {self.question_type.label!r}, marks={self.marks})"
