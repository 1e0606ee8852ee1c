"""
Module: allocation

Purpose:
    Provides QuestionTypeAllocation (how many marks and questions one
    question type gets) and ExamSetup (exam metadata plus the ordered
    allocations). Both are frozen; edits create new instances.

Key Classes:
    - QuestionTypeAllocation: (type, marks, count) triple
    - ExamSetup: Finalized output of the setup stage

Used By:
    - setup.resolver.SetupResolver: Builds drafts and the final ExamSetup
    - bank.builder.QuestionBank: Materializes questions per allocation
    - render.numbering: Section order and section totals
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .question_types import QuestionType


@dataclass(frozen=True)
class QuestionTypeAllocation:
    """
    Marks and question count allocated to one question type (immutable).

    Drafts held by the setup resolver may have zero marks or zero count;
    the finalized ExamSetup requires count >= 1.

    Attributes:
        question_type: Which of the seven question types
        marks: Total marks for the section (non-negative)
        count: Number of questions (non-negative)

    Example:
        >>> a = QuestionTypeAllocation(QuestionType.SHORT_ANSWER, 20, 4)
        >>> a.marks_per_question
        5.0
    """

    question_type: QuestionType
    marks: float = 0
    count: int = 0

    def __post_init__(self) -> None:
        if self.marks < 0:
            raise ValueError(f"Allocation marks cannot be negative: {self.marks}")
        if self.count < 0:
            raise ValueError(f"Allocation count cannot be negative: {self.count}")

    @property
    def marks_per_question(self) -> Optional[float]:
        """
        Default marks for each materialized question (marks / count).

        Not rounded: 10 marks over 3 questions is 3.333...

        Returns:
            marks / count, or None while count is 0
        """
        if self.count == 0:
            return None
        return self.marks / self.count

    def __repr__(self) -> str:
        return (
            f"QuestionTypeAllocation({self.question_type.label!r}, "
            f"marks={self.marks}, count={self.count})"
        )


@dataclass(frozen=True)
class ExamSetup:
    """
    Exam metadata and section layout (immutable).

    Produced by SetupResolver.submit() once the allocation checks pass,
    so the marks-sum invariant is enforced there and reported to the
    user as a validation error; here only structural rules are checked.

    Attributes:
        school_name: Printed as the paper title
        subject: Subject name
        class_name: Class / grade name
        total_marks: Declared total for the paper
        question_types: Allocations in section order

    Invariants:
        - total_marks > 0
        - each question type appears at most once
        - every allocation count >= 1
    """

    school_name: str
    subject: str
    class_name: str
    total_marks: int
    question_types: tuple[QuestionTypeAllocation, ...] = ()

    def __post_init__(self) -> None:
        if self.total_marks <= 0:
            raise ValueError(f"total_marks must be positive: {self.total_marks}")
        if not isinstance(self.question_types, tuple):
            object.__setattr__(self, "question_types", tuple(self.question_types))

        seen = set()
        for allocation in self.question_types:
            if allocation.question_type in seen:
                raise ValueError(
                    f"Duplicate allocation for {allocation.question_type.label!r}"
                )
            seen.add(allocation.question_type)
            if allocation.count < 1:
                raise ValueError(
                    f"Allocation for {allocation.question_type.label!r} needs at least 1 question"
                )

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def allocated_marks(self) -> float:
        return sum(a.marks for a in self.question_types)

    @property
    def types(self) -> tuple[QuestionType, ...]:
        return tuple(a.question_type for a in self.question_types)

    def allocation_for(self, question_type: QuestionType) -> Optional[QuestionTypeAllocation]:
        """Find the allocation for a question type, or None if not allocated."""
        for allocation in self.question_types:
            if allocation.question_type is question_type:
                return allocation
        return None

    def __repr__(self) -> str:
        return (
            f"ExamSetup({self.school_name!r}, {self.subject!r}, {self.class_name!r}, "
            f"total={self.total_marks}, sections={len(self.question_types)})"
        )
