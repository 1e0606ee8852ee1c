"""
Module: render.numbering

Purpose:
    Turn a setup plus a finalized question list into the ordered, numbered
    structure every render path prints. Section order follows the setup's
    allocations, empty sections are dropped, and question numbers run
    1..N across the whole paper without resetting per section.

Key Functions:
    - plan_sections(): Numbered sections for a paper
    - format_marks(): "[2.0 marks]" / "[1.0 mark]" annotation
    - option_label(), sub_question_label(): "A".."D" and "(a)", "(b)", ...

Key Classes:
    - NumberedQuestion: A question with its printed number
    - PlannedSection: Heading, total marks and numbered questions

Used By:
    - render.document: Exported markup
    - render.preview: Live preview markup
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence

from exam_builder.core.models import OPTION_LABELS, ExamSetup, Question, QuestionType


@dataclass(frozen=True)
class NumberedQuestion:
    number: int
    question: Question


@dataclass(frozen=True)
class PlannedSection:
    """
    One printed section (immutable).

    Attributes:
        question_type: Section type
        heading: Fixed heading like "Section C: Long Answer Questions"
        total_marks: Marks allocated to the section at setup
        questions: Numbered questions in list order
    """

    question_type: QuestionType
    heading: str
    total_marks: float
    questions: tuple[NumberedQuestion, ...]


def plan_sections(setup: ExamSetup, questions: Sequence[Question]) -> tuple[PlannedSection, ...]:
    """
    Group questions into numbered sections.

    Sections are visited in setup.question_types order; a section with no
    questions is skipped entirely and consumes no numbers. Questions of
    types not allocated in the setup are not printed.

    Example:
        >>> # MCQ: 2 questions, Short Answer: 0, Long Answer: 3
        >>> [[nq.number for nq in s.questions] for s in plan_sections(setup, qs)]
        [[1, 2], [3, 4, 5]]
    """
    sections: List[PlannedSection] = []
    number = 1
    for allocation in setup.question_types:
        members = [q for q in questions if q.question_type is allocation.question_type]
        if not members:
            continue
        numbered = []
        for question in members:
            numbered.append(NumberedQuestion(number, question))
            number += 1
        sections.append(
            PlannedSection(
                question_type=allocation.question_type,
                heading=allocation.question_type.section_heading,
                total_marks=allocation.marks,
                questions=tuple(numbered),
            )
        )
    return tuple(sections)


# ─────────────────────────────────────────────────────────────────────────────
# Labels
# ─────────────────────────────────────────────────────────────────────────────

def format_marks(marks: float) -> str:
    """
    Marks annotation with one decimal place, singular only for exactly 1.

    Half-way values round up (0.25 -> "0.3"), matching how browsers
    format the same numbers.

    Example:
        >>> format_marks(1), format_marks(1.5), format_marks(2)
        ('[1.0 mark]', '[1.5 marks]', '[2.0 marks]')
    """
    value = Decimal(marks).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    unit = "mark" if marks == 1 else "marks"
    return f"[{value} {unit}]"


def format_total(marks: float) -> str:
    """Section total as entered: 20 rather than 20.0."""
    if float(marks).is_integer():
        return str(int(marks))
    return f"{marks:g}"


def option_label(index: int) -> str:
    return OPTION_LABELS[index]


def sub_question_label(index: int) -> str:
    """Zero-based index to "(a)", "(b)", ..."""
    return f"({chr(ord('a') + index)})"
