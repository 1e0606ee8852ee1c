"""
Module: question_types

Purpose:
    The fixed set of seven question-type tags, their display labels and
    their printed section headings. Section letters come from this fixed
    table, never from which sections happen to be present in a paper.

Key Classes:
    - QuestionType: Enum of question-type tags
    - PayloadKind: Which type-specific payload a question type carries

Used By:
    - core.models.allocation.QuestionTypeAllocation
    - core.models.questions.Question
    - render.numbering: Section headings
    - gui.widgets.setup_page: Type checkboxes
"""

from __future__ import annotations

from enum import Enum


class PayloadKind(Enum):
    """Type-specific payload carried by a question."""

    NONE = "none"
    MCQ = "mcq"
    PARAGRAPH = "paragraph"
    MATCH = "match"


class QuestionType(Enum):
    """
    Question-type tag.

    The enum value is the user-facing label. Declaration order is the
    fixed table order used to assign section letters (A for MCQ, B for
    Short Answer, ... G for Paragraph-based).

    Example:
        >>> QuestionType.from_label("True/False")
        <QuestionType.TRUE_FALSE: 'True/False'>
        >>> QuestionType.SHORT_ANSWER.section_heading
        'Section B: Short Answer Questions'
    """

    MCQ = "Objective (MCQ)"
    SHORT_ANSWER = "Short Answer"
    LONG_ANSWER = "Long Answer"
    FILL_IN_THE_BLANKS = "Fill in the Blanks"
    TRUE_FALSE = "True/False"
    MATCH_THE_FOLLOWING = "Match the Following"
    PARAGRAPH = "Paragraph-based Questions"

    @property
    def label(self) -> str:
        return self.value

    @property
    def section_letter(self) -> str:
        return _SECTION_LETTERS[self]

    @property
    def section_heading(self) -> str:
        """Printed heading, e.g. 'Section A: Objective Questions (Multiple Choice)'."""
        return f"Section {self.section_letter}: {_SECTION_TITLES[self]}"

    @property
    def payload_kind(self) -> PayloadKind:
        return _PAYLOAD_KINDS.get(self, PayloadKind.NONE)

    @property
    def slug(self) -> str:
        """Short identifier used as a question id prefix."""
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_label(cls, label: str) -> QuestionType:
        """
        Look up a question type by its display label.

        Raises:
            ValueError: If the label is not one of the seven known labels
        """
        for member in cls:
            if member.value == label:
                return member
        raise ValueError(f"Unknown question type: {label!r}")


_SECTION_TITLES = {
    QuestionType.MCQ: "Objective Questions (Multiple Choice)",
    QuestionType.SHORT_ANSWER: "Short Answer Questions",
    QuestionType.LONG_ANSWER: "Long Answer Questions",
    QuestionType.FILL_IN_THE_BLANKS: "Fill in the Blanks",
    QuestionType.TRUE_FALSE: "True/False Questions",
    QuestionType.MATCH_THE_FOLLOWING: "Match the Following",
    QuestionType.PARAGRAPH: "Paragraph-based Questions",
}

_SECTION_LETTERS = {
    member: chr(ord("A") + index) for index, member in enumerate(QuestionType)
}

_PAYLOAD_KINDS = {
    QuestionType.MCQ: PayloadKind.MCQ,
    QuestionType.PARAGRAPH: PayloadKind.PARAGRAPH,
    QuestionType.MATCH_THE_FOLLOWING: PayloadKind.MATCH,
}
