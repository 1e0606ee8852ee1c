"""
Unit Tests for QuestionType

Tests for labels, fixed section letters and payload kinds.
"""

import pytest

from exam_builder.core.models import PayloadKind, QuestionType


class TestQuestionType:
    """Tests for the QuestionType enum."""

    def test_labels_when_listed_then_match_display_names_in_table_order(self):
        """Declaration order is the fixed table order."""
        assert [t.label for t in QuestionType] == [
            "Objective (MCQ)",
            "Short Answer",
            "Long Answer",
            "Fill in the Blanks",
            "True/False",
            "Match the Following",
            "Paragraph-based Questions",
        ]

    def test_section_letter_when_any_type_then_fixed_by_table_position(self):
        assert QuestionType.MCQ.section_letter == "A"
        assert QuestionType.TRUE_FALSE.section_letter == "E"
        assert QuestionType.PARAGRAPH.section_letter == "G"

    @pytest.mark.parametrize("question_type,heading", [
        (QuestionType.MCQ, "Section A: Objective Questions (Multiple Choice)"),
        (QuestionType.SHORT_ANSWER, "Section B: Short Answer Questions"),
        (QuestionType.LONG_ANSWER, "Section C: Long Answer Questions"),
        (QuestionType.FILL_IN_THE_BLANKS, "Section D: Fill in the Blanks"),
        (QuestionType.TRUE_FALSE, "Section E: True/False Questions"),
        (QuestionType.MATCH_THE_FOLLOWING, "Section F: Match the Following"),
        (QuestionType.PARAGRAPH, "Section G: Paragraph-based Questions"),
    ])
    def test_section_heading_when_type_then_returns_fixed_heading(self, question_type, heading):
        assert question_type.section_heading == heading

    def test_payload_kind_when_plain_type_then_none(self):
        assert QuestionType.SHORT_ANSWER.payload_kind is PayloadKind.NONE
        assert QuestionType.MCQ.payload_kind is PayloadKind.MCQ
        assert QuestionType.PARAGRAPH.payload_kind is PayloadKind.PARAGRAPH
        assert QuestionType.MATCH_THE_FOLLOWING.payload_kind is PayloadKind.MATCH

    def test_from_label_when_known_then_returns_member(self):
        assert QuestionType.from_label("True/False") is QuestionType.TRUE_FALSE

    def test_from_label_when_unknown_then_raises_error(self):
        with pytest.raises(ValueError, match="Unknown question type"):
            QuestionType.from_label("Essay")

    def test_slug_when_multiword_then_hyphenated(self):
        assert QuestionType.FILL_IN_THE_BLANKS.slug == "fill-in-the-blanks"
