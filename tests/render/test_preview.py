"""
Unit Tests for render_preview()
"""

import dataclasses

from exam_builder.core.models import (
    ExamSetup,
    McqPayload,
    ParagraphPayload,
    Question,
    QuestionType,
    QuestionTypeAllocation,
    SubQuestion,
)
from exam_builder.render import render_preview
from exam_builder.render.document import PARAGRAPH_INSTRUCTION


def _paper():
    setup = ExamSetup("ABC School", "Science", "8", 12, (
        QuestionTypeAllocation(QuestionType.MCQ, 2, 1),
        QuestionTypeAllocation(QuestionType.PARAGRAPH, 10, 1),
    ))
    mcq = dataclasses.replace(
        Question.blank(QuestionType.MCQ, 2), text="Pick one",
        payload=McqPayload(("Red", "Green", "Blue", "Pink"), "C"),
    )
    para = dataclasses.replace(
        Question.blank(QuestionType.PARAGRAPH, 10), text="Passage",
        payload=ParagraphPayload("Plants need light.", (SubQuestion("s1", "What do plants need?", 10),)),
    )
    return setup, [mcq, para]


class TestRenderPreview:
    """Tests for the on-screen preview markup."""

    def test_preview_when_paper_then_header_sections_and_footer(self):
        html = render_preview(*_paper())
        assert "ABC School" in html
        assert "Examination - 2025" in html
        assert "Section A: Objective Questions (Multiple Choice)" in html
        assert "Section G: Paragraph-based Questions" in html
        assert "*** End of Question Paper ***" in html

    def test_preview_when_paper_then_same_numbering_as_document(self):
        html = render_preview(*_paper())
        assert "<b>1.</b> Pick one" in html
        assert "<b>2.</b> Passage" in html

    def test_preview_when_mcq_then_options_on_separate_lines(self):
        html = render_preview(*_paper())
        assert "A) Red<br />B) Green<br />C) Blue<br />D) Pink" in html

    def test_preview_when_paragraph_then_instruction_and_sub_question(self):
        html = render_preview(*_paper())
        assert PARAGRAPH_INSTRUCTION in html
        assert "(a) What do plants need?" in html
        assert "[10.0 marks]" in html
