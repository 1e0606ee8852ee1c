"""
Unit Tests for render_document()

Checks the exported paper's structure: header, instructions, sections,
numbering, per-type blocks and footer.
"""

import dataclasses

import pytest

from exam_builder.config import RenderConfig
from exam_builder.core.models import (
    ExamSetup,
    ImageRef,
    MatchPair,
    MatchPayload,
    McqPayload,
    ParagraphPayload,
    Question,
    QuestionType,
    QuestionTypeAllocation,
    SubQuestion,
)
from exam_builder.render import render_document
from exam_builder.render.document import PARAGRAPH_INSTRUCTION


def _question(question_type, text, marks, **kwargs):
    return dataclasses.replace(Question.blank(question_type, marks), text=text, **kwargs)


@pytest.fixture
def paper():
    setup = ExamSetup("ABC School", "Mathematics", "10th Grade", 30, (
        QuestionTypeAllocation(QuestionType.MCQ, 4, 2),
        QuestionTypeAllocation(QuestionType.SHORT_ANSWER, 6, 1),
        QuestionTypeAllocation(QuestionType.PARAGRAPH, 20, 1),
    ))
    questions = [
        _question(QuestionType.MCQ, "2 + 2 = ?", 2, payload=McqPayload(("3", "4", "5", "6"), "B")),
        _question(QuestionType.MCQ, "Capital of France?", 2,
                  payload=McqPayload(("Paris", "Rome", "Oslo", "Bern"), "A")),
        _question(QuestionType.SHORT_ANSWER, "Define a prime number.", 6),
        _question(QuestionType.PARAGRAPH, "Read the passage.", 20, payload=ParagraphPayload(
            "The river flows east.",
            (SubQuestion("s1", "Which way does it flow?", 10), SubQuestion("s2", "Why?", 1)),
        )),
    ]
    return setup, questions


class TestRenderDocument:
    """Tests for render_document()."""

    # ─────────────────────────────────────────────────────────────────────────
    # Header / footer
    # ─────────────────────────────────────────────────────────────────────────

    def test_render_when_paper_then_is_complete_html_document(self, paper):
        html = render_document(*paper)
        assert html.startswith("<!DOCTYPE html>")
        assert '<meta charset="UTF-8">' in html
        assert "<title>Mathematics - 10th Grade Examination</title>" in html
        assert html.rstrip().endswith("</html>")

    def test_render_when_paper_then_header_has_school_caption_and_meta(self, paper):
        html = render_document(*paper)
        assert "ABC School</h1>" in html
        assert "Examination - 2025" in html
        assert "Subject:" in html and "Class:" in html and "Total Marks:" in html
        assert ">30</span>" in html

    def test_render_when_paper_then_instructions_and_footer_present(self, paper):
        html = render_document(*paper)
        assert "General Instructions:" in html
        assert "<li>All questions are compulsory.</li>" in html
        assert "*** End of Question Paper ***" in html

    def test_render_when_custom_caption_then_used(self, paper):
        html = render_document(*paper, RenderConfig(academic_year_caption="Examination - 2026"))
        assert "Examination - 2026" in html
        assert "Examination - 2025" not in html

    # ─────────────────────────────────────────────────────────────────────────
    # Sections and numbering
    # ─────────────────────────────────────────────────────────────────────────

    def test_render_when_sections_then_headings_in_allocation_order(self, paper):
        html = render_document(*paper)
        a = html.index("Section A: Objective Questions (Multiple Choice)")
        b = html.index("Section B: Short Answer Questions")
        g = html.index("Section G: Paragraph-based Questions")
        assert a < b < g
        assert "(Total Marks: 4)" in html
        assert "(Total Marks: 20)" in html

    def test_render_when_section_empty_then_heading_omitted(self, paper):
        setup, questions = paper
        html = render_document(setup, [q for q in questions if q.question_type is not QuestionType.SHORT_ANSWER])
        assert "Section B" not in html
        assert '<span style="font-weight: 500;">3.</span>' in html
        assert '<span style="font-weight: 500;">4.</span>' not in html

    def test_render_when_paper_then_questions_numbered_globally(self, paper):
        html = render_document(*paper)
        for n in (1, 2, 3, 4):
            assert f'<span style="font-weight: 500;">{n}.</span>' in html

    # ─────────────────────────────────────────────────────────────────────────
    # Per-type blocks
    # ─────────────────────────────────────────────────────────────────────────

    def test_render_when_mcq_then_options_labeled_and_answer_hidden(self, paper):
        html = render_document(*paper)
        assert "A) 3</div>" in html
        assert "B) 4</div>" in html
        assert "D) Bern</div>" in html
        assert "Correct" not in html

    def test_render_when_marks_then_annotated_with_one_decimal(self, paper):
        html = render_document(*paper)
        assert "[2.0 marks]" in html
        assert "[6.0 marks]" in html
        assert "[1.0 mark]" in html

    def test_render_when_short_answer_then_answer_line_follows(self, paper):
        html = render_document(*paper)
        start = html.index("Define a prime number.")
        assert "Answer:" in html[start:html.index("Section G")]

    def test_render_when_paragraph_then_block_instruction_and_sub_questions(self, paper):
        html = render_document(*paper)
        assert "The river flows east." in html
        assert PARAGRAPH_INSTRUCTION in html
        assert "(a) Which way does it flow?" in html
        assert "(b) Why?" in html
        assert html.index("The river flows east.") < html.index(PARAGRAPH_INSTRUCTION)

    def test_render_when_paragraph_empty_and_no_subs_then_no_instruction(self):
        setup = ExamSetup("S", "M", "1", 5, (QuestionTypeAllocation(QuestionType.PARAGRAPH, 5, 1),))
        question = _question(QuestionType.PARAGRAPH, "Read.", 5)
        html = render_document(setup, [question])
        assert PARAGRAPH_INSTRUCTION not in html

    def test_render_when_match_then_pairs_hidden_by_default(self):
        setup = ExamSetup("S", "M", "1", 4, (QuestionTypeAllocation(QuestionType.MATCH_THE_FOLLOWING, 4, 1),))
        question = _question(QuestionType.MATCH_THE_FOLLOWING, "Match:", 4,
                             payload=MatchPayload((MatchPair("p1", "H2O", "Water"),)))
        assert "Water" not in render_document(setup, [question])
        html = render_document(setup, [question], RenderConfig(render_match_pairs=True))
        assert "1. H2O" in html
        assert "(a) Water" in html

    def test_render_when_text_has_markup_then_escaped(self):
        setup = ExamSetup("A & B <School>", "M", "1", 1, (QuestionTypeAllocation(QuestionType.TRUE_FALSE, 1, 1),))
        html = render_document(setup, [_question(QuestionType.TRUE_FALSE, "Is 1 < 2?", 1)])
        assert "A &amp; B &lt;School&gt;" in html
        assert "Is 1 &lt; 2?" in html

    def test_render_when_remote_image_then_src_and_tier_width(self, paper):
        setup, questions = paper
        questions[2] = dataclasses.replace(
            questions[2], image=ImageRef("https://example.com/graph.png", "small", "center")
        )
        html = render_document(setup, questions)
        assert 'src="https://example.com/graph.png"' in html
        assert "max-width: 200px" in html
        assert "text-align: center" in html
