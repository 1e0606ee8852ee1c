"""
Module: render.document

Purpose:
    Render a finalized paper to a standalone, styled HTML document meant
    for browser viewing and print-to-PDF. This is the single content
    source for both export encodings (see render.export).

Key Functions:
    - render_document(): (ExamSetup, questions) -> HTML string

Dependencies:
    - html (std): Escaping user-entered text
    - render.numbering: Section plan and global numbering
    - render.images: Image sources and styles

Used By:
    - render.export: HTML and DOC files
    - session.ExamSession.render_document
"""

from __future__ import annotations

import logging
from html import escape
from typing import List, Optional, Sequence

from exam_builder.config import DEFAULT_RENDER_CONFIG, RenderConfig
from exam_builder.core.models import ExamSetup, ImageRef, Question, QuestionType

from .images import image_style, resolve_image_source
from .numbering import (
    NumberedQuestion,
    PlannedSection,
    format_marks,
    format_total,
    option_label,
    plan_sections,
    sub_question_label,
)

logger = logging.getLogger(__name__)

PARAGRAPH_INSTRUCTION = "Answer the following questions based on the above paragraph:"

_PAGE_STYLE = """
    body {
      font-family: Arial, sans-serif;
      max-width: 900px;
      margin: 40px auto;
      padding: 40px;
      line-height: 1.6;
    }
    @media print {
      body {
        margin: 0;
        padding: 20px;
      }
    }
"""

_ANSWER_LINE = (
    '<div style="margin-top: 15px;">'
    '<div style="font-size: 14px; color: #6b7280; font-style: italic;">Answer:</div>'
    '<div style="border-bottom: 1px solid #d1d5db; height: 60px; margin-top: 5px;"></div>'
    "</div>"
)


def render_document(
    setup: ExamSetup,
    questions: Sequence[Question],
    config: Optional[RenderConfig] = None,
) -> str:
    """
    Render the printable paper.

    Layout: header (school name, academic-year caption, subject / class /
    total marks row), general instructions, one section per non-empty
    allocation with globally numbered questions, end-of-paper footer.

    Args:
        setup: Finalized exam setup
        questions: Finalized questions (QuestionBank.finalize())
        config: Render options (defaults to DEFAULT_RENDER_CONFIG)

    Returns:
        Complete HTML document as a string

    Example:
        >>> html = render_document(setup, bank.finalize())
        >>> "*** End of Question Paper ***" in html
        True
    """
    config = config or DEFAULT_RENDER_CONFIG
    sections = plan_sections(setup, questions)

    parts = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '<meta charset="UTF-8">',
        f"<title>{escape(setup.subject)} - {escape(setup.class_name)} Examination</title>",
        f"<style>{_PAGE_STYLE}</style>",
        "</head>",
        "<body>",
        _render_header(setup, config),
        _render_instructions(config),
    ]
    parts.extend(_render_section(section, config) for section in sections)
    parts.append(
        '<div style="margin-top: 50px; padding-top: 20px; border-top: 1px solid #d1d5db; '
        f'text-align: center; color: #6b7280; font-size: 14px;">{escape(config.footer_text)}</div>'
    )
    parts.extend(["</body>", "</html>", ""])

    question_count = sum(len(s.questions) for s in sections)
    logger.info(f"Rendered document: {len(sections)} sections, {question_count} questions")
    return "\n".join(parts)


# ─────────────────────────────────────────────────────────────────────────────
# Header / instructions
# ─────────────────────────────────────────────────────────────────────────────

def _render_header(setup: ExamSetup, config: RenderConfig) -> str:
    meta = "".join(
        "<div>"
        f'<span style="color: #4b5563;">{label}:</span>'
        f'<span style="margin-left: 10px;">{escape(value)}</span>'
        "</div>"
        for label, value in (
            ("Subject", setup.subject),
            ("Class", setup.class_name),
            ("Total Marks", str(setup.total_marks)),
        )
    )
    return (
        '<div style="text-align: center; border-bottom: 2px solid #d1d5db; '
        'padding-bottom: 20px; margin-bottom: 30px;">'
        f'<h1 style="margin-bottom: 15px;">{escape(setup.school_name)}</h1>'
        f'<div style="margin-bottom: 10px;">{escape(config.academic_year_caption)}</div>'
        '<div style="display: grid; grid-template-columns: repeat(3, 1fr); gap: 20px; '
        "margin-top: 25px; text-align: left; max-width: 700px; margin-left: auto; "
        f'margin-right: auto;">{meta}</div>'
        "</div>"
    )


def _render_instructions(config: RenderConfig) -> str:
    items = "".join(f"<li>{escape(line)}</li>" for line in config.instructions)
    return (
        '<div style="margin-bottom: 30px; padding: 15px; background-color: #f9fafb; '
        'border-radius: 8px;">'
        '<h3 style="margin-bottom: 10px;">General Instructions:</h3>'
        f'<ul style="color: #374151; font-size: 14px; line-height: 1.8;">{items}</ul>'
        "</div>"
    )


# ─────────────────────────────────────────────────────────────────────────────
# Sections / questions
# ─────────────────────────────────────────────────────────────────────────────

def _render_section(section: PlannedSection, config: RenderConfig) -> str:
    body = "".join(_render_question(nq, config) for nq in section.questions)
    return (
        '<div style="border-top: 2px solid #e5e7eb; padding-top: 20px; margin-top: 30px;">'
        f'<h3 style="margin-bottom: 15px; font-weight: 600;">{escape(section.heading)}</h3>'
        '<p style="font-size: 14px; color: #4b5563; margin-bottom: 15px;">'
        f"(Total Marks: {format_total(section.total_marks)})</p>"
        f"{body}"
        "</div>"
    )


def _render_question(numbered: NumberedQuestion, config: RenderConfig) -> str:
    question = numbered.question
    html: List[str] = [
        '<div style="margin-bottom: 20px; margin-left: 20px;">',
        '<div style="display: flex; gap: 10px;">',
        f'<span style="font-weight: 500;">{numbered.number}.</span>',
        '<div style="flex: 1;">',
        '<div style="margin-bottom: 10px;">',
        escape(question.text),
        f'<span style="margin-left: 10px; font-size: 14px; color: #666;">{format_marks(question.marks)}</span>',
        "</div>",
    ]
    if question.image is not None:
        html.append(_render_image(question.image, config, "Question image"))

    qtype = question.question_type
    if qtype is QuestionType.MCQ:
        html.append(_render_options(question))
    elif qtype is QuestionType.PARAGRAPH:
        html.append(_render_paragraph(question, config))
    else:
        if qtype is QuestionType.MATCH_THE_FOLLOWING and config.render_match_pairs:
            html.append(_render_match_pairs(question))
        html.append(_ANSWER_LINE)

    html.extend(["</div>", "</div>", "</div>"])
    return "".join(html)


def _render_options(question: Question) -> str:
    rows = "".join(
        f'<div style="margin-bottom: 5px;">{option_label(i)}) {escape(option)}</div>'
        for i, option in enumerate(question.mcq.options)
    )
    return f'<div style="margin: 10px 0 10px 20px;">{rows}</div>'


def _render_paragraph(question: Question, config: RenderConfig) -> str:
    payload = question.paragraph
    html: List[str] = []
    if payload.paragraph.strip():
        html.append(
            '<div style="margin: 15px 0; padding: 15px; background-color: #f9fafb; '
            'border-left: 3px solid #3b82f6; border-radius: 4px;">'
            '<div style="font-style: italic; color: #374151; line-height: 1.6;">'
            f"{escape(payload.paragraph)}</div></div>"
        )
    if payload.paragraph.strip() or payload.sub_questions:
        html.append(f'<div style="margin-top: 15px;"><strong>{PARAGRAPH_INSTRUCTION}</strong></div>')
    if payload.sub_questions:
        html.append('<div style="margin-left: 20px; margin-top: 10px;">')
        for index, sub in enumerate(payload.sub_questions):
            html.append('<div style="margin-bottom: 15px;">')
            html.append(
                '<div style="margin-bottom: 5px;">'
                f"{sub_question_label(index)} {escape(sub.text)}"
                f'<span style="margin-left: 10px; font-size: 14px; color: #666;">{format_marks(sub.marks)}</span>'
                "</div>"
            )
            if sub.image is not None:
                html.append(_render_image(sub.image, config, "Sub-question image"))
            html.append(_ANSWER_LINE)
            html.append("</div>")
        html.append("</div>")
    return "".join(html)


def _render_match_pairs(question: Question) -> str:
    rows = "".join(
        "<tr>"
        f'<td style="padding: 4px 12px; border: 1px solid #d1d5db;">{index + 1}. {escape(pair.left)}</td>'
        f'<td style="padding: 4px 12px; border: 1px solid #d1d5db;">{sub_question_label(index)} {escape(pair.right)}</td>'
        "</tr>"
        for index, pair in enumerate(question.match.pairs)
    )
    return f'<table style="margin: 10px 0 10px 20px; border-collapse: collapse;">{rows}</table>'


def _render_image(image: ImageRef, config: RenderConfig, alt: str) -> str:
    wrapper, img = image_style(image, config)
    src = resolve_image_source(image, config)
    return (
        f'<div style="{wrapper}">'
        f'<img src="{escape(src, quote=True)}" alt="{alt}" style="{img}" />'
        "</div>"
    )
