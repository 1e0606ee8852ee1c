"""
Module: render.preview

Purpose:
    Render the live on-screen preview shown (and printed) by the preview
    page. Uses the same section plan and global numbering as the exported
    document, with simpler markup that Qt's rich-text engine supports
    (tables instead of grid/flex layout, no CSS classes).

Key Functions:
    - render_preview(): (ExamSetup, questions) -> HTML fragment for QTextBrowser

Used By:
    - gui.widgets.preview_page.PreviewPage
    - session.ExamSession.render_preview
"""

from __future__ import annotations

from html import escape
from typing import List, Optional, Sequence

from exam_builder.config import DEFAULT_RENDER_CONFIG, RenderConfig
from exam_builder.core.models import ExamSetup, ImageRef, Question, QuestionType

from .document import PARAGRAPH_INSTRUCTION
from .images import resolve_image_source
from .numbering import (
    NumberedQuestion,
    format_marks,
    format_total,
    option_label,
    plan_sections,
    sub_question_label,
)

_ANSWER_SPACE = (
    '<p style="color: #6b7280; font-style: italic; margin-top: 8px;">Answer:</p>'
    '<hr style="margin-bottom: 24px;" />'
)


def render_preview(
    setup: ExamSetup,
    questions: Sequence[Question],
    config: Optional[RenderConfig] = None,
) -> str:
    """
    Render the on-screen preview.

    Args:
        setup: Finalized exam setup
        questions: Finalized questions
        config: Render options (defaults to DEFAULT_RENDER_CONFIG)

    Returns:
        HTML suitable for QTextBrowser.setHtml()
    """
    config = config or DEFAULT_RENDER_CONFIG
    html: List[str] = [
        '<html><body style="font-family: Arial, sans-serif;">',
        f'<h1 align="center">{escape(setup.school_name)}</h1>',
        f'<p align="center">{escape(config.academic_year_caption)}</p>',
        '<table width="100%" cellpadding="6"><tr>',
        f"<td><b>Subject:</b> {escape(setup.subject)}</td>",
        f"<td><b>Class:</b> {escape(setup.class_name)}</td>",
        f"<td><b>Total Marks:</b> {setup.total_marks}</td>",
        "</tr></table>",
        "<hr />",
        "<p><b>General Instructions:</b></p>",
        "<ul>",
    ]
    html.extend(f"<li>{escape(line)}</li>" for line in config.instructions)
    html.append("</ul>")

    for section in plan_sections(setup, questions):
        html.append("<hr />")
        html.append(f"<h3>{escape(section.heading)}</h3>")
        html.append(f'<p style="color: #4b5563;">(Total Marks: {format_total(section.total_marks)})</p>')
        for numbered in section.questions:
            html.append(_preview_question(numbered, config))

    html.append("<hr />")
    html.append(f'<p align="center" style="color: #6b7280;">{escape(config.footer_text)}</p>')
    html.append("</body></html>")
    return "".join(html)


def _preview_question(numbered: NumberedQuestion, config: RenderConfig) -> str:
    question = numbered.question
    html = [
        f"<p><b>{numbered.number}.</b> {escape(question.text)} "
        f'<span style="color: #666;">{format_marks(question.marks)}</span></p>'
    ]
    if question.image is not None:
        html.append(_preview_image(question.image, config))

    qtype = question.question_type
    if qtype is QuestionType.MCQ:
        html.append('<p style="margin-left: 24px;">')
        html.append("<br />".join(
            f"{option_label(i)}) {escape(option)}" for i, option in enumerate(question.mcq.options)
        ))
        html.append("</p>")
    elif qtype is QuestionType.PARAGRAPH:
        payload = question.paragraph
        if payload.paragraph.strip():
            html.append(
                '<table width="100%" cellpadding="10" style="background-color: #f9fafb;">'
                f"<tr><td><i>{escape(payload.paragraph)}</i></td></tr></table>"
            )
        if payload.paragraph.strip() or payload.sub_questions:
            html.append(f"<p><b>{PARAGRAPH_INSTRUCTION}</b></p>")
        for index, sub in enumerate(payload.sub_questions):
            html.append(
                f'<p style="margin-left: 24px;">{sub_question_label(index)} {escape(sub.text)} '
                f'<span style="color: #666;">{format_marks(sub.marks)}</span></p>'
            )
            if sub.image is not None:
                html.append(_preview_image(sub.image, config))
            html.append(_ANSWER_SPACE)
    else:
        if qtype is QuestionType.MATCH_THE_FOLLOWING and config.render_match_pairs:
            rows = "".join(
                f"<tr><td>{i + 1}. {escape(p.left)}</td><td>{sub_question_label(i)} {escape(p.right)}</td></tr>"
                for i, p in enumerate(question.match.pairs)
            )
            html.append(f'<table border="1" cellpadding="4" style="margin-left: 24px;">{rows}</table>')
        html.append(_ANSWER_SPACE)
    return "".join(html)


def _preview_image(image: ImageRef, config: RenderConfig) -> str:
    src = resolve_image_source(image, config)
    return (
        f'<p align="{image.position.value}">'
        f'<img src="{escape(src, quote=True)}" width="{config.width_for(image.size)}" />'
        "</p>"
    )
