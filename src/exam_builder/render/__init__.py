"""
Module: render

Purpose:
    Stage 3: turn a finalized setup and question list into a numbered,
    sectioned paper. One pure content function (render_document) feeds
    both export encodings; render_preview shares the same section plan
    for the on-screen preview.

Key Functions:
    - plan_sections(): Section order, skip-if-empty, global numbering
    - render_document(): Exported HTML markup
    - render_preview(): On-screen preview markup
    - build_exports(): HTML and DOC downloads

Dependencies:
    - PIL: Embedding local images (render.images)
"""

from .numbering import (
    NumberedQuestion,
    PlannedSection,
    format_marks,
    plan_sections,
    sub_question_label,
)
from .document import render_document
from .preview import render_preview
from .export import (
    ExportedDocument,
    build_exports,
    export_doc,
    export_filename,
    export_html,
)

__all__ = [
    "NumberedQuestion",
    "PlannedSection",
    "format_marks",
    "plan_sections",
    "sub_question_label",
    "render_document",
    "render_preview",
    "ExportedDocument",
    "build_exports",
    "export_doc",
    "export_filename",
    "export_html",
]
