"""
Module: render.export

Purpose:
    Package the rendered document as downloadable files. Both encodings
    are thin post-processing over render_document(): the HTML file is the
    markup as UTF-8, the DOC file is the same bytes behind a UTF-8
    byte-order mark so legacy word processors open it as a document.

Key Functions:
    - export_html(), export_doc(): One ExportedDocument each
    - build_exports(): Both, from a single render
    - export_filename(): "<Subject>_<ClassName>_Exam.<ext>"

Key Classes:
    - ExportedDocument: File name, media type and payload bytes

Used By:
    - session.ExamSession.exports
    - gui.widgets.preview_page: Download buttons
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from exam_builder.config import RenderConfig
from exam_builder.core.models import ExamSetup, Question

from .document import render_document

logger = logging.getLogger(__name__)

UTF8_BOM = "\ufeff".encode("utf-8")

HTML_MEDIA_TYPE = "text/html"
DOC_MEDIA_TYPE = "application/msword"

_UNSAFE_FILENAME_CHARS = re.compile(r"[\\/]")


@dataclass(frozen=True)
class ExportedDocument:
    """
    One downloadable file (immutable).

    Attributes:
        filename: Suggested file name
        media_type: MIME type declared for the download
        content: File bytes
    """

    filename: str
    media_type: str
    content: bytes

    def write_to(self, directory: Path) -> Path:
        """
        Write the file into a directory.

        Returns:
            Path of the written file

        Raises:
            OSError: If the directory cannot be created or written
        """
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.filename
        path.write_bytes(self.content)
        logger.info(f"Wrote {path} ({len(self.content)} bytes)")
        return path


def export_filename(setup: ExamSetup, extension: str) -> str:
    """
    Example:
        >>> export_filename(setup, "html")
        'Mathematics_10th Grade_Exam.html'
    """
    subject = _UNSAFE_FILENAME_CHARS.sub("-", setup.subject)
    class_name = _UNSAFE_FILENAME_CHARS.sub("-", setup.class_name)
    return f"{subject}_{class_name}_Exam.{extension}"


def html_document(setup: ExamSetup, markup: str) -> ExportedDocument:
    return ExportedDocument(
        filename=export_filename(setup, "html"),
        media_type=HTML_MEDIA_TYPE,
        content=markup.encode("utf-8"),
    )


def doc_document(setup: ExamSetup, markup: str) -> ExportedDocument:
    return ExportedDocument(
        filename=export_filename(setup, "doc"),
        media_type=DOC_MEDIA_TYPE,
        content=UTF8_BOM + markup.encode("utf-8"),
    )


def export_html(
    setup: ExamSetup,
    questions: Sequence[Question],
    config: Optional[RenderConfig] = None,
) -> ExportedDocument:
    """Standalone HTML paper, for the browser's print-to-PDF."""
    return html_document(setup, render_document(setup, questions, config))


def export_doc(
    setup: ExamSetup,
    questions: Sequence[Question],
    config: Optional[RenderConfig] = None,
) -> ExportedDocument:
    """Same markup behind a byte-order mark, saved as .doc."""
    return doc_document(setup, render_document(setup, questions, config))


def build_exports(
    setup: ExamSetup,
    questions: Sequence[Question],
    config: Optional[RenderConfig] = None,
) -> tuple[ExportedDocument, ExportedDocument]:
    """
    Render once and wrap the result in both encodings.

    Returns:
        (html_export, doc_export)
    """
    markup = render_document(setup, questions, config)
    return html_document(setup, markup), doc_document(setup, markup)
