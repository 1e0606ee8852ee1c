"""
Preview page: rendered paper plus download and print actions.
"""
import logging
from pathlib import Path

from PySide6.QtCore import Signal
from PySide6.QtPrintSupport import QPrintDialog, QPrinter
from PySide6.QtWidgets import (
    QDialog, QFileDialog, QHBoxLayout, QLabel, QMessageBox, QPushButton,
    QTextBrowser, QVBoxLayout, QWidget,
)

from exam_builder.gui.styles.theme import Styles
from exam_builder.render import ExportedDocument
from exam_builder.session import ExamSession

logger = logging.getLogger(__name__)


class PreviewPage(QWidget):
    """
    Stage 3: show the finalized paper.

    Signals:
        editRequested: Session moved back to question editing
        backRequested: Session moved back to setup
    """

    editRequested = Signal()
    backRequested = Signal()

    def __init__(self, session: ExamSession, parent=None):
        super().__init__(parent)
        self.session = session

        layout = QVBoxLayout(self)
        title = QLabel("Preview")
        title.setStyleSheet(Styles.PAGE_TITLE)
        layout.addWidget(title)

        self.browser = QTextBrowser()
        self.browser.setOpenExternalLinks(True)
        layout.addWidget(self.browser, stretch=1)

        buttons = QHBoxLayout()
        self.back_button = QPushButton("Back to Setup")
        self.edit_button = QPushButton("Edit Questions")
        self.html_button = QPushButton("Download HTML")
        self.doc_button = QPushButton("Download DOC")
        self.print_button = QPushButton("Print")
        for button in (self.back_button, self.edit_button):
            button.setStyleSheet(Styles.BUTTON_SECONDARY)
            buttons.addWidget(button)
        buttons.addStretch()
        for button in (self.html_button, self.doc_button, self.print_button):
            button.setStyleSheet(Styles.BUTTON_PRIMARY)
            buttons.addWidget(button)
        layout.addLayout(buttons)

        self.back_button.clicked.connect(self._on_back)
        self.edit_button.clicked.connect(self._on_edit)
        self.html_button.clicked.connect(lambda: self._download(0))
        self.doc_button.clicked.connect(lambda: self._download(1))
        self.print_button.clicked.connect(self._on_print)

    def refresh(self) -> None:
        self.browser.setHtml(self.session.render_preview())

    def _on_back(self) -> None:
        self.session.back_to_setup()
        self.backRequested.emit()

    def _on_edit(self) -> None:
        self.session.edit_questions()
        self.editRequested.emit()

    def _download(self, index: int) -> None:
        """Save the HTML (index 0) or DOC (index 1) export into a chosen folder."""
        document: ExportedDocument = self.session.exports()[index]
        directory = QFileDialog.getExistingDirectory(self, f"Save {document.filename} to")
        if not directory:
            return
        try:
            path = document.write_to(Path(directory))
        except OSError as e:
            logger.error(f"Could not save {document.filename}: {e}")
            QMessageBox.critical(self, "Download failed", f"Could not save {document.filename}:\n{e}")
            return
        if index == 0:
            QMessageBox.information(
                self,
                "Download HTML",
                f"Saved {path.name}.\n\nOpen it in a browser and print as PDF using Ctrl+P or Cmd+P.",
            )

    def _on_print(self) -> None:
        printer = QPrinter(QPrinter.PrinterMode.HighResolution)
        dialog = QPrintDialog(printer, self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.browser.print_(printer)
            logger.info("Sent paper to printer")
