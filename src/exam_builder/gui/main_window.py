"""
Main Window for the Exam Paper Builder GUI.
"""
import queue
from typing import Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QMessageBox, QStackedWidget, QStatusBar

from exam_builder import __version__
from exam_builder.config import RenderConfig
from exam_builder.gui.styles.theme import Colors
from exam_builder.gui.utils.logging_utils import attach_queue_handler, detach_queue_handler, drain_queue
from exam_builder.gui.widgets.preview_page import PreviewPage
from exam_builder.gui.widgets.questions_page import QuestionsPage
from exam_builder.gui.widgets.setup_page import SetupPage
from exam_builder.session import ExamSession, Stage

LOGGER_NAME = "exam_builder"


class MainWindow(QMainWindow):
    """One authoring session; the stacked pages follow the session's stage."""

    def __init__(self, config: Optional[RenderConfig] = None):
        super().__init__()
        self.setWindowTitle("Exam Paper Builder")
        self.resize(1100, 850)

        self.session = ExamSession(config)

        # --- Menu Bar ---
        help_menu = self.menuBar().addMenu("Help")
        about_action = QAction("About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

        # --- Pages ---
        self.stack = QStackedWidget()
        self.setup_page = SetupPage(self.session)
        self.questions_page = QuestionsPage(self.session)
        self.preview_page = PreviewPage(self.session)
        self._pages = {
            Stage.SETUP: self.setup_page,
            Stage.QUESTIONS: self.questions_page,
            Stage.PREVIEW: self.preview_page,
        }
        for page in self._pages.values():
            self.stack.addWidget(page)
        self.setCentralWidget(self.stack)

        self.setup_page.completed.connect(self._show_current_stage)
        self.questions_page.completed.connect(self._show_current_stage)
        self.questions_page.backRequested.connect(self._show_current_stage)
        self.preview_page.editRequested.connect(self._show_current_stage)
        self.preview_page.backRequested.connect(self._show_current_stage)

        # --- Status Bar ---
        self.status_bar = QStatusBar()
        self.status_bar.setStyleSheet(f"background-color: {Colors.SURFACE}; color: {Colors.TEXT_SECONDARY};")
        self.status_bar.showMessage("Ready")
        self.setStatusBar(self.status_bar)

        # Initialize Logging
        self.log_queue = queue.Queue()
        self.log_handler = attach_queue_handler(self.log_queue, LOGGER_NAME)
        self.log_timer = QTimer(self)
        self.log_timer.timeout.connect(self._drain_log_queue)
        self.log_timer.start(100)

    def _show_current_stage(self) -> None:
        """Refresh and raise the page for the session's current stage."""
        page = self._pages[self.session.stage]
        page.refresh()
        self.stack.setCurrentWidget(page)

    def _drain_log_queue(self) -> None:
        messages = drain_queue(self.log_queue)
        if messages:
            text, _level = messages[-1]
            self.status_bar.showMessage(text, 5000)

    def _show_about(self) -> None:
        QMessageBox.about(
            self,
            "About Exam Paper Builder",
            "<h3>Exam Paper Builder</h3>"
            f"<p>Version: {__version__}</p>"
            "<p>Set up an exam, write its questions and export a printable paper.</p>",
        )

    def closeEvent(self, event):
        self.log_timer.stop()
        detach_queue_handler(self.log_handler, LOGGER_NAME)
        super().closeEvent(event)
