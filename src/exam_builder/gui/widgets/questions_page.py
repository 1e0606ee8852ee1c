"""
Questions page: one editor per question, grouped into allocated sections.

Editors write straight into the session's QuestionBank. Edits that add or
remove rows (questions, sub-questions, match pairs) ask the page to
rebuild so the widgets always mirror the bank.
"""
import logging
from typing import List

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QComboBox, QDoubleSpinBox, QFrame, QGroupBox, QHBoxLayout, QLabel,
    QLineEdit, QMessageBox, QPlainTextEdit, QPushButton, QScrollArea,
    QVBoxLayout, QWidget,
)

from exam_builder.bank import QuestionBank
from exam_builder.core.errors import ExamValidationError
from exam_builder.core.models import OPTION_LABELS, Question, QuestionType
from exam_builder.gui.styles.theme import Styles, status_color
from exam_builder.gui.widgets.image_fields import ImageFields
from exam_builder.session import ExamSession

logger = logging.getLogger(__name__)

MAX_QUESTION_MARKS = 1000.0
MARKS_DECIMALS = 4


def _marks_spin(value: float, step: float = 1.0) -> QDoubleSpinBox:
    spin = QDoubleSpinBox()
    spin.setDecimals(MARKS_DECIMALS)
    spin.setRange(0.0, MAX_QUESTION_MARKS)
    spin.setSingleStep(step)
    spin.setValue(value)
    return spin


def _text_box(text: str, placeholder: str, height: int = 60) -> QPlainTextEdit:
    box = QPlainTextEdit(text)
    box.setPlaceholderText(placeholder)
    box.setFixedHeight(height)
    return box


class QuestionEditor(QFrame):
    """
    Editor for a single question, bound to the bank by question id.

    Signals:
        structureChanged: Rows were added or removed, rebuild needed
        marksChanged: The question's marks changed, refresh totals
    """

    structureChanged = Signal()
    marksChanged = Signal()

    def __init__(self, bank: QuestionBank, question: Question, number: int, parent=None):
        super().__init__(parent)
        self.bank = bank
        self.question_id = question.id
        self._initial_marks = question.marks
        self.setFrameShape(QFrame.Shape.StyledPanel)

        layout = QVBoxLayout(self)

        header = QHBoxLayout()
        header.addWidget(QLabel(f"<b>Question {number}</b>"))
        header.addStretch()
        header.addWidget(QLabel("Marks"))
        self.marks_spin = _marks_spin(question.marks)
        self.marks_spin.valueChanged.connect(self._on_marks_changed)
        header.addWidget(self.marks_spin)
        delete_button = QPushButton("Delete")
        delete_button.setStyleSheet(Styles.BUTTON_DANGER)
        delete_button.clicked.connect(self._on_delete)
        header.addWidget(delete_button)
        layout.addLayout(header)

        self.text_edit = _text_box(question.text, "Enter question text")
        self.text_edit.textChanged.connect(
            lambda: self.bank.update_question(self.question_id, text=self.text_edit.toPlainText())
        )
        layout.addWidget(self.text_edit)

        self.image_fields = ImageFields(question.image)
        self.image_fields.changed.connect(
            lambda url, size, position: self.bank.set_image(
                self.question_id, url, size=size, position=position
            )
        )
        layout.addWidget(self.image_fields)

        self.option_edits: List[QLineEdit] = []
        self.sub_total_label = None
        if question.question_type is QuestionType.MCQ:
            self._build_mcq(layout, question)
        elif question.question_type is QuestionType.PARAGRAPH:
            self._build_paragraph(layout, question)
        elif question.question_type is QuestionType.MATCH_THE_FOLLOWING:
            self._build_match(layout, question)

    # ─────────────────────────────────────────────────────────────────────────
    # Type-specific inputs
    # ─────────────────────────────────────────────────────────────────────────

    def _build_mcq(self, layout: QVBoxLayout, question: Question) -> None:
        payload = question.mcq
        for index, label in enumerate(OPTION_LABELS):
            row = QHBoxLayout()
            row.addWidget(QLabel(f"{label})"))
            edit = QLineEdit(payload.options[index])
            edit.setPlaceholderText(f"Option {label}")
            edit.textChanged.connect(
                lambda text, i=index: self.bank.set_option(self.question_id, i, text)
            )
            row.addWidget(edit)
            layout.addLayout(row)
            self.option_edits.append(edit)

        row = QHBoxLayout()
        row.addWidget(QLabel("Correct Answer"))
        self.answer_combo = QComboBox()
        self.answer_combo.addItem("Select...", None)
        for label in OPTION_LABELS:
            self.answer_combo.addItem(label, label)
        if payload.correct_answer is not None:
            self.answer_combo.setCurrentIndex(self.answer_combo.findData(payload.correct_answer))
        self.answer_combo.currentIndexChanged.connect(
            lambda _i: self.bank.set_correct_answer(self.question_id, self.answer_combo.currentData())
        )
        row.addWidget(self.answer_combo)
        row.addStretch()
        layout.addLayout(row)

    def _build_paragraph(self, layout: QVBoxLayout, question: Question) -> None:
        payload = question.paragraph
        self.paragraph_edit = _text_box(payload.paragraph, "Enter the paragraph", height=100)
        self.paragraph_edit.textChanged.connect(
            lambda: self.bank.set_paragraph_text(self.question_id, self.paragraph_edit.toPlainText())
        )
        layout.addWidget(self.paragraph_edit)

        for index, sub_question in enumerate(payload.sub_questions):
            box = QGroupBox(f"Sub-question {index + 1}")
            box_layout = QVBoxLayout(box)

            row = QHBoxLayout()
            text_edit = QLineEdit(sub_question.text)
            text_edit.setPlaceholderText("Sub-question text")
            text_edit.textChanged.connect(
                lambda text, sid=sub_question.id: self.bank.update_sub_question(
                    self.question_id, sid, text=text
                )
            )
            row.addWidget(text_edit, stretch=1)
            marks_spin = _marks_spin(sub_question.marks, step=0.5)
            marks_spin.valueChanged.connect(
                lambda value, sid=sub_question.id: self._on_sub_marks_changed(sid, value)
            )
            row.addWidget(marks_spin)
            delete_button = QPushButton("Remove")
            delete_button.setStyleSheet(Styles.BUTTON_DANGER)
            delete_button.clicked.connect(
                lambda _checked=False, sid=sub_question.id: self._on_delete_sub_question(sid)
            )
            row.addWidget(delete_button)
            box_layout.addLayout(row)

            image_fields = ImageFields(sub_question.image)
            image_fields.changed.connect(
                lambda url, size, position, sid=sub_question.id: self.bank.set_sub_question_image(
                    self.question_id, sid, url, size=size, position=position
                )
            )
            box_layout.addWidget(image_fields)
            layout.addWidget(box)

        row = QHBoxLayout()
        add_button = QPushButton("Add Sub-Question")
        add_button.setStyleSheet(Styles.BUTTON_SECONDARY)
        add_button.clicked.connect(self._on_add_sub_question)
        row.addWidget(add_button)
        row.addStretch()
        self.sub_total_label = QLabel()
        row.addWidget(self.sub_total_label)
        layout.addLayout(row)
        self._update_sub_total()

    def _build_match(self, layout: QVBoxLayout, question: Question) -> None:
        for pair in question.match.pairs:
            row = QHBoxLayout()
            left_edit = QLineEdit(pair.left)
            left_edit.setPlaceholderText("Left item")
            left_edit.textChanged.connect(
                lambda text, pid=pair.id: self.bank.update_match_pair(self.question_id, pid, left=text)
            )
            right_edit = QLineEdit(pair.right)
            right_edit.setPlaceholderText("Right item")
            right_edit.textChanged.connect(
                lambda text, pid=pair.id: self.bank.update_match_pair(self.question_id, pid, right=text)
            )
            delete_button = QPushButton("Remove")
            delete_button.setStyleSheet(Styles.BUTTON_DANGER)
            delete_button.clicked.connect(
                lambda _checked=False, pid=pair.id: self._on_delete_pair(pid)
            )
            row.addWidget(left_edit)
            row.addWidget(right_edit)
            row.addWidget(delete_button)
            layout.addLayout(row)

        add_button = QPushButton("Add Pair")
        add_button.setStyleSheet(Styles.BUTTON_SECONDARY)
        add_button.clicked.connect(self._on_add_pair)
        layout.addWidget(add_button)

    # ─────────────────────────────────────────────────────────────────────────
    # Handlers
    # ─────────────────────────────────────────────────────────────────────────

    def _on_marks_changed(self, value: float) -> None:
        # The spin box only holds MARKS_DECIMALS places; keep the unrounded default.
        if value == round(self._initial_marks, MARKS_DECIMALS):
            value = self._initial_marks
        self.bank.update_question(self.question_id, marks=value)
        self._update_sub_total()
        self.marksChanged.emit()

    def _on_delete(self) -> None:
        self.bank.delete_question(self.question_id)
        self.structureChanged.emit()

    def _on_sub_marks_changed(self, sub_question_id: str, value: float) -> None:
        self.bank.update_sub_question(self.question_id, sub_question_id, marks=value)
        self._update_sub_total()

    def _on_add_sub_question(self) -> None:
        self.bank.add_sub_question(self.question_id)
        self.structureChanged.emit()

    def _on_delete_sub_question(self, sub_question_id: str) -> None:
        self.bank.delete_sub_question(self.question_id, sub_question_id)
        self.structureChanged.emit()

    def _on_add_pair(self) -> None:
        self.bank.add_match_pair(self.question_id)
        self.structureChanged.emit()

    def _on_delete_pair(self, pair_id: str) -> None:
        self.bank.delete_match_pair(self.question_id, pair_id)
        self.structureChanged.emit()

    def _update_sub_total(self) -> None:
        if self.sub_total_label is None:
            return
        question = self.bank.get(self.question_id)
        total = question.paragraph.sub_question_marks
        self.sub_total_label.setText(f"Sub-question marks: {total:g} / {question.marks:g}")
        self.sub_total_label.setStyleSheet(
            f"color: {status_color(self.bank.sub_question_marks_match(self.question_id))};"
        )


class QuestionsPage(QWidget):
    """
    Stage 2: edit the questions materialized from the setup.

    Signals:
        completed: Preview was generated
        backRequested: Session moved back to setup
    """

    completed = Signal()
    backRequested = Signal()

    def __init__(self, session: ExamSession, parent=None):
        super().__init__(parent)
        self.session = session
        self.editors: List[QuestionEditor] = []

        outer = QVBoxLayout(self)
        title = QLabel("Add Questions")
        title.setStyleSheet(Styles.PAGE_TITLE)
        outer.addWidget(title)

        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        outer.addWidget(self.scroll, stretch=1)

        footer = QHBoxLayout()
        self.totals_label = QLabel()
        footer.addWidget(self.totals_label)
        footer.addStretch()
        self.back_button = QPushButton("Back to Setup")
        self.back_button.setStyleSheet(Styles.BUTTON_SECONDARY)
        self.back_button.clicked.connect(self._on_back)
        footer.addWidget(self.back_button)
        self.preview_button = QPushButton("Generate Preview")
        self.preview_button.setStyleSheet(Styles.BUTTON_PRIMARY)
        self.preview_button.clicked.connect(self._on_generate_preview)
        footer.addWidget(self.preview_button)
        outer.addLayout(footer)

    def refresh(self) -> None:
        """Rebuild every section from the bank, keeping the scroll position."""
        bank = self.session.bank
        if bank is None:
            return

        scroll_value = self.scroll.verticalScrollBar().value()
        self.editors = []
        content = QWidget()
        layout = QVBoxLayout(content)

        number = 0
        for summary in bank.section_summaries():
            question_type = summary.question_type
            box = QGroupBox(question_type.section_heading)
            box_layout = QVBoxLayout(box)

            header = QHBoxLayout()
            per_question = (
                f"{summary.marks_per_question:g}" if summary.marks_per_question is not None else "-"
            )
            header.addWidget(QLabel(
                f"Questions: {summary.question_count}  |  "
                f"Marks allocated: {summary.allocated_marks:g}  |  "
                f"Default per question: {per_question}"
            ))
            header.addStretch()
            add_button = QPushButton("Add Question")
            add_button.setStyleSheet(Styles.BUTTON_SECONDARY)
            add_button.clicked.connect(
                lambda _checked=False, qt=question_type: self._on_add_question(qt)
            )
            header.addWidget(add_button)
            box_layout.addLayout(header)

            for question in bank.questions_for(question_type):
                number += 1
                editor = QuestionEditor(bank, question, number)
                editor.structureChanged.connect(self.refresh)
                editor.marksChanged.connect(self._update_totals)
                box_layout.addWidget(editor)
                self.editors.append(editor)

            layout.addWidget(box)

        layout.addStretch()
        # The old content may own the button whose click triggered this rebuild
        previous = self.scroll.takeWidget()
        if previous is not None:
            previous.deleteLater()
        self.scroll.setWidget(content)
        self.scroll.verticalScrollBar().setValue(scroll_value)
        self._update_totals()

    def _update_totals(self) -> None:
        bank = self.session.bank
        entered = bank.total_marks_entered()
        total = bank.setup.total_marks
        self.totals_label.setText(
            f"Total marks entered: {entered:g} / {total:g}  |  "
            f"Questions: {bank.total_question_count()}"
        )
        self.totals_label.setStyleSheet(f"color: {status_color(entered == total)};")

    def _on_add_question(self, question_type: QuestionType) -> None:
        self.session.bank.add_question(question_type)
        self.refresh()

    def _on_back(self) -> None:
        self.session.back_to_setup()
        self.backRequested.emit()

    def _on_generate_preview(self) -> None:
        try:
            self.session.generate_preview()
        except ExamValidationError as e:
            logger.warning(e.message)
            QMessageBox.warning(self, "Questions", e.message)
            return
        self.completed.emit()
