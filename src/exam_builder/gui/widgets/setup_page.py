"""
Setup page: exam metadata, question-type selection and marks distribution.
"""
from typing import Dict

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QCheckBox, QFormLayout, QGridLayout, QGroupBox, QHBoxLayout, QLabel,
    QLineEdit, QMessageBox, QPushButton, QScrollArea, QSpinBox, QVBoxLayout,
    QWidget,
)

from exam_builder.core.errors import ExamValidationError
from exam_builder.core.models import QuestionType
from exam_builder.gui.styles.theme import Styles, status_color
from exam_builder.session import ExamSession

MAX_MARKS = 10000
MAX_QUESTIONS = 500


class AllocationRow(QWidget):
    """Marks / count inputs for one selected question type."""

    changed = Signal()

    def __init__(self, session: ExamSession, question_type: QuestionType, parent=None):
        super().__init__(parent)
        self.session = session
        self.question_type = question_type
        allocation = session.resolver.allocation(question_type)

        layout = QGridLayout(self)
        layout.setContentsMargins(0, 4, 0, 4)
        layout.addWidget(QLabel(question_type.label), 0, 0, 1, 2)

        layout.addWidget(QLabel("Total Marks for this section"), 1, 0)
        self.marks_spin = QSpinBox()
        self.marks_spin.setRange(0, MAX_MARKS)
        self.marks_spin.setValue(int(allocation.marks))
        layout.addWidget(self.marks_spin, 2, 0)

        layout.addWidget(QLabel("Number of Questions"), 1, 1)
        self.count_spin = QSpinBox()
        self.count_spin.setRange(0, MAX_QUESTIONS)
        self.count_spin.setValue(allocation.count)
        layout.addWidget(self.count_spin, 2, 1)

        self.hint_label = QLabel()
        self.hint_label.setStyleSheet(Styles.HINT)
        layout.addWidget(self.hint_label, 3, 0, 1, 2)
        self._update_hint()

        self.marks_spin.valueChanged.connect(self._on_marks_changed)
        self.count_spin.valueChanged.connect(self._on_count_changed)

    def _on_marks_changed(self, value: int) -> None:
        self.session.resolver.set_marks(self.question_type, value)
        self._update_hint()
        self.changed.emit()

    def _on_count_changed(self, value: int) -> None:
        self.session.resolver.set_count(self.question_type, value)
        self._update_hint()
        self.changed.emit()

    def _update_hint(self) -> None:
        per_question = self.session.resolver.marks_per_question(self.question_type)
        self.hint_label.setText(
            f"{per_question:.1f} marks per question" if per_question is not None else ""
        )


class SetupPage(QWidget):
    """
    Stage 1 form bound to the session's SetupResolver.

    Emits `completed` once the session has accepted the setup.
    """

    completed = Signal()

    def __init__(self, session: ExamSession, parent=None):
        super().__init__(parent)
        self.session = session
        self.allocation_rows: Dict[QuestionType, AllocationRow] = {}

        outer = QVBoxLayout(self)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        outer.addWidget(scroll)

        content = QWidget()
        scroll.setWidget(content)
        layout = QVBoxLayout(content)

        title = QLabel("Exam Setup")
        title.setStyleSheet(Styles.PAGE_TITLE)
        layout.addWidget(title)

        # --- Basic info ---
        form = QFormLayout()
        self.school_edit = QLineEdit()
        self.school_edit.setPlaceholderText("e.g., ABC School")
        self.subject_edit = QLineEdit()
        self.subject_edit.setPlaceholderText("e.g., Mathematics")
        self.class_edit = QLineEdit()
        self.class_edit.setPlaceholderText("e.g., 10th Grade")
        self.total_spin = QSpinBox()
        self.total_spin.setRange(1, MAX_MARKS)
        form.addRow("School Name *", self.school_edit)
        form.addRow("Subject Name *", self.subject_edit)
        form.addRow("Class *", self.class_edit)
        form.addRow("Total Marks *", self.total_spin)
        layout.addLayout(form)

        # --- Question types ---
        types_box = QGroupBox("Select Question Types *")
        types_grid = QGridLayout(types_box)
        self.type_checks: Dict[QuestionType, QCheckBox] = {}
        for index, question_type in enumerate(QuestionType):
            check = QCheckBox(question_type.label)
            check.toggled.connect(
                lambda checked, qt=question_type: self._on_type_toggled(qt, checked)
            )
            self.type_checks[question_type] = check
            types_grid.addWidget(check, index // 2, index % 2)
        layout.addWidget(types_box)

        # --- Marks distribution ---
        self.distribution_box = QGroupBox("Marks Distribution")
        distribution_layout = QVBoxLayout(self.distribution_box)
        self.allocated_label = QLabel()
        distribution_layout.addWidget(self.allocated_label)
        self.rows_layout = QVBoxLayout()
        distribution_layout.addLayout(self.rows_layout)
        layout.addWidget(self.distribution_box)
        layout.addStretch()

        # --- Actions ---
        buttons = QHBoxLayout()
        buttons.addStretch()
        self.proceed_button = QPushButton("Proceed to Add Questions")
        self.proceed_button.setStyleSheet(Styles.BUTTON_PRIMARY)
        self.proceed_button.clicked.connect(self._on_proceed)
        buttons.addWidget(self.proceed_button)
        outer.addLayout(buttons)

        self.school_edit.textChanged.connect(lambda t: self.session.resolver.set_metadata(school_name=t))
        self.subject_edit.textChanged.connect(lambda t: self.session.resolver.set_metadata(subject=t))
        self.class_edit.textChanged.connect(lambda t: self.session.resolver.set_metadata(class_name=t))
        self.total_spin.valueChanged.connect(self._on_total_changed)

        self.refresh()

    def refresh(self) -> None:
        """Load every widget from the resolver (used when navigating back)."""
        resolver = self.session.resolver
        for widget, value in (
            (self.school_edit, resolver.school_name),
            (self.subject_edit, resolver.subject),
            (self.class_edit, resolver.class_name),
        ):
            if widget.text() != value:
                widget.setText(value)
        self.total_spin.setValue(resolver.total_marks)
        for question_type, check in self.type_checks.items():
            check.blockSignals(True)
            check.setChecked(resolver.is_selected(question_type))
            check.blockSignals(False)
        self._rebuild_rows()

    def _on_type_toggled(self, question_type: QuestionType, checked: bool) -> None:
        if checked:
            self.session.resolver.select_type(question_type)
        else:
            self.session.resolver.deselect_type(question_type)
        self._rebuild_rows()

    def _on_total_changed(self, value: int) -> None:
        self.session.resolver.set_metadata(total_marks=value)
        self._update_allocated_label()

    def _rebuild_rows(self) -> None:
        for row in self.allocation_rows.values():
            self.rows_layout.removeWidget(row)
            row.deleteLater()
        self.allocation_rows.clear()

        for question_type in self.session.resolver.selected_types:
            row = AllocationRow(self.session, question_type)
            row.changed.connect(self._update_allocated_label)
            self.rows_layout.addWidget(row)
            self.allocation_rows[question_type] = row

        self.distribution_box.setVisible(bool(self.allocation_rows))
        self._update_allocated_label()

    def _update_allocated_label(self) -> None:
        resolver = self.session.resolver
        allocated = resolver.allocated_marks
        text = f"Allocated: {allocated:g} / {resolver.total_marks}"
        if resolver.remaining_marks != 0:
            text += f"  (Remaining: {resolver.remaining_marks:g})"
        self.allocated_label.setText(text)
        self.allocated_label.setStyleSheet(
            f"color: {status_color(allocated == resolver.total_marks)};"
        )

    def _on_proceed(self) -> None:
        try:
            self.session.complete_setup()
        except ExamValidationError as e:
            QMessageBox.warning(self, "Exam Setup", e.message)
            return
        self.completed.emit()
