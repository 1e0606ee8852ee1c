"""
Module: setup.resolver

Purpose:
    Stage 1 of the pipeline. Collects exam metadata and per-type marks
    allocations while the user edits the setup form, then validates and
    emits a finalized ExamSetup.

Key Classes:
    - SetupResolver: Editable setup state with submit() validation

Dependencies:
    - core.models: ExamSetup, QuestionTypeAllocation, QuestionType
    - core.errors: MissingFieldError, AllocationMismatchError, InvalidCountError

Used By:
    - session.ExamSession: Owns one resolver for the whole editing session
    - gui.widgets.setup_page: Form bindings
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, List, Optional

from exam_builder.core.errors import (
    AllocationMismatchError,
    InvalidCountError,
    MissingFieldError,
)
from exam_builder.core.models import ExamSetup, QuestionType, QuestionTypeAllocation

logger = logging.getLogger(__name__)

DEFAULT_TOTAL_MARKS = 60


class SetupResolver:
    """
    Editable exam setup.

    Allocation drafts are keyed by question type and kept for the whole
    session: deselecting a type hides its allocation, selecting it again
    brings back the marks and count entered before. Selected types keep
    the order in which they were selected.

    Example:
        >>> resolver = SetupResolver()
        >>> resolver.set_metadata(school_name="ABC School", subject="Maths",
        ...                       class_name="10th Grade", total_marks=30)
        >>> resolver.select_type(QuestionType.MCQ)
        >>> resolver.set_marks(QuestionType.MCQ, 30)
        >>> resolver.set_count(QuestionType.MCQ, 15)
        >>> resolver.submit().allocated_marks
        30
    """

    def __init__(self) -> None:
        self.school_name = ""
        self.subject = ""
        self.class_name = ""
        self.total_marks: int = DEFAULT_TOTAL_MARKS
        self._selected: List[QuestionType] = []
        self._drafts: Dict[QuestionType, QuestionTypeAllocation] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Metadata
    # ─────────────────────────────────────────────────────────────────────────

    def set_metadata(
        self,
        *,
        school_name: Optional[str] = None,
        subject: Optional[str] = None,
        class_name: Optional[str] = None,
        total_marks: Optional[int] = None,
    ) -> None:
        """Update any subset of the metadata fields."""
        if school_name is not None:
            self.school_name = school_name
        if subject is not None:
            self.subject = subject
        if class_name is not None:
            self.class_name = class_name
        if total_marks is not None:
            self.total_marks = total_marks

    # ─────────────────────────────────────────────────────────────────────────
    # Type selection
    # ─────────────────────────────────────────────────────────────────────────

    def is_selected(self, question_type: QuestionType) -> bool:
        return question_type in self._selected

    def select_type(self, question_type: QuestionType) -> None:
        if question_type in self._selected:
            return
        self._selected.append(question_type)
        if question_type not in self._drafts:
            self._drafts[question_type] = QuestionTypeAllocation(question_type)
        logger.debug(f"Selected {question_type.label}")

    def deselect_type(self, question_type: QuestionType) -> None:
        if question_type in self._selected:
            self._selected.remove(question_type)
            logger.debug(f"Deselected {question_type.label} (draft kept)")

    def toggle_type(self, question_type: QuestionType) -> bool:
        """
        Flip selection of a question type.

        Returns:
            True if the type is selected afterwards
        """
        if self.is_selected(question_type):
            self.deselect_type(question_type)
            return False
        self.select_type(question_type)
        return True

    @property
    def selected_types(self) -> tuple[QuestionType, ...]:
        return tuple(self._selected)

    # ─────────────────────────────────────────────────────────────────────────
    # Allocation drafts
    # ─────────────────────────────────────────────────────────────────────────

    def set_marks(self, question_type: QuestionType, marks: float) -> None:
        """
        Set the section marks for a selected type.

        Raises:
            KeyError: If the type is not selected
            ValueError: If marks is negative
        """
        self._replace_draft(question_type, marks=marks)

    def set_count(self, question_type: QuestionType, count: int) -> None:
        """
        Set the number of questions for a selected type.

        Raises:
            KeyError: If the type is not selected
            ValueError: If count is negative
        """
        self._replace_draft(question_type, count=count)

    def _replace_draft(self, question_type: QuestionType, **changes) -> None:
        if not self.is_selected(question_type):
            raise KeyError(f"{question_type.label!r} is not selected")
        self._drafts[question_type] = dataclasses.replace(self._drafts[question_type], **changes)

    def allocation(self, question_type: QuestionType) -> QuestionTypeAllocation:
        """Current draft for a selected type."""
        if not self.is_selected(question_type):
            raise KeyError(f"{question_type.label!r} is not selected")
        return self._drafts[question_type]

    @property
    def allocations(self) -> tuple[QuestionTypeAllocation, ...]:
        """Drafts of the selected types, in selection order."""
        return tuple(self._drafts[t] for t in self._selected)

    @property
    def allocated_marks(self) -> float:
        return sum(a.marks for a in self.allocations)

    @property
    def remaining_marks(self) -> float:
        return self.total_marks - self.allocated_marks

    def marks_per_question(self, question_type: QuestionType) -> Optional[float]:
        """Hint shown next to an allocation; None until marks and count are set."""
        allocation = self.allocation(question_type)
        if allocation.marks <= 0:
            return None
        return allocation.marks_per_question

    # ─────────────────────────────────────────────────────────────────────────
    # Submit
    # ─────────────────────────────────────────────────────────────────────────

    def submit(self) -> ExamSetup:
        """
        Validate the form and emit the finalized setup.

        Returns:
            ExamSetup with the selected allocations in selection order

        Raises:
            MissingFieldError: Empty school/subject/class, no types selected,
                or a non-positive total
            AllocationMismatchError: Allocated marks differ from total marks
            InvalidCountError: An allocation has count <= 0
        """
        missing = [
            name
            for name, value in (
                ("school_name", self.school_name),
                ("subject", self.subject),
                ("class_name", self.class_name),
            )
            if not value.strip()
        ]
        if not self._selected:
            missing.append("question_types")
        if missing:
            raise MissingFieldError(
                "Please fill all required fields",
                path=missing[0],
                errors=[f"Missing field: {name}" for name in missing],
            )

        if not isinstance(self.total_marks, int) or self.total_marks <= 0:
            raise MissingFieldError(
                f"Total marks must be a positive whole number: {self.total_marks}",
                path="total_marks",
            )

        allocated = self.allocated_marks
        if allocated != self.total_marks:
            raise AllocationMismatchError(allocated, self.total_marks)

        empty = [a.question_type.label for a in self.allocations if a.count <= 0]
        if empty:
            raise InvalidCountError(
                "All question types must have at least 1 question",
                path="question_types",
                errors=[f"No questions allocated for {label}" for label in empty],
            )

        setup = ExamSetup(
            school_name=self.school_name.strip(),
            subject=self.subject.strip(),
            class_name=self.class_name.strip(),
            total_marks=self.total_marks,
            question_types=self.allocations,
        )
        logger.info(
            f"Setup complete: {setup.subject} / {setup.class_name}, "
            f"{len(setup.question_types)} sections, {setup.total_marks} marks"
        )
        return setup
