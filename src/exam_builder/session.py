"""
Module: session

Purpose:
    Orchestrate the three authoring stages for one editing session.
    Setup → Questions → Preview, with backward steps that hand each stage
    back the data it emitted before.

Key Classes:
    - Stage: Current authoring stage
    - ExamSession: Explicit session state shared by the stage pages

Dependencies:
    - setup.resolver: Stage 1
    - bank.builder: Stage 2
    - render: Stage 3

Used By:
    - gui.main_window.MainWindow: One session per window
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from exam_builder.bank import QuestionBank
from exam_builder.config import DEFAULT_RENDER_CONFIG, RenderConfig
from exam_builder.core.errors import SessionError
from exam_builder.core.models import ExamSetup, Question
from exam_builder.render import ExportedDocument, build_exports, render_document, render_preview
from exam_builder.setup import SetupResolver

logger = logging.getLogger(__name__)


class Stage(Enum):
    SETUP = "setup"
    QUESTIONS = "questions"
    PREVIEW = "preview"


class ExamSession:
    """
    State of one authoring session.

    Each stage borrows the session, mutates its own part and hands it on.
    A failed validation raises before the stage changes, so nothing is
    committed half-way.

    Attributes:
        stage: Current stage
        resolver: Setup form state (kept for the whole session)
        setup: Last finalized setup, None until setup is completed
        bank: Question bank, created on first setup completion
        questions: Last finalized question list
        config: Render options

    Example:
        >>> session = ExamSession()
        >>> session.resolver.set_metadata(school_name="ABC", subject="Maths",
        ...                               class_name="10", total_marks=10)
        >>> session.resolver.select_type(QuestionType.SHORT_ANSWER)
        >>> ...
        >>> session.complete_setup()
        >>> session.stage
        <Stage.QUESTIONS: 'questions'>
    """

    def __init__(self, config: Optional[RenderConfig] = None) -> None:
        self.stage = Stage.SETUP
        self.resolver = SetupResolver()
        self.setup: Optional[ExamSetup] = None
        self.bank: Optional[QuestionBank] = None
        self.questions: tuple[Question, ...] = ()
        self.config = config or DEFAULT_RENDER_CONFIG

    # ─────────────────────────────────────────────────────────────────────────
    # Forward transitions
    # ─────────────────────────────────────────────────────────────────────────

    def complete_setup(self) -> ExamSetup:
        """
        Submit the setup form and move to question editing.

        The first time, questions are materialized from the allocations;
        afterwards the existing bank is kept, rebound to the new setup and
        topped up for any allocated type that has no questions yet.

        Raises:
            SessionError: If not on the setup stage
            ExamValidationError: If the setup form is invalid
        """
        self._require(Stage.SETUP)
        setup = self.resolver.submit()

        if self.bank is None:
            self.bank = QuestionBank(setup)
        else:
            self.bank.rebind(setup)
        self.bank.materialize()

        self.setup = setup
        self._move_to(Stage.QUESTIONS)
        return setup

    def generate_preview(self) -> tuple[Question, ...]:
        """
        Validate the questions and move to preview.

        Raises:
            SessionError: If not on the questions stage
            ExamValidationError: If any question is incomplete
        """
        self._require(Stage.QUESTIONS)
        self.questions = self.bank.finalize()
        self._move_to(Stage.PREVIEW)
        return self.questions

    # ─────────────────────────────────────────────────────────────────────────
    # Backward transitions
    # ─────────────────────────────────────────────────────────────────────────

    def edit_questions(self) -> None:
        """Preview → Questions, all question content kept."""
        self._require(Stage.PREVIEW)
        self._move_to(Stage.QUESTIONS)

    def back_to_setup(self) -> None:
        """Questions or Preview → Setup, form state kept."""
        self._require(Stage.QUESTIONS, Stage.PREVIEW)
        self._move_to(Stage.SETUP)

    # ─────────────────────────────────────────────────────────────────────────
    # Output (preview stage only)
    # ─────────────────────────────────────────────────────────────────────────

    def render_document(self) -> str:
        self._require(Stage.PREVIEW)
        return render_document(self.setup, self.questions, self.config)

    def render_preview(self) -> str:
        self._require(Stage.PREVIEW)
        return render_preview(self.setup, self.questions, self.config)

    def exports(self) -> tuple[ExportedDocument, ExportedDocument]:
        """(html_export, doc_export) for the finalized paper."""
        self._require(Stage.PREVIEW)
        return build_exports(self.setup, self.questions, self.config)

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _require(self, *stages: Stage) -> None:
        if self.stage not in stages:
            allowed = " or ".join(s.value for s in stages)
            raise SessionError(f"Action requires the {allowed} stage, current stage is {self.stage.value}")

    def _move_to(self, stage: Stage) -> None:
        logger.info(f"Stage: {self.stage.value} -> {stage.value}")
        self.stage = stage
