"""
Module: bank.builder

Purpose:
    Stage 2 of the pipeline. Materializes empty questions from an
    ExamSetup, applies the user's edits and validates completeness
    before the paper can be previewed.

Key Classes:
    - QuestionBank: Ordered, editable list of questions for one setup
    - SectionSummary: Per-allocation counts shown above each section

Dependencies:
    - core.models: Question and payload dataclasses
    - core.errors: MissingFieldError, IncompleteMcqError

Used By:
    - session.ExamSession: Owns the bank across backward navigation
    - gui.widgets.questions_page: Editor bindings
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from exam_builder.core.errors import IncompleteMcqError, MissingFieldError
from exam_builder.core.models import (
    OPTION_LABELS,
    ExamSetup,
    ImagePosition,
    ImageRef,
    ImageSize,
    MatchPair,
    Question,
    QuestionType,
    QuestionTypeAllocation,
    SubQuestion,
    new_id,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionSummary:
    """
    Counts shown in a section header while editing.

    Attributes:
        question_type: Section type
        allocated_marks: Marks allocated to the section at setup
        question_count: Questions currently in the section
        marks_per_question: Allocation default (marks / count)
    """

    question_type: QuestionType
    allocated_marks: float
    question_count: int
    marks_per_question: float


class QuestionBank:
    """
    Editable question list for one exam setup.

    Questions are frozen; every edit swaps in a replacement built with
    dataclasses.replace(), so editing one question never touches its
    siblings. Marks are never rebalanced on add/delete.

    Example:
        >>> bank = QuestionBank(setup)
        >>> bank.materialize()
        >>> q = bank.questions_for(QuestionType.SHORT_ANSWER)[0]
        >>> bank.update_question(q.id, text="Define osmosis.", marks=3)
        >>> questions = bank.finalize()
    """

    def __init__(self, setup: ExamSetup, questions: Optional[List[Question]] = None) -> None:
        self.setup = setup
        self._questions: List[Question] = list(questions or [])

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def materialize(self) -> None:
        """
        Create `count` blank questions for every allocation that has none.

        Sections that already hold questions are left alone, so content
        entered before navigating back to setup is never discarded, and a
        type selected on re-submit still gets its declared questions.
        """
        created = 0
        for allocation in self.setup.question_types:
            if self.questions_for(allocation.question_type):
                continue
            marks = allocation.marks_per_question
            for _ in range(allocation.count):
                self._questions.append(Question.blank(allocation.question_type, marks))
            created += allocation.count

        if not created:
            logger.debug("Every allocated section already has questions, nothing to materialize")
            return
        logger.info(f"Materialized {created} questions across {len(self.setup.question_types)} sections")

    def rebind(self, setup: ExamSetup) -> None:
        """
        Attach a re-submitted setup, keeping every existing question.

        Questions of types no longer allocated stay in the bank (they come
        back if the type is selected again) but are not finalized. Newly
        allocated types are filled by the next materialize().
        """
        self.setup = setup
        orphaned = [q for q in self._questions if setup.allocation_for(q.question_type) is None]
        if orphaned:
            logger.info(f"{len(orphaned)} questions kept for types no longer in the setup")

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def questions(self) -> tuple[Question, ...]:
        return tuple(self._questions)

    def __len__(self) -> int:
        return len(self._questions)

    def get(self, question_id: str) -> Question:
        """
        Raises:
            KeyError: If no question has this id
        """
        return self._questions[self._index_of(question_id)]

    def questions_for(self, question_type: QuestionType) -> tuple[Question, ...]:
        return tuple(q for q in self._questions if q.question_type is question_type)

    def section_summaries(self) -> tuple[SectionSummary, ...]:
        return tuple(
            SectionSummary(
                question_type=a.question_type,
                allocated_marks=a.marks,
                question_count=len(self.questions_for(a.question_type)),
                marks_per_question=a.marks_per_question,
            )
            for a in self.setup.question_types
        )

    def total_marks_entered(self) -> float:
        """Sum of the marks of all questions in allocated sections."""
        return sum(q.marks for q in self._active_questions())

    def total_question_count(self) -> int:
        return len(self._active_questions())

    def _active_questions(self) -> List[Question]:
        allocated = set(self.setup.types)
        return [q for q in self._questions if q.question_type in allocated]

    def _index_of(self, question_id: str) -> int:
        for index, question in enumerate(self._questions):
            if question.id == question_id:
                return index
        raise KeyError(f"No question with id {question_id!r}")

    def _allocation(self, question_type: QuestionType) -> QuestionTypeAllocation:
        allocation = self.setup.allocation_for(question_type)
        if allocation is None:
            raise KeyError(f"{question_type.label!r} is not allocated in this exam")
        return allocation

    # ─────────────────────────────────────────────────────────────────────────
    # Question edits
    # ─────────────────────────────────────────────────────────────────────────

    def add_question(self, question_type: QuestionType) -> Question:
        """
        Append one more question to a section.

        Its marks are the allocation default (marks / count), whatever the
        section's siblings have been edited to.

        Raises:
            KeyError: If the type is not allocated
        """
        allocation = self._allocation(question_type)
        question = Question.blank(question_type, allocation.marks_per_question)
        self._questions.append(question)
        logger.debug(f"Added {question.id} to {question_type.label}")
        return question

    def delete_question(self, question_id: str) -> None:
        del self._questions[self._index_of(question_id)]
        logger.debug(f"Deleted {question_id}")

    def update_question(
        self,
        question_id: str,
        *,
        text: Optional[str] = None,
        marks: Optional[float] = None,
    ) -> Question:
        changes = {}
        if text is not None:
            changes["text"] = text
        if marks is not None:
            changes["marks"] = marks
        return self._replace(question_id, lambda q: dataclasses.replace(q, **changes))

    def set_image(
        self,
        question_id: str,
        url: str,
        *,
        size: ImageSize | str = ImageSize.MEDIUM,
        position: ImagePosition | str = ImagePosition.LEFT,
    ) -> Question:
        """Attach an image; a blank url removes it."""
        image = ImageRef(url.strip(), size, position) if url.strip() else None
        return self._replace(question_id, lambda q: dataclasses.replace(q, image=image))

    # ─────────────────────────────────────────────────────────────────────────
    # MCQ edits
    # ─────────────────────────────────────────────────────────────────────────

    def set_option(self, question_id: str, index: int, text: str) -> Question:
        """
        Edit option `index` (0-3, labeled A-D).

        Raises:
            IndexError: If index is outside 0-3
            TypeError: If the question is not an MCQ
        """
        if not 0 <= index < len(OPTION_LABELS):
            raise IndexError(f"MCQ option index out of range: {index}")

        def edit(q: Question) -> Question:
            options = list(q.mcq.options)
            options[index] = text
            return dataclasses.replace(q, payload=dataclasses.replace(q.mcq, options=tuple(options)))

        return self._replace(question_id, edit)

    def set_correct_answer(self, question_id: str, label: Optional[str]) -> Question:
        """
        Select the correct option label (A-D), or None to unset.

        Raises:
            ValueError: If label is not one of A-D
            TypeError: If the question is not an MCQ
        """
        if label is not None and label not in OPTION_LABELS:
            raise ValueError(f"Correct answer must be one of {', '.join(OPTION_LABELS)}: {label!r}")
        return self._replace(
            question_id,
            lambda q: dataclasses.replace(q, payload=dataclasses.replace(q.mcq, correct_answer=label)),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Paragraph edits
    # ─────────────────────────────────────────────────────────────────────────

    def set_paragraph_text(self, question_id: str, paragraph: str) -> Question:
        return self._replace(
            question_id,
            lambda q: dataclasses.replace(q, payload=dataclasses.replace(q.paragraph, paragraph=paragraph)),
        )

    def add_sub_question(self, question_id: str) -> SubQuestion:
        """Append an empty sub-question worth 0 marks."""
        sub_question = SubQuestion(id=new_id("sub"))

        def edit(q: Question) -> Question:
            subs = q.paragraph.sub_questions + (sub_question,)
            return dataclasses.replace(q, payload=dataclasses.replace(q.paragraph, sub_questions=subs))

        self._replace(question_id, edit)
        return sub_question

    def update_sub_question(
        self,
        question_id: str,
        sub_question_id: str,
        *,
        text: Optional[str] = None,
        marks: Optional[float] = None,
    ) -> Question:
        changes = {}
        if text is not None:
            changes["text"] = text
        if marks is not None:
            changes["marks"] = marks
        return self._edit_sub_question(
            question_id, sub_question_id, lambda sq: dataclasses.replace(sq, **changes)
        )

    def set_sub_question_image(
        self,
        question_id: str,
        sub_question_id: str,
        url: str,
        *,
        size: ImageSize | str = ImageSize.MEDIUM,
        position: ImagePosition | str = ImagePosition.LEFT,
    ) -> Question:
        image = ImageRef(url.strip(), size, position) if url.strip() else None
        return self._edit_sub_question(
            question_id, sub_question_id, lambda sq: dataclasses.replace(sq, image=image)
        )

    def delete_sub_question(self, question_id: str, sub_question_id: str) -> Question:
        def edit(q: Question) -> Question:
            subs = q.paragraph.sub_questions
            remaining = tuple(sq for sq in subs if sq.id != sub_question_id)
            if len(remaining) == len(subs):
                raise KeyError(f"No sub-question with id {sub_question_id!r}")
            return dataclasses.replace(q, payload=dataclasses.replace(q.paragraph, sub_questions=remaining))

        return self._replace(question_id, edit)

    def sub_question_marks(self, question_id: str) -> float:
        """Running total of a paragraph question's sub-question marks."""
        return self.get(question_id).paragraph.sub_question_marks

    def sub_question_marks_match(self, question_id: str) -> bool:
        """Advisory check: do the sub-question marks add up to the parent's marks?"""
        question = self.get(question_id)
        return question.paragraph.sub_question_marks == question.marks

    def _edit_sub_question(
        self,
        question_id: str,
        sub_question_id: str,
        edit_sub: Callable[[SubQuestion], SubQuestion],
    ) -> Question:
        def edit(q: Question) -> Question:
            subs = list(q.paragraph.sub_questions)
            for index, sq in enumerate(subs):
                if sq.id == sub_question_id:
                    subs[index] = edit_sub(sq)
                    break
            else:
                raise KeyError(f"No sub-question with id {sub_question_id!r}")
            return dataclasses.replace(q, payload=dataclasses.replace(q.paragraph, sub_questions=tuple(subs)))

        return self._replace(question_id, edit)

    # ─────────────────────────────────────────────────────────────────────────
    # Match-the-following edits
    # ─────────────────────────────────────────────────────────────────────────

    def add_match_pair(self, question_id: str) -> MatchPair:
        """Append a pair with both items empty."""
        pair = MatchPair(id=new_id("pair"))
        self._replace(
            question_id,
            lambda q: dataclasses.replace(q, payload=dataclasses.replace(q.match, pairs=q.match.pairs + (pair,))),
        )
        return pair

    def update_match_pair(
        self,
        question_id: str,
        pair_id: str,
        *,
        left: Optional[str] = None,
        right: Optional[str] = None,
    ) -> Question:
        changes = {}
        if left is not None:
            changes["left"] = left
        if right is not None:
            changes["right"] = right

        def edit(q: Question) -> Question:
            pairs = list(q.match.pairs)
            for index, pair in enumerate(pairs):
                if pair.id == pair_id:
                    pairs[index] = dataclasses.replace(pair, **changes)
                    break
            else:
                raise KeyError(f"No match pair with id {pair_id!r}")
            return dataclasses.replace(q, payload=dataclasses.replace(q.match, pairs=tuple(pairs)))

        return self._replace(question_id, edit)

    def delete_match_pair(self, question_id: str, pair_id: str) -> Question:
        def edit(q: Question) -> Question:
            remaining = tuple(p for p in q.match.pairs if p.id != pair_id)
            if len(remaining) == len(q.match.pairs):
                raise KeyError(f"No match pair with id {pair_id!r}")
            return dataclasses.replace(q, payload=dataclasses.replace(q.match, pairs=remaining))

        return self._replace(question_id, edit)

    # ─────────────────────────────────────────────────────────────────────────
    # Finalize
    # ─────────────────────────────────────────────────────────────────────────

    def finalize(self) -> tuple[Question, ...]:
        """
        Validate every question in an allocated section ("generate preview").

        Returns:
            Questions of allocated types, in list order

        Raises:
            MissingFieldError: A question's text is empty or whitespace-only
            IncompleteMcqError: An MCQ has a blank option or no correct answer
        """
        questions = self._active_questions()

        empty = [q.id for q in questions if not q.has_text]
        if empty:
            raise MissingFieldError(
                "Please fill all question texts before generating preview",
                path=empty[0],
                errors=[f"Question {qid} has no text" for qid in empty],
            )

        incomplete = [
            q.id
            for q in questions
            if q.question_type is QuestionType.MCQ and not q.mcq.is_complete
        ]
        if incomplete:
            raise IncompleteMcqError(
                "Please fill all MCQ options and select correct answers",
                path=incomplete[0],
                errors=[f"MCQ {qid} is incomplete" for qid in incomplete],
            )

        logger.info(f"Finalized {len(questions)} questions ({self.total_marks_entered():g} marks)")
        return tuple(questions)

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _replace(self, question_id: str, edit: Callable[[Question], Question]) -> Question:
        index = self._index_of(question_id)
        updated = edit(self._questions[index])
        self._questions[index] = updated
        return updated
