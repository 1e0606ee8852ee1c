"""
Unit Tests for QuestionBank

Tests for materialization, edits and finalize() validation.
"""

import pytest

from exam_builder.bank import QuestionBank
from exam_builder.core.errors import IncompleteMcqError, MissingFieldError
from exam_builder.core.models import (
    ExamSetup,
    ImagePosition,
    ImageSize,
    QuestionType,
    QuestionTypeAllocation,
)


@pytest.fixture
def bank(mixed_setup):
    bank = QuestionBank(mixed_setup)
    bank.materialize()
    return bank


def _complete_all(bank):
    """Fill every question so finalize() passes."""
    for q in bank.questions:
        bank.update_question(q.id, text=f"Question {q.id}")
        if q.question_type is QuestionType.MCQ:
            for i in range(4):
                bank.set_option(q.id, i, f"opt {i}")
            bank.set_correct_answer(q.id, "B")


class TestMaterialize:
    """Tests for creating questions from allocations."""

    def test_materialize_when_setup_then_count_questions_per_allocation(self, bank):
        assert len(bank.questions_for(QuestionType.MCQ)) == 5
        assert len(bank.questions_for(QuestionType.SHORT_ANSWER)) == 4
        assert len(bank.questions_for(QuestionType.PARAGRAPH)) == 2
        assert len(bank) == 11

    def test_materialize_when_setup_then_marks_are_allocation_default(self, bank):
        assert all(q.marks == 2.0 for q in bank.questions_for(QuestionType.MCQ))
        assert all(q.marks == 5.0 for q in bank.questions_for(QuestionType.SHORT_ANSWER))
        assert all(q.marks == 15.0 for q in bank.questions_for(QuestionType.PARAGRAPH))

    def test_materialize_when_uneven_split_then_marks_not_rounded(self):
        setup = ExamSetup("S", "M", "1", 10, (QuestionTypeAllocation(QuestionType.SHORT_ANSWER, 10, 3),))
        bank = QuestionBank(setup)
        bank.materialize()
        assert bank.questions[0].marks == 10 / 3

    def test_materialize_when_setup_then_questions_in_allocation_order(self, bank):
        order = [q.question_type for q in bank.questions]
        assert order == [QuestionType.MCQ] * 5 + [QuestionType.SHORT_ANSWER] * 4 + [QuestionType.PARAGRAPH] * 2

    def test_materialize_when_bank_not_empty_then_keeps_existing_questions(self, bank):
        first = bank.questions[0]
        bank.update_question(first.id, text="Kept")
        bank.materialize()
        assert len(bank) == 11
        assert bank.get(first.id).text == "Kept"

    def test_materialize_when_rebound_with_new_type_then_new_section_filled(self, bank, mixed_setup):
        first = bank.questions[0]
        bank.update_question(first.id, text="Kept")
        extended = ExamSetup(
            mixed_setup.school_name, mixed_setup.subject, mixed_setup.class_name, 66,
            mixed_setup.question_types + (QuestionTypeAllocation(QuestionType.TRUE_FALSE, 6, 3),),
        )
        bank.rebind(extended)
        bank.materialize()

        added = bank.questions_for(QuestionType.TRUE_FALSE)
        assert len(added) == 3
        assert all(q.marks == 2.0 for q in added)
        assert len(bank) == 14
        assert bank.get(first.id).text == "Kept"

    def test_materialize_when_every_type_swapped_then_finalize_requires_new_questions(self, bank, mixed_setup):
        _complete_all(bank)
        swapped = ExamSetup(
            mixed_setup.school_name, mixed_setup.subject, mixed_setup.class_name, 10,
            (QuestionTypeAllocation(QuestionType.LONG_ANSWER, 10, 2),),
        )
        bank.rebind(swapped)
        bank.materialize()

        assert len(bank.questions_for(QuestionType.LONG_ANSWER)) == 2
        assert bank.total_question_count() == 2
        with pytest.raises(MissingFieldError):
            bank.finalize()


class TestEdits:
    """Tests for question, MCQ, paragraph and match edits."""

    # ─────────────────────────────────────────────────────────────────────────
    # Question level
    # ─────────────────────────────────────────────────────────────────────────

    def test_update_question_when_one_edited_then_siblings_untouched(self, bank):
        first, second = bank.questions_for(QuestionType.SHORT_ANSWER)[:2]
        bank.update_question(first.id, text="What is 2+2?", marks=3)
        assert bank.get(first.id).text == "What is 2+2?"
        assert bank.get(first.id).marks == 3
        assert bank.get(second.id) == second

    def test_add_question_when_siblings_edited_then_uses_allocation_default(self, bank):
        sa = bank.questions_for(QuestionType.SHORT_ANSWER)[0]
        bank.update_question(sa.id, marks=9)
        added = bank.add_question(QuestionType.SHORT_ANSWER)
        assert added.marks == 5.0
        assert bank.questions[-1] is added
        assert len(bank.questions_for(QuestionType.SHORT_ANSWER)) == 5

    def test_add_question_when_type_not_allocated_then_raises_key_error(self, bank):
        with pytest.raises(KeyError):
            bank.add_question(QuestionType.TRUE_FALSE)

    def test_delete_question_when_removed_then_other_marks_not_rebalanced(self, bank):
        first, *rest = bank.questions_for(QuestionType.SHORT_ANSWER)
        bank.delete_question(first.id)
        assert len(bank.questions_for(QuestionType.SHORT_ANSWER)) == 3
        assert all(q.marks == 5.0 for q in bank.questions_for(QuestionType.SHORT_ANSWER))

    def test_get_when_unknown_id_then_raises_key_error(self, bank):
        with pytest.raises(KeyError):
            bank.get("missing")

    def test_set_image_when_url_given_then_attached_with_tier_and_position(self, bank):
        q = bank.questions[0]
        bank.set_image(q.id, " https://example.com/a.png ", size="small", position=ImagePosition.RIGHT)
        image = bank.get(q.id).image
        assert image.url == "https://example.com/a.png"
        assert image.size is ImageSize.SMALL
        assert image.position is ImagePosition.RIGHT

    def test_set_image_when_blank_url_then_image_removed(self, bank):
        q = bank.questions[0]
        bank.set_image(q.id, "a.png")
        bank.set_image(q.id, "   ")
        assert bank.get(q.id).image is None

    def test_totals_when_marks_edited_then_reflect_entered_marks(self, bank):
        sa = bank.questions_for(QuestionType.SHORT_ANSWER)[0]
        bank.update_question(sa.id, marks=6)
        assert bank.total_marks_entered() == 61
        assert bank.total_question_count() == 11

    def test_section_summaries_when_question_added_then_count_updates(self, bank):
        bank.add_question(QuestionType.MCQ)
        summary = bank.section_summaries()[0]
        assert summary.question_type is QuestionType.MCQ
        assert summary.question_count == 6
        assert summary.allocated_marks == 10
        assert summary.marks_per_question == 2.0

    # ─────────────────────────────────────────────────────────────────────────
    # MCQ
    # ─────────────────────────────────────────────────────────────────────────

    def test_set_option_when_index_in_range_then_only_that_option_changes(self, bank):
        q = bank.questions_for(QuestionType.MCQ)[0]
        bank.set_option(q.id, 2, "Paris")
        assert bank.get(q.id).mcq.options == ("", "", "Paris", "")

    def test_set_option_when_index_out_of_range_then_raises_index_error(self, bank):
        q = bank.questions_for(QuestionType.MCQ)[0]
        with pytest.raises(IndexError):
            bank.set_option(q.id, 4, "E")

    def test_set_correct_answer_when_invalid_label_then_raises_error(self, bank):
        q = bank.questions_for(QuestionType.MCQ)[0]
        with pytest.raises(ValueError):
            bank.set_correct_answer(q.id, "E")

    def test_set_option_when_not_mcq_then_raises_type_error(self, bank):
        q = bank.questions_for(QuestionType.SHORT_ANSWER)[0]
        with pytest.raises(TypeError):
            bank.set_option(q.id, 0, "x")

    # ─────────────────────────────────────────────────────────────────────────
    # Paragraph
    # ─────────────────────────────────────────────────────────────────────────

    def test_add_sub_question_when_added_then_zero_marks(self, bank):
        q = bank.questions_for(QuestionType.PARAGRAPH)[0]
        sub = bank.add_sub_question(q.id)
        assert sub.marks == 0
        assert bank.get(q.id).paragraph.sub_questions == (sub,)

    def test_sub_question_marks_when_edited_then_running_total_updates(self, bank):
        q = bank.questions_for(QuestionType.PARAGRAPH)[0]
        a = bank.add_sub_question(q.id)
        b = bank.add_sub_question(q.id)
        bank.update_sub_question(q.id, a.id, text="Who?", marks=10)
        bank.update_sub_question(q.id, b.id, marks=5)
        assert bank.sub_question_marks(q.id) == 15
        assert bank.sub_question_marks_match(q.id) is True

    def test_sub_question_marks_when_not_matching_then_still_editable(self, bank):
        q = bank.questions_for(QuestionType.PARAGRAPH)[0]
        a = bank.add_sub_question(q.id)
        bank.update_sub_question(q.id, a.id, marks=3)
        assert bank.sub_question_marks_match(q.id) is False

    def test_delete_sub_question_when_unknown_then_raises_key_error(self, bank):
        q = bank.questions_for(QuestionType.PARAGRAPH)[0]
        with pytest.raises(KeyError):
            bank.delete_sub_question(q.id, "nope")

    def test_set_sub_question_image_when_set_then_stored_on_sub_question(self, bank):
        q = bank.questions_for(QuestionType.PARAGRAPH)[0]
        sub = bank.add_sub_question(q.id)
        bank.set_sub_question_image(q.id, sub.id, "map.png", size=ImageSize.LARGE)
        stored = bank.get(q.id).paragraph.sub_questions[0]
        assert stored.image.url == "map.png"
        assert stored.image.size is ImageSize.LARGE

    def test_set_paragraph_text_when_set_then_stored(self, bank):
        q = bank.questions_for(QuestionType.PARAGRAPH)[0]
        bank.set_paragraph_text(q.id, "Once upon a time")
        assert bank.get(q.id).paragraph.paragraph == "Once upon a time"


class TestMatchPairs:
    """Tests for match-the-following pair edits."""

    @pytest.fixture
    def match_bank(self):
        setup = ExamSetup("S", "M", "1", 4, (QuestionTypeAllocation(QuestionType.MATCH_THE_FOLLOWING, 4, 1),))
        bank = QuestionBank(setup)
        bank.materialize()
        return bank

    def test_add_match_pair_when_added_then_both_sides_empty(self, match_bank):
        q = match_bank.questions[0]
        pair = match_bank.add_match_pair(q.id)
        assert (pair.left, pair.right) == ("", "")

    def test_update_match_pair_when_left_only_then_right_kept(self, match_bank):
        q = match_bank.questions[0]
        pair = match_bank.add_match_pair(q.id)
        match_bank.update_match_pair(q.id, pair.id, right="Oxygen")
        match_bank.update_match_pair(q.id, pair.id, left="O")
        stored = match_bank.get(q.id).match.pairs[0]
        assert (stored.left, stored.right) == ("O", "Oxygen")

    def test_delete_match_pair_when_deleted_then_removed(self, match_bank):
        q = match_bank.questions[0]
        keep = match_bank.add_match_pair(q.id)
        drop = match_bank.add_match_pair(q.id)
        match_bank.delete_match_pair(q.id, drop.id)
        assert [p.id for p in match_bank.get(q.id).match.pairs] == [keep.id]


class TestFinalize:
    """Tests for finalize() validation."""

    def test_finalize_when_all_complete_then_returns_questions(self, bank):
        _complete_all(bank)
        assert len(bank.finalize()) == 11

    def test_finalize_when_question_text_empty_then_raises_missing_field(self, bank):
        _complete_all(bank)
        sa = bank.questions_for(QuestionType.SHORT_ANSWER)[1]
        bank.update_question(sa.id, text="   ")
        with pytest.raises(MissingFieldError, match="Please fill all question texts") as exc_info:
            bank.finalize()
        assert exc_info.value.path == sa.id

    def test_finalize_when_mcq_missing_answer_then_raises_incomplete_mcq(self, bank):
        _complete_all(bank)
        mcq = bank.questions_for(QuestionType.MCQ)[0]
        bank.set_correct_answer(mcq.id, None)
        with pytest.raises(IncompleteMcqError, match="Please fill all MCQ options"):
            bank.finalize()

    def test_finalize_when_mcq_option_blank_then_raises_incomplete_mcq(self, bank):
        _complete_all(bank)
        mcq = bank.questions_for(QuestionType.MCQ)[2]
        bank.set_option(mcq.id, 3, " ")
        with pytest.raises(IncompleteMcqError):
            bank.finalize()

    def test_finalize_when_text_and_mcq_both_bad_then_text_reported_first(self, bank):
        with pytest.raises(MissingFieldError):
            bank.finalize()

    def test_finalize_when_paragraph_marks_do_not_match_then_still_passes(self, bank):
        _complete_all(bank)
        para = bank.questions_for(QuestionType.PARAGRAPH)[0]
        sub = bank.add_sub_question(para.id)
        bank.update_sub_question(para.id, sub.id, marks=1)
        assert len(bank.finalize()) == 11

    def test_rebind_when_type_dropped_then_orphans_kept_but_not_finalized(self, bank, mixed_setup):
        _complete_all(bank)
        reduced = ExamSetup(
            mixed_setup.school_name, mixed_setup.subject, mixed_setup.class_name, 30,
            (mixed_setup.question_types[2],),
        )
        bank.rebind(reduced)
        assert len(bank) == 11
        finalized = bank.finalize()
        assert {q.question_type for q in finalized} == {QuestionType.PARAGRAPH}
        assert bank.total_question_count() == 2
