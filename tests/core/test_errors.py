"""
Unit Tests for the validation error hierarchy.
"""

from exam_builder.core.errors import (
    AllocationError,
    AllocationMismatchError,
    ExamValidationError,
    IncompleteMcqError,
    InvalidCountError,
    MissingFieldError,
)


class TestErrors:
    """Tests for ExamValidationError and its subclasses."""

    def test_init_when_errors_given_then_kept_as_list(self):
        e = ExamValidationError("Bad input", path="subject", errors=("a", "b"))
        assert e.message == "Bad input"
        assert e.path == "subject"
        assert e.errors == ["a", "b"]
        assert str(e) == "Bad input"

    def test_mismatch_when_whole_numbers_then_message_has_no_decimals(self):
        e = AllocationMismatchError(55.0, 60)
        assert e.message == "Total allocated marks (55) must equal total marks (60)"
        assert e.allocated == 55.0
        assert e.total == 60
        assert e.path == "question_types"

    def test_mismatch_when_fractional_then_message_keeps_fraction(self):
        assert "(59.5)" in AllocationMismatchError(59.5, 60).message

    def test_hierarchy_when_caught_as_base_then_all_subclasses_match(self):
        for cls in (MissingFieldError, InvalidCountError, IncompleteMcqError):
            assert issubclass(cls, ExamValidationError)
        assert issubclass(AllocationMismatchError, AllocationError)
        assert issubclass(InvalidCountError, AllocationError)
