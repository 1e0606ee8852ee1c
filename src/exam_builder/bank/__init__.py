"""
Module: bank

Purpose:
    Stage 2: question content editing and completeness validation.

Key Classes:
    - QuestionBank: Editable questions for one ExamSetup
    - SectionSummary: Per-section counts for editor headers
"""

from .builder import QuestionBank, SectionSummary

__all__ = ["QuestionBank", "SectionSummary"]
