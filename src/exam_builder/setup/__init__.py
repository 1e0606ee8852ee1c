"""
Module: setup

Purpose:
    Stage 1: exam metadata and per-type marks allocation.

Key Classes:
    - SetupResolver: Editable setup form state, submit() emits ExamSetup
"""

from .resolver import SetupResolver, DEFAULT_TOTAL_MARKS

__all__ = ["SetupResolver", "DEFAULT_TOTAL_MARKS"]
