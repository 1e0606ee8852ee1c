"""PySide6 desktop shell for the exam paper builder."""
