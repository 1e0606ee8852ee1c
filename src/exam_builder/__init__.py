"""Top-level package for the Exam Paper Builder.

Provides subpackages:
- exam_builder.core – immutable exam models and validation errors
- exam_builder.setup – exam metadata and marks allocation (stage 1)
- exam_builder.bank – question content editing (stage 2)
- exam_builder.render – numbering, document rendering and export (stage 3)
- exam_builder.gui – PySide6 desktop shell
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.1"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("exam-builder")
    except Exception:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
