"""
Theme definitions for the Exam Paper Builder GUI.
"""


class Colors:
    # Primary Colors
    PRIMARY_BLUE = "#0364B8"
    PRIMARY_BLUE_HOVER = "#0A2767"

    # Backgrounds
    BACKGROUND = "#f5f5f5"
    SURFACE = "#ffffff"
    HOVER = "#f0f0f0"
    DISABLED_BG = "#e0e0e0"

    # Text
    TEXT_PRIMARY = "#1f1f1f"
    TEXT_SECONDARY = "#666666"
    TEXT_DISABLED = "#757575"
    TEXT_ON_PRIMARY = "#ffffff"

    # Borders
    BORDER = "#e0e0e0"
    BORDER_FOCUS = "#28A8EA"

    # Status
    ERROR = "#d32f2f"
    SUCCESS = "#388e3c"
    WARNING = "#f57c00"

    SELECTION_BG = "#F0F9FF"
    SELECTION_TEXT = "#1f1f1f"


class Fonts:
    UI_FONT = "-apple-system, 'SF Pro Text', 'Segoe UI', Roboto, Helvetica, Arial, sans-serif"

    H1 = "18pt"
    BODY = "13pt"
    SMALL = "11pt"

    WEIGHT_MEDIUM = "500"
    WEIGHT_BOLD = "600"


class Styles:
    # Common QSS fragments

    BUTTON_PRIMARY = f"""
        QPushButton {{
            background-color: {Colors.PRIMARY_BLUE};
            color: {Colors.TEXT_ON_PRIMARY};
            border-radius: 6px;
            padding: 8px 16px;
            font-weight: {Fonts.WEIGHT_MEDIUM};
            border: none;
        }}
        QPushButton:hover {{
            background-color: {Colors.PRIMARY_BLUE_HOVER};
        }}
        QPushButton:disabled {{
            background-color: {Colors.DISABLED_BG};
            color: {Colors.TEXT_DISABLED};
        }}
    """

    BUTTON_SECONDARY = f"""
        QPushButton {{
            background-color: {Colors.SURFACE};
            color: {Colors.TEXT_PRIMARY};
            border: 1px solid {Colors.BORDER};
            border-radius: 6px;
            padding: 8px 16px;
            font-weight: {Fonts.WEIGHT_MEDIUM};
        }}
        QPushButton:hover {{
            background-color: {Colors.HOVER};
            border-color: {Colors.BORDER_FOCUS};
        }}
    """

    BUTTON_DANGER = f"""
        QPushButton {{
            background-color: transparent;
            color: {Colors.ERROR};
            border: none;
            padding: 4px 8px;
        }}
        QPushButton:hover {{
            background-color: {Colors.HOVER};
        }}
    """

    PAGE_TITLE = f"font-size: {Fonts.H1}; font-weight: {Fonts.WEIGHT_BOLD};"
    HINT = f"color: {Colors.TEXT_SECONDARY}; font-size: {Fonts.SMALL};"


def status_color(ok: bool) -> str:
    """Green when a running total matches its target, orange otherwise."""
    return Colors.SUCCESS if ok else Colors.WARNING


GLOBAL_STYLESHEET = f"""
    * {{
        font-family: {Fonts.UI_FONT};
        font-size: {Fonts.BODY};
        color: {Colors.TEXT_PRIMARY};
    }}

    QMainWindow, QWidget {{
        background-color: {Colors.BACKGROUND};
    }}

    QLabel {{
        background-color: transparent;
    }}

    QStatusBar {{
        background-color: {Colors.SURFACE};
        color: {Colors.TEXT_SECONDARY};
    }}

    QGroupBox {{
        background-color: {Colors.SURFACE};
        border: 1px solid {Colors.BORDER};
        border-radius: 6px;
        margin-top: 12px;
        padding-top: 8px;
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 8px;
        padding: 0 4px;
        background-color: {Colors.BACKGROUND};
    }}

    QLineEdit, QSpinBox, QDoubleSpinBox, QPlainTextEdit, QComboBox {{
        border: 1px solid {Colors.BORDER};
        border-radius: 6px;
        padding: 4px 6px;
        background: {Colors.SURFACE};
        selection-background-color: {Colors.SELECTION_BG};
        selection-color: {Colors.SELECTION_TEXT};
    }}
    QLineEdit:focus, QSpinBox:focus, QDoubleSpinBox:focus, QPlainTextEdit:focus {{
        border: 1px solid {Colors.BORDER_FOCUS};
    }}

    QScrollArea {{
        background: {Colors.BACKGROUND};
        border: none;
    }}
"""


def apply_global_stylesheet(app) -> None:
    """Apply the global stylesheet to a QApplication."""
    app.setStyleSheet(GLOBAL_STYLESHEET)
