"""
Entry point for the PySide6 GUI.
"""
import sys


def run():
    """
    Main entry point for the GUI application.
    """
    from PySide6.QtWidgets import QApplication

    from exam_builder.gui.main_window import MainWindow
    from exam_builder.gui.styles.theme import apply_global_stylesheet

    app = QApplication(sys.argv)
    app.setApplicationName("Exam Paper Builder")
    app.setApplicationDisplayName("Exam Paper Builder")
    app.setOrganizationName("Exam Paper Builder")
    apply_global_stylesheet(app)

    window = MainWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
