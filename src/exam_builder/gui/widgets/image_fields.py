"""
Image reference inputs (url, size tier, alignment) shared by question and
sub-question editors.
"""
from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QComboBox, QHBoxLayout, QLineEdit, QWidget

from exam_builder.core.models import ImagePosition, ImageRef, ImageSize


class ImageFields(QWidget):
    """Emits `changed(url, size, position)` whenever any input changes."""

    changed = Signal(str, str, str)

    def __init__(self, image: Optional[ImageRef] = None, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.url_edit = QLineEdit()
        self.url_edit.setPlaceholderText("Image URL or file path (optional)")
        layout.addWidget(self.url_edit, stretch=1)

        self.size_combo = QComboBox()
        for size in ImageSize:
            self.size_combo.addItem(size.value.capitalize(), size.value)
        layout.addWidget(self.size_combo)

        self.position_combo = QComboBox()
        for position in ImagePosition:
            self.position_combo.addItem(position.value.capitalize(), position.value)
        layout.addWidget(self.position_combo)

        if image is not None:
            self.url_edit.setText(image.url)
            self.size_combo.setCurrentIndex(self.size_combo.findData(image.size.value))
            self.position_combo.setCurrentIndex(self.position_combo.findData(image.position.value))
        else:
            self.size_combo.setCurrentIndex(self.size_combo.findData(ImageSize.MEDIUM.value))
            self.position_combo.setCurrentIndex(self.position_combo.findData(ImagePosition.LEFT.value))

        self.url_edit.textChanged.connect(self._emit)
        self.size_combo.currentIndexChanged.connect(self._emit)
        self.position_combo.currentIndexChanged.connect(self._emit)

    def _emit(self, *_args) -> None:
        self.changed.emit(
            self.url_edit.text(),
            self.size_combo.currentData(),
            self.position_combo.currentData(),
        )
