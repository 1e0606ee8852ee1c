"""
Module: images

Purpose:
    Image reference attached to a question or sub-question: where the
    image lives plus how large and where on the line it is printed.

Key Classes:
    - ImageSize: small / medium / large tier
    - ImagePosition: left / center / right alignment
    - ImageRef: Immutable (url, size, position) triple

Used By:
    - core.models.questions: Question.image, SubQuestion.image
    - render.images: Resolving the reference into an <img> source
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ImageSize(Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class ImagePosition(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class ImageRef:
    """
    Reference to an image shown with a question (immutable).

    Attributes:
        url: Remote URL, data: URI, or local file path
        size: Size tier (default medium)
        position: Horizontal alignment (default left)

    Invariants:
        - url is non-blank

    Example:
        >>> ImageRef("https://example.com/cell.png", ImageSize.SMALL)
        ImageRef('https://example.com/cell.png', small, left)
    """

    url: str
    size: ImageSize = ImageSize.MEDIUM
    position: ImagePosition = ImagePosition.LEFT

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValueError("Image url cannot be blank")
        # Accept plain strings from form widgets ("small", "center", ...)
        if not isinstance(self.size, ImageSize):
            object.__setattr__(self, "size", ImageSize(self.size))
        if not isinstance(self.position, ImagePosition):
            object.__setattr__(self, "position", ImagePosition(self.position))

    def __repr__(self) -> str:
        return f"ImageRef({self.url!r}, {self.size.value}, {self.position.value})"
