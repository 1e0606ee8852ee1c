"""
Module: config

Purpose:
    Configuration dataclass for rendering. Immutable configuration with
    validation on construction.

Key Classes:
    - RenderConfig: Fixed captions and image/match rendering options

Key Constants:
    - DEFAULT_RENDER_CONFIG: Used when callers pass no config

Used By:
    - render.document: Exported markup
    - render.preview: Live preview markup
    - render.images: Image tier widths
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from exam_builder.core.models import ImageSize

DEFAULT_INSTRUCTIONS: Tuple[str, ...] = (
    "All questions are compulsory.",
    "Read each question carefully before answering.",
    "Write your answers neatly and legibly.",
    "Marks are indicated against each question.",
)


def _default_tier_widths() -> Dict[ImageSize, int]:
    return {
        ImageSize.SMALL: 200,
        ImageSize.MEDIUM: 400,
        ImageSize.LARGE: 600,
    }


@dataclass(frozen=True)
class RenderConfig:
    """
    Configuration for rendering a paper (immutable).

    Attributes:
        academic_year_caption: Caption under the paper title
        instructions: General instruction bullets, printed in order
        image_tier_widths: Max image width in px per size tier
        max_image_height_px: Max image height in px for every tier
        embed_local_images: Inline local image files as data: URIs
        render_match_pairs: Print match-the-following pairs as a table
            (off by default; match questions get an answer line only)
        footer_text: End-of-paper marker

    Example:
        >>> config = RenderConfig(academic_year_caption="Examination - 2026")
    """

    academic_year_caption: str = "Examination - 2025"
    instructions: Tuple[str, ...] = DEFAULT_INSTRUCTIONS
    image_tier_widths: Dict[ImageSize, int] = field(default_factory=_default_tier_widths)
    max_image_height_px: int = 400
    embed_local_images: bool = True
    render_match_pairs: bool = False
    footer_text: str = "*** End of Question Paper ***"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        missing = [size for size in ImageSize if size not in self.image_tier_widths]
        if missing:
            raise ValueError(f"image_tier_widths missing tiers: {[s.value for s in missing]}")
        for size, width in self.image_tier_widths.items():
            if width <= 0:
                raise ValueError(f"image width for {size.value} must be positive: {width}")
        if self.max_image_height_px <= 0:
            raise ValueError(f"max_image_height_px must be positive: {self.max_image_height_px}")
        if not isinstance(self.instructions, tuple):
            object.__setattr__(self, "instructions", tuple(self.instructions))

    def width_for(self, size: ImageSize) -> int:
        return self.image_tier_widths[size]


DEFAULT_RENDER_CONFIG = RenderConfig()
