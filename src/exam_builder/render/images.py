"""
Module: render.images

Purpose:
    Resolve an ImageRef into the value printed in an <img src="...">.
    Remote URLs and data: URIs pass through untouched. Local image files
    are downscaled to their size tier and inlined as base64 data: URIs so
    an exported paper is a single standalone file.

    A reference that cannot be read is printed as-is: the viewer shows a
    broken image and the rest of the paper renders normally.

Key Functions:
    - resolve_image_source(): src attribute value for an image reference
    - image_style(): CSS for the <img> and its wrapper block

Dependencies:
    - PIL: Reading and downscaling local images
    - base64 (std)

Used By:
    - render.document
    - render.preview
"""

from __future__ import annotations

import base64
import logging
from io import BytesIO
from pathlib import Path
from urllib.parse import unquote, urlparse

from PIL import Image, UnidentifiedImageError

from exam_builder.config import RenderConfig
from exam_builder.core.models import ImageRef

logger = logging.getLogger(__name__)

_PASSTHROUGH_SCHEMES = ("http", "https", "data")


def resolve_image_source(image: ImageRef, config: RenderConfig) -> str:
    """
    Value for the <img> src attribute.

    Args:
        image: Image reference from a question or sub-question
        config: Render config (embedding switch and tier widths)

    Returns:
        Data URI for readable local files when embedding is on,
        otherwise the reference unchanged
    """
    url = image.url.strip()
    scheme = urlparse(url).scheme.lower()
    if scheme in _PASSTHROUGH_SCHEMES or not config.embed_local_images:
        return url

    path = _local_path(url, scheme)
    if path is None or not path.is_file():
        logger.warning(f"Image not found, leaving reference as-is: {url}")
        return url

    try:
        return _embed(path, config.width_for(image.size), config.max_image_height_px)
    except (OSError, UnidentifiedImageError) as e:
        logger.warning(f"Could not embed image {path}: {e}")
        return url


def image_style(image: ImageRef, config: RenderConfig) -> tuple[str, str]:
    """
    CSS for an image and its wrapper.

    Returns:
        (wrapper_style, img_style) strings for inline style attributes
    """
    wrapper = f"margin: 10px 0; text-align: {image.position.value};"
    img = (
        f"max-width: {config.width_for(image.size)}px; "
        f"max-height: {config.max_image_height_px}px; "
        "border: 1px solid #ddd; border-radius: 4px;"
    )
    return wrapper, img


def _local_path(url: str, scheme: str) -> Path | None:
    if scheme == "file":
        return Path(unquote(urlparse(url).path))
    # Windows drive letters parse as a one-letter scheme ("c:\\...")
    if scheme and len(scheme) > 1:
        return None
    return Path(url).expanduser()


def _embed(path: Path, max_width: int, max_height: int) -> str:
    """Downscale to fit the tier box and encode as a PNG/JPEG data URI."""
    with Image.open(path) as img:
        img.load()
        fmt = "JPEG" if img.format == "JPEG" else "PNG"
        if fmt == "JPEG" and img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        # Embed at 2x the display box so printed output stays sharp
        img.thumbnail((max_width * 2, max_height * 2))

        buffer = BytesIO()
        img.save(buffer, format=fmt)

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    mime = "image/jpeg" if fmt == "JPEG" else "image/png"
    logger.debug(f"Embedded {path.name} ({len(encoded)} base64 chars)")
    return f"data:{mime};base64,{encoded}"
