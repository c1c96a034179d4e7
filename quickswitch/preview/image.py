"""Raster image decoding for terminal half-block previews.

Pillow decodes and downsamples the image; the renderer maps each pair of
pixel rows onto one terminal row.
"""

from __future__ import annotations

import struct
from pathlib import Path

from PIL import Image

from ..errors import DecodeFailure
from .payload import ImageRender

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".tif", ".tiff", ".ico"})
IMAGE_PREVIEW_MAX_WIDTH = 96
IMAGE_PREVIEW_MAX_HEIGHT = 96


def is_image_path(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def _flatten(image: Image.Image) -> Image.Image:
    """Return an RGB copy, compositing any alpha channel over black."""
    if image.mode in {"RGBA", "LA", "PA"} or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (0, 0, 0, 255))
        return Image.alpha_composite(background, rgba).convert("RGB")
    return image.convert("RGB")


def decode_image(
    path: Path,
    max_width: int = IMAGE_PREVIEW_MAX_WIDTH,
    max_height: int = IMAGE_PREVIEW_MAX_HEIGHT,
) -> ImageRender:
    """Decode ``path`` into an RGB raster no larger than ``max_width x max_height``.

    Raises ``DecodeFailure`` for unreadable or unsupported images.
    """
    # Corrupt chunks surface as SyntaxError, EOFError or struct.error from the plugins.
    try:
        with Image.open(path) as image:
            source_width, source_height = image.size
            image_format = image.format
            # JPEG can decode at a reduced scale directly.
            image.draft("RGB", (max_width, max_height))
            image.thumbnail((max_width, max_height))
            rgb = _flatten(image)
    except (OSError, ValueError, SyntaxError, EOFError, struct.error, Image.DecompressionBombError) as exc:
        raise DecodeFailure(path, f"image decode failed ({exc.__class__.__name__})") from exc

    width, height = rgb.size
    return ImageRender(
        path=path,
        width=width,
        height=height,
        rgb=rgb.tobytes(),
        source_width=source_width,
        source_height=source_height,
        image_format=image_format,
    )


__all__ = [
    "IMAGE_EXTENSIONS",
    "IMAGE_PREVIEW_MAX_WIDTH",
    "IMAGE_PREVIEW_MAX_HEIGHT",
    "is_image_path",
    "decode_image",
]
