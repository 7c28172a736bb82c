"""Pillow backend implementation of the image encoder."""

from __future__ import annotations

import io
from typing import Optional

from PIL import Image

from ..config import DEFAULT_QUALITY
from ..types import ImageFormat
from .base import ImageEncoder

_PIL_FORMATS = {
    ImageFormat.PNG: "PNG",
    ImageFormat.JPEG: "JPEG",
}


def pillow_quality(quality: Optional[float]) -> int:
    """Map a 0.0-1.0 quality onto Pillow's 1-100 JPEG scale."""

    value = DEFAULT_QUALITY if quality is None else quality
    return max(1, min(100, int(round(value * 100))))


class PillowEncoder(ImageEncoder):
    """Allocate RGB surfaces and encode them with Pillow."""

    def __init__(self, *, background: str = "white", optimize: bool = False) -> None:
        self.background = background
        self.optimize = optimize

    def new_surface(self, width: int, height: int) -> Image.Image:
        return Image.new("RGB", (width, height), self.background)

    def encode(self, surface: Image.Image, image_format: ImageFormat, quality: Optional[float] = None) -> bytes:
        buffer = io.BytesIO()
        options = {"optimize": self.optimize}
        if image_format.is_lossy:
            image = surface if surface.mode == "RGB" else surface.convert("RGB")
            options["quality"] = pillow_quality(quality)
        else:
            image = surface
        image.save(buffer, format=_PIL_FORMATS[image_format], **options)
        return buffer.getvalue()
