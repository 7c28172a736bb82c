"""
Type definitions and dataclasses for PDF Rasterizer.

This module defines data structures used throughout the library.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from . import config
from .exceptions import InvalidSettingsError, InvalidStateError


class ImageFormat(str, Enum):
    """Supported output image formats."""

    PNG = "png"
    JPEG = "jpeg"

    @classmethod
    def parse(cls, value: Union[str, "ImageFormat"]) -> "ImageFormat":
        if isinstance(value, ImageFormat):
            return value
        normalized = str(value).strip().lower()
        if normalized == "jpg":
            normalized = "jpeg"
        try:
            return cls(normalized)
        except ValueError as exc:
            raise InvalidSettingsError(
                f"Unsupported output format: '{value}'. Expected 'png' or 'jpeg'."
            ) from exc

    @property
    def extension(self) -> str:
        return self.value

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def is_lossy(self) -> bool:
        return self is ImageFormat.JPEG


def _whole_number(value: Any) -> int:
    """Convert a settings-file width to ``int`` without truncating."""

    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            raise InvalidSettingsError(f"Maximum width must be a whole number, got {value!r}")
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSettingsError(f"Maximum width must be a whole number, got {value!r}")
    return value


@dataclass(frozen=True)
class ConversionSettings:
    """
    Settings applied to every page of a conversion run.

    Attributes:
        output_format: Image format of the produced pages
        quality: Encoder quality between 0.0 and 1.0 (JPEG only)
        base_scale: Multiplier against the 72 DPI intrinsic page size
        max_width_pixels: Maximum output width, 0 disables the constraint
    """
    output_format: ImageFormat = ImageFormat(config.DEFAULT_FORMAT)
    quality: float = config.DEFAULT_QUALITY
    base_scale: float = config.DEFAULT_SCALE
    max_width_pixels: int = config.DEFAULT_MAX_WIDTH

    def __post_init__(self) -> None:
        object.__setattr__(self, "output_format", ImageFormat.parse(self.output_format))

        if isinstance(self.quality, bool) or not isinstance(self.quality, (int, float)):
            raise InvalidSettingsError(f"Quality must be a number, got {self.quality!r}")
        if not config.MIN_QUALITY <= self.quality <= config.MAX_QUALITY:
            raise InvalidSettingsError(
                f"Quality must be between {config.MIN_QUALITY} and {config.MAX_QUALITY}, got {self.quality}"
            )

        if isinstance(self.base_scale, bool) or not isinstance(self.base_scale, (int, float)):
            raise InvalidSettingsError(f"Scale must be a number, got {self.base_scale!r}")
        if not self.base_scale > 0:
            raise InvalidSettingsError(f"Scale must be > 0, got {self.base_scale}")

        if isinstance(self.max_width_pixels, bool) or not isinstance(self.max_width_pixels, int):
            raise InvalidSettingsError(
                f"Maximum width must be an integer, got {self.max_width_pixels!r}"
            )
        if self.max_width_pixels < 0:
            raise InvalidSettingsError(
                f"Maximum width must be >= 0, got {self.max_width_pixels}"
            )

    @property
    def dpi(self) -> float:
        return self.base_scale * config.POINTS_PER_INCH

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ConversionSettings":
        """Build settings from a mapping using the settings-file keys."""

        unknown = sorted(set(data) - set(config.SETTINGS_KEYS))
        if unknown:
            raise InvalidSettingsError(f"Unknown settings keys: {', '.join(unknown)}")

        defaults = cls()
        max_width = data.get("max_width", defaults.max_width_pixels)
        try:
            return cls(
                output_format=ImageFormat.parse(data.get("format", defaults.output_format)),
                quality=float(data.get("quality", defaults.quality)),
                base_scale=float(data.get("scale", defaults.base_scale)),
                max_width_pixels=_whole_number(max_width),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidSettingsError(f"Invalid settings value: {exc}") from exc

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ConversionSettings":
        """Load settings from a JSON file."""

        settings_path = Path(path)
        try:
            data = json.loads(settings_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise InvalidSettingsError(f"Unable to read settings file: {path}. Error: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise InvalidSettingsError(f"Settings file is not valid JSON: {path}. Error: {exc}") from exc

        if not isinstance(data, dict):
            raise InvalidSettingsError(f"Settings file must contain a JSON object: {path}")
        return cls.from_mapping(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format": self.output_format.value,
            "quality": self.quality,
            "scale": self.base_scale,
            "max_width": self.max_width_pixels,
        }


@dataclass(frozen=True)
class ViewportPlan:
    """Pixel dimensions and scale a page is rasterized at."""

    effective_scale: float
    width_pixels: int
    height_pixels: int

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width_pixels, self.height_pixels)


@dataclass(frozen=True)
class PageResult:
    """
    Encoded image produced for one page.

    Attributes:
        page_index: 1-based page number
        data: Encoded image bytes
        width_pixels: Width of the rasterized surface
        height_pixels: Height of the rasterized surface
        image_format: Format the bytes are encoded in
    """
    page_index: int
    data: bytes = field(repr=False)
    width_pixels: int
    height_pixels: int
    image_format: ImageFormat = ImageFormat.PNG

    @property
    def filename(self) -> str:
        return f"{config.PAGE_FILENAME_PREFIX}-{self.page_index}.{self.image_format.extension}"

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.image_format.mime_type};base64,{encoded}"

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class RunStatus(str, Enum):
    """Lifecycle states of a conversion run."""

    IDLE = "idle"
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"
    CANCELLED = "cancelled"


@dataclass
class ConversionRun:
    """
    Mutable state of one conversion run.

    Only :class:`~pdf_rasterizer.pipeline.ConversionPipeline` calls the
    transition methods. Results are appended in page order and never replaced.
    """
    status: RunStatus = RunStatus.IDLE
    progress_percent: int = 0
    page_count: int = 0
    results: List[PageResult] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def pages_completed(self) -> int:
        return len(self.results)

    @property
    def is_terminal(self) -> bool:
        return self.status in (RunStatus.DONE, RunStatus.ERROR, RunStatus.CANCELLED)

    def _require(self, *allowed: RunStatus) -> None:
        if self.status not in allowed:
            expected = ", ".join(status.value for status in allowed)
            raise InvalidStateError(
                f"Run is '{self.status.value}', expected one of: {expected}"
            )

    def start(self, page_count: int) -> None:
        self._require(RunStatus.IDLE)
        if page_count < 1:
            raise InvalidStateError(f"Cannot start a run with {page_count} pages")
        self.status = RunStatus.PROCESSING
        self.page_count = page_count
        self.progress_percent = 0
        self.results = []
        self.error = None

    def record(self, result: PageResult, progress_percent: int) -> None:
        self._require(RunStatus.PROCESSING)
        expected_index = len(self.results) + 1
        if result.page_index != expected_index:
            raise InvalidStateError(
                f"Expected result for page {expected_index}, got page {result.page_index}"
            )
        if progress_percent < self.progress_percent:
            raise InvalidStateError(
                f"Progress cannot decrease ({self.progress_percent} -> {progress_percent})"
            )
        if progress_percent >= 100 and expected_index < self.page_count:
            raise InvalidStateError("Progress can only reach 100 on the last page")
        self.results.append(result)
        self.progress_percent = progress_percent

    def finish(self) -> None:
        self._require(RunStatus.PROCESSING)
        if len(self.results) != self.page_count:
            raise InvalidStateError(
                f"Run has {len(self.results)} of {self.page_count} pages and cannot finish"
            )
        self.status = RunStatus.DONE
        self.progress_percent = 100

    def fail(self, error: BaseException) -> None:
        self._require(RunStatus.PROCESSING)
        self.status = RunStatus.ERROR
        self.error = error

    def cancel(self) -> None:
        self._require(RunStatus.PROCESSING)
        self.status = RunStatus.CANCELLED


@dataclass(frozen=True)
class DeliveredFile:
    """Named byte stream ready to be handed to a delivery backend."""

    filename: str
    data: bytes = field(repr=False)
    media_type: str

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass
class PDFInfo:
    """
    PDF document information and metadata.

    Attributes:
        name: File name of the document
        num_pages: Number of pages in the PDF
        file_size: File size in bytes
        title: PDF title metadata
        author: PDF author metadata
        subject: PDF subject metadata
        creator: PDF creator application
        producer: PDF producer application
        is_encrypted: Whether the PDF is encrypted
        page_sizes: Intrinsic (width, height) of each page in points
    """
    name: str
    num_pages: int
    file_size: int
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: Optional[str] = None
    producer: Optional[str] = None
    is_encrypted: bool = False
    page_sizes: List[Tuple[float, float]] = field(default_factory=list)
