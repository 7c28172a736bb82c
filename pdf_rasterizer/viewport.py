"""Viewport planning for page rasterization."""

from __future__ import annotations

import math

from .exceptions import InvalidInputError
from .types import ViewportPlan


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""

    return int(math.floor(value + 0.5))


def plan(
    intrinsic_width: float,
    intrinsic_height: float,
    base_scale: float,
    max_width_pixels: int = 0,
) -> ViewportPlan:
    """
    Compute the pixel viewport for a page.

    The page is scaled by ``base_scale``. When ``max_width_pixels`` is
    positive and the scaled width exceeds it, the scale is reduced by
    ``max_width_pixels / scaled_width`` so the width fits and the aspect
    ratio is kept. Only the width is constrained.

    Args:
        intrinsic_width: Page width in points (1x = 72 DPI)
        intrinsic_height: Page height in points
        base_scale: Requested scale factor
        max_width_pixels: Width limit in pixels, 0 for none

    Returns:
        ViewportPlan with the effective scale and pixel dimensions
    """
    if not intrinsic_width > 0 or not intrinsic_height > 0:
        raise InvalidInputError(
            f"Page dimensions must be > 0, got {intrinsic_width}x{intrinsic_height}"
        )
    if not base_scale > 0:
        raise InvalidInputError(f"Scale must be > 0, got {base_scale}")
    if max_width_pixels < 0:
        raise InvalidInputError(f"Maximum width must be >= 0, got {max_width_pixels}")

    scaled_width = intrinsic_width * base_scale
    scaled_height = intrinsic_height * base_scale

    if max_width_pixels > 0 and scaled_width > max_width_pixels:
        ratio = max_width_pixels / scaled_width
        effective_scale = base_scale * ratio
        width = round_half_up(scaled_width * ratio)
        height = round_half_up(scaled_height * ratio)
    else:
        effective_scale = base_scale
        width = round_half_up(scaled_width)
        height = round_half_up(scaled_height)

    # Surfaces need at least one pixel in each direction
    return ViewportPlan(
        effective_scale=effective_scale,
        width_pixels=max(1, width),
        height_pixels=max(1, height),
    )


__all__ = ["plan", "round_half_up"]
