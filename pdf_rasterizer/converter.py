"""Single-page conversion: plan, rasterize, encode."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .backends.base import ImageEncoder, PageHandle, Rasterizer, Surface
from .exceptions import RenderFailure
from .types import ConversionSettings, PageResult, ViewportPlan
from .viewport import plan as plan_viewport

LOGGER = logging.getLogger(__name__)

SurfaceFactory = Callable[[int, int], Surface]


class PageConverter:
    """Drive one page through rasterization and encoding."""

    def __init__(
        self,
        rasterizer: Rasterizer,
        encoder: ImageEncoder,
        *,
        surface_factory: Optional[SurfaceFactory] = None,
    ) -> None:
        self.rasterizer = rasterizer
        self.encoder = encoder
        self.surface_factory: SurfaceFactory = surface_factory or encoder.new_surface

    @staticmethod
    def plan_for(page: PageHandle, settings: ConversionSettings) -> ViewportPlan:
        return plan_viewport(page.width, page.height, settings.base_scale, settings.max_width_pixels)

    def convert(self, page: PageHandle, plan: ViewportPlan, settings: ConversionSettings) -> PageResult:
        """
        Rasterize ``page`` into a surface sized by ``plan`` and encode it.

        Raises:
            RenderFailure: If allocation, rasterization or encoding fails
        """
        try:
            surface = self.surface_factory(plan.width_pixels, plan.height_pixels)
            self.rasterizer.render(page, surface, plan.effective_scale)
            quality = settings.quality if settings.output_format.is_lossy else None
            data = self.encoder.encode(surface, settings.output_format, quality)
        except RenderFailure:
            raise
        except Exception as exc:
            LOGGER.warning("Page %d failed to render: %s", page.page_index, exc)
            raise RenderFailure(page.page_index, exc) from exc

        result = PageResult(
            page_index=page.page_index,
            data=data,
            width_pixels=surface.width,
            height_pixels=surface.height,
            image_format=settings.output_format,
        )
        LOGGER.debug(
            "Page %d converted to %dx%d %s (%d bytes)",
            page.page_index,
            result.width_pixels,
            result.height_pixels,
            settings.output_format.value,
            result.size_bytes,
        )
        return result

    def close(self) -> None:
        self.rasterizer.close()


__all__ = ["PageConverter", "SurfaceFactory"]
