"""Sequential conversion of every page of a document."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional

from .backends.base import BackendDocument
from .converter import PageConverter
from .exceptions import ConversionCancelled, ConversionFailure, InvalidStateError
from .types import ConversionRun, ConversionSettings, PageResult, RunStatus
from .utils import time_block
from .viewport import round_half_up

LOGGER = logging.getLogger(__name__)

# (page_index, page_count, progress_percent)
ProgressCallback = Callable[[int, int, int], None]


def progress_for(page_index: int, page_count: int) -> int:
    """Percentage reported after ``page_index`` of ``page_count`` pages."""

    percent = round_half_up(page_index / page_count * 100)
    if page_index < page_count:
        # Large documents would otherwise round to 100 before the last page
        percent = min(percent, 99)
    return percent


class ConversionPipeline:
    """
    Convert pages one at a time, in order, and track the run state.

    The pipeline owns a single :class:`ConversionRun`. A run moves from
    ``idle`` to ``processing`` and ends in ``done``, ``error`` or
    ``cancelled``; :meth:`reset` returns it to ``idle``. Between pages the
    pipeline passes a checkpoint where cancellation and resets take effect.
    """

    def __init__(self, converter: PageConverter) -> None:
        self.converter = converter
        self._state = ConversionRun()
        self._cancel_requested = False

    @property
    def state(self) -> ConversionRun:
        return self._state

    @property
    def status(self) -> RunStatus:
        return self._state.status

    @property
    def progress_percent(self) -> int:
        return self._state.progress_percent

    @property
    def results(self) -> List[PageResult]:
        return list(self._state.results)

    def reset(self) -> None:
        """Discard the current run and return to ``idle``."""

        if self._state.status is not RunStatus.IDLE:
            LOGGER.info("Resetting %s run", self._state.status.value)
        self._state = ConversionRun()
        self._cancel_requested = False

    def cancel(self) -> None:
        """Ask an in-flight run to stop at its next checkpoint."""

        if self._state.status is RunStatus.PROCESSING:
            self._cancel_requested = True

    # ------------------------------------------------------------------
    # Run steps
    # ------------------------------------------------------------------
    def _begin(self, document: BackendDocument, settings: ConversionSettings) -> ConversionRun:
        if self._state.status is not RunStatus.IDLE:
            raise InvalidStateError(
                f"Cannot start a run while the previous one is '{self._state.status.value}'. Call reset() first."
            )
        run = self._state
        run.start(document.num_pages)
        self._cancel_requested = False
        LOGGER.info(
            "Converting %s: %d page(s) to %s at scale %s (max width %s)",
            document.name,
            document.num_pages,
            settings.output_format.value,
            settings.base_scale,
            settings.max_width_pixels or "none",
        )
        return run

    def _convert_page(
        self,
        run: ConversionRun,
        document: BackendDocument,
        settings: ConversionSettings,
        page_index: int,
        on_progress: Optional[ProgressCallback],
    ) -> None:
        try:
            page = document.get_page(page_index)
            plan = self.converter.plan_for(page, settings)
            result = self.converter.convert(page, plan, settings)
        except Exception as exc:
            failure = ConversionFailure(page_index, exc)
            run.fail(failure)
            LOGGER.error("%s", failure)
            raise failure from exc
        except BaseException as exc:
            self._abort(run, exc, f"Conversion interrupted on page {page_index}")
            raise

        percent = progress_for(page_index, run.page_count)
        run.record(result, percent)
        if on_progress:
            try:
                on_progress(page_index, run.page_count, percent)
            except BaseException as exc:
                self._abort(run, exc, f"Progress callback failed after page {page_index}")
                raise

    @staticmethod
    def _abort(run: ConversionRun, exc: BaseException, message: str) -> None:
        if run.status is RunStatus.PROCESSING:
            run.fail(exc)
        LOGGER.error("%s: %r", message, exc)

    def _checkpoint(self, run: ConversionRun, pages_remaining: bool) -> None:
        if run is not self._state:
            raise ConversionCancelled(run.pages_completed, "Conversion run was reset.")
        if self._cancel_requested and pages_remaining:
            run.cancel()
            LOGGER.warning("Conversion cancelled after %d page(s)", run.pages_completed)
            raise ConversionCancelled(run.pages_completed)

    def _finish(self, run: ConversionRun) -> List[PageResult]:
        run.finish()
        LOGGER.info("Conversion finished: %d page(s)", run.pages_completed)
        return list(run.results)

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------
    def run(
        self,
        document: BackendDocument,
        settings: ConversionSettings,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[PageResult]:
        """
        Convert every page of ``document``.

        Raises:
            ConversionFailure: On the first page that cannot be converted
            ConversionCancelled: If the run was cancelled or reset between pages
            InvalidStateError: If the pipeline is not idle
        """
        run = self._begin(document, settings)
        with time_block(LOGGER, f"Conversion of {document.name}"):
            for page_index in range(1, run.page_count + 1):
                self._convert_page(run, document, settings, page_index, on_progress)
                self._checkpoint(run, page_index < run.page_count)
        return self._finish(run)

    async def run_async(
        self,
        document: BackendDocument,
        settings: ConversionSettings,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[PageResult]:
        """Same as :meth:`run`, yielding to the event loop after every page."""

        run = self._begin(document, settings)
        with time_block(LOGGER, f"Conversion of {document.name}"):
            for page_index in range(1, run.page_count + 1):
                self._convert_page(run, document, settings, page_index, on_progress)
                try:
                    await asyncio.sleep(0)
                except asyncio.CancelledError:
                    if run.status is RunStatus.PROCESSING:
                        run.cancel()
                    LOGGER.warning("Conversion task cancelled after %d page(s)", run.pages_completed)
                    raise
                self._checkpoint(run, page_index < run.page_count)
        return self._finish(run)


__all__ = ["ConversionPipeline", "ProgressCallback", "progress_for"]
