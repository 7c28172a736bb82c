"""File delivery backend that writes into a local directory."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Union

from ..config import MIN_FREE_SPACE_MB
from ..exceptions import InsufficientDiskSpaceError
from ..types import DeliveredFile
from .base import FileDelivery

LOGGER = logging.getLogger(__name__)


def ensure_directory_writable(directory: Union[str, Path], required_mb: int = MIN_FREE_SPACE_MB) -> Path:
    """Create ``directory`` if needed and check it can receive files."""

    path = Path(directory)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as exc:
        raise InsufficientDiskSpaceError(
            f"Permission denied while creating directory: {directory}."
        ) from exc
    except OSError as exc:
        raise InsufficientDiskSpaceError(
            f"Cannot create directory: {directory}. Error: {exc}"
        ) from exc

    try:
        with tempfile.NamedTemporaryFile(dir=path, prefix=".pdf_rasterizer_probe"):
            pass
    except OSError as exc:
        raise InsufficientDiskSpaceError(
            f"Cannot write to directory: {directory}. Error: {exc}"
        ) from exc

    try:
        free = shutil.disk_usage(str(path)).free
    except OSError:
        LOGGER.debug("Disk usage unavailable for %s", path)
        return path

    if free / (1024 * 1024) < required_mb:
        raise InsufficientDiskSpaceError(
            "Insufficient disk space in {directory}. Available {available:.1f} MB, required {required} MB.".format(
                directory=directory,
                available=free / (1024 * 1024),
                required=required_mb,
            )
        )
    return path


class DirectoryDelivery(FileDelivery):
    """Write delivered files into ``output_dir``."""

    def __init__(self, output_dir: Union[str, Path], *, required_mb: int = MIN_FREE_SPACE_MB) -> None:
        self.output_dir = Path(output_dir)
        self.required_mb = max(0, required_mb)
        self._checked = False

    def _target_dir(self) -> Path:
        if not self._checked:
            ensure_directory_writable(self.output_dir, required_mb=self.required_mb)
            self._checked = True
        return self.output_dir

    def deliver(self, item: DeliveredFile) -> Path:
        destination = self._target_dir() / Path(item.filename).name
        try:
            destination.write_bytes(item.data)
        except OSError as exc:
            raise InsufficientDiskSpaceError(
                f"Unable to write file: {destination}. Error: {exc}"
            ) from exc
        LOGGER.info("Wrote %s (%d bytes)", destination, item.size_bytes)
        return destination

    def deliver_all(self, items: Iterable[DeliveredFile]) -> List[Path]:
        return [self.deliver(item) for item in items]
