"""Write the generated README to disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ghprofile.config import atomic_write
from ghprofile.exceptions import OutputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteResult:
    path: Path
    overwritten: bool


def write_output(content: str, path: Union[str, Path], overwrite: bool = True) -> WriteResult:
    """Atomically write *content* to *path*, creating parent directories.

    Raises:
        OutputError: If *path* exists and *overwrite* is false, or the
            write fails.
    """
    target = Path(path)
    existed = target.exists()
    if existed and not overwrite:
        raise OutputError(f"{target} already exists (use --force to overwrite)")
    if existed and target.is_dir():
        raise OutputError(f"{target} is a directory")

    try:
        atomic_write(target, content)
    except OSError as exc:
        raise OutputError(f"Cannot write {target}: {exc}") from exc

    logger.debug("Wrote %d characters to %s", len(content), target)
    return WriteResult(path=target, overwritten=existed)
