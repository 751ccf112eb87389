"""File discovery: resolve CLI targets into the ordered list of inputs to check."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from archlint.microtask.line_counter import supported_extensions

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)

ADR_EXTENSION = ".md"


class TargetNotFoundError(Exception):
    """Raised when a target path does not exist."""

    def __init__(self, target: Path) -> None:
        self.target = target
        super().__init__(f"path not found: {target}")


def _require(target: Path) -> Path:
    if not target.exists():
        raise TargetNotFoundError(target)
    return target


def collect_adr_files(target: Path) -> list[Path]:
    """Return the ADR Markdown files designated by *target*.

    A file is returned as-is when it has a ``.md`` suffix.  A directory is
    scanned non-recursively.  Results are sorted by path.

    Raises
    ------
    TargetNotFoundError
        When *target* does not exist.
    """
    root = _require(target)
    if root.is_file():
        return [root] if root.suffix == ADR_EXTENSION else []

    files = sorted(
        p for p in root.iterdir() if p.is_file() and p.suffix == ADR_EXTENSION
    )
    logger.debug("Found %d ADR file(s) in %s", len(files), root)
    return files


def _walk(directory: Path, extensions: frozenset[str], *, recursive: bool) -> Iterable[Path]:
    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            if entry.is_symlink():
                # Symlinked directories can point back up the tree.
                logger.debug("Skipping symlinked directory %s", entry)
            elif recursive:
                yield from _walk(entry, extensions, recursive=recursive)
            else:
                logger.debug("Skipping directory %s (not recursive)", entry)
        elif entry.suffix.lower() in extensions:
            yield entry


def collect_source_files(target: Path, *, recursive: bool = False) -> list[Path]:
    """Return the source files under *target* with a supported extension.

    Raises
    ------
    TargetNotFoundError
        When *target* does not exist.
    """
    root = _require(target)
    extensions = supported_extensions()
    if root.is_file():
        return [root] if root.suffix.lower() in extensions else []

    files = list(_walk(root, extensions, recursive=recursive))
    logger.debug("Found %d source file(s) in %s", len(files), root)
    return files


def read_source(path: Path) -> str:
    """Read *path* as UTF-8, replacing undecodable bytes.

    ``OSError`` propagates to the caller.
    """
    return path.read_text(encoding="utf-8", errors="replace")
