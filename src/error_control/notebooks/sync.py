"""Substitution of shared fragments into delimited notebook regions."""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from error_control.constants import NOTEBOOK_HEADER, NOTEBOOK_SUFFIX
from error_control.domain_models.notebook import (
    FileSyncResult,
    FileSyncStatus,
    Fragment,
    SyncMode,
    SyncReport,
)
from error_control.exceptions import NotebookSyncError
from error_control.infrastructure import io

logger = logging.getLogger(__name__)


def is_notebook(text: str, header: str = NOTEBOOK_HEADER) -> bool:
    return text.startswith(header)


def _indentation_before(text: str) -> str:
    """Whitespace between the last newline of ``text`` and its end."""
    line = text.rsplit("\n", 1)[-1]
    return line if not line.strip() else ""


def replace_region(text: str, delimiter: str, content: str) -> tuple[str, bool]:
    """
    Replace what lies between the two occurrences of ``delimiter``.

    The region is only touched when the delimiter occurs exactly twice.
    The first line of ``content`` is indented to the column of the opening
    delimiter; continuation lines are kept verbatim.

    Returns:
        The new text and whether a region was found.
    """
    parts = text.split(delimiter)
    if len(parts) != 3:
        return text, False

    indent = _indentation_before(parts[0])
    parts[1] = f"\n{indent}{content}\n{indent}"
    return delimiter.join(parts), True


def sync_notebook(
    path: Path, fragments: Sequence[Fragment], header: str = NOTEBOOK_HEADER
) -> FileSyncResult:
    """
    Apply every fragment to one notebook, writing it back if it changed.
    """
    try:
        before = io.read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Could not read {path}: {e}"
        raise NotebookSyncError(msg) from e

    if not is_notebook(before, header):
        logger.info(f"{path} is not a notebook")
        return FileSyncResult(path=path, status=FileSyncStatus.SKIPPED_NOT_NOTEBOOK)

    text = before
    replaced: list[str] = []
    missing: list[str] = []
    for fragment in fragments:
        text, found = replace_region(text, fragment.delimiter, fragment.content)
        if found:
            logger.info(f"{path} : {fragment.name} replaced")
            replaced.append(fragment.name)
        else:
            logger.info(f"{path} : no {fragment.name} delimited")
            missing.append(fragment.name)

    if not replaced:
        return FileSyncResult(path=path, status=FileSyncStatus.NO_REGIONS, missing=missing)

    if text == before:
        logger.debug(f"{path} already up to date")
        status = FileSyncStatus.UNCHANGED
    else:
        try:
            io.write_text(path, text)
        except OSError as e:
            msg = f"Could not write {path}: {e}"
            raise NotebookSyncError(msg) from e
        logger.info(f"{path} written")
        status = FileSyncStatus.WRITTEN

    return FileSyncResult(path=path, status=status, replaced=replaced, missing=missing)


def iter_notebook_files(directory: Path) -> list[Path]:
    if not directory.is_dir():
        msg = f"Notebook directory {directory} does not exist"
        raise NotebookSyncError(msg)
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == NOTEBOOK_SUFFIX)


def sync_directories(
    directories: Iterable[Path],
    fragments: Sequence[Fragment],
    mode: SyncMode,
    header: str = NOTEBOOK_HEADER,
) -> SyncReport:
    """Synchronise every notebook in each directory, in sorted order."""
    report = SyncReport(mode=mode)
    for directory in directories:
        logger.info(f"Synchronising notebooks in {directory} ({mode.value})")
        for path in iter_notebook_files(directory):
            report.results.append(sync_notebook(path, fragments, header))

    logger.info(
        f"{report.count(FileSyncStatus.WRITTEN)} written, "
        f"{report.count(FileSyncStatus.UNCHANGED)} unchanged, "
        f"{report.count(FileSyncStatus.NO_REGIONS)} without regions, "
        f"{report.count(FileSyncStatus.SKIPPED_NOT_NOTEBOOK)} skipped"
    )
    return report
