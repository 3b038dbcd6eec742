"""
Shared fragments placed in every notebook.

Two pairs exist. The standalone pair inlines the LaTeX macros and the sidebar
so an exported notebook renders without its neighbour files. The revert pair
reads ``latex_macros.md`` and ``sidebar.md`` at runtime, which is how the notes
are edited.
"""

import logging
import re
from pathlib import Path

from error_control.constants import (
    COURSE_TITLE,
    MACROS_DELIMITER,
    MACROS_FILENAME,
    SIDEBAR_DELIMITER,
    SIDEBAR_FILENAME,
)
from error_control.domain_models.notebook import Fragment
from error_control.exceptions import FragmentError
from error_control.infrastructure import io

logger = logging.getLogger(__name__)

_MATH_BLOCK = re.compile(r"```math[ \t]*\n(.*?)```", re.DOTALL)


def _markdown_cell(text: str) -> str:
    if '"""' in text:
        msg = 'Fragment text must not contain triple double quotes (""")'
        raise FragmentError(msg)
    return f'mo.md(r"""\n{text}\n""")'


def _read(path: Path) -> str:
    try:
        return io.read_text(path)
    except OSError as e:
        msg = f"Could not read fragment source {path}: {e}"
        raise FragmentError(msg) from e


def extract_macros(source: str) -> str:
    """
    Return the body of the first ```math block with blank lines removed.
    """
    match = _MATH_BLOCK.search(source)
    if match is None:
        msg = "No ```math block found in macro source"
        raise FragmentError(msg)
    lines = [line for line in match.group(1).splitlines() if line.strip()]
    if not lines:
        msg = "The ```math block in the macro source is empty"
        raise FragmentError(msg)
    return "\n".join(lines)


def load_macros(path: Path) -> Fragment:
    macros = extract_macros(_read(path))
    logger.debug(f"Loaded {len(macros.splitlines())} macro lines from {path}")
    return Fragment(
        name="latex macros",
        delimiter=MACROS_DELIMITER,
        content=_markdown_cell(f"${macros}$"),
    )


def load_sidebar(path: Path) -> Fragment:
    toc = _read(path).strip("\n")
    return Fragment(name="sidebar", delimiter=SIDEBAR_DELIMITER, content=_markdown_cell(toc))


def standalone_fragments(notes_dir: Path) -> list[Fragment]:
    """Fragments with the macros and the sidebar inlined from ``notes_dir``."""
    return [
        load_macros(notes_dir / MACROS_FILENAME),
        load_sidebar(notes_dir / SIDEBAR_FILENAME),
    ]


def revert_fragments(course_title: str = COURSE_TITLE) -> list[Fragment]:
    """Fragments that read the shared files next to the notebook at runtime."""
    if '"' in course_title or "\\" in course_title:
        msg = f"Course title cannot contain quotes or backslashes: {course_title!r}"
        raise FragmentError(msg)
    return [
        Fragment(
            name="latex macros",
            delimiter=MACROS_DELIMITER,
            content=f'mo.md((mo.notebook_dir() / "{MACROS_FILENAME}").read_text())',
        ),
        Fragment(
            name="sidebar",
            delimiter=SIDEBAR_DELIMITER,
            content=(
                f'mo.md("**{course_title}**\\n" + '
                f'(mo.notebook_dir() / "{SIDEBAR_FILENAME}").read_text())'
            ),
        ),
    ]
