from pathlib import Path

import pytest

from error_control.constants import MACROS_DELIMITER, SIDEBAR_DELIMITER
from error_control.domain_models.notebook import FileSyncStatus, Fragment, SyncMode
from error_control.exceptions import NotebookSyncError
from error_control.notebooks.fragments import revert_fragments, standalone_fragments
from error_control.notebooks.sync import (
    is_notebook,
    iter_notebook_files,
    replace_region,
    sync_directories,
    sync_notebook,
)

DELIM = "# region --- DO NOT TOUCH THIS LINE"


def test_is_notebook() -> None:
    assert is_notebook("import marimo\n\napp = marimo.App()\n")
    assert not is_notebook("import numpy\n")
    assert is_notebook("### A Pluto.jl notebook ###\n", header="### A Pluto.jl notebook ###")


def test_replace_region_keeps_indentation() -> None:
    text = f"def f():\n    {DELIM}\n    old()\n    {DELIM}\n    return\n"
    new, found = replace_region(text, DELIM, "new()")
    assert found
    assert new == f"def f():\n    {DELIM}\n    new()\n    {DELIM}\n    return\n"


def test_replace_region_top_level() -> None:
    text = f"{DELIM}\nold\n{DELIM}\n"
    new, found = replace_region(text, DELIM, "new")
    assert found
    assert new == f"{DELIM}\nnew\n{DELIM}\n"


def test_replace_region_continuation_lines_verbatim() -> None:
    text = f"    {DELIM}\n    x\n    {DELIM}\n"
    new, _ = replace_region(text, DELIM, 'mo.md(r"""\nline\n""")')
    assert f'    {DELIM}\n    mo.md(r"""\nline\n""")\n    {DELIM}\n' == new


@pytest.mark.parametrize("count", [0, 1, 3])
def test_replace_region_requires_exactly_two_delimiters(count: int) -> None:
    text = "\n".join([DELIM] * count) + "\nbody\n"
    new, found = replace_region(text, DELIM, "new")
    assert not found
    assert new == text


def test_replace_region_is_idempotent() -> None:
    text = f"a\n  {DELIM}\n  b\n  {DELIM}\nc\n"
    once, _ = replace_region(text, DELIM, "content")
    twice, _ = replace_region(once, DELIM, "content")
    assert once == twice


def test_sync_notebook_writes_and_then_is_unchanged(notes_dir: Path) -> None:
    path = notes_dir / "01_intro.py"
    fragments = revert_fragments()

    result = sync_notebook(path, fragments)
    assert result.status == FileSyncStatus.WRITTEN
    assert result.replaced == ["latex macros", "sidebar"]
    assert result.missing == []

    content = path.read_text()
    assert f'    {MACROS_DELIMITER}\n    mo.md((mo.notebook_dir() / "latex_macros.md").read_text())\n' in content
    assert 'mo.md("**Error control in scientific modeling**\\n" + (mo.notebook_dir() / "sidebar.md")' in content
    assert "old macros" not in content

    again = sync_notebook(path, fragments)
    assert again.status == FileSyncStatus.UNCHANGED
    assert path.read_text() == content


def test_sync_notebook_skips_non_notebooks(notes_dir: Path) -> None:
    path = notes_dir / "helper.py"
    before = path.read_text()
    result = sync_notebook(path, revert_fragments())
    assert result.status == FileSyncStatus.SKIPPED_NOT_NOTEBOOK
    assert path.read_text() == before


def test_sync_notebook_without_regions_is_not_written(tmp_path: Path) -> None:
    path = tmp_path / "plain.py"
    path.write_text("import marimo\n\napp = marimo.App()\n")
    result = sync_notebook(path, revert_fragments())
    assert result.status == FileSyncStatus.NO_REGIONS
    assert result.missing == ["latex macros", "sidebar"]
    assert path.read_text() == "import marimo\n\napp = marimo.App()\n"


def test_sync_notebook_partial_regions(tmp_path: Path) -> None:
    path = tmp_path / "partial.py"
    path.write_text(f"import marimo\n{SIDEBAR_DELIMITER}\nold\n{SIDEBAR_DELIMITER}\n")
    result = sync_notebook(path, [Fragment(name="sidebar", delimiter=SIDEBAR_DELIMITER, content="x")])
    assert result.status == FileSyncStatus.WRITTEN
    assert result.replaced == ["sidebar"]
    assert path.read_text() == f"import marimo\n{SIDEBAR_DELIMITER}\nx\n{SIDEBAR_DELIMITER}\n"


def test_sync_notebook_unreadable(tmp_path: Path) -> None:
    with pytest.raises(NotebookSyncError):
        sync_notebook(tmp_path / "missing.py", revert_fragments())


def test_standalone_then_revert_restores_development_form(notes_dir: Path) -> None:
    path = notes_dir / "02_eigen.py"
    sync_notebook(path, revert_fragments())
    development = path.read_text()

    sync_notebook(path, standalone_fragments(notes_dir))
    standalone = path.read_text()
    assert "\\def\\resolvent{{\\rho}}" in standalone
    assert "latex_macros.md" not in standalone

    sync_notebook(path, revert_fragments())
    assert path.read_text() == development


def test_iter_notebook_files_sorted_python_only(notes_dir: Path) -> None:
    names = [p.name for p in iter_notebook_files(notes_dir)]
    assert names == ["01_intro.py", "02_eigen.py", "helper.py"]


def test_sync_directories_report(notes_dir: Path, tmp_path: Path) -> None:
    other = tmp_path / "slides"
    other.mkdir()
    (other / "deck.py").write_text((notes_dir / "01_intro.py").read_text())

    report = sync_directories([notes_dir, other], revert_fragments(), SyncMode.REVERT)

    assert report.mode == SyncMode.REVERT
    assert report.count(FileSyncStatus.WRITTEN) == 3
    assert report.count(FileSyncStatus.SKIPPED_NOT_NOTEBOOK) == 1
    assert report.written == [notes_dir / "01_intro.py", notes_dir / "02_eigen.py", other / "deck.py"]


def test_sync_directories_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(NotebookSyncError, match="does not exist"):
        sync_directories([tmp_path / "nope"], revert_fragments(), SyncMode.REVERT)
