"""Fixtures for the test suite."""

from pathlib import Path

import pytest

from error_control.domain_models.config import DFTConfig
from error_control.infrastructure.logging import shutdown_logging

MACROS_SOURCE = """```math
\\def\\resolvent{{\\rho}}

\\def\\opA{{\\mathcal A}}
```
"""

SIDEBAR_SOURCE = "- [Course overview](index.html)\n- [DFT](11_density_functional_theory.html)\n"

NOTEBOOK_SOURCE = '''import marimo

__generated_with = "0.10.9"
app = marimo.App(width="medium")


@app.cell
def _(Path, mo):
    # sidebar --- DO NOT TOUCH THIS LINE
    mo.md("old sidebar")
    # sidebar --- DO NOT TOUCH THIS LINE
    return


@app.cell
def _(Path, mo):
    # latex macros --- DO NOT TOUCH THIS LINE
    mo.md("old macros")
    # latex macros --- DO NOT TOUCH THIS LINE
    return
'''


@pytest.fixture(autouse=True)
def _release_log_handlers():
    yield
    shutdown_logging()


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    """A notes directory with the shared sources, two notebooks and a plain script."""
    notes = tmp_path / "notes"
    notes.mkdir()
    (notes / "latex_macros.md").write_text(MACROS_SOURCE)
    (notes / "sidebar.md").write_text(SIDEBAR_SOURCE)
    (notes / "01_intro.py").write_text(NOTEBOOK_SOURCE)
    (notes / "02_eigen.py").write_text(NOTEBOOK_SOURCE)
    (notes / "helper.py").write_text("print('not a notebook')\n")
    return notes


@pytest.fixture
def dft_config(tmp_path: Path) -> DFTConfig:
    return DFTConfig(
        pseudo_dir=tmp_path / "pseudos",
        workdir=tmp_path / "dft",
        command="pw.x",
    )


@pytest.fixture
def lectures_dir(tmp_path: Path) -> Path:
    """The development tree, kept apart from the published notes."""
    lectures = tmp_path / "lectures"
    lectures.mkdir()
    (lectures / "01_intro.py").write_text(NOTEBOOK_SOURCE)
    return lectures
