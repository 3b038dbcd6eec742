import logging
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from rich.logging import RichHandler
from typer.testing import CliRunner

from error_control.domain_models.dft import BandsResult, SCFResult
from error_control.exceptions import DFTError
from error_control.main import app

runner = CliRunner()


def _console_handler() -> RichHandler:
    return next(h for h in logging.getLogger().handlers if isinstance(h, RichHandler))


@pytest.fixture
def config_file(tmp_path: Path, notes_dir: Path, lectures_dir: Path) -> Path:
    path = tmp_path / "error_control.yaml"
    path.write_text(
        yaml.dump(
            {
                "logging": {"level": "WARNING", "file_path": str(tmp_path / "cli.log")},
                "notebooks": {
                    "notes_dir": str(notes_dir),
                    "revert_directories": [str(lectures_dir)],
                },
                "dft": {"workdir": str(tmp_path / "dft"), "pseudo_dir": str(tmp_path)},
            }
        )
    )
    return path


@pytest.fixture
def scf_result(tmp_path: Path) -> SCFResult:
    return SCFResult(
        energy=-230.5,
        fermi_level=6.2,
        n_kpoints=8,
        n_bands=4,
        directory=tmp_path / "dft",
        density_path=tmp_path / "dft" / "calc.save" / "charge-density.dat",
    )


def test_init_creates_loadable_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "new.yaml"

    result = runner.invoke(app, ["init", str(target)])
    assert result.exit_code == 0
    assert "Created template configuration" in result.stdout

    check = runner.invoke(app, ["check", str(target)])
    assert check.exit_code == 0
    assert "Configuration valid" in check.stdout

    again = runner.invoke(app, ["init", str(target)])
    assert again.exit_code == 1
    assert "already exists" in again.stdout


def test_check_missing_config(tmp_path: Path) -> None:
    result = runner.invoke(app, ["check", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_check_invalid_config(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.dump({"dft": {"ecut": -1}}))
    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 1
    assert "Validation failed" in result.stdout


def test_check_config_that_cannot_be_read(tmp_path: Path) -> None:
    result = runner.invoke(app, ["check", str(tmp_path)])
    assert result.exit_code == 1
    assert "Validation failed" in result.stdout
    assert "Could not read config file" in result.stdout


def test_sync_modes_rewrite_their_own_trees(
    config_file: Path, notes_dir: Path, lectures_dir: Path
) -> None:
    development = (lectures_dir / "01_intro.py").read_text()

    result = runner.invoke(app, ["sync", "standalone", "--config", str(config_file)])
    assert result.exit_code == 0, result.stdout
    assert "2 written" in result.stdout
    assert "1 skipped" in result.stdout
    published = (notes_dir / "01_intro.py").read_text()
    assert "\\def\\opA{{\\mathcal A}}" in published
    assert "- [Course overview](index.html)" in published
    assert (lectures_dir / "01_intro.py").read_text() == development

    result = runner.invoke(app, ["sync", "standalone", "--config", str(config_file)])
    assert result.exit_code == 0
    assert "0 written, 2 unchanged" in result.stdout

    result = runner.invoke(app, ["sync", "revert", "--config", str(config_file)])
    assert result.exit_code == 0, result.stdout
    assert "1 written" in result.stdout
    assert 'mo.notebook_dir() / "latex_macros.md"' in (lectures_dir / "01_intro.py").read_text()
    assert (notes_dir / "01_intro.py").read_text() == published


def test_sync_uses_default_directories(
    tmp_path: Path, notes_dir: Path, lectures_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["sync", "revert"])
    assert result.exit_code == 0, result.stdout
    assert "1 written" in result.stdout
    assert "mo.notebook_dir()" not in (notes_dir / "01_intro.py").read_text()

    result = runner.invoke(app, ["sync", "standalone"])
    assert result.exit_code == 0, result.stdout
    assert "2 written" in result.stdout


def test_sync_verbose_enables_debug_console(config_file: Path, lectures_dir: Path) -> None:
    result = runner.invoke(app, ["sync", "revert", "--config", str(config_file)])
    assert result.exit_code == 0
    assert _console_handler().level == logging.WARNING

    result = runner.invoke(app, ["sync", "revert", "--config", str(config_file), "--verbose"])
    assert result.exit_code == 0
    assert _console_handler().level == logging.DEBUG


def test_sync_missing_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["sync", "revert"])
    assert result.exit_code == 1
    assert "Synchronisation failed" in result.stdout


def test_sync_standalone_without_macros(config_file: Path, notes_dir: Path) -> None:
    (notes_dir / "latex_macros.md").write_text("no math here\n")
    result = runner.invoke(app, ["sync", "standalone", "--config", str(config_file)])
    assert result.exit_code == 1
    assert "```math" in result.stdout


def test_fetch_sidebar_uses_local_copy(config_file: Path) -> None:
    with patch("error_control.notebooks.resources.requests.get") as mock_get:
        result = runner.invoke(app, ["fetch-sidebar", "--config", str(config_file)])
    assert result.exit_code == 0
    assert "Sidebar available" in result.stdout
    mock_get.assert_not_called()


@patch("error_control.cli.commands.run_scf")
def test_dft_scf(mock_run_scf, config_file: Path, scf_result: SCFResult) -> None:
    mock_run_scf.return_value = scf_result
    result = runner.invoke(app, ["dft", "scf", str(config_file)])
    assert result.exit_code == 0, result.stdout
    assert "SCF Calculation Successful" in result.stdout
    assert "Energy: -230.5 eV" in result.stdout
    assert "Fermi level: 6.2 eV" in result.stdout


@patch("error_control.cli.commands.run_scf")
def test_dft_scf_failure(mock_run_scf, config_file: Path) -> None:
    mock_run_scf.side_effect = DFTError("pw.x crashed")
    result = runner.invoke(app, ["dft", "scf", str(config_file)])
    assert result.exit_code == 1
    assert "SCF failed: pw.x crashed" in result.stdout


@patch("error_control.cli.commands.compute_bands")
@patch("error_control.cli.commands.run_scf")
def test_dft_bands(
    mock_run_scf, mock_bands, config_file: Path, scf_result: SCFResult, tmp_path: Path
) -> None:
    mock_run_scf.return_value = scf_result
    mock_bands.return_value = BandsResult(
        path_labels="GX",
        x=[0.0, 1.0],
        special_x=[0.0, 1.0],
        special_labels=["G", "X"],
        energies=[[[-5.0, 1.0], [-4.0, 2.0]]],
        reference=6.2,
    )
    output = tmp_path / "bands.html"

    result = runner.invoke(app, ["dft", "bands", str(config_file), "--output", str(output)])

    assert result.exit_code == 0, result.stdout
    assert output.exists()
    assert "Band structure written" in result.stdout


def test_dft_budget() -> None:
    result = runner.invoke(app, ["dft", "budget", "-n", "28"])
    assert result.exit_code == 0
    assert "1.63 attoseconds" in result.stdout


def test_dft_budget_invalid() -> None:
    result = runner.invoke(app, ["dft", "budget", "-n", "0"])
    assert result.exit_code == 1
