import logging
from pathlib import Path

import typer
import yaml
from ase import Atoms
from pydantic import ValidationError

from error_control.constants import SIDEBAR_FILENAME
from error_control.dft.bands import compute_bands
from error_control.dft.dimensionality import sample_time_budget, to_attoseconds
from error_control.dft.scf import run_scf
from error_control.dft.structure import build_structure
from error_control.domain_models.config import Config
from error_control.domain_models.dft import SCFResult
from error_control.domain_models.notebook import FileSyncStatus, SyncMode
from error_control.exceptions import ConfigurationError, ErrorControlError
from error_control.infrastructure import io
from error_control.infrastructure import logging as logging_infra
from error_control.notebooks.fragments import revert_fragments, standalone_fragments
from error_control.notebooks.resources import fetch_resource
from error_control.notebooks.sync import sync_directories
from error_control.utils.plotting import create_band_structure_plot

logger = logging.getLogger(__name__)


def load_config(config_path: Path | None) -> Config:
    """Load ``config_path``, or the defaults when no path is given."""
    if config_path is None:
        return Config()
    if not config_path.exists():
        msg = f"Config file {config_path} not found."
        raise ConfigurationError(msg)
    try:
        return Config.from_yaml(config_path)
    except OSError as e:
        msg = f"Could not read config file {config_path}: {e}"
        raise ConfigurationError(msg) from e
    except (yaml.YAMLError, TypeError, ValidationError) as e:
        msg = f"Invalid configuration in {config_path}: {e}"
        raise ConfigurationError(msg) from e


def _load_and_setup(config_path: Path | None, verbose: bool = False) -> Config:
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=1) from e
    logging_infra.setup_logging(config.logging, verbose=verbose)
    return config


def init_project(path: Path) -> None:
    """
    Write a configuration file holding every default.
    """
    if path.exists():
        typer.secho(f"File {path} already exists.", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    try:
        data = Config().model_dump(mode="json", exclude_none=True)
        io.dump_yaml(data, path)
    except OSError as e:
        typer.secho(f"Failed to create config: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from e
    typer.secho(f"Created template configuration at {path}", fg=typer.colors.GREEN)


def check_config(config_path: Path) -> None:
    try:
        load_config(config_path)
    except ConfigurationError as e:
        typer.secho(f"Validation failed: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from e
    typer.secho("Configuration valid", fg=typer.colors.GREEN)


def sync_notebooks(mode: SyncMode, config_path: Path | None, verbose: bool = False) -> None:
    """
    Propagate the LaTeX macros and the sidebar into every notebook.
    """
    config = _load_and_setup(config_path, verbose)
    nb = config.notebooks

    try:
        if mode == SyncMode.STANDALONE:
            fragments = standalone_fragments(nb.notes_dir)
        else:
            fragments = revert_fragments(nb.course_title)
        report = sync_directories(nb.directories_for(mode), fragments, mode, nb.header)
    except ErrorControlError as e:
        typer.secho(f"Synchronisation failed: {e}", fg=typer.colors.RED)
        logger.exception("Synchronisation failed")
        raise typer.Exit(code=1) from e

    for path in report.written:
        typer.echo(f"{path} written")
    typer.secho(
        f"Synchronised ({mode.value}): "
        f"{report.count(FileSyncStatus.WRITTEN)} written, "
        f"{report.count(FileSyncStatus.UNCHANGED)} unchanged, "
        f"{report.count(FileSyncStatus.NO_REGIONS)} without regions, "
        f"{report.count(FileSyncStatus.SKIPPED_NOT_NOTEBOOK)} skipped",
        fg=typer.colors.GREEN,
    )


def fetch_sidebar(config_path: Path | None, verbose: bool = False) -> None:
    config = _load_and_setup(config_path, verbose)
    target = config.notebooks.notes_dir / SIDEBAR_FILENAME
    try:
        path = fetch_resource(config.notebooks.sidebar_url, target)
    except ErrorControlError as e:
        typer.secho(f"Fetching sidebar failed: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from e
    typer.secho(f"Sidebar available at {path}", fg=typer.colors.GREEN)


def _run_scf(config: Config) -> tuple[SCFResult, Atoms]:
    atoms = build_structure(config.dft)
    return run_scf(atoms, config.dft), atoms


def run_scf_cmd(config_path: Path, verbose: bool = False) -> None:
    config = _load_and_setup(config_path, verbose)
    try:
        result, _ = _run_scf(config)
    except ErrorControlError as e:
        typer.secho(f"SCF failed: {e}", fg=typer.colors.RED)
        logger.exception("SCF failed")
        raise typer.Exit(code=1) from e

    typer.secho("SCF Calculation Successful", fg=typer.colors.GREEN)
    typer.echo(f"Energy: {result.energy} eV")
    typer.echo(f"Fermi level: {result.fermi_level} eV")
    typer.echo(f"Density: {result.density_path}")


def run_bands_cmd(config_path: Path, output: Path, verbose: bool = False) -> None:
    config = _load_and_setup(config_path, verbose)
    try:
        scf, atoms = _run_scf(config)
        bands = compute_bands(atoms, scf, config.dft)
    except ErrorControlError as e:
        typer.secho(f"Band structure failed: {e}", fg=typer.colors.RED)
        logger.exception("Band structure failed")
        raise typer.Exit(code=1) from e

    create_band_structure_plot(
        bands, title=f"{config.dft.element} ({config.dft.functional})", output_path=output
    )
    typer.secho(f"Band structure written to {output}", fg=typer.colors.GREEN)


def budget_cmd(n_particles: int, points_per_dimension: int) -> None:
    try:
        seconds = sample_time_budget(n_particles, points_per_dimension=points_per_dimension)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=1) from e
    typer.echo(
        f"N={n_particles}: {to_attoseconds(seconds):.3g} attoseconds per sample "
        f"for a one-year budget"
    )
