from pathlib import Path
from typing import Optional

import typer

from error_control.cli import commands
from error_control.constants import DEFAULT_CONFIG_FILENAME
from error_control.domain_models.notebook import SyncMode

app = typer.Typer(help="Tooling for the error-control lecture notes.")
sync_app = typer.Typer(help="Synchronise LaTeX macros and the sidebar into the notebooks.")
dft_app = typer.Typer(help="Run the silicon DFT demonstration.")
app.add_typer(sync_app, name="sync")
app.add_typer(dft_app, name="dft")


@app.command()
def init(
    path: Path = typer.Argument(Path(DEFAULT_CONFIG_FILENAME), help="Where to write the config"),  # noqa: B008
) -> None:
    """Write a template configuration file."""
    commands.init_project(path)


@app.command()
def check(
    config_path: Path = typer.Argument(..., help="Path to the configuration YAML file"),  # noqa: B008
) -> None:
    """Validate a configuration file."""
    commands.check_config(config_path)


@sync_app.command("standalone")
def sync_standalone(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to the configuration YAML file"),  # noqa: B008
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Inline the macros and sidebar so notebooks work without neighbour files."""
    commands.sync_notebooks(SyncMode.STANDALONE, config_path, verbose)


@sync_app.command("revert")
def sync_revert(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to the configuration YAML file"),  # noqa: B008
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Restore the regions that read latex_macros.md and sidebar.md at runtime."""
    commands.sync_notebooks(SyncMode.REVERT, config_path, verbose)


@app.command("fetch-sidebar")
def fetch_sidebar(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to the configuration YAML file"),  # noqa: B008
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Download sidebar.md into the notes directory unless it is already there."""
    commands.fetch_sidebar(config_path, verbose)


@dft_app.command("scf")
def dft_scf(
    config_path: Path = typer.Argument(..., help="Path to the configuration YAML file"),  # noqa: B008
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Run the self-consistent field calculation."""
    commands.run_scf_cmd(config_path, verbose)


@dft_app.command("bands")
def dft_bands(
    config_path: Path = typer.Argument(..., help="Path to the configuration YAML file"),  # noqa: B008
    output: Path = typer.Option(Path("bands.html"), "--output", "-o", help="HTML plot"),  # noqa: B008
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Run SCF, then plot the band structure along the high-symmetry path."""
    commands.run_bands_cmd(config_path, output, verbose)


@dft_app.command("budget")
def dft_budget(
    n_particles: int = typer.Option(28, "--particles", "-n", help="Number of electrons"),
    points: int = typer.Option(2, "--points", help="Quadrature points per dimension"),
) -> None:
    """Time per quadrature sample for a brute-force 3N-dimensional integral."""
    commands.budget_cmd(n_particles, points)


if __name__ == "__main__":
    app()
