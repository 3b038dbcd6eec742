import logging
import re
from pathlib import Path
from typing import Any

from ase import units
from ase.calculators.espresso import Espresso, EspressoProfile

from error_control.constants import DFT_PREFIX
from error_control.domain_models.config import DFTConfig
from error_control.exceptions import DFTError
from error_control.settings import settings

logger = logging.getLogger(__name__)

_SAFE_COMMAND = re.compile(r"^[\w\s\-\./=]+$")


def ecut_to_ecutwfc(ecut: float) -> float:
    """Convert a plane-wave cutoff from Hartree to Rydberg."""
    return ecut * units.Hartree / units.Rydberg


def resolve_command(config: DFTConfig) -> str:
    command = settings.pw_command or config.command
    if not command.strip():
        msg = "pw.x command is empty"
        raise DFTError(msg)
    # Allow alphanumerics, spaces, hyphens, dots, slashes and '=' (mpirun options)
    if not _SAFE_COMMAND.match(command):
        msg = f"Invalid characters in command: {command}"
        raise DFTError(msg)
    return command


def resolve_pseudo_dir(config: DFTConfig) -> Path:
    return Path(settings.pseudo_dir) if settings.pseudo_dir else config.pseudo_dir


def build_input_data(
    config: DFTConfig, calculation: str = "scf", n_bands: int | None = None
) -> dict[str, Any]:
    input_data: dict[str, Any] = {
        "control": {
            "calculation": calculation,
            "prefix": DFT_PREFIX,
            "outdir": "./",
        },
        "system": {
            "ecutwfc": ecut_to_ecutwfc(config.ecut),
            "input_dft": config.functional,
        },
        "electrons": {
            "conv_thr": config.tol,
        },
    }
    if n_bands is not None:
        input_data["system"]["nbnd"] = n_bands
    if calculation == "scf" and config.allow_unconverged:
        # pw.x otherwise stops with an error instead of writing the last iterate
        input_data["electrons"]["scf_must_converge"] = False
    return input_data


def build_calculator(
    config: DFTConfig,
    directory: Path,
    kpts: Any = None,
    calculation: str = "scf",
    n_bands: int | None = None,
) -> Espresso:
    """
    Create an ASE Espresso calculator.

    ``kpts`` defaults to the Monkhorst-Pack grid of ``config``; a ``BandPath``
    can be passed for a non-self-consistent bands run.
    """
    profile = EspressoProfile(  # type: ignore[no-untyped-call]
        command=resolve_command(config), pseudo_dir=str(resolve_pseudo_dir(config))
    )
    directory.mkdir(parents=True, exist_ok=True)
    logger.debug(
        f"Espresso {calculation} in {directory}: Ecut={config.ecut} Ha, "
        f"kpts={kpts if kpts is not None else config.kgrid}, tol={config.tol}"
    )
    return Espresso(  # type: ignore[no-untyped-call]
        profile=profile,
        directory=str(directory),
        pseudopotentials=dict(config.pseudopotentials),
        kpts=kpts if kpts is not None else config.kgrid,
        input_data=build_input_data(config, calculation, n_bands),
    )
