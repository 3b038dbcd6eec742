import logging
import re
import subprocess
from pathlib import Path
from typing import Any

import ase.io
from ase import Atoms, units
from ase.calculators.calculator import CalculationFailed, PropertyNotImplementedError

from error_control.constants import DFT_PREFIX
from error_control.dft.calculator import build_calculator
from error_control.domain_models.config import DFTConfig
from error_control.domain_models.dft import SCFResult
from error_control.exceptions import DFTError

logger = logging.getLogger(__name__)

# Exceptions the Espresso calculator raises when pw.x fails or leaves no usable output.
SOLVER_ERRORS = (
    CalculationFailed,
    PropertyNotImplementedError,
    subprocess.CalledProcessError,
    OSError,
)

OUTPUT_FILENAME = "espresso.pwo"
NOT_CONVERGED_MARKER = "convergence NOT achieved"

# Converged energies carry a leading "!", SCF iterates do not.
_TOTAL_ENERGY = re.compile(r"^[!\s]*total energy\s+=\s+(-?\d+\.\d+)\s+Ry", re.MULTILINE)

Eigenvalues = list[list[list[float]]]


def collect_eigenvalues(calc: Any) -> Eigenvalues:
    """Eigenvalues in eV, indexed as [spin][kpoint][band]."""
    n_spins = calc.get_number_of_spins()
    n_kpts = len(calc.get_ibz_k_points())
    return [
        [[float(e) for e in calc.get_eigenvalues(kpt=k, spin=s)] for k in range(n_kpts)]
        for s in range(n_spins)
    ]


def _read_output(directory: Path) -> str | None:
    output = directory / OUTPUT_FILENAME
    if not output.exists():
        return None
    return output.read_text(encoding="utf-8", errors="replace")


def scf_converged(directory: Path) -> bool:
    text = _read_output(directory)
    return text is None or NOT_CONVERGED_MARKER not in text


def last_total_energy(text: str) -> float | None:
    """The last total energy printed by pw.x, in eV, whether converged or not."""
    matches = _TOTAL_ENERGY.findall(text)
    return float(matches[-1]) * units.Rydberg if matches else None


def read_unconverged(directory: Path) -> tuple[float, float | None, Eigenvalues]:
    """
    Energy, Fermi level and eigenvalues of a pw.x run that stopped short of
    convergence.

    ASE's reader only picks up energies marked as converged, so the energy is
    taken from the last SCF iterate instead. Eigenvalues are empty when pw.x
    stopped before printing them.
    """
    output = directory / OUTPUT_FILENAME
    text = _read_output(directory) or ""
    energy = last_total_energy(text)
    if energy is None:
        msg = f"No total energy found in {output}"
        raise DFTError(msg)

    try:
        partial = ase.io.read(output, format="espresso-out")
    except (IndexError, ValueError, KeyError) as e:
        logger.warning(f"Could not read eigenvalues from {output}: {e}")
        return energy, None, []

    calc = partial.calc  # type: ignore[union-attr]
    eigenvalues = collect_eigenvalues(calc) if calc.get_number_of_spins() else []
    fermi_level = calc.get_fermi_level()
    return energy, fermi_level, eigenvalues


def density_path(directory: Path) -> Path:
    return directory / f"{DFT_PREFIX}.save" / "charge-density.dat"


def _not_converged_message(config: DFTConfig, directory: Path) -> str:
    return f"SCF did not converge to tol={config.tol} (see {directory / OUTPUT_FILENAME})"


def run_scf(atoms: Atoms, config: DFTConfig, directory: Path | None = None) -> SCFResult:
    """
    Run a self-consistent field calculation on ``atoms``.

    Raises:
        DFTError: If the solver fails, or does not converge and
            ``config.allow_unconverged`` is false.
    """
    directory = directory or config.workdir
    calc = build_calculator(config, directory)
    atoms.calc = calc

    logger.info(
        f"Running SCF for {atoms.get_chemical_formula()}: "
        f"{config.functional}, Ecut={config.ecut} Ha, kgrid={config.kgrid}, tol={config.tol}"
    )
    try:
        energy = float(atoms.get_potential_energy())  # type: ignore[no-untyped-call]
        fermi_level = calc.get_fermi_level()
        eigenvalues = collect_eigenvalues(calc)
    except SOLVER_ERRORS as e:
        # pw.x either aborts or prints no converged energy when the SCF stalls
        if scf_converged(directory):
            msg = f"SCF calculation failed in {directory}: {e}"
            raise DFTError(msg) from e
        if not config.allow_unconverged:
            raise DFTError(_not_converged_message(config, directory)) from e
        energy, fermi_level, eigenvalues = read_unconverged(directory)

    converged = scf_converged(directory)
    if not converged:
        if not config.allow_unconverged:
            raise DFTError(_not_converged_message(config, directory))
        logger.warning(f"SCF did not converge to tol={config.tol}; continuing")

    result = SCFResult(
        energy=energy,
        fermi_level=float(fermi_level) if fermi_level is not None else None,
        n_kpoints=len(eigenvalues[0]) if eigenvalues else 0,
        n_bands=len(eigenvalues[0][0]) if eigenvalues and eigenvalues[0] else 0,
        eigenvalues=eigenvalues,
        converged=converged,
        directory=directory,
        density_path=density_path(directory),
    )
    logger.info(f"SCF energy {result.energy:.6f} eV, Fermi level {result.fermi_level} eV")
    return result
