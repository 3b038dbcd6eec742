import logging

import numpy as np
from ase import Atoms
from ase.calculators.calculator import all_changes
from ase.dft.kpoints import BandPath
from ase.spectrum.band_structure import BandStructure

from error_control.dft.calculator import build_calculator
from error_control.dft.scf import SOLVER_ERRORS, collect_eigenvalues
from error_control.domain_models.config import DFTConfig
from error_control.domain_models.dft import BandsResult, SCFResult
from error_control.exceptions import DFTError

logger = logging.getLogger(__name__)


def band_path(atoms: Atoms, npoints: int) -> BandPath:
    """The standard high-symmetry path of the crystal's Bravais lattice."""
    return atoms.cell.bandpath(npoints=npoints)  # type: ignore[no-any-return]


def to_bands_result(bs: BandStructure) -> BandsResult:
    x, special_x, special_labels = bs.get_labels()
    return BandsResult(
        path_labels=bs.path.path,
        x=[float(v) for v in x],
        special_x=[float(v) for v in special_x],
        special_labels=list(special_labels),
        energies=np.asarray(bs.energies, dtype=float).tolist(),
        reference=float(bs.reference),
    )


def compute_bands(atoms: Atoms, scf: SCFResult, config: DFTConfig) -> BandsResult:
    """
    Non-self-consistent band energies along the high-symmetry path.

    The bands run reuses the density stored by ``scf`` and is referenced to
    its Fermi level.
    """
    path = band_path(atoms, config.npoints)
    calc = build_calculator(
        config, scf.directory, kpts=path, calculation="bands", n_bands=config.n_bands
    )
    atoms.calc = calc

    logger.info(f"Computing {config.n_bands} bands along {path.path} ({config.npoints} points)")
    try:
        calc.calculate(atoms, properties=[], system_changes=all_changes)
        energies = np.array(collect_eigenvalues(calc))
    except SOLVER_ERRORS as e:
        msg = f"Band structure calculation failed in {scf.directory}: {e}"
        raise DFTError(msg) from e

    if energies.ndim != 3 or energies.shape[1] != len(path.kpts):
        msg = (
            f"Expected eigenvalues for {len(path.kpts)} k-points, "
            f"got array of shape {energies.shape}"
        )
        raise DFTError(msg)

    reference = scf.fermi_level if scf.fermi_level is not None else 0.0
    return to_bands_result(BandStructure(path=path, energies=energies, reference=reference))
