from error_control.dft.bands import compute_bands
from error_control.dft.calculator import build_calculator
from error_control.dft.dimensionality import sample_time_budget
from error_control.dft.scf import run_scf
from error_control.dft.structure import build_structure

__all__ = [
    "build_calculator",
    "build_structure",
    "compute_bands",
    "run_scf",
    "sample_time_budget",
]
