from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class SCFResult(BaseModel):
    """
    Outcome of a self-consistent field run.

    Energies are in eV. ``eigenvalues`` is indexed as [spin][kpoint][band].
    """

    model_config = ConfigDict(extra="forbid")

    energy: float
    fermi_level: float | None = None
    n_kpoints: int
    n_bands: int
    eigenvalues: list[list[list[float]]] = Field(default_factory=list)
    converged: bool = True
    directory: Path
    density_path: Path


class BandsResult(BaseModel):
    """Band energies along a high-symmetry path, ready for plotting."""

    model_config = ConfigDict(extra="forbid")

    path_labels: str
    x: list[float]
    special_x: list[float]
    special_labels: list[str]
    # Indexed as [spin][kpoint][band], in eV.
    energies: list[list[list[float]]]
    reference: float = 0.0

    @property
    def n_bands(self) -> int:
        return len(self.energies[0][0]) if self.energies and self.energies[0] else 0
