from pathlib import Path
from typing import Literal, cast

import ase.data
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from error_control.constants import (
    COURSE_TITLE,
    DEFAULT_BAND_NPOINTS,
    DEFAULT_CRYSTAL,
    DEFAULT_DFT_WORKDIR,
    DEFAULT_ECUT,
    DEFAULT_ELEMENT,
    DEFAULT_FUNCTIONAL,
    DEFAULT_KGRID,
    DEFAULT_LATTICE_CONSTANT,
    DEFAULT_LECTURES_DIR,
    DEFAULT_LOG_FILENAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_N_BANDS,
    DEFAULT_NOTES_DIR,
    DEFAULT_PSEUDOPOTENTIAL,
    DEFAULT_PW_COMMAND,
    DEFAULT_TOL,
    NOTEBOOK_HEADER,
    SIDEBAR_URL,
)
from error_control.domain_models.notebook import SyncMode


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: LogLevel = Field(default=cast(LogLevel, DEFAULT_LOG_LEVEL), validate_default=True)
    file_path: Path = Path(DEFAULT_LOG_FILENAME)


class NotebookConfig(BaseModel):
    """Where the notebooks live and how they are recognised."""

    model_config = ConfigDict(extra="forbid")

    # Published notes; holds the latex_macros.md and sidebar.md that standalone inlines.
    notes_dir: Path = Path(DEFAULT_NOTES_DIR)
    # Trees rewritten by each sync mode. Empty standalone_directories means notes_dir.
    standalone_directories: list[Path] = Field(default_factory=list)
    revert_directories: list[Path] = Field(default_factory=lambda: [Path(DEFAULT_LECTURES_DIR)])
    header: str = NOTEBOOK_HEADER
    course_title: str = COURSE_TITLE
    sidebar_url: str = SIDEBAR_URL

    @field_validator("header")
    @classmethod
    def validate_header(cls, v: str) -> str:
        if not v.strip():
            msg = "Notebook header marker must not be empty"
            raise ValueError(msg)
        return v

    def directories_for(self, mode: SyncMode) -> list[Path]:
        """The notebook directories a sync in ``mode`` rewrites."""
        if mode == SyncMode.STANDALONE:
            return self.standalone_directories or [self.notes_dir]
        return self.revert_directories


class DFTConfig(BaseModel):
    """Parameters of the silicon SCF and band-structure demonstration."""

    model_config = ConfigDict(extra="forbid")

    element: str = DEFAULT_ELEMENT
    crystal_structure: str = DEFAULT_CRYSTAL
    lattice_constant: float = DEFAULT_LATTICE_CONSTANT
    pseudopotentials: dict[str, str] = Field(
        default_factory=lambda: {DEFAULT_ELEMENT: DEFAULT_PSEUDOPOTENTIAL}
    )
    functional: str = DEFAULT_FUNCTIONAL
    ecut: float = DEFAULT_ECUT  # Hartree
    kgrid: tuple[int, int, int] = DEFAULT_KGRID
    tol: float = DEFAULT_TOL
    n_bands: int = DEFAULT_N_BANDS
    npoints: int = DEFAULT_BAND_NPOINTS
    command: str = DEFAULT_PW_COMMAND
    pseudo_dir: Path = Path("pseudos")
    workdir: Path = Path(DEFAULT_DFT_WORKDIR)
    allow_unconverged: bool = False

    @field_validator("lattice_constant", "ecut", "tol")
    @classmethod
    def validate_positive_floats(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v

    @field_validator("n_bands", "npoints")
    @classmethod
    def validate_positive_ints(cls, v: int, info: ValidationInfo) -> int:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v

    @field_validator("kgrid")
    @classmethod
    def validate_kgrid(cls, v: tuple[int, int, int]) -> tuple[int, int, int]:
        if any(k <= 0 for k in v):
            msg = "All k-point grid dimensions must be positive"
            raise ValueError(msg)
        return v

    @field_validator("element")
    @classmethod
    def validate_element(cls, v: str) -> str:
        if v not in ase.data.atomic_numbers:
            msg = f"Unknown chemical element: {v}"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def check_pseudopotential(self) -> "DFTConfig":
        if self.element not in self.pseudopotentials:
            msg = f"No pseudopotential given for element {self.element}"
            raise ValueError(msg)
        return self


class Config(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    project_name: str = "error_control"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    notebooks: NotebookConfig = Field(default_factory=NotebookConfig)
    dft: DFTConfig = Field(default_factory=DFTConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from a YAML file."""
        from error_control.infrastructure import io

        data = io.load_yaml(path)
        return cls(**data)
