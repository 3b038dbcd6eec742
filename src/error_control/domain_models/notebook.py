from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class SyncMode(str, Enum):
    STANDALONE = "standalone"
    REVERT = "revert"


class FileSyncStatus(str, Enum):
    WRITTEN = "written"
    UNCHANGED = "unchanged"
    SKIPPED_NOT_NOTEBOOK = "skipped_not_notebook"
    NO_REGIONS = "no_regions"


class Fragment(BaseModel):
    """Text placed between a pair of delimiter lines in every notebook."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    delimiter: str
    content: str


class FileSyncResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: Path
    status: FileSyncStatus
    replaced: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)


class SyncReport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    mode: SyncMode
    results: list[FileSyncResult] = Field(default_factory=list)

    def count(self, status: FileSyncStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def written(self) -> list[Path]:
        return [r.path for r in self.results if r.status == FileSyncStatus.WRITTEN]
