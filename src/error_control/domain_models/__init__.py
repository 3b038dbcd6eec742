from error_control.domain_models.config import Config, DFTConfig, LoggingConfig, NotebookConfig
from error_control.domain_models.dft import BandsResult, SCFResult
from error_control.domain_models.notebook import (
    FileSyncResult,
    FileSyncStatus,
    Fragment,
    SyncMode,
    SyncReport,
)

__all__ = [
    "BandsResult",
    "Config",
    "DFTConfig",
    "FileSyncResult",
    "FileSyncStatus",
    "Fragment",
    "LoggingConfig",
    "NotebookConfig",
    "SCFResult",
    "SyncMode",
    "SyncReport",
]
