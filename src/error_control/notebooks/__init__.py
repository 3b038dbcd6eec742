from error_control.notebooks.fragments import revert_fragments, standalone_fragments
from error_control.notebooks.resources import fetch_resource
from error_control.notebooks.sync import is_notebook, replace_region, sync_directories, sync_notebook

__all__ = [
    "fetch_resource",
    "is_notebook",
    "replace_region",
    "revert_fragments",
    "standalone_fragments",
    "sync_directories",
    "sync_notebook",
]
