class ErrorControlError(Exception):
    """Base exception for the error-control course tooling."""


class ConfigurationError(ErrorControlError):
    """Invalid or unreadable configuration."""


class NotebookSyncError(ErrorControlError):
    """Error while synchronising notebook files."""


class FragmentError(ErrorControlError):
    """A shared fragment could not be built from its source file."""


class ResourceError(ErrorControlError):
    """A remote resource could not be fetched."""


class DFTError(ErrorControlError):
    """Error in an external DFT calculation."""
