class StorageError(Exception):
    """Base exception for all staging and output storage errors."""


class StagingWriteError(StorageError):
    """Raised when an upload cannot be persisted to the staging directory."""


class ArtifactNotFoundError(StorageError):
    """Raised when no readable compressed artifact exists for an identifier."""
