from dataclasses import dataclass
from pathlib import Path


@dataclass
class UploadRecord:
    """Bookkeeping for one uploaded file while it is being processed."""

    identifier: str
    original_name: str
    staging_path: Path
    output_path: Path
    original_size_bytes: int = 0

    @property
    def extension(self) -> str:
        return Path(self.original_name).suffix.lstrip(".").lower()


@dataclass(frozen=True)
class StoredArtifact:
    """A compressed artifact read back for download."""

    content: bytes
    original_name: str
    mime_type: str
