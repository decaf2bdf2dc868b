from collections.abc import AsyncIterable
from dataclasses import dataclass, field

from exam_compressor.compression.models import OutcomeStatus


@dataclass
class IncomingFile:
    """One file part of an upload batch, streamed as byte chunks."""

    filename: str | None
    chunks: AsyncIterable[bytes]


@dataclass
class FileResult:
    """Per-file entry of a batch response."""

    identifier: str
    original_name: str
    original_size: int
    compressed_size: int | None
    file_type: str
    download_url: str | None
    status: OutcomeStatus
    error: str = ""


@dataclass
class BatchResult:
    """All file results of one upload, keyed by the exam type used."""

    exam_type: str
    files: list[FileResult] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Files processed for {self.exam_type} exam"
