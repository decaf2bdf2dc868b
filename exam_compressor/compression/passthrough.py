import shutil
from pathlib import Path

from exam_compressor.compression.exceptions import FileAccessError
from exam_compressor.logging.logger import Log


def copy_verbatim(source: Path, destination: Path) -> int:
    """Copy source to destination byte-for-byte and return the copied size.

    Raises:
        FileAccessError: if the source cannot be read or the copy cannot be written.
    """
    try:
        shutil.copyfile(source, destination)
        return destination.stat().st_size
    except OSError as exc:
        raise FileAccessError(f"Failed to copy {source} to {destination}: {exc}") from exc


class DocumentCompressor:
    """Word-processor documents are stored as-is; no compression is available."""

    def compress(self, source: Path, destination: Path, max_size_kb: int) -> int:
        _ = max_size_kb  # reserved for a real document compressor
        Log.info(f"Document compression not available, copying {source.name}")
        return copy_verbatim(source, destination)
