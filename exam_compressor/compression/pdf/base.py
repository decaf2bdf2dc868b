from abc import ABC, abstractmethod
from pathlib import Path

from exam_compressor.compression.exceptions import FileAccessError

# Levels above this strip auxiliary page entries.
STRIP_LEVEL_THRESHOLD = 5
STRIPPED_PAGE_KEYS: tuple[str, ...] = ("Metadata", "PieceInfo")


def should_strip(level: int) -> bool:
    return level > STRIP_LEVEL_THRESHOLD


class BasePdfCompressor(ABC):
    """Contract for all PDF compression adapters."""

    @abstractmethod
    def compress(self, source: Path, destination: Path, level: int) -> int:
        """Rebuild a PDF page by page and write it to destination.

        Every readable page dictionary is cloned in order. When level is above
        STRIP_LEVEL_THRESHOLD the `/Metadata` and `/PieceInfo` entries are
        removed from each cloned page; embedded content is left untouched.

        Args:
            source: Path to the uploaded PDF.
            destination: Path the rebuilt PDF is written to.
            level: Compression level 0-9.

        Returns:
            Size of the written PDF in bytes.

        Raises:
            DecodeError: if the source cannot be parsed.
            EncodeError: if the rebuilt document cannot be serialized.
            FileAccessError: if the source cannot be read or the output written.
        """

    def _write(self, destination: Path, data: bytes) -> int:
        try:
            destination.write_bytes(data)
        except OSError as exc:
            destination.unlink(missing_ok=True)
            raise FileAccessError(f"Failed to write {destination}: {exc}") from exc
        return len(data)
