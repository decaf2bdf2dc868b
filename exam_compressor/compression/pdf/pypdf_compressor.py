import io
from pathlib import Path

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from exam_compressor.compression.exceptions import DecodeError, EncodeError, FileAccessError
from exam_compressor.compression.pdf.base import (
    STRIPPED_PAGE_KEYS,
    BasePdfCompressor,
    should_strip,
)
from exam_compressor.logging.logger import Log


class PypdfCompressor(BasePdfCompressor):
    """Clones page dictionaries into a fresh PdfWriter using pypdf."""

    def compress(self, source: Path, destination: Path, level: int) -> int:
        reader, page_count = self._load(source)
        excluded_keys = (
            [f"/{key}" for key in STRIPPED_PAGE_KEYS] if should_strip(level) else []
        )

        writer = PdfWriter()
        page_map: dict[int, int] = {}
        for index in range(page_count):
            try:
                writer.add_page(reader.pages[index], excluded_keys=excluded_keys)
            except (PyPdfError, KeyError, ValueError, TypeError, AttributeError) as exc:
                Log.warning(f"Skipping unreadable page {index} of {source.name}: {exc}")
                continue
            page_map[index] = len(writer.pages) - 1

        try:
            buffer = io.BytesIO()
            writer.write(buffer)
        except (PyPdfError, ValueError, TypeError) as exc:
            raise EncodeError(f"Failed to serialize PDF {destination}: {exc}") from exc

        size = self._write(destination, buffer.getvalue())
        Log.info(
            f"PDF {source.name} rebuilt with {len(page_map)}/{page_count} pages "
            f"(level {level}): {source.stat().st_size} -> {size} bytes"
        )
        return size

    def _load(self, source: Path) -> tuple[PdfReader, int]:
        try:
            reader = PdfReader(source)
            return reader, len(reader.pages)
        except OSError as exc:
            raise FileAccessError(f"Failed to read PDF {source}: {exc}") from exc
        except (PyPdfError, KeyError, ValueError, TypeError, AttributeError) as exc:
            raise DecodeError(f"Failed to load PDF {source}: {exc}") from exc
