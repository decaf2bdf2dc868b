from pathlib import Path

import pymupdf

from exam_compressor.compression.exceptions import DecodeError, EncodeError, FileAccessError
from exam_compressor.compression.pdf.base import (
    STRIPPED_PAGE_KEYS,
    BasePdfCompressor,
    should_strip,
)
from exam_compressor.logging.logger import Log


class PyMuPdfCompressor(BasePdfCompressor):
    """Strips page entries in place with PyMuPDF and saves a copy."""

    def compress(self, source: Path, destination: Path, level: int) -> int:
        if not source.is_file():
            raise FileAccessError(f"PDF not found: {source}")
        try:
            document = pymupdf.open(source, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise DecodeError(f"pymupdf failed to load {source}: {exc}") from exc

        with document:
            page_count = document.page_count
            kept: list[int] = []
            for index in range(page_count):
                try:
                    xref = document.page_xref(index)
                    document.xref_object(xref)
                except Exception as exc:
                    Log.warning(f"Skipping unreadable page {index} of {source.name}: {exc}")
                    continue
                kept.append(index)
                if should_strip(level):
                    self._strip_page_keys(document, xref)

            try:
                if len(kept) != page_count:
                    document.select(kept)
                data = document.tobytes(garbage=1)
            except Exception as exc:
                raise EncodeError(f"pymupdf failed to serialize {destination}: {exc}") from exc

        size = self._write(destination, data)
        Log.info(
            f"PDF {source.name} rebuilt with {len(kept)}/{page_count} pages "
            f"(level {level}): {source.stat().st_size} -> {size} bytes"
        )
        return size

    def _strip_page_keys(self, document: pymupdf.Document, xref: int) -> None:
        for key in STRIPPED_PAGE_KEYS:
            value_type, _ = document.xref_get_key(xref, key)
            if value_type != "null":
                # Setting a key to null drops it from the dictionary.
                document.xref_set_key(xref, key, "null")
