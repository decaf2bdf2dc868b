import io
import os
import struct
import zlib
from pathlib import Path

import pytest
from PIL import Image
from pypdf import PdfWriter
from pypdf.generic import DictionaryObject, NameObject, TextStringObject
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from exam_compressor.config.settings import Settings


def noise_image(width: int, height: int, mode: str = "RGB") -> Image.Image:
    """Random pixels compress poorly, which keeps encoded sizes predictable."""
    channels = len(mode)
    return Image.frombytes(mode, (width, height), os.urandom(width * height * channels))


def save_image(image: Image.Image, path: Path, **params: object) -> Path:
    image.save(path, **params)
    return path


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(kind + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)


@pytest.fixture()
def make_image(tmp_path: Path):  # type: ignore[no-untyped-def]
    """Factory writing a noise image of the given size into tmp_path."""

    def _make(
        name: str,
        width: int,
        height: int,
        mode: str = "RGB",
        **params: object,
    ) -> Path:
        return save_image(noise_image(width, height, mode), tmp_path / name, **params)

    return _make


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        upload_dir=tmp_path / "temp_uploads",
        output_dir=tmp_path / "compressed_files",
        compression_workers=2,
    )


@pytest.fixture()
def jpeg_path(tmp_path: Path) -> Path:
    """A 400x300 noise JPEG, comfortably larger than a few KB."""
    return save_image(noise_image(400, 300), tmp_path / "photo.jpg", format="JPEG", quality=95)


@pytest.fixture()
def png_path(tmp_path: Path) -> Path:
    return save_image(noise_image(300, 200, "RGBA"), tmp_path / "scan.png", format="PNG")


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.showPage()
    c.drawString(72, 720, "Page three content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def pdf_with_page_metadata_bytes() -> bytes:
    """Two blank pages carrying /Metadata and /PieceInfo entries."""
    writer = PdfWriter()
    for index in range(2):
        page = writer.add_blank_page(width=612, height=792)
        page[NameObject("/Metadata")] = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Metadata"),
                NameObject("/Subtype"): NameObject("/XML"),
            }
        )
        page[NameObject("/PieceInfo")] = DictionaryObject(
            {
                NameObject("/ExamApp"): DictionaryObject(
                    {NameObject("/Private"): TextStringObject(f"page {index}")}
                )
            }
        )
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


@pytest.fixture()
def oversized_png_bytes() -> bytes:
    """A few hundred bytes whose header claims 20000x20000 RGB pixels."""
    header = struct.pack(">IIBBBBB", 20000, 20000, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00" * 64))
        + _png_chunk(b"IEND", b"")
    )
