from pathlib import Path

from exam_compressor.compression.exceptions import CompressionError
from exam_compressor.compression.image_compressor import ImageCompressor
from exam_compressor.compression.models import CompressionOutcome
from exam_compressor.compression.passthrough import DocumentCompressor, copy_verbatim
from exam_compressor.compression.pdf.base import BasePdfCompressor
from exam_compressor.compression.pdf.factory import PdfCompressorFactory
from exam_compressor.config.profiles import ExamProfile
from exam_compressor.config.settings import Settings
from exam_compressor.logging.logger import Log

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png"})
PDF_EXTENSIONS = frozenset({"pdf"})
DOCUMENT_EXTENSIONS = frozenset({"doc", "docx"})


def normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def strategy_for(extension: str) -> str:
    """Name of the strategy that handles a file extension."""
    ext = normalize_extension(extension)
    if ext in IMAGE_EXTENSIONS:
        return "image"
    if ext in PDF_EXTENSIONS:
        return "pdf"
    if ext in DOCUMENT_EXTENSIONS:
        return "document"
    return "copy"


class CompressionDispatcher:
    """Selects a compression strategy by extension and applies the profile knobs.

    Strategy failures never propagate: the original bytes are copied to the
    destination and the outcome is degraded to the original size.
    """

    def __init__(
        self,
        image_compressor: ImageCompressor,
        pdf_compressor: BasePdfCompressor,
        document_compressor: DocumentCompressor,
    ) -> None:
        self._image_compressor = image_compressor
        self._pdf_compressor = pdf_compressor
        self._document_compressor = document_compressor

    def dispatch(
        self,
        source: Path,
        destination: Path,
        extension: str,
        profile: ExamProfile,
        original_size: int,
    ) -> CompressionOutcome:
        strategy = strategy_for(extension)
        try:
            size = self._run(strategy, source, destination, profile)
        except CompressionError as exc:
            Log.error(f"{strategy} compression failed for {source.name}: {exc}")
            return self._degrade(strategy, source, destination, original_size, str(exc))
        except OSError as exc:
            Log.exception(f"{strategy} compression hit a filesystem error for {source.name}")
            return self._degrade(strategy, source, destination, original_size, str(exc))
        except Exception as exc:
            Log.exception(f"Unexpected {strategy} compression error for {source.name}")
            return self._degrade(strategy, source, destination, original_size, repr(exc))
        return CompressionOutcome.compressed(strategy, size)

    def _run(
        self,
        strategy: str,
        source: Path,
        destination: Path,
        profile: ExamProfile,
    ) -> int:
        if strategy == "image":
            return self._image_compressor.compress(
                source,
                destination,
                quality=profile.image_quality,
                max_size_kb=profile.max_image_size_kb,
            )
        if strategy == "pdf":
            return self._pdf_compressor.compress(
                source, destination, level=profile.pdf_compression_level
            )
        if strategy == "document":
            return self._document_compressor.compress(
                source, destination, max_size_kb=profile.max_doc_size_kb
            )
        return copy_verbatim(source, destination)

    def _degrade(
        self,
        strategy: str,
        source: Path,
        destination: Path,
        original_size: int,
        reason: str,
    ) -> CompressionOutcome:
        """Store the original bytes in place of the failed compression result."""
        try:
            destination.unlink(missing_ok=True)
            copy_verbatim(source, destination)
        except (CompressionError, OSError) as exc:
            Log.error(f"Fallback copy failed for {source.name}: {exc}")
            return CompressionOutcome.failed(strategy, f"{reason}; fallback copy failed: {exc}")
        Log.warning(f"Stored original {source.name} uncompressed ({original_size} bytes)")
        return CompressionOutcome.degraded(strategy, original_size, reason)


def build_dispatcher(settings: Settings) -> CompressionDispatcher:
    """Build a CompressionDispatcher with the configured PDF engine."""
    return CompressionDispatcher(
        image_compressor=ImageCompressor(),
        pdf_compressor=PdfCompressorFactory.create(settings),
        document_compressor=DocumentCompressor(),
    )
