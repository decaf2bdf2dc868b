from exam_compressor.compression.pdf.base import BasePdfCompressor
from exam_compressor.compression.pdf.pymupdf_compressor import PyMuPdfCompressor
from exam_compressor.compression.pdf.pypdf_compressor import PypdfCompressor
from exam_compressor.config.settings import Settings


class PdfCompressorFactory:
    """Creates the correct PDF compressor based on settings."""

    ADAPTERS: dict[str, type[BasePdfCompressor]] = {
        "pypdf": PypdfCompressor,
        "pymupdf": PyMuPdfCompressor,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfCompressor:
        """Build the compressor named by `settings.pdf_engine` (case-insensitive).

        Raises:
            ValueError: if the engine is not one of ADAPTERS.
        """
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
