from pydantic import BaseModel

from exam_compressor.config.profiles import ExamProfileInfo
from exam_compressor.processor.models import BatchResult, FileResult


class ProcessedFileOut(BaseModel):
    id: str
    original_name: str
    original_size: int
    compressed_size: int | None
    file_type: str
    download_url: str | None
    status: str
    error: str | None = None

    @classmethod
    def from_result(cls, result: FileResult) -> "ProcessedFileOut":
        return cls(
            id=result.identifier,
            original_name=result.original_name,
            original_size=result.original_size,
            compressed_size=result.compressed_size,
            file_type=result.file_type,
            download_url=result.download_url,
            status=result.status.value,
            error=result.error or None,
        )


class CompressResponse(BaseModel):
    success: bool
    message: str
    exam_type: str
    files: list[ProcessedFileOut]

    @classmethod
    def from_batch(cls, batch: BatchResult) -> "CompressResponse":
        return cls(
            success=True,
            message=batch.message,
            exam_type=batch.exam_type,
            files=[ProcessedFileOut.from_result(f) for f in batch.files],
        )


class ProfileOut(BaseModel):
    exam_type: str
    name: str
    description: str
    accepted_formats: str
    max_image_size_kb: int
    max_doc_size_kb: int
    image_quality: int
    pdf_compression_level: int

    @classmethod
    def from_info(cls, info: ExamProfileInfo) -> "ProfileOut":
        return cls(
            exam_type=info.token,
            name=info.title,
            description=info.description,
            accepted_formats=info.accepted_formats,
            max_image_size_kb=info.profile.max_image_size_kb,
            max_doc_size_kb=info.profile.max_doc_size_kb,
            image_quality=info.profile.image_quality,
            pdf_compression_level=info.profile.pdf_compression_level,
        )
