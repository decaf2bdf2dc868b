from collections.abc import AsyncIterator
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from exam_compressor.api.dependencies import get_intake, get_retrieval, get_upload_chunk_size
from exam_compressor.api.schemas import CompressResponse, ProfileOut
from exam_compressor.config.profiles import PROFILES
from exam_compressor.logging.logger import Log
from exam_compressor.processor.intake import UploadIntake
from exam_compressor.processor.models import IncomingFile
from exam_compressor.retrieval.service import RetrievalService
from exam_compressor.storage.exceptions import ArtifactNotFoundError

router = APIRouter(prefix="/api")


async def _read_chunks(upload: UploadFile, chunk_size: int) -> AsyncIterator[bytes]:
    while True:
        chunk = await upload.read(chunk_size)
        if not chunk:
            break
        yield chunk


async def _incoming_files(
    uploads: list[UploadFile], chunk_size: int
) -> AsyncIterator[IncomingFile]:
    for upload in uploads:
        yield IncomingFile(filename=upload.filename, chunks=_read_chunks(upload, chunk_size))


def _content_disposition(file_name: str) -> str:
    ascii_name = file_name.encode("ascii", "replace").decode("ascii").replace('"', "_")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(file_name)}"


@router.post("/compress", response_model=CompressResponse)
async def compress_files(
    exam_type: str = Query(..., description="Exam profile token, e.g. gate"),
    files: list[UploadFile] = File(..., description="Files to compress"),
    intake: UploadIntake = Depends(get_intake),
    chunk_size: int = Depends(get_upload_chunk_size),
) -> CompressResponse:
    """Compress every uploaded file with the profile of exam_type."""
    batch = await intake.process_batch(exam_type, _incoming_files(files, chunk_size))
    return CompressResponse.from_batch(batch)


@router.get("/download/{file_id}")
async def download_file(
    file_id: str,
    retrieval: RetrievalService = Depends(get_retrieval),
) -> Response:
    """Return a compressed artifact with its original file name."""
    try:
        artifact = await retrieval.retrieve_async(file_id)
    except ArtifactNotFoundError as exc:
        Log.info(f"Download miss: {exc}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found") from exc
    return Response(
        content=artifact.content,
        media_type=artifact.mime_type,
        headers={"Content-Disposition": _content_disposition(artifact.original_name)},
    )


@router.get("/profiles", response_model=list[ProfileOut])
async def list_profiles() -> list[ProfileOut]:
    return [ProfileOut.from_info(info) for info in PROFILES.values()]


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
