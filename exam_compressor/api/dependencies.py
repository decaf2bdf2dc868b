"""FastAPI dependencies exposing the services built during application start-up."""

from fastapi import HTTPException, Request, status

from exam_compressor.processor.intake import UploadIntake
from exam_compressor.retrieval.service import RetrievalService


def get_intake(request: Request) -> UploadIntake:
    intake = getattr(request.app.state, "intake", None)
    if intake is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Compression service is not ready",
        )
    return intake


def get_retrieval(request: Request) -> RetrievalService:
    retrieval = getattr(request.app.state, "retrieval", None)
    if retrieval is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Retrieval service is not ready",
        )
    return retrieval


def get_upload_chunk_size(request: Request) -> int:
    return request.app.state.settings.upload_chunk_size
