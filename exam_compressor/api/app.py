from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from exam_compressor.api.routes import router
from exam_compressor.compression.executor import CompressionExecutor
from exam_compressor.config.settings import Settings
from exam_compressor.logging.logger import Log
from exam_compressor.processor.intake import build_intake
from exam_compressor.retrieval.service import RetrievalService
from exam_compressor.storage.artifact_index import ArtifactIndex
from exam_compressor.storage.object_store import ObjectStore


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the HTTP application around the compression services."""
    settings = settings if settings is not None else Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store = ObjectStore(settings.upload_dir, settings.output_dir)
        store.ensure_directories()
        index = ArtifactIndex(settings.output_dir)
        Log.info(f"Indexed {index.rebuild()} stored artifacts in {settings.output_dir}")

        executor = CompressionExecutor(settings.compression_workers)
        app.state.intake = build_intake(settings, executor, store=store, index=index)
        app.state.retrieval = RetrievalService(index)
        Log.info(
            f"Compression service ready ({settings.app_env}, "
            f"{executor.max_workers} workers, pdf engine {settings.pdf_engine})"
        )
        try:
            yield
        finally:
            executor.shutdown()
            app.state.intake = None
            app.state.retrieval = None

    app = FastAPI(title="Exam Compressor", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app
