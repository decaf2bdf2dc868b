from collections.abc import AsyncIterable

from exam_compressor.compression.dispatcher import CompressionDispatcher, build_dispatcher
from exam_compressor.compression.executor import CompressionExecutor
from exam_compressor.compression.models import CompressionOutcome, OutcomeStatus
from exam_compressor.config.profiles import ExamProfile, resolve_profile
from exam_compressor.config.settings import Settings
from exam_compressor.logging.logger import Log
from exam_compressor.processor.models import BatchResult, FileResult, IncomingFile
from exam_compressor.storage.artifact_index import ArtifactIndex
from exam_compressor.storage.exceptions import StagingWriteError
from exam_compressor.storage.mime import guess_mime_type
from exam_compressor.storage.models import UploadRecord
from exam_compressor.storage.object_store import ObjectStore


class UploadIntake:
    """Orchestrates one upload batch.

    Per file: mint identifier -> stage bytes -> compress on the worker pool
    -> index the artifact -> emit a FileResult. Files are handled in the
    order received and a failure only affects the file it happened on.
    """

    def __init__(
        self,
        store: ObjectStore,
        index: ArtifactIndex,
        dispatcher: CompressionDispatcher,
        executor: CompressionExecutor,
        download_url_prefix: str = "/api/download",
    ) -> None:
        self._store = store
        self._index = index
        self._dispatcher = dispatcher
        self._executor = executor
        self._download_url_prefix = download_url_prefix.rstrip("/")

    async def process_batch(
        self,
        exam_type: str,
        parts: AsyncIterable[IncomingFile],
    ) -> BatchResult:
        """Compress every incoming file with the profile of exam_type."""
        profile = resolve_profile(exam_type)
        Log.info(f"Processing files for exam type: {exam_type}")
        batch = BatchResult(exam_type=exam_type)
        async for part in parts:
            batch.files.append(await self.process_file(part, profile))
        Log.info(f"Processed {len(batch.files)} files for exam type: {exam_type}")
        return batch

    async def process_file(self, part: IncomingFile, profile: ExamProfile) -> FileResult:
        record = self._store.new_record(part.filename)
        Log.info(f"Processing file: {record.original_name} as {record.identifier}")
        try:
            await self._store.write_staging(record, part.chunks)
        except StagingWriteError as exc:
            Log.error(str(exc))
            return self._failed(record, str(exc))

        outcome = await self._executor.run(
            self._dispatcher.dispatch,
            record.staging_path,
            record.output_path,
            record.extension,
            profile,
            record.original_size_bytes,
        )
        if not outcome.has_artifact:
            return self._failed(record, outcome.reason)

        self._index.register(record.identifier, record.output_path)
        return self._result(record, outcome)

    def _result(self, record: UploadRecord, outcome: CompressionOutcome) -> FileResult:
        return FileResult(
            identifier=record.identifier,
            original_name=record.original_name,
            original_size=record.original_size_bytes,
            compressed_size=outcome.size_bytes,
            file_type=guess_mime_type(record.staging_path),
            download_url=f"{self._download_url_prefix}/{record.identifier}",
            status=outcome.status,
            error=outcome.reason,
        )

    def _failed(self, record: UploadRecord, reason: str) -> FileResult:
        return FileResult(
            identifier=record.identifier,
            original_name=record.original_name,
            original_size=record.original_size_bytes,
            compressed_size=None,
            file_type=guess_mime_type(record.staging_path),
            download_url=None,
            status=OutcomeStatus.FAILED,
            error=reason,
        )


def build_intake(
    settings: Settings,
    executor: CompressionExecutor,
    store: ObjectStore | None = None,
    index: ArtifactIndex | None = None,
) -> UploadIntake:
    """Build an UploadIntake wired to the configured directories and engine."""
    return UploadIntake(
        store=store if store is not None else ObjectStore(settings.upload_dir, settings.output_dir),
        index=index if index is not None else ArtifactIndex(settings.output_dir),
        dispatcher=build_dispatcher(settings),
        executor=executor,
        download_url_prefix=settings.download_url_prefix,
    )
