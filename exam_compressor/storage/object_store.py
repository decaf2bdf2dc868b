import asyncio
import os
import uuid
from collections.abc import AsyncIterable
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import BinaryIO

from exam_compressor.logging.logger import Log
from exam_compressor.storage.artifact_index import artifact_name
from exam_compressor.storage.exceptions import StagingWriteError
from exam_compressor.storage.models import UploadRecord

UNKNOWN_FILE_NAME = "unknown_file"


def new_identifier() -> str:
    """Mint an opaque identifier with negligible collision probability."""
    return str(uuid.uuid4())


def safe_file_name(file_name: str | None) -> str:
    """Reduce a client-supplied file name to its final path component.

    Both `/` and `\\` are treated as separators, so `a\\b.jpg` is stored as `b.jpg`.
    """
    name = PureWindowsPath(PurePosixPath(file_name or "").name).name.strip()
    if name in ("", ".", ".."):
        return UNKNOWN_FILE_NAME
    return name


class ObjectStore:
    """Staging and output directories holding `{identifier}-{name}` files."""

    def __init__(self, staging_dir: Path, output_dir: Path) -> None:
        self._staging_dir = staging_dir
        self._output_dir = output_dir

    @property
    def staging_dir(self) -> Path:
        return self._staging_dir

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def ensure_directories(self) -> None:
        """Create both directories if absent; safe to call concurrently."""
        self._staging_dir.mkdir(parents=True, exist_ok=True)
        self._output_dir.mkdir(parents=True, exist_ok=True)

    def new_record(self, file_name: str | None) -> UploadRecord:
        identifier = new_identifier()
        original_name = safe_file_name(file_name)
        stored_name = artifact_name(identifier, original_name)
        return UploadRecord(
            identifier=identifier,
            original_name=original_name,
            staging_path=self._staging_dir / stored_name,
            output_path=self._output_dir / stored_name,
        )

    async def write_staging(
        self,
        record: UploadRecord,
        chunks: AsyncIterable[bytes],
    ) -> int:
        """Stream all chunks to the staging file and return its persisted size.

        The file is flushed and fsynced before returning, so a strategy never
        sees a partial upload.

        Raises:
            StagingWriteError: if the directories or the staging file cannot be written.
        """
        try:
            await asyncio.to_thread(self.ensure_directories)
            handle = await asyncio.to_thread(record.staging_path.open, "wb")
            try:
                async for chunk in chunks:
                    if chunk:
                        await asyncio.to_thread(handle.write, chunk)
                await asyncio.to_thread(self._sync, handle)
            finally:
                await asyncio.to_thread(handle.close)
            size = (await asyncio.to_thread(record.staging_path.stat)).st_size
        except OSError as exc:
            raise StagingWriteError(
                f"Failed to stage {record.original_name} as {record.staging_path}: {exc}"
            ) from exc

        record.original_size_bytes = size
        Log.info(f"Staged {record.original_name} ({size} bytes) as {record.identifier}")
        return size

    @staticmethod
    def _sync(handle: BinaryIO) -> None:
        handle.flush()
        os.fsync(handle.fileno())
