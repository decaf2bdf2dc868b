import asyncio

from exam_compressor.logging.logger import Log
from exam_compressor.storage.artifact_index import ArtifactIndex, split_artifact_name
from exam_compressor.storage.exceptions import ArtifactNotFoundError
from exam_compressor.storage.mime import guess_mime_type
from exam_compressor.storage.models import StoredArtifact


class RetrievalService:
    """Serves compressed artifacts back by identifier."""

    def __init__(self, index: ArtifactIndex) -> None:
        self._index = index

    def retrieve(self, identifier: str) -> StoredArtifact:
        """Read the artifact stored under identifier.

        Raises:
            ArtifactNotFoundError: if the identifier is unknown or its file unreadable.
        """
        path = self._index.lookup(identifier)
        if path is None:
            raise ArtifactNotFoundError(f"No artifact for identifier {identifier}")

        parts = split_artifact_name(path.name)
        if parts is None or parts[0] != identifier:
            raise ArtifactNotFoundError(f"No artifact for identifier {identifier}")

        try:
            content = path.read_bytes()
        except OSError as exc:
            Log.warning(f"Failed to read artifact {path}: {exc}")
            raise ArtifactNotFoundError(f"Artifact {identifier} is not readable") from exc

        return StoredArtifact(
            content=content,
            original_name=parts[1],
            mime_type=guess_mime_type(path),
        )

    async def retrieve_async(self, identifier: str) -> StoredArtifact:
        return await asyncio.to_thread(self.retrieve, identifier)
