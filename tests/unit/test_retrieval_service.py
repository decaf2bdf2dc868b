import asyncio
import uuid
from pathlib import Path

import pytest

from exam_compressor.retrieval.service import RetrievalService
from exam_compressor.storage.artifact_index import ArtifactIndex, artifact_name
from exam_compressor.storage.exceptions import ArtifactNotFoundError


def _store_artifact(output_dir: Path, original_name: str, data: bytes) -> tuple[str, Path]:
    identifier = str(uuid.uuid4())
    path = output_dir / artifact_name(identifier, original_name)
    path.write_bytes(data)
    return identifier, path


class TestRetrieve:
    def test_returns_bytes_name_and_mime_type(self, tmp_path: Path) -> None:
        identifier, _ = _store_artifact(tmp_path, "photo.jpg", b"jpeg-bytes")
        service = RetrievalService(ArtifactIndex(tmp_path))

        artifact = service.retrieve(identifier)

        assert artifact.content == b"jpeg-bytes"
        assert artifact.original_name == "photo.jpg"
        assert artifact.mime_type == "image/jpeg"

    def test_original_name_with_hyphens_survives(self, tmp_path: Path) -> None:
        identifier, _ = _store_artifact(tmp_path, "admit-card-final.pdf", b"%PDF")
        service = RetrievalService(ArtifactIndex(tmp_path))

        artifact = service.retrieve(identifier)

        assert artifact.original_name == "admit-card-final.pdf"
        assert artifact.mime_type == "application/pdf"

    def test_unknown_extension_gets_octet_stream(self, tmp_path: Path) -> None:
        identifier, _ = _store_artifact(tmp_path, "blob.zzz", b"??")
        artifact = RetrievalService(ArtifactIndex(tmp_path)).retrieve(identifier)
        assert artifact.mime_type == "application/octet-stream"

    def test_returns_correct_file_among_many(self, tmp_path: Path) -> None:
        stored = [_store_artifact(tmp_path, f"file{i}.txt", f"content {i}".encode()) for i in range(5)]
        service = RetrievalService(ArtifactIndex(tmp_path))

        for i, (identifier, _) in enumerate(stored):
            assert service.retrieve(identifier).content == f"content {i}".encode()

    def test_async_variant(self, tmp_path: Path) -> None:
        identifier, _ = _store_artifact(tmp_path, "a.png", b"png")
        service = RetrievalService(ArtifactIndex(tmp_path))

        artifact = asyncio.run(service.retrieve_async(identifier))

        assert artifact.content == b"png"


class TestNotFound:
    def test_never_issued_identifier(self, tmp_path: Path) -> None:
        _store_artifact(tmp_path, "a.jpg", b"x")
        service = RetrievalService(ArtifactIndex(tmp_path))

        with pytest.raises(ArtifactNotFoundError):
            service.retrieve(str(uuid.uuid4()))

    def test_prefix_of_issued_identifier(self, tmp_path: Path) -> None:
        identifier, _ = _store_artifact(tmp_path, "a.jpg", b"x")
        service = RetrievalService(ArtifactIndex(tmp_path))

        with pytest.raises(ArtifactNotFoundError):
            service.retrieve(identifier[:8])

    def test_unreadable_artifact(self, tmp_path: Path) -> None:
        identifier, path = _store_artifact(tmp_path, "a.jpg", b"x")
        index = ArtifactIndex(tmp_path)
        index.register(identifier, path)
        path.unlink()

        with pytest.raises(ArtifactNotFoundError):
            RetrievalService(index).retrieve(identifier)

    def test_path_like_identifier(self, tmp_path: Path) -> None:
        service = RetrievalService(ArtifactIndex(tmp_path))
        with pytest.raises(ArtifactNotFoundError):
            service.retrieve("../../etc/passwd")
