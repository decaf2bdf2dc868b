import asyncio
from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from exam_compressor.storage.exceptions import StagingWriteError
from exam_compressor.storage.object_store import (
    UNKNOWN_FILE_NAME,
    ObjectStore,
    new_identifier,
    safe_file_name,
)


async def _chunks(*parts: bytes) -> AsyncIterator[bytes]:
    for part in parts:
        yield part


def _store(tmp_path: Path) -> ObjectStore:
    return ObjectStore(tmp_path / "temp_uploads", tmp_path / "compressed_files")


class TestIdentifiers:
    def test_identifiers_are_unique(self) -> None:
        assert len({new_identifier() for _ in range(1000)}) == 1000

    def test_identifier_is_canonical_uuid(self) -> None:
        identifier = new_identifier()
        assert len(identifier) == 36
        assert identifier.count("-") == 4


class TestSafeFileName:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("photo.jpg", "photo.jpg"),
            ("../../etc/passwd", "passwd"),
            ("C:\\Users\\me\\sign.png", "sign.png"),
            ("", UNKNOWN_FILE_NAME),
            (None, UNKNOWN_FILE_NAME),
            ("..", UNKNOWN_FILE_NAME),
        ],
    )
    def test_reduces_to_final_component(self, raw: str | None, expected: str) -> None:
        assert safe_file_name(raw) == expected

    def test_backslash_is_a_separator_on_every_platform(self) -> None:
        # Backslashes count as separators even on POSIX hosts.
        assert safe_file_name("a\\b.jpg") == "b.jpg"
        assert safe_file_name("scans\\2024/admit card.pdf") == "admit card.pdf"

    def test_names_without_separators_are_kept_exactly(self) -> None:
        assert safe_file_name("admit-card (final).PDF") == "admit-card (final).PDF"


class TestNewRecord:
    def test_paths_share_identifier_prefixed_name(self, tmp_path: Path) -> None:
        store = _store(tmp_path)

        record = store.new_record("marksheet.pdf")

        expected = f"{record.identifier}-marksheet.pdf"
        assert record.staging_path == tmp_path / "temp_uploads" / expected
        assert record.output_path == tmp_path / "compressed_files" / expected
        assert record.extension == "pdf"

    def test_each_record_gets_fresh_identifier(self, tmp_path: Path) -> None:
        store = _store(tmp_path)
        assert store.new_record("a.jpg").identifier != store.new_record("a.jpg").identifier


class TestWriteStaging:
    def test_concatenates_chunks_and_records_size(self, tmp_path: Path) -> None:
        store = _store(tmp_path)
        record = store.new_record("photo.jpg")

        size = asyncio.run(store.write_staging(record, _chunks(b"ab", b"", b"cde", b"f" * 10)))

        assert size == 15
        assert record.original_size_bytes == 15
        assert record.staging_path.read_bytes() == b"abcde" + b"f" * 10

    def test_creates_both_directories(self, tmp_path: Path) -> None:
        store = _store(tmp_path)
        record = store.new_record("a.txt")

        asyncio.run(store.write_staging(record, _chunks(b"x")))

        assert store.staging_dir.is_dir()
        assert store.output_dir.is_dir()

    def test_empty_upload_is_staged(self, tmp_path: Path) -> None:
        store = _store(tmp_path)
        record = store.new_record("empty.txt")

        assert asyncio.run(store.write_staging(record, _chunks())) == 0
        assert record.staging_path.exists()

    def test_raises_staging_write_error_when_directory_blocked(self, tmp_path: Path) -> None:
        (tmp_path / "temp_uploads").write_text("a file where the directory should be")
        store = _store(tmp_path)
        record = store.new_record("a.jpg")

        with pytest.raises(StagingWriteError, match="a.jpg"):
            asyncio.run(store.write_staging(record, _chunks(b"x")))

    def test_raises_staging_write_error_when_stream_fails(self, tmp_path: Path) -> None:
        async def _broken() -> AsyncIterator[bytes]:
            yield b"partial"
            raise OSError("connection reset")

        store = _store(tmp_path)
        record = store.new_record("a.jpg")

        with pytest.raises(StagingWriteError):
            asyncio.run(store.write_staging(record, _broken()))
