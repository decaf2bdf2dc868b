import threading
import uuid
from pathlib import Path

from exam_compressor.logging.logger import Log

IDENTIFIER_LENGTH = 36  # canonical str(uuid.uuid4())


def artifact_name(identifier: str, original_name: str) -> str:
    return f"{identifier}-{original_name}"


def is_identifier(value: str) -> bool:
    """True for a canonical lower-case UUID string."""
    if len(value) != IDENTIFIER_LENGTH:
        return False
    try:
        return str(uuid.UUID(value)) == value
    except ValueError:
        return False


def split_artifact_name(file_name: str) -> tuple[str, str] | None:
    """Split `{identifier}-{original_name}` into its parts.

    The identifier is matched by its full fixed length, never as a prefix, so
    an identifier that happens to start another one cannot match it.
    Returns None for names that do not carry a valid identifier.
    """
    identifier = file_name[:IDENTIFIER_LENGTH]
    separator = file_name[IDENTIFIER_LENGTH:IDENTIFIER_LENGTH + 1]
    if separator != "-" or not is_identifier(identifier):
        return None
    return identifier, file_name[IDENTIFIER_LENGTH + 1:]


class ArtifactIndex:
    """Thread-safe identifier -> output path map backed by the output directory."""

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir
        self._entries: dict[str, Path] = {}
        self._lock = threading.Lock()

    def register(self, identifier: str, path: Path) -> None:
        with self._lock:
            self._entries[identifier] = path

    def lookup(self, identifier: str) -> Path | None:
        """Return the artifact path, rescanning the output directory on a miss.

        Malformed identifiers can never name an artifact and skip the rescan.
        """
        with self._lock:
            path = self._entries.get(identifier)
        if path is not None or not is_identifier(identifier):
            return path
        self.rebuild()
        with self._lock:
            return self._entries.get(identifier)

    def rebuild(self) -> int:
        """Re-read every artifact name in the output directory.

        Returns:
            Number of indexed artifacts.
        """
        if not self._output_dir.is_dir():
            return 0
        found: dict[str, Path] = {}
        for entry in self._output_dir.iterdir():
            if not entry.is_file():
                continue
            parts = split_artifact_name(entry.name)
            if parts is None:
                Log.debug(f"Ignoring unrecognised output file {entry.name}")
                continue
            found.setdefault(parts[0], entry)
        with self._lock:
            self._entries.update(found)
            count = len(self._entries)
        Log.debug(f"Artifact index holds {count} entries")
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
