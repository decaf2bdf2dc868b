import mimetypes
from pathlib import Path

DEFAULT_MIME_TYPE = "application/octet-stream"

# Not registered by every platform's mimetypes database.
mimetypes.add_type(
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document", ".docx"
)
mimetypes.add_type("application/msword", ".doc")


def guess_mime_type(path: Path | str) -> str:
    """Guess a content type from the file extension."""
    mime_type, _ = mimetypes.guess_type(str(path), strict=False)
    return mime_type or DEFAULT_MIME_TYPE
