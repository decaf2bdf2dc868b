class CompressionError(Exception):
    """Base exception for all compression strategy errors."""


class DecodeError(CompressionError):
    """Raised when a source image or PDF cannot be decoded or parsed."""


class EncodeError(CompressionError):
    """Raised when a compressed result cannot be encoded or serialized."""


class FileAccessError(CompressionError):
    """Raised when a source or destination file cannot be read or written."""
