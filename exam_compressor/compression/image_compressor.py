import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from exam_compressor.compression.exceptions import DecodeError, EncodeError, FileAccessError
from exam_compressor.compression.passthrough import copy_verbatim
from exam_compressor.logging.logger import Log

OUTPUT_FORMATS: dict[str, str] = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
}
DEFAULT_OUTPUT_FORMAT = "JPEG"


def scale_for_size(original_size: int, max_size_bytes: int) -> float:
    """Pick the linear resize factor for an over-budget image.

    Tiers are half-open on the upper side: exactly 4x the budget still gets 0.8
    and exactly 2x still gets 1.0 (re-encode only).
    """
    if original_size > max_size_bytes * 4:
        return 0.6
    if original_size > max_size_bytes * 2:
        return 0.8
    return 1.0


def output_format_for(destination: Path) -> str:
    return OUTPUT_FORMATS.get(destination.suffix.lower(), DEFAULT_OUTPUT_FORMAT)


class ImageCompressor:
    """Single-pass size-driven JPEG/PNG compressor built on Pillow.

    The scale tier is chosen once from the size ratio; the encoded result is
    not re-checked against the target and may still exceed it.
    """

    def compress(
        self,
        source: Path,
        destination: Path,
        quality: int,
        max_size_kb: int,
    ) -> int:
        """Compress an image toward max_size_kb and return the output size in bytes.

        Raises:
            FileAccessError: if the source cannot be read or the output cannot be written.
            DecodeError: if the source is not a recognised, intact image.
            EncodeError: if the resized image cannot be encoded.
        """
        image = self._decode(source)
        try:
            original_size = source.stat().st_size
        except OSError as exc:
            raise FileAccessError(f"Failed to stat image {source}: {exc}") from exc

        max_size_bytes = max_size_kb * 1024
        if original_size <= max_size_bytes:
            copied = copy_verbatim(source, destination)
            Log.info(f"Image {source.name} already within size limit, copied: {copied} bytes")
            return copied

        scale = scale_for_size(original_size, max_size_bytes)
        if scale < 1.0:
            width, height = image.size
            new_size = (max(1, int(width * scale)), max(1, int(height * scale)))
            try:
                image = image.resize(new_size, Image.Resampling.LANCZOS)
            except MemoryError as exc:
                raise EncodeError(f"Not enough memory to resize {source.name}: {exc}") from exc
            Log.debug(f"Resized {source.name} from {width}x{height} to {new_size[0]}x{new_size[1]}")

        encoded = self._encode(image, output_format_for(destination), quality)
        self._write(destination, encoded)
        Log.info(f"Image compressed from {original_size} to {len(encoded)} bytes")
        return len(encoded)

    def _decode(self, source: Path) -> Image.Image:
        try:
            with Image.open(source) as image:
                image.load()
                return image.copy()
        except (FileNotFoundError, PermissionError, IsADirectoryError) as exc:
            raise FileAccessError(f"Failed to open image {source}: {exc}") from exc
        except Image.DecompressionBombError as exc:
            raise DecodeError(f"Refusing oversized image {source}: {exc}") from exc
        except MemoryError as exc:
            raise DecodeError(f"Not enough memory to decode image {source}: {exc}") from exc
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Failed to decode image {source}: {exc}") from exc

    def _encode(self, image: Image.Image, image_format: str, quality: int) -> bytes:
        buffer = io.BytesIO()
        try:
            if image_format == "JPEG":
                if image.mode not in ("RGB", "L"):
                    image = image.convert("RGB")
                image.save(buffer, format="JPEG", quality=quality, optimize=True)
            else:
                # PNG has no quality knob; resizing is the only lever.
                image.save(buffer, format=image_format, optimize=True)
        except (OSError, ValueError) as exc:
            raise EncodeError(f"Failed to encode image as {image_format}: {exc}") from exc
        return buffer.getvalue()

    def _write(self, destination: Path, data: bytes) -> None:
        try:
            destination.write_bytes(data)
        except OSError as exc:
            destination.unlink(missing_ok=True)
            raise FileAccessError(f"Failed to write {destination}: {exc}") from exc
