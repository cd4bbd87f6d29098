"""Format normalization for uploaded photos.

HEIC/HEIF photos (the default on recent iPhones) are not accepted by most
downstream consumers, including the generation service, so they are decoded
with Pillow via the pillow-heif plugin and re-encoded as PNG. Every other
accepted format is passed through untouched.

Each processed image also gets a preview file on disk that the Gradio UI can
display. The preview is a scoped resource: whoever holds the ProcessedImage
must call ``release()`` (or use it as a context manager) when the image is
replaced or discarded.
"""

import io
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image
from pillow_heif import register_heif_opener

from .config import config
from .errors import ConversionError
from .validation import HEIC_EXTENSION, UploadCandidate

logger = logging.getLogger(__name__)

# Lets Image.open() read HEIC/HEIF containers
register_heif_opener()

PNG_MEDIA_TYPE = "image/png"


@dataclass
class PreviewReference:
    """A preview file owned by the caller.

    Releasing deletes the file. Repeated calls are no-ops, so it is safe to
    release on every exit path.
    """

    path: Path
    released: bool = field(default=False, compare=False)

    def release(self) -> None:
        """Delete the preview file (once)."""
        if self.released:
            return
        self.released = True
        try:
            self.path.unlink(missing_ok=True)
            logger.debug(f"Released preview {self.path}")
        except OSError as e:
            logger.warning(f"Could not remove preview {self.path}: {e}")

    def __enter__(self) -> "PreviewReference":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


@dataclass
class ProcessedImage:
    """An upload in a standard encoding, ready for generation.

    Attributes:
        data: Image bytes (the original bytes object when not converted)
        filename: Filename, with .png extension after conversion
        media_type: MIME type of ``data``
        preview: Preview file for display, owned by the holder
        was_converted: True if the upload was converted from HEIC/HEIF
    """

    data: bytes
    filename: str
    media_type: str
    preview: PreviewReference
    was_converted: bool = False

    def release(self) -> None:
        """Release the preview file."""
        self.preview.release()

    def __enter__(self) -> "ProcessedImage":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


def convert_heic_to_png(data: bytes, quality: float | None = None) -> bytes:
    """Decode a HEIC/HEIF image and re-encode it as PNG.

    Args:
        data: HEIC/HEIF file contents
        quality: Quality factor 0-1 (default: config.heic_quality). PNG is
            lossless, so this only selects the zlib compression level.

    Returns:
        PNG-encoded bytes

    Raises:
        ConversionError: If the image can't be decoded or encoded
    """
    if quality is None:
        quality = config.heic_quality

    # Higher quality trades file size for encoding speed
    compress_level = max(0, min(9, round((1.0 - quality) * 9)))

    try:
        with Image.open(io.BytesIO(data)) as image:
            if image.mode not in ("RGB", "RGBA"):
                image = image.convert("RGBA" if "A" in image.getbands() else "RGB")
            buffer = io.BytesIO()
            image.save(buffer, format="PNG", compress_level=compress_level)
    except Exception as e:
        logger.error(f"Error converting HEIC to PNG: {e}", exc_info=True)
        raise ConversionError("Failed to convert HEIC image") from e

    return buffer.getvalue()


def _write_preview(data: bytes, filename: str, preview_dir: Path) -> PreviewReference:
    preview_dir.mkdir(parents=True, exist_ok=True)
    suffix = Path(filename).suffix.lower() or ".img"
    path = preview_dir / f"{uuid.uuid4().hex}{suffix}"
    path.write_bytes(data)
    return PreviewReference(path)


def normalize_upload(candidate: UploadCandidate, preview_dir: Path | None = None) -> ProcessedImage:
    """Normalize an accepted upload and create its preview.

    HEIC/HEIF files (detected by extension, case-insensitive) are converted
    to PNG and renamed; anything else is passed through unchanged.

    Args:
        candidate: A validated upload
        preview_dir: Where to write the preview (default: config.previews_dir)

    Returns:
        ProcessedImage; the caller must release its preview

    Raises:
        ConversionError: If HEIC/HEIF conversion fails. No preview is left behind.
    """
    if preview_dir is None:
        preview_dir = config.previews_dir

    if candidate.is_heic:
        logger.info(f"Converting {candidate.filename} to PNG")
        data = convert_heic_to_png(candidate.data)
        filename = HEIC_EXTENSION.sub(".png", candidate.filename)
        media_type = PNG_MEDIA_TYPE
        was_converted = True
    else:
        data = candidate.data
        filename = candidate.filename
        media_type = candidate.media_type
        was_converted = False

    try:
        preview = _write_preview(data, filename, preview_dir)
    except OSError as e:
        raise ConversionError(f"Failed to prepare preview for {filename}") from e

    return ProcessedImage(
        data=data,
        filename=filename,
        media_type=media_type,
        preview=preview,
        was_converted=was_converted,
    )
