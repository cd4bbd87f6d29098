"""Upload validation for the headshot pipeline."""

import logging
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path

from .config import config
from .errors import ValidationError

logger = logging.getLogger(__name__)

HEIC_EXTENSION = re.compile(r"\.(heic|heif)$", re.IGNORECASE)

SIZE_ERROR_MESSAGE = "File size must be less than 10MB"
TYPE_ERROR_MESSAGE = "Please upload a valid image file (JPEG, PNG, WebP, HEIC)"


@dataclass(frozen=True)
class UploadCandidate:
    """A file picked by the user, before validation.

    Attributes:
        data: Raw file contents
        media_type: Declared MIME type (may be empty)
        filename: Original filename, used for extension checks
        size: Declared size in bytes
    """

    data: bytes
    media_type: str
    filename: str
    size: int

    @classmethod
    def from_path(cls, path: str | Path, media_type: str | None = None) -> "UploadCandidate":
        """Build a candidate from a file on disk (e.g. a Gradio upload).

        Args:
            path: Path to the uploaded file
            media_type: Declared MIME type; guessed from the filename if None

        Returns:
            UploadCandidate holding the file's bytes

        Raises:
            ValidationError: With kind "size" if the file is over the limit;
                the file is not read in that case
        """
        path = Path(path)
        size = path.stat().st_size
        if size > config.max_upload_bytes:
            logger.info(f"Rejected upload {path.name!r} before reading: {size} bytes")
            raise ValidationError(SIZE_ERROR_MESSAGE, kind="size")

        data = path.read_bytes()
        if media_type is None:
            media_type = mimetypes.guess_type(path.name)[0] or ""
        return cls(data=data, media_type=media_type, filename=path.name, size=len(data))

    @property
    def is_heic(self) -> bool:
        """True if the filename has a .heic/.heif extension (any case)."""
        return bool(HEIC_EXTENSION.search(self.filename))


def validate_upload(candidate: UploadCandidate) -> None:
    """Validate an upload against the size and type policy.

    The size check runs first, so an oversized file is always reported as a
    size problem regardless of its type.

    Args:
        candidate: File selected by the user

    Raises:
        ValidationError: With kind "size" or "type" if the file is rejected
    """
    if candidate.size > config.max_upload_bytes:
        logger.info(f"Rejected upload {candidate.filename!r}: {candidate.size} bytes")
        raise ValidationError(SIZE_ERROR_MESSAGE, kind="size")

    media_type = (candidate.media_type or "").lower()
    if media_type not in config.allowed_media_types and not candidate.is_heic:
        logger.info(f"Rejected upload {candidate.filename!r}: type {media_type!r}")
        raise ValidationError(TYPE_ERROR_MESSAGE, kind="type")


def upload_error_message(candidate: UploadCandidate) -> str | None:
    """Return the validation message for a candidate, or None if it is acceptable."""
    try:
        validate_upload(candidate)
    except ValidationError as e:
        return str(e)
    return None
