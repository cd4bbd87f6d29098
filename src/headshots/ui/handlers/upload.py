"""Step 1 handlers: accepting, converting and removing the uploaded photo."""

import logging

import gradio as gr

from headshots.core.errors import ConversionError, ValidationError
from headshots.core.normalizer import normalize_upload
from headshots.core.validation import UploadCandidate, validate_upload

from ..models import WizardState
from ..state import remove_uploaded_image, set_uploaded_image

logger = logging.getLogger(__name__)


def _release_current(state: WizardState) -> None:
    current = state.uploaded_image
    if current is not None:
        current.release()


def handle_upload(file_path: str | None, state: WizardState) -> tuple[gr.update, str, WizardState]:
    """Validate, normalize and hold an uploaded photo.

    The previous photo's preview is released only once the new one has been
    accepted, so a rejected upload leaves the current photo in place.

    Args:
        file_path: Temp path of the uploaded file (None when the input is cleared)
        state: Wizard state

    Returns:
        Tuple of (preview_update, status_message, updated_state)
    """
    if not file_path:
        _, preview, status, state = remove_upload(state)
        return preview, status, state

    try:
        candidate = UploadCandidate.from_path(file_path)
        validate_upload(candidate)
        processed = normalize_upload(candidate)
    except ValidationError as e:
        logger.info(f"Upload rejected ({e.kind}): {e}")
        gr.Warning(str(e))
        return gr.update(), f"❌ {e}", state
    except ConversionError as e:
        gr.Warning("Failed to process image. Please try again.")
        return gr.update(), f"❌ {e}", state
    except OSError as e:
        logger.error(f"Could not read upload {file_path}: {e}")
        gr.Warning("Failed to process image. Please try again.")
        return gr.update(), "❌ Failed to process image", state

    _release_current(state)
    state = set_uploaded_image(state, processed)

    if processed.was_converted:
        gr.Info("HEIC image converted successfully!")
    gr.Info("Image uploaded successfully!")
    logger.info(f"Accepted upload {processed.filename} (converted={processed.was_converted})")

    return (
        gr.update(value=str(processed.preview.path), visible=True),
        f"✅ **{processed.filename}** ready",
        state,
    )


def remove_upload(state: WizardState) -> tuple[gr.update, gr.update, str, WizardState]:
    """Drop the held photo, release its preview and clear the file picker.

    Returns:
        Tuple of (file_input_update, preview_update, status_message, updated_state)
    """
    _release_current(state)
    state = remove_uploaded_image(state)
    return gr.update(value=None), gr.update(value=None, visible=False), "", state


def cleanup_session(state: WizardState) -> None:
    """Release resources held by a session (called when the browser tab closes)."""
    if state is not None:
        _release_current(state)
