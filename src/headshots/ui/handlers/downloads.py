"""Step 3 handlers: downloading the generated headshots."""

import logging
import tempfile
from functools import partial
from pathlib import Path

import gradio as gr

from headshots.core.config import config
from headshots.core.downloads import BatchDownloader
from headshots.core.errors import DownloadError
from headshots.core.service import fetch_bytes

from ..models import WizardState

logger = logging.getLogger(__name__)


def create_downloader() -> BatchDownloader:
    """Build a downloader from configuration.

    Each downloader writes into its own fresh directory under
    ``config.downloads_dir``, so batches from different sessions (or repeated
    downloads of the same style on the same day) never share a path.
    """
    output_dir = Path(tempfile.mkdtemp(prefix="batch-", dir=config.downloads_dir))
    return BatchDownloader(
        fetch=partial(fetch_bytes, timeout=config.request_timeout_seconds),
        output_dir=output_dir,
        delay_seconds=config.download_delay_seconds,
    )


def _download(
    state: WizardState, selection: frozenset[str] | None, downloader: BatchDownloader | None
) -> tuple[list[str], str, bool]:
    downloader = downloader or create_downloader()
    try:
        report = downloader.download_batch(state.artifacts, selection)
    except DownloadError as e:
        gr.Warning(str(e))
        if e.report is None:
            return [], f"❌ {e}", False
        saved = [str(path) for path in e.report.saved]
        return saved, f"⚠️ {e} ({len(saved)} of {e.report.attempted} saved)", False

    saved = [str(path) for path in report.saved]
    return saved, f"✅ Downloaded {len(saved)} images", True


def download_selected(
    state: WizardState, downloader: BatchDownloader | None = None
) -> tuple[list[str], str, WizardState]:
    """Download the selected headshots.

    Returns:
        Tuple of (saved_file_paths, status_message, state)
    """
    files, status, ok = _download(state, state.selected_ids, downloader)
    if ok:
        gr.Info(f"Downloaded {len(files)} images successfully!")
    return files, status, state


def download_all(
    state: WizardState, downloader: BatchDownloader | None = None
) -> tuple[list[str], str, WizardState]:
    """Download the whole batch.

    Returns:
        Tuple of (saved_file_paths, status_message, state)
    """
    if not state.artifacts:
        return [], "", state

    files, status, ok = _download(state, None, downloader)
    if ok:
        gr.Info(f"Downloaded all {len(files)} images successfully!")
    return files, status, state
