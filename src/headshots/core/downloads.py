"""Throttled batch downloads of generated headshots.

Downloads run strictly one after another with a fixed pause between items
(0.5s by default) so a large batch doesn't flood the host with simultaneous
requests and file writes. Do not parallelize this without revisiting the
throttle.

Failure Policy
--------------
A failed item is logged and recorded, and the remaining items still run.
When the batch finishes, DownloadError is raised if any item failed; its
``report`` lists what was saved and what wasn't.
"""

import logging
import re
import time
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from .errors import DownloadError
from .generation import GeneratedArtifact

logger = logging.getLogger(__name__)

_NON_SLUG = re.compile(r"[^a-z0-9]+")

NOTHING_SELECTED_MESSAGE = "Please select images to download"


def slugify(text: str) -> str:
    """Lower-case and replace each run of non [a-z0-9] characters with one hyphen."""
    return _NON_SLUG.sub("-", text.lower())


def download_filename(index: int, style: str, on: date | None = None) -> str:
    """Build the filename for the item at 0-based ``index`` of a download batch.

    Example:
        >>> download_filename(0, "Professional", date(2024, 5, 1))
        'headshot-professional-1-2024-05-01.png'
    """
    on = on or date.today()
    return f"headshot-{slugify(style)}-{index + 1}-{on.isoformat()}.png"


@dataclass
class DownloadFailure:
    """A single item that could not be downloaded."""

    artifact_id: str
    error: str


@dataclass
class DownloadReport:
    """Outcome of a batch download."""

    saved: list[Path] = field(default_factory=list)
    failures: list[DownloadFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def attempted(self) -> int:
        return len(self.saved) + len(self.failures)


class BatchDownloader:
    """Sequential fetch-and-save for a batch of artifacts.

    Args:
        fetch: Callable returning the bytes at a URL
        output_dir: Directory to save files in
        delay_seconds: Pause between successive items
        sleep: Sleep function (injectable for tests)
        today: Date source for filenames (injectable for tests)
    """

    def __init__(
        self,
        fetch: Callable[[str], bytes],
        output_dir: Path,
        delay_seconds: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
        today: Callable[[], date] = date.today,
    ):
        self.fetch = fetch
        self.output_dir = Path(output_dir)
        self.delay_seconds = delay_seconds
        self.sleep = sleep
        self.today = today

    def select(
        self, artifacts: Sequence[GeneratedArtifact], selection: Collection[str] | None
    ) -> list[GeneratedArtifact]:
        """Return the artifacts to download, in list order.

        Raises:
            DownloadError: If an explicit selection is empty
        """
        if selection is None:
            return list(artifacts)
        if not selection:
            raise DownloadError(NOTHING_SELECTED_MESSAGE)
        return [artifact for artifact in artifacts if artifact.id in selection]

    def download_batch(
        self,
        artifacts: Sequence[GeneratedArtifact],
        selection: Collection[str] | None = None,
    ) -> DownloadReport:
        """Download all artifacts, or only those whose id is in ``selection``.

        Positions in filenames are 1-based within the downloaded items, not
        the original batch.

        Args:
            artifacts: The current batch
            selection: Ids to download; None means the whole batch

        Returns:
            DownloadReport with every saved path

        Raises:
            DownloadError: If the selection is empty (nothing is fetched), or
                after the batch completes if any item failed
        """
        items = self.select(artifacts, selection)
        report = DownloadReport()
        self.output_dir.mkdir(parents=True, exist_ok=True)
        on = self.today()

        for index, artifact in enumerate(items):
            filename = download_filename(index, artifact.style, on)
            try:
                data = self.fetch(artifact.url)
                target = self.output_dir / filename
                target.write_bytes(data)
                report.saved.append(target)
                logger.info(f"Downloaded {artifact.id} to {target}")
            except Exception as e:
                logger.error(f"Error downloading image {artifact.id}: {e}")
                report.failures.append(DownloadFailure(artifact.id, str(e)))

            if index < len(items) - 1:
                self.sleep(self.delay_seconds)

        if report.failures:
            raise DownloadError("Failed to download some images", report=report)
        return report
