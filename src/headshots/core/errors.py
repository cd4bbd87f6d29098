"""Exception hierarchy for the headshot pipeline.

Every error raised by the pipeline is recoverable: the UI shows the message
as a transient notification and the user may retry the step. Messages are
written to be displayed directly to the user.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from headshots.core.downloads import DownloadReport


class HeadshotsError(Exception):
    """Base class for all pipeline errors."""


class ValidationError(HeadshotsError):
    """User input failed validation.

    Attributes:
        kind: Short machine-readable category ("size", "type", "incomplete")
    """

    def __init__(self, message: str, kind: str = "invalid"):
        super().__init__(message)
        self.kind = kind


class ConversionError(HeadshotsError):
    """An upload could not be converted to a standard image encoding."""


class GenerationError(HeadshotsError):
    """The generation service failed or returned no usable images."""


class DownloadError(HeadshotsError):
    """One or more downloads failed, or nothing was selected.

    Attributes:
        report: Outcome of the batch, or None when the batch never started
    """

    def __init__(self, message: str, report: DownloadReport | None = None):
        super().__init__(message)
        self.report = report
