"""Data models for the headshot wizard state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from headshots.core.config import config
from headshots.core.generation import GeneratedArtifact
from headshots.core.normalizer import ProcessedImage
from headshots.core.styles import StyleTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WizardStep:
    """One step of the wizard."""

    id: int
    title: str
    description: str


WIZARD_STEPS: tuple[WizardStep, ...] = (
    WizardStep(1, "Upload Photo", "Upload your photo to get started"),
    WizardStep(2, "Choose Style", "Select your preferred style and customize"),
    WizardStep(3, "Generate & Download", "Generate your AI headshots"),
)

FIRST_STEP = WIZARD_STEPS[0].id
LAST_STEP = WIZARD_STEPS[-1].id


@dataclass(frozen=True)
class ImagePresent:
    """The wizard holds a normalized photo."""

    image: ProcessedImage


@dataclass(frozen=True)
class ImageAbsent:
    """No photo has been uploaded (or it was removed)."""


ImageSlot = ImagePresent | ImageAbsent

NO_IMAGE = ImageAbsent()


@dataclass(frozen=True)
class WizardState:
    """Session state for the wizard.

    Instances are immutable; the reducers in ``headshots.ui.state`` return
    updated copies. Each Gradio session holds its own instance.

    Attributes
    ----------
    current_step : int
        Step being displayed (1-3)
    completed_steps : frozenset[int]
        Steps whose requirements are satisfied
    image : ImageSlot
        ImagePresent with the normalized upload, or ImageAbsent
    selected_style : StyleTemplate | None
        Chosen style
    custom_prompt : str
        Optional extra details for the prompt
    quantity : int
        Number of headshots to request
    is_generating : bool
        True while a generation request is in flight
    generation_id : int
        Incremented for every generation attempt; responses carrying an older
        id are stale and ignored
    artifacts : tuple[GeneratedArtifact, ...]
        The latest batch
    selected_ids : frozenset[str]
        Artifact ids picked for "Download Selected"
    """

    current_step: int = FIRST_STEP
    completed_steps: frozenset[int] = frozenset()
    image: ImageSlot = NO_IMAGE
    selected_style: StyleTemplate | None = None
    custom_prompt: str = ""
    quantity: int = field(default_factory=lambda: config.default_quantity)
    is_generating: bool = False
    generation_id: int = 0
    artifacts: tuple[GeneratedArtifact, ...] = ()
    selected_ids: frozenset[str] = frozenset()

    @property
    def uploaded_image(self) -> ProcessedImage | None:
        """The held image, or None when the slot is empty."""
        if isinstance(self.image, ImagePresent):
            return self.image.image
        return None

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"WizardState(step={self.current_step}, "
            f"completed={sorted(self.completed_steps)}, "
            f"image={isinstance(self.image, ImagePresent)}, "
            f"style={self.selected_style.id if self.selected_style else None}, "
            f"quantity={self.quantity}, artifacts={len(self.artifacts)})"
        )
