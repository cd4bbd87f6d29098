"""Pure state transitions for the headshot wizard.

Every function takes a WizardState and returns a new one; nothing here
touches Gradio, the network, or the filesystem. Releasing the preview of a
replaced image is the caller's job (see ``headshots.ui.handlers.upload``),
since reducers must stay side-effect free.

Navigation Rules
----------------
- Next is allowed from step 1 once a photo is held, from step 2 once a style
  is chosen, and never past the last step.
- Previous is allowed from any step after the first.
- Jumping to a step is allowed when it is completed, current, or the step
  right after the current one.
"""

import logging
from dataclasses import replace

from headshots.core.generation import GeneratedArtifact
from headshots.core.normalizer import ProcessedImage
from headshots.core.prompt import clamp_quantity, step_quantity
from headshots.core.styles import StyleTemplate

from .models import FIRST_STEP, LAST_STEP, NO_IMAGE, ImagePresent, WizardState

logger = logging.getLogger(__name__)

UPLOAD_STEP, STYLE_STEP, GENERATE_STEP = 1, 2, 3


def _complete(state: WizardState, step: int) -> frozenset[int]:
    return state.completed_steps | {step}


def _uncomplete(state: WizardState, step: int) -> frozenset[int]:
    return state.completed_steps - {step}


# ---------------------------------------------------------------------------
# Step 1: upload
# ---------------------------------------------------------------------------


def set_uploaded_image(state: WizardState, image: ProcessedImage) -> WizardState:
    """Hold a new photo and mark the upload step complete."""
    return replace(
        state,
        image=ImagePresent(image),
        completed_steps=_complete(state, UPLOAD_STEP),
    )


def remove_uploaded_image(state: WizardState) -> WizardState:
    """Empty the image slot and mark the upload step incomplete."""
    return replace(
        state,
        image=NO_IMAGE,
        completed_steps=_uncomplete(state, UPLOAD_STEP),
    )


# ---------------------------------------------------------------------------
# Step 2: style
# ---------------------------------------------------------------------------


def select_style(state: WizardState, style: StyleTemplate) -> WizardState:
    """Choose a style and mark the style step complete."""
    return replace(
        state,
        selected_style=style,
        completed_steps=_complete(state, STYLE_STEP),
    )


def set_custom_prompt(state: WizardState, text: str) -> WizardState:
    return replace(state, custom_prompt=text or "")


def set_quantity(state: WizardState, quantity: int) -> WizardState:
    """Set the quantity, pinned to the allowed range."""
    return replace(state, quantity=clamp_quantity(quantity))


def change_quantity(state: WizardState, delta: int) -> WizardState:
    """Increment or decrement the quantity, stopping at the bounds."""
    return replace(state, quantity=step_quantity(state.quantity, delta))


# ---------------------------------------------------------------------------
# Step 3: generation and selection
# ---------------------------------------------------------------------------


def begin_generation(state: WizardState) -> WizardState:
    """Start a new generation attempt.

    Clears the previous batch and selection and bumps ``generation_id``; the
    caller passes the new id back to finish_generation().
    """
    return replace(
        state,
        is_generating=True,
        generation_id=state.generation_id + 1,
        artifacts=(),
        selected_ids=frozenset(),
    )


def finish_generation(
    state: WizardState, generation_id: int, artifacts: list[GeneratedArtifact]
) -> WizardState:
    """Apply the outcome of a generation attempt.

    Results from an attempt that has since been superseded are dropped and
    the state is returned unchanged.

    Args:
        state: Current state
        generation_id: Id returned by begin_generation() for this attempt
        artifacts: The batch (empty on failure)
    """
    if generation_id != state.generation_id:
        logger.info(
            f"Dropping stale generation result {generation_id} (current: {state.generation_id})"
        )
        return state

    completed = state.completed_steps
    if artifacts:
        completed = completed | {GENERATE_STEP}

    return replace(
        state,
        is_generating=False,
        artifacts=tuple(artifacts),
        completed_steps=completed,
    )


def toggle_selection(state: WizardState, artifact_id: str) -> WizardState:
    """Select or deselect one artifact."""
    if artifact_id in state.selected_ids:
        return replace(state, selected_ids=state.selected_ids - {artifact_id})
    return replace(state, selected_ids=state.selected_ids | {artifact_id})


def toggle_select_all(state: WizardState) -> WizardState:
    """Select every artifact, or clear the selection if all are already selected."""
    all_ids = frozenset(artifact.id for artifact in state.artifacts)
    if state.selected_ids == all_ids:
        return replace(state, selected_ids=frozenset())
    return replace(state, selected_ids=all_ids)


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


def can_go_next(state: WizardState) -> bool:
    """Whether the current step's requirements are met."""
    if state.current_step == UPLOAD_STEP:
        return state.uploaded_image is not None
    if state.current_step == STYLE_STEP:
        return state.selected_style is not None
    return state.current_step == GENERATE_STEP


def can_go_previous(state: WizardState) -> bool:
    return state.current_step > FIRST_STEP


def can_visit(state: WizardState, step: int) -> bool:
    """Whether the stepper may jump straight to ``step``."""
    return (
        step in state.completed_steps
        or step == state.current_step
        or step == state.current_step + 1
    )


def go_next(state: WizardState) -> WizardState:
    if can_go_next(state) and state.current_step < LAST_STEP:
        return replace(state, current_step=state.current_step + 1)
    return state


def go_previous(state: WizardState) -> WizardState:
    if can_go_previous(state):
        return replace(state, current_step=state.current_step - 1)
    return state


def go_to_step(state: WizardState, step: int) -> WizardState:
    if FIRST_STEP <= step <= LAST_STEP and can_visit(state, step):
        return replace(state, current_step=step)
    return state


def helper_text(state: WizardState) -> str:
    """Hint shown under the navigation buttons for the current step."""
    if state.current_step == UPLOAD_STEP and state.uploaded_image is None:
        return "Upload a clear photo of yourself to get started"
    if state.current_step == STYLE_STEP and state.selected_style is None:
        return "Choose a style that fits your professional needs"
    if state.current_step == GENERATE_STEP and not state.artifacts and not state.is_generating:
        return "Generate your AI headshots"
    return ""
