"""Step 3 handlers: generating headshots and managing the selection.

Generation runs as a three-stage Gradio event chain:

1. start_generation() bumps the session's generation id and clears the batch.
2. run_generation() calls the service and files a GenerationOutcome in the
   OutcomeStore under (session, generation id).
3. apply_generation_outcome() reads the *current* session state and takes the
   outcome filed under its generation id. A click on "Regenerate" while an
   earlier request is in flight therefore wins, whichever finishes first.
"""

import logging
import threading
from dataclasses import dataclass

import gradio as gr

from headshots.core.config import config
from headshots.core.errors import GenerationError, ValidationError
from headshots.core.generation import GeneratedArtifact, generate_headshots
from headshots.core.prompt import build_generation_request
from headshots.core.service import GenerationService, HttpGenerationService

from ..models import WizardState
from ..state import begin_generation, finish_generation, toggle_select_all, toggle_selection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of one generation attempt, tagged with its generation id."""

    generation_id: int
    artifacts: tuple[GeneratedArtifact, ...] = ()
    error: str | None = None


class OutcomeStore:
    """Generation outcomes waiting to be applied, keyed by (session, generation id).

    Outcomes from superseded attempts are discarded when a newer attempt of
    the same session is taken.
    """

    def __init__(self):
        self._outcomes: dict[tuple[str, int], GenerationOutcome] = {}
        self._lock = threading.Lock()

    def put(self, session: str, outcome: GenerationOutcome) -> None:
        with self._lock:
            self._outcomes[(session, outcome.generation_id)] = outcome

    def take(self, session: str, generation_id: int) -> GenerationOutcome | None:
        """Remove and return the outcome for ``generation_id``, if it has arrived."""
        with self._lock:
            outcome = self._outcomes.pop((session, generation_id), None)
            for key in [k for k in self._outcomes if k[0] == session and k[1] < generation_id]:
                del self._outcomes[key]
            return outcome

    def __len__(self) -> int:
        return len(self._outcomes)


_outcomes = OutcomeStore()

_service: GenerationService | None = None


def _session_key(request: gr.Request | None) -> str:
    return (request.session_hash if request is not None else None) or ""


def get_generation_service() -> GenerationService:
    """Return the shared generation service client, creating it on first use."""
    global _service
    if _service is None:
        logger.info(f"Creating generation service client for {config.service_base_url}")
        _service = HttpGenerationService.from_config(config)
    return _service


def summary_markdown(state: WizardState) -> str:
    """Summary card shown above the Generate button."""
    style = state.selected_style.name if state.selected_style else "(none)"
    lines = [
        "### Ready to Generate",
        f"**Style:** {style}",
        f"**Quantity:** {state.quantity} headshots",
    ]
    if state.custom_prompt.strip():
        lines.append(f"**Custom details:** {state.custom_prompt.strip()}")
    return "\n\n".join(lines)


def gallery_items(state: WizardState) -> list[tuple[str, str]]:
    """Gallery entries as (url, caption) pairs; selected items are checked."""
    return [
        (
            artifact.url,
            f"{'✅ ' if artifact.id in state.selected_ids else ''}{artifact.style} Style",
        )
        for artifact in state.artifacts
    ]


def selection_label(state: WizardState) -> str:
    """Label for the select-all button."""
    if state.artifacts and len(state.selected_ids) == len(state.artifacts):
        return "Deselect All"
    return "Select All"


def start_generation(state: WizardState) -> tuple[str, gr.update, WizardState]:
    """First stage: mark the session as generating.

    Returns:
        Tuple of (status_message, gallery_update, updated_state)
    """
    state = begin_generation(state)
    logger.info(f"Starting generation {state.generation_id}")
    return (
        "⏳ Generating... This may take 30-60 seconds. Please don't close this page.",
        gr.update(value=[]),
        state,
    )


def execute_generation(
    state: WizardState, service: GenerationService | None = None
) -> GenerationOutcome:
    """Build the request and call the generation service.

    Never raises: failures are returned as an outcome with ``error`` set.

    Args:
        state: Wizard state as left by start_generation()
        service: Generation service (default: the shared HTTP client)

    Returns:
        GenerationOutcome tagged with state.generation_id
    """
    generation_id = state.generation_id
    try:
        request = build_generation_request(
            state.selected_style,
            state.uploaded_image,
            state.custom_prompt,
            state.quantity,
        )
        artifacts = generate_headshots(request, service or get_generation_service())
    except ValidationError as e:
        logger.warning(f"Generation {generation_id} not started: {e}")
        return GenerationOutcome(generation_id, error=str(e))
    except GenerationError as e:
        logger.warning(f"Generation {generation_id} failed: {e}")
        return GenerationOutcome(generation_id, error=str(e))

    return GenerationOutcome(generation_id, artifacts=tuple(artifacts))


def run_generation(
    state: WizardState,
    request: gr.Request,
    service: GenerationService | None = None,
    store: OutcomeStore | None = None,
) -> None:
    """Second stage: run the generation and file its outcome for this session."""
    outcome = execute_generation(state, service)
    (store if store is not None else _outcomes).put(_session_key(request), outcome)


def apply_generation_outcome(
    state: WizardState, request: gr.Request, store: OutcomeStore | None = None
) -> tuple[str, list[tuple[str, str]], gr.update, WizardState]:
    """Third stage: apply the outcome of the session's current attempt.

    Returns:
        Tuple of (status_message, gallery_items, select_all_update, updated_state)
    """
    store = store if store is not None else _outcomes
    outcome = store.take(_session_key(request), state.generation_id)
    if outcome is None:
        # Superseded by a newer attempt; leave the UI to that attempt.
        return gr.update(), gr.update(), gr.update(), state

    state = finish_generation(state, outcome.generation_id, list(outcome.artifacts))

    if outcome.error:
        gr.Warning("Failed to generate headshots. Please try again.")
        status = f"❌ {outcome.error}"
    else:
        count = len(state.artifacts)
        gr.Info(f"Generated {count} headshots successfully!")
        status = f"✅ {count} images generated · Style: {state.artifacts[0].style}"

    return status, gallery_items(state), gr.update(value=selection_label(state)), state


def select_artifact(
    evt: gr.SelectData, state: WizardState
) -> tuple[list[tuple[str, str]], str, gr.update, WizardState]:
    """Toggle selection of the gallery item that was clicked.

    Returns:
        Tuple of (gallery_items, selection_summary, select_all_update, updated_state)
    """
    index = evt.index
    if not isinstance(index, int) or not 0 <= index < len(state.artifacts):
        return gallery_items(state), selection_summary(state), gr.update(), state

    state = toggle_selection(state, state.artifacts[index].id)
    return (
        gallery_items(state),
        selection_summary(state),
        gr.update(value=selection_label(state)),
        state,
    )


def select_all(state: WizardState) -> tuple[list[tuple[str, str]], str, gr.update, WizardState]:
    """Handle the Select All / Deselect All button."""
    state = toggle_select_all(state)
    return (
        gallery_items(state),
        selection_summary(state),
        gr.update(value=selection_label(state)),
        state,
    )


def selection_summary(state: WizardState) -> str:
    return f"**Selected:** {len(state.selected_ids)} of {len(state.artifacts)}"
