"""Step 2 handlers: style, custom details and quantity."""

import logging

import gradio as gr

from headshots.core.styles import style_from_choice

from ..models import WizardState
from ..state import change_quantity, select_style, set_custom_prompt

logger = logging.getLogger(__name__)


def choose_style(choice: str | None, state: WizardState) -> tuple[str, WizardState]:
    """Select a style from the radio.

    Returns:
        Tuple of (style_description, updated_state)
    """
    if not choice:
        return "", state

    try:
        style = style_from_choice(choice)
    except KeyError as e:
        logger.warning(f"Unknown style choice: {e}")
        return "", state

    state = select_style(state, style)
    return f"*{style.description}*", state


def update_custom_prompt(text: str, state: WizardState) -> WizardState:
    return set_custom_prompt(state, text)


def increase_quantity(state: WizardState) -> tuple[gr.update, WizardState]:
    """Handle the + button.

    Returns:
        Tuple of (quantity_update, updated_state)
    """
    state = change_quantity(state, +1)
    return gr.update(value=state.quantity), state


def decrease_quantity(state: WizardState) -> tuple[gr.update, WizardState]:
    """Handle the - button.

    Returns:
        Tuple of (quantity_update, updated_state)
    """
    state = change_quantity(state, -1)
    return gr.update(value=state.quantity), state
