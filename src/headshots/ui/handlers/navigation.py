"""Wizard navigation handlers: Previous, Next and the step dots."""

import gradio as gr

from ..models import WIZARD_STEPS, WizardState
from ..state import (
    can_go_next,
    can_go_previous,
    can_visit,
    go_next,
    go_previous,
    go_to_step,
    helper_text,
)
from .generation import summary_markdown


def stepper_markdown(state: WizardState) -> str:
    """Render the progress stepper, e.g. "✅ 1. Upload Photo → **2. Choose Style** → ..."."""
    parts = []
    for step in WIZARD_STEPS:
        label = f"{step.id}. {step.title}"
        if step.id == state.current_step:
            label = f"**{label}**"
        elif step.id in state.completed_steps:
            label = f"✅ {label}"
        parts.append(label)
    current = WIZARD_STEPS[state.current_step - 1]
    return f"{' → '.join(parts)}\n\n*Step {state.current_step} of {len(WIZARD_STEPS)}: {current.description}*"


def render_navigation(state: WizardState) -> tuple:
    """Component updates reflecting the current step.

    Returns:
        Tuple of (stepper, upload_group, style_group, generate_group,
        previous_button, next_button, step_1, step_2, step_3, helper, summary)
    """
    step_groups = tuple(
        gr.update(visible=step.id == state.current_step) for step in WIZARD_STEPS
    )
    step_buttons = tuple(
        gr.update(
            interactive=can_visit(state, step.id),
            variant="primary" if step.id == state.current_step else "secondary",
        )
        for step in WIZARD_STEPS
    )
    return (
        stepper_markdown(state),
        *step_groups,
        gr.update(interactive=can_go_previous(state)),
        gr.update(interactive=can_go_next(state) and state.current_step < WIZARD_STEPS[-1].id),
        *step_buttons,
        helper_text(state),
        summary_markdown(state),
    )


def next_step(state: WizardState) -> tuple:
    state = go_next(state)
    return (*render_navigation(state), state)


def previous_step(state: WizardState) -> tuple:
    state = go_previous(state)
    return (*render_navigation(state), state)


def jump_to_step(step: int, state: WizardState) -> tuple:
    state = go_to_step(state, step)
    return (*render_navigation(state), state)
