"""UI event handlers organized by wizard step.

This package provides handlers for all Gradio UI events:
- upload: Step 1, accepting and converting the photo
- style: Step 2, style, custom details and quantity
- generation: Step 3, generation chain and selection
- downloads: Step 3, throttled downloads
- navigation: Previous/Next and the step dots
"""

from .downloads import download_all, download_selected
from .generation import (
    apply_generation_outcome,
    run_generation,
    select_all,
    select_artifact,
    start_generation,
)
from .navigation import jump_to_step, next_step, previous_step, render_navigation
from .style import choose_style, decrease_quantity, increase_quantity, update_custom_prompt
from .upload import cleanup_session, handle_upload, remove_upload

__all__ = [
    # Upload handlers
    "cleanup_session",
    "handle_upload",
    "remove_upload",
    # Style handlers
    "choose_style",
    "decrease_quantity",
    "increase_quantity",
    "update_custom_prompt",
    # Generation handlers
    "apply_generation_outcome",
    "run_generation",
    "select_all",
    "select_artifact",
    "start_generation",
    # Download handlers
    "download_all",
    "download_selected",
    # Navigation handlers
    "jump_to_step",
    "next_step",
    "previous_step",
    "render_navigation",
]
