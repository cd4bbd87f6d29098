"""Generation request construction.

Prompt Structure
----------------
The final prompt always ends with a fixed suffix so that results stay in
headshot territory whatever the user types::

    [style fragment], professional headshot photography
    [style fragment], [custom details], professional headshot photography

Quantity
--------
The requested count is clamped to ``[config.min_quantity,
config.max_quantity]`` (1-12 by default). Out-of-range values are pinned to
the nearest bound, never wrapped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import config
from .errors import ValidationError
from .normalizer import ProcessedImage
from .styles import StyleTemplate

logger = logging.getLogger(__name__)

PROMPT_SUFFIX = "professional headshot photography"


@dataclass(frozen=True)
class GenerationRequest:
    """Everything needed for one generation attempt.

    Build instances with build_generation_request(), which enforces that an
    image and a style are both present and that count is in range.
    """

    source_image: ProcessedImage
    prompt: str
    count: int
    output_size: str
    style_name: str
    response_format: str = "url"


def compose_prompt(style: StyleTemplate, custom_text: str = "") -> str:
    """Compose the prompt for a style and optional custom details.

    Any non-empty custom text is inserted as given, whitespace included.
    """
    if custom_text:
        return f"{style.prompt}, {custom_text}, {PROMPT_SUFFIX}"
    return f"{style.prompt}, {PROMPT_SUFFIX}"


def clamp_quantity(count: int) -> int:
    """Pin a requested quantity to the configured bounds."""
    return max(config.min_quantity, min(config.max_quantity, int(count)))


def step_quantity(current: int, delta: int) -> int:
    """Apply a +/- step to the quantity control without leaving the bounds."""
    return clamp_quantity(clamp_quantity(current) + delta)


def build_generation_request(
    style: StyleTemplate | None,
    image: ProcessedImage | None,
    custom_text: str = "",
    count: int = 4,
    output_size: str | None = None,
) -> GenerationRequest:
    """Build a generation request from the wizard inputs.

    Args:
        style: Selected style
        image: Normalized upload
        custom_text: Optional extra details for the prompt
        count: Requested number of headshots (clamped)
        output_size: Output size (default: config.output_size)

    Returns:
        GenerationRequest

    Raises:
        ValidationError: If the style or the image is missing
    """
    if image is None:
        raise ValidationError("Please upload a photo first", kind="incomplete")
    if style is None:
        raise ValidationError("Please choose a style first", kind="incomplete")

    clamped = clamp_quantity(count)
    if clamped != count:
        logger.warning(f"Quantity {count} out of range, using {clamped}")

    return GenerationRequest(
        source_image=image,
        prompt=compose_prompt(style, custom_text),
        count=clamped,
        output_size=output_size or config.output_size,
        style_name=style.name,
        response_format=config.response_format,
    )
