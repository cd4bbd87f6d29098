"""Headshot style templates.

The three styles are fixed: each one contributes a prompt fragment that the
request builder places at the start of the final prompt.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StyleTemplate:
    """A selectable headshot style.

    Attributes:
        id: Stable identifier ("professional", "casual", "creative")
        name: Display name
        description: One-line description shown under the name
        prompt: Prompt fragment sent to the generation service
        preview: Glyph shown on the style card
    """

    id: str
    name: str
    description: str
    prompt: str
    preview: str


HEADSHOT_STYLES: tuple[StyleTemplate, ...] = (
    StyleTemplate(
        id="professional",
        name="Professional",
        description="Corporate headshot with business attire and clean background",
        prompt=(
            "professional corporate headshot, business attire, clean studio background, "
            "professional lighting, high quality"
        ),
        preview="👔",
    ),
    StyleTemplate(
        id="casual",
        name="Casual",
        description="Relaxed and approachable with natural lighting",
        prompt=(
            "casual professional headshot, natural lighting, friendly smile, modern background"
        ),
        preview="😊",
    ),
    StyleTemplate(
        id="creative",
        name="Creative",
        description="Artistic and unique with creative elements",
        prompt=(
            "creative professional headshot, artistic lighting, interesting background, "
            "modern aesthetic"
        ),
        preview="🎨",
    ),
)


def get_style(key: str) -> StyleTemplate:
    """Look up a style by id or display name (case-insensitive).

    Raises:
        KeyError: If no style matches
    """
    needle = key.strip().lower()
    for style in HEADSHOT_STYLES:
        if needle in (style.id, style.name.lower()):
            return style
    raise KeyError(f"Unknown headshot style: {key!r}")


def style_choices() -> list[str]:
    """Labels for the style radio, e.g. "👔 Professional"."""
    return [f"{style.preview} {style.name}" for style in HEADSHOT_STYLES]


def style_from_choice(choice: str) -> StyleTemplate:
    """Resolve a label produced by style_choices() back to its style."""
    for style in HEADSHOT_STYLES:
        if choice in (f"{style.preview} {style.name}", style.name, style.id):
            return style
    raise KeyError(f"Unknown headshot style: {choice!r}")
