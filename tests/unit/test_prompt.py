"""Unit tests for prompt composition and request building."""

import pytest

from headshots.core.errors import ValidationError
from headshots.core.prompt import (
    PROMPT_SUFFIX,
    build_generation_request,
    clamp_quantity,
    compose_prompt,
    step_quantity,
)
from headshots.core.styles import HEADSHOT_STYLES


class TestComposePrompt:
    """Tests for compose_prompt function."""

    @pytest.mark.parametrize("style", HEADSHOT_STYLES, ids=lambda s: s.id)
    def test_empty_custom_text(self, style):
        """Test prompt without custom details."""
        assert compose_prompt(style, "") == f"{style.prompt}, professional headshot photography"

    @pytest.mark.parametrize("style", HEADSHOT_STYLES, ids=lambda s: s.id)
    def test_custom_text_between_fragment_and_suffix(self, style):
        """Test exact token order with custom details."""
        assert (
            compose_prompt(style, "wearing glasses")
            == f"{style.prompt}, wearing glasses, professional headshot photography"
        )

    def test_whitespace_custom_text_is_kept(self, professional_style):
        """Test that any non-empty custom text counts as present."""
        assert compose_prompt(professional_style, "   ") == (
            f"{professional_style.prompt},    , {PROMPT_SUFFIX}"
        )

    def test_none_custom_text_is_empty(self, professional_style):
        assert compose_prompt(professional_style, None) == (
            f"{professional_style.prompt}, {PROMPT_SUFFIX}"
        )


class TestQuantity:
    """Tests for quantity clamping."""

    @pytest.mark.parametrize(
        "requested,expected",
        [(-5, 1), (0, 1), (1, 1), (4, 4), (12, 12), (13, 12), (100, 12)],
    )
    def test_clamp_quantity(self, requested, expected):
        assert clamp_quantity(requested) == expected

    def test_repeated_increment_stops_at_max(self):
        """Test that pressing + past the bound never exceeds 12."""
        quantity = 4
        for _ in range(50):
            quantity = step_quantity(quantity, +1)
            assert 1 <= quantity <= 12

        assert quantity == 12

    def test_repeated_decrement_stops_at_min(self):
        """Test that pressing - past the bound never goes below 1, and never wraps."""
        quantity = 4
        for _ in range(50):
            quantity = step_quantity(quantity, -1)
            assert 1 <= quantity <= 12

        assert quantity == 1


class TestBuildGenerationRequest:
    """Tests for build_generation_request function."""

    def test_builds_request(self, professional_style, processed_image):
        request = build_generation_request(professional_style, processed_image, "", 4)

        assert request.source_image is processed_image
        assert request.prompt == f"{professional_style.prompt}, professional headshot photography"
        assert request.count == 4
        assert request.output_size == "1024x1024"
        assert request.response_format == "url"
        assert request.style_name == "Professional"

    def test_custom_text_in_prompt(self, professional_style, processed_image):
        request = build_generation_request(professional_style, processed_image, "wearing glasses", 3)

        assert request.prompt == (
            f"{professional_style.prompt}, wearing glasses, professional headshot photography"
        )
        assert request.count == 3

    @pytest.mark.parametrize("count,expected", [(0, 1), (-3, 1), (13, 12), (99, 12)])
    def test_count_is_clamped(self, professional_style, processed_image, count, expected):
        """Test that the builder re-validates the count."""
        request = build_generation_request(professional_style, processed_image, "", count)

        assert request.count == expected

    def test_missing_image_rejected(self, professional_style):
        with pytest.raises(ValidationError) as exc_info:
            build_generation_request(professional_style, None, "", 4)

        assert exc_info.value.kind == "incomplete"

    def test_missing_style_rejected(self, processed_image):
        with pytest.raises(ValidationError) as exc_info:
            build_generation_request(None, processed_image, "", 4)

        assert exc_info.value.kind == "incomplete"

    def test_custom_output_size(self, professional_style, processed_image):
        request = build_generation_request(
            professional_style, processed_image, "", 2, output_size="512x512"
        )

        assert request.output_size == "512x512"
