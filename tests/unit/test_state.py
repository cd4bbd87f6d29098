"""Unit tests for wizard state transitions."""

import dataclasses

import pytest

from headshots.core.styles import get_style
from headshots.ui.models import NO_IMAGE, ImageAbsent, ImagePresent, WizardState
from headshots.ui.state import (
    begin_generation,
    can_go_next,
    can_go_previous,
    can_visit,
    change_quantity,
    finish_generation,
    go_next,
    go_previous,
    go_to_step,
    helper_text,
    remove_uploaded_image,
    select_style,
    set_custom_prompt,
    set_quantity,
    set_uploaded_image,
    toggle_select_all,
    toggle_selection,
)


@pytest.fixture
def ready_state(wizard_state, processed_image):
    """State with a photo and a style."""
    state = set_uploaded_image(wizard_state, processed_image)
    return select_style(state, get_style("casual"))


class TestWizardState:
    """Tests for the WizardState record."""

    def test_defaults(self, wizard_state):
        assert wizard_state.current_step == 1
        assert wizard_state.completed_steps == frozenset()
        assert isinstance(wizard_state.image, ImageAbsent)
        assert wizard_state.uploaded_image is None
        assert wizard_state.quantity == 4
        assert wizard_state.artifacts == ()

    def test_state_is_immutable(self, wizard_state):
        with pytest.raises(dataclasses.FrozenInstanceError):
            wizard_state.quantity = 7

    def test_repr(self, wizard_state):
        assert "step=1" in repr(wizard_state)


class TestUploadTransitions:
    """Tests for image slot transitions."""

    def test_set_image_marks_step_complete(self, wizard_state, processed_image):
        state = set_uploaded_image(wizard_state, processed_image)

        assert isinstance(state.image, ImagePresent)
        assert state.uploaded_image is processed_image
        assert 1 in state.completed_steps
        # Original untouched
        assert wizard_state.uploaded_image is None

    def test_remove_image_unmarks_step(self, wizard_state, processed_image):
        state = remove_uploaded_image(set_uploaded_image(wizard_state, processed_image))

        assert state.image == NO_IMAGE
        assert 1 not in state.completed_steps


class TestStyleTransitions:
    """Tests for style, prompt and quantity transitions."""

    def test_select_style(self, wizard_state):
        state = select_style(wizard_state, get_style("creative"))

        assert state.selected_style.id == "creative"
        assert 2 in state.completed_steps

    def test_custom_prompt(self, wizard_state):
        assert set_custom_prompt(wizard_state, "blue shirt").custom_prompt == "blue shirt"
        assert set_custom_prompt(wizard_state, None).custom_prompt == ""

    def test_quantity_never_leaves_bounds(self, wizard_state):
        """Test repeated +/- past the bounds."""
        state = wizard_state
        for _ in range(20):
            state = change_quantity(state, +1)
        assert state.quantity == 12

        for _ in range(20):
            state = change_quantity(state, -1)
        assert state.quantity == 1

    def test_set_quantity_clamps(self, wizard_state):
        assert set_quantity(wizard_state, 40).quantity == 12
        assert set_quantity(wizard_state, 0).quantity == 1


class TestGenerationTransitions:
    """Tests for generation begin/finish and stale results."""

    def test_begin_generation(self, ready_state, artifacts):
        state = dataclasses.replace(ready_state, artifacts=tuple(artifacts), selected_ids={"x"})

        state = begin_generation(state)

        assert state.is_generating
        assert state.generation_id == 1
        assert state.artifacts == ()
        assert state.selected_ids == frozenset()

    def test_finish_generation_stores_batch(self, ready_state, artifacts):
        state = begin_generation(ready_state)

        state = finish_generation(state, state.generation_id, artifacts)

        assert not state.is_generating
        assert state.artifacts == tuple(artifacts)
        assert 3 in state.completed_steps

    def test_failed_generation_leaves_step_incomplete(self, ready_state):
        state = begin_generation(ready_state)

        state = finish_generation(state, state.generation_id, [])

        assert not state.is_generating
        assert state.artifacts == ()
        assert 3 not in state.completed_steps

    def test_stale_result_is_ignored(self, ready_state, artifacts):
        """Test that a result from a superseded attempt does not clobber the newer one."""
        first = begin_generation(ready_state)
        second = begin_generation(first)

        state = finish_generation(second, first.generation_id, artifacts)

        assert state is second
        assert state.is_generating
        assert state.artifacts == ()


class TestSelection:
    """Tests for artifact selection."""

    def test_toggle_selection(self, wizard_state, artifacts):
        state = dataclasses.replace(wizard_state, artifacts=tuple(artifacts))

        state = toggle_selection(state, artifacts[0].id)
        assert state.selected_ids == {artifacts[0].id}

        state = toggle_selection(state, artifacts[0].id)
        assert state.selected_ids == frozenset()

    def test_select_all_then_deselect_all(self, wizard_state, artifacts):
        state = dataclasses.replace(wizard_state, artifacts=tuple(artifacts))

        state = toggle_select_all(state)
        assert state.selected_ids == {a.id for a in artifacts}

        state = toggle_select_all(state)
        assert state.selected_ids == frozenset()

    def test_select_all_from_partial_selection(self, wizard_state, artifacts):
        state = dataclasses.replace(
            wizard_state, artifacts=tuple(artifacts), selected_ids=frozenset({artifacts[0].id})
        )

        assert toggle_select_all(state).selected_ids == {a.id for a in artifacts}


class TestNavigation:
    """Tests for step gating."""

    def test_cannot_leave_upload_without_image(self, wizard_state):
        assert not can_go_next(wizard_state)
        assert go_next(wizard_state) is wizard_state

    def test_next_after_upload(self, wizard_state, processed_image):
        state = go_next(set_uploaded_image(wizard_state, processed_image))

        assert state.current_step == 2

    def test_cannot_leave_style_without_style(self, wizard_state, processed_image):
        state = go_next(set_uploaded_image(wizard_state, processed_image))

        assert not can_go_next(state)
        assert go_next(state).current_step == 2

    def test_never_past_last_step(self, ready_state):
        state = go_next(go_next(ready_state))
        assert state.current_step == 3

        assert can_go_next(state)
        assert go_next(state).current_step == 3

    def test_previous(self, ready_state):
        assert not can_go_previous(ready_state)
        assert go_previous(ready_state) is ready_state

        state = go_previous(go_next(ready_state))
        assert state.current_step == 1

    def test_visit_rules(self, wizard_state):
        """Test completed, current or next step only."""
        assert can_visit(wizard_state, 1)
        assert can_visit(wizard_state, 2)
        assert not can_visit(wizard_state, 3)

    def test_jump_to_completed_step(self, ready_state):
        """Test that both steps complete allows jumping to 3 from 2."""
        state = go_to_step(ready_state, 2)
        assert state.current_step == 2

        state = go_to_step(state, 3)
        assert state.current_step == 3

        state = go_to_step(state, 1)
        assert state.current_step == 1

    def test_jump_rejected(self, wizard_state):
        assert go_to_step(wizard_state, 3) is wizard_state
        assert go_to_step(wizard_state, 7) is wizard_state
        assert go_to_step(wizard_state, 0) is wizard_state


class TestHelperText:
    def test_upload_hint(self, wizard_state):
        assert helper_text(wizard_state) == "Upload a clear photo of yourself to get started"

    def test_style_hint(self, wizard_state):
        state = dataclasses.replace(wizard_state, current_step=2)
        assert helper_text(state) == "Choose a style that fits your professional needs"

    def test_generate_hint(self, ready_state):
        state = dataclasses.replace(ready_state, current_step=3)
        assert helper_text(state) == "Generate your AI headshots"

    def test_no_hint_while_generating(self, ready_state):
        state = begin_generation(dataclasses.replace(ready_state, current_step=3))
        assert helper_text(state) == ""
