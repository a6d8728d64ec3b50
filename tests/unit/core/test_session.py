"""Unit tests for the interactive selection state machine."""

from collections.abc import Callable

import pytest
from dirsweep.core.session import (
    CONFIRMATION_TOKEN,
    Confirm,
    Quit,
    RequestDelete,
    SelectAll,
    SelectNone,
    SessionPhase,
    SessionState,
    Show,
    Toggle,
    auto_select,
    parse_command,
    start_session,
    transition,
)
from dirsweep.models.candidate import Candidate, Classification

MB = 1024 * 1024


@pytest.fixture
def orphans(make_orphan: Callable[..., Candidate]) -> list[Candidate]:
    """Three orphans of 10, 20 and 30 MB."""
    return [
        make_orphan("/data/A", size=10 * MB),
        make_orphan("/data/B", size=20 * MB),
        make_orphan("/data/C", size=30 * MB),
    ]


@pytest.fixture
def state(orphans: list[Candidate]) -> SessionState:
    return start_session(orphans)


def _apply(state: SessionState, *commands) -> SessionState:
    for command in commands:
        state = transition(state, command)
    return state


class TestStartSession:
    """Tests for start_session and auto_select."""

    def test_all_orphans_start_selected(self, state: SessionState) -> None:
        """Every orphan starts selected in the reviewing phase."""
        assert state.phase == SessionPhase.REVIEWING
        assert state.selected_count == 3
        assert state.selected_size == 60 * MB
        assert state.deletion_set == ()

    def test_non_orphans_are_dropped(
        self,
        make_orphan: Callable[..., Candidate],
        make_candidate: Callable[..., Candidate],
    ) -> None:
        """Only orphans are offered for review."""
        candidates = [
            make_candidate("Microsoft", Classification.protected(), size=None),
            make_orphan("/data/Old"),
            make_candidate("Steam", Classification.matched("Steam Client")),
        ]

        session = start_session(candidates)

        assert [c.name for c in session.candidates] == ["Old"]

    def test_auto_select_selects_every_orphan(
        self,
        orphans: list[Candidate],
        make_candidate: Callable[..., Candidate],
    ) -> None:
        """Unattended mode selects all orphans and nothing else."""
        mixed = [*orphans, make_candidate("tiny", Classification.too_small(), size=1)]

        selected = auto_select(mixed)

        assert [c.name for c in selected] == ["A", "B", "C"]
        assert all(c.selected for c in selected)


class TestTransition:
    """Tests for transition while reviewing."""

    def test_toggle_deselects(self, state: SessionState) -> None:
        """Toggling a selected entry deselects only that entry."""
        result = transition(state, Toggle(2))

        assert [c.selected for c in result.candidates] == [True, False, True]
        assert result.selected_size == 40 * MB

    def test_toggle_twice_restores_selection(self, state: SessionState) -> None:
        """Toggling the same entry twice is a no-op on selection."""
        result = _apply(state, Toggle(1), Toggle(1))

        assert [c.selected for c in result.candidates] == [True, True, True]

    @pytest.mark.parametrize("index", [0, 4, -1])
    def test_toggle_out_of_range_reports_error(self, state: SessionState, index: int) -> None:
        """Out-of-range numbers leave the selection unchanged and report an error."""
        result = transition(state, Toggle(index))

        assert result.is_error is True
        assert result.message == f"Invalid number {index}: choose 1-3"
        assert result.candidates == state.candidates
        assert result.phase == SessionPhase.REVIEWING

    def test_select_none_then_all(self, state: SessionState) -> None:
        """SelectNone clears, SelectAll restores."""
        cleared = transition(state, SelectNone())
        assert cleared.selected_count == 0

        restored = transition(cleared, SelectAll())
        assert restored.selected_count == 3

    def test_show_changes_nothing(self, state: SessionState) -> None:
        """Show leaves the state as it was."""
        result = transition(state, Show())

        assert result.candidates == state.candidates
        assert result.phase == SessionPhase.REVIEWING

    def test_request_delete_with_nothing_selected(self, state: SessionState) -> None:
        """Requesting deletion of nothing stays in review with a message."""
        result = _apply(state, SelectNone(), RequestDelete())

        assert result.phase == SessionPhase.REVIEWING
        assert result.message == "Nothing selected, nothing to do."

    def test_request_delete_moves_to_confirmation(self, state: SessionState) -> None:
        """With a selection, RequestDelete asks for confirmation."""
        result = transition(state, RequestDelete())

        assert result.phase == SessionPhase.CONFIRMING_DELETE
        assert result.deletion_set == ()

    def test_quit_ends_with_empty_deletion_set(self, state: SessionState) -> None:
        """Quit never deletes anything."""
        result = transition(state, Quit())

        assert result.is_done is True
        assert result.deletion_set == ()
        assert result.message == "Aborted, nothing deleted."

    def test_confirm_while_reviewing_is_error(self, state: SessionState) -> None:
        """Confirmation text without a pending deletion is rejected."""
        result = transition(state, Confirm(CONFIRMATION_TOKEN))

        assert result.is_error is True
        assert result.phase == SessionPhase.REVIEWING

    def test_done_state_is_final(self, state: SessionState) -> None:
        """Commands after DONE are ignored."""
        done = transition(state, Quit())

        assert transition(done, SelectNone()) is done


class TestConfirmation:
    """Tests for the confirmation phase."""

    def test_exact_token_freezes_selection(self, state: SessionState) -> None:
        """Typing DELETE ends the session with the current selection."""
        result = _apply(state, Toggle(2), RequestDelete(), Confirm("DELETE"))

        assert result.is_done is True
        assert [c.name for c in result.deletion_set] == ["A", "C"]

    @pytest.mark.parametrize("text", ["delete", "DELETE ", "yes", ""])
    def test_anything_else_cancels(self, state: SessionState, text: str) -> None:
        """Any other text returns to review with selections unchanged."""
        confirming = _apply(state, Toggle(3), RequestDelete())

        result = transition(confirming, Confirm(text))

        assert result.phase == SessionPhase.REVIEWING
        assert result.message == "Deletion cancelled."
        assert result.deletion_set == ()
        assert result.candidates == confirming.candidates

    def test_non_confirm_command_cancels(self, state: SessionState) -> None:
        """A non-confirmation command during confirmation cancels."""
        result = _apply(state, RequestDelete(), SelectNone())

        assert result.phase == SessionPhase.REVIEWING
        assert result.selected_count == 3

    def test_review_then_confirm_scenario(
        self,
        make_orphan: Callable[..., Candidate],
    ) -> None:
        """Deselect one of three, confirm, and only two are to be deleted."""
        candidates = [
            make_orphan("/c/Alpha", size=5 * MB),
            make_orphan("/c/Beta", size=7 * MB),
            make_orphan("/c/Gamma", size=9 * MB),
        ]
        state = start_session(candidates)

        state = _apply(state, Toggle(1), RequestDelete())
        assert state.selected_size == 16 * MB

        state = transition(state, Confirm("DELETE"))

        assert [c.name for c in state.deletion_set] == ["Beta", "Gamma"]
        assert sum(c.size_bytes or 0 for c in state.deletion_set) == 16 * MB


class TestParseCommand:
    """Tests for parse_command."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("2", Toggle(2)),
            (" 12 ", Toggle(12)),
            ("t 3", Toggle(3)),
            ("a", SelectAll()),
            ("ALL", SelectAll()),
            ("n", SelectNone()),
            ("none", SelectNone()),
            ("s", Show()),
            ("", Show()),
            ("d", RequestDelete()),
            ("delete", RequestDelete()),
            ("q", Quit()),
            ("quit", Quit()),
        ],
    )
    def test_reviewing_commands(self, line: str, expected: object) -> None:
        """Review-phase input maps to commands."""
        assert parse_command(line) == expected

    @pytest.mark.parametrize("line", ["x", "2 3", "t", "t x", "delete now"])
    def test_unknown_input(self, line: str) -> None:
        """Unrecognized input yields None."""
        assert parse_command(line) is None

    def test_confirming_takes_line_verbatim(self) -> None:
        """While confirming, the line is confirmation text (case kept)."""
        assert parse_command("DELETE\n", SessionPhase.CONFIRMING_DELETE) == Confirm("DELETE")
        assert parse_command("d", SessionPhase.CONFIRMING_DELETE) == Confirm("d")
