"""Unit tests for the interactive session shell."""

from collections.abc import Callable, Iterator

import pytest
from dirsweep.cli.interactive import run_session
from dirsweep.core.session import SessionPhase, SessionState
from dirsweep.models.candidate import Candidate, Classification


def _reader(lines: list[str]) -> Callable[[str], str]:
    it: Iterator[str] = iter(lines)

    def read_line(_prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read_line


@pytest.fixture
def candidates(
    make_orphan: Callable[..., Candidate],
    make_candidate: Callable[..., Candidate],
) -> list[Candidate]:
    return [
        make_orphan("/data/A"),
        make_candidate("Steam", Classification.matched("Steam Client")),
        make_orphan("/data/B"),
    ]


class TestRunSession:
    """Tests for run_session."""

    def test_confirmed_selection_returned(self, candidates: list[Candidate]) -> None:
        """The confirmed selection is returned."""
        result = run_session(
            candidates, read_line=_reader(["2", "d", "DELETE"]), render=lambda _: None
        )

        assert [c.name for c in result] == ["A"]
        assert all(c.selected for c in result)

    def test_quit_returns_nothing(self, candidates: list[Candidate]) -> None:
        """Quitting returns an empty selection."""
        assert run_session(candidates, read_line=_reader(["q"]), render=lambda _: None) == []

    def test_eof_while_confirming_returns_nothing(self, candidates: list[Candidate]) -> None:
        """Input ending at the confirmation prompt deletes nothing."""
        result = run_session(candidates, read_line=_reader(["d"]), render=lambda _: None)

        assert result == []

    def test_keyboard_interrupt_returns_nothing(self, candidates: list[Candidate]) -> None:
        """Ctrl+C ends the session without deleting."""

        def read_line(_prompt: str) -> str:
            raise KeyboardInterrupt

        assert run_session(candidates, read_line=read_line, render=lambda _: None) == []

    def test_renders_after_each_command(self, candidates: list[Candidate]) -> None:
        """The list is redrawn after review commands, not during confirmation."""
        rendered: list[SessionState] = []

        run_session(candidates, read_line=_reader(["1", "d", "x"]), render=rendered.append)

        phases = [s.phase for s in rendered]
        # initial draw, toggle, cancelled confirmation
        assert phases == [SessionPhase.REVIEWING] * 3
        assert rendered[-1].message == "Deletion cancelled."

    def test_prompt_changes_when_confirming(self, candidates: list[Candidate]) -> None:
        """The confirmation prompt asks for the exact token."""
        prompts: list[str] = []

        def read_line(prompt: str) -> str:
            prompts.append(prompt)
            return ["d", "DELETE"][len(prompts) - 1]

        run_session(candidates, read_line=read_line, render=lambda _: None)

        assert "DELETE" in prompts[1]
        assert "DELETE" not in prompts[0]
