"""Interactive selection state machine.

The operator reviews the orphan list, toggles individual entries, and
must type an exact confirmation token before anything is deleted. The
machine is a pure function ``transition(state, command) -> state``;
reading input and rendering output live in the CLI layer.

Phases::

    REVIEWING --RequestDelete (something selected)--> CONFIRMING_DELETE
    REVIEWING --Quit--> DONE (nothing deleted)
    CONFIRMING_DELETE --Confirm("DELETE")--> DONE (selection frozen)
    CONFIRMING_DELETE --anything else--> REVIEWING (selection unchanged)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum

from dirsweep.models.candidate import Candidate

# Exact, case-sensitive text the operator must enter to proceed
CONFIRMATION_TOKEN = "DELETE"


class SessionPhase(str, Enum):
    """Phase of a selection session."""

    REVIEWING = "reviewing"
    CONFIRMING_DELETE = "confirming_delete"
    DONE = "done"


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True, slots=True)
class Toggle:
    """Flip the selection of one candidate (1-based index)."""

    index: int


@dataclass(frozen=True, slots=True)
class SelectAll:
    """Select every candidate."""


@dataclass(frozen=True, slots=True)
class SelectNone:
    """Deselect every candidate."""


@dataclass(frozen=True, slots=True)
class Show:
    """Redisplay the list without changing anything."""


@dataclass(frozen=True, slots=True)
class RequestDelete:
    """Ask to delete the current selection."""


@dataclass(frozen=True, slots=True)
class Quit:
    """End the session without deleting anything."""


@dataclass(frozen=True, slots=True)
class Confirm:
    """Text entered at the confirmation prompt."""

    text: str


Command = Toggle | SelectAll | SelectNone | Show | RequestDelete | Quit | Confirm


# =============================================================================
# State
# =============================================================================


@dataclass(frozen=True, slots=True)
class SessionState:
    """Snapshot of a selection session.

    Attributes:
        candidates: Orphan candidates under review, in display order.
        phase: Current phase.
        deletion_set: Candidates to delete; only set when the session ended
            through a confirmed delete.
        message: Feedback for the last command, None if there is none.
        is_error: Whether ``message`` reports an invalid command.
    """

    candidates: tuple[Candidate, ...]
    phase: SessionPhase = SessionPhase.REVIEWING
    deletion_set: tuple[Candidate, ...] = ()
    message: str | None = None
    is_error: bool = False

    @property
    def selected(self) -> list[Candidate]:
        return [c for c in self.candidates if c.selected]

    @property
    def selected_count(self) -> int:
        return sum(1 for c in self.candidates if c.selected)

    @property
    def selected_size(self) -> int:
        return sum(c.size_bytes or 0 for c in self.candidates if c.selected)

    @property
    def is_done(self) -> bool:
        return self.phase == SessionPhase.DONE


def start_session(candidates: Iterable[Candidate]) -> SessionState:
    """Create the initial session state.

    Only orphans are kept, and every orphan starts selected so the
    operator reviews a proposed deletion rather than building one.

    Args:
        candidates: Classified candidates (any classification).

    Returns:
        SessionState in the REVIEWING phase.
    """
    orphans = tuple(c.with_selected(True) for c in candidates if c.is_orphan)
    return SessionState(candidates=orphans)


def auto_select(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Select every orphan without review (unattended mode).

    Returns:
        The full orphan list, each candidate selected.
    """
    return [c.with_selected(True) for c in candidates if c.is_orphan]


def transition(state: SessionState, command: Command) -> SessionState:
    """Apply one command to a session state.

    Args:
        state: Current state (never modified).
        command: Operator command.

    Returns:
        The next state. A DONE state is returned unchanged.
    """
    if state.phase == SessionPhase.DONE:
        return state

    if state.phase == SessionPhase.CONFIRMING_DELETE:
        return _confirming(state, command)

    return _reviewing(state, command)


def _feedback(
    state: SessionState, message: str | None = None, *, error: bool = False
) -> SessionState:
    return replace(state, message=message, is_error=error)


def _set_all(state: SessionState, selected: bool) -> SessionState:
    return replace(
        state,
        candidates=tuple(c.with_selected(selected) for c in state.candidates),
        message=None,
        is_error=False,
    )


def _reviewing(state: SessionState, command: Command) -> SessionState:
    match command:
        case Toggle(index=index):
            if not 1 <= index <= len(state.candidates):
                return _feedback(
                    state,
                    f"Invalid number {index}: choose 1-{len(state.candidates)}",
                    error=True,
                )
            pos = index - 1
            target = state.candidates[pos]
            updated = (
                *state.candidates[:pos],
                target.with_selected(not target.selected),
                *state.candidates[pos + 1 :],
            )
            return replace(state, candidates=updated, message=None, is_error=False)

        case SelectAll():
            return _set_all(state, True)

        case SelectNone():
            return _set_all(state, False)

        case Show():
            return _feedback(state)

        case RequestDelete():
            if state.selected_count == 0:
                return _feedback(state, "Nothing selected, nothing to do.")
            return replace(
                state,
                phase=SessionPhase.CONFIRMING_DELETE,
                message=None,
                is_error=False,
            )

        case Quit():
            return replace(
                state,
                phase=SessionPhase.DONE,
                deletion_set=(),
                message="Aborted, nothing deleted.",
                is_error=False,
            )

        case Confirm():
            return _feedback(state, "No deletion is pending confirmation.", error=True)

    return _feedback(state, f"Unknown command: {command!r}", error=True)


def _confirming(state: SessionState, command: Command) -> SessionState:
    if isinstance(command, Confirm) and command.text == CONFIRMATION_TOKEN:
        return replace(
            state,
            phase=SessionPhase.DONE,
            deletion_set=tuple(state.selected),
            message=None,
            is_error=False,
        )

    return replace(
        state,
        phase=SessionPhase.REVIEWING,
        message="Deletion cancelled.",
        is_error=False,
    )


def parse_command(line: str, phase: SessionPhase = SessionPhase.REVIEWING) -> Command | None:
    """Translate a line of operator input into a command.

    While confirming, every line is taken verbatim as confirmation text.
    While reviewing, accepted inputs are a number (toggle), ``t N``,
    ``a``/``all``, ``n``/``none``, ``s``/``show``/empty line,
    ``d``/``delete`` and ``q``/``quit``.

    Returns:
        The parsed command, or None when the input is not understood.
    """
    if phase == SessionPhase.CONFIRMING_DELETE:
        return Confirm(line.rstrip("\r\n"))

    words = line.strip().lower().split()
    if not words:
        return Show()

    head, args = words[0], words[1:]

    if head.isdigit() and not args:
        return Toggle(int(head))
    if head in ("t", "toggle") and len(args) == 1 and args[0].isdigit():
        return Toggle(int(args[0]))
    if args:
        return None

    commands: dict[str, Command] = {
        "a": SelectAll(),
        "all": SelectAll(),
        "n": SelectNone(),
        "none": SelectNone(),
        "s": Show(),
        "show": Show(),
        "l": Show(),
        "d": RequestDelete(),
        "delete": RequestDelete(),
        "q": Quit(),
        "quit": Quit(),
    }
    return commands.get(head)
