"""Console shell around the selection state machine.

Reads one line at a time, turns it into a session command, applies
:func:`dirsweep.core.session.transition` and redraws. All decisions are
made by the state machine; this module only does I/O.
"""

from collections.abc import Callable, Sequence

from dirsweep.cli.display import render_session
from dirsweep.core.session import (
    CONFIRMATION_TOKEN,
    Confirm,
    Quit,
    SessionPhase,
    SessionState,
    parse_command,
    start_session,
    transition,
)
from dirsweep.models.candidate import Candidate
from dirsweep.utils.formatting import console, format_size

HELP_TEXT = (
    "[muted]Commands: [bold]<number>[/bold] toggle, [bold]a[/bold] select all, "
    "[bold]n[/bold] select none, [bold]s[/bold] show, [bold]d[/bold] delete selected, "
    "[bold]q[/bold] quit[/]"
)

ReadLine = Callable[[str], str]
Render = Callable[[SessionState], None]


def _read_console(prompt: str) -> str:
    return console.input(prompt)


def _prompt_for(state: SessionState) -> str:
    if state.phase == SessionPhase.CONFIRMING_DELETE:
        return (
            f"[warning]Delete {state.selected_count} directory(ies) "
            f"({format_size(state.selected_size)})?[/] "
            f"Type [bold]{CONFIRMATION_TOKEN}[/bold] to confirm, anything else to cancel: "
        )
    return "[header]dirsweep>[/] "


def run_session(
    candidates: Sequence[Candidate],
    *,
    read_line: ReadLine = _read_console,
    render: Render = render_session,
) -> list[Candidate]:
    """Run an interactive review over the orphan candidates.

    End of input or Ctrl+C ends the session without deleting anything.

    Args:
        candidates: Classified candidates; non-orphans are ignored.
        read_line: Reads one line of input given a prompt.
        render: Draws a session state.

    Returns:
        The confirmed deletion set (empty if the operator quit).
    """
    state = start_session(candidates)
    render(state)
    console.print(HELP_TEXT)

    while not state.is_done:
        try:
            line = read_line(_prompt_for(state))
        except (EOFError, KeyboardInterrupt):
            console.print()
            if state.phase == SessionPhase.CONFIRMING_DELETE:
                state = transition(state, Confirm(""))
            state = transition(state, Quit())
            break

        command = parse_command(line, state.phase)
        if command is None:
            console.print(f"[error]Unknown command: {line.strip()}[/]")
            console.print(HELP_TEXT)
            continue

        state = transition(state, command)
        if state.phase != SessionPhase.CONFIRMING_DELETE:
            render(state)

    return list(state.deletion_set)
