"""Variable assignments typed on their own, such as ``NAME=value``."""

from __future__ import annotations

from .state import Command, ShellState, parse_assignment


def is_valid_declaration(command: Command) -> bool:
    """True when the command assigns variables and stands outside any pipeline."""
    if not command.tokens:
        return False
    return (
        "=" in command.tokens[0]
        and not command.pipes_to_next
        and not command.after_pipe
    )


def declare_variables(tokens: list[str], state: ShellState) -> int:
    """Apply the leading ``NAME=value`` tokens.

    An existing environment or local variable gets the new value; any other
    name becomes a new local variable. Stops at the first token without ``=``.
    Returns the exit status, always 0.
    """
    for token in tokens:
        if "=" not in token:
            break
        try:
            name, value = parse_assignment(token)
        except ValueError:
            continue
        existing = state.lookup(name)
        if existing is not None:
            existing.value = value
        else:
            state.local.append(name, value)
    return 0