"""Turning a command line into pipeline stages: splitting, syntax checks and token order."""

from __future__ import annotations

from .expand import ExpansionError, expand_token, insert_spaces
from .libstr import strncmp
from .quotes import remove_quotes
from .splitter import QUOTES, is_redirection_token, skip_quote, split_quoted
from .state import Command, ShellState

_REDIR_HEADS = ("<", ">")


class ShellSyntaxError(Exception):
    """A command line the shell refuses to run; ``status`` is the exit status it sets."""

    def __init__(self, token: str, status: int = 2) -> None:
        super().__init__(f"bash: sintax error near unexpected token {token}")
        self.token = token
        self.status = status


def is_redirection(token: str | None) -> bool:
    """True when ``token`` is a redirection operator."""
    return is_redirection_token(token)


def space_redirections(subcommand: str) -> str:
    """Put spaces around redirection operators that are glued to words."""
    index = 0
    while index < len(subcommand):
        char = subcommand[index]
        if char in QUOTES:
            index = skip_quote(subcommand, index)
        elif char in _REDIR_HEADS:
            after = subcommand[index + 1:index + 2]
            if index == 0:
                if after != " " and after != char:
                    subcommand, index = insert_spaces(subcommand, index)
            else:
                before = subcommand[index - 1]
                if (before != " " and before != char) or (
                    after != " " and after != char
                ):
                    subcommand, index = insert_spaces(subcommand, index)
        index += 1
    return subcommand


def _check_operator(
    tokens: list[str], index: int, node_index: int, total_nodes: int
) -> None:
    token = tokens[index]
    if index + 1 >= len(tokens):
        if node_index + 1 < total_nodes:
            raise ShellSyntaxError("`|'")
        raise ShellSyntaxError("`newline'")
    doubled = "<<" if token[0] == "<" else ">>"
    if strncmp(token, doubled, len(token)) != 0:
        raise ShellSyntaxError(token)


def verify_syntax(tokens: list[str], node_index: int, total_nodes: int) -> None:
    """Reject misplaced or malformed redirection operators.

    Raises ShellSyntaxError naming the offending token.
    """
    for index, token in enumerate(tokens):
        head = token[:1]
        if head not in _REDIR_HEADS:
            continue
        if index != 0 and tokens[index - 1][:1] in _REDIR_HEADS:
            raise ShellSyntaxError(token)
        _check_operator(tokens, index, node_index, total_nodes)


def order_tokens(tokens: list[str]) -> list[str]:
    """Move the command and its arguments ahead of redirections and their files."""
    arguments: list[str] = []
    redirections: list[str] = []
    for index, token in enumerate(tokens):
        is_file = (
            index != 0
            and not is_redirection(token)
            and is_redirection(tokens[index - 1])
        )
        if is_file or is_redirection(token):
            redirections.append(token)
        else:
            arguments.append(token)
    return arguments + redirections


def has_redirection(tokens: list[str]) -> bool:
    """True when some token starts with a redirection character."""
    return any(token[:1] in _REDIR_HEADS for token in tokens)


def are_declarations(tokens: list[str]) -> bool:
    """True when every token is a variable assignment."""
    return all("=" in token for token in tokens)


def _leading_declarations(tokens: list[str]) -> int:
    count = 0
    while count < len(tokens) and "=" in tokens[count]:
        count += 1
    return count


def is_declare_followed_by_redir(tokens: list[str]) -> bool:
    """True unless the leading assignments are followed by a plain word."""
    index = _leading_declarations(tokens)
    if index < len(tokens):
        return is_redirection(tokens[index])
    return True


def remove_leading_declarations(tokens: list[str]) -> list[str]:
    """Return the tokens that follow the leading assignments."""
    return list(tokens[_leading_declarations(tokens):])


def _parse_command(
    subcommand: str, node_index: int, total_nodes: int, state: ShellState
) -> Command:
    spaced = space_redirections(subcommand)
    fields, _ = split_quoted(spaced, " ")
    tokens = [expand_token(token, state) for token in fields]
    if not tokens:
        raise ShellSyntaxError("`|'")
    verify_syntax(tokens, node_index, total_nodes)
    only_declarations = are_declarations(tokens)
    if not only_declarations:
        tokens = order_tokens(tokens)
        if "=" in tokens[0] and not is_declare_followed_by_redir(tokens):
            tokens = remove_leading_declarations(tokens)
    redirected = has_redirection(tokens)
    return Command(
        tokens=[remove_quotes(token) for token in tokens],
        pipes_to_next=node_index + 1 < total_nodes,
        after_pipe=node_index > 0,
        has_redir=redirected,
    )


def parse_line(line: str, state: ShellState) -> list[Command]:
    """Parse a command line into pipeline stages and store them in ``state``.

    Raises ShellSyntaxError or ExpansionError, after setting the exit status.
    """
    state.delimiter = None
    state.commands = []
    subcommands, pipes = split_quoted(line, "|")
    total = len(subcommands)
    if pipes >= total:
        state.exit_status = 2
        raise ShellSyntaxError("'|'")
    commands: list[Command] = []
    for node_index, subcommand in enumerate(subcommands):
        try:
            commands.append(_parse_command(subcommand, node_index, total, state))
        except (ShellSyntaxError, ExpansionError) as error:
            state.exit_status = error.status
            raise
    state.commands = commands
    return commands