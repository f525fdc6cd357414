"""Expansion of ``$NAME``, ``${NAME}`` and ``$?`` inside tokens, and spacing of redirections."""

from __future__ import annotations

from .libstr import substr, trim
from .splitter import is_between_double, skip_quote
from .state import ShellState


class ExpansionError(Exception):
    """A substitution that cannot be expanded; ``status`` is the exit status it sets."""

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status


_SPACE_OR_REDIR = frozenset(" <>")


def _at(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else ""


def _is_name_char(char: str) -> bool:
    return char == "_" or (char.isascii() and char.isalnum())


def expand_token(token: str, state: ShellState) -> str:
    """Expand every variable reference in ``token`` that is not single-quoted."""
    i = 0
    while i < len(token):
        char = token[i]
        if char == "'":
            if i == 0 or not is_between_double(token, i):
                i = skip_quote(token, i)
        elif char == "$":
            token, i = extract_varname(token, i + 1, state)
        if i < len(token):
            i += 1
    return token


def extract_varname(token: str, index: int, state: ShellState) -> tuple[str, int]:
    """Expand the reference whose name starts at ``index``, just after ``$``.

    Returns the new token and the index of the last expanded character.
    Raises ExpansionError for ``${}`` and for an unclosed ``${``.
    """
    if _at(token, index) == "{":
        if _at(token, index + 1) == "}":
            raise ExpansionError("bash: ${}: incorrect substitution", 1)
        close = token.find("}", index + 1)
        if close == -1:
            raise ExpansionError("ERROR : close key missing", 2)
        return _replace_varname(token, index + 1, close - index - 1, index, state)
    end = index
    while end < len(token) and _is_name_char(token[end]):
        end += 1
    return _replace_varname(token, index, end - index, index, state)


def _replace_varname(
    token: str, start: int, length: int, index: int, state: ShellState
) -> tuple[str, int]:
    dollar = index - 1
    following = _at(token, dollar + 1)
    if following == "?" or (following == "{" and _at(token, dollar + 2) == "?"):
        return rebuild_string(token, str(state.exit_status), dollar)
    name = substr(token, start, length)
    if not name:
        return token, dollar
    variable = state.lookup(name)
    value = variable.value if variable is not None else " "
    return rebuild_string(token, value, dollar)


def _name_end(token: str, dollar: int) -> int:
    if _at(token, dollar + 1) == "{":
        close = token.find("}", dollar)
        return len(token) if close == -1 else close
    end = dollar + 1
    while end < len(token) and _is_name_char(token[end]):
        end += 1
    return end


def rebuild_string(token: str, value: str, index_dollar: int) -> tuple[str, int]:
    """Replace the reference starting at ``index_dollar`` with ``value``.

    Returns the new token and the index of the last character of the
    expanded prefix. The character ending the name is consumed unless it is
    a quote or ``$``.
    """
    if index_dollar != 0:
        joined = trim(substr(token, 0, index_dollar) + value, " ")
    else:
        joined = value
    new_index = len(joined) - 1
    rest = _name_end(token, index_dollar)
    if rest < len(token):
        start = rest if token[rest] in "\"'$" else rest + 1
        joined += token[start:]
    return joined, new_index


def rebuild_spaced(index: int, subcommand: str, start: int) -> str:
    """Return ``subcommand`` from ``start`` with a space inserted before ``index``."""
    return subcommand[start:index] + " " + subcommand[index:]


def insert_spaces(subcommand: str, index: int) -> tuple[str, int]:
    """Surround the redirection character at ``index`` with spaces where missing.

    Returns the new subcommand and the index of the redirection character.
    """
    before = subcommand[index - 1] if index > 0 else ""
    after = _at(subcommand, index + 1)
    if before not in _SPACE_OR_REDIR and after not in _SPACE_OR_REDIR:
        once = rebuild_spaced(index, subcommand, 0)
        return rebuild_spaced(index + 2, once, 0), index + 1
    if index != 0 and before not in _SPACE_OR_REDIR:
        return rebuild_spaced(index, subcommand, 0), index + 1
    if index != 0 and after not in _SPACE_OR_REDIR:
        return rebuild_spaced(index + 1, subcommand, 0), index
    return subcommand, index