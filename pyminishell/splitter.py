"""Quote-aware splitting of command lines and quote position queries."""

from __future__ import annotations

from .libstr import strncmp

QUOTES = "'\""
_REDIRECTIONS = ("<", "<<", ">", ">>")


def skip_quote(text: str, index: int) -> int:
    """Return the index of the quote closing the one at ``index``.

    When the quote is never closed, ``index`` is returned unchanged.
    """
    quote = text[index]
    closing = text.find(quote, index + 1)
    return index if closing == -1 else closing


def split_quoted(line: str, delimiter: str) -> tuple[list[str], int]:
    """Split ``line`` on ``delimiter`` outside quotes, dropping empty fields.

    Returns the fields and the number of delimiters met between fields.
    """
    fields: list[str] = []
    delimiters = 0
    i = 0
    while i < len(line):
        if line[i] == delimiter:
            delimiters += 1
            i += 1
            continue
        start = i
        while i < len(line) and line[i] != delimiter:
            if line[i] in QUOTES:
                i = skip_quote(line, i)
            i += 1
        fields.append(line[start:i])
    return fields, delimiters


def found_closed_quote(text: str, index: int) -> bool:
    """True when a double quote follows position ``index``."""
    return text.find('"', index + 1) != -1


def is_between_double(text: str, index: int) -> bool:
    """True when position ``index`` lies inside a closed pair of double quotes."""
    if text[:index].count('"') % 2 == 0:
        return False
    return found_closed_quote(text, index)


def is_redirection_token(token: str | None) -> bool:
    """True when ``token`` is one of the redirection operators."""
    if token is None:
        return False
    return any(strncmp(token, op, len(token)) == 0 for op in _REDIRECTIONS)