"""Removal of quotes from a finished token."""

from __future__ import annotations

_QUOTES = "'\""


def remove_quotes(token: str) -> str:
    """Remove the quote character that appears first in ``token``.

    Every occurrence of that quote is dropped, except that an odd count keeps
    its last occurrence. The other quote character is left alone.
    """
    quote = next((char for char in token if char in _QUOTES), None)
    if quote is None:
        return token
    keep_last = token.count(quote) % 2 != 0
    last = token.rfind(quote)
    return "".join(
        char
        for position, char in enumerate(token)
        if char != quote or (keep_last and position == last)
    )