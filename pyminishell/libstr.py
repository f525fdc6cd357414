"""Small string helpers with the exact semantics the shell relies on."""

from __future__ import annotations

_WHITESPACE = " \t\n\r\v\f"
_INT_BITS = 32


def split_fields(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty fields."""
    return [field for field in text.split(sep) if field]


def trim(text: str, chars: str | None) -> str:
    """Strip every character of ``chars`` from both ends of ``text``."""
    if chars is None:
        return text
    return text.strip(chars)


def _byte_at(text: str, index: int) -> int:
    return ord(text[index]) if index < len(text) else 0


def strncmp(a: str, b: str, n: int) -> int:
    """Compare at most ``n`` characters, as C strings ending at the first NUL.

    Returns the difference of the first differing characters, or 0.
    """
    if n <= 0:
        return 0
    i = 0
    while (
        (_byte_at(a, i) or _byte_at(b, i))
        and _byte_at(a, i) == _byte_at(b, i)
        and i < n - 1
    ):
        i += 1
    return _byte_at(a, i) - _byte_at(b, i)


def atoi(text: str) -> int:
    """Parse a leading decimal integer, wrapping to a signed 32-bit value."""
    i = 0
    while i < len(text) and text[i] in _WHITESPACE:
        i += 1
    sign = 1
    if i < len(text) and text[i] in "+-":
        if text[i] == "-":
            sign = -1
        i += 1
    result = 0
    while i < len(text) and "0" <= text[i] <= "9":
        result = result * 10 + (ord(text[i]) - ord("0"))
        i += 1
    value = result * sign
    half = 1 << (_INT_BITS - 1)
    return (value + half) % (1 << _INT_BITS) - half


def substr(text: str, start: int, length: int) -> str:
    """Return up to ``length`` characters of ``text`` beginning at ``start``."""
    if start > len(text) or length <= 0:
        return ""
    return text[start:start + length]