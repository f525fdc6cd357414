"""Shell variables, parsed commands and the state a shell session carries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from .libstr import split_fields, strncmp


def names_match(a: str, b: str) -> bool:
    """True when two variable names are the same name."""
    return strncmp(a, b, len(a)) == 0 and strncmp(a, b, len(b)) == 0


def parse_assignment(text: str) -> tuple[str, str]:
    """Split ``NAME=value`` into its name and value.

    Only the text up to a second ``=`` forms the value, and a missing value
    is empty. Raises ValueError when there is no name.
    """
    fields = split_fields(text, "=")
    if not fields:
        raise ValueError(f"not an assignment: {text!r}")
    value = fields[1] if len(fields) > 1 else ""
    return fields[0], value


@dataclass
class Variable:
    """A named shell variable."""

    name: str
    value: str


class VariableList:
    """An ordered collection of variables, searched by exact name."""

    def __init__(self, variables: Iterable[Variable] = ()) -> None:
        self._items: list[Variable] = list(variables)

    @classmethod
    def from_environ(cls, environ: Iterable[str] | Mapping[str, str]) -> "VariableList":
        """Build a list from ``NAME=value`` entries or a name-to-value mapping."""
        if isinstance(environ, Mapping):
            entries: Iterable[str] = (f"{k}={v}" for k, v in environ.items())
        else:
            entries = environ
        result = cls()
        for entry in entries:
            try:
                name, value = parse_assignment(entry)
            except ValueError:
                continue
            result.append(name, value)
        return result

    def search(self, name: str) -> Variable | None:
        """Return the first variable called ``name``, or None."""
        return next((v for v in self._items if names_match(v.name, name)), None)

    def append(self, name: str, value: str) -> Variable:
        """Add a variable at the end and return it."""
        variable = Variable(name, value)
        self._items.append(variable)
        return variable

    def delete(self, name: str) -> bool:
        """Remove the first variable called ``name``; report whether one was removed."""
        for position, variable in enumerate(self._items):
            if names_match(variable.name, name):
                del self._items[position]
                return True
        return False

    def to_environ(self) -> list[str]:
        """Return the variables as ``NAME=value`` strings, in order."""
        return [f"{v.name}={v.value}" for v in self._items]

    def __iter__(self) -> Iterator[Variable]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


@dataclass
class Command:
    """One pipeline stage: its tokens and how it connects to its neighbours."""

    tokens: list[str] = field(default_factory=list)
    pipes_to_next: bool = False
    after_pipe: bool = False
    has_redir: bool = False


@dataclass
class ShellState:
    """Everything a shell session keeps between command lines."""

    env: VariableList = field(default_factory=VariableList)
    local: VariableList = field(default_factory=VariableList)
    exit_status: int = 0
    commands: list[Command] = field(default_factory=list)
    delimiter: str | None = None

    def lookup(self, name: str) -> Variable | None:
        """Find a variable, looking in the environment before local variables."""
        found = self.env.search(name)
        if found is None:
            found = self.local.search(name)
        return found