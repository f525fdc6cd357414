"""The commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import stat
from collections.abc import Callable
from typing import TextIO

from .libstr import atoi, strncmp
from .splitter import is_redirection_token
from .state import Command, ShellState, parse_assignment

_MISSING = ": Inexistent file or directory"
_BUILTIN_NAMES = ("cd", "echo", "env", "exit", "export", "pwd", "unset")


class ShellExit(Exception):
    """Raised when the ``exit`` builtin ends the shell; ``status`` is the exit status."""

    def __init__(self, status: int) -> None:
        super().__init__(f"exit {status}")
        self.status = status


def _at(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else ""


def _update_pwd(state: ShellState) -> None:
    old = state.env.search("OLDPWD")
    current = state.env.search("PWD")
    if current is None:
        return
    if old is not None:
        old.value = current.value
    current.value = os.getcwd()


def _cd_missing_dir(state: ShellState, target: str, err: TextIO) -> None:
    err.write(f"bash: cd: {target}{_MISSING}\n")
    state.exit_status = 1


def _cd_absolute(state: ShellState, target: str, err: TextIO) -> int:
    if target.startswith("~"):
        home = state.env.search("HOME")
        if home is None:
            err.write("bash: cd: HOME not set\n")
            state.exit_status = 1
            return 1
        path = home.value + target[target.find("/"):]
    else:
        path = target
    try:
        os.chdir(path)
    except OSError:
        err.write(f"bash: cd: {path}{_MISSING}\n")
        state.exit_status = 1
        return 1
    _update_pwd(state)
    state.exit_status = 0
    return 0


def _cd_home(state: ShellState, target: str | None, err: TextIO) -> int:
    shown = target or ""
    if target is not None and _at(target, 1) == "~":
        err.write(f"bash: cd: {shown}{_MISSING}\n")
        state.exit_status = 1
        return 1
    home = state.env.search("HOME")
    if home is None:
        err.write("bash: cd: HOME not set\n")
        return 1
    try:
        os.chdir(home.value)
    except OSError:
        err.write(f"bash: cd: {shown}{_MISSING}\n")
        return 1
    _update_pwd(state)
    return 0


def _cd_relative(state: ShellState, target: str, err: TextIO) -> None:
    try:
        info = os.stat(target)
    except OSError:
        _cd_missing_dir(state, target, err)
        return
    if not info.st_mode & stat.S_IFDIR:
        _cd_missing_dir(state, target, err)
        return
    try:
        os.chdir(os.getcwd() + "/" + target)
    except OSError:
        _cd_missing_dir(state, target, err)
        return
    _update_pwd(state)
    state.exit_status = 0


def cd(state: ShellState, args: list[str], out: TextIO, err: TextIO) -> int:
    """Change the working directory and keep PWD and OLDPWD up to date."""
    if len(args) > 2:
        err.write("bash: cd: excessive arguments number\n")
        state.exit_status = 1
        return state.exit_status
    target = args[1] if len(args) > 1 else None
    if target is not None and target.startswith("/"):
        _cd_absolute(state, target, err)
    elif target is not None and not target.startswith("~"):
        _cd_relative(state, target, err)
    elif target is not None and _at(target, 1) == "/" and len(target) > 2:
        state.exit_status = _cd_absolute(state, target, err)
    else:
        state.exit_status = _cd_home(state, target, err)
    return state.exit_status


def echo(state: ShellState, args: list[str], out: TextIO, err: TextIO) -> int:
    """Print the arguments separated by spaces; leading ``-n`` options drop the newline."""
    state.exit_status = 0
    if len(args) <= 1:
        out.write("\n")
        return 0
    index = 1
    newline = True
    while index < len(args) and args[index].startswith("-n"):
        newline = False
        index += 1
    if index >= len(args):
        return 0
    out.write(" ".join(args[index:]))
    if newline:
        out.write("\n")
    return 0


def env(state: ShellState, args: list[str], out: TextIO, err: TextIO) -> int:
    """Print the environment, followed by any ``NAME=value`` arguments."""
    extra = args[1:]
    for argument in extra:
        if "=" not in argument:
            err.write(f'env: "{argument}": Inexistent file or directory\n')
            state.exit_status = 127
            return state.exit_status
    for variable in state.env:
        out.write(f"{variable.name}={variable.value}\n")
    if extra:
        out.write("\n".join(extra) + "\n")
    state.exit_status = 0
    return 0


def is_numeric(text: str) -> bool:
    """True when every character of ``text`` is a decimal digit."""
    return all("0" <= char <= "9" for char in text)


def exit_builtin(
    state: ShellState, args: list[str], out: TextIO, err: TextIO, after_pipe: bool
) -> int:
    """End the shell by raising ShellExit with the chosen status."""
    words = len(args)
    if not after_pipe and words == 1:
        raise ShellExit(state.exit_status)
    if words == 2 and is_numeric(args[1]):
        state.exit_status = atoi(args[1])
    elif words > 2 and is_numeric(args[1]):
        err.write("exit\n")
        err.write("bash: exit: too many arguments\n")
        state.exit_status = 1
    else:
        err.write("exit: numeric argument required\n")
        state.exit_status = 2
        raise ShellExit(state.exit_status)
    err.write("exit\n")
    raise ShellExit(state.exit_status)


def _export_existing_local(state: ShellState, name: str) -> None:
    variable = state.local.search(name)
    if variable is None:
        return
    state.env.append(variable.name, variable.value)
    state.local.delete(variable.name)


def export(state: ShellState, args: list[str], out: TextIO, err: TextIO) -> int:
    """Set environment variables, or move local variables into the environment."""
    for argument in args[1:]:
        if "=" not in argument:
            _export_existing_local(state, argument)
            continue
        try:
            name, value = parse_assignment(argument)
        except ValueError:
            continue
        existing = state.env.search(name)
        if existing is not None:
            existing.value = value
            continue
        state.env.append(name, value)
        if state.local.search(name) is not None:
            state.local.delete(name)
    state.exit_status = 0
    return 0


def pwd(state: ShellState, args: list[str], out: TextIO, err: TextIO) -> int:
    """Print the working directory; the exit status is left as it was."""
    out.write(os.getcwd() + "\n")
    return state.exit_status


def _remove_variable(state: ShellState, name: str, err: TextIO) -> bool:
    found = state.env.search(name)
    if found is not None:
        state.env.delete(found.name)
        local = state.local.search(name)
        if local is not None:
            state.local.delete(local.name)
        return True
    local = state.local.search(name)
    if local is None:
        if strncmp(name, " ", len(name)) != 0:
            err.write(f"bash: unset: {name}: isn't a valid identifier\n")
            state.exit_status = 1
            return False
        return True
    state.local.delete(local.name)
    return True


def unset(state: ShellState, args: list[str], out: TextIO, err: TextIO) -> int:
    """Remove variables from the environment and from the local variables."""
    names = args[1:]
    if not names:
        state.exit_status = 0
        return 0
    for position, name in enumerate(names):
        following = names[position + 1] if position + 1 < len(names) else None
        if is_redirection_token(name) and following is not None:
            err.write(f"bash: {following}{_MISSING}\n")
            state.exit_status = 1
            return state.exit_status
    for name in names:
        if not _remove_variable(state, name, err):
            return state.exit_status
    state.exit_status = 0
    return 0


def _match_builtin(name: str) -> str | None:
    length = len(name)
    return next(
        (builtin for builtin in _BUILTIN_NAMES if strncmp(name, builtin, length) == 0),
        None,
    )


def is_builtin(tokens: list[str]) -> bool:
    """True when the first token names a builtin (a prefix of one counts)."""
    return bool(tokens) and _match_builtin(tokens[0]) is not None


_Handler = Callable[[ShellState, list[str], TextIO, TextIO], int]
_HANDLERS: dict[str, _Handler] = {
    "cd": cd,
    "echo": echo,
    "env": env,
    "export": export,
    "pwd": pwd,
    "unset": unset,
}


def run_builtin(
    state: ShellState, command: Command, args: list[str], out: TextIO, err: TextIO
) -> int:
    """Run the builtin named by the command's first token with ``args``.

    Returns the exit status, or 1 when the command is not a builtin.
    """
    if not command.tokens:
        return 1
    builtin = _match_builtin(command.tokens[0])
    if builtin is None:
        return 1
    if builtin == "exit":
        exit_builtin(state, args, out, err, command.after_pipe)
    else:
        _HANDLERS[builtin](state, args, out, err)
    return state.exit_status