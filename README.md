# pyminishell

The front half of a small bash-like shell, as a library: it splits a command
line on pipes and spaces while respecting quotes, expands variables, checks
redirection syntax, orders tokens, and runs the shell's own built-in
commands against a shell state held in Python objects.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Parsing a command line

```python
from pyminishell.state import ShellState, VariableList
from pyminishell.parser import parse_line

state = ShellState(env=VariableList.from_environ({"HOME": "/tmp", "USER": "alice"}))
commands = parse_line("echo $USER | wc -l", state)

commands[0].tokens         # ["echo", "alice"]
commands[0].pipes_to_next  # True
commands[1].tokens         # ["wc", "-l"]
commands[1].after_pipe     # True
```

`parse_line` returns a list of `Command` objects (also stored in
`state.commands`). Each has `tokens`, `pipes_to_next`, `after_pipe` and
`has_redir`. Redirections and their files are moved behind the command and
its arguments:

```python
parse_line("cat < in.txt -n", state)[0].tokens  # ["cat", "-n", "<", "in.txt"]
```

What the parser handles:

- Pipes, split outside quotes; a line with as many pipes as commands is
  refused.
- Single and double quotes. Single quotes stop expansion; quotes are
  removed from the finished tokens.
- `$NAME`, `${NAME}` and `$?` (the last exit status). Names are looked up
  in the environment, then in the local variables.
- Spaces are inserted around `<`, `>`, `<<` and `>>` glued to words, and
  misplaced or malformed operators are rejected.
- Leading `NAME=value` tokens before a command are dropped from it.

Errors are raised as `pyminishell.parser.ShellSyntaxError` (for example
`echo >`, exit status 2) or `pyminishell.expand.ExpansionError` (`${}`,
exit status 1; an unclosed `${`, exit status 2). Both carry a `status`
attribute, and `parse_line` sets `state.exit_status` to it before raising.

## Variables

`pyminishell.state.VariableList` is an ordered list of `Variable(name,
value)` with `search`, `append`, `delete`, `to_environ` and
`from_environ` (from `NAME=value` strings or a mapping). `ShellState`
holds an `env` list, a `local` list, `exit_status` and the parsed
`commands`; `ShellState.lookup` searches the environment first.

`pyminishell.declare.declare_variables(tokens, state)` applies leading
`NAME=value` tokens: an existing variable gets the new value, any other
name becomes a local variable. `is_valid_declaration(command)` tells whether
a command is a stand-alone assignment outside a pipeline.

## Built-in commands

`pyminishell.builtins` provides `cd`, `echo` (with `-n`), `env`, `export`,
`pwd`, `unset` and `exit_builtin`. Each takes the state, the argument list
(command name first) and two text streams for output and errors:

```python
import io
from pyminishell.builtins import echo, run_builtin

out, err = io.StringIO(), io.StringIO()
echo(state, ["echo", "-n", "hi"], out, err)
out.getvalue()  # "hi"
```

`run_builtin(state, command, args, out, err)` dispatches on the command's
first token and returns the exit status, or 1 when it is not a builtin;
`is_builtin(tokens)` answers the same question. `exit_builtin` raises
`ShellExit`, whose `status` is the status the shell should end with.
`export NAME` moves a local variable into the environment.

## Helpers

- `pyminishell.paths.find_command_path(path_value, cmd)` finds a program
  on a colon-separated search path.
- `pyminishell.paths.final_status(ret)` and `is_piped(command)` are small
  decisions used when running a pipeline.
- `pyminishell.libstr`, `pyminishell.splitter` and `pyminishell.quotes`
  hold the string, quote-aware splitting and quote-removal functions the
  parser is built from.

## What this package does not do

There is no interactive prompt and no command to start: the package does
not read lines from a terminal or keep a history. It does not start
external programs, connect pipes between processes, open the files named
by redirections, read heredocs, or install signal handlers. The parsed
`Command` list says what should be run and how it is connected; running it
is left to the caller.