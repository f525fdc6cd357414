import pytest

from pyminishell.expand import ExpansionError
from pyminishell.parser import (
    ShellSyntaxError,
    are_declarations,
    has_redirection,
    is_declare_followed_by_redir,
    is_redirection,
    order_tokens,
    parse_line,
    remove_leading_declarations,
    space_redirections,
    verify_syntax,
)
from pyminishell.state import ShellState, VariableList


@pytest.fixture
def state():
    return ShellState(env=VariableList.from_environ({"USER": "alice", "HOME": "/home/alice"}))


@pytest.mark.parametrize("token", ["<", "<<", ">", ">>"])
def test_is_redirection_operators(token):
    assert is_redirection(token) is True


@pytest.mark.parametrize("token", ["cat", "<<<", None])
def test_is_redirection_rejects_words(token):
    assert is_redirection(token) is False


def test_space_redirections_glued():
    assert space_redirections("cat<in>out") == "cat < in > out"


@pytest.mark.parametrize("line", ["ls >> out", "cat < in", 'echo ">"'])
def test_space_redirections_leaves_spaced_and_quoted(line):
    assert space_redirections(line) == line


def test_verify_syntax_accepts_valid():
    assert verify_syntax(["cat", "<", "in", ">>", "out"], 0, 1) is None


def test_verify_syntax_missing_file_at_end():
    with pytest.raises(ShellSyntaxError) as info:
        verify_syntax(["cat", "<"], 0, 1)
    assert info.value.token == "`newline'"
    assert info.value.status == 2


def test_verify_syntax_missing_file_before_pipe():
    with pytest.raises(ShellSyntaxError) as info:
        verify_syntax(["cat", ">"], 0, 2)
    assert info.value.token == "`|'"


def test_verify_syntax_consecutive_operators():
    with pytest.raises(ShellSyntaxError) as info:
        verify_syntax(["cat", "<", "<", "x"], 0, 1)
    assert info.value.token == "<"


def test_verify_syntax_triple_operator():
    with pytest.raises(ShellSyntaxError) as info:
        verify_syntax(["cat", "<<<", "x"], 0, 1)
    assert info.value.token == "<<<"
    assert "sintax error near unexpected token <<<" in str(info.value)


def test_order_tokens_moves_command_first():
    tokens = ["<", "in", "cat", "-n"]
    ordered = order_tokens(tokens)
    assert ordered == ["cat", "-n", "<", "in"]
    assert sorted(ordered) == sorted(tokens)


def test_order_tokens_keeps_ordered_list():
    tokens = ["cat", "-n", "<", "in", ">", "out"]
    assert order_tokens(tokens) == tokens


def test_has_redirection():
    assert has_redirection(["cat", "<", "in"]) is True
    assert has_redirection(["echo", "hi"]) is False


def test_are_declarations():
    assert are_declarations(["A=1", "B=2"]) is True
    assert are_declarations(["A=1", "ls"]) is False


def test_is_declare_followed_by_redir():
    assert is_declare_followed_by_redir(["A=1"]) is True
    assert is_declare_followed_by_redir(["A=1", "ls"]) is False
    assert is_declare_followed_by_redir(["A=1", "<", "x"]) is True


def test_remove_leading_declarations():
    assert remove_leading_declarations(["A=1", "B=2", "ls", "-l"]) == ["ls", "-l"]


def test_parse_line_pipeline(state):
    commands = parse_line("echo hello | wc -l", state)
    assert [c.tokens for c in commands] == [["echo", "hello"], ["wc", "-l"]]
    assert [c.pipes_to_next for c in commands] == [True, False]
    assert [c.after_pipe for c in commands] == [False, True]
    assert state.commands == commands


def test_parse_line_expands_variables(state):
    commands = parse_line("echo $USER", state)
    assert commands[0].tokens == ["echo", "alice"]


def test_parse_line_exit_status(state):
    state.exit_status = 3
    assert parse_line("echo $?", state)[0].tokens == ["echo", "3"]


def test_parse_line_single_quotes_block_expansion(state):
    assert parse_line("echo '$USER'", state)[0].tokens == ["echo", "$USER"]


def test_parse_line_double_quotes_group_words(state):
    assert parse_line('echo "a b"', state)[0].tokens == ["echo", "a b"]


def test_parse_line_quoted_pipe(state):
    commands = parse_line('echo "a|b" | wc', state)
    assert len(commands) == 2
    assert commands[0].tokens == ["echo", "a|b"]


def test_parse_line_orders_redirections(state):
    command = parse_line("< in cat", state)[0]
    assert command.tokens == ["cat", "<", "in"]
    assert command.has_redir is True


def test_parse_line_glued_redirections(state):
    command = parse_line("cat<in>out", state)[0]
    assert command.tokens == ["cat", "<", "in", ">", "out"]


def test_parse_line_only_declarations(state):
    command = parse_line("A=1 B=2", state)[0]
    assert command.tokens == ["A=1", "B=2"]
    assert command.has_redir is False


def test_parse_line_drops_declarations_before_command(state):
    assert parse_line("A=1 ls", state)[0].tokens == ["ls"]


def test_parse_line_keeps_declaration_before_redirection(state):
    command = parse_line("A=1 > f", state)[0]
    assert command.tokens == ["A=1", ">", "f"]
    assert command.has_redir is True


def test_parse_line_trailing_pipe(state):
    with pytest.raises(ShellSyntaxError) as info:
        parse_line("ls |", state)
    assert info.value.token == "'|'"
    assert state.exit_status == 2


def test_parse_line_empty_stage(state):
    with pytest.raises(ShellSyntaxError):
        parse_line("ls | | wc", state)
    assert state.exit_status == 2


def test_parse_line_missing_redirection_target(state):
    with pytest.raises(ShellSyntaxError) as info:
        parse_line("cat <", state)
    assert info.value.token == "`newline'"
    assert state.exit_status == 2


def test_parse_line_bad_substitution(state):
    with pytest.raises(ExpansionError) as info:
        parse_line("echo ${}", state)
    assert info.value.status == 1
    assert state.exit_status == 1