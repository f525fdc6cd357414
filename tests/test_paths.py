from pyminishell.paths import final_status, find_command_path, is_piped
from pyminishell.state import Command


def test_existing_cmd_is_returned_as_is(tmp_path):
    prog = tmp_path / "prog"
    prog.write_text("")
    assert find_command_path("/nonexistent", str(prog)) == str(prog)


def test_found_in_path(tmp_path):
    (tmp_path / "tool").write_text("")
    path_value = "/nonexistent:" + str(tmp_path)
    assert find_command_path(path_value, "tool") == str(tmp_path) + "/tool"


def test_first_directory_wins(tmp_path):
    first = tmp_path / "a"
    second = tmp_path / "b"
    first.mkdir()
    second.mkdir()
    (first / "tool").write_text("")
    (second / "tool").write_text("")
    result = find_command_path(f"{first}:{second}", "tool")
    assert result == str(first) + "/tool"


def test_missing_command_is_none(tmp_path):
    assert find_command_path(str(tmp_path), "no-such-tool") is None


def test_empty_path_entries_are_skipped(tmp_path):
    (tmp_path / "tool").write_text("")
    assert find_command_path("::" + str(tmp_path) + "::", "tool") == str(tmp_path) + "/tool"


def test_final_status_mapping():
    assert final_status(3) == 1
    assert final_status(132) == 130
    assert final_status(127) == 127
    assert final_status(0) == 0


def test_is_piped():
    assert is_piped(Command(tokens=["ls"])) is False
    assert is_piped(Command(tokens=["ls"], pipes_to_next=True)) is True
    assert is_piped(Command(tokens=["wc"], after_pipe=True)) is True