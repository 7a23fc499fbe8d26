import pytest

from hishtory.query_text import (
    build_initial_query_with_search_escaping,
    build_selected_command,
    calculate_word_boundaries,
    command_escaper,
    sanitize_escape_codes,
    split_query_array,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("foo", [0, 3]),
        ("foo bar", [0, 3, 7]),
        ("foo-bar", [0, 3, 7]),
        ("foo-bar baz", [0, 3, 7, 11]),
        ("foo-- -bar - baz", [0, 3, 10, 16]),
        ("foo    ", [0, 3]),
    ],
)
def test_calculate_word_boundaries(text, expected):
    assert calculate_word_boundaries(text) == expected


def test_word_boundaries_empty():
    assert calculate_word_boundaries("") == [0, 0]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("foo", "foo"),
        ("foo\x1b[31mbar", "foo\x1b[31mbar"),
        ("11;rgb:1c1c/1c1c/1c1c", ""),
        ("foo 11;rgb:1c1c/1c1c/1c1c bar", "foo  bar"),
    ],
)
def test_sanitize_escape_codes(text, expected):
    assert sanitize_escape_codes(text) == expected


def test_command_escaper_plain():
    assert command_escaper('echo "hi"') == 'echo "hi"'


def test_command_escaper_newline():
    assert command_escaper("echo a\necho b") == '"echo a\\necho b"'


def test_command_escaper_tab_and_quotes():
    assert command_escaper('ls\t"x"') == '"ls\\t\\"x\\""'


def test_command_escaper_control_char():
    assert command_escaper("a\n\x01") == '"a\\n\\x01"'


def test_build_initial_query_plain():
    assert build_initial_query_with_search_escaping(["ls", "foo"]) == "ls foo"


def test_build_initial_query_escapes_dash():
    assert build_initial_query_with_search_escaping(["foo", "-bar"]) == 'foo "-bar"'


def test_build_initial_query_escapes_html_chars():
    assert build_initial_query_with_search_escaping(["-a<b"]) == '"-a\\u003cb"'


def test_build_initial_query_empty():
    assert build_initial_query_with_search_escaping([]) == ""


def test_split_query_array():
    assert split_query_array(["a b", "c"]) == ["a", "b", "c"]
    assert split_query_array(["a  b"]) == ["a", "", "b"]
    assert split_query_array([]) == []


def test_selected_command_without_cd():
    assert build_selected_command("ls", "/tmp/", False) == "ls"


def test_selected_command_with_cd():
    assert build_selected_command("ls", "/tmp/x", True) == 'cd "/tmp/x" && ls'


def test_selected_command_expands_home():
    result = build_selected_command("make", "~/code/proj/", True, home="/home/user")
    assert result == 'cd "/home/user/code/proj" && make'


def test_selected_command_tilde_alone_not_expanded():
    assert build_selected_command("ls", "~", True, home="/home/user") == 'cd "~" && ls'