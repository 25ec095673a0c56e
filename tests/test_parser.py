"""Tests for the command line parser."""

import pytest

from project_terminal.commands import COMMAND_ALIASES, COMMAND_SPECS, CommandType
from project_terminal.exceptions import ParseError, ParseErrorKind
from project_terminal.parser import command_suggestions, flag_text, get_flag, has_flag, parse, tokenize


def test_parse_two_word_command_with_args() -> None:
    """Test that the two-word alias is matched and the rest become args."""
    parsed = parse("/add todo fix authentication bug")

    assert parsed.command_type == CommandType.ADD_TODO
    assert parsed.raw_command_text == "add todo"
    assert parsed.args == ["fix", "authentication", "bug"]
    assert parsed.flags == {}
    assert parsed.project_mention is None


def test_parse_single_word_alias() -> None:
    """Test single-word aliases."""
    assert parse("/todos").command_type == CommandType.VIEW_TODOS
    assert parse("/done 2").command_type == CommandType.COMPLETE_TODO
    assert parse("/swap @Frontend").command_type == CommandType.SWAP_PROJECT


def test_parse_is_case_insensitive_for_commands() -> None:
    """Test that command keywords ignore case."""
    parsed = parse("/ADD Todo Something")
    assert parsed.command_type == CommandType.ADD_TODO
    assert parsed.raw_command_text == "add todo"
    assert parsed.args == ["Something"]


def test_parse_flags_anywhere() -> None:
    """Test flag forms: valued, quoted value and bare."""
    parsed = parse('/add todo --priority=high fix bug --title="Fix the bug" --urgent')

    assert parsed.args == ["fix", "bug"]
    assert parsed.flags == {"priority": "high", "title": "Fix the bug", "urgent": True}


def test_parse_repeated_flags() -> None:
    """Test that a repeated bare flag counts and a repeated valued flag keeps the last value."""
    parsed = parse("/view todos --verbose --verbose --verbose --sort=a --sort=b")
    assert parsed.flags["verbose"] == 3
    assert parsed.flags["sort"] == "b"


def test_parse_flag_names_keep_case() -> None:
    """Test that flag names are not lowercased."""
    parsed = parse("/add todo x --Priority=high")
    assert "Priority" in parsed.flags
    assert "priority" not in parsed.flags


def test_parse_project_mention() -> None:
    """Test that the mention is consumed and never appears in args."""
    parsed = parse("/add todo fix bug @Backend")
    assert parsed.project_mention == "Backend"
    assert parsed.args == ["fix", "bug"]


def test_parse_multi_word_mention_ends_at_flag() -> None:
    """Test that a mention spans plain tokens up to the next flag."""
    parsed = parse("/add todo fix bug @My Cool Project --priority=high")
    assert parsed.project_mention == "My Cool Project"
    assert parsed.args == ["fix", "bug"]
    assert parsed.flags == {"priority": "high"}


def test_parse_mention_only() -> None:
    """Test that a line holding only a mention has no command."""
    with pytest.raises(ParseError) as exc_info:
        parse("/@Backend")
    assert exc_info.value.kind == ParseErrorKind.EMPTY


def test_parse_quoted_tokens() -> None:
    """Test that quoted strings are single tokens and never mentions or flags."""
    parsed = parse('/add note "@not a mention" "--not-a-flag"')
    assert parsed.args == ["@not a mention", "--not-a-flag"]
    assert parsed.project_mention is None
    assert parsed.flags == {}


def test_parse_escaped_quotes() -> None:
    """Test backslash escapes inside quotes."""
    parsed = parse(r'/add note --title="Say \"hi\"" --content="back\\slash"')
    assert parsed.flags["title"] == 'Say "hi"'
    assert parsed.flags["content"] == "back\\slash"


def test_parse_keeps_raw_line() -> None:
    """Test that the raw line is preserved."""
    assert parse("  /todos @Backend").raw == "  /todos @Backend"


def test_parse_missing_slash() -> None:
    """Test that a line without a leading slash is rejected."""
    with pytest.raises(ParseError) as exc_info:
        parse("add todo")
    assert exc_info.value.kind == ParseErrorKind.MISSING_SLASH


def test_parse_empty_command() -> None:
    """Test a bare slash."""
    with pytest.raises(ParseError) as exc_info:
        parse("/")
    assert exc_info.value.kind == ParseErrorKind.EMPTY


def test_parse_unterminated_quote() -> None:
    """Test malformed quoting."""
    with pytest.raises(ParseError) as exc_info:
        parse('/add todo "never closed')
    assert exc_info.value.kind == ParseErrorKind.MALFORMED_QUOTING


def test_parse_duplicate_mention() -> None:
    """Test that two mentions are rejected."""
    with pytest.raises(ParseError) as exc_info:
        parse("/add todo x @Backend @Frontend")
    assert exc_info.value.kind == ParseErrorKind.DUPLICATE_MENTION


def test_parse_empty_mention() -> None:
    """Test a lone @."""
    with pytest.raises(ParseError) as exc_info:
        parse("/todos @")
    assert exc_info.value.kind == ParseErrorKind.EMPTY_MENTION


def test_parse_unknown_command_suggests() -> None:
    """Test close-match suggestions for a typo."""
    with pytest.raises(ParseError) as exc_info:
        parse("/ad todo x")

    error = exc_info.value
    assert error.kind == ParseErrorKind.UNKNOWN_COMMAND
    assert "/add todo" in error.suggestions
    assert error.suggestions[-1] == "/help"
    assert len(error.suggestions) <= 4


def test_quoted_command_word_is_not_a_command() -> None:
    """Test that a quoted first token cannot name a command."""
    with pytest.raises(ParseError) as exc_info:
        parse('/"todos"')
    assert exc_info.value.kind == ParseErrorKind.UNKNOWN_COMMAND


def test_tokenize_marks_quoted_tokens() -> None:
    """Test token quoting flags."""
    tokens = tokenize('a "b c" --d="e f"')
    assert [t.text for t in tokens] == ["a", "b c", "--d=e f"]
    assert [t.quoted for t in tokens] == [False, True, False]


def test_every_alias_has_help_metadata() -> None:
    """Test that every command type is documented and reachable."""
    assert set(COMMAND_SPECS) == set(CommandType)
    assert set(COMMAND_ALIASES.values()) == set(CommandType)


def test_command_suggestions() -> None:
    """Test completion of partial commands."""
    suggestions = command_suggestions("/add")
    assert suggestions[0].startswith("/add todo - ")
    assert len(suggestions) <= 10
    assert command_suggestions("add") == []


def test_flag_helpers() -> None:
    """Test flag lookup helpers."""
    flags = {"desc": "text", "confirm": True}
    assert get_flag(flags, "description", "desc") == "text"
    assert get_flag(flags, "missing", default="x") == "x"
    assert flag_text(flags, "confirm") is None
    assert has_flag(flags, "yes", "confirm")
