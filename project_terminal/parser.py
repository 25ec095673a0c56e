"""Tokenizer and parser for slash-command lines."""

import difflib
import re
from dataclasses import dataclass

import structlog

from project_terminal.commands import COMMAND_ALIASES, COMMAND_SPECS, CommandType
from project_terminal.exceptions import ParseError, ParseErrorKind
from project_terminal.models import ParsedCommand

logger = structlog.get_logger()

FlagValue = str | bool | int

_FLAG_RE = re.compile(r"^--([A-Za-z][\w-]*)(?:=(.*))?$", re.DOTALL)
_ESCAPABLE = {'"', "\\"}


@dataclass
class Token:
    """A whitespace-delimited token with quotes removed."""

    text: str
    quoted: bool = False


def tokenize(line: str) -> list[Token]:
    """Split a line on whitespace, keeping ``"..."`` regions together.

    A token is ``quoted`` when it starts with a quote; such tokens are never
    treated as flags or project mentions.

    Raises:
        ParseError: if a quote is left open
    """
    tokens: list[Token] = []
    buf: list[str] = []
    in_quotes = False
    started_quoted = False
    has_token = False
    i = 0
    while i < len(line):
        ch = line[i]
        if in_quotes:
            if ch == "\\" and i + 1 < len(line) and line[i + 1] in _ESCAPABLE:
                buf.append(line[i + 1])
                i += 2
                continue
            if ch == '"':
                in_quotes = False
            else:
                buf.append(ch)
        elif ch == '"':
            if not has_token:
                started_quoted = True
            in_quotes = True
            has_token = True
        elif ch.isspace():
            if has_token:
                tokens.append(Token("".join(buf), started_quoted))
                buf = []
                has_token = False
                started_quoted = False
        else:
            buf.append(ch)
            has_token = True
        i += 1

    if in_quotes:
        raise ParseError(
            ParseErrorKind.MALFORMED_QUOTING,
            "Unterminated quote in command",
            ['Close every quoted value, e.g. --title="My Task"'],
        )
    if has_token:
        tokens.append(Token("".join(buf), started_quoted))
    return tokens


def _match_flag(token: Token) -> tuple[str, FlagValue] | None:
    if token.quoted:
        return None
    match = _FLAG_RE.match(token.text)
    if not match:
        return None
    name, value = match.group(1), match.group(2)
    return name, (True if value is None else value)


def _set_flag(flags: dict[str, FlagValue], name: str, value: FlagValue) -> None:
    existing = flags.get(name)
    if value is True and existing is not None and not isinstance(existing, str):
        # --verbose --verbose
        flags[name] = int(existing) + 1
    else:
        flags[name] = value


def _unknown_command(words: list[Token]) -> ParseError:
    attempts = [words[0].text.lower()]
    if len(words) >= 2:
        attempts.insert(0, f"{words[0].text} {words[1].text}".lower())

    matches: list[str] = []
    for attempt in attempts:
        for match in difflib.get_close_matches(attempt, COMMAND_ALIASES.keys(), n=3, cutoff=0.6):
            if match not in matches:
                matches.append(match)

    suggestions = [f"/{m}" for m in matches[:3]] + ["/help"]
    return ParseError(
        ParseErrorKind.UNKNOWN_COMMAND,
        f"Unknown command: {words[0].text}. Type /help for available commands.",
        suggestions,
    )


def parse(raw_line: str) -> ParsedCommand:
    """Parse one command line.

    Args:
        raw_line: A line such as ``/add todo fix bug --priority=high @My Project``

    Returns:
        ParsedCommand with flags and the project mention removed from ``args``

    Raises:
        ParseError: on a missing slash, bad quoting, an unknown command or a second mention
    """
    line = raw_line.strip()
    if not line.startswith("/"):
        raise ParseError(ParseErrorKind.MISSING_SLASH, "Commands must start with /", ["/help"])

    tokens = tokenize(line[1:])

    flags: dict[str, FlagValue] = {}
    positional: list[Token] = []
    mention_parts: list[str] | None = None
    in_mention = False

    for token in tokens:
        flag = _match_flag(token)
        if flag is not None:
            _set_flag(flags, *flag)
            in_mention = False
            continue

        if not token.quoted and token.text.startswith("@"):
            if mention_parts is not None:
                raise ParseError(
                    ParseErrorKind.DUPLICATE_MENTION,
                    "Only one @project mention is allowed per command",
                    ["Split the command into one command per project"],
                )
            mention_parts = [token.text[1:]] if len(token.text) > 1 else []
            in_mention = True
            continue

        if in_mention:
            mention_parts.append(token.text)  # type: ignore[union-attr]
            continue

        positional.append(token)

    project_mention = None
    if mention_parts is not None:
        project_mention = " ".join(mention_parts).strip()
        if not project_mention:
            raise ParseError(ParseErrorKind.EMPTY_MENTION, "Project mention is empty", ["@project name"])

    if not positional:
        raise ParseError(ParseErrorKind.EMPTY, "No command specified", ["/help"])

    command_type = None
    length = 0
    if len(positional) >= 2 and not positional[0].quoted and not positional[1].quoted:
        two_word = f"{positional[0].text} {positional[1].text}".lower()
        command_type = COMMAND_ALIASES.get(two_word)
        length = 2
    if command_type is None and not positional[0].quoted:
        command_type = COMMAND_ALIASES.get(positional[0].text.lower())
        length = 1
    if command_type is None:
        raise _unknown_command(positional)

    parsed = ParsedCommand(
        command_type=command_type,
        raw_command_text=" ".join(t.text for t in positional[:length]).lower(),
        args=[t.text for t in positional[length:]],
        flags=flags,
        project_mention=project_mention,
        raw=raw_line,
    )
    logger.debug(
        "Command parsed",
        command_type=parsed.command_type.value,
        args=parsed.args,
        flags=list(parsed.flags),
        project_mention=parsed.project_mention,
    )
    return parsed


def command_suggestions(partial: str, limit: int = 10) -> list[str]:
    """Complete a partially typed command, e.g. ``/ad`` -> ``/add todo - Create a new todo``."""
    if not partial.startswith("/"):
        return []

    prefix = partial[1:].lower()
    suggestions = []
    for alias, command_type in COMMAND_ALIASES.items():
        if alias.startswith(prefix):
            suggestions.append(f"/{alias} - {COMMAND_SPECS[command_type].description}")
    return suggestions[:limit]


def get_flag(flags: dict[str, FlagValue], *names: str, default: FlagValue | None = None) -> FlagValue | None:
    """Return the first of ``names`` present in ``flags``."""
    for name in names:
        if name in flags:
            return flags[name]
    return default


def flag_text(flags: dict[str, FlagValue], *names: str) -> str | None:
    """Like get_flag, but only string values count; bare presence flags give None."""
    value = get_flag(flags, *names)
    return value if isinstance(value, str) else None


def has_flag(flags: dict[str, FlagValue], *names: str) -> bool:
    return any(name in flags for name in names)


def flag_count(flags: dict[str, FlagValue]) -> int:
    return len(flags)
