"""Error taxonomy for the command language layer."""

from enum import Enum
from typing import Any


class TerminalError(Exception):
    """Base class for every error a command can report back to the user."""

    def __init__(self, message: str, suggestions: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestions = suggestions or []


class ParseErrorKind(str, Enum):
    MISSING_SLASH = "missing_slash"
    EMPTY = "empty"
    UNKNOWN_COMMAND = "unknown_command"
    MALFORMED_QUOTING = "malformed_quoting"
    DUPLICATE_MENTION = "duplicate_mention"
    EMPTY_MENTION = "empty_mention"


class ParseError(TerminalError):
    """A single command line could not be parsed."""

    def __init__(self, kind: ParseErrorKind, message: str, suggestions: list[str] | None = None) -> None:
        super().__init__(message, suggestions)
        self.kind = kind


class BatchErrorKind(str, Enum):
    TOO_MANY = "too_many"


class BatchError(TerminalError):
    """A submission was rejected before any of its commands ran."""

    def __init__(self, kind: BatchErrorKind, message: str, suggestions: list[str] | None = None) -> None:
        super().__init__(message, suggestions)
        self.kind = kind


class ResolutionError(TerminalError):
    """A project or entity identifier did not match anything."""


class SelectionRequired(TerminalError):
    """No project could be inferred; the caller must ask the user to pick one."""

    def __init__(self, message: str, candidates: list[dict[str, Any]]) -> None:
        super().__init__(message)
        self.candidates = candidates


class PermissionDeniedError(TerminalError):
    """The user's role on the project does not allow the requested write."""

    def __init__(self, role: str | None, message: str | None = None) -> None:
        super().__init__(message or f"You are a {role} and do not have edit permissions for this project")
        self.role = role


class ConsistencyErrorKind(str, Enum):
    DUPLICATE_EDGE = "duplicate_edge"
    SELF_REFERENCE = "self_reference"
    MIRROR_MISSING = "mirror_missing"


class ConsistencyError(TerminalError):
    """A relationship mutation would break, or found broken, the mirror invariant."""

    def __init__(self, kind: ConsistencyErrorKind, message: str, suggestions: list[str] | None = None) -> None:
        super().__init__(message, suggestions)
        self.kind = kind


class ValidationError(TerminalError):
    """A flag or argument value is outside its allowed set."""
