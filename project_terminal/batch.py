"""Batch splitting and sequential stop-on-first-error execution."""

from collections.abc import Callable

import structlog

from project_terminal.exceptions import BatchError, BatchErrorKind, TerminalError
from project_terminal.models import BatchResult, CommandOutcome, CommandResponse, ParsedCommand, ResponseType
from project_terminal.parser import parse

logger = structlog.get_logger()

MAX_BATCH_COMMANDS = 10

Dispatch = Callable[[ParsedCommand], CommandResponse]


def _split_line(line: str) -> list[str]:
    """Split one line on ``&&`` that is not inside double quotes."""
    segments = []
    buf: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        ch = line[i]
        if in_quotes and ch == "\\" and i + 1 < len(line):
            buf.append(line[i : i + 2])
            i += 2
            continue
        if ch == '"':
            in_quotes = not in_quotes
        elif not in_quotes and line.startswith("&&", i):
            segments.append("".join(buf))
            buf = []
            i += 2
            continue
        buf.append(ch)
        i += 1
    segments.append("".join(buf))
    return segments


def split_batch(raw_submission: str, max_commands: int = MAX_BATCH_COMMANDS) -> list[str]:
    """Split a submission into individual command strings.

    Newlines separate commands first; each line is then split on ``&&``
    outside quoted regions. Blank segments are dropped.

    Raises:
        BatchError: if more than ``max_commands`` commands remain
    """
    commands = []
    for line in raw_submission.splitlines():
        for segment in _split_line(line):
            segment = segment.strip()
            if segment:
                commands.append(segment)

    if len(commands) > max_commands:
        raise BatchError(
            BatchErrorKind.TOO_MANY,
            f"Too many chained commands ({len(commands)}). Maximum is {max_commands} per batch.",
            ["Split the batch into smaller submissions"],
        )
    return commands


def error_response(error: TerminalError) -> CommandResponse:
    """Convert a TerminalError into the response shown to the user."""
    return CommandResponse(type=ResponseType.ERROR, message=error.message, suggestions=list(error.suggestions))


class BatchExecutor:
    """Runs the commands of one submission strictly in order."""

    def __init__(self, max_commands: int = MAX_BATCH_COMMANDS) -> None:
        self.max_commands = max_commands

    def run(self, raw_submission: str, dispatch: Dispatch) -> BatchResult:
        """Split, parse and dispatch each command, stopping at the first error.

        Args:
            raw_submission: Newline and/or ``&&`` separated commands
            dispatch: Called once per parsed command; reports failures either by
                returning an error response or raising TerminalError

        Returns:
            BatchResult holding the outcomes up to and including the stopping point
        """
        try:
            commands = split_batch(raw_submission, self.max_commands)
        except BatchError as e:
            logger.info("Batch rejected", reason=e.kind.value)
            return BatchResult(outcomes=[], total=0, error=e)

        result = BatchResult(total=len(commands))
        logger.info("Running batch", total=result.total)

        for index, command in enumerate(commands):
            try:
                parsed = parse(command)
                response = dispatch(parsed)
            except TerminalError as e:
                response = error_response(e)

            result.outcomes.append(CommandOutcome(index=index, command=command, response=response))
            if response.is_error:
                result.stopped_at = index
                logger.info("Batch stopped on error", index=index, command=command, message=response.message)
                break

        logger.debug("Batch finished", attempted=result.attempted, stopped_at=result.stopped_at)
        return result
