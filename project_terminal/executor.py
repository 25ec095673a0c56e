"""Session-level entry point: one raw submission in, one response out."""

from typing import Any

import structlog

from project_terminal.batch import MAX_BATCH_COMMANDS, BatchExecutor, error_response
from project_terminal.cache import ProjectCache
from project_terminal.handlers.dispatcher import CommandDispatcher
from project_terminal.models import BatchResult, CommandResponse, ResponseType
from project_terminal.projects import ProjectResolver
from project_terminal.store import Store

logger = structlog.get_logger()


class CommandExecutor:
    """Runs terminal submissions for one user against a store.

    The executor keeps the user's current project between submissions, so a
    ``/swap`` in one call carries over to the next.
    """

    def __init__(
        self,
        store: Store,
        user_id: str,
        cache: ProjectCache | None = None,
        current_project_id: str | None = None,
        max_commands: int = MAX_BATCH_COMMANDS,
    ) -> None:
        self.store = store
        self.user_id = user_id
        self.resolver = ProjectResolver(store, cache)
        self.dispatcher = CommandDispatcher(store, self.resolver, user_id, current_project_id)
        self.batch = BatchExecutor(max_commands)

    @property
    def current_project_id(self) -> str | None:
        return self.dispatcher.current_project_id

    def run(self, raw_submission: str) -> BatchResult:
        """Execute a submission and return the per-command outcomes."""
        return self.batch.run(raw_submission, self.dispatcher)

    def execute(self, raw_submission: str) -> CommandResponse:
        """Execute a submission and render it as a single response.

        A single command yields its own response. Several commands yield a
        summary whose ``data`` lists each executed command's response.
        """
        result = self.run(raw_submission)

        if result.error is not None:
            return error_response(result.error)
        if result.total == 0:
            return CommandResponse(
                type=ResponseType.ERROR,
                message="Empty command",
                suggestions=["/help"],
            )
        if result.total == 1:
            return result.outcomes[0].response

        return self._summarize(result)

    @staticmethod
    def _summarize(result: BatchResult) -> CommandResponse:
        results: list[dict[str, Any]] = [
            {"index": o.index, "command": o.command, "response": o.response.to_dict()} for o in result.outcomes
        ]
        data = {
            "batch": True,
            "total": result.total,
            "executed": result.attempted,
            "stopped_at": result.stopped_at,
            "results": results,
        }

        if result.stopped_at is not None:
            failed = result.outcomes[result.stopped_at]
            message = (
                f"Batch stopped at command {result.stopped_at + 1} of {result.total}: "
                f"{failed.response.message}"
            )
            logger.info("Batch incomplete", executed=result.attempted, total=result.total)
            return CommandResponse(
                type=ResponseType.WARNING,
                message=message,
                data=data,
                suggestions=list(failed.response.suggestions),
            )

        return CommandResponse(
            type=ResponseType.SUCCESS,
            message=f"Executed {result.total} commands successfully",
            data=data,
        )
