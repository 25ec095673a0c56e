"""Shared plumbing for command handlers."""

from datetime import date
from enum import Enum
from typing import Any, TypeVar

from project_terminal.exceptions import ValidationError
from project_terminal.models import CommandResponse, ParsedCommand, Project, ResponseType, utc_now
from project_terminal.parser import has_flag
from project_terminal.store import Store

E = TypeVar("E", bound=Enum)


def parse_choice(value: str, choices: type[E], what: str) -> E:
    """Parse a flag value into one of an enum's members.

    Raises:
        ValidationError: naming the valid values
    """
    try:
        return choices(value.strip().lower())
    except ValueError:
        valid = ", ".join(c.value for c in choices)
        raise ValidationError(f'Invalid {what} "{value}". Valid values: {valid}') from None


def parse_due_date(value: str) -> str:
    try:
        return date.fromisoformat(value.strip()).isoformat()
    except ValueError:
        raise ValidationError(f'Invalid date "{value}". Use YYYY-MM-DD') from None


def is_confirmed(parsed: ParsedCommand) -> bool:
    return has_flag(parsed.flags, "confirm", "yes", "y")


def wizard_field(
    field_id: str,
    label: str,
    field_type: str = "text",
    required: bool = False,
    options: list[Any] | None = None,
    value: Any = None,
) -> dict[str, Any]:
    step: dict[str, Any] = {"id": field_id, "label": label, "type": field_type, "required": required}
    if options is not None:
        step["options"] = options
    if value is not None:
        step["value"] = value
    return step


class BaseHandler:
    """Base class for handlers: response builders and the single commit point."""

    def __init__(self, store: Store, user_id: str) -> None:
        self.store = store
        self.user_id = user_id

    def commit(self, project: Project) -> None:
        """Persist every mutation staged on ``project`` for this command."""
        self.store.save_project(project)

    @staticmethod
    def _metadata(project: Project | None, action: str) -> dict[str, Any]:
        metadata: dict[str, Any] = {"action": action, "timestamp": utc_now()}
        if project is not None:
            metadata["project_id"] = project.id
            metadata["project_name"] = project.name
        return metadata

    def success(
        self,
        message: str,
        project: Project | None,
        action: str,
        data: dict[str, Any] | None = None,
        suggestions: list[str] | None = None,
    ) -> CommandResponse:
        return CommandResponse(
            type=ResponseType.SUCCESS,
            message=message,
            data=data,
            suggestions=suggestions or [],
            metadata=self._metadata(project, action),
        )

    def data(self, message: str, project: Project | None, action: str, data: dict[str, Any]) -> CommandResponse:
        return CommandResponse(type=ResponseType.DATA, message=message, data=data, metadata=self._metadata(project, action))

    def info(self, message: str, suggestions: list[str] | None = None) -> CommandResponse:
        return CommandResponse(type=ResponseType.INFO, message=message, suggestions=suggestions or [])

    def warning(self, message: str, project: Project | None, action: str, data: dict[str, Any] | None = None) -> CommandResponse:
        return CommandResponse(
            type=ResponseType.WARNING, message=message, data=data, metadata=self._metadata(project, action)
        )

    def error(self, message: str, suggestions: list[str] | None = None) -> CommandResponse:
        return CommandResponse(type=ResponseType.ERROR, message=message, suggestions=suggestions or [])

    def prompt(
        self,
        message: str,
        project: Project | None,
        wizard_type: str,
        steps: list[dict[str, Any]],
        **extra: Any,
    ) -> CommandResponse:
        return CommandResponse(
            type=ResponseType.PROMPT,
            message=message,
            data={"wizard_type": wizard_type, "steps": steps, **extra},
            metadata=self._metadata(project, wizard_type),
        )

    def confirm(self, message: str, project: Project, wizard_type: str, command: str) -> CommandResponse:
        """Ask the user to re-run ``command`` once they agree."""
        return self.prompt(
            "Confirm Deletion",
            project,
            wizard_type,
            [wizard_field("confirmation", message, "confirmation", required=True)],
            confirmation_data={"command": command},
        )
