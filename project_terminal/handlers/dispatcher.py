"""Routes parsed commands to their handlers."""

from collections.abc import Callable

import structlog

from project_terminal.batch import error_response
from project_terminal.commands import COMMAND_SPECS, CommandType
from project_terminal.exceptions import SelectionRequired, TerminalError
from project_terminal.handlers.components import ComponentHandlers
from project_terminal.handlers.devlog import DevLogHandlers
from project_terminal.handlers.notes import NoteHandlers
from project_terminal.handlers.relationships import RelationshipHandlers
from project_terminal.handlers.stack import StackHandlers
from project_terminal.handlers.todos import TodoHandlers
from project_terminal.handlers.utility import UtilityHandlers
from project_terminal.models import CommandResponse, ParsedCommand, Project, ResponseType
from project_terminal.projects import ProjectResolver
from project_terminal.store import Store

logger = structlog.get_logger()

ProjectHandler = Callable[[ParsedCommand, Project], CommandResponse]
GlobalHandler = Callable[[ParsedCommand], CommandResponse]


class CommandDispatcher:
    """Executes one parsed command on behalf of one user.

    Commands that need a project have it resolved first; writes go through the
    edit check. ``current_project_id`` follows ``/swap`` so later commands in
    the same session act on the new project.
    """

    def __init__(
        self,
        store: Store,
        resolver: ProjectResolver,
        user_id: str,
        current_project_id: str | None = None,
    ) -> None:
        self.store = store
        self.resolver = resolver
        self.user_id = user_id
        self.current_project_id = current_project_id

        todos = TodoHandlers(store, user_id)
        notes = NoteHandlers(store, user_id)
        devlog = DevLogHandlers(store, user_id)
        components = ComponentHandlers(store, user_id)
        relationships = RelationshipHandlers(store, user_id)
        stack = StackHandlers(store, user_id)
        self.utility = UtilityHandlers(store, user_id, resolver)

        self.project_handlers: dict[CommandType, ProjectHandler] = {
            CommandType.ADD_TODO: todos.add_todo,
            CommandType.VIEW_TODOS: todos.view_todos,
            CommandType.EDIT_TODO: todos.edit_todo,
            CommandType.DELETE_TODO: todos.delete_todo,
            CommandType.COMPLETE_TODO: todos.complete_todo,
            CommandType.ADD_SUBTASK: todos.add_subtask,
            CommandType.VIEW_SUBTASKS: todos.view_subtasks,
            CommandType.DELETE_SUBTASK: todos.delete_subtask,
            CommandType.ADD_NOTE: notes.add_note,
            CommandType.VIEW_NOTES: notes.view_notes,
            CommandType.EDIT_NOTE: notes.edit_note,
            CommandType.DELETE_NOTE: notes.delete_note,
            CommandType.ADD_DEVLOG: devlog.add_devlog,
            CommandType.VIEW_DEVLOG: devlog.view_devlog,
            CommandType.EDIT_DEVLOG: devlog.edit_devlog,
            CommandType.DELETE_DEVLOG: devlog.delete_devlog,
            CommandType.ADD_COMPONENT: components.add_component,
            CommandType.VIEW_COMPONENTS: components.view_components,
            CommandType.DELETE_COMPONENT: components.delete_component,
            CommandType.ADD_RELATIONSHIP: relationships.add_relationship,
            CommandType.VIEW_RELATIONSHIPS: relationships.view_relationships,
            CommandType.EDIT_RELATIONSHIP: relationships.edit_relationship,
            CommandType.DELETE_RELATIONSHIP: relationships.delete_relationship,
            CommandType.ADD_STACK: stack.add_stack,
            CommandType.VIEW_STACK: stack.view_stack,
            CommandType.REMOVE_STACK: stack.remove_stack,
            CommandType.SEARCH: self.utility.search,
        }
        self.global_handlers: dict[CommandType, GlobalHandler] = {
            CommandType.VIEW_PROJECTS: self.utility.view_projects,
            CommandType.SWAP_PROJECT: self.utility.swap_project,
            CommandType.HELP: self.utility.help,
        }

    def __call__(self, parsed: ParsedCommand) -> CommandResponse:
        logger.info(
            "Executing command",
            user_id=self.user_id,
            command=parsed.command_type.value,
            project_mention=parsed.project_mention,
        )
        try:
            response = self._dispatch(parsed)
        except SelectionRequired as e:
            return CommandResponse(
                type=ResponseType.PROMPT,
                message=e.message,
                data={"projects": e.candidates},
                suggestions=[f"@{c['name']}" for c in e.candidates],
                metadata={"action": "select_project", "command": parsed.raw},
            )
        except TerminalError as e:
            logger.info("Command failed", command=parsed.command_type.value, error=e.message)
            return error_response(e)

        if parsed.command_type == CommandType.SWAP_PROJECT and not response.is_error and response.data:
            self.current_project_id = response.data["project"]["id"]
            logger.info("Current project changed", user_id=self.user_id, project_id=self.current_project_id)
        return response

    def _dispatch(self, parsed: ParsedCommand) -> CommandResponse:
        info = COMMAND_SPECS[parsed.command_type]
        if not info.requires_project:
            return self.global_handlers[parsed.command_type](parsed)

        if info.writes:
            project = self.resolver.resolve_project_with_edit_check(
                self.user_id, parsed.project_mention, self.current_project_id
            )
        else:
            project = self.resolver.require_project(self.user_id, parsed.project_mention, self.current_project_id)
        return self.project_handlers[parsed.command_type](parsed, project)
