"""Help, search and project navigation handlers."""

from typing import Any

from project_terminal.commands import COMMAND_ALIASES, COMMAND_SPECS, CommandType, primary_alias
from project_terminal.handlers.base import BaseHandler
from project_terminal.handlers.todos import top_level_todos
from project_terminal.models import CommandResponse, ParsedCommand, Project
from project_terminal.projects import ProjectResolver
from project_terminal.store import Store

MAX_SEARCH_RESULTS = 50

HELP_SECTIONS: dict[str, list[CommandType]] = {
    "Todos": [
        CommandType.ADD_TODO,
        CommandType.VIEW_TODOS,
        CommandType.EDIT_TODO,
        CommandType.COMPLETE_TODO,
        CommandType.DELETE_TODO,
        CommandType.ADD_SUBTASK,
        CommandType.VIEW_SUBTASKS,
        CommandType.DELETE_SUBTASK,
    ],
    "Notes": [CommandType.ADD_NOTE, CommandType.VIEW_NOTES, CommandType.EDIT_NOTE, CommandType.DELETE_NOTE],
    "Dev log": [CommandType.ADD_DEVLOG, CommandType.VIEW_DEVLOG, CommandType.EDIT_DEVLOG, CommandType.DELETE_DEVLOG],
    "Components": [
        CommandType.ADD_COMPONENT,
        CommandType.VIEW_COMPONENTS,
        CommandType.DELETE_COMPONENT,
        CommandType.ADD_RELATIONSHIP,
        CommandType.VIEW_RELATIONSHIPS,
        CommandType.EDIT_RELATIONSHIP,
        CommandType.DELETE_RELATIONSHIP,
    ],
    "Stack": [CommandType.ADD_STACK, CommandType.VIEW_STACK, CommandType.REMOVE_STACK],
    "Projects": [CommandType.VIEW_PROJECTS, CommandType.SWAP_PROJECT, CommandType.SEARCH, CommandType.HELP],
}


def _matches(query: str, *values: str) -> bool:
    return any(query in value.casefold() for value in values if value)


class UtilityHandlers(BaseHandler):
    """Handlers that are not tied to one entity type."""

    def __init__(self, store: Store, user_id: str, resolver: ProjectResolver) -> None:
        super().__init__(store, user_id)
        self.resolver = resolver

    def help(self, parsed: ParsedCommand) -> CommandResponse:
        if parsed.args:
            topic = parsed.text.lower().lstrip("/")
            command_type = COMMAND_ALIASES.get(topic)
            if command_type is None:
                return self.error(f'No help for "{parsed.text}"', ["/help"])
            info = COMMAND_SPECS[command_type]
            aliases = [f"/{alias}" for alias, t in COMMAND_ALIASES.items() if t == command_type]
            return self.data(
                f"/{primary_alias(command_type)}: {info.description}",
                None,
                "help",
                {"syntax": info.syntax, "examples": info.examples, "aliases": aliases},
            )

        sections = {
            title: [
                {
                    "command": f"/{primary_alias(t)}",
                    "syntax": COMMAND_SPECS[t].syntax,
                    "description": COMMAND_SPECS[t].description,
                }
                for t in command_types
            ]
            for title, command_types in HELP_SECTIONS.items()
        }
        return self.data(
            "Available commands",
            None,
            "help",
            {
                "sections": sections,
                "tips": [
                    "Mention a project with @name anywhere in the command",
                    "Chain commands with && or one per line (max 10)",
                    "Run an add or edit command without arguments to open its wizard",
                ],
            },
        )

    def search(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        query = parsed.text.casefold()
        if not query:
            return self.error("Please provide a search query", ["/search authentication"])

        results: list[dict[str, Any]] = []
        for index, todo in enumerate(top_level_todos(project), 1):
            if _matches(query, todo.title, todo.description):
                results.append({"type": "todo", "index": index, "id": todo.id, "title": todo.title})
        for index, note in enumerate(project.notes, 1):
            if _matches(query, note.title, note.content, note.description):
                results.append({"type": "note", "index": index, "id": note.id, "title": note.title})
        for index, entry in enumerate(project.dev_log, 1):
            if _matches(query, entry.title, entry.description):
                results.append({"type": "devlog", "index": index, "id": entry.id, "title": entry.label})
        for index, component in enumerate(project.components, 1):
            if _matches(query, component.title, component.content, component.feature, component.type):
                results.append({"type": "component", "index": index, "id": component.id, "title": component.title})

        if not results:
            return self.info(f'No results for "{parsed.text}" in {project.name}')
        return self.data(
            f'Found {len(results)} result(s) for "{parsed.text}" in {project.name}',
            project,
            "search",
            {"results": results[:MAX_SEARCH_RESULTS], "total": len(results)},
        )

    def view_projects(self, parsed: ParsedCommand) -> CommandResponse:
        projects = self.resolver.get_user_projects(self.user_id)
        if not projects:
            return self.info("You have no projects yet", ["pt project create <name>"])

        summaries = self.resolver.summarize(self.user_id, projects)
        return self.data(
            f"Your projects ({len(summaries)})",
            None,
            "view_projects",
            {
                "projects": [
                    {"id": s.id, "name": s.name, "role": s.role.value, "is_archived": s.is_archived}
                    for s in summaries
                ]
            },
        )

    def swap_project(self, parsed: ParsedCommand) -> CommandResponse:
        mention = parsed.project_mention or (parsed.text.lstrip("@") or None)
        if not mention:
            return self.error("Please specify a project: /swap @project", ["/view projects"])

        project = self.resolver.require_project(self.user_id, mention)
        role = self.resolver.get_user_role(self.user_id, project)
        return self.success(
            f"Switched to {project.name}",
            project,
            "swap_project",
            {"project": {"id": project.id, "name": project.name, "role": role.value if role else None}},
        )
