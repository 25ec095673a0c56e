"""Command vocabulary: types, aliases and help metadata."""

from dataclasses import dataclass, field
from enum import Enum


class CommandType(str, Enum):
    ADD_TODO = "add_todo"
    VIEW_TODOS = "view_todos"
    EDIT_TODO = "edit_todo"
    DELETE_TODO = "delete_todo"
    COMPLETE_TODO = "complete_todo"
    ADD_SUBTASK = "add_subtask"
    VIEW_SUBTASKS = "view_subtasks"
    DELETE_SUBTASK = "delete_subtask"
    ADD_NOTE = "add_note"
    VIEW_NOTES = "view_notes"
    EDIT_NOTE = "edit_note"
    DELETE_NOTE = "delete_note"
    ADD_DEVLOG = "add_devlog"
    VIEW_DEVLOG = "view_devlog"
    EDIT_DEVLOG = "edit_devlog"
    DELETE_DEVLOG = "delete_devlog"
    ADD_COMPONENT = "add_component"
    VIEW_COMPONENTS = "view_components"
    DELETE_COMPONENT = "delete_component"
    ADD_RELATIONSHIP = "add_relationship"
    VIEW_RELATIONSHIPS = "view_relationships"
    EDIT_RELATIONSHIP = "edit_relationship"
    DELETE_RELATIONSHIP = "delete_relationship"
    ADD_STACK = "add_stack"
    VIEW_STACK = "view_stack"
    REMOVE_STACK = "remove_stack"
    SEARCH = "search"
    VIEW_PROJECTS = "view_projects"
    SWAP_PROJECT = "swap_project"
    HELP = "help"


@dataclass(frozen=True)
class CommandSpec:
    """Help and routing metadata for one command type."""

    syntax: str
    description: str
    examples: list[str] = field(default_factory=list)
    requires_project: bool = True
    writes: bool = False


COMMAND_SPECS: dict[CommandType, CommandSpec] = {
    CommandType.ADD_TODO: CommandSpec(
        "/add todo [title] [--priority=low|medium|high] [--due=YYYY-MM-DD] [@project]",
        "Create a new todo",
        ["/add todo fix authentication bug @backend", '/add todo --title="Write docs" --priority=high'],
        writes=True,
    ),
    CommandType.VIEW_TODOS: CommandSpec(
        "/view todos [@project]",
        "List todos with their subtasks",
        ["/view todos @backend", "/todos"],
    ),
    CommandType.EDIT_TODO: CommandSpec(
        "/edit todo [#|id|title] [--title=...] [--priority=...] [--status=...] [--description=...]",
        "Edit an existing todo",
        ['/edit todo 1 --priority=high', '/edit todo "login bug" --status=in_progress'],
        writes=True,
    ),
    CommandType.DELETE_TODO: CommandSpec(
        "/delete todo [#|id|title] [--confirm]",
        "Delete a todo and its subtasks",
        ["/delete todo 2 --confirm"],
        writes=True,
    ),
    CommandType.COMPLETE_TODO: CommandSpec(
        "/complete todo [#|id|title]",
        "Mark a todo as completed",
        ["/complete todo 1", '/complete todo "login bug"'],
        writes=True,
    ),
    CommandType.ADD_SUBTASK: CommandSpec(
        '/add subtask --parent="parent todo" --title="subtask title"',
        "Add a subtask under a todo",
        ['/add subtask --parent=1 --title="write tests"'],
        writes=True,
    ),
    CommandType.VIEW_SUBTASKS: CommandSpec(
        "/view subtasks [parent #|id|title]",
        "List the subtasks of a todo",
        ["/view subtasks 1"],
    ),
    CommandType.DELETE_SUBTASK: CommandSpec(
        "/delete subtask [parent] [subtask] [--confirm]",
        "Delete a subtask",
        ["/delete subtask 1 2 --confirm"],
        writes=True,
    ),
    CommandType.ADD_NOTE: CommandSpec(
        '/add note [title] [--content="..."] [@project]',
        "Create a new note",
        ['/add note API decisions --content="REST over GraphQL"'],
        writes=True,
    ),
    CommandType.VIEW_NOTES: CommandSpec(
        "/view notes [#|id|title] [@project]",
        "List notes, or show one note",
        ["/view notes", "/view notes 2"],
    ),
    CommandType.EDIT_NOTE: CommandSpec(
        "/edit note [#|id|title] [--title=...] [--content=...]",
        "Edit an existing note",
        ['/edit note 1 --content="updated"'],
        writes=True,
    ),
    CommandType.DELETE_NOTE: CommandSpec(
        "/delete note [#|id|title] [--confirm]",
        "Delete a note",
        ["/delete note 2 --confirm"],
        writes=True,
    ),
    CommandType.ADD_DEVLOG: CommandSpec(
        "/add devlog [text] [--title=...] [@project]",
        "Create a dev log entry",
        ["/add devlog fixed memory leak in user service"],
        writes=True,
    ),
    CommandType.VIEW_DEVLOG: CommandSpec(
        "/view devlog [@project]",
        "List dev log entries",
        ["/view devlog @backend"],
    ),
    CommandType.EDIT_DEVLOG: CommandSpec(
        "/edit devlog [#|id|title] [--title=...] [--description=...]",
        "Edit a dev log entry",
        ['/edit devlog 1 --description="more detail"'],
        writes=True,
    ),
    CommandType.DELETE_DEVLOG: CommandSpec(
        "/delete devlog [#|id|title] [--confirm]",
        "Delete a dev log entry",
        ["/delete devlog 1 --confirm"],
        writes=True,
    ),
    CommandType.ADD_COMPONENT: CommandSpec(
        '/add component --title="..." --category=backend [--type=service] [--feature=...] [--content=...]',
        "Document a new component",
        ['/add component --title="Auth Service" --category=backend --feature=Auth'],
        writes=True,
    ),
    CommandType.VIEW_COMPONENTS: CommandSpec(
        "/view components [@project]",
        "List components",
        ["/view components"],
    ),
    CommandType.DELETE_COMPONENT: CommandSpec(
        "/delete component [#|id|title] [--confirm]",
        "Delete a component and every relationship pointing at it",
        ['/delete component "Auth Service" --confirm'],
        writes=True,
    ),
    CommandType.ADD_RELATIONSHIP: CommandSpec(
        '/add relationship --source="..." --target="..." --type=uses|depends_on [--description=...]',
        "Link two components in both directions",
        ['/add relationship --source="Login" --target="Auth Service" --type=uses'],
        writes=True,
    ),
    CommandType.VIEW_RELATIONSHIPS: CommandSpec(
        "/view relationships [component]",
        "List a component's relationships",
        ['/view relationships "Login"'],
    ),
    CommandType.EDIT_RELATIONSHIP: CommandSpec(
        "/edit relationship [component] [relationship #|id|target] [new type] [--description=...]",
        "Change a relationship's type on both sides",
        ['/edit relationship "Login" 1 depends_on'],
        writes=True,
    ),
    CommandType.DELETE_RELATIONSHIP: CommandSpec(
        "/delete relationship [component] [relationship #|id|target] [--confirm]",
        "Delete a relationship on both sides",
        ['/delete relationship "Login" 1 --confirm'],
        writes=True,
    ),
    CommandType.ADD_STACK: CommandSpec(
        "/add stack --name=... [--category=framework] [--version=...]",
        "Add a technology or package to the stack",
        ["/add stack --name=React --category=framework --version=18.2.0"],
        writes=True,
    ),
    CommandType.VIEW_STACK: CommandSpec(
        "/view stack [@project]",
        "List the project's stack",
        ["/view stack"],
    ),
    CommandType.REMOVE_STACK: CommandSpec(
        "/remove stack [#|id|name]",
        "Remove a technology or package from the stack",
        ["/remove stack React"],
        writes=True,
    ),
    CommandType.SEARCH: CommandSpec(
        "/search [query] [@project]",
        "Search todos, notes, dev log and components",
        ["/search authentication"],
    ),
    CommandType.VIEW_PROJECTS: CommandSpec(
        "/view projects",
        "List every project you can access",
        ["/projects"],
        requires_project=False,
    ),
    CommandType.SWAP_PROJECT: CommandSpec(
        "/swap @project",
        "Switch the current project",
        ["/swap @frontend", "/switch-project @backend"],
        requires_project=False,
    ),
    CommandType.HELP: CommandSpec(
        "/help [command]",
        "Show help for all commands or one command",
        ["/help", "/help add todo"],
        requires_project=False,
    ),
}

COMMAND_ALIASES: dict[str, CommandType] = {
    "add todo": CommandType.ADD_TODO,
    "add-todo": CommandType.ADD_TODO,
    "todo": CommandType.ADD_TODO,
    "view todos": CommandType.VIEW_TODOS,
    "view-todos": CommandType.VIEW_TODOS,
    "list todos": CommandType.VIEW_TODOS,
    "todos": CommandType.VIEW_TODOS,
    "edit todo": CommandType.EDIT_TODO,
    "edit-todo": CommandType.EDIT_TODO,
    "delete todo": CommandType.DELETE_TODO,
    "delete-todo": CommandType.DELETE_TODO,
    "complete todo": CommandType.COMPLETE_TODO,
    "complete-todo": CommandType.COMPLETE_TODO,
    "complete": CommandType.COMPLETE_TODO,
    "done": CommandType.COMPLETE_TODO,
    "add subtask": CommandType.ADD_SUBTASK,
    "add-subtask": CommandType.ADD_SUBTASK,
    "view subtasks": CommandType.VIEW_SUBTASKS,
    "view-subtasks": CommandType.VIEW_SUBTASKS,
    "subtasks": CommandType.VIEW_SUBTASKS,
    "delete subtask": CommandType.DELETE_SUBTASK,
    "delete-subtask": CommandType.DELETE_SUBTASK,
    "add note": CommandType.ADD_NOTE,
    "add-note": CommandType.ADD_NOTE,
    "note": CommandType.ADD_NOTE,
    "view notes": CommandType.VIEW_NOTES,
    "view-notes": CommandType.VIEW_NOTES,
    "list notes": CommandType.VIEW_NOTES,
    "notes": CommandType.VIEW_NOTES,
    "edit note": CommandType.EDIT_NOTE,
    "edit-note": CommandType.EDIT_NOTE,
    "delete note": CommandType.DELETE_NOTE,
    "delete-note": CommandType.DELETE_NOTE,
    "add devlog": CommandType.ADD_DEVLOG,
    "add-devlog": CommandType.ADD_DEVLOG,
    "devlog": CommandType.ADD_DEVLOG,
    "view devlog": CommandType.VIEW_DEVLOG,
    "view-devlog": CommandType.VIEW_DEVLOG,
    "list devlog": CommandType.VIEW_DEVLOG,
    "edit devlog": CommandType.EDIT_DEVLOG,
    "edit-devlog": CommandType.EDIT_DEVLOG,
    "delete devlog": CommandType.DELETE_DEVLOG,
    "delete-devlog": CommandType.DELETE_DEVLOG,
    "add component": CommandType.ADD_COMPONENT,
    "add-component": CommandType.ADD_COMPONENT,
    "view components": CommandType.VIEW_COMPONENTS,
    "view-components": CommandType.VIEW_COMPONENTS,
    "components": CommandType.VIEW_COMPONENTS,
    "delete component": CommandType.DELETE_COMPONENT,
    "delete-component": CommandType.DELETE_COMPONENT,
    "add relationship": CommandType.ADD_RELATIONSHIP,
    "add-relationship": CommandType.ADD_RELATIONSHIP,
    "view relationships": CommandType.VIEW_RELATIONSHIPS,
    "view-relationships": CommandType.VIEW_RELATIONSHIPS,
    "relationships": CommandType.VIEW_RELATIONSHIPS,
    "edit relationship": CommandType.EDIT_RELATIONSHIP,
    "edit-relationship": CommandType.EDIT_RELATIONSHIP,
    "delete relationship": CommandType.DELETE_RELATIONSHIP,
    "delete-relationship": CommandType.DELETE_RELATIONSHIP,
    "add stack": CommandType.ADD_STACK,
    "add-stack": CommandType.ADD_STACK,
    "view stack": CommandType.VIEW_STACK,
    "view-stack": CommandType.VIEW_STACK,
    "stack": CommandType.VIEW_STACK,
    "remove stack": CommandType.REMOVE_STACK,
    "remove-stack": CommandType.REMOVE_STACK,
    "search": CommandType.SEARCH,
    "find": CommandType.SEARCH,
    "view projects": CommandType.VIEW_PROJECTS,
    "view-projects": CommandType.VIEW_PROJECTS,
    "projects": CommandType.VIEW_PROJECTS,
    "swap": CommandType.SWAP_PROJECT,
    "swap-project": CommandType.SWAP_PROJECT,
    "switch": CommandType.SWAP_PROJECT,
    "switch-project": CommandType.SWAP_PROJECT,
    "project": CommandType.SWAP_PROJECT,
    "help": CommandType.HELP,
    "?": CommandType.HELP,
    "commands": CommandType.HELP,
}


def primary_alias(command_type: CommandType) -> str:
    """The canonical keyword(s) for a command type, e.g. ``add todo``."""
    for alias, alias_type in COMMAND_ALIASES.items():
        if alias_type == command_type:
            return alias
    return command_type.value.replace("_", " ")
