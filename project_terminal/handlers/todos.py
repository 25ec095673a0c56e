"""Todo and subtask command handlers."""

from typing import Any

import structlog

from project_terminal.exceptions import ValidationError
from project_terminal.handlers.base import BaseHandler, is_confirmed, parse_choice, parse_due_date, wizard_field
from project_terminal.models import (
    CommandResponse,
    ParsedCommand,
    Priority,
    Project,
    Todo,
    TodoStatus,
    new_id,
    utc_now,
)
from project_terminal.parser import flag_text
from project_terminal.resolver import require_entity

logger = structlog.get_logger()

PRIORITY_OPTIONS = [p.value for p in Priority]
STATUS_OPTIONS = [s.value for s in TodoStatus]


def top_level_todos(project: Project) -> list[Todo]:
    """Todos that are not subtasks, in creation order. Positions refer to this list."""
    return [t for t in project.todos if not t.is_subtask]


def subtasks_of(project: Project, parent: Todo) -> list[Todo]:
    return [t for t in project.todos if t.parent_todo_id == parent.id]


def todo_summary(todo: Todo, index: int) -> dict[str, Any]:
    return {
        "index": index,
        "id": todo.id,
        "title": todo.title,
        "priority": todo.priority.value,
        "status": todo.status.value,
        "completed": todo.completed,
        "due_date": todo.due_date,
    }


class TodoHandlers(BaseHandler):
    """Handlers for todos and their subtasks."""

    def _find_todo(self, project: Project, identifier: str) -> Todo:
        return require_entity(top_level_todos(project), identifier, "Todo", suggestions=["/view todos"])

    def _apply_fields(self, todo: Todo, parsed: ParsedCommand) -> list[str]:
        changed = []
        title = flag_text(parsed.flags, "title")
        if title is not None:
            if not title.strip():
                raise ValidationError("Todo title cannot be empty")
            todo.title = title.strip()
            changed.append("title")
        description = flag_text(parsed.flags, "description", "desc")
        if description is not None:
            todo.description = description
            changed.append("description")
        priority = flag_text(parsed.flags, "priority")
        if priority is not None:
            todo.priority = parse_choice(priority, Priority, "priority")
            changed.append("priority")
        status = flag_text(parsed.flags, "status")
        if status is not None:
            todo.status = parse_choice(status, TodoStatus, "status")
            todo.completed = todo.status == TodoStatus.COMPLETED
            changed.append("status")
        due = flag_text(parsed.flags, "due", "due-date")
        if due is not None:
            todo.due_date = parse_due_date(due)
            changed.append("due_date")
        return changed

    def add_todo(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if parsed.is_wizard_trigger:
            return self.prompt(
                "Add New Todo",
                project,
                "add_todo",
                [
                    wizard_field("title", "Title", required=True),
                    wizard_field("description", "Description", "textarea"),
                    wizard_field("priority", "Priority", "select", options=PRIORITY_OPTIONS, value="medium"),
                    wizard_field("due", "Due Date", "date"),
                ],
            )

        title = (flag_text(parsed.flags, "title") or parsed.text).strip()
        if not title:
            return self.error("Todo title is required", ['/add todo --title="Fix login bug"', "/help add todo"])

        todo = Todo(id=new_id(), title=title)
        self._apply_fields(todo, parsed)
        todo.title = title
        project.todos.append(todo)
        self.commit(project)

        logger.info("Todo added", project_id=project.id, todo_id=todo.id)
        return self.success(
            f'Added todo: "{todo.title}"',
            project,
            "add_todo",
            {"todo": todo_summary(todo, len(top_level_todos(project)))},
        )

    def view_todos(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        parents = top_level_todos(project)
        if not parents:
            return self.info(f"No todos in {project.name}", ["/add todo"])

        todos = []
        for index, todo in enumerate(parents, 1):
            entry = todo_summary(todo, index)
            entry["subtasks"] = [todo_summary(sub, i) for i, sub in enumerate(subtasks_of(project, todo), 1)]
            todos.append(entry)

        completed = sum(1 for t in parents if t.completed)
        subtask_count = len(project.todos) - len(parents)
        extra = f", {subtask_count} subtasks" if subtask_count else ""
        return self.data(
            f"Todos in {project.name} ({len(parents) - completed} pending, {completed} completed{extra})",
            project,
            "view_todos",
            {"todos": todos},
        )

    def edit_todo(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not parsed.args:
            parents = top_level_todos(project)
            if not parents:
                return self.info("No todos to edit", ["/add todo"])
            return self.prompt(
                "Select Todo to Edit",
                project,
                "edit_todo_selector",
                [
                    wizard_field(
                        "todo",
                        "Todo",
                        "select",
                        required=True,
                        options=[{"value": t.id, "label": t.title} for t in parents],
                    )
                ],
            )

        todo = self._find_todo(project, parsed.args[0])
        if not parsed.flags:
            return self.prompt(
                f'Edit Todo: "{todo.title}"',
                project,
                "edit_todo",
                [
                    wizard_field("title", "Title", required=True, value=todo.title),
                    wizard_field("description", "Description", "textarea", value=todo.description),
                    wizard_field("priority", "Priority", "select", options=PRIORITY_OPTIONS, value=todo.priority.value),
                    wizard_field("status", "Status", "select", options=STATUS_OPTIONS, value=todo.status.value),
                ],
                todo_id=todo.id,
            )

        changed = self._apply_fields(todo, parsed)
        if not changed:
            return self.error(
                "Nothing to update. Use --title, --description, --priority, --status or --due",
                ["/help edit todo"],
            )
        todo.updated_at = utc_now()
        self.commit(project)
        return self.success(f'Updated todo: "{todo.title}" ({", ".join(changed)})', project, "edit_todo")

    def delete_todo(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not parsed.args:
            return self.error("Usage: /delete todo [#|id|title] --confirm", ["/view todos"])

        todo = self._find_todo(project, parsed.args[0])
        subtasks = subtasks_of(project, todo)
        if not is_confirmed(parsed):
            extra = f" and its {len(subtasks)} subtask(s)" if subtasks else ""
            return self.confirm(
                f'Delete todo "{todo.title}"{extra}?',
                project,
                "delete_todo_confirm",
                f"/delete todo {todo.id} --confirm",
            )

        removed = {todo.id} | {s.id for s in subtasks}
        project.todos = [t for t in project.todos if t.id not in removed]
        self.commit(project)
        return self.success(f'Deleted todo: "{todo.title}"', project, "delete_todo")

    def complete_todo(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not parsed.args:
            return self.error("Usage: /complete todo [#|id|title]", ["/view todos"])

        todo = self._find_todo(project, parsed.text)
        if todo.completed:
            return self.info(f'Todo already completed: "{todo.title}"')
        todo.completed = True
        todo.status = TodoStatus.COMPLETED
        todo.updated_at = utc_now()
        self.commit(project)
        return self.success(f'Completed todo: "{todo.title}"', project, "complete_todo")

    def add_subtask(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        parents = top_level_todos(project)
        if parsed.args and not parsed.flags:
            return self.error(
                "Please use flag-based syntax or no arguments for the wizard",
                ['/add subtask --parent="parent todo" --title="subtask title"', "/help add subtask"],
            )
        if parsed.is_wizard_trigger:
            if not parents:
                return self.error("No todos to add a subtask to", ["/add todo"])
            return self.prompt(
                "Add New Subtask",
                project,
                "add_subtask",
                [
                    wizard_field(
                        "parent",
                        "Parent Todo",
                        "select",
                        required=True,
                        options=[{"value": t.id, "label": t.title} for t in parents],
                    ),
                    wizard_field("title", "Subtask Title", required=True),
                    wizard_field("priority", "Priority", "select", options=PRIORITY_OPTIONS, value="medium"),
                ],
            )

        parent_identifier = flag_text(parsed.flags, "parent")
        title = (flag_text(parsed.flags, "title") or "").strip()
        if not parent_identifier or not title:
            return self.error("--parent and --title flags are required", ["/help add subtask"])

        parent = self._find_todo(project, parent_identifier)
        subtask = Todo(id=new_id(), title=title, parent_todo_id=parent.id)
        self._apply_fields(subtask, parsed)
        subtask.title = title
        project.todos.append(subtask)
        self.commit(project)
        return self.success(f'Added subtask "{subtask.title}" to "{parent.title}"', project, "add_subtask")

    def view_subtasks(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not parsed.args:
            return self.error("Usage: /view subtasks [parent #|id|title]", ["/view todos"])

        parent = self._find_todo(project, parsed.text)
        subtasks = subtasks_of(project, parent)
        if not subtasks:
            return self.info(f'No subtasks for "{parent.title}"', [f'/add subtask --parent="{parent.title}" --title=...'])
        return self.data(
            f'Subtasks of "{parent.title}" ({len(subtasks)})',
            project,
            "view_subtasks",
            {"parent": todo_summary(parent, 0), "subtasks": [todo_summary(s, i) for i, s in enumerate(subtasks, 1)]},
        )

    def delete_subtask(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if len(parsed.args) < 2:
            return self.error("Usage: /delete subtask [parent] [subtask] --confirm", ["/view todos"])

        parent = self._find_todo(project, parsed.args[0])
        subtask = require_entity(
            subtasks_of(project, parent),
            parsed.args[1],
            "Subtask",
            suggestions=[f'/view subtasks "{parent.title}"'],
        )
        if not is_confirmed(parsed):
            return self.confirm(
                f'Delete subtask "{subtask.title}" from "{parent.title}"?',
                project,
                "delete_subtask_confirm",
                f"/delete subtask {parent.id} {subtask.id} --confirm",
            )

        project.todos = [t for t in project.todos if t.id != subtask.id]
        self.commit(project)
        return self.success(f'Deleted subtask: "{subtask.title}"', project, "delete_subtask")
