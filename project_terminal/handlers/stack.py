"""Stack command handlers."""

from project_terminal.handlers.base import BaseHandler, wizard_field
from project_terminal.models import CommandResponse, ParsedCommand, Project, StackItem, new_id
from project_terminal.parser import flag_text
from project_terminal.resolver import require_entity

STACK_CATEGORIES = ["framework", "runtime", "database", "styling", "deployment", "testing", "tooling", "library"]


class StackHandlers(BaseHandler):
    def add_stack(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if parsed.is_wizard_trigger:
            return self.prompt(
                "Add to Stack",
                project,
                "add_stack",
                [
                    wizard_field("name", "Name", required=True),
                    wizard_field("category", "Category", "select", options=STACK_CATEGORIES, value="tooling"),
                    wizard_field("version", "Version"),
                    wizard_field("description", "Description"),
                ],
            )

        name = (flag_text(parsed.flags, "name") or parsed.text).strip()
        if not name:
            return self.error("Stack item name is required", ["/add stack --name=React --category=framework"])
        if any(item.name.casefold() == name.casefold() for item in project.stack):
            return self.error(f'"{name}" is already in the stack', ["/view stack"])

        category = (flag_text(parsed.flags, "category") or "tooling").strip().lower()
        if category not in STACK_CATEGORIES:
            return self.error(
                f'Invalid stack category "{category}". Valid categories: {", ".join(STACK_CATEGORIES)}'
            )

        item = StackItem(
            id=new_id(),
            name=name,
            category=category,
            version=flag_text(parsed.flags, "version") or "",
            description=flag_text(parsed.flags, "description", "desc") or "",
        )
        project.stack.append(item)
        self.commit(project)

        version = f" {item.version}" if item.version else ""
        return self.success(f"Added {item.name}{version} to the stack ({item.category})", project, "add_stack")

    def view_stack(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not project.stack:
            return self.info(f"No stack items in {project.name}", ["/add stack"])

        grouped: dict[str, list[dict[str, str | int]]] = {}
        for index, item in enumerate(project.stack, 1):
            grouped.setdefault(item.category, []).append(
                {"index": index, "id": item.id, "name": item.name, "version": item.version}
            )
        return self.data(f"Stack for {project.name} ({len(project.stack)})", project, "view_stack", {"stack": grouped})

    def remove_stack(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not parsed.args and not flag_text(parsed.flags, "name"):
            return self.error("Usage: /remove stack [#|id|name]", ["/view stack"])

        identifier = flag_text(parsed.flags, "name") or parsed.text
        item = require_entity(project.stack, identifier, "Stack item", suggestions=["/view stack"])
        project.stack = [s for s in project.stack if s.id != item.id]
        self.commit(project)
        return self.success(f"Removed {item.name} from the stack", project, "remove_stack")
