"""Component command handlers."""

from typing import Any

import structlog

from project_terminal.handlers.base import BaseHandler, is_confirmed, parse_choice, wizard_field
from project_terminal.models import Component, ComponentCategory, CommandResponse, ParsedCommand, Project, new_id
from project_terminal.parser import flag_text
from project_terminal.relationships import RelationshipManager
from project_terminal.resolver import require_entity

logger = structlog.get_logger()

CATEGORY_OPTIONS = [c.value for c in ComponentCategory]


def find_component(project: Project, identifier: str) -> Component:
    return require_entity(project.components, identifier, "Component", suggestions=["/view components"])


class ComponentHandlers(BaseHandler):
    """Handlers for documented components."""

    def add_component(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if parsed.is_wizard_trigger:
            return self.prompt(
                "Add New Component",
                project,
                "add_component",
                [
                    wizard_field("title", "Title", required=True),
                    wizard_field("category", "Category", "select", required=True, options=CATEGORY_OPTIONS),
                    wizard_field("type", "Type", value="service"),
                    wizard_field("feature", "Feature"),
                    wizard_field("content", "Content", "textarea"),
                ],
            )

        title = (flag_text(parsed.flags, "title") or parsed.text).strip()
        category = flag_text(parsed.flags, "category")
        if not title or category is None:
            return self.error(
                "--title and --category are required",
                [
                    '/add component --title="Auth Service" --category=backend',
                    f"Valid categories: {', '.join(CATEGORY_OPTIONS)}",
                ],
            )

        if any(c.title.casefold() == title.casefold() for c in project.components):
            return self.error(f'Component already exists: "{title}"', ["/view components"])

        component = Component(
            id=new_id(),
            title=title,
            category=parse_choice(category, ComponentCategory, "category"),
            type=flag_text(parsed.flags, "type") or "",
            feature=flag_text(parsed.flags, "feature") or "",
            content=flag_text(parsed.flags, "content") or "",
        )
        project.components.append(component)
        self.commit(project)

        logger.info("Component added", project_id=project.id, component_id=component.id)
        return self.success(
            f'Added component: "{component.title}" ({component.category.value})',
            project,
            "add_component",
            {"component": {"id": component.id}},
        )

    def view_components(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not project.components:
            return self.info(f"No components in {project.name}", ["/add component"])

        by_category: dict[str, list[dict[str, Any]]] = {}
        for index, component in enumerate(project.components, 1):
            by_category.setdefault(component.category.value, []).append(
                {
                    "index": index,
                    "id": component.id,
                    "title": component.title,
                    "type": component.type,
                    "feature": component.feature,
                    "relationships": len(component.relationships),
                }
            )
        return self.data(
            f"Components in {project.name} ({len(project.components)})",
            project,
            "view_components",
            {"components": by_category},
        )

    def delete_component(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not parsed.args:
            return self.error("Usage: /delete component [#|id|title] --confirm", ["/view components"])

        component = find_component(project, parsed.text)
        if not is_confirmed(parsed):
            return self.confirm(
                f'Delete component "{component.title}" and all of its relationships?',
                project,
                "delete_component_confirm",
                f"/delete component {component.id} --confirm",
            )

        orphans = RelationshipManager(project).delete_component(component)
        self.commit(project)
        return self.success(
            f'Deleted component: "{component.title}" and removed {orphans} orphaned relationship(s)',
            project,
            "delete_component",
            {"orphaned_relationships": orphans},
        )
