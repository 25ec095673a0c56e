"""Relationship command handlers.

All edge bookkeeping goes through ``RelationshipManager``; these handlers only
interpret arguments and shape responses.
"""

from project_terminal.handlers.base import BaseHandler, is_confirmed, wizard_field
from project_terminal.handlers.components import find_component
from project_terminal.models import CommandResponse, ParsedCommand, Project, RelationType
from project_terminal.parser import flag_text
from project_terminal.relationships import RelationshipManager, parse_relation_type

TYPE_OPTIONS = [t.value for t in RelationType]
MIRROR_WARNING = "The matching relationship on the other component was missing; only this side was changed."


class RelationshipHandlers(BaseHandler):
    """Handlers for component relationships."""

    def add_relationship(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if parsed.is_wizard_trigger:
            if len(project.components) < 2:
                return self.error("At least two components are needed to add a relationship", ["/add component"])
            options = [{"value": c.id, "label": c.title} for c in project.components]
            return self.prompt(
                "Add Relationship",
                project,
                "add_relationship",
                [
                    wizard_field("source", "Source Component", "select", required=True, options=options),
                    wizard_field("target", "Target Component", "select", required=True, options=options),
                    wizard_field("type", "Relationship Type", "select", required=True, options=TYPE_OPTIONS),
                    wizard_field("description", "Description"),
                ],
            )

        source_identifier = flag_text(parsed.flags, "source")
        target_identifier = flag_text(parsed.flags, "target")
        type_value = flag_text(parsed.flags, "type")
        if not source_identifier or not target_identifier or not type_value:
            return self.error(
                "--source, --target and --type are required",
                [
                    '/add relationship --source="Login" --target="Auth Service" --type=uses',
                    f"Valid types: {', '.join(TYPE_OPTIONS)}",
                ],
            )

        relation_type = parse_relation_type(type_value)
        source = find_component(project, source_identifier)
        target = find_component(project, target_identifier)
        relationship = RelationshipManager(project).add(
            source, target, relation_type, flag_text(parsed.flags, "description", "desc")
        )
        self.commit(project)

        return self.success(
            f'Added relationship: "{source.title}" {relation_type.value} "{target.title}"',
            project,
            "add_relationship",
            {"relationship": {"id": relationship.id, "source_id": source.id, "target_id": target.id}},
        )

    def view_relationships(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        manager = RelationshipManager(project)
        broken = {(c.id, r.id) for c, r in manager.broken_mirrors()}

        if parsed.args:
            components = [find_component(project, parsed.text)]
        else:
            components = [c for c in project.components if c.relationships]
        if not any(c.relationships for c in components):
            subject = f'"{components[0].title}"' if parsed.args else project.name
            return self.info(f"No relationships in {subject}", ["/add relationship"])

        listing = []
        for component in components:
            listing.append(
                {
                    "component": component.title,
                    "component_id": component.id,
                    "relationships": [
                        {
                            "index": i,
                            "id": r.id,
                            "target": manager.target_title(r) or r.target_id,
                            "type": r.relation_type.value,
                            "description": r.description,
                            "mirrored": (component.id, r.id) not in broken,
                        }
                        for i, r in enumerate(component.relationships, 1)
                    ],
                }
            )

        total = sum(len(entry["relationships"]) for entry in listing)
        response = self.data(
            f"Relationships ({total})",
            project,
            "view_relationships",
            {"components": listing},
        )
        if broken:
            response.suggestions.append(f"{len(broken)} relationship(s) have no matching entry on the other side")
        return response

    def edit_relationship(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not parsed.args:
            candidates = [c for c in project.components if c.relationships]
            if not candidates:
                return self.info("No relationships to edit", ["/add relationship"])
            return self.prompt(
                "Select Component",
                project,
                "edit_relationship_selector",
                [
                    wizard_field(
                        "component",
                        "Component",
                        "select",
                        required=True,
                        options=[{"value": c.id, "label": c.title} for c in candidates],
                    )
                ],
            )

        component = find_component(project, parsed.args[0])
        manager = RelationshipManager(project)
        if len(parsed.args) < 2:
            return self.error(
                f'Specify which relationship of "{component.title}" to edit',
                [f'/view relationships "{component.title}"', "/help edit relationship"],
            )

        type_value = parsed.args[2] if len(parsed.args) > 2 else flag_text(parsed.flags, "type")
        description = flag_text(parsed.flags, "description", "desc")
        if type_value is None and description is None:
            relationship = manager.require(component, parsed.args[1])
            return self.prompt(
                f'Edit relationship to "{manager.target_title(relationship)}"',
                project,
                "edit_relationship",
                [
                    wizard_field(
                        "type",
                        "Relationship Type",
                        "select",
                        required=True,
                        options=TYPE_OPTIONS,
                        value=relationship.relation_type.value,
                    ),
                    wizard_field("description", "Description", value=relationship.description),
                ],
                component_id=component.id,
                relationship_id=relationship.id,
            )

        new_type = parse_relation_type(type_value) if type_value is not None else None
        update = manager.update_type(component, parsed.args[1], new_type, description)
        self.commit(project)

        target = update.target.title if update.target else update.relationship.target_id
        message = (
            f'Updated relationship: "{component.title}" -> "{target}" '
            f"({update.old_type.value} -> {update.relationship.relation_type.value})"
        )
        if update.mirror_missing:
            return self.warning(f"{message}. {MIRROR_WARNING}", project, "edit_relationship")
        return self.success(message, project, "edit_relationship")

    def delete_relationship(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if len(parsed.args) < 2:
            return self.error(
                "Usage: /delete relationship [component] [relationship #|id|target] --confirm",
                ["/view relationships"],
            )

        component = find_component(project, parsed.args[0])
        manager = RelationshipManager(project)
        if not is_confirmed(parsed):
            relationship = manager.require(component, parsed.args[1])
            target = manager.target_title(relationship) or relationship.target_id
            return self.confirm(
                f'Delete relationship "{component.title}" {relationship.relation_type.value} "{target}"?',
                project,
                "delete_relationship_confirm",
                f"/delete relationship {component.id} {relationship.id} --confirm",
            )

        removal = manager.remove(component, parsed.args[1])
        self.commit(project)

        target = removal.target.title if removal.target else removal.relationship.target_id
        message = f'Deleted relationship: "{component.title}" -> "{target}"'
        if removal.mirror_missing:
            return self.warning(f"{message}. {MIRROR_WARNING}", project, "delete_relationship")
        return self.success(message, project, "delete_relationship")
