"""Bidirectional component relationships.

Every relationship is stored twice: a forward edge on the source component
and an inverse edge on the target, sharing one relationship id. The manager
is the only code that touches ``Component.relationships``; it mutates the
in-memory project and leaves the single ``save_project`` to the caller.
"""

from dataclasses import dataclass

import structlog

from project_terminal.exceptions import ConsistencyError, ConsistencyErrorKind, ResolutionError, ValidationError
from project_terminal.models import Component, Project, Relationship, RelationType, new_id
from project_terminal.resolver import resolve_entity

logger = structlog.get_logger()


def parse_relation_type(value: str) -> RelationType:
    """Parse a user-typed relationship type.

    Raises:
        ValidationError: if the value is not a known type
    """
    try:
        return RelationType(value.strip().lower())
    except ValueError:
        valid = ", ".join(t.value for t in RelationType)
        raise ValidationError(f'Invalid relationship type "{value}". Valid types: {valid}') from None


@dataclass
class RelationshipUpdate:
    relationship: Relationship
    target: Component | None
    old_type: RelationType
    mirror_missing: bool = False


@dataclass
class RelationshipRemoval:
    relationship: Relationship
    target: Component | None
    mirror_missing: bool = False


class RelationshipManager:
    """Keeps both sides of every relationship in a project consistent."""

    def __init__(self, project: Project) -> None:
        self.project = project

    def component_by_id(self, component_id: str) -> Component | None:
        for component in self.project.components:
            if component.id == component_id:
                return component
        return None

    def target_title(self, relationship: Relationship) -> str:
        target = self.component_by_id(relationship.target_id)
        return target.title if target else ""

    def find(self, component: Component, identifier: str) -> Relationship | None:
        """Resolve a relationship on ``component`` by id, position, or target title."""
        return resolve_entity(component.relationships, identifier, label=self.target_title)

    def require(self, component: Component, identifier: str) -> Relationship:
        relationship = self.find(component, identifier)
        if relationship is None:
            raise ResolutionError(
                f'Relationship not found: "{identifier}"',
                [f'/view relationships "{component.title}"'],
            )
        return relationship

    def add(
        self,
        source: Component,
        target: Component,
        relation_type: RelationType,
        description: str | None = None,
    ) -> Relationship:
        """Create a relationship pair and return the forward edge.

        Raises:
            ConsistencyError: self-reference, or the two components are already linked
        """
        if source.id == target.id:
            raise ConsistencyError(
                ConsistencyErrorKind.SELF_REFERENCE,
                f'A component cannot have a relationship with itself: "{source.title}"',
            )
        if any(r.target_id == target.id for r in source.relationships) or any(
            r.target_id == source.id for r in target.relationships
        ):
            raise ConsistencyError(
                ConsistencyErrorKind.DUPLICATE_EDGE,
                f'Relationship already exists between "{source.title}" and "{target.title}"',
                [f'/view relationships "{source.title}"'],
            )

        relationship_id = new_id()
        forward = Relationship(relationship_id, target.id, relation_type, description or "")
        inverse = Relationship(relationship_id, source.id, relation_type, description or "")
        source.relationships.append(forward)
        target.relationships.append(inverse)
        source.touch()
        target.touch()

        logger.info(
            "Relationship added",
            relationship_id=relationship_id,
            source_id=source.id,
            target_id=target.id,
            relation_type=relation_type.value,
        )
        return forward

    def update_type(
        self,
        component: Component,
        identifier: str,
        new_type: RelationType | None = None,
        new_description: str | None = None,
    ) -> RelationshipUpdate:
        """Change type and/or description in place on both sides.

        A missing mirror does not block the edit; it is logged and reported in
        the result so the caller can surface it.
        """
        relationship = self.require(component, identifier)
        old_type = relationship.relation_type

        if new_type is not None:
            relationship.relation_type = new_type
        if new_description is not None:
            relationship.description = new_description
        component.touch()

        target = self.component_by_id(relationship.target_id)
        mirror = self._mirror_of(target, relationship.id) if target else None
        if mirror is None:
            logger.warning(
                "Relationship mirror missing",
                relationship_id=relationship.id,
                component_id=component.id,
                target_id=relationship.target_id,
            )
        else:
            mirror.relation_type = relationship.relation_type
            mirror.description = relationship.description
            target.touch()  # type: ignore[union-attr]

        return RelationshipUpdate(relationship, target, old_type, mirror_missing=mirror is None)

    def remove(self, component: Component, identifier: str) -> RelationshipRemoval:
        """Delete a relationship from ``component`` and its mirror from the other side."""
        relationship = self.require(component, identifier)
        component.relationships = [r for r in component.relationships if r is not relationship]
        component.touch()

        target = self.component_by_id(relationship.target_id)
        mirror_missing = True
        if target is not None:
            remaining = [r for r in target.relationships if r.id != relationship.id]
            mirror_missing = len(remaining) == len(target.relationships)
            if not mirror_missing:
                target.relationships = remaining
                target.touch()

        if mirror_missing:
            logger.warning(
                "Relationship mirror missing",
                relationship_id=relationship.id,
                component_id=component.id,
                target_id=relationship.target_id,
            )
        logger.info("Relationship removed", relationship_id=relationship.id, component_id=component.id)
        return RelationshipRemoval(relationship, target, mirror_missing)

    def remove_all_targeting(self, deleted_component_id: str) -> int:
        """Remove every edge that points at ``deleted_component_id``.

        Returns:
            Number of edges removed
        """
        removed = 0
        for component in self.project.components:
            kept = [r for r in component.relationships if r.target_id != deleted_component_id]
            if len(kept) != len(component.relationships):
                removed += len(component.relationships) - len(kept)
                component.relationships = kept
                component.touch()
        if removed:
            logger.info("Orphaned relationships removed", component_id=deleted_component_id, count=removed)
        return removed

    def delete_component(self, component: Component) -> int:
        """Remove a component from the project along with every edge targeting it."""
        self.project.components = [c for c in self.project.components if c.id != component.id]
        return self.remove_all_targeting(component.id)

    def broken_mirrors(self) -> list[tuple[Component, Relationship]]:
        """Edges whose inverse is missing or disagrees on type or description."""
        broken = []
        for component in self.project.components:
            for relationship in component.relationships:
                target = self.component_by_id(relationship.target_id)
                mirror = self._mirror_of(target, relationship.id) if target else None
                if (
                    mirror is None
                    or mirror.target_id != component.id
                    or mirror.relation_type != relationship.relation_type
                    or mirror.description != relationship.description
                ):
                    broken.append((component, relationship))
        return broken

    @staticmethod
    def _mirror_of(component: Component, relationship_id: str) -> Relationship | None:
        for relationship in component.relationships:
            if relationship.id == relationship_id:
                return relationship
        return None
