"""Tests for the bidirectional relationship manager."""

import pytest

from project_terminal.exceptions import ConsistencyError, ConsistencyErrorKind, ResolutionError, ValidationError
from project_terminal.models import Component, Project, RelationType
from project_terminal.relationships import RelationshipManager, parse_relation_type


@pytest.fixture
def project() -> Project:
    return Project(
        id="p1",
        name="Backend",
        owner_id="alice",
        components=[
            Component(id="a", title="Login Page"),
            Component(id="b", title="Auth Service"),
            Component(id="c", title="User Database"),
        ],
    )


def _component(project: Project, component_id: str) -> Component:
    return next(c for c in project.components if c.id == component_id)


def test_add_creates_mirrored_pair(project: Project) -> None:
    """Test that both sides share an id, type and description."""
    a, b = _component(project, "a"), _component(project, "b")
    forward = RelationshipManager(project).add(a, b, RelationType.USES, "login flow")

    assert len(a.relationships) == 1
    assert len(b.relationships) == 1
    inverse = b.relationships[0]
    assert forward.target_id == "b"
    assert inverse.target_id == "a"
    assert inverse.id == forward.id
    assert inverse.relation_type == RelationType.USES
    assert inverse.description == "login flow"
    assert RelationshipManager(project).broken_mirrors() == []


def test_add_rejects_duplicates_in_either_direction(project: Project) -> None:
    """Test duplicate edge detection."""
    manager = RelationshipManager(project)
    a, b = _component(project, "a"), _component(project, "b")
    manager.add(a, b, RelationType.USES)

    with pytest.raises(ConsistencyError) as forward:
        manager.add(a, b, RelationType.DEPENDS_ON)
    assert forward.value.kind == ConsistencyErrorKind.DUPLICATE_EDGE

    with pytest.raises(ConsistencyError) as backward:
        manager.add(b, a, RelationType.USES)
    assert backward.value.kind == ConsistencyErrorKind.DUPLICATE_EDGE
    assert len(a.relationships) == 1


def test_add_rejects_self_reference(project: Project) -> None:
    """Test that a component cannot point at itself."""
    a = _component(project, "a")
    with pytest.raises(ConsistencyError) as exc_info:
        RelationshipManager(project).add(a, a, RelationType.USES)
    assert exc_info.value.kind == ConsistencyErrorKind.SELF_REFERENCE
    assert a.relationships == []


def test_update_type_changes_both_sides(project: Project) -> None:
    """Test in-place type and description edits on both sides."""
    manager = RelationshipManager(project)
    a, b = _component(project, "a"), _component(project, "b")
    forward = manager.add(a, b, RelationType.USES)

    update = manager.update_type(a, "1", RelationType.DEPENDS_ON, "needs tokens")

    assert update.old_type == RelationType.USES
    assert not update.mirror_missing
    assert a.relationships[0].id == forward.id
    assert a.relationships[0].relation_type == RelationType.DEPENDS_ON
    assert b.relationships[0].relation_type == RelationType.DEPENDS_ON
    assert b.relationships[0].description == "needs tokens"


def test_update_from_target_side(project: Project) -> None:
    """Test editing through the inverse edge, addressed by target title."""
    manager = RelationshipManager(project)
    a, b = _component(project, "a"), _component(project, "b")
    manager.add(a, b, RelationType.USES)

    manager.update_type(b, "login", RelationType.DEPENDS_ON)
    assert a.relationships[0].relation_type == RelationType.DEPENDS_ON


def test_update_with_missing_mirror_still_applies(project: Project) -> None:
    """Test that a missing inverse is reported while the source-side edit applies."""
    manager = RelationshipManager(project)
    a, b = _component(project, "a"), _component(project, "b")
    manager.add(a, b, RelationType.USES)
    b.relationships = []

    update = manager.update_type(a, "Auth", RelationType.DEPENDS_ON)

    assert update.mirror_missing
    assert a.relationships[0].relation_type == RelationType.DEPENDS_ON
    assert len(manager.broken_mirrors()) == 1


def test_remove_deletes_both_sides(project: Project) -> None:
    """Test symmetric removal."""
    manager = RelationshipManager(project)
    a, b, c = (_component(project, x) for x in "abc")
    manager.add(a, b, RelationType.USES)
    manager.add(a, c, RelationType.DEPENDS_ON)

    removal = manager.remove(a, "Auth Service")

    assert removal.target is b
    assert not removal.mirror_missing
    assert [r.target_id for r in a.relationships] == ["c"]
    assert b.relationships == []
    assert len(c.relationships) == 1


def test_remove_from_target_side(project: Project) -> None:
    """Test that removing the mirrored edge also removes the original."""
    manager = RelationshipManager(project)
    a, b = _component(project, "a"), _component(project, "b")
    manager.add(a, b, RelationType.USES)

    removal = manager.remove(b, "1")

    assert removal.target is a
    assert not removal.mirror_missing
    assert a.relationships == []
    assert b.relationships == []


def test_remove_with_missing_mirror(project: Project) -> None:
    """Test removal when the inverse is already gone."""
    manager = RelationshipManager(project)
    a, b = _component(project, "a"), _component(project, "b")
    manager.add(a, b, RelationType.USES)
    b.relationships = []

    removal = manager.remove(a, "1")
    assert removal.mirror_missing
    assert a.relationships == []


def test_remove_unknown_relationship(project: Project) -> None:
    """Test the not-found error."""
    with pytest.raises(ResolutionError):
        RelationshipManager(project).remove(_component(project, "a"), "1")


def test_delete_component_cascades(project: Project) -> None:
    """Test that deleting a component removes every edge pointing at it."""
    manager = RelationshipManager(project)
    a, b, c = (_component(project, x) for x in "abc")
    manager.add(a, b, RelationType.USES)
    manager.add(c, b, RelationType.DEPENDS_ON)
    manager.add(a, c, RelationType.USES)

    removed = manager.delete_component(b)

    assert removed == 2
    assert [comp.id for comp in project.components] == ["a", "c"]
    assert all(r.target_id != "b" for comp in project.components for r in comp.relationships)
    assert manager.broken_mirrors() == []


def test_broken_mirrors_detects_divergence(project: Project) -> None:
    """Test that a type mismatch counts as a broken mirror."""
    manager = RelationshipManager(project)
    a, b = _component(project, "a"), _component(project, "b")
    manager.add(a, b, RelationType.USES)
    b.relationships[0].relation_type = RelationType.DEPENDS_ON

    assert len(manager.broken_mirrors()) == 2


def test_parse_relation_type() -> None:
    """Test relationship type parsing."""
    assert parse_relation_type("USES") == RelationType.USES
    assert parse_relation_type(" depends_on ") == RelationType.DEPENDS_ON
    with pytest.raises(ValidationError) as exc_info:
        parse_relation_type("owns")
    assert "uses, depends_on" in exc_info.value.message
