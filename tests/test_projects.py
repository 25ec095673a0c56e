"""Tests for project resolution and administration."""

import pytest

from project_terminal.cache import ProjectCache
from project_terminal.exceptions import PermissionDeniedError, ResolutionError, SelectionRequired, ValidationError
from project_terminal.models import Project, Role
from project_terminal.projects import ProjectAdmin, ProjectResolver
from project_terminal.stores import MemoryStore


def test_get_user_projects_owned_then_team(resolver: ProjectResolver) -> None:
    """Test ordering and de-duplication of accessible projects."""
    assert [p.name for p in resolver.get_user_projects("alice")] == ["Backend", "Frontend"]
    assert [p.name for p in resolver.get_user_projects("bob")] == ["Personal", "Backend"]
    assert [p.name for p in resolver.get_user_projects("carol")] == ["Backend"]
    assert resolver.get_user_projects("nobody") == []


def test_get_user_role(resolver: ProjectResolver, backend: Project, frontend: Project) -> None:
    """Test role derivation from ownership and membership."""
    assert resolver.get_user_role("alice", backend) == Role.OWNER
    assert resolver.get_user_role("bob", backend) == Role.EDITOR
    assert resolver.get_user_role("carol", backend) == Role.VIEWER
    assert resolver.get_user_role("carol", frontend) is None
    assert resolver.can_edit("carol", backend) == (False, Role.VIEWER)
    assert resolver.can_edit("bob", backend) == (True, Role.EDITOR)


def test_resolve_mention_case_insensitive(resolver: ProjectResolver, backend: Project) -> None:
    """Test that mentions match names ignoring case."""
    resolution = resolver.resolve_project("alice", mention="backend")
    assert resolution.project is not None
    assert resolution.project.id == backend.id


def test_resolve_team_project_by_mention(resolver: ProjectResolver, backend: Project) -> None:
    """Test that a team member can mention a project they do not own."""
    resolution = resolver.resolve_project("bob", mention="Backend")
    assert resolution.project is not None
    assert resolution.project.id == backend.id


def test_resolve_mention_populates_cache(resolver: ProjectResolver, cache: ProjectCache) -> None:
    """Test that a miss caches the full recomputed summary list."""
    resolver.resolve_project("alice", mention="Frontend")

    cached = cache.get("alice")
    assert cached is not None
    assert [s.name for s in cached] == ["Backend", "Frontend"]
    assert {s.role for s in cached} == {Role.OWNER}


def test_resolve_mention_not_found_suggests(resolver: ProjectResolver) -> None:
    """Test substring suggestions for an unknown project."""
    resolution = resolver.resolve_project("alice", mention="end")

    assert resolution.project is None
    assert resolution.error == 'Project "@end" not found'
    assert resolution.suggestions == ["Backend", "Frontend"]


def test_suggestions_are_capped(store: MemoryStore, resolver: ProjectResolver) -> None:
    """Test that at most five suggestions are returned."""
    for i in range(7):
        store.create_project(f"Service {i}", "dave")
    resolution = resolver.resolve_project("dave", mention="Service")
    assert len(resolution.suggestions) == 5


def test_no_access_is_not_found(resolver: ProjectResolver) -> None:
    """Test that another user's project cannot be mentioned."""
    resolution = resolver.resolve_project("carol", mention="Frontend")
    assert resolution.project is None
    assert resolution.error is not None


def test_stale_cache_gives_same_answer_as_empty_cache(
    store: MemoryStore, cache: ProjectCache, backend: Project
) -> None:
    """Test that a stale entry never changes the result."""
    cached_resolver = ProjectResolver(store, cache)
    cached_resolver.resolve_project("bob", mention="Backend")
    assert cache.get("bob") is not None

    # bob loses access behind the cache's back
    store.remove_member(backend.id, "bob")

    stale = cached_resolver.resolve_project("bob", mention="Backend")
    fresh = ProjectResolver(store, ProjectCache()).resolve_project("bob", mention="Backend")
    assert stale.project is None
    assert fresh.project is None
    assert stale.error == fresh.error


def test_renamed_project_is_not_resolved_by_old_name(
    store: MemoryStore, cache: ProjectCache, resolver: ProjectResolver, backend: Project
) -> None:
    """Test that a cached name is re-verified against the store."""
    resolver.resolve_project("alice", mention="Backend")
    backend.name = "Core"
    store.save_project(backend)

    assert resolver.resolve_project("alice", mention="Backend").project is None
    resolution = resolver.resolve_project("alice", mention="Core")
    assert resolution.project is not None
    assert resolution.project.id == backend.id


def test_resolve_current_project(resolver: ProjectResolver, frontend: Project) -> None:
    """Test the current-project fallback."""
    resolution = resolver.resolve_project("alice", current_project_id=frontend.id)
    assert resolution.project is not None
    assert resolution.project.id == frontend.id


def test_mention_beats_current_project(resolver: ProjectResolver, backend: Project, frontend: Project) -> None:
    """Test priority of an explicit mention."""
    resolution = resolver.resolve_project("alice", mention="Backend", current_project_id=frontend.id)
    assert resolution.project.id == backend.id  # type: ignore[union-attr]


def test_inaccessible_current_project_needs_selection(resolver: ProjectResolver, frontend: Project) -> None:
    """Test that a current project the user cannot access is ignored."""
    resolution = resolver.resolve_project("carol", current_project_id=frontend.id)
    assert resolution.project is None
    assert resolution.needs_selection
    assert [c["name"] for c in resolution.candidates] == ["Backend"]


def test_no_projects_at_all(resolver: ProjectResolver) -> None:
    """Test the error for a user with no projects."""
    resolution = resolver.resolve_project("nobody")
    assert not resolution.needs_selection
    assert resolution.error is not None
    assert "No projects found" in resolution.error


def test_require_project_raises(resolver: ProjectResolver) -> None:
    """Test the raising wrapper."""
    with pytest.raises(SelectionRequired) as selection:
        resolver.require_project("alice")
    assert len(selection.value.candidates) == 2

    with pytest.raises(ResolutionError) as missing:
        resolver.require_project("alice", mention="front")
    assert missing.value.suggestions == ["Did you mean: Frontend?"]


def test_edit_check_rejects_viewer(resolver: ProjectResolver) -> None:
    """Test that viewers cannot write."""
    with pytest.raises(PermissionDeniedError) as exc_info:
        resolver.resolve_project_with_edit_check("carol", mention="Backend")
    assert exc_info.value.message == "You are a viewer and do not have edit permissions for this project"


def test_edit_check_allows_editor(resolver: ProjectResolver, backend: Project) -> None:
    """Test that editors can write."""
    assert resolver.resolve_project_with_edit_check("bob", mention="Backend").id == backend.id


def test_admin_create_invalidates_cache(store: MemoryStore, cache: ProjectCache, resolver: ProjectResolver) -> None:
    """Test that creating a project is visible to the next mention lookup."""
    resolver.resolve_project("alice", mention="Backend")
    ProjectAdmin(store, cache).create_project("Mobile", "alice")

    assert cache.get("alice") is None
    assert resolver.resolve_project("alice", mention="Mobile").project is not None


def test_admin_create_validates_name(store: MemoryStore, cache: ProjectCache) -> None:
    """Test empty and duplicate project names."""
    admin = ProjectAdmin(store, cache)
    with pytest.raises(ValidationError):
        admin.create_project("  ", "alice")
    with pytest.raises(ValidationError):
        admin.create_project("backend", "alice")


def test_admin_membership_changes_invalidate(
    store: MemoryStore, cache: ProjectCache, resolver: ProjectResolver, frontend: Project
) -> None:
    """Test that adding and removing members refreshes what they can resolve."""
    admin = ProjectAdmin(store, cache)
    assert resolver.resolve_project("carol", mention="Frontend").project is None

    admin.add_member(frontend, "carol", Role.EDITOR)
    assert resolver.resolve_project("carol", mention="Frontend").project is not None

    admin.remove_member(frontend, "carol")
    assert cache.get("carol") is None
    assert resolver.resolve_project("carol", mention="Frontend").project is None


def test_admin_rejects_owner_as_member(store: MemoryStore, cache: ProjectCache, frontend: Project) -> None:
    """Test that the owner cannot be added as a member."""
    with pytest.raises(ValidationError):
        ProjectAdmin(store, cache).add_member(frontend, "alice", Role.VIEWER)


def test_admin_delete_project(
    store: MemoryStore, cache: ProjectCache, resolver: ProjectResolver, backend: Project
) -> None:
    """Test that deleting a project drops it and its memberships everywhere."""
    resolver.resolve_project("bob", mention="Backend")
    ProjectAdmin(store, cache).delete_project(backend)

    assert store.get_project(backend.id) is None
    assert store.list_members(backend.id) == []
    assert cache.get("bob") is None
    assert resolver.resolve_project("bob", mention="Backend").project is None


def test_admin_rename_project(store: MemoryStore, cache: ProjectCache, resolver: ProjectResolver, backend: Project) -> None:
    """Test that renaming invalidates every user who had the project cached."""
    resolver.resolve_project("alice", mention="Backend")
    resolver.resolve_project("carol", mention="Backend")

    ProjectAdmin(store, cache).rename_project(backend, "Core API")

    assert cache.get("alice") is None
    assert cache.get("carol") is None
    assert store.get_project(backend.id).name == "Core API"  # type: ignore[union-attr]
