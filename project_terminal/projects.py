"""Project context resolution and membership administration."""

from dataclasses import dataclass, field
from typing import Any

import structlog

from project_terminal.cache import ProjectCache
from project_terminal.exceptions import PermissionDeniedError, ResolutionError, SelectionRequired, ValidationError
from project_terminal.models import Project, ProjectSummary, Role
from project_terminal.store import Store

logger = structlog.get_logger()

MAX_PROJECT_SUGGESTIONS = 5


@dataclass
class ProjectResolution:
    """Outcome of resolving a project: a project, a selection prompt, or an error."""

    project: Project | None = None
    needs_selection: bool = False
    candidates: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None
    suggestions: list[str] = field(default_factory=list)


class ProjectResolver:
    """Maps a user, an optional @mention and an optional current project to one project.

    The store is the source of truth. The cache only short-cuts the mention
    lookup; a cached hit is always re-fetched and re-checked before use.
    """

    def __init__(self, store: Store, cache: ProjectCache | None = None) -> None:
        self.store = store
        self.cache = cache

    def get_user_projects(self, user_id: str) -> list[Project]:
        """Owned projects followed by team projects, without duplicates."""
        owned = self.store.find_owned_projects(user_id)
        seen = {project.id for project in owned}

        team_ids = []
        for membership in self.store.find_memberships(user_id):
            if membership.project_id not in seen:
                seen.add(membership.project_id)
                team_ids.append(membership.project_id)

        team = [project for project in self.store.get_projects(team_ids) if project.owner_id != user_id]
        return owned + team

    def get_user_role(self, user_id: str, project: Project) -> Role | None:
        if project.owner_id == user_id:
            return Role.OWNER
        membership = self.store.get_membership(project.id, user_id)
        return membership.role if membership else None

    def verify_access(self, user_id: str, project: Project) -> bool:
        return self.get_user_role(user_id, project) is not None

    def can_edit(self, user_id: str, project: Project) -> tuple[bool, Role | None]:
        role = self.get_user_role(user_id, project)
        return role is not None and role != Role.VIEWER, role

    def summarize(self, user_id: str, projects: list[Project]) -> list[ProjectSummary]:
        summaries = []
        for project in projects:
            role = self.get_user_role(user_id, project) or Role.VIEWER
            summaries.append(
                ProjectSummary(
                    id=project.id,
                    name=project.name,
                    owner_id=project.owner_id,
                    role=role,
                    is_archived=project.is_archived,
                    updated_at=project.updated_at,
                )
            )
        return summaries

    def refresh_cache(self, user_id: str, projects: list[Project] | None = None) -> list[Project]:
        """Recompute a user's summaries from the store and cache them."""
        if projects is None:
            projects = self.get_user_projects(user_id)
        if self.cache is not None:
            self.cache.set(user_id, self.summarize(user_id, projects))
        return projects

    def resolve_project(
        self,
        user_id: str,
        mention: str | None = None,
        current_project_id: str | None = None,
    ) -> ProjectResolution:
        """Resolve the project a command should act on.

        Priority: @mention, then the current project (if still accessible),
        then a selection prompt over every accessible project.
        """
        if mention:
            return self._resolve_mention(user_id, mention)

        if current_project_id:
            project = self.store.get_project(current_project_id)
            if project is not None and self.verify_access(user_id, project):
                return ProjectResolution(project=project)
            logger.debug("Current project not usable", user_id=user_id, project_id=current_project_id)

        projects = self.get_user_projects(user_id)
        if not projects:
            return ProjectResolution(error="No projects found. Create a project first with: pt project create <name>")

        return ProjectResolution(
            needs_selection=True,
            candidates=[{"id": p.id, "name": p.name, "description": p.description} for p in projects],
        )

    def _resolve_mention(self, user_id: str, mention: str) -> ProjectResolution:
        wanted = mention.casefold()
        summaries = self.cache.get(user_id) if self.cache is not None else None
        stale = False

        if summaries is not None:
            cached = next((s for s in summaries if s.name.casefold() == wanted), None)
            if cached is not None:
                project = self.store.get_project(cached.id)
                if (
                    project is not None
                    and project.name.casefold() == wanted
                    and self.verify_access(user_id, project)
                ):
                    logger.debug("Resolved project from cache", user_id=user_id, project_id=project.id)
                    return ProjectResolution(project=project)
                logger.debug("Cached project summary is stale", user_id=user_id, project_id=cached.id)
                stale = True

        project = self._find_by_name(user_id, mention)
        refresh = summaries is None or stale

        if project is not None:
            if refresh:
                self.refresh_cache(user_id)
            return ProjectResolution(project=project)

        projects = self.get_user_projects(user_id)
        if refresh:
            self.refresh_cache(user_id, projects)
        names = [p.name for p in projects if wanted in p.name.casefold()][:MAX_PROJECT_SUGGESTIONS]
        return ProjectResolution(error=f'Project "@{mention}" not found', suggestions=names)

    def _find_by_name(self, user_id: str, name: str) -> Project | None:
        owned = self.store.find_owned_projects(user_id, name=name)
        if owned:
            return owned[0]

        wanted = name.casefold()
        for membership in self.store.find_memberships(user_id):
            project = self.store.get_project(membership.project_id)
            if project is not None and project.name.casefold() == wanted:
                return project
        return None

    def require_project(
        self,
        user_id: str,
        mention: str | None = None,
        current_project_id: str | None = None,
    ) -> Project:
        """Resolve a project or raise.

        Raises:
            SelectionRequired: no project could be inferred
            ResolutionError: the mention matched nothing, or the user has no projects
        """
        resolution = self.resolve_project(user_id, mention, current_project_id)
        if resolution.project is not None:
            return resolution.project
        if resolution.needs_selection:
            raise SelectionRequired("Please specify a project using @projectname or select from:", resolution.candidates)
        suggestions = [f"Did you mean: {', '.join(resolution.suggestions)}?"] if resolution.suggestions else []
        raise ResolutionError(resolution.error or "Project not found", suggestions)

    def resolve_project_with_edit_check(
        self,
        user_id: str,
        mention: str | None = None,
        current_project_id: str | None = None,
    ) -> Project:
        """Resolve a project the user is allowed to write to.

        Raises:
            PermissionDeniedError: the user is only a viewer
        """
        project = self.require_project(user_id, mention, current_project_id)
        allowed, role = self.can_edit(user_id, project)
        if not allowed:
            logger.info("Edit rejected", user_id=user_id, project_id=project.id, role=role.value if role else None)
            raise PermissionDeniedError(role.value if role else None)
        return project


class ProjectAdmin:
    """Project and membership mutations that change who can see what.

    Each mutation invalidates the cache entries of the affected users.
    """

    def __init__(self, store: Store, cache: ProjectCache | None = None) -> None:
        self.store = store
        self.cache = cache

    def _invalidate(self, *user_ids: str) -> None:
        if self.cache is None:
            return
        for user_id in user_ids:
            self.cache.invalidate(user_id)

    def create_project(self, name: str, owner_id: str, description: str = "") -> Project:
        name = name.strip()
        if not name:
            raise ValidationError("Project name cannot be empty")
        if self.store.find_owned_projects(owner_id, name=name):
            raise ValidationError(f'You already have a project named "{name}"')
        project = self.store.create_project(name, owner_id, description)
        self._invalidate(owner_id)
        return project

    def rename_project(self, project: Project, new_name: str) -> Project:
        new_name = new_name.strip()
        if not new_name:
            raise ValidationError("Project name cannot be empty")
        project.name = new_name
        self.store.save_project(project)
        if self.cache is not None:
            self.cache.invalidate_project(project.id)
        return project

    def delete_project(self, project: Project) -> None:
        member_ids = [m.user_id for m in self.store.list_members(project.id)]
        self.store.delete_project(project.id)
        self._invalidate(project.owner_id, *member_ids)
        if self.cache is not None:
            self.cache.invalidate_project(project.id)

    def add_member(self, project: Project, user_id: str, role: Role) -> None:
        if user_id == project.owner_id:
            raise ValidationError("The owner is already part of the project")
        self.store.add_member(project.id, user_id, role)
        self._invalidate(user_id)

    def remove_member(self, project: Project, user_id: str) -> None:
        self.store.remove_member(project.id, user_id)
        self._invalidate(user_id)
