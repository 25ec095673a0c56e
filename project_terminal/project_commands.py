"""Project and membership commands for project terminal CLI."""

from typing import Literal

from cyclopts import App

from project_terminal.exceptions import PermissionDeniedError
from project_terminal.models import Project, Role
from project_terminal.projects import ProjectAdmin, ProjectResolver

project_app = App(name="project", help="Manage projects and team members")


def _admin() -> tuple[ProjectAdmin, ProjectResolver, str]:
    from project_terminal.cli import get_cache, get_store, get_user_id

    store = get_store()
    cache = get_cache()
    return ProjectAdmin(store, cache), ProjectResolver(store, cache), get_user_id()


def _owned(resolver: ProjectResolver, user_id: str, name: str) -> Project:
    project = resolver.require_project(user_id, mention=name)
    if project.owner_id != user_id:
        role = resolver.get_user_role(user_id, project)
        raise PermissionDeniedError(
            role.value if role else None, f"Only the owner can manage project {project.name}"
        )
    return project


@project_app.command
def create(name: str, description: str = "") -> None:
    """Create a new project owned by the configured user."""
    admin, _, user_id = _admin()
    project = admin.create_project(name, user_id, description)
    print(f"Created project {project.name} ({project.id})")


@project_app.command(name="list")
def list_projects() -> None:
    """List every project the configured user can access."""
    _, resolver, user_id = _admin()
    summaries = resolver.summarize(user_id, resolver.get_user_projects(user_id))

    if not summaries:
        print("No projects found")
        return

    print(f"Found {len(summaries)} project(s):\n")
    for summary in summaries:
        archived = " (archived)" if summary.is_archived else ""
        print(f"{summary.name} [{summary.role.value}]{archived}")


@project_app.command
def rename(name: str, new_name: str) -> None:
    """Rename a project you own."""
    admin, resolver, user_id = _admin()
    project = _owned(resolver, user_id, name)
    admin.rename_project(project, new_name)
    print(f"Renamed project {name} to {project.name}")


@project_app.command
def delete(name: str) -> None:
    """Delete a project you own, along with its memberships."""
    admin, resolver, user_id = _admin()
    project = _owned(resolver, user_id, name)
    admin.delete_project(project)
    print(f"Deleted project {project.name}")


@project_app.command(name="member-add")
def member_add(name: str, user_id: str, role: Literal["editor", "viewer"] = "viewer") -> None:
    """Add a team member to a project you own, or change their role."""
    admin, resolver, owner_id = _admin()
    project = _owned(resolver, owner_id, name)
    admin.add_member(project, user_id, Role(role))
    print(f"Added {user_id} to {project.name} as {role}")


@project_app.command(name="member-remove")
def member_remove(name: str, user_id: str) -> None:
    """Remove a team member from a project you own."""
    admin, resolver, owner_id = _admin()
    project = _owned(resolver, owner_id, name)
    admin.remove_member(project, user_id)
    print(f"Removed {user_id} from {project.name}")
