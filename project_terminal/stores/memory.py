"""In-memory store implementation."""

import copy

import structlog

from project_terminal.models import Project, Role, TeamMember, new_id, utc_now
from project_terminal.store import Store

logger = structlog.get_logger()


class MemoryStore(Store):
    """Keeps projects and memberships in dictionaries.

    Reads hand out deep copies, so changes made to a loaded project are not
    visible to anyone until ``save_project`` commits them.
    """

    def __init__(self) -> None:
        self.projects: dict[str, Project] = {}
        self.members: list[TeamMember] = []

    def _commit(self) -> None:
        """Hook for subclasses that persist after every write."""

    def get_project(self, project_id: str) -> Project | None:
        project = self.projects.get(project_id)
        return copy.deepcopy(project) if project is not None else None

    def save_project(self, project: Project) -> None:
        logger.debug("Saving project", project_id=project.id, name=project.name)
        project.updated_at = utc_now()
        previous = self.projects.get(project.id)
        self.projects[project.id] = copy.deepcopy(project)
        try:
            self._commit()
        except Exception:
            if previous is None:
                self.projects.pop(project.id, None)
            else:
                self.projects[project.id] = previous
            raise

    def create_project(self, name: str, owner_id: str, description: str = "") -> Project:
        project = Project(id=new_id(), name=name, owner_id=owner_id, description=description)
        self.projects[project.id] = copy.deepcopy(project)
        self._commit()
        logger.info("Project created", project_id=project.id, name=name, owner_id=owner_id)
        return project

    def delete_project(self, project_id: str) -> None:
        self.projects.pop(project_id, None)
        self.members = [m for m in self.members if m.project_id != project_id]
        self._commit()
        logger.info("Project deleted", project_id=project_id)

    def find_owned_projects(self, user_id: str, name: str | None = None) -> list[Project]:
        wanted = name.casefold() if name is not None else None
        return [
            copy.deepcopy(project)
            for project in self.projects.values()
            if project.owner_id == user_id and (wanted is None or project.name.casefold() == wanted)
        ]

    def find_memberships(self, user_id: str) -> list[TeamMember]:
        return [copy.copy(m) for m in self.members if m.user_id == user_id]

    def get_membership(self, project_id: str, user_id: str) -> TeamMember | None:
        for member in self.members:
            if member.project_id == project_id and member.user_id == user_id:
                return copy.copy(member)
        return None

    def list_members(self, project_id: str) -> list[TeamMember]:
        return [copy.copy(m) for m in self.members if m.project_id == project_id]

    def add_member(self, project_id: str, user_id: str, role: Role) -> TeamMember:
        if project_id not in self.projects:
            raise ValueError(f"Unknown project: {project_id}")
        for member in self.members:
            if member.project_id == project_id and member.user_id == user_id:
                member.role = role
                break
        else:
            member = TeamMember(project_id=project_id, user_id=user_id, role=role)
            self.members.append(member)
        self._commit()
        logger.info("Team member saved", project_id=project_id, user_id=user_id, role=role.value)
        return copy.copy(member)

    def remove_member(self, project_id: str, user_id: str) -> None:
        self.members = [m for m in self.members if not (m.project_id == project_id and m.user_id == user_id)]
        self._commit()
        logger.info("Team member removed", project_id=project_id, user_id=user_id)
