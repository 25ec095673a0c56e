"""Storage interface for project aggregates and team membership."""

from abc import ABC, abstractmethod

from project_terminal.models import Project, Role, TeamMember


class Store(ABC):
    """Abstract base class for project storage backends.

    A project is one aggregate document: todos, notes, dev log, components
    (with embedded relationships) and stack are loaded and saved together.
    ``save_project`` must persist the whole aggregate atomically.
    """

    @abstractmethod
    def get_project(self, project_id: str) -> Project | None:
        """Load a project by id."""
        pass

    @abstractmethod
    def save_project(self, project: Project) -> None:
        """Persist the entire project aggregate in one write."""
        pass

    @abstractmethod
    def create_project(self, name: str, owner_id: str, description: str = "") -> Project:
        """Create a new, empty project."""
        pass

    @abstractmethod
    def delete_project(self, project_id: str) -> None:
        """Delete a project and its memberships."""
        pass

    @abstractmethod
    def find_owned_projects(self, user_id: str, name: str | None = None) -> list[Project]:
        """List projects owned by a user, optionally filtered by case-insensitive exact name."""
        pass

    @abstractmethod
    def find_memberships(self, user_id: str) -> list[TeamMember]:
        """List the team memberships of a user."""
        pass

    @abstractmethod
    def get_membership(self, project_id: str, user_id: str) -> TeamMember | None:
        """Get a user's membership in a project, if any."""
        pass

    @abstractmethod
    def list_members(self, project_id: str) -> list[TeamMember]:
        """List the team memberships of a project."""
        pass

    @abstractmethod
    def add_member(self, project_id: str, user_id: str, role: Role) -> TeamMember:
        """Add or update a team membership."""
        pass

    @abstractmethod
    def remove_member(self, project_id: str, user_id: str) -> None:
        """Remove a team membership."""
        pass

    def get_projects(self, project_ids: list[str]) -> list[Project]:
        """Load several projects, skipping ids that no longer exist."""
        projects = []
        for project_id in project_ids:
            project = self.get_project(project_id)
            if project is not None:
                projects.append(project)
        return projects
