"""YAML file store implementation."""

import os
import tempfile
from pathlib import Path

import structlog
import yaml

from project_terminal.models import Project, TeamMember
from project_terminal.stores.memory import MemoryStore

logger = structlog.get_logger()


class YamlStore(MemoryStore):
    """Persists every project and membership to a single YAML document.

    Each write rewrites the whole file through a temp file and ``os.replace``,
    so a project aggregate is never half-written on disk.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the YAML store.

        Args:
            path: Path of the YAML document; created on first write
        """
        super().__init__()
        self.path = Path(path)
        self._load()
        logger.debug("YAML store initialized", path=str(self.path), projects=len(self.projects))

    def _load(self) -> None:
        if not self.path.exists():
            logger.debug("Store file does not exist, starting empty", path=str(self.path))
            return

        try:
            with open(self.path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load store", path=str(self.path), error=str(e))
            raise ValueError(f"Failed to load projects from {self.path}: {e}") from e

        for raw in data.get("projects") or []:
            project = Project.from_dict(raw)
            self.projects[project.id] = project
        self.members = [TeamMember.from_dict(raw) for raw in data.get("members") or []]

    def _commit(self) -> None:
        document = {
            "projects": [project.to_dict() for project in self.projects.values()],
            "members": [member.to_dict() for member in self.members],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".projects_tmp_")
        try:
            with os.fdopen(fd, "w") as f:
                yaml.safe_dump(document, f, default_flow_style=False, sort_keys=False)
            os.replace(tmp_path, self.path)
        except Exception as e:
            logger.error("Failed to save store", path=str(self.path), error=str(e))
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug("Store saved", path=str(self.path))
