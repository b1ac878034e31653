"""Persistence contract between the health engine and project storage."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..models.project import Milestone, Project


class ProjectRepository(ABC):
    """Abstract base class for project stores."""

    @abstractmethod
    def list_projects(self) -> List[Project]:
        """Return every project snapshot."""
        pass

    @abstractmethod
    def get_project(self, project_id: str) -> Project:
        """Return one project; raises KeyError if it does not exist."""
        pass

    @abstractmethod
    def get_milestones(self, project_id: str) -> List[Milestone]:
        """Return the project's full, current milestone list."""
        pass

    @abstractmethod
    def save_engine_fields(self, project_id: str, fields: Dict[str, Any]) -> None:
        """Persist engine-owned fields for a project."""
        pass
