"""In-memory project store backed by a YAML or JSON portfolio document."""

import copy
import dataclasses
import json
import yaml
from pathlib import Path
from typing import Any, Dict, Iterable, List

from ..models.project import ENGINE_OWNED_FIELDS, Milestone, Project
from ..utils.logging import get_logger
from .base import ProjectRepository

logger = get_logger(__name__)


class InMemoryProjectRepository(ProjectRepository):
    """Dict-backed repository; projects keep their milestones alongside."""

    def __init__(self, projects: Iterable[Project] = ()):
        self._projects: Dict[str, Project] = {}
        for project in projects:
            self.add_project(project)

    def add_project(self, project: Project) -> None:
        self._projects[project.id] = project

    def list_projects(self) -> List[Project]:
        return list(self._projects.values())

    def get_project(self, project_id: str) -> Project:
        try:
            return self._projects[project_id]
        except KeyError:
            raise KeyError(f"Project not found: {project_id}") from None

    def get_milestones(self, project_id: str) -> List[Milestone]:
        # Callers get a copy so they cannot patch the stored set in place.
        return copy.deepcopy(self.get_project(project_id).milestones)

    def save_engine_fields(self, project_id: str, fields: Dict[str, Any]) -> None:
        unknown = set(fields) - set(ENGINE_OWNED_FIELDS)
        if unknown:
            raise ValueError(f"Refusing to write fields not owned by the engine: {sorted(unknown)}")

        project = self.get_project(project_id)
        self._projects[project_id] = dataclasses.replace(project, **fields)
        logger.debug(f"Saved engine fields for project {project_id}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InMemoryProjectRepository":
        """Build a repository from a ``{"projects": [...]}`` document."""
        return cls(Project.from_dict(record) for record in data.get('projects') or [])

    @classmethod
    def from_file(cls, path: str) -> "InMemoryProjectRepository":
        """Load a portfolio document from YAML or JSON."""
        file_path = Path(path)

        if not file_path.exists():
            raise FileNotFoundError(f"Portfolio file not found: {path}")

        with open(file_path, 'r') as f:
            if file_path.suffix.lower() in ['.yaml', '.yml']:
                data = yaml.safe_load(f) or {}
            elif file_path.suffix.lower() == '.json':
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported portfolio file format: {file_path.suffix}")

        repository = cls.from_dict(data)
        logger.info(f"Loaded {len(repository.list_projects())} projects from {file_path}")
        return repository

    def to_dict(self) -> Dict[str, Any]:
        return {'projects': [project.to_dict() for project in self._projects.values()]}

    def dump(self, path: str) -> None:
        """Write the portfolio back as YAML or JSON, chosen by extension."""
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, 'w') as f:
            if file_path.suffix.lower() in ['.yaml', '.yml']:
                yaml.safe_dump(self.to_dict(), f, sort_keys=False)
            else:
                json.dump(self.to_dict(), f, indent=2, default=str)
