"""Project storage contract and in-memory implementation."""

from .base import ProjectRepository
from .memory import InMemoryProjectRepository

__all__ = ['ProjectRepository', 'InMemoryProjectRepository']
