"""Project portfolio health and duration scoring engine."""

__version__ = "0.1.0"
