"""Reconciliation, analysis and sample-data modules."""

from .analyzer import HealthAnalysis, HealthAnalyzer
from .generator import PortfolioGenerator
from .reconciliation import Reconciler, ReconciliationReport

__all__ = [
    'HealthAnalysis',
    'HealthAnalyzer',
    'PortfolioGenerator',
    'Reconciler',
    'ReconciliationReport',
]
