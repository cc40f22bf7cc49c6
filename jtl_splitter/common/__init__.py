"""
Common utilities for the JTL splitter.
"""

from .phase_router import Phase, EpochState, PhaseRouter

__all__ = ['Phase', 'EpochState', 'PhaseRouter']
