"""Absence module — sickness, return-to-work and absence pattern insights."""

from staffos.absence.patterns import bradford_factor, detect_patterns
from staffos.absence.service import InsightsService, LeaveService

__all__ = ["InsightsService", "LeaveService", "bradford_factor", "detect_patterns"]
