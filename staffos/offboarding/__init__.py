"""Offboarding module — leaver workflows from notice to last day."""

from staffos.offboarding.service import OffboardingService

__all__ = ["OffboardingService"]
