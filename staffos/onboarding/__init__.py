"""Onboarding module — candidates, references, background checks, pre-colleague portal."""

from staffos.onboarding.service import OnboardingService

__all__ = ["OnboardingService"]
