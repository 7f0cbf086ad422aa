"""Compensation module — pay bands, salary history, pay reviews, bonuses, allowances."""

from staffos.compensation.audit import redact_value
from staffos.compensation.service import CompensationService

__all__ = ["CompensationService", "redact_value"]
