"""HR cases module — PIPs, disciplinaries and grievances."""

from staffos.hr_cases.service import HRCaseService

__all__ = ["HRCaseService"]
