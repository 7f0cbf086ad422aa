"""Org module — employee directory, org chart and manager assignments."""

from staffos.org.service import UserService

__all__ = ["UserService"]
