"""Recruitment module — candidate pipeline from application to accepted offer."""

from staffos.recruitment.service import PipelineService

__all__ = ["PipelineService"]
