"""Shared response schemas."""

from connection_service.core.schemas.problem_details import ProblemDetails

__all__ = ["ProblemDetails"]
