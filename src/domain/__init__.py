"""Domain layer: errors, constants and schemas."""

from .errors import ErrorCodes, ProjectError, TemplateError
from .schemas import (
    ContentNode,
    InstantiationResult,
    ProjectDescriptor,
    TemplateEntry,
    TemplateRef,
    ValidationReport,
)

__all__ = [
    "ErrorCodes",
    "ProjectError",
    "TemplateError",
    "ContentNode",
    "InstantiationResult",
    "ProjectDescriptor",
    "TemplateEntry",
    "TemplateRef",
    "ValidationReport",
]
