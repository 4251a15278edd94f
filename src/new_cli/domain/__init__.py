"""Domain layer for template resolution."""

from __future__ import annotations

from .template import (
    DEFAULT_EXTENSION,
    DEFAULT_FILENAME,
    InvalidTemplateRequestError,
    MatchKind,
    ResolvedTemplate,
    TemplateDirectoryUnreadableError,
    TemplateRequest,
)

__all__ = [
    "DEFAULT_EXTENSION",
    "DEFAULT_FILENAME",
    "InvalidTemplateRequestError",
    "MatchKind",
    "ResolvedTemplate",
    "TemplateDirectoryUnreadableError",
    "TemplateRequest",
]
