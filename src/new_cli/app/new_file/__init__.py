"""File creation services."""

from __future__ import annotations

from .service import (
    FileAlreadyExistsError,
    FileCreationError,
    NewFileResult,
    NewFileService,
    ensure_template_dir,
    install_default_templates,
)

__all__ = [
    "FileAlreadyExistsError",
    "FileCreationError",
    "NewFileResult",
    "NewFileService",
    "ensure_template_dir",
    "install_default_templates",
]
