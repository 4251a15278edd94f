"""Port definitions for template storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from new_cli.domain.template import ResolvedTemplate, TemplateRequest


class TemplateRepository(ABC):
    @abstractmethod
    def list_templates(self) -> list[Path]:
        """Return candidate template files in resolution order."""

    @abstractmethod
    def resolve(self, request: TemplateRequest) -> ResolvedTemplate:
        """Pick the template that seeds the file named by ``request``."""
