"""Filesystem-backed template repository."""

from __future__ import annotations

from pathlib import Path

from new_cli.domain.template import (
    ResolvedTemplate,
    TemplateDirectoryUnreadableError,
    TemplateRequest,
)
from new_cli.ports.template_repo import TemplateRepository


class FSTemplateRepository(TemplateRepository):
    """Resolve templates from a flat directory of sample files.

    The repository never writes to ``base_dir``; a missing directory simply
    holds no templates.
    """

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def list_templates(self) -> list[Path]:
        if not self._base_dir.exists():
            return []
        try:
            entries = sorted(self._base_dir.iterdir(), key=lambda p: p.name)
            root = self._base_dir.resolve()
        except OSError as exc:
            raise TemplateDirectoryUnreadableError(
                f"cannot read template directory {self._base_dir}: {exc}"
            ) from exc
        return [entry for entry in entries if self._is_template(entry, root)]

    def resolve(self, request: TemplateRequest) -> ResolvedTemplate:
        templates = self.list_templates()
        for candidate in templates:
            if candidate.name == request.target_name:
                return ResolvedTemplate.exact(candidate)
        for candidate in templates:
            if _extension_of(candidate) == request.extension:
                return ResolvedTemplate.extension(candidate)
        return ResolvedTemplate.empty()

    @staticmethod
    def _is_template(entry: Path, root: Path) -> bool:
        try:
            if not entry.is_file():
                return False
            # symlinks may only point at files inside the template directory
            return entry.resolve().is_relative_to(root)
        except OSError:
            return False


def _extension_of(path: Path) -> str | None:
    name = path.name
    if "." not in name.lstrip("."):
        return None
    return name.rsplit(".", 1)[1]


def resolve_template(request: TemplateRequest, template_dir: Path) -> ResolvedTemplate:
    """Resolve ``request`` against ``template_dir``: exact name, then extension, then empty."""

    return FSTemplateRepository(template_dir).resolve(request)
