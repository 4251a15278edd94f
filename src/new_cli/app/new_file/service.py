"""Create new files seeded from the resolved template."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources as pkg_resources
from pathlib import Path

from new_cli.adapters.fs_template_repo import FSTemplateRepository
from new_cli.domain.template import ResolvedTemplate, TemplateRequest
from new_cli.ports.template_repo import TemplateRepository
from new_cli.settings import RuntimeSettings

BUNDLED_TEMPLATES_PACKAGE = "new_cli.resources"
BUNDLED_TEMPLATES_DIR = "templates"


class FileCreationError(RuntimeError):
    """Raised when the target file cannot be written."""


class FileAlreadyExistsError(FileCreationError):
    """Raised when the target exists and overwriting was not requested."""


@dataclass(frozen=True)
class NewFileResult:
    request: TemplateRequest
    resolved: ResolvedTemplate
    target: Path
    size_bytes: int
    overwritten: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "file": str(self.target),
            "size_bytes": self.size_bytes,
            "overwritten": self.overwritten,
            "template": self.resolved.to_dict(),
        }


def ensure_template_dir(settings: RuntimeSettings) -> Path:
    """Create the (empty) template directory on first use."""

    template_dir = settings.template_dir
    if not template_dir.exists():
        try:
            template_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileCreationError(f"cannot create template directory {template_dir}: {exc}") from exc
    return template_dir


def install_default_templates(settings: RuntimeSettings, *, force: bool = False) -> list[Path]:
    """Copy the templates bundled with the package into the template directory.

    Existing templates are left alone unless ``force`` is set. Returns the
    paths that were written.
    """

    template_dir = ensure_template_dir(settings)
    bundled = pkg_resources.files(BUNDLED_TEMPLATES_PACKAGE) / BUNDLED_TEMPLATES_DIR
    written: list[Path] = []
    for item in sorted(bundled.iterdir(), key=lambda entry: entry.name):
        if not item.is_file():
            continue
        destination = template_dir / item.name
        if destination.exists() and not force:
            continue
        try:
            destination.write_bytes(item.read_bytes())
        except OSError as exc:
            raise FileCreationError(f"cannot install template {destination}: {exc}") from exc
        written.append(destination)
    return written


class NewFileService:
    """Resolve a template for the request and write the new file into ``cwd``."""

    def __init__(
        self,
        settings: RuntimeSettings,
        cwd: Path,
        repository: TemplateRepository | None = None,
    ) -> None:
        self._settings = settings
        self._cwd = cwd
        self._repository = repository or FSTemplateRepository(settings.template_dir)

    def resolve(self, request: TemplateRequest) -> ResolvedTemplate:
        request.validate()
        return self._repository.resolve(request)

    def create(self, request: TemplateRequest, *, force: bool = False) -> NewFileResult:
        resolved = self.resolve(request)
        target = self._target_path(request)
        try:
            content = resolved.read_bytes()
        except OSError as exc:
            raise FileCreationError(f"cannot read template {resolved.path}: {exc}") from exc

        # a dangling symlink reports exists() == False but write_bytes would follow it
        overwritten = target.exists() or target.is_symlink()
        if overwritten and not force:
            raise FileAlreadyExistsError(f"{target} already exists (use --force to overwrite)")
        if target.is_symlink():
            raise FileCreationError(f"{target} is a symbolic link; refusing to write through it")
        if overwritten and not target.is_file():
            raise FileCreationError(f"{target} exists and is not a regular file")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            raise FileCreationError(f"cannot create {target}: {exc}") from exc
        return NewFileResult(
            request=request,
            resolved=resolved,
            target=target,
            size_bytes=len(content),
            overwritten=overwritten,
        )

    def _target_path(self, request: TemplateRequest) -> Path:
        try:
            cwd = self._cwd.resolve()
        except OSError as exc:
            raise FileCreationError(f"cannot resolve working directory {self._cwd}: {exc}") from exc
        target = cwd / request.target_name
        if target.parent != cwd:
            raise FileCreationError(f"target {target} is outside the working directory {cwd}")
        return target
