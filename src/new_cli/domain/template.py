"""Domain model for template requests and resolution outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

DEFAULT_FILENAME = "index"
DEFAULT_EXTENSION = "html"

_FORBIDDEN_SEQUENCES = ("/", "\\", "..")


class InvalidTemplateRequestError(ValueError):
    """Raised when a filename or extension cannot name a file in the working directory."""


class TemplateDirectoryUnreadableError(RuntimeError):
    """Raised when the template directory exists but cannot be listed."""


@dataclass(frozen=True)
class TemplateRequest:
    """Name of the file to create, split into base name and extension."""

    filename: str = DEFAULT_FILENAME
    extension: str = DEFAULT_EXTENSION

    @property
    def target_name(self) -> str:
        return f"{self.filename}.{self.extension}"

    def validate(self) -> None:
        for sequence in _FORBIDDEN_SEQUENCES:
            if sequence in self.filename:
                raise InvalidTemplateRequestError(
                    f"filename '{self.filename}' contains invalid sequence '{sequence}'"
                )
            if sequence in self.extension:
                raise InvalidTemplateRequestError(
                    f"extension '{self.extension}' contains invalid sequence '{sequence}'"
                )
        if not self.filename:
            raise InvalidTemplateRequestError("filename must not be empty")
        if not self.extension:
            raise InvalidTemplateRequestError("extension must not be empty")


class MatchKind(str, Enum):
    EXACT = "exact"
    EXTENSION = "extension"
    EMPTY = "empty"


@dataclass(frozen=True)
class ResolvedTemplate:
    """Outcome of resolving a request against the template directory."""

    kind: MatchKind
    path: Path | None = None

    def __post_init__(self) -> None:
        if self.kind is MatchKind.EMPTY and self.path is not None:
            raise ValueError("empty resolution must not carry a template path")
        if self.kind is not MatchKind.EMPTY and self.path is None:
            raise ValueError(f"{self.kind.value} resolution requires a template path")

    @classmethod
    def exact(cls, path: Path) -> "ResolvedTemplate":
        return cls(kind=MatchKind.EXACT, path=path)

    @classmethod
    def extension(cls, path: Path) -> "ResolvedTemplate":
        return cls(kind=MatchKind.EXTENSION, path=path)

    @classmethod
    def empty(cls) -> "ResolvedTemplate":
        return cls(kind=MatchKind.EMPTY)

    @property
    def is_empty(self) -> bool:
        return self.kind is MatchKind.EMPTY

    def read_bytes(self) -> bytes:
        if self.path is None:
            return b""
        return self.path.read_bytes()

    def to_dict(self) -> dict[str, str | None]:
        return {"kind": self.kind.value, "path": str(self.path) if self.path else None}
