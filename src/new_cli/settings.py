"""Runtime settings for the new-cli tool."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from new_cli import __version__


@dataclass(frozen=True)
class RuntimeSettings:
    home_dir: Path
    template_dir: Path
    log_dir: Path
    telemetry: bool = True
    cli_version: str = __version__

    @property
    def telemetry_log(self) -> Path:
        return self.log_dir / "telemetry.jsonl"


def _default_home_dir() -> Path:
    return Path.home() / ".new-cli"


def load_settings() -> RuntimeSettings:
    base = _default_home_dir()
    return RuntimeSettings(
        home_dir=base,
        template_dir=base / "template",
        log_dir=base / "logs",
    )


SETTINGS = load_settings()
