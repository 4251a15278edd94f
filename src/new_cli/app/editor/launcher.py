"""Open created files with the host platform's default viewer or editor."""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable


class EditorLaunchError(RuntimeError):
    """Raised when the editor process cannot be started."""


class EditorPlatform(Enum):
    WINDOWS = "notepad3"
    MACOS = "open"
    LINUX = "xdg-open"

    @property
    def command(self) -> str:
        return self.value

    @classmethod
    def detect(cls, platform: str | None = None) -> "EditorPlatform":
        name = sys.platform if platform is None else platform
        if name.startswith(("win32", "cygwin")):
            return cls.WINDOWS
        if name == "darwin":
            return cls.MACOS
        return cls.LINUX


@dataclass(frozen=True)
class LaunchResult:
    command: str
    pid: int


Spawner = Callable[..., subprocess.Popen]


class EditorLauncher:
    """Start the platform editor on a path without waiting for it to exit."""

    def __init__(self, platform: EditorPlatform, spawner: Spawner = subprocess.Popen) -> None:
        self._platform = platform
        self._spawner = spawner
        self.processes: list[subprocess.Popen] = []

    @property
    def command(self) -> str:
        return self._platform.command

    def launch(self, path: Path) -> LaunchResult:
        argv = [self.command, str(path)]
        try:
            process = self._spawner(argv, **self._detach_options())
        except OSError as exc:
            raise EditorLaunchError(f"cannot open {path} with {self.command}: {exc}") from exc
        # detached child outlives this process and is never waited on
        self.processes.append(process)
        return LaunchResult(command=self.command, pid=process.pid)

    def _detach_options(self) -> dict[str, object]:
        options: dict[str, object] = {
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.DEVNULL,
            "stderr": subprocess.DEVNULL,
            "close_fds": True,
        }
        if self._platform is EditorPlatform.WINDOWS:
            options["creationflags"] = getattr(subprocess, "DETACHED_PROCESS", 0) | getattr(
                subprocess, "CREATE_NEW_PROCESS_GROUP", 0
            )
        else:
            options["start_new_session"] = True
        return options
