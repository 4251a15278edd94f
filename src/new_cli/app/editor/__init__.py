"""Editor launching for freshly created files."""

from __future__ import annotations

from .launcher import EditorLaunchError, EditorLauncher, EditorPlatform, LaunchResult

__all__ = ["EditorLaunchError", "EditorLauncher", "EditorPlatform", "LaunchResult"]
