from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from new_cli import __version__  # noqa: E402
from new_cli.settings import RuntimeSettings  # noqa: E402


@pytest.fixture()
def runtime_settings(tmp_path: Path) -> RuntimeSettings:
    home = tmp_path / "home" / ".new-cli"
    return RuntimeSettings(
        home_dir=home,
        template_dir=home / "template",
        log_dir=home / "logs",
        cli_version=__version__,
    )
