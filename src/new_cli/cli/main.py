#!/usr/bin/env python3
"""Entry point for the new-cli command."""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from dataclasses import replace
from pathlib import Path
from textwrap import dedent

from new_cli import __version__
from new_cli.adapters.fs_template_repo import FSTemplateRepository
from new_cli.app.editor import EditorLaunchError, EditorLauncher, EditorPlatform
from new_cli.app.new_file import (
    FileCreationError,
    NewFileResult,
    NewFileService,
    ensure_template_dir,
    install_default_templates,
)
from new_cli.domain.template import (
    DEFAULT_EXTENSION,
    DEFAULT_FILENAME,
    InvalidTemplateRequestError,
    MatchKind,
    TemplateDirectoryUnreadableError,
    TemplateRequest,
)
from new_cli.settings import SETTINGS, RuntimeSettings
from new_cli.utils.telemetry import clear as telemetry_clear
from new_cli.utils.telemetry import iter_events as telemetry_iter
from new_cli.utils.telemetry import record_event, record_structured_event, summarize as telemetry_summarize

EDITOR_PLATFORM = EditorPlatform.detect()

HELP_OVERVIEW = dedent(
    """
    Create <filename>.<extension> in the current directory from a template and open it.

    Templates live in ~/.new-cli/template/. Lookup order:
      1. a template named exactly <filename>.<extension>
      2. the first template (by name) with the same extension
      3. otherwise an empty file is created
    """
)


def _settings_for(args: argparse.Namespace) -> RuntimeSettings:
    if getattr(args, "no_telemetry", False):
        return replace(SETTINGS, telemetry=False)
    return SETTINGS


def _editor_launcher() -> EditorLauncher:
    return EditorLauncher(EDITOR_PLATFORM)


def _fail(settings: RuntimeSettings, event: str, exc: Exception, payload: dict[str, object]) -> int:
    print(f"new-cli: {exc}", file=sys.stderr)
    record_structured_event(
        settings,
        event,
        payload=payload | {"error": str(exc), "type": type(exc).__name__},
        level="error",
        status="fail",
        component="cli",
    )
    return 1


def _describe(result: NewFileResult) -> str:
    name = result.request.target_name
    if result.resolved.kind is MatchKind.EMPTY:
        return (
            f"No template found for {name} or any .{result.request.extension} file; "
            f"created an empty file {result.target}"
        )
    source = result.resolved.path.name if result.resolved.path else "-"
    return f"Created {result.target} from template {source} ({result.resolved.kind.value} match)"


def _list_cmd(args: argparse.Namespace, settings: RuntimeSettings) -> int:
    repository = FSTemplateRepository(settings.template_dir)
    try:
        templates = repository.list_templates()
    except TemplateDirectoryUnreadableError as exc:
        return _fail(settings, "templates.list", exc, {})
    if args.json:
        payload = {"template_dir": str(settings.template_dir), "templates": [p.name for p in templates]}
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    elif not templates:
        print(f"No templates in {settings.template_dir}")
    else:
        for template in templates:
            print(template.name)
    return 0


def _install_defaults_cmd(args: argparse.Namespace, settings: RuntimeSettings) -> int:
    try:
        written = install_default_templates(settings, force=args.force)
    except FileCreationError as exc:
        return _fail(settings, "templates.install", exc, {})
    record_event(settings, "templates.install", {"installed": [p.name for p in written]})
    if args.json:
        print(json.dumps({"installed": [str(p) for p in written]}, ensure_ascii=False, indent=2))
    elif written:
        for path in written:
            print(f"Installed {path}")
    else:
        print(f"Default templates already present in {settings.template_dir}")
    return 0


def _stats_cmd(args: argparse.Namespace, settings: RuntimeSettings) -> int:
    if args.clear_stats:
        try:
            telemetry_clear(settings)
        except OSError as exc:
            print(f"new-cli: cannot clear event log: {exc}", file=sys.stderr)
            return 1
        print(f"Cleared {settings.telemetry_log}")
        return 0
    summary = telemetry_summarize(telemetry_iter(settings))
    if args.json:
        print(json.dumps(summary, ensure_ascii=False, indent=2))
        return 0
    print(f"Events: {summary['total']} ({settings.telemetry_log})")
    for name, count in sorted(summary["by_event"].items()):
        print(f"  {name}: {count}")
    for level, count in sorted(summary["by_level"].items()):
        print(f"  level {level}: {count}")
    return 0


def _open_in_editor(settings: RuntimeSettings, target: Path) -> dict[str, object]:
    launcher = _editor_launcher()
    try:
        launched = launcher.launch(target)
    except EditorLaunchError as exc:
        print(f"new-cli: warning: {exc}", file=sys.stderr)
        record_structured_event(
            settings,
            "editor.launch.failed",
            payload={"command": launcher.command, "error": str(exc)},
            level="warn",
            status="fail",
            component="editor",
        )
        return {"command": launcher.command, "launched": False}
    record_event(settings, "editor.launch", {"command": launched.command})
    return {"command": launched.command, "launched": True}


def _new_cmd(args: argparse.Namespace) -> int:
    settings = _settings_for(args)
    if args.list:
        return _list_cmd(args, settings)
    if args.install_defaults:
        return _install_defaults_cmd(args, settings)
    if args.stats or args.clear_stats:
        return _stats_cmd(args, settings)

    request = TemplateRequest(filename=args.filename, extension=args.extension)
    payload: dict[str, object] = {"filename": request.filename, "extension": request.extension}
    try:
        request.validate()
    except InvalidTemplateRequestError as exc:
        return _fail(settings, "file.create.failed", exc, payload)

    started = time.perf_counter()
    try:
        ensure_template_dir(settings)
        service = NewFileService(settings, Path(os.getcwd()))
        result = service.create(request, force=args.force)
    except (TemplateDirectoryUnreadableError, FileCreationError) as exc:
        return _fail(settings, "file.create.failed", exc, payload)
    duration_ms = (time.perf_counter() - started) * 1000

    record_structured_event(
        settings,
        "file.create",
        payload=payload | result.to_dict(),
        status="ok",
        component="cli",
        duration_ms=duration_ms,
    )

    editor: dict[str, object] | None = None
    if not args.no_open:
        editor = _open_in_editor(settings, result.target)

    if args.json:
        print(json.dumps(result.to_dict() | {"editor": editor}, ensure_ascii=False, indent=2))
    else:
        print(_describe(result))
        if editor and editor["launched"]:
            print(f"Opened with {editor['command']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="new-cli",
        description=HELP_OVERVIEW,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'new-cli {__version__}')
    parser.add_argument("filename", nargs="?", default=DEFAULT_FILENAME, help=f"File name (default: {DEFAULT_FILENAME})")
    parser.add_argument("extension", nargs="?", default=DEFAULT_EXTENSION, help=f"File extension (default: {DEFAULT_EXTENSION})")
    parser.add_argument("--force", action="store_true", help="Overwrite the target (or installed templates) if it exists")
    parser.add_argument("--no-open", action="store_true", help="Create the file without opening an editor")
    parser.add_argument("--list", action="store_true", help="List available templates and exit")
    parser.add_argument("--install-defaults", action="store_true", help="Copy bundled templates into the template directory and exit")
    parser.add_argument("--stats", action="store_true", help="Summarise the local event log and exit")
    parser.add_argument("--clear-stats", action="store_true", help="Delete the local event log and exit")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable output")
    parser.add_argument("--no-telemetry", action="store_true", help="Do not record events in the local log")
    parser.set_defaults(func=_new_cmd)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
