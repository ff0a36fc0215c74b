from contextlib import nullcontext
import json
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
from typing import Any

import typer

from fieldcmp.core import CompareError
from fieldcmp.diff import AssertionResult, check_structs, render_summary
from fieldcmp.plugins import PluginError, load_plugin_manager_from_file, use_plugin_manager

app = typer.Typer(help="fieldcmp CLI")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


class _DocumentError(Exception):
    pass


def _resolve_cli_version() -> str:
    try:
        return package_version("fieldcmp")
    except PackageNotFoundError:
        from fieldcmp import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show fieldcmp version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, separators=(",", ":"))
    else:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, indent=2)
    typer.echo(rendered, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _load_document(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as error:
        raise _DocumentError(f"file not found: {path}") from error
    except json.JSONDecodeError as error:
        raise _DocumentError(f"invalid JSON in {path}: {error}") from error
    except OSError as error:
        raise _DocumentError(f"cannot read {path}: {error}") from error


@app.command()
def compare(
    expected: Path = typer.Argument(..., help="Path to the expected JSON document."),
    actual: Path = typer.Argument(..., help="Path to the actual JSON document."),
    fields: list[str] | None = typer.Option(
        None,
        "--field",
        "-f",
        help="Field to compare (repeatable). Omit to compare all fields of both documents.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable comparison output.",
    ),
    plugin_config: Path | None = typer.Option(
        None,
        "--plugin-config",
        help="Plugin config JSON to activate for this comparison (load errors fail the command).",
    ),
) -> None:
    """Compare two JSON records field by field."""
    selected = tuple(fields or ())
    base_payload = {
        "expected_path": str(expected),
        "actual_path": str(actual),
    }

    try:
        plugins = (
            use_plugin_manager(load_plugin_manager_from_file(plugin_config))
            if plugin_config is not None
            else nullcontext()
        )
        with plugins:
            result: AssertionResult = check_structs(
                _load_document(expected),
                _load_document(actual),
                *selected,
            )
    except (_DocumentError, CompareError, PluginError) as error:
        message = f"compare failed: {error}"
        if json_output:
            _echo_json({"status": "error", "exit_code": 2, "message": message, **base_payload})
        else:
            _echo(message, err=True)
        raise typer.Exit(code=2) from error

    if json_output:
        _echo_json(
            {
                **result.to_dict(),
                "message": "no differences detected" if result.passed else "differences found",
                **base_payload,
            }
        )
    else:
        _echo(render_summary(result.report))
        if result.passed:
            _echo("no differences detected")
        else:
            _echo(result.message.rstrip("\n"), force=True)

    if not result.passed:
        raise typer.Exit(code=result.exit_code)


def main() -> None:
    app()
