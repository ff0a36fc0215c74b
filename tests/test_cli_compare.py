import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fieldcmp.cli.app import app
from fieldcmp.plugins import PLUGIN_CONFIG_ENV_VAR


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_cli_compare_identical_documents(tmp_path: Path) -> None:
    expected = _write(tmp_path / "expected.json", {"a": 1, "b": "test"})
    actual = _write(tmp_path / "actual.json", {"a": 1, "b": "test"})

    result = CliRunner().invoke(app, ["compare", str(expected), str(actual)])

    assert result.exit_code == 0
    assert "mode=all_fields fields=2" in result.stdout
    assert "no differences detected" in result.stdout


def test_cli_compare_reports_field_lines_and_fails(tmp_path: Path) -> None:
    expected = _write(tmp_path / "expected.json", {"a": 1, "x": [1]})
    actual = _write(tmp_path / "actual.json", {"a": 2})

    result = CliRunner().invoke(app, ["compare", str(expected), str(actual)])

    assert result.exit_code == 1
    assert "a: 1 != 2" in result.stdout
    assert "x: field missing from actual: [\n    1,\n]" in result.stdout


def test_cli_compare_selected_fields(tmp_path: Path) -> None:
    expected = _write(tmp_path / "expected.json", {"a": 1, "b": "str"})
    actual = _write(tmp_path / "actual.json", {"a": 1, "b": "diff str"})

    result = CliRunner().invoke(app, ["compare", str(expected), str(actual), "--field", "a"])

    assert result.exit_code == 0
    assert "mode=selected_fields fields=1" in result.stdout


def test_cli_compare_json_output(tmp_path: Path) -> None:
    expected = _write(tmp_path / "expected.json", {"a": 1, "b": 2})
    actual = _write(tmp_path / "actual.json", {"a": 1, "b": 3})

    result = CliRunner().invoke(
        app, ["compare", str(expected), str(actual), "-f", "a", "-f", "b", "--json"]
    )

    assert result.exit_code == 1
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "fail"
    assert payload["clean"] is False
    assert payload["report"] == "b: 2 != 3\n"
    assert payload["outcomes"] == [
        {"name": "b", "status": "mismatch", "expected": "2", "actual": "3"}
    ]
    assert payload["expected_path"] == str(expected)


def test_cli_compare_quiet_still_prints_differences(tmp_path: Path) -> None:
    expected = _write(tmp_path / "expected.json", {"a": 1})
    actual = _write(tmp_path / "actual.json", {"a": 2})

    result = CliRunner().invoke(app, ["--quiet", "compare", str(expected), str(actual)])

    assert result.exit_code == 1
    assert "mode=" not in result.stdout
    assert "a: 1 != 2" in result.stdout


def test_cli_compare_unknown_field_is_a_usage_error(tmp_path: Path) -> None:
    expected = _write(tmp_path / "expected.json", {"a": 1})
    actual = _write(tmp_path / "actual.json", {"a": 1})

    result = CliRunner().invoke(
        app, ["compare", str(expected), str(actual), "--field", "zz", "--json"]
    )

    assert result.exit_code == 2
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "error"
    assert "'zz'" in payload["message"]


def test_cli_compare_non_record_document_fails(tmp_path: Path) -> None:
    expected = _write(tmp_path / "expected.json", [1, 2])
    actual = _write(tmp_path / "actual.json", {"a": 1})

    result = CliRunner().invoke(app, ["compare", str(expected), str(actual), "--json"])

    assert result.exit_code == 2
    payload = json.loads(result.stdout.strip())
    assert "could not serialize expected value" in payload["message"]


def test_cli_compare_missing_file(tmp_path: Path) -> None:
    actual = _write(tmp_path / "actual.json", {"a": 1})

    result = CliRunner().invoke(
        app, ["compare", str(tmp_path / "nope.json"), str(actual), "--json"]
    )

    assert result.exit_code == 2
    payload = json.loads(result.stdout.strip())
    assert "file not found" in payload["message"]


def test_cli_compare_invalid_json(tmp_path: Path) -> None:
    expected = tmp_path / "expected.json"
    expected.write_text("{broken", encoding="utf-8")
    actual = _write(tmp_path / "actual.json", {"a": 1})

    result = CliRunner().invoke(app, ["compare", str(expected), str(actual), "--json"])

    assert result.exit_code == 2
    assert "invalid JSON" in json.loads(result.stdout.strip())["message"]


def test_cli_compare_ignores_broken_env_plugin_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    expected = _write(tmp_path / "expected.json", {"a": 1})
    actual = _write(tmp_path / "actual.json", {"a": 1})
    monkeypatch.setenv(PLUGIN_CONFIG_ENV_VAR, str(tmp_path / "nope.json"))

    with pytest.warns(RuntimeWarning, match="fieldcmp plugin config ignored"):
        result = CliRunner().invoke(app, ["compare", str(expected), str(actual)])

    assert result.exit_code == 0
    assert "no differences detected" in result.stdout


def test_cli_compare_explicit_plugin_config_error_is_a_usage_error(tmp_path: Path) -> None:
    expected = _write(tmp_path / "expected.json", {"a": 1})
    actual = _write(tmp_path / "actual.json", {"a": 1})

    result = CliRunner().invoke(
        app,
        [
            "compare",
            str(expected),
            str(actual),
            "--plugin-config",
            str(tmp_path / "nope.json"),
            "--json",
        ],
    )

    assert result.exit_code == 2
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "error"
    assert "Cannot read plugin config" in payload["message"]


def test_cli_compare_explicit_plugin_config_traces_comparison(tmp_path: Path) -> None:
    expected = _write(tmp_path / "expected.json", {"a": 1})
    actual = _write(tmp_path / "actual.json", {"a": 2})
    trace_path = tmp_path / "trace.ndjson"
    config_path = _write(
        tmp_path / "plugins.json",
        {
            "config_version": 1,
            "plugins": [
                {
                    "entrypoint": "fieldcmp.plugins.reference:LifecycleTracePlugin",
                    "options": {"output_path": str(trace_path)},
                }
            ],
        },
    )

    result = CliRunner().invoke(
        app, ["compare", str(expected), str(actual), "--plugin-config", str(config_path)]
    )

    assert result.exit_code == 1
    hooks = [
        json.loads(line)["hook"]
        for line in trace_path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]
    assert hooks == ["on_compare_start", "on_compare_end"]
