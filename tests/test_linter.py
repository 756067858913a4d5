import json

import pytest

from portcall_event_validator.linter import EventLinter, LintResult, lint_files
from portcall_event_validator.linter.run_lint import find_event_files, main

_YAML_EVENT = """\
uuid: 3f29b1aa-0a1e-4c3d-9abc-1234567890ab
version: "3.2.1"
source: SEGOT-port-authority
eventType: berth.ata.vessel
recordTime: 2026-05-04T10:15:00Z
eventTime: 2026-05-04T10:12:30+02:00
ship:
  imo: "9321483"
  name: Stena Danica
port: SEGOT
location:
  type: berth
  name: Skandia 712
"""


def _write_json(path, payload):
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def test_yaml_timestamps_stay_strings(tmp_path):
    path = tmp_path / "arrival.yaml"
    path.write_text(_YAML_EVENT, encoding="utf-8")
    result = lint_files([path])[0]
    assert result.events == 1
    assert result.errors == []
    assert result.ok


def test_json_list_reports_violation_locations(tmp_path, valid_event):
    bad = json.loads(json.dumps(valid_event))
    bad["ship"]["imo"] = "93214"
    path = _write_json(tmp_path / "events.json", [valid_event, bad])

    result = lint_files([path])[0]
    assert result.events == 2
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error["path"] == "[1].ship.imo"
    assert error["rule"] == "pattern:IMO"
    lines = path.read_text(encoding="utf-8").splitlines()
    assert '"imo": "93214"' in lines[error["line"] - 1]


def test_missing_field_points_at_parent_object(tmp_path, valid_event):
    del valid_event["uuid"]
    path = _write_json(tmp_path / "event.json", valid_event)
    error = lint_files([path])[0].errors[0]
    assert error["path"] == "uuid"
    assert error["line"] == 1


def test_warnings_are_reported_separately(tmp_path, valid_event):
    valid_event["eventType"] = "port.ata.agent"
    path = _write_json(tmp_path / "event.json", valid_event)
    result = lint_files([path])[0]
    assert result.errors == []
    assert [w["rule"] for w in result.warnings] == ["context.mooring.berthOnly"]


def test_unreadable_files_are_errors(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    results = lint_files([broken, empty, tmp_path / "missing.json"])
    assert [len(r.errors) for r in results] == [1, 1, 1]
    assert "Failed to parse" in results[0].errors[0]["message"]
    assert "empty" in results[1].errors[0]["message"]
    assert "not found" in results[2].errors[0]["message"]


def test_schema_version_override(tmp_path, valid_event):
    valid_event["version"] = "2.0.0"
    path = _write_json(tmp_path / "event.json", valid_event)
    result = LintResult(path)
    EventLinter(version="3.2.1").lint(path, result)
    assert [e["rule"] for e in result.errors] == ["const:Version"]


def test_find_event_files(tmp_path):
    (tmp_path / "a.json").write_text("{}", encoding="utf-8")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "b.yml").write_text("{}", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("", encoding="utf-8")
    found = find_event_files([str(tmp_path)])
    assert [p.name for p in found] == ["a.json", "b.yml"]


def test_cli_json_output(tmp_path, valid_event, capsys):
    del valid_event["ship"]
    path = _write_json(tmp_path / "event.json", valid_event)
    with pytest.raises(SystemExit) as exc:
        main(["--format", "json", str(path)])
    assert exc.value.code == 1
    report = json.loads(capsys.readouterr().out)
    assert report["errors"] == 1
    assert report["results"][0]["errors"][0]["path"] == "ship"


def test_cli_human_success(tmp_path, valid_event, capsys):
    path = _write_json(tmp_path / "event.json", valid_event)
    with pytest.raises(SystemExit) as exc:
        main([str(path)])
    assert exc.value.code == 0
    assert "Lint succeeded" in capsys.readouterr().out


def test_cli_github_actions_output(tmp_path, valid_event, capsys):
    valid_event["uuid"] = "nope"
    path = _write_json(tmp_path / "event.json", valid_event)
    with pytest.raises(SystemExit):
        main(["--format", "github-actions", str(path)])
    out = capsys.readouterr().out
    assert out.startswith(f"::error file={path},line=2::")


def test_cli_rejects_unknown_schema_version(tmp_path, valid_event):
    path = _write_json(tmp_path / "event.json", valid_event)
    with pytest.raises(SystemExit) as exc:
        main(["--schema-version", "9.9.9", str(path)])
    assert exc.value.code == 2
