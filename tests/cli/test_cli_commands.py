import io
import json
import sys

import pytest
from loguru import logger

from a11ycore.cli import main as cli_main
from a11ycore.logging import configure_logging

CLEAN_TREE = {"type": "main", "children": [{"type": "h1", "name": "Title"}, {"type": "button", "name": "Save"}]}
BROKEN_TREE = {"type": "main", "children": [{"type": "img"}]}
TAB_TREE = {
    "type": "main",
    "children": [
        {"type": "button", "name": "Two", "props": {"tabIndex": 2}},
        {"type": "button", "name": "One", "props": {"tabIndex": 1}},
        {"type": "button", "name": "Zero"},
    ],
}


@pytest.fixture(autouse=True)
def _silent_logging(monkeypatch):
    monkeypatch.delenv("A11YCORE_LOG_LEVEL", raising=False)
    yield
    configure_logging("")


def _write(tmp_path, payload, name="tree.json"):
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_cli_help_runs(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["a11ycore"])
    assert cli_main() == 0
    assert "a11ycore CLI" in capsys.readouterr().out


def test_cli_version_runs(capsys):
    assert cli_main(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_validate_prints_findings(tmp_path, capsys):
    assert cli_main(["validate", _write(tmp_path, BROKEN_TREE)]) == 0
    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert [f["code"] for f in payload["findings"]] == ["TEXT_ALT_MISSING_ALT"]
    assert payload["findings"][0]["path"] == "$.children[0]"
    assert captured.err == ""


def test_validate_reports_invalid_tree_as_finding(tmp_path, capsys):
    assert cli_main(["validate", _write(tmp_path, {"type": "1bad"})]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [f["code"] for f in payload["findings"]] == ["ENGINE_SUBJECT_INVALID"]


def test_validate_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(json.dumps(CLEAN_TREE)))
    assert cli_main(["validate", "-"]) == 0
    assert json.loads(capsys.readouterr().out) == {"findings": []}


def test_bless_pass_and_fail_exit_codes(tmp_path, capsys):
    assert cli_main(["bless", _write(tmp_path, CLEAN_TREE)]) == 0
    assert json.loads(capsys.readouterr().out) == {"ok": True, "findings": []}

    assert cli_main(["bless", _write(tmp_path, BROKEN_TREE, "broken.json")]) == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is False
    assert payload["findings"]


def test_bless_accepts_policy_file(tmp_path, capsys):
    policy = _write(tmp_path, {"profile": "wcag-lite", "allowCodes": ["TEXT_ALT_MISSING_ALT"]}, "policy.json")
    assert cli_main(["bless", _write(tmp_path, BROKEN_TREE), "--policy", policy]) == 1
    assert json.loads(capsys.readouterr().out)["ok"] is False


def test_invalid_policy_is_usage_error(tmp_path):
    policy = _write(tmp_path, {"profile": "strict"}, "policy.json")
    with pytest.raises(SystemExit) as exc:
        cli_main(["bless", _write(tmp_path, CLEAN_TREE), "--policy", policy])
    assert exc.value.code == 2


def test_missing_file_is_usage_error(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli_main(["validate", str(tmp_path / "missing.json")])
    assert exc.value.code == 2


def test_malformed_json_is_usage_error(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        cli_main(["validate", str(path)])
    assert exc.value.code == 2


def test_tab_order_command(tmp_path, capsys):
    assert cli_main(["tab-order", _write(tmp_path, TAB_TREE)]) == 0
    order = json.loads(capsys.readouterr().out)
    assert [item["name"] for item in order] == ["One", "Two", "Zero"]
    assert order[0] == {"path": "$.children[1]", "tabIndex": 1, "type": "button", "role": None, "name": "One"}


def test_tab_order_rejects_invalid_tree(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli_main(["tab-order", _write(tmp_path, {"type": ""})])
    assert exc.value.code == 2


def test_cdp_input(tmp_path, capsys):
    snapshot = {
        "nodes": [
            {"nodeId": "1", "ignored": False, "role": {"type": "role", "value": "RootWebArea"}, "childIds": ["2"]},
            {"nodeId": "2", "ignored": False, "role": {"type": "role", "value": "button"}, "parentId": "1"},
        ]
    }
    assert cli_main(["validate", _write(tmp_path, snapshot), "--input", "cdp"]) == 0
    codes = [f["code"] for f in json.loads(capsys.readouterr().out)["findings"]]
    assert "NAME_MISSING" in codes


def test_invalid_cdp_payload_is_usage_error(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli_main(["validate", _write(tmp_path, [{"ignored": False}]), "--input", "cdp"])
    assert exc.value.code == 2


def test_verbose_flag_logs_to_stderr(tmp_path, capsys):
    assert cli_main(["-v", "validate", _write(tmp_path, CLEAN_TREE)]) == 0
    err = capsys.readouterr().err
    assert "INFO" in err
    assert "rules produced 0 findings" in err


def test_env_log_level_is_used_without_flags(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("A11YCORE_LOG_LEVEL", "DEBUG")
    assert cli_main(["validate", _write(tmp_path, CLEAN_TREE)]) == 0
    err = capsys.readouterr().err
    assert "Heading hierarchy" in err


def test_host_loguru_sinks_survive_cli_runs(tmp_path):
    records = []
    sink_id = logger.add(records.append, level="INFO", filter="a11ycore")
    try:
        assert cli_main(["-v", "validate", _write(tmp_path, CLEAN_TREE)]) == 0
        assert any("rules produced 0 findings" in str(record) for record in records)
    finally:
        logger.remove(sink_id)
