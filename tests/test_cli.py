"""CLI tests — in-process ``main()`` and ``python -m todo_scan`` subprocesses."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

from todo_scan.__main__ import main
from todo_scan.contracts.load import validate_instance
from todo_scan.core.config import SHARED_CONFIG_NAME
from todo_scan.utils.exit_codes import ExitCode

REPO_ROOT = Path(__file__).resolve().parents[1]


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    env = {**os.environ}
    env["PYTHONPATH"] = str(REPO_ROOT / "src") + (
        os.pathsep + env["PYTHONPATH"] if env.get("PYTHONPATH") else ""
    )
    return subprocess.run(
        [sys.executable, "-m", "todo_scan", *args],
        capture_output=True,
        text=True,
        env=env,
    )


class TestScanCommand:
    def test_summary(self, sample_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        rc = main(["scan", str(sample_project)])
        out = capsys.readouterr().out

        assert rc == ExitCode.SUCCESS
        assert "Found 4 TODOs in" in out
        assert "Found 1 TODO(s) in HIGH priority" in out
        assert "Found 1 TODO(s) in MED priority" in out
        assert "Found 1 TODO(s) in LOW priority" in out
        assert "past due" in out

    def test_quiet_all(self, sample_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        rc = main(["scan", str(sample_project), "--quiet", "--all"])
        lines = capsys.readouterr().out.splitlines()

        assert rc == ExitCode.SUCCESS
        assert len(lines) == 4
        app = sample_project / "app.py"
        assert f"{app} [3]: # TODO: split this module @prio=high @resp=alice" in lines

    def test_quiet_prints_nothing(
        self, sample_project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["scan", str(sample_project), "-q"]) == ExitCode.SUCCESS
        assert capsys.readouterr().out == ""

    def test_filters(self, sample_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        rc = main(["scan", str(sample_project), "-u", "alice", "-p", "medium", "-q", "-a"])
        lines = capsys.readouterr().out.splitlines()

        assert rc == ExitCode.SUCCESS
        assert len(lines) == 1
        assert "cache results" in lines[0]

    def test_due_filter(self, sample_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["scan", str(sample_project), "--due", "2024-01-10", "-q", "-a"])
        lines = capsys.readouterr().out.splitlines()

        assert len(lines) == 1
        assert "@due=2024-01-05" in lines[0]

    def test_due_today_bucket(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        today = date.today()
        (tmp_path / "a.py").write_text(
            f"# TODO now @due={today.isoformat()}\n"
            f"# TODO old @due={(today - timedelta(days=3)).isoformat()}\n",
            encoding="utf-8",
        )

        main(["scan", str(tmp_path)])
        out = capsys.readouterr().out

        assert "Found 1 TODO(s) due today" in out
        assert "Found 1 TODO(s) past due" in out

    def test_json_output(self, sample_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        rc = main(["scan", str(sample_project), "--json", "-p", "high"])
        data = json.loads(capsys.readouterr().out)

        assert rc == ExitCode.SUCCESS
        validate_instance(data, "scan_result.schema.json")
        assert [r["line"] for r in data["records"]] == [3]
        assert data["summary"]["by_priority"]["high"] == 1

    def test_time_warning(self, sample_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (sample_project / SHARED_CONFIG_NAME).write_text(
            json.dumps({"timeWarning": 0, "directoryExceptions": []}), encoding="utf-8"
        )
        # Any measurable elapsed time exceeds a zero limit.
        for i in range(200):
            (sample_project / f"f{i}.txt").write_text("# TODO\n" * 50, encoding="utf-8")

        main(["scan", str(sample_project)])
        out = capsys.readouterr().out

        assert "Scanning time exceeded the limit" in out

    def test_unknown_priority_still_succeeds(
        self, sample_project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        rc = main(["scan", str(sample_project), "-p", "urgent"])
        assert rc == ExitCode.SUCCESS
        assert "Found 0 TODOs in" in capsys.readouterr().out

    def test_missing_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        rc = main(["scan", str(tmp_path / "nope")])
        assert rc == ExitCode.ERROR
        assert "directory not found" in capsys.readouterr().err

    def test_bad_regex_in_config(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (tmp_path / SHARED_CONFIG_NAME).write_text(
            json.dumps({"pattern": {"regex": "(todo"}}), encoding="utf-8"
        )
        assert main(["scan", str(tmp_path)]) == ExitCode.ERROR
        assert "Invalid pattern regex" in capsys.readouterr().err

    def test_invalid_due_date_is_usage_error(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["scan", str(tmp_path), "--due", "tomorrow"])
        assert exc.value.code == 2


class TestValidateCommand:
    def test_exit_code_values(self) -> None:
        assert (ExitCode.SUCCESS, ExitCode.INVALID_CONFIG, ExitCode.ERROR) == (0, 1, 2)

    def test_ok(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        cfg = tmp_path / "c.json"
        cfg.write_text(json.dumps({"pattern": {"limit": 10}}), encoding="utf-8")
        assert main(["validate", str(cfg)]) == ExitCode.SUCCESS
        assert capsys.readouterr().out.strip() == "OK"

    def test_violation(self, tmp_path: Path) -> None:
        cfg = tmp_path / "c.json"
        cfg.write_text(json.dumps({"timeWarning": "soon"}), encoding="utf-8")
        assert main(["validate", str(cfg)]) == ExitCode.INVALID_CONFIG

    def test_missing_file(self, tmp_path: Path) -> None:
        assert main(["validate", str(tmp_path / "missing.json")]) == ExitCode.ERROR

    def test_not_json(self, tmp_path: Path) -> None:
        cfg = tmp_path / "c.json"
        cfg.write_text("{", encoding="utf-8")
        assert main(["validate", str(cfg)]) == ExitCode.ERROR


class TestSubprocess:
    """``python -m todo_scan`` behaves like ``main()``."""

    def test_scan_exit_zero(self, sample_project: Path) -> None:
        r = _run("scan", str(sample_project), "--all")
        assert r.returncode == 0, r.stderr
        assert "Found 4 TODOs in" in r.stdout

    def test_unreadable_file_reported_on_stderr(self, tmp_path: Path) -> None:
        (tmp_path / "bad.txt").write_bytes(b"\xff\xfe TODO\n")
        (tmp_path / "good.txt").write_text("TODO fine\n", encoding="utf-8")

        r = _run("scan", str(tmp_path))

        assert r.returncode == 0
        assert "Found 1 TODOs in" in r.stdout
        assert "Error reading file" in r.stderr

    def test_version(self) -> None:
        r = _run("--version")
        assert r.returncode == 0
        assert r.stdout.startswith("todoscan ")

    def test_no_command_is_error(self) -> None:
        r = _run()
        assert r.returncode == ExitCode.ERROR
