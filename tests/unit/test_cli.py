"""
Unit tests for the command line front end.
"""

import io
import os
import sys
import json
import time
import logging
from pathlib import Path
import pytest
import yaml

from logscan import cli
from logscan.config import load_config
from logscan.models.config import ScannerConfig


DAY = 86400


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep config discovery away from real files and restore log levels."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(home)
    yield
    logging.getLogger("logscan").setLevel(logging.NOTSET)


@pytest.fixture
def log_dir(tmp_path):
    root = tmp_path / "logs"
    root.mkdir()
    now = time.time()
    for name, age in [("new.log", 2), ("old.log", 45), ("notes.txt", 45)]:
        path = root / name
        path.write_text("entry\n")
        os.utime(path, (now - age * DAY, now - age * DAY))
    (root / "archive").mkdir()
    archived = root / "archive" / "ancient.log"
    archived.write_text("entry\n")
    os.utime(archived, (now - 400 * DAY, now - 400 * DAY))
    return root


def _lines(capsys):
    return [line for line in capsys.readouterr().out.splitlines() if line]


class TestCommandLine:
    """Test cases for cli.main."""

    def test_json_output(self, log_dir, capsys):
        code = cli.main([str(log_dir), "--pattern", "*.log", "--format", "json"])

        assert code == cli.EXIT_OK
        records = [json.loads(line) for line in _lines(capsys)]
        assert [r['name'] for r in records] == ["new.log", "old.log"]
        assert records[0]['path'] == str(log_dir.resolve() / "new.log")
        assert {'size', 'created_time', 'modified_time', 'age_days'} <= set(records[0])

    def test_age_filters(self, log_dir, capsys):
        code = cli.main([str(log_dir), "-p", "*.log", "--older-than", "30", "-f", "path"])

        assert code == cli.EXIT_OK
        assert _lines(capsys) == [str(log_dir.resolve() / "old.log")]

    def test_younger_than(self, log_dir, capsys):
        cli.main([str(log_dir), "--younger-than", "10", "-f", "path"])
        assert _lines(capsys) == [str(log_dir.resolve() / "new.log")]

    def test_recurse(self, log_dir, capsys):
        cli.main([str(log_dir), "-p", "*.log", "-r", "--older-than", "100", "-f", "path"])
        assert _lines(capsys) == [str(log_dir.resolve() / "archive" / "ancient.log")]

    def test_table_output(self, log_dir, capsys):
        cli.main([str(log_dir), "-p", "new.log"])
        lines = _lines(capsys)

        assert len(lines) == 1
        assert lines[0].endswith(str(log_dir.resolve() / "new.log"))
        assert "d  " in lines[0]

    def test_missing_directory(self, tmp_path, capsys, caplog):
        missing = str(tmp_path / "missing")

        with caplog.at_level(logging.ERROR, logger="logscan"):
            code = cli.main([missing])

        assert code == cli.EXIT_SCAN_FAILED
        assert _lines(capsys) == []
        errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].startswith("[DirectoryNotFound] Directory not found:")

    def test_failed_path_does_not_stop_others(self, log_dir, tmp_path, capsys):
        code = cli.main([str(tmp_path / "missing"), str(log_dir), "-p", "new.log", "-f", "path"])

        assert code == cli.EXIT_SCAN_FAILED
        assert _lines(capsys) == [str(log_dir.resolve() / "new.log")]

    def test_paths_from_stdin(self, log_dir, capsys, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO(f"\n{log_dir}\n   \n"))

        code = cli.main(["-", "-p", "old.log", "-f", "path"])

        assert code == cli.EXIT_OK
        assert _lines(capsys) == [str(log_dir.resolve() / "old.log")]

    def test_negative_days_is_usage_error(self, log_dir):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(log_dir), "--older-than", "-1"])
        assert exc_info.value.code == cli.EXIT_USAGE

    def test_path_required(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == cli.EXIT_USAGE

    def test_config_defaults_apply(self, log_dir, tmp_path, capsys):
        config_file = tmp_path / "logscan.yaml"
        config_file.write_text(yaml.dump({
            'scan': {'pattern': '*.log', 'older_than_days': 30},
            'output': {'format': 'path'}
        }))

        cli.main([str(log_dir), "--config", str(config_file)])
        assert _lines(capsys) == [str(log_dir.resolve() / "old.log")]

    def test_command_line_overrides_config(self, log_dir, tmp_path, capsys):
        config_file = tmp_path / "logscan.yaml"
        config_file.write_text(yaml.dump({'scan': {'pattern': '*.log', 'recurse': True}}))

        cli.main([str(log_dir), "-c", str(config_file), "--no-recurse", "-p", "*.txt", "-f", "path"])
        assert _lines(capsys) == [str(log_dir.resolve() / "notes.txt")]

    def test_discovered_config_in_working_directory(self, log_dir, capsys):
        Path(".logscan.yaml").write_text("scan:\n  pattern: 'new.log'\noutput:\n  format: path\n")

        cli.main([str(log_dir)])
        assert _lines(capsys) == [str(log_dir.resolve() / "new.log")]

    def test_invalid_config(self, log_dir, tmp_path, capsys):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("output:\n  format: xml\n")

        code = cli.main([str(log_dir), "-c", str(config_file)])

        assert code == cli.EXIT_USAGE
        assert "Configuration validation failed" in capsys.readouterr().err

    def test_write_config_template(self, tmp_path):
        target = tmp_path / "conf" / "logscan.yaml"

        code = cli.main(["--write-config-template", str(target)])

        assert code == cli.EXIT_OK
        assert load_config(target).config.scan.pattern == "*.log"

    def test_verbose_enables_summary(self, log_dir, caplog):
        with caplog.at_level(logging.DEBUG):
            cli.main([str(log_dir), "-v", "-f", "path"])

        assert logging.getLogger("logscan").level == logging.DEBUG
        assert any(r.getMessage().startswith("Found 3 log file(s) in") for r in caplog.records)

    def test_quiet_raises_threshold(self, log_dir):
        cli.main([str(log_dir), "-q", "-f", "path"])
        assert logging.getLogger("logscan").level == logging.ERROR


class TestBuildRequest:
    """Test cases for layering options over configuration."""

    def test_unset_options_use_config(self):
        config = load_config(None).config
        args = cli.build_parser().parse_args(["/tmp"])

        request = cli.build_request("/tmp", args, config)

        assert request.pattern == config.scan.pattern
        assert request.recurse is False
        assert request.older_than_days is None

    def test_zero_overrides_config(self):
        """An explicit 0 is a value, not "unset"."""
        config = ScannerConfig.from_dict({'scan': {'older_than_days': 9}})
        args = cli.build_parser().parse_args(["/tmp", "--older-than", "0"])

        assert cli.build_request("/tmp", args, config).older_than_days == 0
