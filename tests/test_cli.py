"""Tests for the `python -m gelfmsg` command line."""

import io
import json
import sys

import pytest

from gelfmsg.__main__ import main  # type: ignore[import]


class _Stdin(io.StringIO):
    """StringIO that also exposes a binary `buffer`, like sys.stdin."""

    def __init__(self, text: str):
        super().__init__(text)
        self.buffer = io.BytesIO(text.encode("utf-8"))


def _run(argv, stdin_text="", monkeypatch=None):
    monkeypatch.setattr(sys, "stdin", _Stdin(stdin_text))
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


class TestUsage:
    def test_no_command_prints_usage(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 1
        assert "Usage: python -m gelfmsg" in capsys.readouterr().err

    def test_unknown_command_prints_usage(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["frobnicate"])
        assert excinfo.value.code == 1


class TestEncode:
    def test_encode_from_stdin(self, capsys, monkeypatch):
        code = _run(
            ["encode", "--host", "cli-host", "--facility", "cli"],
            "  line one\nline two\n",
            monkeypatch,
        )
        assert code == 0

        out = json.loads(capsys.readouterr().out)
        assert out["version"] == "1.1"
        assert out["host"] == "cli-host"
        assert out["facility"] == "cli"
        assert out["short_message"] == "line one"
        assert out["full_message"] == "line one\nline two"
        assert out["_file"] == "<stdin>"
        assert out["_line"] == 1

    def test_encode_from_file(self, capsys, monkeypatch, tmp_path):
        source = tmp_path / "input.txt"
        source.write_text("single line\n")

        code = _run(["encode", "--file", str(source)], "", monkeypatch)
        assert code == 0

        out = json.loads(capsys.readouterr().out)
        assert out["short_message"] == "single line"
        assert "host" not in out
        assert out["_file"] == str(source)


class TestDecode:
    def test_decode_summarizes_valid_lines(self, capsys, monkeypatch):
        lines = "\n".join([
            '{"version":"1.1","host":"web-1","short_message":"hello","timestamp":0,"level":3}',
            "",
            '{"version":"1.1","short_message":"bye","timestamp":60,"_tag":"x"}',
        ])
        code = _run(["decode"], lines, monkeypatch)
        assert code == 0

        out = capsys.readouterr().out.splitlines()
        assert out == [
            "[1970-01-01 00:00:00] [web-1] [ERROR] hello",
            "[1970-01-01 00:01:00] [-] [EMERGENCY] bye",
        ]

    def test_decode_reports_invalid_lines(self, capsys, monkeypatch):
        lines = "\n".join([
            '{"short_message":"ok","timestamp":0,"level":6}',
            '{"short_message":"x","timestamp":1,"weird":"y"}',
            "not json",
        ])
        code = _run(["decode"], lines, monkeypatch)
        assert code == 2

        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["[1970-01-01 00:00:00] [-] [INFO] ok"]
        assert "line 2: unknown field weird" in captured.err
        assert "line 3:" in captured.err


class TestInputErrors:
    def test_encode_missing_file(self, capsys, monkeypatch, tmp_path):
        code = _run(["encode", "--file", str(tmp_path / "missing.txt")], "", monkeypatch)
        assert code == 2
        assert "Error:" in capsys.readouterr().err

    def test_decode_missing_file(self, capsys, monkeypatch, tmp_path):
        code = _run(["decode", "--file", str(tmp_path / "missing.jsonl")], "", monkeypatch)
        assert code == 2
        assert "Error:" in capsys.readouterr().err

    def test_decode_file_with_invalid_utf8(self, capsys, monkeypatch, tmp_path):
        source = tmp_path / "bad.jsonl"
        source.write_bytes(b'{"short_message":"\xff","timestamp":1}\n')

        code = _run(["decode", "--file", str(source)], "", monkeypatch)
        assert code == 2
        assert "Error:" in capsys.readouterr().err
