"""Tests for the ftlcatalog command line."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from ftlcatalog import __version__
from ftlcatalog.cli import main


@pytest.fixture
def sources(write_ftl, tmp_path: Path) -> Path:
    write_ftl("locales/en/main.ftl", "hello = Hello { $name }\n    .title = { $title }\n")
    write_ftl("locales/en/extra.ftl", "count = { NUMBER($n, minimumFractionDigits: 2) }\n")
    return tmp_path / "locales"


class TestGenerateSchema:
    def test_writes_json(self, sources: Path, tmp_path: Path) -> None:
        output = tmp_path / "schema.json"
        assert main(["generate-schema", str(sources), "-o", str(output)]) == 0
        assert json.loads(output.read_text(encoding="utf-8")) == {
            "count": ["n"],
            "hello": ["name"],
            "hello.title": ["title"],
        }

    def test_writes_python(self, sources: Path, tmp_path: Path) -> None:
        output = tmp_path / "messages.py"
        assert main(["generate-schema", str(sources), "--output", str(output)]) == 0
        assert "MESSAGE_VARIABLES" in output.read_text(encoding="utf-8")

    def test_explicit_format(self, sources: Path, tmp_path: Path) -> None:
        output = tmp_path / "schema.out"
        assert main(
            ["generate-schema", str(sources), "-o", str(output), "--format", "python"]
        ) == 0
        assert "type MessageKey" in output.read_text(encoding="utf-8")

    def test_several_paths(self, write_ftl, tmp_path: Path) -> None:
        a = write_ftl("a/one.ftl", "one = { $x }\n")
        b = write_ftl("b/two.ftl", "two = { $y }\n")
        output = tmp_path / "schema.json"
        assert main(["generate-schema", str(a), str(b.parent), "-o", str(output)]) == 0
        assert json.loads(output.read_text(encoding="utf-8")) == {"one": ["x"], "two": ["y"]}

    def test_allow_overrides(self, write_ftl, tmp_path: Path) -> None:
        write_ftl("src/a.ftl", "hello = { $first }\n")
        write_ftl("src/b.ftl", "hello = { $second }\n")
        output = tmp_path / "schema.json"
        args = ["generate-schema", str(tmp_path / "src"), "-o", str(output)]
        assert main(args) == 0
        assert json.loads(output.read_text(encoding="utf-8")) == {"hello": ["first"]}
        assert main([*args, "--allow-overrides"]) == 0
        assert json.loads(output.read_text(encoding="utf-8")) == {"hello": ["second"]}


class TestUsageErrors:
    def test_missing_output(self, sources: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            assert main(["generate-schema", str(sources)]) == 1
        assert "--output" in caplog.text

    def test_blank_output(self, sources: Path) -> None:
        assert main(["generate-schema", str(sources), "-o", "  "]) == 1

    def test_missing_paths(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            assert main(["generate-schema", "-o", str(tmp_path / "schema.json")]) == 1
        assert "at least one" in caplog.text

    def test_blank_paths(self, tmp_path: Path) -> None:
        assert main(["generate-schema", " ", "-o", str(tmp_path / "schema.json")]) == 1

    def test_nonexistent_path(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        output = tmp_path / "schema.json"
        with caplog.at_level(logging.ERROR):
            assert main(["generate-schema", str(tmp_path / "missing"), "-o", str(output)]) == 1
        assert "does not exist" in caplog.text
        assert not output.exists()

    def test_unknown_subcommand(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["frobnicate"])
        assert exc_info.value.code == 2

    def test_invalid_format(self, sources: Path, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["generate-schema", str(sources), "-o", str(tmp_path / "x"), "-f", "xml"])
        assert exc_info.value.code == 2


class TestVersion:
    def test_no_subcommand_prints_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert capsys.readouterr().out.strip() == f"ftlcatalog {__version__}"

    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out
