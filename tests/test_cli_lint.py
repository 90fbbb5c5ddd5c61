"""Tests for the `solnaming lint` and `solnaming rules` CLI commands."""

from __future__ import annotations

import json
from typing import Any

from click.testing import CliRunner

from solnaming import __version__
from solnaming.cli import main


class TestLintCommand:
    def test_clean_ast(self, clean_ast: dict[str, Any], write_ast: Any) -> None:
        """No findings -> exit 0."""
        runner = CliRunner()
        path = write_ast(clean_ast)
        result = runner.invoke(main, ["lint", str(path), "--format", "text", "--strict"])
        assert result.exit_code == 0, result.output
        assert "No problems found" in result.output

    def test_findings_without_strict(self, token_ast: dict[str, Any], write_ast: Any) -> None:
        """Findings without --strict -> exit 0."""
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(write_ast(token_ast)), "--format", "text"])
        assert result.exit_code == 0, result.output
        assert "'mulDiv' should start with _" in result.output

    def test_findings_with_strict(self, token_ast: dict[str, Any], write_ast: Any) -> None:
        """Errors with --strict -> exit 1."""
        runner = CliRunner()
        result = runner.invoke(
            main, ["lint", str(write_ast(token_ast)), "--format", "porcelain", "--strict"]
        )
        assert result.exit_code == 1, result.output
        lines = [line for line in result.output.strip().split("\n") if line]
        assert len(lines) == 3
        assert lines[0].startswith("private-vars-leading-underscore-lib:error:")

    def test_warnings_only_pass_strict(
        self, token_ast: dict[str, Any], write_ast: Any, tmp_path: Any
    ) -> None:
        """Warnings alone do not fail --strict, but do fail --fail-on-warn."""
        config_path = tmp_path / "naming.yml"
        config_path.write_text(
            "version: 1\nrules:\n"
            "  private-vars-leading-underscore-lib: warn\n"
            "  func-param-name-trailing-underscore: warn\n"
            "  scoped-vars-leading-underscore: warn\n"
        )
        path = str(write_ast(token_ast))
        runner = CliRunner()
        args = ["lint", path, "--config", str(config_path), "--format", "json"]
        strict = runner.invoke(main, [*args, "--strict"])
        assert strict.exit_code == 0, strict.output
        fail_on_warn = runner.invoke(main, [*args, "--fail-on-warn"])
        assert fail_on_warn.exit_code == 1, fail_on_warn.output

    def test_format_json(self, token_ast: dict[str, Any], write_ast: Any) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(write_ast(token_ast)), "--format", "json"])
        assert result.exit_code == 0, result.output
        parsed = json.loads(result.output)
        assert parsed["summary"]["errors_count"] == 3
        assert [f["line"] for f in parsed["findings"]] == [2, 2, 7]

    def test_format_rich(self, token_ast: dict[str, Any], write_ast: Any) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(write_ast(token_ast)), "--format", "rich"])
        assert result.exit_code == 0, result.output
        assert "3 problems" in result.output

    def test_quiet_clean_prints_nothing(self, clean_ast: dict[str, Any], write_ast: Any) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["-q", "lint", str(write_ast(clean_ast)), "--format", "text"])
        assert result.exit_code == 0, result.output
        assert result.output == ""

    def test_quiet_prints_errors_only(
        self, token_ast: dict[str, Any], write_ast: Any, tmp_path: Any
    ) -> None:
        """-q drops warnings from the output but keeps errors."""
        config_path = tmp_path / "naming.yml"
        config_path.write_text("version: 1\nrules:\n  scoped-vars-leading-underscore: warn\n")
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["-q", "lint", str(write_ast(token_ast)), "--config", str(config_path),
             "--format", "porcelain"],
        )
        assert result.exit_code == 0, result.output
        lines = [line for line in result.output.strip().split("\n") if line]
        assert len(lines) == 2
        assert all(":error:" in line for line in lines)
        assert "'fee'" not in result.output

    def test_quiet_warnings_only_prints_nothing(
        self, token_ast: dict[str, Any], write_ast: Any, tmp_path: Any
    ) -> None:
        config_path = tmp_path / "naming.yml"
        config_path.write_text(
            "version: 1\nrules:\n"
            "  private-vars-leading-underscore-lib: warn\n"
            "  func-param-name-trailing-underscore: warn\n"
            "  scoped-vars-leading-underscore: warn\n"
        )
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["-q", "lint", str(write_ast(token_ast)), "--config", str(config_path),
             "--format", "text", "--fail-on-warn"],
        )
        assert result.exit_code == 1
        assert result.output == ""

    def test_porcelain_includes_message(self, token_ast: dict[str, Any], write_ast: Any) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(write_ast(token_ast)), "--format", "porcelain"])
        assert result.exit_code == 0, result.output
        lines = result.output.strip().split("\n")
        assert lines[0].endswith(":'mulDiv' should start with _")
        assert lines[2].endswith(":7:16:'fee' should start with _")

    def test_missing_explicit_config_exit_2(
        self, token_ast: dict[str, Any], write_ast: Any, tmp_path: Any
    ) -> None:
        """A --config path that does not exist is an error, not the defaults."""
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["lint", str(write_ast(token_ast)), "--config", str(tmp_path / "typo.yml"),
             "--strict"],
        )
        assert result.exit_code == 2
        assert "typo.yml" in result.output

    def test_implicit_config_absent_uses_defaults(
        self, token_ast: dict[str, Any], write_ast: Any, tmp_path: Any, monkeypatch: Any
    ) -> None:
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(write_ast(token_ast)), "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["summary"]["errors_count"] == 3

    def test_invalid_ast_exit_2(self, tmp_path: Any) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{")
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(path)])
        assert result.exit_code == 2
        assert "Error:" in result.output

    def test_invalid_config_exit_2(self, clean_ast: dict[str, Any], write_ast: Any, tmp_path: Any) -> None:
        config_path = tmp_path / "naming.yml"
        config_path.write_text("version: 1\nrules:\n  no-such-rule: error\n")
        runner = CliRunner()
        result = runner.invoke(
            main, ["lint", str(write_ast(clean_ast)), "--config", str(config_path)]
        )
        assert result.exit_code == 2
        assert "no-such-rule" in result.output

    def test_missing_path(self, tmp_path: Any) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(tmp_path / "absent.json")])
        assert result.exit_code == 2


class TestRulesCommand:
    def test_lists_rules_and_events(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["rules"])
        assert result.exit_code == 0, result.output
        assert "private-vars-leading-underscore-lib" in result.output
        assert "ContractDefinition:exit" in result.output
        assert "CustomErrorDefinition" in result.output


def test_version() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
