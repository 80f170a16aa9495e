"""Tests for the render command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from rxvmgen.cli import cli


class TestRenderCommand:
    def test_prints_code(self, cli_runner: CliRunner, source_file: Path) -> None:
        result = cli_runner.invoke(cli, ["render", str(source_file)])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("using System;\n")
        assert "public class ColorPicker : ReactiveObject, IColorPicker" in result.output
        assert "public class LoginDialog : ReactiveObject, ILoginDialog" in result.output
        assert result.output.endswith("}\n")

    def test_stdin(
        self, cli_runner: CliRunner, project_root: Path, login_dialog_source: str
    ) -> None:
        result = cli_runner.invoke(cli, ["render", "-"], input=login_dialog_source)
        assert result.exit_code == 0, result.output
        expected = (
            "public LoginDialog(IAppState appState, ReactiveCommand ok, IScreen hostScreen = null)"
        )
        assert expected in result.output

    def test_output_file(
        self, cli_runner: CliRunner, source_file: Path, project_root: Path
    ) -> None:
        target = project_root / "out" / "ViewModels.cs"
        result = cli_runner.invoke(cli, ["render", str(source_file), "-o", str(target)])
        assert result.exit_code == 0, result.output
        assert "ViewModels.cs" in result.output
        assert "public class" not in result.output
        assert target.read_text(encoding="utf-8").endswith("}\n")

    def test_quiet_output_file(
        self, cli_runner: CliRunner, source_file: Path, project_root: Path
    ) -> None:
        target = project_root / "Gen.cs"
        result = cli_runner.invoke(cli, ["-q", "render", str(source_file), "-o", str(target)])
        assert result.exit_code == 0
        assert result.output.strip() == str(target)

    def test_json(self, cli_runner: CliRunner, source_file: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "render", str(source_file)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "render"
        assert data["data"]["interfaces"] == ["IColorPicker", "ILoginDialog"]
        assert "LoginDialog" in data["data"]["code"]

    def test_no_format(self, cli_runner: CliRunner, source_file: Path) -> None:
        result = cli_runner.invoke(cli, ["render", str(source_file), "--no-format"])
        assert result.exit_code == 0
        assert "\tint Red { get; set; }" in result.output

    def test_format_flag_overrides_config(
        self, cli_runner: CliRunner, source_file: Path, project_root: Path
    ) -> None:
        (project_root / "rxvmgen.toml").write_text("[format]\nenabled = false\n")
        result = cli_runner.invoke(cli, ["render", str(source_file), "--format"])
        assert result.exit_code == 0
        assert "\tint Red" not in result.output
        assert "    int Red { get; set; }" in result.output

    def test_custom_template_from_config(
        self, cli_runner: CliRunner, source_file: Path, project_root: Path
    ) -> None:
        templates = project_root / "templates"
        templates.mkdir()
        (templates / "viewmodel.cs.j2").write_text(
            "{% for i in interfaces %}// {{ i.implClassName }}\n{% endfor %}"
        )
        (project_root / "rxvmgen.toml").write_text('[templates]\ndirectory = "templates"\n')
        result = cli_runner.invoke(cli, ["render", str(source_file)])
        assert result.exit_code == 0, result.output
        assert result.output == "// ColorPicker\n// LoginDialog\n"

    def test_template_option(
        self, cli_runner: CliRunner, source_file: Path, project_root: Path
    ) -> None:
        result = cli_runner.invoke(cli, ["render", str(source_file), "--template", "nope.j2"])
        assert result.exit_code == 1
        assert "nope.j2" in result.output

    def test_not_interfaces(self, cli_runner: CliRunner, project_root: Path) -> None:
        source = project_root / "Foo.cs"
        source.write_text("public class Foo { }\n")
        result = cli_runner.invoke(cli, ["render", str(source)])
        assert result.exit_code == 1
        assert "Code must be one or more interfaces" in result.output

    def test_garbage(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["render", "-"], input="###woefowaefjawioefj")
        assert result.exit_code == 1
        assert "Compilation failed or code is badly formatted" in result.output

    def test_missing_file(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["render", "Missing.cs"])
        assert result.exit_code == 1
        assert "Cannot read Missing.cs" in result.output

    def test_json_error(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "render", "-"], input="enum E { A }")
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["error"]["code"] == "INVALID_INPUT"

    def test_failure_writes_nothing(self, cli_runner: CliRunner, project_root: Path) -> None:
        target = project_root / "out.cs"
        result = cli_runner.invoke(cli, ["render", "-", "-o", str(target)], input="class C { }")
        assert result.exit_code == 1
        assert not target.exists()
