"""Tests for the Jinja2 template environment and the packaged template."""

from __future__ import annotations

from pathlib import Path

import pytest

from rxvmgen.domain.errors import TemplateRenderError
from rxvmgen.domain.models import (
    InterfaceRenderRecord,
    NameAndType,
    OnceProperty,
    OpaqueMember,
    OutputOnlyProperty,
    ReadWriteProperty,
    RenderModel,
)
from rxvmgen.infrastructure.templates import (
    DEFAULT_TEMPLATE,
    build_template_environment,
    camel_case,
    comment_lines,
    render_template,
)


def _record(**overrides: object) -> InterfaceRenderRecord:
    values: dict[str, object] = {
        "interface_name": "ILoginDialog",
        "impl_class_name": "LoginDialog",
        "definition": "interface ILoginDialog : IRoutableViewModel { }",
        "properties": (
            OnceProperty(name="AppState", type="IAppState"),
            ReadWriteProperty(name="User", type="string"),
            OutputOnlyProperty(name="IsValid", type="bool"),
            OpaqueMember(text="void Reset();"),
        ),
        "once_properties": (NameAndType(name="AppState", type="IAppState"),),
        "is_routable_view_model": True,
    }
    values.update(overrides)
    return InterfaceRenderRecord(**values)  # type: ignore[arg-type]


def _render(record: InterfaceRenderRecord) -> str:
    env = build_template_environment()
    context = RenderModel(interfaces=(record,)).template_context()
    return render_template(env, DEFAULT_TEMPLATE, context)


class TestFilters:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("AppState", "appState"), ("Ok", "ok"), ("x", "x"), ("", ""), ("URL", "uRL")],
    )
    def test_camel_case(self, value: str, expected: str) -> None:
        assert camel_case(value) == expected

    def test_comment_single_line(self) -> None:
        assert comment_lines("void Reset();") == "// void Reset();"

    def test_comment_multi_line(self) -> None:
        assert comment_lines("a\nb") == "// a\n// b"

    def test_comment_custom_prefix(self) -> None:
        assert comment_lines("a", prefix="# ") == "# a"


class TestEnvironment:
    def test_packaged_template_is_found(self) -> None:
        env = build_template_environment()
        assert env.get_template(DEFAULT_TEMPLATE) is not None

    def test_override_directory_shadows_packaged_template(self, tmp_path: Path) -> None:
        (tmp_path / DEFAULT_TEMPLATE).write_text(
            "{% for i in interfaces %}{{ i.implClassName }};{% endfor %}", encoding="utf-8"
        )
        env = build_template_environment(override_dir=tmp_path)
        context = RenderModel(interfaces=(_record(),)).template_context()
        assert render_template(env, DEFAULT_TEMPLATE, context) == "LoginDialog;"

    def test_override_directory_falls_back_to_package(self, tmp_path: Path) -> None:
        env = build_template_environment(override_dir=tmp_path)
        context = RenderModel(interfaces=(_record(),)).template_context()
        assert "class LoginDialog" in render_template(env, DEFAULT_TEMPLATE, context)

    def test_missing_template_raises(self) -> None:
        env = build_template_environment()
        with pytest.raises(TemplateRenderError, match="nope.j2"):
            render_template(env, "nope.j2", {"interfaces": []})

    def test_undefined_variable_raises(self, tmp_path: Path) -> None:
        (tmp_path / "bad.j2").write_text("{{ missing.thing }}", encoding="utf-8")
        env = build_template_environment(override_dir=tmp_path)
        with pytest.raises(TemplateRenderError, match="'bad.j2' failed"):
            render_template(env, "bad.j2", {})

    def test_syntax_error_raises(self, tmp_path: Path) -> None:
        (tmp_path / "broken.j2").write_text("{% for x in %}", encoding="utf-8")
        env = build_template_environment(override_dir=tmp_path)
        with pytest.raises(TemplateRenderError):
            render_template(env, "broken.j2", {})


class TestPackagedTemplate:
    def test_usings(self) -> None:
        output = _render(_record())
        assert output.lstrip().startswith("using System;\n")
        assert "using ReactiveUI;" in output
        assert "using Splat;" in output

    def test_definition_and_class_header(self) -> None:
        output = _render(_record())
        assert "interface ILoginDialog : IRoutableViewModel { }" in output
        assert "public class LoginDialog : ReactiveObject, ILoginDialog" in output

    def test_routable_members(self) -> None:
        output = _render(_record())
        assert 'get { return "LoginDialog"; }' in output
        assert "public IScreen HostScreen { get; protected set; }" in output
        assert "HostScreen = hostScreen ?? Locator.Current.GetService<IScreen>();" in output

    def test_non_routable_has_no_host_screen(self) -> None:
        output = _render(_record(is_routable_view_model=False))
        assert "HostScreen" not in output
        assert "UrlPathSegment" not in output
        assert "public LoginDialog(IAppState appState)" in output

    def test_constructor_parameters(self) -> None:
        output = _render(_record())
        assert "public LoginDialog(IAppState appState, IScreen hostScreen = null)" in output
        assert "AppState = appState;" in output

    def test_constructor_without_parameters(self) -> None:
        output = _render(
            _record(
                properties=(ReadWriteProperty(name="Red", type="int"),),
                once_properties=(),
                is_routable_view_model=False,
            )
        )
        assert "public LoginDialog()" in output

    def test_read_write_property(self) -> None:
        output = _render(_record())
        assert "string _User;" in output
        assert "set { this.RaiseAndSetIfChanged(ref _User, value); }" in output

    def test_output_property(self) -> None:
        output = _render(_record())
        assert "ObservableAsPropertyHelper<bool> _IsValid;" in output
        assert "get { return _IsValid.Value; }" in output
        assert (
            "_IsValid = Observable.Return(default(bool)).ToProperty(this, x => x.IsValid);"
            in output
        )

    def test_once_property(self) -> None:
        output = _render(_record())
        assert "public IAppState AppState { get; protected set; }" in output

    def test_opaque_member_is_commented(self) -> None:
        output = _render(_record())
        assert "// void Reset();" in output

    def test_one_class_per_interface(self) -> None:
        second = _record(interface_name="IColorPicker", impl_class_name="ColorPicker")
        env = build_template_environment()
        context = RenderModel(interfaces=(_record(), second)).template_context()
        output = render_template(env, DEFAULT_TEMPLATE, context)
        assert output.count("using System;") == 1
        assert output.index("class LoginDialog") < output.index("class ColorPicker")

    def test_deterministic(self) -> None:
        assert _render(_record()) == _render(_record())
