"""Tests for the interface renderer."""

from __future__ import annotations

import pytest

from rxvmgen.domain.classify import ClassificationRules
from rxvmgen.domain.errors import InvalidInputError
from rxvmgen.domain.interfaces import implementation_name, render_interface
from rxvmgen.domain.models import NameAndType, OnceProperty, OutputOnlyProperty, ReadWriteProperty
from rxvmgen.domain.syntax import (
    DeclarationHeader,
    DeclarationKind,
    PropertyMember,
    TypeDeclaration,
    TypeReference,
)
from rxvmgen.infrastructure.syntax import parse_declarations


def _interface(source: str, index: int = 0) -> TypeDeclaration:
    unit = parse_declarations(source)
    assert not unit.diagnostics, unit.diagnostics
    return unit.top_level_nodes[index]


class TestImplementationName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("IColorPicker", "ColorPicker"), ("IA", "A"), ("XFoo", "Foo"), ("Iface", "face")],
    )
    def test_drops_first_character(self, name: str, expected: str) -> None:
        assert implementation_name(name) == expected

    @pytest.mark.parametrize("name", ["", "I"])
    def test_degenerate_names_fail(self, name: str) -> None:
        with pytest.raises(InvalidInputError):
            implementation_name(name)


class TestRenderInterface:
    def test_color_picker(self, color_picker_source: str) -> None:
        record = render_interface(_interface(color_picker_source))
        assert record.interface_name == "IColorPicker"
        assert record.impl_class_name == "ColorPicker"
        assert record.is_routable_view_model is True
        assert record.properties == (
            ReadWriteProperty(name="Red", type="int"),
            OutputOnlyProperty(name="FinalColor", type="Color"),
        )
        assert record.once_properties == ()

    def test_login_dialog(self, login_dialog_source: str) -> None:
        record = render_interface(_interface(login_dialog_source))
        assert record.properties == (
            OnceProperty(name="AppState", type="IAppState"),
            OnceProperty(name="Ok", type="ReactiveCommand"),
        )
        assert record.once_properties == (
            NameAndType(name="AppState", type="IAppState"),
            NameAndType(name="Ok", type="ReactiveCommand"),
        )

    def test_once_properties_keep_relative_order(self, test_interfaces: str) -> None:
        record = render_interface(_interface(test_interfaces, 1))
        assert [p.role for p in record.properties] == [
            "once",
            "read_write",
            "read_write",
            "read_write",
            "once",
        ]
        assert [p.name for p in record.once_properties] == ["AppState", "Ok"]

    def test_definition_strips_once_marker(self, test_interfaces: str) -> None:
        record = render_interface(_interface(test_interfaces, 1))
        assert "[Once]" not in record.definition
        assert record.definition.startswith("interface ILoginDialog : IRoutableViewModel {")
        assert "\tIAppState AppState { get; }" in record.definition
        assert record.definition.endswith("}")

    def test_not_routable_without_marker(self) -> None:
        record = render_interface(_interface("interface IFoo : IDisposable { int X { get; } }"))
        assert record.is_routable_view_model is False

    def test_not_routable_without_base_list(self) -> None:
        record = render_interface(_interface("interface IFoo { int X { get; } }"))
        assert record.is_routable_view_model is False
        assert record.properties == (OutputOnlyProperty(name="X", type="int"),)

    def test_qualified_marker_matches_plain_name(self) -> None:
        record = render_interface(
            _interface("interface IFoo : ReactiveUI.IRoutableViewModel { }")
        )
        assert record.is_routable_view_model is True
        assert record.properties == ()

    def test_methods_pass_through(self) -> None:
        record = render_interface(
            _interface("interface IFoo {\n  void Reset();\n  int X { get; set; }\n}")
        )
        assert record.properties[0].role == "opaque"
        assert record.properties[0].text == "void Reset();"
        assert record.properties[1] == ReadWriteProperty(name="X", type="int")

    def test_header_child_is_skipped(self) -> None:
        decl = TypeDeclaration(
            kind=DeclarationKind.INTERFACE,
            identifier_text="IFoo",
            child_nodes=(
                DeclarationHeader(identifier_text="IFoo", text="interface IFoo"),
                PropertyMember(
                    identifier_text="X",
                    type=TypeReference(text="int", plain_name="int"),
                    has_setter=False,
                ),
            ),
            text="interface IFoo { int X { get; } }",
        )
        record = render_interface(decl)
        assert record.properties == (OutputOnlyProperty(name="X", type="int"),)

    def test_single_character_name_fails(self) -> None:
        with pytest.raises(InvalidInputError):
            render_interface(_interface("interface I { int X { get; } }"))

    def test_custom_rules(self) -> None:
        rules = ClassificationRules(once_attribute="Inject", routable_marker="IScreenAware")
        record = render_interface(
            _interface("interface IFoo : IScreenAware {\n  [Inject] IBar Bar { get; }\n}"),
            rules,
        )
        assert record.is_routable_view_model is True
        assert record.once_properties == (NameAndType(name="Bar", type="IBar"),)
        assert "[Inject]" not in record.definition
