"""Tests for override rendering and placement."""

import pytest

from overridekit.config.models import EmitterConfig
from overridekit.refactor.emit import AnchorKind, choose_anchor, emit, render_method, render_parameters
from overridekit.semantic.model import (
    Access,
    AccessSection,
    DeclId,
    MethodSignature,
    Param,
    SemanticModel,
    TypeAnchors,
    TypeKind,
    TypeNode,
)


def _sig(
    name: str, *params: Param, ret: str = "void", const: bool = False, exception_spec: str = ""
) -> MethodSignature:
    return MethodSignature(
        decl_id=DeclId(f"Base::{name}"),
        owner="Base",
        name=name,
        return_type=ret,
        params=params,
        is_const=const,
        exception_spec=exception_spec,
        is_pure=True,
        is_virtual=True,
    )


def _derived(anchors: TypeAnchors) -> TypeNode:
    return TypeNode(
        decl_id=DeclId("Derived"),
        name="Derived",
        qualified_name="Derived",
        kind=TypeKind.CLASS,
        anchors=anchors,
    )


class TestRenderMethod:
    """Declaration text."""

    def test_declaration_style(self) -> None:
        method = _sig("area", ret="double", const=True)

        assert render_method(method) == "double area() const override;"

    def test_exception_specification_follows_const(self) -> None:
        method = _sig("size", ret="int", const=True, exception_spec="noexcept")

        assert render_method(method) == "int size() const noexcept override;"

    def test_named_parameters_keep_names(self) -> None:
        method = _sig("F2", Param("int", "a"), Param("const int &", "b"))

        assert render_method(method) == "void F2(int a, const int & b) override;"

    def test_unnamed_parameters_stay_unnamed_by_default(self) -> None:
        method = _sig("F2", Param("int"), Param("const int &"))

        assert render_method(method) == "void F2(int, const int &) override;"

    def test_placeholder_prefix_names_unnamed_parameters_by_position(self) -> None:
        method = _sig("F", Param("int"), Param("char *", "s"), Param("long"))

        assert render_parameters(method, "P") == "int P1, char * s, long P3"

    def test_variadic_is_never_named(self) -> None:
        method = _sig("log", Param("const char *", "fmt"), Param("..."))

        assert render_parameters(method, "P") == "const char * fmt, ..."

    def test_stub_style_with_placeholders(self) -> None:
        """Stub bodies fail to compile until the method is implemented."""
        # Given
        method = _sig("F2", Param("int"), Param("const int &"))
        config = EmitterConfig(body_style="stub", placeholder_prefix="P")

        # When
        line = render_method(method, config)

        # Then
        assert line == (
            'void F2(int P1, const int & P2) override '
            '{ static_assert(false, "`F2` is unimplemented."); }'
        )

    def test_indent_prefixes_line(self) -> None:
        assert render_method(_sig("f"), EmitterConfig(indent="  ")) == "  void f() override;"


class TestChooseAnchor:
    """Insertion point priority."""

    def test_last_public_section_wins(self) -> None:
        anchors = TypeAnchors(
            open_brace=14,
            close_brace=80,
            sections=(
                AccessSection(Access.PUBLIC, 22),
                AccessSection(Access.PRIVATE, 40),
                AccessSection(Access.PUBLIC, 60),
            ),
        )

        anchor = choose_anchor(_derived(anchors))

        assert anchor is not None
        assert (anchor.kind, anchor.offset) == (AnchorKind.PUBLIC_SECTION, 61)

    def test_open_brace_without_public_section(self) -> None:
        anchors = TypeAnchors(open_brace=14, close_brace=80, sections=(AccessSection(Access.PRIVATE, 22),))

        anchor = choose_anchor(_derived(anchors))

        assert anchor is not None
        assert (anchor.kind, anchor.offset) == (AnchorKind.OPEN_BRACE, 15)

    def test_close_brace_as_last_resort(self) -> None:
        anchor = choose_anchor(_derived(TypeAnchors(close_brace=80)))

        assert anchor is not None
        assert (anchor.kind, anchor.offset) == (AnchorKind.CLOSE_BRACE, 80)

    def test_no_anchor(self) -> None:
        assert choose_anchor(_derived(TypeAnchors())) is None


class TestEmit:
    """Single-insertion effects."""

    SOURCE = "class Derived : public Base {\npublic:\n};\n"

    def _model(self, derived: TypeNode) -> SemanticModel:
        return SemanticModel([derived], source=self.SOURCE, path="d.hpp")

    def _anchors(self) -> TypeAnchors:
        return TypeAnchors(
            open_brace=self.SOURCE.index("{"),
            close_brace=self.SOURCE.index("}"),
            sections=(AccessSection(Access.PUBLIC, self.SOURCE.index(":\n")),),
        )

    def test_lines_follow_residual_order(self) -> None:
        derived = _derived(self._anchors())
        residual = [_sig("F2"), _sig("F1")]

        effect = emit(residual, derived, self._model(derived))

        assert len(effect.edits) == 1
        assert effect.edits[0].text == "\nvoid F2() override;\nvoid F1() override;\n"
        assert effect.apply_to(self.SOURCE) == (
            "class Derived : public Base {\npublic:\nvoid F2() override;\nvoid F1() override;\n\n};\n"
        )

    def test_empty_residual_is_noop(self) -> None:
        derived = _derived(self._anchors())

        effect = emit([], derived, self._model(derived))

        assert effect.is_noop
        assert effect.path == "d.hpp"

    def test_missing_anchor_is_noop(self) -> None:
        derived = _derived(TypeAnchors())

        effect = emit([_sig("F1")], derived, self._model(derived))

        assert effect.is_noop

    @pytest.mark.parametrize("body_style", ["declaration", "stub"])
    def test_text_outside_insertion_is_untouched(self, body_style: str) -> None:
        derived = _derived(self._anchors())
        effect = emit(
            [_sig("F1")],
            derived,
            self._model(derived),
            EmitterConfig(body_style=body_style),  # type: ignore[arg-type]
        )
        offset = effect.edits[0].offset
        inserted = effect.edits[0].text

        updated = effect.apply_to(self.SOURCE)

        assert updated[:offset] == self.SOURCE[:offset]
        assert updated[offset + len(inserted) :] == self.SOURCE[offset:]
