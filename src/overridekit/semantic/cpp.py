"""Tree-sitter C++ front end.

Parses one translation unit and reports, for every class/struct definition:

- qualified name (namespaces and enclosing classes)
- direct bases with access and virtual-ness
- member functions: return type text, parameter (type, name) pairs, const,
  virtual, pure
- brace and access-section colon positions

Constructors and destructors are not reported. Out-of-class definitions,
templates and macros are taken as written; nothing is instantiated or
expanded. The result is linked into a SemanticModel (see ``linker``).

Type text is normalized the way compilers print types: declaration
specifiers joined by single spaces, then pointer/reference markers after a
space (``const int &``, ``char **``).
"""

from __future__ import annotations

import importlib
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import tree_sitter

from overridekit.core.errors import ParseError
from overridekit.semantic.linker import MethodDraft, TypeDraft, link
from overridekit.semantic.model import (
    Access,
    AccessSection,
    BaseRef,
    Param,
    SemanticModel,
    TypeAnchors,
    TypeKind,
)

log = structlog.get_logger(__name__)

GRAMMAR_MODULE = "tree_sitter_cpp"
CPP_EXTENSIONS = frozenset({"cpp", "cc", "cxx", "c++", "hpp", "hxx", "hh", "h", "h++", "ipp", "inl"})

_TYPE_SPECIFIERS = {"class_specifier": TypeKind.CLASS, "struct_specifier": TypeKind.STRUCT}
_MEMBER_FUNCTION_NODES = frozenset({"field_declaration", "declaration", "function_definition"})
_PREPROC_WRAPPERS = frozenset(
    {"preproc_if", "preproc_ifdef", "preproc_elif", "preproc_else", "preproc_elifdef"}
)
# Specifier children that are not part of a return type
_NON_TYPE_SPECIFIERS = frozenset(
    {
        "attribute_specifier",
        "attribute_declaration",
        "storage_class_specifier",
        "virtual",
        "virtual_function_specifier",
        "explicit_function_specifier",
        "ms_declspec_modifier",
        "comment",
    }
)
_EXCEPTION_SPECIFIERS = frozenset({"noexcept", "throw_specifier"})
_PURE_RE = re.compile(r"=\s*0\s*;$")
_WS_RE = re.compile(r"\s+")


def _text(node: Any) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


def _squash(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


class _Offsets:
    """Byte offset (tree-sitter) to character offset (Python str) mapping."""

    def __init__(self, source: str, data: bytes) -> None:
        self._data = data
        self._ascii = len(source) == len(data)

    def __call__(self, byte_offset: int) -> int:
        if self._ascii:
            return byte_offset
        return len(self._data[:byte_offset].decode("utf-8", errors="ignore"))


def _declarator_markers(node: Any) -> tuple[str, Any]:
    """Strip pointer/reference/array layers off a declarator.

    Returns the markers (outermost first) and the innermost declarator, which
    is None for abstract declarators.
    """
    markers: list[str] = []
    while node is not None:
        kind = node.type
        if kind in ("pointer_declarator", "abstract_pointer_declarator"):
            qualifiers = [_text(c) for c in node.children if c.type == "type_qualifier"]
            markers.append(" ".join(["*", *qualifiers]))
            node = node.child_by_field_name("declarator")
        elif kind in ("reference_declarator", "abstract_reference_declarator"):
            markers.append("&&" if node.children and node.children[0].type == "&&" else "&")
            inner = [c for c in node.named_children if c.type != "comment"]
            node = inner[-1] if inner else None
        elif kind in ("array_declarator", "abstract_array_declarator"):
            # Array parameters decay to pointers
            markers.append("*")
            node = node.child_by_field_name("declarator")
        else:
            break
    return "".join(markers), node


def _specifier_text(decl: Any, declarator: Any | None) -> str:
    """Declaration specifiers (type plus qualifiers) preceding ``declarator``."""
    limit = declarator.start_byte if declarator is not None else decl.end_byte
    default = decl.child_by_field_name("default_value")
    if default is not None:
        limit = min(limit, default.start_byte)
    parts = [
        _squash(_text(child))
        for child in decl.named_children
        if child.end_byte <= limit and child.type not in _NON_TYPE_SPECIFIERS
    ]
    return " ".join(p for p in parts if p)


def _join_type(specifiers: str, markers: str) -> str:
    return f"{specifiers} {markers}" if markers else specifiers


def _parameter(decl: Any, index: int) -> Param | None:
    if decl.type == "variadic_parameter_declaration" or decl.type == "...":
        return Param(type="...")
    declarator = decl.child_by_field_name("declarator")
    specifiers = _specifier_text(decl, declarator)
    markers, inner = _declarator_markers(declarator)
    if inner is None:
        return Param(type=_join_type(specifiers, markers))
    if inner.type in ("identifier", "field_identifier"):
        return Param(type=_join_type(specifiers, markers), name=_text(inner))
    # Function pointers and other declarators that do not split as "type name"
    log.debug("parameter_kept_verbatim", index=index, text=_text(decl))
    return Param(type=_squash(_text(decl)))


def _parameters(param_list: Any) -> list[Param]:
    params: list[Param] = []
    for index, child in enumerate(c for c in param_list.children if c.is_named or c.type == "..."):
        if child.type == "comment":
            continue
        param = _parameter(child, index)
        if param is not None:
            params.append(param)
    if len(params) == 1 and params[0] == Param(type="void"):
        return []
    return params


@dataclass
class CppParser:
    """Build a SemanticModel from C++ source with tree-sitter.

    Usage::

        parser = CppParser()
        model = parser.parse(source, path="shapes.hpp")
        derived = model.find_type("Circle")
    """

    _parser: Any = field(default=None, repr=False)
    _language: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._parser = tree_sitter.Parser()

    def _get_language(self) -> Any:
        if self._language is None:
            try:
                module = importlib.import_module(GRAMMAR_MODULE)
                self._language = tree_sitter.Language(module.language())
            except (ImportError, AttributeError) as err:
                raise ParseError.grammar_unavailable(GRAMMAR_MODULE, str(err)) from err
        return self._language

    def parse_file(self, path: Path) -> SemanticModel:
        ext = path.suffix.lower().lstrip(".")
        if ext not in CPP_EXTENSIONS:
            raise ParseError.unsupported_language(str(path))
        try:
            # newline="" keeps CRLF line endings so offsets match the bytes on disk
            with path.open(encoding="utf-8", newline="") as f:
                source = f.read()
        except (OSError, UnicodeDecodeError) as err:
            raise ParseError.unreadable_source(str(path), str(err)) from err
        return self.parse(source, path=str(path))

    def parse(self, source: str, path: str = "<memory>") -> SemanticModel:
        """Parse ``source`` and link every class/struct definition in it."""
        self._parser.language = self._get_language()
        data = source.encode("utf-8")
        tree = self._parser.parse(data)
        offsets = _Offsets(source, data)

        drafts: list[TypeDraft] = []
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            if node.type in _TYPE_SPECIFIERS and node.child_by_field_name("body") is not None:
                draft = self._type_draft(node, offsets)
                if draft is not None:
                    drafts.append(draft)
            stack.extend(reversed(node.children))

        if tree.root_node.has_error:
            log.debug("parse_errors_present", path=path)
        return link(drafts, source=source, path=path)

    def _type_draft(self, node: Any, offsets: _Offsets) -> TypeDraft | None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None  # anonymous struct/class
        parts = [p for p in "".join(_text(name_node).split()).split("::") if p]
        if not parts:
            return None
        kind = _TYPE_SPECIFIERS[node.type]
        scope = (*self._enclosing_scope(node), *parts[:-1])
        body = node.child_by_field_name("body")

        draft = TypeDraft(
            name=parts[-1],
            kind=kind,
            scope=scope,
            extent=(offsets(node.start_byte), offsets(node.end_byte)),
        )
        for child in node.children:
            if child.type == "base_class_clause":
                draft.bases = self._bases(child, kind, scope)

        open_brace = close_brace = None
        if body.children and body.children[0].type == "{" and not body.children[0].is_missing:
            open_brace = offsets(body.children[0].start_byte)
        if body.children and body.children[-1].type == "}" and not body.children[-1].is_missing:
            close_brace = offsets(body.children[-1].start_byte)

        sections: list[AccessSection] = []
        for member in self._members(body):
            if member.type == "access_specifier":
                section = self._access_section(member, offsets)
                if section is not None:
                    sections.append(section)
                continue
            draft.member_extents.append((offsets(member.start_byte), offsets(member.end_byte)))
            if member.type in _MEMBER_FUNCTION_NODES:
                method = self._method(member, draft.name)
                if method is not None:
                    draft.methods.append(method)

        draft.anchors = TypeAnchors(
            open_brace=open_brace,
            close_brace=close_brace,
            sections=tuple(sections),
        )
        return draft

    @staticmethod
    def _enclosing_scope(node: Any) -> list[str]:
        scope: list[str] = []
        parent = node.parent
        while parent is not None:
            if parent.type == "namespace_definition":
                name = parent.child_by_field_name("name")
                if name is not None:
                    scope[:0] = [p for p in _text(name).replace(" ", "").split("::") if p]
            elif parent.type in _TYPE_SPECIFIERS:
                name = parent.child_by_field_name("name")
                if name is not None:
                    scope[:0] = [p for p in "".join(_text(name).split()).split("::") if p]
            parent = parent.parent
        return scope

    @staticmethod
    def _bases(clause: Any, kind: TypeKind, scope: tuple[str, ...]) -> list[BaseRef]:
        bases: list[BaseRef] = []
        access: Access | None = None
        is_virtual = False
        for child in clause.children:
            if child.type == ",":
                access, is_virtual = None, False
            elif child.type == "access_specifier":
                access = Access(_text(child).strip())
            elif child.type == "virtual":
                is_virtual = True
            elif child.is_named and child.type not in ("attribute_declaration", "comment"):
                bases.append(
                    BaseRef(
                        name="".join(_text(child).split()),
                        access=access or kind.default_access,
                        is_virtual=is_virtual,
                        scope=scope,
                    )
                )
        return bases

    def _members(self, body: Any) -> list[Any]:
        members: list[Any] = []
        guards = {
            guard.id
            for guard in (body.child_by_field_name("name"), body.child_by_field_name("condition"))
            if guard is not None
        }
        for child in body.children:
            if child.id in guards:
                continue
            if child.type in _PREPROC_WRAPPERS:
                members.extend(self._members(child))
            elif child.is_named and child.type != "comment" and not child.type.startswith("preproc_"):
                members.append(child)
        return members

    @staticmethod
    def _access_section(node: Any, offsets: _Offsets) -> AccessSection | None:
        label = _text(node).rstrip(":").strip()
        try:
            access = Access(label)
        except ValueError:
            return None
        if _text(node).endswith(":"):
            colon = node.end_byte - 1
        else:
            sibling = node.next_sibling
            if sibling is None or sibling.type != ":":
                return None
            colon = sibling.start_byte
        return AccessSection(access=access, colon=offsets(colon))

    @staticmethod
    def _method(member: Any, class_name: str) -> MethodDraft | None:
        declarator = member.child_by_field_name("declarator")
        if declarator is None:
            return None
        markers, function = _declarator_markers(declarator)
        if function is None or function.type != "function_declarator":
            return None
        name_node = function.child_by_field_name("declarator")
        if name_node is None or name_node.type not in (
            "field_identifier",
            "identifier",
            "operator_name",
        ):
            # destructor_name, qualified (out-of-line) and template names
            return None
        name = _squash(_text(name_node))
        if name == class_name:
            return None  # constructor

        param_list = function.child_by_field_name("parameters")
        trailing = [c for c in function.named_children if c.type == "trailing_return_type"]
        is_const = any(
            c.type == "type_qualifier" and _text(c) == "const"
            for c in function.children
            if param_list is None or c.start_byte >= param_list.end_byte
        )
        specifiers = _specifier_text(member, declarator)
        return_type = _join_type(specifiers, markers)
        if trailing and specifiers == "auto":
            return_type = _squash(_text(trailing[0]).lstrip("-> ").strip())

        exception_spec = next(
            (_squash(_text(c)) for c in function.children if c.type in _EXCEPTION_SPECIFIERS), ""
        )
        is_virtual = any(c.type in ("virtual", "virtual_function_specifier") for c in member.children)
        has_virt_specifier = any(c.type == "virtual_specifier" for c in function.children)
        is_pure = member.type != "function_definition" and bool(_PURE_RE.search(_text(member).strip()))

        return MethodDraft(
            name=name,
            return_type=return_type,
            params=_parameters(param_list) if param_list is not None else [],
            is_const=is_const,
            exception_spec=exception_spec,
            is_pure=is_pure,
            is_virtual=is_virtual or has_virt_specifier or is_pure,
        )
