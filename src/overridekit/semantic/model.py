"""Read-only view of a C++ class hierarchy.

Everything a tweak queries lives here: types with their direct bases and
declared member functions, the override relation between member functions,
and the text anchors (braces, access-section colons) used to place edits.
All positions are character offsets into ``SemanticModel.source``.

Values are frozen. A model is a snapshot of one source text; hosts build a
fresh one (see ``overridekit.semantic.cpp``) whenever the text changes.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import NewType

DeclId = NewType("DeclId", str)
"""Opaque declaration identity. Compare with ==, never parse."""


class Access(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class TypeKind(str, Enum):
    CLASS = "class"
    STRUCT = "struct"

    @property
    def default_access(self) -> Access:
        return Access.PRIVATE if self is TypeKind.CLASS else Access.PUBLIC


@dataclass(frozen=True, slots=True)
class Param:
    """A parameter as (type text, name). ``name`` is empty when unnamed."""

    type: str
    name: str = ""


@dataclass(frozen=True, slots=True)
class MethodSignature:
    """A member function declaration.

    ``overrides`` holds the declarations this method directly overrides, one
    per base subobject path. Follow them through ``SemanticModel.method`` for
    the transitive closure.
    """

    decl_id: DeclId
    owner: str  # qualified name of the declaring type
    name: str
    return_type: str
    params: tuple[Param, ...] = ()
    is_const: bool = False
    exception_spec: str = ""  # "noexcept", "noexcept(expr)" or "throw(...)" as written
    is_pure: bool = False
    is_virtual: bool = False
    overrides: tuple[DeclId, ...] = ()


@dataclass(frozen=True, slots=True)
class BaseRef:
    """A direct base as written in the base clause.

    ``scope`` is the enclosing scope of the deriving type, used for name lookup.
    """

    name: str
    access: Access
    is_virtual: bool = False
    scope: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class AccessSection:
    access: Access
    colon: int  # offset of the ':' ending the access label


@dataclass(frozen=True, slots=True)
class TypeAnchors:
    """Syntactic anchors of a class body. Braces are None when missing."""

    open_brace: int | None = None
    close_brace: int | None = None
    sections: tuple[AccessSection, ...] = ()

    def last_section(self, access: Access) -> AccessSection | None:
        found = None
        for section in self.sections:
            if section.access is access:
                found = section
        return found


@dataclass(frozen=True, slots=True)
class TypeNode:
    """A class or struct definition."""

    decl_id: DeclId
    name: str
    qualified_name: str
    kind: TypeKind
    bases: tuple[BaseRef, ...] = ()
    methods: tuple[MethodSignature, ...] = ()
    is_abstract: bool = False
    anchors: TypeAnchors = field(default_factory=TypeAnchors)
    extent: tuple[int, int] = (0, 0)
    member_extents: tuple[tuple[int, int], ...] = ()

    @property
    def scope(self) -> tuple[str, ...]:
        """Enclosing scope components (namespaces and outer classes)."""
        return tuple(self.qualified_name.split("::")[:-1])

    def pure_methods(self) -> Iterator[MethodSignature]:
        return (m for m in self.methods if m.is_pure)


class SemanticModel:
    """Indexed snapshot of the types defined in one source text."""

    def __init__(
        self,
        types: Iterable[TypeNode],
        *,
        source: str = "",
        path: str = "<memory>",
    ) -> None:
        self.source = source
        self.path = path
        self._types: list[TypeNode] = list(types)
        self._by_name: dict[str, TypeNode] = {}
        self._methods: dict[DeclId, MethodSignature] = {}
        for node in self._types:
            # First definition wins (e.g. duplicated under #if/#else)
            self._by_name.setdefault(node.qualified_name, node)
            for method in node.methods:
                self._methods[method.decl_id] = method

    def types(self) -> list[TypeNode]:
        return list(self._types)

    def method(self, decl_id: DeclId) -> MethodSignature | None:
        return self._methods.get(decl_id)

    def lookup(self, name: str, scope: tuple[str, ...] = ()) -> TypeNode | None:
        """Find a type definition by name as seen from ``scope``.

        Tries the innermost enclosing scope first, then each outer scope.
        A leading ``::`` forces global lookup.
        """
        name = "".join(name.split())
        if name.startswith("::"):
            return self._by_name.get(name[2:])
        for depth in range(len(scope), -1, -1):
            candidate = "::".join((*scope[:depth], name))
            if candidate in self._by_name:
                return self._by_name[candidate]
        return None

    def resolve(self, base: BaseRef) -> TypeNode | None:
        """Resolve a base reference to its definition, or None if unknown."""
        return self.lookup(base.name, base.scope)

    def find_type(self, name: str) -> TypeNode | None:
        """Find a type by qualified name, falling back to a unique simple name."""
        if found := self.lookup(name):
            return found
        matches = [t for t in self._types if t.name == name]
        return matches[0] if len(matches) == 1 else None

    def type_at(self, offset: int) -> TypeNode | None:
        """Type selected by a cursor at ``offset``.

        The innermost type whose extent contains the offset, unless the
        offset falls inside one of that type's member declarations (then the
        selection is the member, not the type).
        """
        best: TypeNode | None = None
        for node in self._types:
            start, end = node.extent
            if start <= offset < end and (best is None or start >= best.extent[0]):
                best = node
        if best is None:
            return None
        for start, end in best.member_extents:
            if start <= offset < end:
                return None
        return best
