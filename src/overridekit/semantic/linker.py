"""Build a SemanticModel from parsed drafts.

Parsers emit mutable ``TypeDraft``/``MethodDraft`` records with syntax-level
facts only. ``link`` adds the semantic ones:

- override edges: a member function overrides the nearest declaration with
  the same name, parameter-type list and const qualification found along each
  base path, provided that declaration is virtual (explicitly or because it
  overrides something itself);
- implicit virtual-ness of overriding functions;
- the transitive "is abstract" flag of every type.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from overridekit.semantic.model import (
    BaseRef,
    DeclId,
    MethodSignature,
    Param,
    SemanticModel,
    TypeAnchors,
    TypeKind,
    TypeNode,
)

log = structlog.get_logger(__name__)

_PUNCT_SPACE_RE = re.compile(r"\s*([*&,<>()\[\]])\s*")
_WS_RE = re.compile(r"\s+")
_CONST_RE = re.compile(r"(^|\s)const(\s|$)")

# Bound on base-chain walks; only reachable with cyclic (ill-formed) input.
_MAX_WALK_DEPTH = 256


@dataclass
class MethodDraft:
    name: str
    return_type: str = "void"
    params: list[Param] = field(default_factory=list)
    is_const: bool = False
    exception_spec: str = ""
    is_pure: bool = False
    is_virtual: bool = False
    decl_id: DeclId | None = None


@dataclass
class TypeDraft:
    name: str
    kind: TypeKind = TypeKind.CLASS
    scope: tuple[str, ...] = ()
    bases: list[BaseRef] = field(default_factory=list)
    methods: list[MethodDraft] = field(default_factory=list)
    anchors: TypeAnchors = field(default_factory=TypeAnchors)
    extent: tuple[int, int] = (0, 0)
    member_extents: list[tuple[int, int]] = field(default_factory=list)
    decl_id: DeclId | None = None

    @property
    def qualified_name(self) -> str:
        return "::".join((*self.scope, self.name))


def normalize_type(text: str) -> str:
    """Canonical spelling of a parameter type for signature comparison.

    Whitespace is collapsed and top-level const on by-value parameters is
    dropped, since it is not part of the function type.
    """
    canon = _PUNCT_SPACE_RE.sub(r"\1", text.strip())
    canon = _WS_RE.sub(" ", canon)
    last_marker = max(canon.rfind("*"), canon.rfind("&"))
    if last_marker < 0:
        return _CONST_RE.sub(" ", canon).strip()
    # Only a const after the last pointer marker is top-level
    head, tail = canon[: last_marker + 1], canon[last_marker + 1 :]
    return head + _CONST_RE.sub(" ", tail).strip()


def signature_key(draft: MethodDraft) -> tuple[str, tuple[str, ...], bool]:
    return (draft.name, tuple(normalize_type(p.type) for p in draft.params), draft.is_const)


class _Linker:
    def __init__(self, drafts: list[TypeDraft]) -> None:
        self._drafts = drafts
        self._by_name: dict[str, TypeDraft] = {}
        for index, draft in enumerate(drafts):
            if draft.decl_id is None:
                draft.decl_id = DeclId(f"{draft.qualified_name}#{index}")
            for position, method in enumerate(draft.methods):
                if method.decl_id is None:
                    method.decl_id = DeclId(f"{draft.decl_id}::{method.name}#{position}")
            self._by_name.setdefault(draft.qualified_name, draft)
        self._edges: dict[DeclId, tuple[DeclId, ...]] = {}
        self._virtual: dict[DeclId, bool] = {}
        self._methods: dict[DeclId, tuple[TypeDraft, MethodDraft]] = {
            m.decl_id: (d, m) for d in drafts for m in d.methods  # type: ignore[misc]
        }
        self._in_progress: set[DeclId] = set()

    def resolve(self, base: BaseRef) -> TypeDraft | None:
        name = "".join(base.name.split())
        if name.startswith("::"):
            return self._by_name.get(name[2:])
        for depth in range(len(base.scope), -1, -1):
            candidate = "::".join((*base.scope[:depth], name))
            if candidate in self._by_name:
                return self._by_name[candidate]
        return None

    def edges(self, owner: TypeDraft, method: MethodDraft) -> tuple[DeclId, ...]:
        assert method.decl_id is not None
        if method.decl_id in self._edges:
            return self._edges[method.decl_id]
        if method.decl_id in self._in_progress:
            return ()
        self._in_progress.add(method.decl_id)
        key = signature_key(method)
        found: list[DeclId] = []
        for base in owner.bases:
            target = self.resolve(base)
            if target is None:
                continue
            for decl_id in self._nearest(target, key, depth=1):
                if decl_id not in found:
                    found.append(decl_id)
        self._in_progress.discard(method.decl_id)
        self._edges[method.decl_id] = tuple(found)
        return self._edges[method.decl_id]

    def is_virtual(self, owner: TypeDraft, method: MethodDraft) -> bool:
        assert method.decl_id is not None
        if method.decl_id not in self._virtual:
            self._virtual[method.decl_id] = (
                method.is_virtual or method.is_pure or bool(self.edges(owner, method))
            )
        return self._virtual[method.decl_id]

    def _nearest(
        self,
        draft: TypeDraft,
        key: tuple[str, tuple[str, ...], bool],
        depth: int,
    ) -> list[DeclId]:
        """Virtual declarations matching ``key`` closest to ``draft`` on each path."""
        if depth > _MAX_WALK_DEPTH:
            log.warning("base_chain_too_deep", type=draft.qualified_name)
            return []
        for method in draft.methods:
            if signature_key(method) == key:
                if self.is_virtual(draft, method):
                    return [method.decl_id]  # type: ignore[list-item]
                # A non-virtual declaration hides the bases' ones
                return []
        found: list[DeclId] = []
        for base in draft.bases:
            target = self.resolve(base)
            if target is not None:
                found.extend(self._nearest(target, key, depth + 1))
        return found

    def ancestors(self, draft: TypeDraft) -> list[TypeDraft]:
        """``draft`` followed by every reachable base (each once)."""
        seen: set[str] = set()
        order: list[TypeDraft] = []
        stack = [draft]
        while stack:
            current = stack.pop()
            if current.qualified_name in seen:
                continue
            seen.add(current.qualified_name)
            order.append(current)
            for base in reversed(current.bases):
                target = self.resolve(base)
                if target is not None:
                    stack.append(target)
        return order

    def is_abstract(self, draft: TypeDraft) -> bool:
        lineage = self.ancestors(draft)
        implemented: set[DeclId] = set()
        for owner in lineage:
            for method in owner.methods:
                if not method.is_pure:
                    implemented.update(self.closure(method.decl_id))  # type: ignore[arg-type]
        return any(
            m.is_pure and m.decl_id not in implemented for owner in lineage for m in owner.methods
        )

    def closure(self, decl_id: DeclId) -> set[DeclId]:
        result: set[DeclId] = set()
        pending = list(self.edges(*self._methods[decl_id]))
        while pending:
            current = pending.pop()
            if current in result:
                continue
            result.add(current)
            pending.extend(self.edges(*self._methods[current]))
        return result

    def build(self) -> list[TypeNode]:
        nodes: list[TypeNode] = []
        for draft in self._drafts:
            methods = tuple(
                MethodSignature(
                    decl_id=m.decl_id,  # type: ignore[arg-type]
                    owner=draft.qualified_name,
                    name=m.name,
                    return_type=m.return_type,
                    params=tuple(m.params),
                    is_const=m.is_const,
                    exception_spec=m.exception_spec,
                    is_pure=m.is_pure,
                    is_virtual=self.is_virtual(draft, m),
                    overrides=self.edges(draft, m),
                )
                for m in draft.methods
            )
            nodes.append(
                TypeNode(
                    decl_id=draft.decl_id,  # type: ignore[arg-type]
                    name=draft.name,
                    qualified_name=draft.qualified_name,
                    kind=draft.kind,
                    bases=tuple(draft.bases),
                    methods=methods,
                    is_abstract=self.is_abstract(draft),
                    anchors=draft.anchors,
                    extent=draft.extent,
                    member_extents=tuple(draft.member_extents),
                )
            )
        return nodes


def link(
    drafts: Iterable[TypeDraft],
    *,
    source: str = "",
    path: str = "<memory>",
) -> SemanticModel:
    """Resolve bases and overrides across ``drafts`` and freeze the result."""
    linker = _Linker(list(drafts))
    nodes = linker.build()
    log.debug(
        "model_linked",
        path=path,
        types=len(nodes),
        abstract=sum(1 for n in nodes if n.is_abstract),
    )
    return SemanticModel(nodes, source=source, path=path)
