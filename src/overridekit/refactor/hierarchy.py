"""Collect the pure virtual methods a type inherits."""

from __future__ import annotations

import structlog

from overridekit.semantic.model import BaseRef, MethodSignature, SemanticModel, TypeNode

log = structlog.get_logger(__name__)

DEFAULT_MAX_DEPTH = 64


def collect_abstract_methods(
    root: TypeNode,
    model: SemanticModel,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[MethodSignature]:
    """Pure virtual methods declared anywhere in ``root``'s base graph.

    Depth-first and pre-order: each base contributes its pure methods in
    declaration order, then its own bases are visited in declaration order.
    ``root`` itself is not visited. A base reachable through several paths
    contributes once per path; callers dedupe by declaration identity.
    Bases that do not resolve to a definition contribute nothing.
    """
    result: list[MethodSignature] = []
    pending: list[tuple[BaseRef, int]] = [(base, 1) for base in reversed(root.bases)]
    while pending:
        ref, depth = pending.pop()
        if depth > max_depth:
            log.warning("base_depth_exceeded", type=root.qualified_name, base=ref.name, depth=depth)
            continue
        base = model.resolve(ref)
        if base is None:
            log.debug("base_unresolved", type=root.qualified_name, base=ref.name)
            continue
        result.extend(base.pure_methods())
        pending.extend((grand, depth + 1) for grand in reversed(base.bases))
    return result
