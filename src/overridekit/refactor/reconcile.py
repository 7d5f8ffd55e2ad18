"""Match inherited pure virtual methods against a type's own overrides."""

from __future__ import annotations

from collections.abc import Sequence

from overridekit.semantic.model import DeclId, MethodSignature, SemanticModel, TypeNode


def overridden_closure(derived: TypeNode, model: SemanticModel) -> set[DeclId]:
    """Every declaration overridden by a method of ``derived``, transitively.

    Follows "overrides an override" chains through the model, so redeclaring
    an intermediate override still satisfies the root declaration.
    """
    satisfied: set[DeclId] = set()
    pending = [target for method in derived.methods for target in method.overrides]
    while pending:
        decl_id = pending.pop()
        if decl_id in satisfied:
            continue
        satisfied.add(decl_id)
        method = model.method(decl_id)
        if method is not None:
            pending.extend(method.overrides)
    return satisfied


def reconcile(
    abstract_methods: Sequence[MethodSignature],
    derived: TypeNode,
    model: SemanticModel,
) -> list[MethodSignature]:
    """Abstract methods ``derived`` has not overridden yet.

    Order follows ``abstract_methods``; repeats of a declaration are dropped.
    Only recorded override edges count. A method in ``derived`` that merely
    looks like an abstract one (same text, no edge) does not satisfy it.
    """
    satisfied = overridden_closure(derived, model)
    seen: set[DeclId] = set()
    residual: list[MethodSignature] = []
    for method in abstract_methods:
        if method.decl_id in seen or method.decl_id in satisfied:
            continue
        seen.add(method.decl_id)
        residual.append(method)
    return residual
