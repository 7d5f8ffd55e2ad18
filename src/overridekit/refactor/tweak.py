"""Tweaks: refactorings offered on a selection.

A host checks ``prepare(selection)`` to decide whether to offer a tweak and
calls ``apply(selection)`` when the user picks it. Tweaks keep no state
between the two calls; each recomputes from the selection's model snapshot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import structlog

from overridekit.config.models import OverrideKitConfig
from overridekit.core.errors import TweakError
from overridekit.core.logging import set_request_id
from overridekit.refactor.edits import Effect
from overridekit.refactor.emit import choose_anchor, emit
from overridekit.refactor.hierarchy import collect_abstract_methods
from overridekit.refactor.reconcile import reconcile
from overridekit.semantic.model import MethodSignature, SemanticModel, TypeNode

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Selection:
    """A cursor position in the text a model was built from."""

    model: SemanticModel
    offset: int

    @classmethod
    def of_type(cls, model: SemanticModel, node: TypeNode) -> Selection:
        """Selection on the head of ``node`` (where its name is written)."""
        return cls(model=model, offset=node.extent[0])

    def selected_type(self) -> TypeNode | None:
        return self.model.type_at(self.offset)


class Tweak(ABC):
    """Base class for selection-driven refactorings."""

    id: str
    title: str
    kind: str = "refactor"

    @abstractmethod
    def prepare(self, selection: Selection) -> bool:
        """Whether the tweak can be offered for ``selection``."""

    @abstractmethod
    def apply(self, selection: Selection) -> Effect:
        """Compute the edits. Only valid where ``prepare`` returned True."""


@dataclass(frozen=True, slots=True)
class OverridePlan:
    derived: TypeNode
    residual: list[MethodSignature]


class OverridePureVirtuals(Tweak):
    """Declare every inherited pure virtual method the class does not override."""

    id = "override-pure-virtuals"
    title = "Override pure virtual methods"

    def __init__(self, config: OverrideKitConfig | None = None) -> None:
        self._config = config or OverrideKitConfig()

    def plan(self, selection: Selection) -> OverridePlan | None:
        """Selected class and its missing overrides, or None if not a class."""
        derived = selection.selected_type()
        if derived is None:
            return None
        inherited = collect_abstract_methods(
            derived,
            selection.model,
            max_depth=self._config.collector.max_depth,
        )
        return OverridePlan(derived=derived, residual=reconcile(inherited, derived, selection.model))

    def prepare(self, selection: Selection) -> bool:
        set_request_id()
        derived = selection.selected_type()
        if derived is None:
            return False
        has_abstract_base = any(
            (base := selection.model.resolve(ref)) is not None and base.is_abstract
            for ref in derived.bases
        )
        if not has_abstract_base or choose_anchor(derived) is None:
            return False
        plan = self.plan(selection)
        available = plan is not None and bool(plan.residual)
        log.debug("tweak_prepared", tweak=self.id, type=derived.qualified_name, available=available)
        return available

    def apply(self, selection: Selection) -> Effect:
        set_request_id()
        plan = self.plan(selection)
        if plan is None:
            raise TweakError.not_applicable(self.id, f"no class at offset {selection.offset}")
        log.info(
            "tweak_applied",
            tweak=self.id,
            type=plan.derived.qualified_name,
            methods=[m.name for m in plan.residual],
        )
        return emit(plan.residual, plan.derived, selection.model, self._config.emitter)
