"""Refactor module - selection-driven tweaks on C++ classes."""

from overridekit.refactor.edits import Effect, TextEdit
from overridekit.refactor.emit import AnchorKind, InsertionAnchor, choose_anchor, emit, render_method
from overridekit.refactor.hierarchy import collect_abstract_methods
from overridekit.refactor.reconcile import overridden_closure, reconcile
from overridekit.refactor.registry import TweakRegistry, default_registry
from overridekit.refactor.tweak import OverridePureVirtuals, Selection, Tweak

__all__ = [
    "AnchorKind",
    "Effect",
    "InsertionAnchor",
    "OverridePureVirtuals",
    "Selection",
    "TextEdit",
    "Tweak",
    "TweakRegistry",
    "choose_anchor",
    "collect_abstract_methods",
    "default_registry",
    "emit",
    "overridden_closure",
    "reconcile",
    "render_method",
]
