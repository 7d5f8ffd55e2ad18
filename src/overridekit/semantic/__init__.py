"""Semantic model of C++ class hierarchies."""

from overridekit.semantic.cpp import CppParser
from overridekit.semantic.linker import MethodDraft, TypeDraft, link
from overridekit.semantic.model import (
    Access,
    AccessSection,
    BaseRef,
    DeclId,
    MethodSignature,
    Param,
    SemanticModel,
    TypeAnchors,
    TypeKind,
    TypeNode,
)

__all__ = [
    "Access",
    "AccessSection",
    "BaseRef",
    "CppParser",
    "DeclId",
    "MethodDraft",
    "MethodSignature",
    "Param",
    "SemanticModel",
    "TypeAnchors",
    "TypeDraft",
    "TypeKind",
    "TypeNode",
    "link",
]
