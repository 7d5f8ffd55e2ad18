"""Render missing overrides and place them in the class body.

Each method becomes one line::

    <return> <name>(<type> <name>, ...)[ const][ noexcept] override;

or, with the "stub" body style, a body that stops compilation until it is
replaced::

    <return> <name>(...) override { static_assert(false, "`<name>` is unimplemented."); }

Lines go right after the last ``public:`` label of the class; without one,
right after the opening brace; without that, right before the closing brace.
The inserted block starts with a newline and ends every line with one, so the
original text is untouched outside the inserted span.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import structlog

from overridekit.config.models import EmitterConfig
from overridekit.refactor.edits import Effect, TextEdit, hash_content
from overridekit.semantic.model import Access, MethodSignature, SemanticModel, TypeNode

log = structlog.get_logger(__name__)


class AnchorKind(str, Enum):
    PUBLIC_SECTION = "public_section"
    OPEN_BRACE = "open_brace"
    CLOSE_BRACE = "close_brace"


@dataclass(frozen=True, slots=True)
class InsertionAnchor:
    kind: AnchorKind
    offset: int  # where inserted text begins


def render_parameters(method: MethodSignature, placeholder_prefix: str | None = None) -> str:
    rendered: list[str] = []
    for index, param in enumerate(method.params, start=1):
        name = param.name
        if not name and placeholder_prefix and param.type != "...":
            name = f"{placeholder_prefix}{index}"
        rendered.append(f"{param.type} {name}" if name else param.type)
    return ", ".join(rendered)


def render_method(method: MethodSignature, config: EmitterConfig | None = None) -> str:
    config = config or EmitterConfig()
    params = render_parameters(method, config.placeholder_prefix)
    qualifier = " const" if method.is_const else ""
    if method.exception_spec:
        qualifier += f" {method.exception_spec}"
    head = f"{method.return_type} {method.name}({params}){qualifier} override"
    if config.body_style == "stub":
        body = f'{{ static_assert(false, "`{method.name}` is unimplemented."); }}'
        return f"{config.indent}{head} {body}"
    return f"{config.indent}{head};"


def choose_anchor(derived: TypeNode) -> InsertionAnchor | None:
    anchors = derived.anchors
    if (section := anchors.last_section(Access.PUBLIC)) is not None:
        return InsertionAnchor(AnchorKind.PUBLIC_SECTION, section.colon + 1)
    if anchors.open_brace is not None:
        return InsertionAnchor(AnchorKind.OPEN_BRACE, anchors.open_brace + 1)
    if anchors.close_brace is not None:
        return InsertionAnchor(AnchorKind.CLOSE_BRACE, anchors.close_brace)
    return None


def emit(
    residual: Sequence[MethodSignature],
    derived: TypeNode,
    model: SemanticModel,
    config: EmitterConfig | None = None,
) -> Effect:
    """Single insertion adding ``residual`` to ``derived``, in order.

    An empty residual, or a type without any brace anchor, gives an effect
    with no edits.
    """
    effect = Effect(path=model.path, source_hash=hash_content(model.source))
    if not residual:
        return effect
    anchor = choose_anchor(derived)
    if anchor is None:
        log.warning("no_insertion_anchor", type=derived.qualified_name)
        return effect
    lines = [render_method(method, config) for method in residual]
    effect.edits.append(TextEdit(offset=anchor.offset, text="\n" + "".join(f"{line}\n" for line in lines)))
    log.debug(
        "overrides_emitted",
        type=derived.qualified_name,
        anchor=anchor.kind.value,
        offset=anchor.offset,
        count=len(lines),
    )
    return effect
