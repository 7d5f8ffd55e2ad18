"""Tests for the host-owned tweak registry."""

from collections.abc import Callable

import pytest

from overridekit.core.errors import ErrorCode, TweakError
from overridekit.refactor.edits import Effect, hash_content
from overridekit.refactor.registry import TweakRegistry, default_registry
from overridekit.refactor.tweak import OverridePureVirtuals, Selection, Tweak
from overridekit.semantic.model import SemanticModel


class _AlwaysTweak(Tweak):
    id = "always"
    title = "Always available"

    def prepare(self, selection: Selection) -> bool:  # noqa: ARG002
        return True

    def apply(self, selection: Selection) -> Effect:
        model = selection.model
        return Effect(path=model.path, source_hash=hash_content(model.source))


class TestTweakRegistry:
    def test_register_and_get(self) -> None:
        registry = TweakRegistry()
        tweak = _AlwaysTweak()

        assert registry.register(tweak) is tweak
        assert registry.get("always") is tweak
        assert "always" in registry
        assert len(registry) == 1

    def test_duplicate_id_rejected(self) -> None:
        registry = TweakRegistry([_AlwaysTweak()])

        with pytest.raises(TweakError) as exc_info:
            registry.register(_AlwaysTweak())

        assert exc_info.value.code is ErrorCode.REFACTOR_DUPLICATE_TWEAK

    def test_unknown_id_rejected(self) -> None:
        with pytest.raises(TweakError) as exc_info:
            TweakRegistry().get("missing")

        assert exc_info.value.code is ErrorCode.REFACTOR_UNKNOWN_TWEAK

    def test_registries_are_independent(self) -> None:
        first = TweakRegistry([_AlwaysTweak()])
        second = TweakRegistry()

        assert "always" in first
        assert "always" not in second

    def test_get_all_in_registration_order(self) -> None:
        always = _AlwaysTweak()
        override = OverridePureVirtuals()

        registry = TweakRegistry([override, always])

        assert registry.get_all() == [override, always]

    def test_available_filters_by_prepare(self, parse: Callable[..., SemanticModel]) -> None:
        model = parse("class Alone {\npublic:\n};\n")
        registry = TweakRegistry([OverridePureVirtuals(), _AlwaysTweak()])

        available = registry.available(Selection(model, 0))

        assert [t.id for t in available] == ["always"]


class TestDefaultRegistry:
    def test_holds_override_tweak(self) -> None:
        registry = default_registry()

        assert isinstance(registry.get("override-pure-virtuals"), OverridePureVirtuals)
        assert len(registry) == 1
