"""Tweak registry owned by the host.

Hosts create a registry, register the tweaks they want to offer, and ask it
which ones apply to a selection. There is no global instance.
"""

from __future__ import annotations

from collections.abc import Iterable

from overridekit.config.models import OverrideKitConfig
from overridekit.core.errors import TweakError
from overridekit.refactor.tweak import OverridePureVirtuals, Selection, Tweak


class TweakRegistry:
    """Tweaks by id, in registration order."""

    def __init__(self, tweaks: Iterable[Tweak] = ()) -> None:
        self._tweaks: dict[str, Tweak] = {}
        for tweak in tweaks:
            self.register(tweak)

    def register(self, tweak: Tweak) -> Tweak:
        if tweak.id in self._tweaks:
            raise TweakError.duplicate_tweak(tweak.id)
        self._tweaks[tweak.id] = tweak
        return tweak

    def get(self, tweak_id: str) -> Tweak:
        try:
            return self._tweaks[tweak_id]
        except KeyError:
            raise TweakError.unknown_tweak(tweak_id) from None

    def get_all(self) -> list[Tweak]:
        return list(self._tweaks.values())

    def available(self, selection: Selection) -> list[Tweak]:
        """Tweaks whose ``prepare`` accepts ``selection``."""
        return [tweak for tweak in self._tweaks.values() if tweak.prepare(selection)]

    def __contains__(self, tweak_id: object) -> bool:
        return tweak_id in self._tweaks

    def __len__(self) -> int:
        return len(self._tweaks)


def default_registry(config: OverrideKitConfig | None = None) -> TweakRegistry:
    """A registry holding every tweak this package provides."""
    return TweakRegistry([OverridePureVirtuals(config)])
