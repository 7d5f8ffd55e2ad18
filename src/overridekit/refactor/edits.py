"""Text edits produced by tweaks.

An Effect holds the edits for one source file together with a hash of the
text they were computed against, so a host can refuse to apply them to a
file that changed in between.
"""

from __future__ import annotations

import difflib
import hashlib
from dataclasses import dataclass, field

from overridekit.core.errors import InternalError, TweakError


def hash_content(content: str) -> str:
    """Hash content for snapshot checks."""
    return hashlib.sha256(content.encode()).hexdigest()[:12]


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Insert ``text`` at character ``offset``."""

    offset: int
    text: str


@dataclass
class Effect:
    """Edits to a single file. No edits means the tweak had nothing to do."""

    path: str
    source_hash: str
    edits: list[TextEdit] = field(default_factory=list)

    @property
    def is_noop(self) -> bool:
        return not any(edit.text for edit in self.edits)

    def apply_to(self, source: str) -> str:
        """Return ``source`` with the edits applied.

        Raises:
            TweakError: ``source`` is not the text the edits were computed for.
            InternalError: an edit points outside ``source``.
        """
        if hash_content(source) != self.source_hash:
            raise TweakError.stale_source(self.path)
        result = source
        # Back to front so earlier offsets stay valid
        for edit in sorted(self.edits, key=lambda e: e.offset, reverse=True):
            if not 0 <= edit.offset <= len(result):
                raise InternalError.unexpected(
                    "edit offset outside source", path=self.path, offset=edit.offset
                )
            result = result[: edit.offset] + edit.text + result[edit.offset :]
        return result

    def unified_diff(self, source: str, *, context: int = 3) -> str:
        updated = self.apply_to(source)
        return "".join(
            difflib.unified_diff(
                source.splitlines(keepends=True),
                updated.splitlines(keepends=True),
                fromfile=f"a/{self.path}",
                tofile=f"b/{self.path}",
                n=context,
            )
        )
