"""Character -> active-segment patterns with per-character overrides.

The built-in table is read-only.  User edits go into a separate override
map which is consulted first on lookup, so resetting a character simply
drops its override.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

from .segments import SEGMENT_SET, SEGMENTS

log = logging.getLogger(__name__)

ActiveSet = FrozenSet[str]

EMPTY: ActiveSet = frozenset()

BASE_PATTERNS: Mapping[str, ActiveSet] = MappingProxyType({
    '0': frozenset({'a', 'b', 'c', 'd', 'e', 'f'}),
    '1': frozenset({'b', 'c'}),
    '2': frozenset({'a', 'b', 'd', 'e', 'g'}),
    '3': frozenset({'a', 'b', 'c', 'd', 'g'}),
    '4': frozenset({'b', 'c', 'f', 'g'}),
    '5': frozenset({'a', 'c', 'd', 'f', 'g'}),
    '6': frozenset({'a', 'c', 'd', 'e', 'f', 'g'}),
    '7': frozenset({'a', 'b', 'c'}),
    '8': frozenset({'a', 'b', 'c', 'd', 'e', 'f', 'g'}),
    '9': frozenset({'a', 'b', 'c', 'd', 'f', 'g'}),
    'A': frozenset({'a', 'b', 'c', 'e', 'f', 'g'}),
    'B': frozenset({'c', 'd', 'e', 'f', 'g'}),
    'C': frozenset({'a', 'd', 'e', 'f'}),
    'D': frozenset({'b', 'c', 'd', 'e', 'g'}),
    'E': frozenset({'a', 'd', 'e', 'f', 'g'}),
    'F': frozenset({'a', 'e', 'f', 'g'}),
})

DIGITS = '0123456789'
HEX_LETTERS = 'ABCDEF'
# Characters offered by the charset picker, in display order
CHARSET_OPTIONS = DIGITS + HEX_LETTERS + ' '


def _check_segments(segments: Iterable[str]) -> ActiveSet:
    active = frozenset(segments)
    unknown = active - SEGMENT_SET
    if unknown:
        raise ValueError(f"unknown segment(s): {', '.join(sorted(unknown))}")
    return active


def sorted_segments(active: Iterable[str]) -> List[str]:
    """Segments of *active* in canonical a..dp order."""
    active = set(active)
    return [s for s in SEGMENTS if s in active]


class PatternTable:
    """Effective segment patterns: overrides layered over the built-in table."""

    def __init__(self, overrides: Optional[Mapping[str, Iterable[str]]] = None):
        self._overrides: Dict[str, ActiveSet] = {}
        for ch, segs in (overrides or {}).items():
            self.set_override(ch, segs)

    @property
    def overrides(self) -> Mapping[str, ActiveSet]:
        return MappingProxyType(self._overrides)

    def effective_pattern(self, char: str) -> ActiveSet:
        """Override if set, else built-in entry, else all segments off."""
        if char in self._overrides:
            return self._overrides[char]
        return BASE_PATTERNS.get(char, EMPTY)

    def has_override(self, char: str) -> bool:
        return char in self._overrides

    def set_override(self, char: str, segments: Iterable[str]) -> None:
        """Replace the override for *char* (no merge with the old one)."""
        self._overrides[char] = _check_segments(segments)

    def toggle_segment(self, char: str, segment: str) -> ActiveSet:
        """Flip *segment* in the effective pattern and store it as override."""
        if segment not in SEGMENT_SET:
            raise ValueError(f"unknown segment: {segment!r}")
        active = self.effective_pattern(char) ^ {segment}
        self._overrides[char] = active
        log.debug("Toggled %s on %r -> %s", segment, char, sorted_segments(active))
        return active

    def reset_override(self, char: str) -> None:
        """Drop the override so *char* reverts to its built-in pattern."""
        self._overrides.pop(char, None)

    def clear(self) -> None:
        self._overrides.clear()

    def to_dict(self) -> Dict[str, List[str]]:
        """Overrides as JSON-friendly ``{char: [segments]}``."""
        return {ch: sorted_segments(segs) for ch, segs in self._overrides.items()}

    def copy(self) -> 'PatternTable':
        return PatternTable(self._overrides)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatternTable):
            return NotImplemented
        return self._overrides == other._overrides

    def __repr__(self) -> str:
        return f"PatternTable(overrides={self.to_dict()!r})"
