"""Segment identifiers and segment-order parsing.

A seven-segment cell has seven bars (``a``-``g``) plus the decimal point
(``dp``).  Wiring differs between boards, so the mapping of segments to
bit positions is expressed as a *segment order*: a permutation of all
eight identifiers.

Layout::

     aaa
    f   b
     ggg
    e   c
     ddd  dp
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Tuple

log = logging.getLogger(__name__)

SEGMENTS: Tuple[str, ...] = ('a', 'b', 'c', 'd', 'e', 'f', 'g', 'dp')
SEGMENT_SET = frozenset(SEGMENTS)

FORWARD_ORDER: Tuple[str, ...] = SEGMENTS
REVERSE_ORDER: Tuple[str, ...] = tuple(reversed(SEGMENTS))

# Token aliases accepted in hand-typed orders
ALIASES = {'p': 'dp'}

_SPLIT_RE = re.compile(r'[\s,]+')


class InvalidOrder(ValueError):
    """Segment-order text is not a permutation of a..g, dp."""

    def __init__(self, text: str, tokens: Iterable[str] = ()):
        self.text = text
        self.tokens = tuple(tokens)
        super().__init__(
            f"invalid segment order {text!r}: expected each of "
            f"{', '.join(SEGMENTS)} exactly once"
        )


def parse_segment_order(text: str) -> Tuple[str, ...]:
    """Parse free-form order text into a canonical segment order.

    Tokens are separated by whitespace or commas and matched
    case-insensitively; ``p`` is accepted for ``dp``.  Repeated tokens
    collapse onto their first occurrence.

    Raises:
        InvalidOrder: the unique tokens are not exactly the 8 segments.
    """
    tokens = [t.strip() for t in _SPLIT_RE.split(text.lower())]
    tokens = [ALIASES.get(t, t) for t in tokens if t]
    unique = tuple(dict.fromkeys(tokens))

    if len(unique) != len(SEGMENTS) or not SEGMENT_SET.issuperset(unique):
        log.debug("Rejected segment order %r -> %s", text, unique)
        raise InvalidOrder(text, unique)
    return unique


def is_valid_order(order: Iterable[str]) -> bool:
    """True if *order* is a permutation of the 8 segment identifiers."""
    order = tuple(order)
    return len(order) == len(SEGMENTS) and set(order) == SEGMENT_SET


def format_order(order: Iterable[str], sep: str = ', ') -> str:
    return sep.join(order)
