"""Bit packing, polarity inversion and numeric rendering.

Pure functions with no character lookup; callers resolve a character to
its active-segment set first (see ``patterns.PatternTable``).
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from .core.models import SEGMENT_BITS, BitOrder, NumberFormat, Polarity

log = logging.getLogger(__name__)


def encode(active: Iterable[str], order: Sequence[str], bit_order: BitOrder) -> int:
    """Pack *active* segments into an integer.

    ``order[i]`` lands on bit ``len(order) - 1 - i`` for MSB-first and on
    bit ``i`` for LSB-first.
    """
    bit_order = BitOrder(bit_order)
    active = set(active)
    n = len(order)
    value = 0
    for i, seg in enumerate(order):
        if seg in active:
            bit = n - 1 - i if bit_order is BitOrder.MSB else i
            value |= 1 << bit
    return value


def apply_polarity(value: int, polarity: Polarity, bits: int = SEGMENT_BITS) -> int:
    """Invert *value* within *bits* for common-anode drive."""
    if Polarity(polarity) is Polarity.COMMON_ANODE:
        return ((1 << bits) - 1) ^ value
    return value


def reverse_bits(value: int, bits: int = SEGMENT_BITS) -> int:
    """Mirror the low *bits* of *value* (bit 0 <-> bit bits-1)."""
    out = 0
    for i in range(bits):
        if value & (1 << i):
            out |= 1 << (bits - 1 - i)
    return out


def format_value(value: int, kind: NumberFormat, bits: int = SEGMENT_BITS) -> str:
    """Render *value* as C literal text.

    ``dec`` is unpadded, ``hex`` is ``0x`` plus ceil(bits/4) upper-case
    digits, ``bin`` is ``0b`` plus exactly *bits* digits.
    """
    kind = NumberFormat(kind)
    if kind is NumberFormat.DEC:
        return str(value)
    if kind is NumberFormat.HEX:
        width = (bits + 3) // 4
        return f"0x{value:0{width}X}"
    return f"0b{value:0{bits}b}"


def parse_value(text: str) -> int:
    """Inverse of ``format_value`` for any of the three formats."""
    return int(text, 0)


def digit_select_values(digit_count: int) -> List[int]:
    """One-hot select masks for a multiplexed display, digit 0 first."""
    return [1 << i for i in range(digit_count)]
