"""Table generation service — the single entry point used by CLI and API.

``generate()`` is a pure projection of (config, patterns, sample text)
onto source text.  It never raises for malformed configuration: each
problem is replaced by a safe default and reported as a warning string.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from ..core.models import (
    MAX_DIGITS,
    MIN_DIGITS,
    SEGMENT_BITS,
    EncodedEntry,
    EncodingConfig,
    GenerateResult,
    ScanMode,
)
from ..emitter import CodeEmitter, find_name_collisions
from ..encoding import apply_polarity, digit_select_values, encode, format_value
from ..patterns import DIGITS, PatternTable
from ..segments import FORWARD_ORDER, format_order, is_valid_order

log = logging.getLogger(__name__)


def normalize_config(config: EncodingConfig) -> Tuple[EncodingConfig, List[str]]:
    """Substitute defaults for an invalid order, empty charset or digit count.

    Returns the usable config and the warnings describing each substitution.
    """
    warnings: List[str] = []
    changes = {}

    if not is_valid_order(config.order):
        warnings.append(
            f"segment order {format_order(config.order)!r} is not a permutation "
            f"of a..g, dp; using {format_order(FORWARD_ORDER)}")
        changes['order'] = FORWARD_ORDER

    if not config.charset:
        warnings.append(f"charset is empty; using default digits {DIGITS}")
        changes['charset'] = tuple(DIGITS)

    clamped = max(MIN_DIGITS, min(MAX_DIGITS, config.digit_count))
    if clamped != config.digit_count:
        warnings.append(
            f"digit count {config.digit_count} out of range "
            f"[{MIN_DIGITS}, {MAX_DIGITS}]; using {clamped}")
        changes['digit_count'] = clamped

    for w in warnings:
        log.warning(w)
    return (config.with_changes(**changes) if changes else config), warnings


def preview_chars(config: EncodingConfig, sample_text: str = "") -> List[str]:
    """Characters shown by the preview panel.

    Static scan previews the charset.  Dynamic scan shows *sample_text*
    padded/truncated to the digit count, with characters outside the
    charset blanked.
    """
    if config.scan_mode is not ScanMode.DYNAMIC:
        return list(config.charset)
    n = config.digit_count
    padded = (sample_text or "").ljust(n)[:n]
    allowed = set(config.charset)
    return [ch if ch in allowed else ' ' for ch in padded]


def encode_chars(config: EncodingConfig, patterns: PatternTable,
                 chars: Iterable[str]) -> List[EncodedEntry]:
    """Encode *chars* under *config*, one entry per character."""
    entries = []
    for ch in chars:
        raw = encode(patterns.effective_pattern(ch), config.order, config.bit_order)
        value = apply_polarity(raw, config.polarity, SEGMENT_BITS)
        entries.append(EncodedEntry(
            char=ch,
            raw_value=raw,
            value=value,
            text=format_value(value, config.number_format, SEGMENT_BITS),
        ))
    return entries


def digit_select_entries(config: EncodingConfig) -> List[EncodedEntry]:
    """Digit-select masks, formatted with bit width = digit count."""
    bits = config.digit_count
    return [
        EncodedEntry(char=str(i), raw_value=v, value=v,
                     text=format_value(v, config.number_format, bits))
        for i, v in enumerate(digit_select_values(bits))
    ]


def generate(config: EncodingConfig, patterns: Optional[PatternTable] = None,
             sample_text: Iterable[str] = "") -> GenerateResult:
    """Produce the lookup-table source text for *config*."""
    patterns = patterns or PatternTable()
    config, warnings = normalize_config(config)

    for name, group in find_name_collisions(config.charset):
        msg = (f"characters {', '.join(repr(c) for c in group)} all map to "
               f"name {name!r}; later definitions duplicate earlier ones")
        log.warning(msg)
        warnings.append(msg)

    entries = encode_chars(config, patterns, config.charset)
    digit_entries = (digit_select_entries(config)
                     if config.scan_mode is ScanMode.DYNAMIC else [])
    code = CodeEmitter(config).emit(entries, digit_entries)

    log.debug("Generated %d entries (%s, %s, %s) with %d warning(s)",
              len(entries), config.output_style.value,
              config.number_format.value, config.scan_mode.value, len(warnings))

    return GenerateResult(
        code=code,
        warnings=warnings,
        entries=entries,
        digit_entries=digit_entries,
        preview=preview_chars(config, ''.join(sample_text)),
    )
