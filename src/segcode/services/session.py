"""Interactive editing session: order presets, overrides, sample text.

Pure Python, no UI dependencies.  Holds the mutable inputs a front end
edits (custom order text, per-character overrides, the character being
edited) and rebuilds an immutable ``EncodingConfig`` on each change.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..core.models import EncodingConfig, GenerateResult, OrderPreset
from ..patterns import DIGITS, ActiveSet, PatternTable
from ..segments import (
    FORWARD_ORDER,
    REVERSE_ORDER,
    InvalidOrder,
    format_order,
    parse_segment_order,
)
from .generator import generate

log = logging.getLogger(__name__)

ORDER_HINT = ("segment order must list a, b, c, d, e, f, g, dp exactly once; "
              "keeping previous order")


class GeneratorSession:
    """State behind one editor window.

    Orchestrates:
    - Order selection (forward/reverse presets, custom text with fallback)
    - Config edits (each returns a fresh EncodingConfig)
    - Segment editing for the selected character (toggle/reset)
    - Generation with the session's diagnostics attached
    """

    def __init__(self, config: Optional[EncodingConfig] = None,
                 patterns: Optional[PatternTable] = None,
                 sample_text: str = "0123") -> None:
        self.config = config or EncodingConfig()
        self.patterns = patterns or PatternTable()
        self.sample_text = sample_text
        self.preset = OrderPreset.FORWARD
        self.custom_order = format_order(self.config.order, ' ')
        self.order_error: Optional[str] = None
        self._edit_char = "0"

    # ── Order ───────────────────────────────────────────────────────

    def select_preset(self, preset: OrderPreset) -> None:
        self.preset = OrderPreset(preset)
        if self.preset is OrderPreset.FORWARD:
            self._set_order(FORWARD_ORDER)
        elif self.preset is OrderPreset.REVERSE:
            self._set_order(REVERSE_ORDER)
        else:
            self.set_custom_order(self.custom_order)

    def set_custom_order(self, text: str) -> bool:
        """Parse *text* as the order; keep the last valid one on failure."""
        self.custom_order = text
        try:
            order = parse_segment_order(text)
        except InvalidOrder as e:
            log.info("%s", e)
            self.order_error = ORDER_HINT
            return False
        self._set_order(order)
        return True

    def _set_order(self, order) -> None:
        self.config = self.config.with_changes(order=tuple(order))
        self.order_error = None

    # ── Config ──────────────────────────────────────────────────────

    def update(self, **changes) -> EncodingConfig:
        """Replace config fields (bit_order, polarity, charset, ...)."""
        self.config = self.config.with_changes(**changes)
        return self.config

    def set_charset(self, chars: Iterable[str]) -> None:
        self.update(charset=tuple(chars))

    def set_sample_text(self, text: str) -> None:
        self.sample_text = text

    @property
    def available_chars(self) -> List[str]:
        """Charset after the empty-charset fallback."""
        return list(self.config.charset) or list(DIGITS)

    # ── Segment editor ──────────────────────────────────────────────

    @property
    def edit_char(self) -> str:
        chars = self.available_chars
        return self._edit_char if self._edit_char in chars else chars[0]

    @edit_char.setter
    def edit_char(self, ch: str) -> None:
        self._edit_char = ch

    def current_pattern(self) -> ActiveSet:
        return self.patterns.effective_pattern(self.edit_char)

    def toggle_segment(self, segment: str) -> ActiveSet:
        return self.patterns.toggle_segment(self.edit_char, segment)

    def reset_char(self) -> None:
        self.patterns.reset_override(self.edit_char)

    # ── Output ──────────────────────────────────────────────────────

    def generate(self) -> GenerateResult:
        result = generate(self.config, self.patterns, self.sample_text)
        if self.order_error:
            result.warnings.insert(0, self.order_error)
        return result
