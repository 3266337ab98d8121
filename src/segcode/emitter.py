"""C source text for segment lookup tables.

Three character-table styles are supported:

    array   static const char sevenseg_charset[] = "0123";
            static const uint8_t sevenseg_table[] = { /* 0 */ 0xFC, ... };
    macro   #define SEVENSEG_0 0xFC
    enum    enum SevenSegCode { SEVENSEG_0 = 0xFC, ... };

The digit-select table of a multiplexed display is always written as an
array, whatever the character-table style.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from .core.models import EncodedEntry, EncodingConfig, OutputStyle, ScanMode
from .segments import format_order

log = logging.getLogger(__name__)

PREFIX = 'SEVENSEG_'
CHARSET_NAME = 'sevenseg_charset'
TABLE_NAME = 'sevenseg_table'
DIGITS_NAME = 'sevenseg_digits'
ENUM_NAME = 'SevenSegCode'

_ASCII_ALNUM = frozenset('0123456789'
                         'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
                         'abcdefghijklmnopqrstuvwxyz')


def macro_name_for_char(ch: str) -> str:
    """Identifier fragment for *ch*: itself, ``SPACE`` or ``U<hex>``.

    Multi-code-point entries concatenate the fragment of each code point,
    which is why distinct entries can collide (``'℃'`` and ``'U2103'``).
    """
    if ch == ' ':
        return 'SPACE'
    name = ''.join(c if c in _ASCII_ALNUM else f"U{ord(c):X}" for c in ch)
    return name or 'UNK'


def find_name_collisions(chars: Sequence[str]) -> List[Tuple[str, List[str]]]:
    """Derived names shared by more than one character, in first-seen order."""
    seen: Dict[str, List[str]] = {}
    for ch in chars:
        seen.setdefault(macro_name_for_char(ch), []).append(ch)
    return [(name, group) for name, group in seen.items() if len(group) > 1]


_C_ESCAPES = {'\\': '\\\\', '"': '\\"', '\n': '\\n', '\r': '\\r', '\t': '\\t'}


def _c_escape(c: str) -> str:
    if c in _C_ESCAPES:
        return _C_ESCAPES[c]
    if c.isprintable():
        return c
    code = ord(c)
    # octal escapes stop after three digits, unlike \x
    if code < 0x100:
        return f"\\{code:03o}"
    if code < 0x10000:
        return f"\\u{code:04X}"
    return f"\\U{code:08X}"


def c_string_literal(chars: Sequence[str]) -> str:
    text = ''.join(_c_escape(c) for c in ''.join(chars))
    return f'"{text}"'


def c_comment_text(ch: str) -> str:
    """*ch* made safe inside ``/* */``: non-printables become ``U<hex>``."""
    text = ''.join(c if c.isprintable() else f"U{ord(c):X}" for c in ch)
    return text.replace('*/', '* /')


def c_uint_type(bits: int) -> str:
    """Smallest standard unsigned type holding *bits* bits."""
    for width in (8, 16, 32):
        if bits <= width:
            return f"uint{width}_t"
    return "uint64_t"


class CodeEmitter:
    """Composes header, character table and digit table for one config."""

    def __init__(self, config: EncodingConfig):
        self.config = config

    def header(self) -> List[str]:
        cfg = self.config
        return [
            f"// order: {format_order(cfg.order)}",
            f"// polarity: {cfg.polarity.value}",
            f"// bit_order: {cfg.bit_order.value}",
            f"// scan: {cfg.scan_mode.value}",
        ]

    def body(self, entries: Sequence[EncodedEntry]) -> List[str]:
        style = self.config.output_style
        if style is OutputStyle.MACRO:
            return self._macro_body(entries)
        if style is OutputStyle.ENUM:
            return self._enum_body(entries)
        return self._array_body(entries)

    @staticmethod
    def _array_body(entries: Sequence[EncodedEntry]) -> List[str]:
        lines = [
            f"static const char {CHARSET_NAME}[] = "
            f"{c_string_literal([e.char for e in entries])};",
            f"static const uint8_t {TABLE_NAME}[] = {{",
        ]
        lines.extend(f"  /* {c_comment_text(e.char)} */ {e.text},"
                     for e in entries)
        lines.append("};")
        return lines

    @staticmethod
    def _macro_body(entries: Sequence[EncodedEntry]) -> List[str]:
        return [f"#define {PREFIX}{macro_name_for_char(e.char)} {e.text}"
                for e in entries]

    @staticmethod
    def _enum_body(entries: Sequence[EncodedEntry]) -> List[str]:
        lines = [f"enum {ENUM_NAME} {{"]
        lines.extend(f"  {PREFIX}{macro_name_for_char(e.char)} = {e.text},"
                     for e in entries)
        lines.append("};")
        return lines

    def digit_table(self, digit_entries: Sequence[EncodedEntry]) -> List[str]:
        ctype = c_uint_type(self.config.digit_count)
        lines = [f"static const {ctype} {DIGITS_NAME}[] = {{"]
        lines.extend(f"  {e.text}," for e in digit_entries)
        lines.append("};")
        return lines

    def emit(self, entries: Sequence[EncodedEntry],
             digit_entries: Sequence[EncodedEntry] = ()) -> str:
        """Full text: header, blank line, body, then the digit table if dynamic."""
        lines = self.header() + [""] + self.body(entries)
        if self.config.scan_mode is ScanMode.DYNAMIC:
            lines += [""] + self.digit_table(digit_entries)
        return "\n".join(lines)
