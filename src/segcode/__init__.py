"""
segcode - Seven-segment lookup table generator

Turns a character set, segment wiring order, drive polarity and output
style into C lookup tables for display firmware.

Features:
- Configurable segment order (presets or free-form text) and MSB/LSB packing
- Common-cathode / common-anode drive
- Binary, decimal or hex literals; array, #define or enum output
- Digit-select table for dynamically scanned displays
- Per-character segment overrides

Usage:
    # As a library
    from segcode import EncodingConfig, generate
    result = generate(EncodingConfig(charset=tuple("0123")))
    print(result.code)

    # Command line
    segcode generate --format hex
"""

from segcode.__version__ import __version__
from segcode.core.models import (
    BitOrder,
    EncodingConfig,
    NumberFormat,
    OutputStyle,
    Polarity,
    ScanMode,
)
from segcode.patterns import PatternTable
from segcode.segments import InvalidOrder, parse_segment_order
from segcode.services import GeneratorSession, generate

__all__ = [
    # Version
    "__version__",
    # Config
    "EncodingConfig",
    "BitOrder",
    "Polarity",
    "NumberFormat",
    "OutputStyle",
    "ScanMode",
    # Patterns / order
    "PatternTable",
    "InvalidOrder",
    "parse_segment_order",
    # Generation
    "generate",
    "GeneratorSession",
]
