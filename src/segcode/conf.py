"""Saved defaults for the segcode CLI.

Config is stored at ~/.config/segcode/config.json (XDG-compliant) and
holds the last-used generator options plus per-character overrides:

    {
      "order": "a b c d e f g dp",
      "bit_order": "msb",
      "polarity": "common_cathode",
      "number_format": "hex",
      "output_style": "array",
      "scan_mode": "static",
      "digit_count": 4,
      "charset": "0123456789",
      "sample_text": "0123",
      "overrides": {"7": ["a", "b", "c", "f"]}
    }

Usage:
    from segcode.conf import load_config, config_from_dict

    config, patterns, sample = config_from_dict(load_config())
"""
from __future__ import annotations

import json
import logging
import os
from enum import Enum
from typing import Any, Dict, Tuple, Type

from .core.models import (
    BitOrder,
    EncodingConfig,
    NumberFormat,
    OutputStyle,
    Polarity,
    ScanMode,
)
from .patterns import PatternTable
from .segments import InvalidOrder, format_order, parse_segment_order

log = logging.getLogger(__name__)

# =========================================================================
# Config file location (XDG-compliant)
# =========================================================================

_XDG_CONFIG = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
CONFIG_DIR = os.path.join(_XDG_CONFIG, 'segcode')
CONFIG_PATH = os.path.join(CONFIG_DIR, 'config.json')

DEFAULT_SAMPLE_TEXT = "0123"

_ENUM_KEYS: Dict[str, Type[Enum]] = {
    'bit_order': BitOrder,
    'polarity': Polarity,
    'number_format': NumberFormat,
    'output_style': OutputStyle,
    'scan_mode': ScanMode,
}


# =========================================================================
# Low-level config persistence
# =========================================================================

def load_config() -> dict:
    """Load user config from disk. Returns empty dict on missing/corrupt file."""
    try:
        with open(CONFIG_PATH, 'r') as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict):
    """Save user config to disk."""
    os.makedirs(CONFIG_DIR, exist_ok=True)
    with open(CONFIG_PATH, 'w') as f:
        json.dump(config, f, indent=2, ensure_ascii=False)


# =========================================================================
# dict <-> EncodingConfig
# =========================================================================

def config_from_dict(data: Dict[str, Any]) -> Tuple[EncodingConfig, PatternTable, str]:
    """Build generator inputs from a saved dict.

    Missing keys take defaults; bad values are logged and skipped so a
    hand-edited file never stops the CLI.
    """
    fields: Dict[str, Any] = {}

    if 'order' in data:
        try:
            fields['order'] = parse_segment_order(str(data['order']))
        except InvalidOrder as e:
            log.warning("Ignoring saved order: %s", e)

    for key, enum_cls in _ENUM_KEYS.items():
        if key in data:
            try:
                fields[key] = enum_cls(data[key])
            except ValueError:
                log.warning("Ignoring saved %s=%r", key, data[key])

    if 'digit_count' in data:
        try:
            fields['digit_count'] = int(data['digit_count'])
        except (TypeError, ValueError):
            log.warning("Ignoring saved digit_count=%r", data['digit_count'])

    if isinstance(data.get('charset'), str):
        fields['charset'] = tuple(data['charset'])

    patterns = PatternTable()
    overrides = data.get('overrides') or {}
    if isinstance(overrides, dict):
        for ch, segs in overrides.items():
            try:
                patterns.set_override(ch, segs)
            except (TypeError, ValueError) as e:
                log.warning("Ignoring override for %r: %s", ch, e)

    sample = data.get('sample_text', DEFAULT_SAMPLE_TEXT)
    if not isinstance(sample, str):
        sample = DEFAULT_SAMPLE_TEXT

    return EncodingConfig(**fields), patterns, sample


def config_to_dict(config: EncodingConfig, patterns: PatternTable,
                   sample_text: str = DEFAULT_SAMPLE_TEXT) -> Dict[str, Any]:
    """Inverse of ``config_from_dict``."""
    data: Dict[str, Any] = {'order': format_order(config.order, ' ')}
    for key in _ENUM_KEYS:
        data[key] = getattr(config, key).value
    data['digit_count'] = config.digit_count
    data['charset'] = ''.join(config.charset)
    data['sample_text'] = sample_text
    data['overrides'] = patterns.to_dict()
    return data
