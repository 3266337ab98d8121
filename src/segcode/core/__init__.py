"""
segcode Core - Models

Data classes and enums shared by the generator service, CLI and API.
"""

from .models import (
    BitOrder,
    EncodedEntry,
    EncodingConfig,
    GenerateResult,
    NumberFormat,
    OrderPreset,
    OutputStyle,
    Polarity,
    ScanMode,
)

__all__ = [
    'BitOrder',
    'EncodedEntry',
    'EncodingConfig',
    'GenerateResult',
    'NumberFormat',
    'OrderPreset',
    'OutputStyle',
    'Polarity',
    'ScanMode',
]
