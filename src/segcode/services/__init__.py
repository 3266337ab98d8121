"""segcode Services — core hexagon (pure Python, no CLI/HTTP).

Business logic shared by all driving adapters:
- cli.py (argparse CLI)
- api.py (FastAPI REST)
"""

from .generator import generate, normalize_config, preview_chars
from .session import GeneratorSession

__all__ = [
    'GeneratorSession',
    'generate',
    'normalize_config',
    'preview_chars',
]
