"""
Secure Password Generator package.
"""

__version__ = "0.1.0"

from .config import GenerationConfig, DEFAULT_CONFIG, clamp_length
from .generator import (
    GenerationResult,
    generate_batch,
    generate_one,
    generate_with_meta,
)
from .random_source import RandomSource, SeededRandomSource, SystemRandomSource

__all__ = [
    "GenerationConfig",
    "DEFAULT_CONFIG",
    "GenerationResult",
    "RandomSource",
    "SeededRandomSource",
    "SystemRandomSource",
    "clamp_length",
    "generate_batch",
    "generate_one",
    "generate_with_meta",
]
