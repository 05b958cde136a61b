"""
Configuration for the Secure Password Generator.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import replace as _replace

# Length bounds accepted by the generator (inclusive).
MIN_LENGTH = 10
MAX_LENGTH = 100

# How many passwords one "generate" click produces.
DEFAULT_BATCH_SIZE = 5

DEFAULT_SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"


def clamp_length(value: int) -> int:
    """
    Clamp a requested length into [MIN_LENGTH, MAX_LENGTH].
    """
    return max(MIN_LENGTH, min(MAX_LENGTH, int(value)))


@dataclass(frozen=True)
class GenerationConfig:
    # Requested password length. Clamped to [10, 100] before use.
    length: int = 25

    # Character classes.
    include_numbers: bool = True
    include_lowercase: bool = True
    include_uppercase: bool = True

    # Force the first character to be a letter (needs a letter class).
    begin_with_letter: bool = True

    # Drop 0 O 1 l I | ` from every pool.
    exclude_similar: bool = True

    # Every character may appear at most once. Caps the length at pool size.
    no_duplicates: bool = True

    # Reject abc / cba / 123 / 321 style runs of three.
    remove_sequential: bool = True

    # Always part of the pool; there is no separate "symbols" switch.
    custom_symbols: str = DEFAULT_SYMBOLS

    @property
    def effective_length_target(self) -> int:
        return clamp_length(self.length)

    @property
    def has_letters(self) -> bool:
        return self.include_lowercase or self.include_uppercase

    def replace(self, **changes) -> "GenerationConfig":
        """Return a copy with the given fields changed."""
        return _replace(self, **changes)


# Default configuration instance you can import elsewhere
DEFAULT_CONFIG = GenerationConfig()
