"""
Character pools and the sequential-run table used by the generator.
"""

from __future__ import annotations

from .config import GenerationConfig

LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"

# Characters that are easy to confuse when read back.
SIMILAR_CHARS = "0O1lI|`"

# Numeric runs start at 1: "012" is not considered sequential.
_SEQUENCE_SOURCES = (LOWERCASE, "123456789")


def _triplets(sequence: str) -> list[str]:
    return [sequence[i : i + 3] for i in range(len(sequence) - 2)]


SEQUENTIAL_TRIPLETS: frozenset[str] = frozenset(
    triplet for source in _SEQUENCE_SOURCES for triplet in _triplets(source)
)


def _unique(chars: str) -> str:
    # dict keeps insertion order, so this is a stable first-occurrence dedup.
    return "".join(dict.fromkeys(chars))


def _without_similar(chars: str) -> str:
    return "".join(ch for ch in chars if ch not in SIMILAR_CHARS)


def build_pool(config: GenerationConfig) -> str:
    """
    Build the effective character pool for a configuration.

    Order is: custom symbols, lowercase, uppercase, digits. Similar-looking
    characters are dropped when requested and the result is deduplicated,
    keeping the first occurrence of every character.
    """
    pool = config.custom_symbols
    if config.include_lowercase:
        pool += LOWERCASE
    if config.include_uppercase:
        pool += UPPERCASE
    if config.include_numbers:
        pool += DIGITS

    if config.exclude_similar:
        pool = _without_similar(pool)

    return _unique(pool)


def build_letter_pool(config: GenerationConfig) -> str:
    """
    Letters only, from the enabled letter classes. Empty when neither
    lowercase nor uppercase is enabled.
    """
    letters = ""
    if config.include_lowercase:
        letters += LOWERCASE
    if config.include_uppercase:
        letters += UPPERCASE

    if config.exclude_similar:
        letters = _without_similar(letters)

    return letters


def is_sequential(window: str) -> bool:
    """
    True when a 3-character window is a known run, forwards or backwards,
    ignoring case.
    """
    folded = window.lower()
    return folded in SEQUENTIAL_TRIPLETS or folded[::-1] in SEQUENTIAL_TRIPLETS
