"""
Constraint-satisfying password generation.

Pool -> optional forced first letter -> fill loop with duplicate,
sequential-run and retry-cap guards. Nothing is kept between calls; each
password is built from the config and the random source alone.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

from .charset import build_letter_pool, build_pool, is_sequential
from .config import DEFAULT_BATCH_SIZE, DEFAULT_CONFIG, GenerationConfig
from .entropy import estimate_entropy_bits
from .random_source import RandomSource, SystemRandomSource, choice

logger = logging.getLogger(__name__)

# Draw budget per output character before the fill loop gives up.
MAX_ATTEMPTS_PER_CHAR = 50

_SYSTEM_SOURCE = SystemRandomSource()


@dataclass
class GenerationResult:
    """
    One generated password plus what it took to build it.
    """

    password: str

    # Clamped length the caller asked for.
    requested_length: int
    # Target after the no-duplicates cap.
    effective_length: int

    pool_size: int
    attempts: int
    entropy_bits: float
    config: GenerationConfig

    # "pool exhausted", "retry cap" or None when the target was reached.
    stop_reason: Optional[str] = None

    @property
    def satisfied(self) -> bool:
        return len(self.password) == self.requested_length

    @property
    def pool_empty(self) -> bool:
        return self.pool_size == 0


def generate_with_meta(
    config: GenerationConfig | None = None,
    source: RandomSource | None = None,
) -> GenerationResult:
    """
    Generate one password and report how the constraints played out.

    Short output is not an error: a no-duplicates pool smaller than the
    target, or a pool too small to avoid sequential runs, simply yields
    fewer characters. Compare `len(password)` with `requested_length`
    (or use `satisfied`) to tell the two apart.

    The draw budget is `effective_length * MAX_ATTEMPTS_PER_CHAR` and
    includes the forced first letter.
    """
    cfg = config or DEFAULT_CONFIG
    rng = source or _SYSTEM_SOURCE

    requested_length = cfg.effective_length_target
    pool = build_pool(cfg)

    effective_length = requested_length
    if cfg.no_duplicates:
        effective_length = min(requested_length, len(pool))

    chars: list[str] = []
    used: set[str] = set()
    max_attempts = effective_length * MAX_ATTEMPTS_PER_CHAR
    attempts = 0
    stop_reason: Optional[str] = None

    # --- forced first character ---
    if cfg.begin_with_letter and cfg.has_letters:
        letters = build_letter_pool(cfg)
        if letters:
            attempts += 1
            first = choice(rng, letters)
            chars.append(first)
            if cfg.no_duplicates:
                used.add(first)

    # --- fill loop ---
    while len(chars) < effective_length:
        if attempts >= max_attempts:
            stop_reason = "retry cap"
            break

        if cfg.no_duplicates:
            available = [ch for ch in pool if ch not in used]
        else:
            available = pool
        # Guard only: effective_length <= len(pool) under no_duplicates and
        # the letter pool is a subset of the pool, so the target is hit first.
        if not available:
            stop_reason = "pool exhausted"
            break

        attempts += 1
        candidate = choice(rng, available)

        if cfg.remove_sequential and len(chars) >= 2:
            if is_sequential(chars[-2] + chars[-1] + candidate):
                continue

        chars.append(candidate)
        if cfg.no_duplicates:
            used.add(candidate)

    password = "".join(chars)
    logger.debug(
        "pool=%d target=%d drew %d chars in %d attempts",
        len(pool),
        effective_length,
        len(password),
        attempts,
    )

    if pool and len(password) < requested_length:
        logger.debug(
            "short password: %d of %d chars (pool=%d, reason=%s)",
            len(password),
            requested_length,
            len(pool),
            stop_reason or "no-duplicates cap",
        )
    elif not pool:
        logger.debug("empty character pool; nothing to generate")

    return GenerationResult(
        password=password,
        requested_length=requested_length,
        effective_length=effective_length,
        pool_size=len(pool),
        attempts=attempts,
        entropy_bits=estimate_entropy_bits(password, len(pool)),
        config=cfg,
        stop_reason=stop_reason,
    )


def generate_one(
    config: GenerationConfig | None = None,
    source: RandomSource | None = None,
) -> str:
    """
    Generate a single password for `config`.
    """
    return generate_with_meta(config, source).password


def generate_batch(
    config: GenerationConfig | None = None,
    count: int = DEFAULT_BATCH_SIZE,
    source: RandomSource | None = None,
    workers: int = 1,
) -> List[str]:
    """
    Generate `count` independent passwords, in order.

    With workers > 1 the calls run on a thread pool; they share nothing
    but the random source, which must be thread-safe.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    cfg = config or DEFAULT_CONFIG
    logger.debug("generating batch of %d (workers=%d)", count, workers)

    if workers == 1 or count <= 1:
        return [generate_one(cfg, source) for _ in range(count)]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda _: generate_one(cfg, source), range(count)))
