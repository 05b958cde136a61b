"""
Random sources: the "uniform index in [0, n)" capability the generator
draws from.

The generator never calls a global RNG directly; it is handed one of
these. SystemRandomSource is the default and is backed by the OS CSPRNG.
"""

from __future__ import annotations

import abc
import random
import secrets
import threading
from typing import Protocol, Sequence, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    def randbelow(self, n: int) -> int:
        """Return a uniformly distributed integer in [0, n)."""
        ...


def _check_bound(n: int) -> None:
    if n < 1:
        raise ValueError(f"upper bound must be >= 1, got {n}")


def choice(source: RandomSource, seq: Sequence[T]) -> T:
    """
    Pick one element of a non-empty sequence using `source`.
    """
    if not seq:
        raise IndexError("cannot choose from an empty sequence")
    return seq[source.randbelow(len(seq))]


class SystemRandomSource:
    """
    OS-backed cryptographically secure source.

    secrets.randbelow already rejection-samples, so there is no modulo
    bias. Safe to share across threads.
    """

    def randbelow(self, n: int) -> int:
        _check_bound(n)
        return secrets.randbelow(n)


class SeededRandomSource:
    """
    Deterministic source for tests and reproducible demos.

    NOT suitable for real passwords.
    """

    def __init__(self, seed: int | str | bytes | None = None) -> None:
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def randbelow(self, n: int) -> int:
        _check_bound(n)
        with self._lock:
            return self._rng.randrange(n)


class ByteStreamRandomSource(abc.ABC):
    """
    Turn an arbitrary stream of random bytes into unbiased indices.

    Subclasses implement `_refill()` returning a fresh block of bytes.
    Each draw takes just enough bytes to cover `n - 1`, masks off the
    extra high bits and retries when the value is out of range
    (rejection sampling, so every index is equally likely).
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._lock = threading.Lock()
        # Blocks pulled so far; handy for tests and debug logs.
        self.refills = 0

    @abc.abstractmethod
    def _refill(self) -> bytes:
        """Return the next block of random bytes."""

    def _take(self, count: int) -> bytes:
        # Caller holds the lock.
        while len(self._buffer) < count:
            block = self._refill()
            if not block:
                raise RuntimeError(f"{type(self).__name__} produced no bytes")
            self._buffer.extend(block)
            self.refills += 1
        out = bytes(self._buffer[:count])
        del self._buffer[:count]
        return out

    def randbelow(self, n: int) -> int:
        _check_bound(n)
        if n == 1:
            return 0

        bits = (n - 1).bit_length()
        num_bytes = (bits + 7) // 8
        mask = (1 << bits) - 1

        with self._lock:
            while True:
                value = int.from_bytes(self._take(num_bytes), "big") & mask
                if value < n:
                    return value
