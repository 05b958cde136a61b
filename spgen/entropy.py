"""
Entropy helpers:

- bit packing and SHA-256 mixing used by the quantum random source;
- a strength estimate for generated passwords.
"""

from __future__ import annotations

import hashlib
import math
from typing import List, Optional

from .charset import DIGITS, LOWERCASE, UPPERCASE


def bits_to_bytes(bits: List[int]) -> bytes:
    """
    Pack a list of bits [0,1,1,0,...] into bytes, MSB first.
    A trailing partial byte is padded with zeros.
    """
    if not bits:
        return b""

    out = bytearray()
    for i in range(0, len(bits), 8):
        chunk = bits[i : i + 8]
        byte = 0
        for bit in chunk:
            byte = (byte << 1) | (bit & 1)
        out.append(byte << (8 - len(chunk)))
    return bytes(out)


def bytes_to_bits(data: bytes) -> List[int]:
    """
    Unpack bytes into a list of bits, MSB first.
    """
    return [(byte >> (7 - i)) & 1 for byte in data for i in range(8)]


def amplify_entropy(bits: List[int], rounds: int = 1, salt: bytes = b"") -> bytes:
    """
    Mix raw bits into a 32-byte block with `rounds` passes of SHA-256.

    `salt` is folded into the first pass so a second, independent source
    can be combined with the raw bits. With rounds <= 0 the packed bits
    are returned unhashed.
    """
    data = bits_to_bytes(bits)
    if rounds <= 0:
        return data

    data = hashlib.sha256(salt + data).digest()
    for _ in range(rounds - 1):
        data = hashlib.sha256(data).digest()
    return data


# ---------- strength estimate ----------


def _inferred_pool_size(password: str) -> int:
    pool = 0
    if any(c in LOWERCASE for c in password):
        pool += len(LOWERCASE)
    if any(c in UPPERCASE for c in password):
        pool += len(UPPERCASE)
    if any(c in DIGITS for c in password):
        pool += len(DIGITS)
    # Anything else counts once per distinct character seen.
    others = {c for c in password if c not in LOWERCASE + UPPERCASE + DIGITS}
    return pool + len(others)


def estimate_entropy_bits(password: str, pool_size: Optional[int] = None) -> float:
    """
    Rough entropy estimate in bits: length * log2(pool size).

    Pass the real pool size when it is known (the generator does). Without
    it, the pool is guessed from the character classes in the password.
    """
    if not password:
        return 0.0

    if pool_size is None:
        pool_size = _inferred_pool_size(password)

    if pool_size <= 1:
        return 0.0

    return len(password) * math.log2(pool_size)


def entropy_label(bits: float) -> str:
    if bits <= 0:
        return "Very weak"
    if bits < 50:
        return "Weak"
    if bits < 80:
        return "Moderate"
    if bits < 110:
        return "Strong"
    return "Very strong"
