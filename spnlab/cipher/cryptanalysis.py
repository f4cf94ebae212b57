from __future__ import annotations

import math
import random
from typing import Callable, Dict, List, Sequence

import numpy as np


def hamming_distance_bytes(a: bytes, b: bytes) -> int:
    if len(a) != len(b):
        raise ValueError("hamming distance length mismatch")
    dist = 0
    for x, y in zip(a, b):
        dist += (x ^ y).bit_count()
    return dist


def flip_bit(data: bytes, bit_index: int) -> bytes:
    byte_i = bit_index // 8
    bit_i = bit_index % 8
    if byte_i < 0 or byte_i >= len(data):
        raise IndexError("bit_index out of range")
    out = bytearray(data)
    out[byte_i] ^= 1 << bit_i
    return bytes(out)


def rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


def _check_size(sbox: Sequence[int]) -> int:
    n = len(sbox)
    m = int(math.log2(n)) if n > 0 else 0
    if n == 0 or 2**m != n:
        raise ValueError("sbox size must be power of 2")
    return n


def difference_distribution_table(sbox: Sequence[int]) -> np.ndarray:
    """Return the DDT: ddt[dx, dy] counts x with sbox[x] ^ sbox[x ^ dx] == dy."""
    n = _check_size(sbox)
    ddt = np.zeros((n, n), dtype=np.int32)
    for dx in range(n):
        for x in range(n):
            ddt[dx, sbox[x] ^ sbox[x ^ dx]] += 1
    return ddt


def ddt_max(sbox: Sequence[int]) -> int:
    """Return max entry in DDT excluding dx=0."""
    ddt = difference_distribution_table(sbox)
    return int(np.max(ddt[1:, :]))


def linear_approximation_table(sbox: Sequence[int]) -> np.ndarray:
    """Return signed Walsh counts: matches minus mismatches of a.x == b.S(x)."""
    n = _check_size(sbox)
    lat = np.zeros((n, n), dtype=np.int32)
    for a in range(n):
        for b in range(n):
            s = 0
            for x in range(n):
                ax = (a & x).bit_count() % 2
                bx = (b & sbox[x]).bit_count() % 2
                s += 1 if ax == bx else -1
            lat[a, b] = s
    return lat


def lat_max_abs(sbox: Sequence[int]) -> int:
    """Return max absolute bias*2^m (Walsh) for non-trivial masks."""
    lat = linear_approximation_table(sbox)
    return int(np.max(np.abs(lat[1:, 1:])))


def fixed_points(table: Sequence[int]) -> List[int]:
    return [i for i, v in enumerate(table) if v == i]


def avalanche(
    transform: Callable[[bytes], bytes],
    *,
    length: int = 8,
    trials: int = 200,
    seed: int = 1337,
) -> Dict[str, float]:
    """Flip one random input bit per trial and count the output bits that change.

    Args:
        transform: Any bytes -> bytes layer or pipeline stage.
        length: Input length in bytes.
        trials: Number of random (input, bit) pairs.
        seed: Random seed for reproducibility.

    Returns:
        Dict with ``mean`` (fraction of output bits flipped), ``min_bits``
        and ``max_bits`` (absolute counts over all trials).
    """
    if length < 1:
        raise ValueError("avalanche needs at least one input byte")

    rng = random.Random(seed)
    total_bits = length * 8
    total_frac = 0.0
    min_bits = total_bits
    max_bits = 0

    for _ in range(trials):
        data = rand_bytes(rng, length)
        bit = rng.randrange(0, total_bits)
        dist = hamming_distance_bytes(transform(data), transform(flip_bit(data, bit)))
        total_frac += dist / total_bits
        min_bits = min(min_bits, dist)
        max_bits = max(max_bits, dist)

    return {
        "mean": total_frac / trials if trials else 0.0,
        "min_bits": float(min_bits if trials else 0),
        "max_bits": float(max_bits),
    }
