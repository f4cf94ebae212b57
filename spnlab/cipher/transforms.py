"""Substitution and permutation layers over byte sequences.

Each transform returns a new ``bytes`` object of the same length as its
input. The tables are read-only, so the functions are safe to call from
several threads at once.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from typing import Sequence

from .tables import NIBBLE_SIZE, P_BOX, RP_BOX, RS_BOX, S_BOX


def _check_nibble(x: int) -> int:
    if not (0 <= x < NIBBLE_SIZE):
        raise ValueError(f"nibble must be in 0..{NIBBLE_SIZE - 1}, got {x}")
    return x


def sub_nibble(x: int) -> int:
    """Look up a single 4-bit value in the S-box."""
    return S_BOX[_check_nibble(x)]


def sub_nibble_inv(x: int) -> int:
    """Look up a single 4-bit value in the inverse S-box."""
    return RS_BOX[_check_nibble(x)]


def _substitute(data: bytes, table: Sequence[int]) -> bytes:
    result = bytearray(len(data))
    for i, byte in enumerate(data):
        high = (byte & 0xF0) >> 4
        low = byte & 0x0F
        result[i] = (table[high] << 4) | table[low]
    return bytes(result)


def _permute(data: bytes, table: Sequence[int]) -> bytes:
    result = bytearray(len(data))
    for i, byte in enumerate(data):
        temp = 0
        for j in range(8):
            bit = (byte >> j) & 0x01
            # table is a bijection, so every destination bit is written once
            temp |= bit << table[j]
        result[i] = temp
    return bytes(result)


def substitution(data: bytes) -> bytes:
    """Substitute both nibbles of every byte through the S-box."""
    return _substitute(data, S_BOX)


def substitution_inv(data: bytes) -> bytes:
    """Undo :func:`substitution` using the inverse S-box."""
    return _substitute(data, RS_BOX)


def permutation(data: bytes) -> bytes:
    """Move bit ``j`` of every byte to position ``P_BOX[j]``."""
    return _permute(data, P_BOX)


def permutation_inv(data: bytes) -> bytes:
    """Undo :func:`permutation` using the inverse P-box."""
    return _permute(data, RP_BOX)
