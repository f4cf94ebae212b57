"""Constant lookup tables for the nibble S-box and the 8-bit P-box.

Both pairs are checked when the module is imported; a broken table is a
programming error and stops the package from loading at all.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from typing import Tuple

from .validator import validate_inverse_pair


NIBBLE_SIZE = 16
BYTE_BITS = 8

# S-Box and its inverse (RS-Box), indexed by nibble value
S_BOX: Tuple[int, ...] = (0x9, 0x4, 0xa, 0xb, 0xd, 0x1, 0x8, 0x5, 0x6, 0x2, 0x0, 0x3, 0xc, 0xe, 0xf, 0x7)
RS_BOX: Tuple[int, ...] = (0xa, 0x5, 0x9, 0xb, 0x1, 0x7, 0x8, 0xf, 0x6, 0x0, 0x2, 0x3, 0xc, 0x4, 0xd, 0xe)

# P-Box and its inverse (RP-Box): source bit position -> destination bit position
P_BOX: Tuple[int, ...] = (0, 4, 1, 5, 2, 6, 3, 7)
RP_BOX: Tuple[int, ...] = (0, 2, 4, 6, 1, 3, 5, 7)


def _verify_tables() -> None:
    for fwd, inv, size, names in (
        (S_BOX, RS_BOX, NIBBLE_SIZE, ("S_BOX", "RS_BOX")),
        (P_BOX, RP_BOX, BYTE_BITS, ("P_BOX", "RP_BOX")),
    ):
        ok, errs = validate_inverse_pair(fwd, inv, size, names)
        if not ok:
            raise AssertionError("Invalid SPN tables: " + "; ".join(errs))


_verify_tables()
