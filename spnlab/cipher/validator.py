from __future__ import annotations

from typing import List, Sequence, Tuple


def validate_table(table: Sequence[int], size: int, name: str = "table") -> List[str]:
    errs: List[str] = []

    if len(table) != size:
        errs.append(f"{name} must have exactly {size} entries, got {len(table)}")

    out_of_range = [v for v in table if not (0 <= v < size)]
    if out_of_range:
        errs.append(f"{name} has values outside 0..{size - 1}: {out_of_range}")

    seen = set()
    dupes = []
    for v in table:
        if v in seen and v not in dupes:
            dupes.append(v)
        seen.add(v)
    if dupes:
        errs.append(f"{name} is not a bijection, duplicate values: {dupes}")

    return errs


def validate_inverse_pair(
    forward: Sequence[int],
    inverse: Sequence[int],
    size: int,
    names: Tuple[str, str] = ("forward", "inverse"),
) -> Tuple[bool, List[str]]:
    fwd_name, inv_name = names
    errs = validate_table(forward, size, fwd_name) + validate_table(inverse, size, inv_name)

    # Composition checks only make sense once both tables are well formed
    if not errs:
        for x in range(size):
            if inverse[forward[x]] != x:
                errs.append(f"{inv_name}[{fwd_name}[{x}]] = {inverse[forward[x]]}, expected {x}")
            if forward[inverse[x]] != x:
                errs.append(f"{fwd_name}[{inv_name}[{x}]] = {forward[inverse[x]]}, expected {x}")

    return (len(errs) == 0), errs


def invert_table(table: Sequence[int]) -> Tuple[int, ...]:
    """Return the inverse of a bijective lookup table."""
    errs = validate_table(table, len(table))
    if errs:
        raise ValueError("; ".join(errs))
    inv = [0] * len(table)
    for i, v in enumerate(table):
        inv[v] = i
    return tuple(inv)
