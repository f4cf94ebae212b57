"""Built-in SPN components: the nibble S-box layer and the 8-bit P-box layer.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .tables import P_BOX, RP_BOX, RS_BOX, S_BOX
from .transforms import permutation, permutation_inv, substitution, substitution_inv


@dataclass(frozen=True)
class Component:
    """A cipher layer with forward and optional inverse functions."""
    component_id: str
    kind: str  # SBOX, PERM
    description: str
    forward: Callable[[bytes], bytes]
    inverse: Optional[Callable[[bytes], bytes]] = None
    table: Tuple[int, ...] = ()
    inverse_table: Tuple[int, ...] = ()


def builtins() -> Dict[str, Component]:
    """Return all built-in components keyed by component_id."""
    comps: Dict[str, Component] = {}

    comps["sbox.nibble4"] = Component(
        component_id="sbox.nibble4",
        kind="SBOX",
        description="4-bit S-box applied to the high and low nibble of each byte",
        forward=substitution,
        inverse=substitution_inv,
        table=S_BOX,
        inverse_table=RS_BOX,
    )

    comps["perm.bit8"] = Component(
        component_id="perm.bit8",
        kind="PERM",
        description="Bit permutation within each byte (bit j -> P_BOX[j])",
        forward=permutation,
        inverse=permutation_inv,
        table=P_BOX,
        inverse_table=RP_BOX,
    )

    return comps
