from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .registry import ComponentRegistry


@dataclass
class SPNPipeline:
    """One substitution layer followed by one permutation layer, unkeyed."""
    sbox_fwd: Callable[[bytes], bytes]
    sbox_inv: Callable[[bytes], bytes]
    perm_fwd: Callable[[bytes], bytes]
    perm_inv: Callable[[bytes], bytes]

    def encrypt(self, data: bytes) -> bytes:
        state = self.sbox_fwd(data)
        state = self.perm_fwd(state)
        return state

    def decrypt(self, data: bytes) -> bytes:
        # Undo the layers in reverse order of application
        state = self.perm_inv(data)
        state = self.sbox_inv(state)
        return state


def build_pipeline(
    registry: Optional[ComponentRegistry] = None,
    *,
    sbox_id: str = "sbox.nibble4",
    perm_id: str = "perm.bit8",
) -> SPNPipeline:
    reg = registry or ComponentRegistry()

    sbox = reg.get(sbox_id)
    perm = reg.get(perm_id)
    if sbox.kind != "SBOX":
        raise ValueError(f"{sbox_id} is a {sbox.kind} component, expected SBOX")
    if perm.kind != "PERM":
        raise ValueError(f"{perm_id} is a {perm.kind} component, expected PERM")
    if not (sbox.inverse and perm.inverse):
        raise ValueError("SPN requires invertible components (inverse must be provided)")

    return SPNPipeline(
        sbox_fwd=sbox.forward,
        sbox_inv=sbox.inverse,
        perm_fwd=perm.forward,
        perm_inv=perm.inverse,
    )
