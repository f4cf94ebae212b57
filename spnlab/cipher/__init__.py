from .tables import P_BOX, RP_BOX, RS_BOX, S_BOX
from .transforms import (
    permutation,
    permutation_inv,
    sub_nibble,
    sub_nibble_inv,
    substitution,
    substitution_inv,
)
from .builder import SPNPipeline, build_pipeline
from .registry import ComponentRegistry

__all__ = [
    "S_BOX",
    "RS_BOX",
    "P_BOX",
    "RP_BOX",
    "sub_nibble",
    "sub_nibble_inv",
    "substitution",
    "substitution_inv",
    "permutation",
    "permutation_inv",
    "SPNPipeline",
    "build_pipeline",
    "ComponentRegistry",
]
