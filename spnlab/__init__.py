"""spnlab - a single-round substitution-permutation network over bytes.

A nibble-wise S-box layer and a bit-wise P-box layer, each with an exact
inverse, plus a demonstration driver and an evaluation toolkit. There is no
key and no round iteration.

Research / education only. Do NOT use in production.
"""

from .cipher.transforms import permutation, permutation_inv, substitution, substitution_inv

__version__ = "0.1.0"

__all__ = [
    "substitution",
    "substitution_inv",
    "permutation",
    "permutation_inv",
]
