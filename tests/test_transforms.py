import random
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

# Ensure project root is on path when running without an install
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from spnlab.cipher.transforms import (
    permutation,
    permutation_inv,
    sub_nibble,
    sub_nibble_inv,
    substitution,
    substitution_inv,
)

HELLO = [72, 101, 108, 108, 111, 32, 119, 111, 114, 108, 100, 33]

ALL_TRANSFORMS = [substitution, substitution_inv, permutation, permutation_inv]


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


# ---------------------------------------------------------------------------
# Nibble lookups
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("x", range(16))
def test_nibble_bijection(x):
    assert sub_nibble_inv(sub_nibble(x)) == x
    assert sub_nibble(sub_nibble_inv(x)) == x


def test_first_nibble_entry():
    assert sub_nibble(0x0) == 0x9
    assert sub_nibble_inv(0x9) == 0x0


@pytest.mark.parametrize("bad", [-1, 16, 255])
def test_nibble_out_of_range(bad):
    with pytest.raises(ValueError):
        sub_nibble(bad)
    with pytest.raises(ValueError):
        sub_nibble_inv(bad)


# ---------------------------------------------------------------------------
# Literal values
# ---------------------------------------------------------------------------

def test_zero_byte_substitution():
    assert substitution(b"\x00") == b"\x99"
    assert substitution_inv(b"\x99") == b"\x00"


def test_single_bit_permutation():
    # bit 1 moves to position P_BOX[1] == 4
    assert permutation(b"\x02") == b"\x10"
    assert permutation_inv(b"\x10") == b"\x02"


@pytest.mark.parametrize("fn", [permutation, permutation_inv])
def test_permutation_fixes_all_zero_and_all_one(fn):
    assert fn(b"\x00\xff") == b"\x00\xff"


# ---------------------------------------------------------------------------
# Shape and ownership of outputs
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("fn", ALL_TRANSFORMS)
def test_empty_input(fn):
    assert fn(b"") == b""


@pytest.mark.parametrize("fn", ALL_TRANSFORMS)
def test_length_preserved(fn):
    rng = random.Random(7)
    for n in (1, 2, 3, 16, 255, 1000):
        assert len(fn(_rand_bytes(rng, n))) == n


@pytest.mark.parametrize("fn", ALL_TRANSFORMS)
def test_input_not_mutated(fn):
    data = bytearray(HELLO)
    out = fn(data)
    assert data == bytearray(HELLO)
    assert isinstance(out, bytes)
    assert out is not data


def test_permutation_preserves_hamming_weight():
    for b in range(256):
        out = permutation(bytes([b]))[0]
        assert bin(out).count("1") == bin(b).count("1")


# ---------------------------------------------------------------------------
# Round trips
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "fwd,inv",
    [
        (substitution, substitution_inv),
        (substitution_inv, substitution),
        (permutation, permutation_inv),
        (permutation_inv, permutation),
    ],
)
def test_layer_roundtrip_every_byte(fwd, inv):
    every_byte = bytes(range(256))
    assert inv(fwd(every_byte)) == every_byte


def test_hello_world_pipeline_roundtrip():
    data = bytes(HELLO)
    cipher = permutation(substitution(data))
    assert cipher != data
    assert list(substitution_inv(permutation_inv(cipher))) == HELLO


def test_hello_world_first_cipher_byte():
    # 'H' = 0x48 -> S-box 0xd6 -> P-box 0x9e
    assert permutation(substitution(b"H")) == bytes([158])


def test_inverse_order_matters():
    cipher = permutation(substitution(bytes(HELLO)))
    wrong = permutation_inv(substitution_inv(cipher))
    assert list(wrong) != HELLO
    assert wrong[0] == 81


def test_concurrent_calls_match_sequential():
    rng = random.Random(1337)
    inputs = [_rand_bytes(rng, rng.randrange(0, 128)) for _ in range(200)]
    expected = [permutation(substitution(b)) for b in inputs]

    with ThreadPoolExecutor(max_workers=8) as pool:
        got = list(pool.map(lambda b: permutation(substitution(b)), inputs))

    assert got == expected
