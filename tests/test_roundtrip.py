import sys
from pathlib import Path

import pytest

# Ensure project root is on path when running without an install
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from spnlab.cipher.builder import SPNPipeline, build_pipeline
from spnlab.cipher.components_builtin import Component
from spnlab.cipher.registry import ComponentRegistry
from spnlab.cipher.transforms import substitution
from spnlab.evaluation.roundtrip import (
    run_layer_roundtrips,
    run_roundtrip_check,
    run_roundtrip_tests,
)


def _identity(data: bytes) -> bytes:
    return bytes(data)


# ---------------------------------------------------------------------------
# Pipeline construction
# ---------------------------------------------------------------------------

def test_pipeline_roundtrip():
    pipeline = build_pipeline()
    pt = b"Hello world!"
    ct = pipeline.encrypt(pt)
    assert ct != pt
    assert pipeline.decrypt(ct) == pt


def test_pipeline_zero_byte():
    # 0x00 -> S-box 0x99 -> P-box 0xa5
    assert build_pipeline().encrypt(b"\x00") == b"\xa5"


def test_pipeline_with_custom_components():
    reg = ComponentRegistry()
    reg.register(Component("sbox.identity", "SBOX", "Identity S-box", _identity, _identity))
    reg.register(Component("perm.identity", "PERM", "Identity permutation", _identity, _identity))

    pipeline = build_pipeline(reg, sbox_id="sbox.identity", perm_id="perm.identity")
    assert pipeline.encrypt(b"abc") == b"abc"

    mixed = build_pipeline(reg, sbox_id="sbox.nibble4", perm_id="perm.identity")
    assert mixed.encrypt(b"\x00") == b"\x99"


def test_pipeline_rejects_wrong_kind():
    with pytest.raises(ValueError):
        build_pipeline(sbox_id="perm.bit8", perm_id="perm.bit8")
    with pytest.raises(ValueError):
        build_pipeline(sbox_id="sbox.nibble4", perm_id="sbox.nibble4")


def test_pipeline_rejects_missing_inverse():
    reg = ComponentRegistry()
    reg.register(Component("sbox.oneway", "SBOX", "No inverse", _identity))
    with pytest.raises(ValueError, match="invertible"):
        build_pipeline(reg, sbox_id="sbox.oneway")


def test_unknown_component():
    with pytest.raises(KeyError):
        build_pipeline(sbox_id="sbox.missing")


# ---------------------------------------------------------------------------
# Randomized roundtrip evaluation
# ---------------------------------------------------------------------------

def test_run_roundtrip_tests_perfect():
    result = run_roundtrip_tests(build_pipeline(), num_vectors=300, max_length=40, seed=42)
    assert result.is_perfect, result.failures
    assert result.passed == 300
    assert result.success_rate == 1.0
    assert result.summary().startswith("[PASS] pipeline")


def test_roundtrip_check_records_mismatches():
    # substitution is not its own inverse; only the empty first vector survives
    result = run_roundtrip_check(
        "broken",
        substitution,
        substitution,
        num_vectors=50,
        max_length=16,
        max_failures_recorded=3,
    )
    assert not result.is_perfect
    assert result.passed >= 1
    assert result.passed + result.failed == 50
    assert len(result.failures) == 3
    assert result.failures[0].error is None


def test_roundtrip_check_records_exceptions():
    def boom(_data: bytes) -> bytes:
        raise RuntimeError("boom")

    result = run_roundtrip_check("raises", _identity, boom, num_vectors=5)
    assert result.failed == 5
    assert result.failures[0].error == "boom"
    assert result.failures[0].output_hex == "<error>"


def test_roundtrip_check_flags_length_change():
    pipeline = SPNPipeline(
        sbox_fwd=lambda b: b + b"\x00",
        sbox_inv=lambda b: b[:-1],
        perm_fwd=_identity,
        perm_inv=_identity,
    )
    result = run_roundtrip_tests(pipeline, num_vectors=10)
    assert result.failed == 10


def test_layer_roundtrips():
    results = run_layer_roundtrips(num_vectors=100, max_length=32)
    names = [r.check_name for r in results]
    assert names == sorted(names)
    assert set(names) == {
        "perm.bit8",
        "perm.bit8 (inverse first)",
        "sbox.nibble4",
        "sbox.nibble4 (inverse first)",
    }
    for r in results:
        assert r.is_perfect, r.summary()
