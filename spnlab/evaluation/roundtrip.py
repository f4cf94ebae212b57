"""Algebraic unit testing: roundtrip verification B = D(E(B)).

Generates randomized byte sequences of varying length (the empty sequence
always included) and verifies that each inverse layer perfectly undoes its
forward layer, and that the full pipeline is undone by its reverse pipeline.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional

from spnlab.cipher.builder import SPNPipeline
from spnlab.cipher.cryptanalysis import rand_bytes
from spnlab.cipher.registry import ComponentRegistry

logger = logging.getLogger(__name__)

Transform = Callable[[bytes], bytes]


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    input_hex: str
    output_hex: str
    recovered_hex: str       # What the inverse returned (should equal input)
    error: Optional[str]     # Exception message if a transform threw


@dataclass
class RoundtripResult:
    """Aggregate result of roundtrip testing for one forward/inverse pair."""
    check_name: str
    total_vectors: int
    passed: int
    failed: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] {self.check_name}: "
            f"{self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def run_roundtrip_check(
    check_name: str,
    forward: Transform,
    inverse: Transform,
    *,
    num_vectors: int = 1000,
    max_length: int = 64,
    seed: int = 1337,
    max_failures_recorded: int = 10,
) -> RoundtripResult:
    """Verify ``inverse(forward(B)) == B`` over random byte sequences.

    A vector also fails when ``forward`` changes the sequence length.

    Args:
        check_name: Label used in summaries and reports.
        forward: Transform applied first.
        inverse: Transform expected to undo ``forward``.
        num_vectors: Number of random sequences to test; the first is empty.
        max_length: Upper bound (inclusive) on random sequence length.
        seed: Random seed for deterministic reproducibility.
        max_failures_recorded: Maximum number of failure details to keep.

    Returns:
        RoundtripResult with pass/fail counts and failure details.
    """
    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()

    for i in range(num_vectors):
        length = 0 if i == 0 else rng.randrange(0, max_length + 1)
        data = rand_bytes(rng, length)

        try:
            out = forward(data)
            back = inverse(out)

            if back == data and len(out) == len(data):
                passed += 1
            else:
                failed += 1
                if len(failures) < max_failures_recorded:
                    failures.append(RoundtripFailure(
                        vector_index=i,
                        input_hex=data.hex(),
                        output_hex=out.hex(),
                        recovered_hex=back.hex(),
                        error=None,
                    ))
        except Exception as exc:
            failed += 1
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(
                    vector_index=i,
                    input_hex=data.hex(),
                    output_hex="<error>",
                    recovered_hex="<error>",
                    error=str(exc),
                ))

    elapsed = time.perf_counter() - start

    result = RoundtripResult(
        check_name=check_name,
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )
    if not result.is_perfect:
        logger.warning("Roundtrip check %s failed %d/%d vectors", check_name, failed, num_vectors)
    return result


def run_roundtrip_tests(
    pipeline: SPNPipeline,
    *,
    num_vectors: int = 1000,
    max_length: int = 64,
    seed: int = 1337,
    max_failures_recorded: int = 10,
) -> RoundtripResult:
    """Run roundtrip verification of the full pipeline: decrypt(encrypt(B)) == B."""
    return run_roundtrip_check(
        "pipeline",
        pipeline.encrypt,
        pipeline.decrypt,
        num_vectors=num_vectors,
        max_length=max_length,
        seed=seed,
        max_failures_recorded=max_failures_recorded,
    )


def run_layer_roundtrips(
    registry: Optional[ComponentRegistry] = None,
    *,
    num_vectors: int = 1000,
    max_length: int = 64,
    seed: int = 1337,
) -> List[RoundtripResult]:
    """Check every invertible component in both composition orders.

    Returns:
        List of RoundtripResult sorted by check name.
    """
    reg = registry or ComponentRegistry()
    results: List[RoundtripResult] = []

    for comp in reg.list():
        if comp.inverse is None:
            logger.debug("Skipping %s: no inverse", comp.component_id)
            continue
        results.append(run_roundtrip_check(
            comp.component_id,
            comp.forward,
            comp.inverse,
            num_vectors=num_vectors,
            max_length=max_length,
            seed=seed,
        ))
        results.append(run_roundtrip_check(
            f"{comp.component_id} (inverse first)",
            comp.inverse,
            comp.forward,
            num_vectors=num_vectors,
            max_length=max_length,
            seed=seed,
        ))

    return sorted(results, key=lambda r: r.check_name)
