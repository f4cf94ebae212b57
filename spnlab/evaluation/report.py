"""Structured evaluation report builder.

Aggregates results from roundtrip tests, S-box analysis and avalanche
measurements into a single serializable report for export and log output.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from spnlab.cipher.builder import build_pipeline
from spnlab.cipher.cryptanalysis import avalanche
from spnlab.cipher.registry import ComponentRegistry

from .roundtrip import RoundtripResult, run_layer_roundtrips, run_roundtrip_tests
from .sbox_analysis import SBoxAnalysisResult, analyze_all_sboxes

logger = logging.getLogger(__name__)


@dataclass
class EvaluationReport:
    """Complete evaluation report aggregating all analysis results."""
    timestamp: str = ""
    roundtrip_results: List[RoundtripResult] = field(default_factory=list)
    sbox_results: List[SBoxAnalysisResult] = field(default_factory=list)
    avalanche: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize full report for JSON export."""
        return {
            "timestamp": self.timestamp,
            "roundtrip": [r.to_dict() for r in self.roundtrip_results],
            "sbox": [s.to_dict() for s in self.sbox_results],
            "avalanche": self.avalanche,
            "summary": {
                "roundtrip_checks": len(self.roundtrip_results),
                "roundtrip_all_pass": all(r.is_perfect for r in self.roundtrip_results),
                "sbox_all_bijective": all(s.is_bijective for s in self.sbox_results),
                "failing_checks": self.failing_checks(),
            },
        }

    def to_summary(self) -> str:
        """Human-readable summary for log output."""
        lines = [f"Evaluation Report ({self.timestamp})", "=" * 50]

        if self.roundtrip_results:
            rt_pass = sum(1 for r in self.roundtrip_results if r.is_perfect)
            lines.append(f"Roundtrip checks: {rt_pass}/{len(self.roundtrip_results)} pass")
            for r in self.roundtrip_results:
                lines.append(f"  {r.summary()}")

        if self.sbox_results:
            lines.append(f"S-box analysis: {len(self.sbox_results)} components")
            for s in self.sbox_results:
                lines.append(f"  {s.summary()}")

        if self.avalanche:
            lines.append("Avalanche (single-bit input flips):")
            for name, stats in sorted(self.avalanche.items()):
                lines.append(
                    f"  {name}: mean={stats['mean']:.4f}, "
                    f"bits flipped {stats['min_bits']:.0f}..{stats['max_bits']:.0f}"
                )

        return "\n".join(lines)

    def failing_checks(self) -> List[str]:
        """Return names of roundtrip checks with at least one failure."""
        return [r.check_name for r in self.roundtrip_results if not r.is_perfect]


def run_evaluation(
    *,
    num_vectors: int = 1000,
    max_length: int = 64,
    seed: int = 1337,
    avalanche_trials: int = 200,
    registry: Optional[ComponentRegistry] = None,
) -> EvaluationReport:
    """Run every check against the built-in components and the full pipeline.

    Args:
        num_vectors: Roundtrip vectors per check.
        max_length: Maximum random sequence length for roundtrip vectors.
        seed: Random seed shared by all checks.
        avalanche_trials: Trials per avalanche measurement.
        registry: Optional component registry; uses default if not provided.

    Returns:
        EvaluationReport with roundtrip, S-box and avalanche results.
    """
    reg = registry or ComponentRegistry()
    pipeline = build_pipeline(reg)

    logger.info("Running roundtrip checks (%d vectors, max length %d)", num_vectors, max_length)
    roundtrips = [
        run_roundtrip_tests(pipeline, num_vectors=num_vectors, max_length=max_length, seed=seed)
    ]
    roundtrips.extend(run_layer_roundtrips(reg, num_vectors=num_vectors, max_length=max_length, seed=seed))

    logger.info("Analyzing S-box components")
    sboxes = analyze_all_sboxes(reg)

    stages = {comp.component_id: comp.forward for comp in reg.list()}
    stages["pipeline"] = pipeline.encrypt
    aval = {
        name: avalanche(fn, trials=avalanche_trials, seed=seed)
        for name, fn in stages.items()
    }

    return EvaluationReport(
        roundtrip_results=roundtrips,
        sbox_results=sboxes,
        avalanche=aval,
    )
