"""Deterministic evaluation of the SPN layers.

Provides algebraic unit testing (roundtrip verification), S-box analysis
(DDT/LAT) and avalanche measurements, collected into one report.

Research / education only. Do NOT use in production.
"""

from .roundtrip import (
    RoundtripResult,
    RoundtripFailure,
    run_roundtrip_check,
    run_roundtrip_tests,
    run_layer_roundtrips,
)
from .sbox_analysis import SBoxAnalysisResult, analyze_sbox, analyze_all_sboxes
from .report import EvaluationReport, run_evaluation

__all__ = [
    "RoundtripResult",
    "RoundtripFailure",
    "run_roundtrip_check",
    "run_roundtrip_tests",
    "run_layer_roundtrips",
    "SBoxAnalysisResult",
    "analyze_sbox",
    "analyze_all_sboxes",
    "EvaluationReport",
    "run_evaluation",
]
