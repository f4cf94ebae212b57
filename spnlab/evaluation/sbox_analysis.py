"""S-box differential and linear analysis.

Wraps the DDT/LAT helpers from spnlab.cipher.cryptanalysis with structured
result output, fixed-point listing and bijectivity checking.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

from spnlab.cipher.components_builtin import Component
from spnlab.cipher.cryptanalysis import ddt_max, fixed_points, lat_max_abs
from spnlab.cipher.registry import ComponentRegistry
from spnlab.cipher.validator import validate_inverse_pair

logger = logging.getLogger(__name__)


@dataclass
class SBoxAnalysisResult:
    """Structured result of S-box differential/linear analysis."""
    component_id: str
    sbox_size: int              # Number of table entries (16 for a 4-bit S-box)
    ddt_max: int                # Max DDT entry (ideal: 4 for a 4-bit bijection)
    lat_max_abs: int            # Max LAT absolute Walsh count (lower = better)
    is_bijective: bool          # Inverse undoes forward on every byte value
    differential_uniformity: str  # "good" / "fair" / "poor"
    linearity: str              # "good" / "fair" / "poor"
    fixed_points: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        bij = "bijective" if self.is_bijective else "NOT bijective"
        return (
            f"{self.component_id} ({self.sbox_size}-entry): "
            f"DDT_max={self.ddt_max} ({self.differential_uniformity}), "
            f"LAT_max={self.lat_max_abs} ({self.linearity}), {bij}, "
            f"fixed points={self.fixed_points}"
        )


def _check_bijectivity(comp: Component) -> bool:
    """Check the tables and that the byte-level layers undo each other on all 256 values."""
    if comp.inverse is None:
        return False

    ok, _ = validate_inverse_pair(comp.table, comp.inverse_table, len(comp.table))
    if not ok:
        return False

    every_byte = bytes(range(256))
    return (
        comp.inverse(comp.forward(every_byte)) == every_byte
        and comp.forward(comp.inverse(every_byte)) == every_byte
    )


def _rate(value: int, good: int) -> str:
    if value <= good:
        return "good"
    if value <= good * 3 // 2:
        return "fair"
    return "poor"


def _rate_differential_uniformity(ddt: int) -> str:
    # 4 is the best reachable DDT max for an even-width bijective S-box
    return _rate(ddt, 4)


def _rate_linearity(lat: int, sbox_size: int) -> str:
    # Best reachable Walsh max for an n-bit bijection is about 2^(n/2 + 1)
    width = int(math.log2(sbox_size))
    return _rate(lat, 2 ** (width // 2 + 1))


def analyze_sbox(
    component_id: str,
    registry: Optional[ComponentRegistry] = None,
) -> SBoxAnalysisResult:
    """Analyze a single S-box component for differential/linear properties.

    Args:
        component_id: Registry ID of the S-box component.
        registry: Optional component registry; uses default if not provided.

    Returns:
        SBoxAnalysisResult with DDT max, LAT max, bijectivity, fixed points and ratings.
    """
    reg = registry or ComponentRegistry()

    if not reg.exists(component_id):
        raise ValueError(f"Unknown component: {component_id}")

    comp = reg.get(component_id)
    if comp.kind != "SBOX":
        raise ValueError(f"{component_id} is not an S-box component")
    if not comp.table:
        raise ValueError(f"{component_id} has no lookup table to analyze")

    table = list(comp.table)
    sbox_size = len(table)
    ddt = ddt_max(table)
    lat = lat_max_abs(table)

    return SBoxAnalysisResult(
        component_id=component_id,
        sbox_size=sbox_size,
        ddt_max=ddt,
        lat_max_abs=lat,
        is_bijective=_check_bijectivity(comp),
        differential_uniformity=_rate_differential_uniformity(ddt),
        linearity=_rate_linearity(lat, sbox_size),
        fixed_points=fixed_points(table),
    )


def analyze_all_sboxes(
    registry: Optional[ComponentRegistry] = None,
) -> List[SBoxAnalysisResult]:
    """Analyze all S-box components in the registry.

    Components registered without a lookup table are skipped.
    """
    reg = registry or ComponentRegistry()
    results: List[SBoxAnalysisResult] = []

    for comp in reg.list_by_kind("SBOX"):
        if not comp.table:
            logger.debug("Skipping %s: no lookup table", comp.component_id)
            continue
        results.append(analyze_sbox(comp.component_id, reg))

    return sorted(results, key=lambda r: r.component_id)
