"""Demonstration driver for the single-round SPN.

Runs the sample text through substitution then permutation, undoes it with
the inverse permutation then the inverse substitution, and prints the three
byte lists to stdout:

    python -m spnlab

Settings come from the environment (or a .env file), see spnlab.config.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from spnlab.cipher.builder import SPNPipeline, build_pipeline
from spnlab.config import Settings, load_settings
from spnlab.evaluation.report import run_evaluation
from spnlab.utils.repro import utc_timestamp, write_json

logger = logging.getLogger(__name__)

DEFAULT_TEXT = "Hello world!"


@dataclass
class DemoResult:
    input: List[int]
    cipher: List[int]
    recovered: List[int]

    @property
    def recovered_ok(self) -> bool:
        return self.recovered == self.input


def run_demo(text: Optional[str] = None, pipeline: Optional[SPNPipeline] = None) -> DemoResult:
    pipe = pipeline or build_pipeline()
    data = (DEFAULT_TEXT if text is None else text).encode("utf-8")

    cipher = pipe.encrypt(data)
    recovered = pipe.decrypt(cipher)

    return DemoResult(input=list(data), cipher=list(cipher), recovered=list(recovered))


def format_lines(result: DemoResult) -> List[str]:
    return [
        f"Input: {result.input}",
        f"Cipher: {result.cipher}",
        f"Inversed: {result.recovered}",
    ]


def _evaluate(settings: Settings) -> None:
    report = run_evaluation(
        num_vectors=settings.roundtrip_vectors,
        max_length=settings.roundtrip_max_len,
        seed=settings.global_seed,
    )
    for line in report.to_summary().splitlines():
        logger.info(line)

    failing = report.failing_checks()
    if failing:
        logger.error("Roundtrip failures in: %s", ", ".join(failing))

    if settings.write_report:
        path = Path(settings.runs_dir) / f"{utc_timestamp()}_evaluation.json"
        write_json(path, report.to_dict())
        logger.info("Report written to %s", path)


def main() -> None:
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    result = run_demo(settings.demo_text)
    for line in format_lines(result):
        print(line)

    if not result.recovered_ok:
        logger.error("Recovered bytes differ from the input")

    if settings.evaluate:
        _evaluate(settings)


if __name__ == "__main__":
    main()
