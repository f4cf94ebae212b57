from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    # Demonstration driver
    demo_text: str = Field(default="Hello world!", description="Sample text fed through the pipeline")
    log_level: str = Field(default="INFO")

    # Evaluation
    evaluate: bool = Field(default=False, description="Run roundtrip and S-box analysis after the demo")
    roundtrip_vectors: int = Field(default=1000, ge=1, le=1_000_000)
    roundtrip_max_len: int = Field(default=64, ge=0, le=65536)

    # Reproducibility
    global_seed: int = Field(default=1337)

    # Paths
    write_report: bool = Field(default=False)
    runs_dir: str = Field(default="runs")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    def _bool(name: str, default: bool) -> bool:
        v = os.getenv(name)
        if v is None:
            return default
        return v.strip().lower() in {"1", "true", "yes", "y", "on"}

    return Settings(
        demo_text=os.getenv("SPN_DEMO_TEXT", "Hello world!"),
        log_level=os.getenv("SPN_LOG_LEVEL", "INFO"),
        evaluate=_bool("SPN_EVALUATE", False),
        roundtrip_vectors=int(os.getenv("SPN_ROUNDTRIP_VECTORS", "1000")),
        roundtrip_max_len=int(os.getenv("SPN_ROUNDTRIP_MAX_LEN", "64")),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        write_report=_bool("SPN_WRITE_REPORT", False),
        runs_dir=os.getenv("SPN_RUNS_DIR", "runs"),
    )
