from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from lifeboard.infra.redis_client import get_redis_url


BackendName = Literal["redis", "file"]

DEFAULT_MAX_GENERATIONS = 1000


@dataclass(frozen=True, slots=True)
class Settings:
    backend: BackendName
    redis_url: str
    data_dir: Path
    max_generations: int
    log_level: str


def load_settings() -> Settings:
    backend = os.environ.get("LIFEBOARD_BACKEND", "redis").strip().lower()
    if backend not in ("redis", "file"):
        raise ValueError(f"LIFEBOARD_BACKEND must be 'redis' or 'file', got {backend!r}")

    max_generations = int(os.environ.get("LIFEBOARD_MAX_GENERATIONS", DEFAULT_MAX_GENERATIONS))
    if max_generations < 1:
        raise ValueError("LIFEBOARD_MAX_GENERATIONS must be positive")

    return Settings(
        backend=backend,  # type: ignore[arg-type]
        redis_url=get_redis_url(),
        data_dir=Path(os.environ.get("LIFEBOARD_DATA_DIR", "BoardData")),
        max_generations=max_generations,
        log_level=os.environ.get("LIFEBOARD_LOG_LEVEL", "INFO").upper(),
    )
