# delivery_lab/config.py
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from .core.errors import ConfigError

# ---- Tunables (overridable via environment variables) -----------------------
DEFAULT_STRATEGY = "BF"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_BENCH_SEED = 7

_LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def _int_or_none(raw: Optional[str], var: str) -> Optional[int]:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{var} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    strategy: str = DEFAULT_STRATEGY
    log_level: str = DEFAULT_LOG_LEVEL
    ids_max_depth: Optional[int] = None
    bench_seed: int = DEFAULT_BENCH_SEED

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        seed = _int_or_none(env.get("BENCH_SEED"), "BENCH_SEED")
        return cls(
            strategy=env.get("DELIVERY_STRATEGY", DEFAULT_STRATEGY),
            log_level=env.get("DELIVERY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            ids_max_depth=_int_or_none(env.get("DELIVERY_IDS_MAX_DEPTH"), "DELIVERY_IDS_MAX_DEPTH"),
            bench_seed=DEFAULT_BENCH_SEED if seed is None else seed,
        )


def configure_logging(level: str = DEFAULT_LOG_LEVEL, sink=None) -> None:
    """Replace loguru's default handler with a single compact one at `level`."""
    logger.remove()
    logger.add(sink or sys.stderr, format=_LOG_FORMAT, level=level.upper())
