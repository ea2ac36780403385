"""Runtime settings for the bit CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


BASELINE_DIR_ENV = "BIT_BASELINE_DIR"
LOG_LEVEL_ENV = "BIT_LOG_LEVEL"
DEFAULT_BASELINE_DIR = Path("storage") / "baselines"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    baseline_dir: Path
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(*, root: str | None = None, verbose: bool = False) -> Settings:
    """Resolve settings: explicit --root, then BIT_BASELINE_DIR, then ./storage/baselines."""

    if root:
        baseline_dir = Path(root)
    else:
        env_dir = os.getenv(BASELINE_DIR_ENV)
        baseline_dir = Path(env_dir) if env_dir else Path.cwd() / DEFAULT_BASELINE_DIR

    log_level = "DEBUG" if verbose else (os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    return Settings(baseline_dir=baseline_dir, log_level=log_level)
