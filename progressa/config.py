"""
Runtime configuration for Progressa.

Settings come from environment variables, optionally loaded from a .env file:
- PROGRESSA_DATA_DIR: directory holding learning_progress.json (default: ~/.progressa)
- PROGRESSA_SEED_FILE: seed curriculum YAML (default: bundled seed)
- PROGRESSA_LOG_LEVEL: logging level name (default: WARNING)
- PROGRESSA_MOCK_LATENCY: delay multiplier for the mock service (default: 1.0)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from progressa.tracker.persistence import DEFAULT_PROGRESS_DIR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_PROGRESS_DIR
    seed_file: Optional[Path] = None
    log_level: str = "WARNING"
    mock_latency: float = 1.0


def _parse_float(raw: Optional[str], default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid float setting: {raw!r}")
        return default
    return max(0.0, value)


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Load settings from the environment.

    Args:
        env_file: Optional .env file; by default python-dotenv searches upwards
            from the working directory. Existing variables are never overridden.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    data_dir = os.getenv("PROGRESSA_DATA_DIR")
    seed_file = os.getenv("PROGRESSA_SEED_FILE")
    log_level = (os.getenv("PROGRESSA_LOG_LEVEL") or "WARNING").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        logger.warning(f"Ignoring unknown log level: {log_level}")
        log_level = "WARNING"

    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_PROGRESS_DIR,
        seed_file=Path(seed_file).expanduser() if seed_file else None,
        log_level=log_level,
        mock_latency=_parse_float(os.getenv("PROGRESSA_MOCK_LATENCY"), 1.0),
    )
