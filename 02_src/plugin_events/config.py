"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "plugin_events.log"
DEFAULT_TRACE_BUFFER_SIZE = 1000


PathLike = Union[str, Path]


@dataclass
class Settings:
    """Runtime settings read from the environment."""

    log_level: str = "INFO"
    log_file: PathLike = DEFAULT_LOG_PATH
    trace_buffer_size: int = DEFAULT_TRACE_BUFFER_SIZE


def resolve_log_path(env_value: PathLike | None = None) -> Path:
    """Resolve LOG_FILE to an absolute path."""
    if not env_value:
        return DEFAULT_LOG_PATH

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def load_settings(env_file: PathLike | None = None) -> Settings:
    """
    Load settings from the environment, reading a .env file first.

    Variables already set in the environment win over the .env file.

    Args:
        env_file: Path to the .env file. Defaults to PROJECT_ROOT/.env.

    Returns:
        Settings instance
    """
    load_dotenv(env_file if env_file is not None else PROJECT_ROOT / ".env")

    raw_size = os.getenv("TRACE_BUFFER_SIZE")
    if raw_size is None:
        trace_buffer_size = DEFAULT_TRACE_BUFFER_SIZE
    else:
        try:
            trace_buffer_size = int(raw_size)
        except ValueError:
            raise ValueError(f"TRACE_BUFFER_SIZE must be an integer, got {raw_size!r}") from None
        if trace_buffer_size < 1:
            raise ValueError("TRACE_BUFFER_SIZE must be at least 1")

    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_file=resolve_log_path(os.getenv("LOG_FILE")),
        trace_buffer_size=trace_buffer_size,
    )
