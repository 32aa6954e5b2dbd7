from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Package-wide knobs, read once from the environment unless given explicitly.

    Environment:
        FSTREAM_LOG_LEVEL: DEBUG, INFO, WARN or ERROR (default WARN)
        FSTREAM_LOG_JSON: emit one JSON object per log line when truthy
    """
    log_level: str = "WARN"
    json_output: bool = False
    logger_name: str = "fstream"

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        level = env.get("FSTREAM_LOG_LEVEL", "WARN").strip().upper() or "WARN"
        json_output = env.get("FSTREAM_LOG_JSON", "").strip().lower() in _TRUE
        return Settings(log_level=level, json_output=json_output)
