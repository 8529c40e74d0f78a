"""
config.py — Application settings
=================================
Class attributes with sensible defaults.  `Config.load_env()` overrides
them from ALGOVIS_* environment variables, e.g.

    ALGOVIS_PORT=8080 ALGOVIS_LOG_LEVEL=DEBUG python main.py
"""

import os
import secrets
from typing import Any, Dict, Mapping, Optional

from engine.stepper import SPEED_PRESETS

ENV_PREFIX = "ALGOVIS_"


class Config:
    host:       str  = "0.0.0.0"
    port:       int  = 5000
    debug:      bool = False
    secret_key: str  = secrets.token_hex(32)
    log_level:  str  = "INFO"

    # input limits / sample sizes
    max_array_size:       int   = 100
    default_array_size:   int   = 15
    default_max_value:    int   = 100
    default_graph_nodes:  int   = 6
    default_edge_density: float = 0.4

    # recorded runs kept in memory; the oldest is dropped past this
    max_runs: int = 256

    # optional JSON file the algorithm catalog is loaded from / saved to
    catalog_file: Optional[str] = None

    speed_presets: Dict[str, float] = dict(SPEED_PRESETS)
    default_speed: str              = "medium"

    @classmethod
    def load_env(cls, environ: Optional[Mapping[str, str]] = None) -> None:
        """Override every plain setting that has an ALGOVIS_<NAME> variable."""
        environ = os.environ if environ is None else environ
        for name, current in cls.settings().items():
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is None:
                continue
            setattr(cls, name, _coerce(name, raw, current))

    @classmethod
    def settings(cls) -> Dict[str, Any]:
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if not name.startswith("_")
            and not callable(getattr(cls, name))
            and not isinstance(getattr(cls, name), dict)
        }


def _coerce(name: str, raw: str, current: Any) -> Any:
    if isinstance(current, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, int):
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}") from None
    if isinstance(current, float):
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}{name.upper()} must be a number, got {raw!r}") from None
    return raw
