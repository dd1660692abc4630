"""
config.py — App Settings
==========================
One dataclass with every tunable the app reads at startup.

    cfg = Config.from_env()      # PATHVIZ_ROWS=15 PATHVIZ_DEBUG=1 …
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional


ENV_PREFIX = "PATHVIZ_"

_TRUE  = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class Config:
    # board
    rows:     int = 20
    cols:     int = 20
    min_size: int = 10      # size slider bounds
    max_size: int = 25

    # run defaults
    speed:          int   = 5
    algorithm:      str   = "bfs"
    maze_wall_prob: float = 0.3

    # server
    host:  str  = "127.0.0.1"
    port:  int  = 5000
    debug: bool = False

    def clamp_size(self, n) -> int:
        return max(self.min_size, min(self.max_size, int(n)))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a Config, overriding defaults from PATHVIZ_<FIELD> variables."""
        environ = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            overrides[f.name] = _coerce(f.name, f.type, raw)
        cfg = replace(cls(), **overrides)
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if self.min_size < 2 or self.min_size > self.max_size:
            raise ValueError(f"bad size bounds {self.min_size}..{self.max_size}")
        if not 1 <= self.speed <= 10:
            raise ValueError(f"speed must be in 1..10, got {self.speed}")
        if not 0.0 <= self.maze_wall_prob <= 1.0:
            raise ValueError(f"maze_wall_prob must be in [0, 1], got {self.maze_wall_prob}")


def _coerce(name: str, type_, raw: str):
    # dataclass field types may be strings under postponed annotations
    type_name = type_ if isinstance(type_, str) else type_.__name__
    value = raw.strip()
    try:
        if type_name == "bool":
            low = value.lower()
            if low in _TRUE:
                return True
            if low in _FALSE:
                return False
            raise ValueError(value)
        if type_name == "int":
            return int(value)
        if type_name == "float":
            return float(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name.upper()}={raw!r} is not a valid {type_name}") from None
    return value
