# config.py
"""Render settings, quality presets and environment overrides."""
import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Dict, Mapping, Optional

from whitted.geometry.world import MAX_RECURSION_DEPTH

LOG_LEVEL = os.getenv("WHITTED_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("WHITTED_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Resolution and bounce budget per quality level.
QUALITY_PRESETS: Dict[str, Dict[str, object]] = {
    "preview": {"width": 160, "height": 90, "max_depth": 2, "dof_takes": 1},
    "balanced": {"width": 480, "height": 270, "max_depth": 4, "dof_takes": 1},
    "final": {"width": 1280, "height": 720, "max_depth": 5, "dof_takes": 8},
}


@dataclass(frozen=True)
class RenderSettings:
    width: int = 320
    height: int = 180
    field_of_view: float = math.pi / 3
    max_depth: int = MAX_RECURSION_DEPTH
    workers: int = 1
    dof_takes: int = 1
    output: Path = Path("render.png")
    log_level: str = LOG_LEVEL

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(f"field_of_view must be in (0, pi), got {self.field_of_view}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.dof_takes < 1:
            raise ValueError(f"dof_takes must be >= 1, got {self.dof_takes}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {self.log_level!r}")
        # Frozen dataclass: normalize through object.__setattr__.
        object.__setattr__(self, "output", Path(self.output))
        object.__setattr__(self, "log_level", self.log_level.upper())

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "RenderSettings":
        """
        Settings for one of QUALITY_PRESETS. Keyword arguments whose value
        is None are ignored, so argparse results can be passed straight in.
        """
        try:
            preset = QUALITY_PRESETS[name]
        except KeyError:
            raise ValueError(f"Unknown quality preset {name!r}; "
                             f"choose from {', '.join(QUALITY_PRESETS)}") from None
        values = dict(preset)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @classmethod
    def from_env(cls, prefix: str = "WHITTED_", base: Optional["RenderSettings"] = None,
                 environ: Optional[Mapping[str, str]] = None) -> "RenderSettings":
        """
        Applies PREFIX_<FIELD> environment variables on top of base.
        WHITTED_QUALITY selects a preset before the individual fields apply.
        """
        environ = os.environ if environ is None else environ
        if base is None:
            quality = environ.get(f"{prefix}QUALITY")
            base = cls.from_preset(quality) if quality else cls()

        overrides = {}
        for f in fields(cls):
            raw = environ.get(f"{prefix}{f.name.upper()}")
            if raw is None:
                continue
            try:
                overrides[f.name] = _convert(f.name, raw)
            except ValueError:
                raise ValueError(f"Invalid value for {prefix}{f.name.upper()}: {raw!r}") from None
        return replace(base, **overrides)


def _convert(name: str, raw: str):
    if name in ("width", "height", "max_depth", "workers", "dof_takes"):
        return int(raw)
    if name == "field_of_view":
        return float(raw)
    if name == "output":
        return Path(raw)
    return raw
