"""Map settings and engine options.

``MapSettings`` is the immutable description of one map. ``GenerationOptions``
holds engine tunables that are not part of a map's identity (retry budget,
metrics, door tiles) and may be overridden from the environment or, inside a
Flask app context, from ``current_app.config``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import ClassVar, Dict, Iterable, Optional, Sequence, Tuple

from dotenv import load_dotenv
from flask import current_app, has_app_context

# Pick up MAPGEN_* values from a local .env without requiring exported shell variables.
load_dotenv()

MAX_RETRY_ATTEMPTS = 10000
WAYPOINT_RADIUS = 5

_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class MapPoint:
    """Mandatory waypoint; ``x``/``y`` are fractions of the map size in [0, 1]."""

    x: float
    y: float
    label: str = ""


@dataclass(frozen=True)
class MapSettings:
    width: int = 24
    height: int = 16
    unit_size: int = 5
    seed: int = 1
    map_points: Tuple[MapPoint, ...] = ()
    door_percentages: Tuple[int, ...] = ()

    def __post_init__(self):
        # Accept lists from callers but store tuples so settings stay hashable and immutable
        object.__setattr__(self, "map_points", tuple(self.map_points))
        object.__setattr__(self, "door_percentages", tuple(int(p) for p in self.door_percentages))
        if self.unit_size < 1:
            raise ValueError(f"unit_size must be >= 1, got {self.unit_size}")
        for p in self.map_points:
            if not (0.0 <= p.x <= 1.0 and 0.0 <= p.y <= 1.0):
                raise ValueError(f"map point {p} outside [0, 1]")

    @property
    def actual_width(self) -> int:
        return self.width * self.unit_size

    @property
    def actual_height(self) -> int:
        return self.height * self.unit_size

    def with_seed(self, seed: int) -> "MapSettings":
        return replace(self, seed=seed)

    @classmethod
    def default_corners(
        cls,
        width: int = 32,
        height: int = 32,
        unit_size: int = 3,
        seed: int = 1,
        door_percentages: Sequence[int] = (50, 30, 20, 10),
        labels: Optional[Iterable[str]] = None,
    ) -> "MapSettings":
        """Four waypoints near the corners, visited clockwise from the top-left."""
        names = list(labels) if labels is not None else ["Start", "", "", "End"]
        corners = [(0.2, 0.2), (0.8, 0.2), (0.8, 0.8), (0.2, 0.8)]
        points = tuple(MapPoint(x, y, names[i] if i < len(names) else "") for i, (x, y) in enumerate(corners))
        return cls(
            width=width,
            height=height,
            unit_size=unit_size,
            seed=seed,
            map_points=points,
            door_percentages=tuple(door_percentages),
        )


@dataclass
class GenerationOptions:
    max_retry_attempts: int = MAX_RETRY_ATTEMPTS
    waypoint_radius: int = WAYPOINT_RADIUS
    enable_metrics: bool = True
    door_tiles: bool = True
    # option name -> environment / Flask config key
    KEYS: ClassVar[Dict[str, str]] = {
        "max_retry_attempts": "MAPGEN_MAX_RETRY_ATTEMPTS",
        "waypoint_radius": "MAPGEN_WAYPOINT_RADIUS",
        "enable_metrics": "MAPGEN_ENABLE_METRICS",
        "door_tiles": "MAPGEN_DOOR_TILES",
    }

    @classmethod
    def resolve(cls, **overrides) -> "GenerationOptions":
        """Defaults < environment < Flask app config < explicit keyword overrides."""
        opts = cls()
        for name, key in opts.KEYS.items():
            if key in os.environ:
                opts._apply(name, os.environ.get(key, ""))
        if has_app_context():
            cfg = current_app.config
            for name, key in opts.KEYS.items():
                if key in cfg:
                    opts._apply(name, cfg.get(key))
        for name, value in overrides.items():
            if name not in opts.KEYS:
                raise TypeError(f"unknown generation option {name!r}")
            opts._apply(name, value)
        return opts

    def _apply(self, name: str, value) -> None:
        current = getattr(self, name)
        if isinstance(current, bool):
            if isinstance(value, str):
                value = value.strip().lower() not in _FALSY
            setattr(self, name, bool(value))
        else:
            value = int(value)
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")
            setattr(self, name, value)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


__all__ = ["MapPoint", "MapSettings", "GenerationOptions", "MAX_RETRY_ATTEMPTS", "WAYPOINT_RADIUS"]
