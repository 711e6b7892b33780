"""Generation failure types.

``GenerationError`` subclasses are expected failures for a given seed/settings
pair; ``Map.generate`` turns them into ``False``. The precondition errors are
programmer mistakes and propagate.
"""
from __future__ import annotations

from typing import Optional


class GenerationError(Exception):
    def __init__(self, message: str, *, phase: str = "", seed: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.phase = phase
        self.seed = seed


class PlacementExhausted(GenerationError):
    def __init__(self, message: str, *, attempts: int, label: str = "", seed: Optional[int] = None):
        super().__init__(message, phase="place_rooms", seed=seed)
        self.attempts = attempts
        self.label = label


class NoPathError(GenerationError):
    def __init__(self, start_id: int, goal_id: int, *, seed: Optional[int] = None):
        super().__init__(f"no path from room {start_id} to room {goal_id}", phase="find_path", seed=seed)
        self.start_id = start_id
        self.goal_id = goal_id


class PathPreconditionError(ValueError):
    pass


class TileMapPreconditionError(RuntimeError):
    pass


__all__ = [
    "GenerationError",
    "PlacementExhausted",
    "NoPathError",
    "PathPreconditionError",
    "TileMapPreconditionError",
]
