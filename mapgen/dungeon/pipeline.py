"""Map generation pipeline.

``Map`` is the public entry point used by view layers:

    m = Map(MapSettings.default_corners(seed=7))
    if m.generate():
        tile = m.get_tile_at(10, 4)

Phases (timed into ``metrics['phase_ms']`` when metrics are enabled):

    place_rooms -> resolve_neighbours -> build_graph -> find_path
    -> collect_rooms -> build_tiles

All work happens on local state; the Map's rooms and tiles are only replaced
once every phase has succeeded. A failed run leaves the Map empty rather than
half-built, so ``get_tile_at`` returns None until the next success.
"""
from __future__ import annotations

import random
import time
from typing import Any, Dict, Iterator, List, Optional

from ..logging_utils import get_logger
from .adjacency import resolve_all
from .config import GenerationOptions, MapSettings
from .errors import GenerationError, PathPreconditionError
from .events import Event
from .graph import build_room_graph
from .metrics import init_metrics
from .occupancy import OccupancyGrid
from .pathfinding import PathfinderAStar
from .rooms import Room, assign_difficulty, place_rooms
from .tilemap import build_tiles, collect_final_rooms
from .tiles import Tile, TileGrid

log = get_logger("mapgen.pipeline")


class Map:
    def __init__(self, settings: MapSettings, options: Optional[GenerationOptions] = None):
        self.settings = settings
        self.options = options if options is not None else GenerationOptions.resolve()
        # Fan-in of every tile's change event; survives regeneration
        self.tile_changed = Event("map_tile_changed")
        # Fired once per successful generate()
        self.rebuilt = Event("map_rebuilt")
        self.metrics: Dict[str, Any] = {}
        self._reset()

    def _reset(self) -> None:
        self._tiles: Optional[TileGrid] = None
        self.rooms: List[Room] = []
        self.all_rooms: List[Room] = []
        self.waypoints: List[Room] = []
        self.route: List[Room] = []
        self.occupancy: Optional[OccupancyGrid] = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def actual_width(self) -> int:
        return self.settings.actual_width

    @property
    def actual_height(self) -> int:
        return self.settings.actual_height

    @property
    def generated(self) -> bool:
        return self._tiles is not None

    def get_tile_at(self, x: int, y: int) -> Optional[Tile]:
        if self._tiles is None:
            return None
        if 0 <= x < self.actual_width and 0 <= y < self.actual_height:
            return self._tiles.get(x, y)
        return None

    def iter_tiles(self) -> Iterator[Tile]:
        if self._tiles is None:
            return iter(())
        return iter(self._tiles)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def generate(self, settings: Optional[MapSettings] = None) -> bool:
        """Build a new map. True on success; False leaves the map empty.

        Precondition errors (programmer mistakes) propagate.
        """
        if settings is not None:
            self.settings = settings
        settings = self.settings
        if len(settings.map_points) < 2:
            raise PathPreconditionError(f"a map needs at least 2 map points, got {len(settings.map_points)}")
        opts = self.options
        metrics = init_metrics() if opts.enable_metrics else {}
        phase_times: Dict[str, int] = {}
        start = time.perf_counter()

        def _phase(label, fn, *a, **k):
            if not opts.enable_metrics:
                return fn(*a, **k)
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        rng = random.Random(settings.seed)
        try:
            placed = _phase('place_rooms', place_rooms, settings, rng, opts)
            _phase('resolve_neighbours', self._difficulty_and_neighbours, placed.rooms, placed.grid, rng)
            graph = _phase('build_graph', build_room_graph, placed.rooms)
            finder = PathfinderAStar(graph, seed=settings.seed)
            route = _phase('find_path', finder.path_between, placed.waypoints)
            final, branches = _phase('collect_rooms', collect_final_rooms, route, settings.door_percentages, rng)
            tiles, tile_stats = _phase('build_tiles', build_tiles, final, settings, door_tiles=opts.door_tiles)
        except GenerationError as exc:
            log.warn(event="generation_failed", phase=exc.phase, seed=settings.seed, reason=exc.message)
            self._detach_tiles()
            self._reset()
            self.metrics = metrics
            return False

        self._swap_in(tiles)
        self.occupancy = placed.grid
        self.all_rooms = placed.rooms
        self.waypoints = placed.waypoints
        self.route = route
        self.rooms = final

        if opts.enable_metrics:
            metrics['rooms_placed'] = len(placed.rooms)
            metrics['waypoints_placed'] = len(placed.waypoints)
            metrics['placement_attempts'] = placed.attempts
            metrics['path_length'] = len(route)
            metrics['final_rooms'] = len(final)
            metrics['branch_rooms'] = branches
            metrics['doors_created'] = sum(len(r.doors) for r in final) // 2
            metrics['door_tiles'] = tile_stats['door_tiles']
            metrics['tile_collisions'] = tile_stats['tile_collisions']
            metrics['tiles'] = len(tiles)
            metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            metrics['phase_ms'] = phase_times
        self.metrics = metrics
        if tile_stats['tile_collisions']:
            log.warn(event="tile_collisions", count=tile_stats['tile_collisions'], seed=settings.seed)
        log.info(
            event="map_generated",
            seed=settings.seed,
            rooms=len(placed.rooms),
            final_rooms=len(final),
            path=len(route),
            runtime_ms=metrics.get('runtime_ms'),
        )
        self.rebuilt.emit(self)
        return True

    @staticmethod
    def _difficulty_and_neighbours(rooms: List[Room], grid: OccupancyGrid, rng: random.Random) -> None:
        assign_difficulty(rooms, rng)
        resolve_all(rooms, grid)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------
    def _forward_tile_change(self, tile: Tile) -> None:
        self.tile_changed.emit(tile)

    def _detach_tiles(self) -> None:
        if self._tiles is None:
            return
        for tile in self._tiles:
            tile.changed.unsubscribe(self._forward_tile_change)

    def _swap_in(self, tiles: TileGrid) -> None:
        self._detach_tiles()
        for tile in tiles:
            tile.changed.subscribe(self._forward_tile_change)
        self._tiles = tiles


__all__ = ["Map"]
