import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mapgen.dungeon import GenerationOptions, Map, MapSettings  # noqa: E402

MAPGEN_ENV_KEYS = (
    "MAPGEN_MAX_RETRY_ATTEMPTS",
    "MAPGEN_WAYPOINT_RADIUS",
    "MAPGEN_ENABLE_METRICS",
    "MAPGEN_DOOR_TILES",
    "MAPGEN_LOG_LEVEL",
    "MAPGEN_LOG_JSON",
)


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation runtime guardrails")


@pytest.fixture(autouse=True)
def _clean_mapgen_env(monkeypatch):
    """Keep a developer's shell or .env from leaking engine overrides into tests."""
    for key in MAPGEN_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def corner_settings():
    """The four-corner layout from the reference scenario (16x16, unit 3, seed 1)."""
    return MapSettings.default_corners(width=16, height=16, unit_size=3, seed=1, door_percentages=(50, 30, 20, 10))


@pytest.fixture
def fast_options():
    # Smaller retry budget: the final scan still packs every free cell, only the random pass ends sooner
    return GenerationOptions(max_retry_attempts=400)


@pytest.fixture
def generated_map(corner_settings, fast_options):
    m = Map(corner_settings, fast_options)
    assert m.generate()
    return m
