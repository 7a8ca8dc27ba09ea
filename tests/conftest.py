"""Shared pytest fixtures for rover_planner tests.

Provides synthetic DEMs and reusable rovers for all rover_planner tests.
All fixtures use explicit elevation grids with documented rationale.

COORDINATE SYSTEM:
    Arrays are indexed [y, x]: rows are y, columns are x. A Coordinate(x=2, y=0)
    samples elevations[0][2].
"""

from pathlib import Path
from typing import Optional

import numpy as np
import pytest
import rasterio
from rasterio.transform import from_origin

from rover_planner.constants import DEMConfig
from rover_planner.core.dem_service import DEMService
from rover_planner.model.coordinate import Coordinate
from rover_planner.model.rover import RoverState

# =============================================================================
# HELPERS
# =============================================================================


def make_dem(elevations: list[list[float]] | np.ndarray, source_id: str = "synthetic.tif") -> DEMService:
    """Build an in-memory DEM from a [y][x] grid."""
    return DEMService(elevations=np.asarray(elevations, dtype=float), source_id=source_id)


def make_cliff_ring(size: int = 9, ring: int = 2, height: float = 1000.0) -> np.ndarray:
    """Flat terrain at 0 with a square wall of `height` at distance `ring` from the border.

    With size=9, ring=2: the wall occupies the border of the 5x5 block
    [2..6] x [2..6], enclosing a flat 3x3 pocket [3..5] x [3..5].
    """
    grid = np.zeros((size, size))
    lo, hi = ring, size - ring - 1
    grid[lo, lo : hi + 1] = height
    grid[hi, lo : hi + 1] = height
    grid[lo : hi + 1, lo] = height
    grid[lo : hi + 1, hi] = height
    return grid


def write_geotiff(path: Path, elevations: np.ndarray, nodata: Optional[float] = None) -> Path:
    """Write a single-band float32 GeoTIFF with 0.5° pixels anchored at (10°E, 50°N)."""
    height, width = elevations.shape
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=height,
        width=width,
        count=1,
        dtype="float32",
        crs="EPSG:4326",
        transform=from_origin(10.0, 50.0, 0.5, 0.5),
        nodata=nodata,
    ) as dst:
        dst.write(elevations.astype("float32"), 1)
    return path


# =============================================================================
# DEM FIXTURES
# =============================================================================


@pytest.fixture
def flat_dem_3x3() -> DEMService:
    """3x3 raster, every cell at elevation 5. Every edge is traversable."""
    return make_dem([[5.0] * 3 for _ in range(3)])


@pytest.fixture
def flat_dem_10x10() -> DEMService:
    """10x10 raster at elevation 100, for neighbor and field-of-view tests."""
    return make_dem(np.full((10, 10), 100.0))


@pytest.fixture
def cliff_ring_dem() -> DEMService:
    """9x9 flat raster with a 1000-unit wall enclosing the 3x3 pocket around (4, 4).

    Any start inside the pocket cannot reach cells outside the wall.
    """
    return make_dem(make_cliff_ring())


@pytest.fixture
def terraced_dem() -> DEMService:
    """13x3 raster of 4-pixel-wide terraces rising 1 unit each, along x.

    Columns 0-3: 0, columns 4-7: 1, columns 8-11: 2, column 12: 3.
    The single step from x=3 to x=4 reads as 45° raw, but spans a
    0 -> 2 rise over 8 pixels (~14°) once both ends are marched to the
    terrace edges.
    """
    row = [0.0] * 4 + [1.0] * 4 + [2.0] * 4 + [3.0]
    return make_dem([row, row, row])


@pytest.fixture
def reference_dem_small_step() -> DEMService:
    """Reference Mars dataset: a 5-unit step, within its quantization tolerance."""
    return make_dem([[100.0, 105.0], [100.0, 105.0]], source_id=DEMConfig.REFERENCE_SOURCE_ID)


# =============================================================================
# ROVER FIXTURES
# =============================================================================


@pytest.fixture
def rover_flat_3x3(flat_dem_3x3: DEMService) -> RoverState:
    """Rover with max_slope=0 crossing the flat 3x3 raster corner to corner."""
    return RoverState(max_slope=0.0, start=Coordinate(0, 0), end=Coordinate(2, 2), dem=flat_dem_3x3)


@pytest.fixture
def rover_in_cliff_ring(cliff_ring_dem: DEMService) -> RoverState:
    """Rover inside the walled pocket, goal in the raster corner outside the wall."""
    return RoverState(max_slope=30.0, start=Coordinate(4, 4), end=Coordinate(0, 0), dem=cliff_ring_dem)


# =============================================================================
# FILE FIXTURES
# =============================================================================


@pytest.fixture
def flat_geotiff(tmp_path: Path) -> Path:
    """4x4 GeoTIFF at elevation 10."""
    return write_geotiff(tmp_path / "flat.tif", np.full((4, 4), 10.0))


@pytest.fixture
def cliff_ring_geotiff(tmp_path: Path) -> Path:
    """GeoTIFF version of cliff_ring_dem."""
    return write_geotiff(tmp_path / "ring.tif", make_cliff_ring())
