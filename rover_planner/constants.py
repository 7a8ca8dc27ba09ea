"""Configuration constants for Rover Planner.

All configurable parameters are centralized here for easy tuning.

Classes:
    DEMConfig: Elevation data paths and per-dataset quantization tolerances
    RoverConfig: Rover physical limits and defaults
    PlannerConfig: Best-first grid search parameters
    OutputConfig: Result rendering and file output settings
"""

from pathlib import Path

# Package root directory (where rover_planner/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of rover_planner/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Data directory outside package (DEM rasters are not shipped with the package)
DATA_DIR = PROJECT_ROOT / "data"

# Output directory for saved paths
OUTPUT_DIR = PROJECT_ROOT / "output"


class DEMConfig:
    """Elevation data paths and quantization tolerances."""

    # Reference Mars MOLA mosaic; its 8-bit quantization produces spurious
    # single-step elevation differences between neighboring cells.
    REFERENCE_SOURCE_ID = "marsMap.tif"
    REFERENCE_MAP_PATH = DATA_DIR / REFERENCE_SOURCE_ID

    # Max elevation difference still treated as "same height", keyed by source_id.
    # Datasets not listed here use exact equality.
    QUANTIZATION_TOLERANCES = {
        REFERENCE_SOURCE_ID: 6.0,
    }
    DEFAULT_TOLERANCE = 0.0

    # Raster band holding elevation values
    ELEVATION_BAND = 1


class RoverConfig:
    """Rover physical limits."""

    MIN_SLOPE_DEG = 0.0
    MAX_SLOPE_DEG = 90.0  # Vertical wall

    # Unbounded field of view: the whole raster is visible
    UNLIMITED_FIELD_OF_VIEW = float("inf")


class PlannerConfig:
    """Best-first grid search parameters.

    The search is greedy (nearest-to-goal first), not A*: paths are
    traversable but not guaranteed to be the shortest.
    """

    # 8-connected grid neighbor offsets (dx, dy), in expansion order.
    # Order matters: equal-heuristic ties go to the first neighbor pushed.
    NEIGHBORS_8 = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]

    # Unit step length (pixels) for plateau marching in the slope evaluator
    MARCH_STEP_PX = 1.0


assert len(PlannerConfig.NEIGHBORS_8) == len(set(PlannerConfig.NEIGHBORS_8)) == 8
assert (0, 0) not in PlannerConfig.NEIGHBORS_8, "Neighbor offsets must exclude the center cell"


class OutputConfig:
    """Result rendering and file output settings."""

    TERMINAL_RULE = "------------"
    DEFAULT_FILENAME = "rover_path.json"
    DEFAULT_OUTPUT_PATH = OUTPUT_DIR / DEFAULT_FILENAME
    JSON_INDENT = 2
