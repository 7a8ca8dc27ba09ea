"""Core foundation classes for DEM access and slope analysis.

- DEMService: Raster elevation provider (NumPy array, rasterio loading)
- SlopeEvaluator: Traversability test between adjacent cells
"""

from rover_planner.core.dem_service import (
    DEMLoadError,
    DEMService,
    ElevationLookupError,
    NoDataError,
    OutOfBoundsError,
)
from rover_planner.core.slope_evaluator import SlopeEvaluator, SlopeMeasurement, traversable

__all__ = [
    # DEM service
    "DEMService",
    "DEMLoadError",
    "ElevationLookupError",
    "OutOfBoundsError",
    "NoDataError",
    # Slope evaluator
    "SlopeEvaluator",
    "SlopeMeasurement",
    "traversable",
]
