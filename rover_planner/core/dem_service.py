"""Digital Elevation Model (DEM) service for raster elevation queries.

Provides read-only pixel access to a DEM raster:
- Fast O(1) elevation lookup on a pre-loaded NumPy array
- GeoTIFF loading through rasterio (eager, so a bad file fails before planning)
- Pixel to geographic coordinate conversion through the raster's affine transform

A DEMService is never mutated after construction, so one instance can be
shared by any number of planners.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

import numpy as np
import rasterio
from rasterio.errors import RasterioIOError
from rasterio.transform import Affine

from rover_planner.constants import DEMConfig
from rover_planner.model.coordinate import Coordinate

logger = logging.getLogger(__name__)


class DEMLoadError(RuntimeError):
    """The DEM raster could not be opened or decoded."""


class ElevationLookupError(Exception):
    """An elevation sample could not be taken."""


class OutOfBoundsError(ElevationLookupError, IndexError):
    """A position outside the raster extents was sampled."""


class NoDataError(ElevationLookupError):
    """A raster cell holds the no-data marker (or NaN)."""


class DEMService:
    """Elevation provider backed by a 2D NumPy array (rows = y, columns = x).

    Example:
        dem = DEMService.open("data/marsMap.tif")
        elevation = dem.elevation(x=120, y=45)
    """

    def __init__(
        self,
        elevations: np.ndarray,
        source_id: str = "",
        transform: Optional[Affine] = None,
        crs: Optional[str] = None,
        nodata: Optional[float] = None,
    ) -> None:
        """Wrap an in-memory elevation array.

        Args:
            elevations: 2D array indexed [y, x]
            source_id: Opaque dataset identifier (selects quantization tolerance)
            transform: Pixel to CRS affine transform (identity if not provided)
            crs: CRS of the transform's target space, for information only
            nodata: Raster no-data marker, if any
        """
        array = np.array(elevations)
        if array.ndim != 2:
            raise ValueError(f"DEM elevations must be a 2D array, got shape {array.shape}")
        if array.size == 0:
            raise ValueError("DEM elevations must not be empty")

        self._array = array
        self._array.setflags(write=False)
        self._source_id = source_id
        self._transform = transform or Affine.identity()
        self._crs = crs
        self._nodata = nodata

    @classmethod
    def open(cls, dem_path: Union[str, Path], band: int = DEMConfig.ELEVATION_BAND) -> "DEMService":
        """Load a GeoTIFF (or any rasterio-readable raster) into memory.

        The file name becomes the source_id, which is what keys the
        per-dataset quantization tolerance.

        Args:
            dem_path: Path to the raster file
            band: 1-based band index holding elevations

        Returns:
            A loaded DEMService.

        Raises:
            DEMLoadError: If the file is missing or cannot be decoded.
        """
        dem_path = Path(dem_path)
        if not dem_path.exists():
            raise DEMLoadError(f"DEM file not found at {dem_path}")

        logger.info(f"Loading DEM from {dem_path}...")
        start_time = time.time()

        try:
            with rasterio.open(dem_path) as dem:
                array = dem.read(band)
                transform = dem.transform
                crs = dem.crs.to_string() if dem.crs else None
                nodata = dem.nodata
        except (RasterioIOError, IndexError) as e:
            raise DEMLoadError(f"Could not read DEM {dem_path}: {e}") from e

        elapsed = time.time() - start_time
        logger.info(f"DEM loaded in {elapsed:.2f}s (shape: {array.shape}, CRS: {crs})")

        return cls(elevations=array, source_id=dem_path.name, transform=transform, crs=crs, nodata=nodata)

    @property
    def width(self) -> int:
        """Raster width in pixels (number of columns)."""
        return self._array.shape[1]

    @property
    def height(self) -> int:
        """Raster height in pixels (number of rows)."""
        return self._array.shape[0]

    @property
    def source_id(self) -> str:
        return self._source_id

    @property
    def crs(self) -> Optional[str]:
        return self._crs

    @property
    def quantization_tolerance(self) -> float:
        """Largest elevation difference still treated as equal for this dataset."""
        return DEMConfig.QUANTIZATION_TOLERANCES.get(self._source_id, DEMConfig.DEFAULT_TOLERANCE)

    def contains(self, x: float, y: float) -> bool:
        """Check whether (x, y) falls on a raster cell."""
        return 0 <= x < self.width and 0 <= y < self.height

    def elevation(self, x: float, y: float) -> float:
        """Get elevation of the cell containing (x, y).

        Fractional positions (from plateau marching) are truncated to the
        cell they fall in.

        Args:
            x: Column position in pixels
            y: Row position in pixels

        Returns:
            Elevation in raster units.

        Raises:
            OutOfBoundsError: If x or y is negative or beyond width/height.
            NoDataError: If the cell holds the no-data marker or NaN.
        """
        if not self.contains(x, y):
            raise OutOfBoundsError(f"Position ({x}, {y}) outside DEM bounds (width={self.width}, height={self.height})")

        value = self._array[int(y), int(x)]

        if self._nodata is not None and value == self._nodata:
            raise NoDataError(f"No-data value at ({x}, {y}) (raw_value={value}, nodata={self._nodata})")
        if np.isnan(value):
            raise NoDataError(f"NaN elevation at ({x}, {y})")

        return float(value)

    def pixel_to_geo(self, coordinate: Coordinate) -> tuple[float, float]:
        """Convert a pixel coordinate to the raster CRS (cell center).

        Args:
            coordinate: Pixel coordinate

        Returns:
            Tuple of (lon, lat) (or easting, northing for projected rasters).
        """
        lon, lat = self._transform @ (coordinate.x + 0.5, coordinate.y + 0.5)
        return float(lon), float(lat)

    def __repr__(self) -> str:
        return f"DEMService(source_id={self._source_id!r}, width={self.width}, height={self.height})"
