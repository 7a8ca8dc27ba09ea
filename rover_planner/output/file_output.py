"""JSON file persistence of a planned rover path."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from rover_planner.constants import OutputConfig
from rover_planner.core.dem_service import DEMService
from rover_planner.model.coordinate import CoordinateUnit
from rover_planner.model.planning_result import PlanningResult

logger = logging.getLogger(__name__)


def result_to_dict(
    result: PlanningResult,
    coord_type: CoordinateUnit = CoordinateUnit.PIXEL,
    dem: Optional[DEMService] = None,
) -> dict[str, Any]:
    """Serialize a result, converting path points to geo units if requested.

    Args:
        result: Planning result
        coord_type: Units for the "path" entry
        dem: Elevation provider, required for GEO output

    Returns:
        PlanningResult.to_dict() plus "coord_type"; geo paths hold [lon, lat] floats.
    """
    data = result.to_dict()
    data["coord_type"] = coord_type.value

    if coord_type is CoordinateUnit.GEO and result.path is not None:
        if dem is None:
            raise ValueError("Geo output requires the DEM the path was planned on")
        data["path"] = [list(dem.pixel_to_geo(c)) for c in result.path]

    return data


class FileOutput:
    """Writes planning results as JSON files.

    Example:
        FileOutput(path="output/route.json").write(result)
    """

    def __init__(
        self,
        path: Union[str, Path] = OutputConfig.DEFAULT_OUTPUT_PATH,
        coord_type: CoordinateUnit = CoordinateUnit.PIXEL,
        dem: Optional[DEMService] = None,
    ) -> None:
        self.path = Path(path)
        self.coord_type = coord_type
        self.dem = dem

    def write(self, result: PlanningResult) -> Path:
        """Write result to self.path, creating parent directories.

        Returns:
            Path of the written file.
        """
        data = result_to_dict(result, coord_type=self.coord_type, dem=self.dem)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=OutputConfig.JSON_INDENT)

        logger.info(f"Path written to {self.path}")
        return self.path
