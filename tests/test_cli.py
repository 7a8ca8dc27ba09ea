"""Tests for the rover-planner command line.

Tests: argument validation, exit codes, terminal and file output
"""

import argparse
import json
from pathlib import Path

import numpy as np
import pytest

from conftest import write_geotiff
from rover_planner.cli import EXIT_LOAD_ERROR, EXIT_NO_PATH, EXIT_PATH_FOUND, grid_int, main, slope_degrees
from rover_planner.constants import DEMConfig


def run_args(map_path: Path, *extra: str, slope: str = "10", start=("0", "0"), end=("3", "3")) -> list[str]:
    return [str(map_path), "--slope", slope, "--start", *start, "--end", *end, *extra]


class TestMain:
    """End-to-end runs on small GeoTIFFs."""

    def test_path_found_prints_route(self, flat_geotiff: Path, capsys) -> None:
        code = main(run_args(flat_geotiff))

        out = capsys.readouterr().out
        assert code == EXIT_PATH_FOUND
        assert "Output path:" in out
        assert "1. (0, 0)" in out
        assert "4. (3, 3)" in out

    def test_unreachable_goal_exit_code(self, cliff_ring_geotiff: Path, capsys) -> None:
        code = main(run_args(cliff_ring_geotiff, slope="30", start=("4", "4"), end=("0", "0")))

        assert code == EXIT_NO_PATH
        assert "No traversable path" in capsys.readouterr().out

    def test_file_output(self, flat_geotiff: Path, tmp_path: Path) -> None:
        target = tmp_path / "out" / "route.json"

        code = main(run_args(flat_geotiff, "--output", "file", "--output-path", str(target)))

        assert code == EXIT_PATH_FOUND
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["found"] is True
        assert data["path"][0] == [0, 0]
        assert data["path"][-1] == [3, 3]
        assert data["max_slope"] == 10.0

    def test_geo_coordinates(self, flat_geotiff: Path, capsys) -> None:
        code = main(run_args(flat_geotiff, "--coords", "geo"))
        assert code == EXIT_PATH_FOUND
        assert "1. (10.250000, 49.750000)" in capsys.readouterr().out

    def test_field_of_view_and_exhaustive_flags(self, flat_geotiff: Path) -> None:
        assert main(run_args(flat_geotiff, "--field-of-view", "1")) == EXIT_NO_PATH
        assert main(run_args(flat_geotiff, "--exhaustive")) == EXIT_PATH_FOUND

    def test_reference_map_is_default(self, tmp_path: Path, monkeypatch, capsys) -> None:
        reference = write_geotiff(tmp_path / DEMConfig.REFERENCE_SOURCE_ID, np.full((3, 3), 7.0))
        monkeypatch.setattr(DEMConfig, "REFERENCE_MAP_PATH", reference)

        code = main(["--slope", "0", "--start", "0", "0", "--end", "2", "2"])

        assert code == EXIT_PATH_FOUND
        assert "3. (2, 2)" in capsys.readouterr().out

    def test_missing_default_map_is_load_error(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setattr(DEMConfig, "REFERENCE_MAP_PATH", tmp_path / "absent.tif")
        assert main(["--slope", "5", "--start", "0", "0", "--end", "1", "1"]) == EXIT_LOAD_ERROR

    def test_corrupt_map_exit_code(self, tmp_path: Path) -> None:
        corrupt = tmp_path / "broken.tif"
        corrupt.write_text("not a raster")
        assert main(run_args(corrupt)) == EXIT_LOAD_ERROR


class TestArgumentValidation:
    """Invalid input is rejected by argparse with exit code 2."""

    @pytest.mark.parametrize("slope", ["-19", "112", "letters"])
    def test_invalid_slope(self, flat_geotiff: Path, slope: str) -> None:
        with pytest.raises(SystemExit) as exc:
            main(run_args(flat_geotiff, slope=slope))
        assert exc.value.code == 2

    def test_fractional_coordinate(self, flat_geotiff: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(run_args(flat_geotiff, start=("19.1", "0")))
        assert exc.value.code == 2

    def test_missing_map(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(run_args(tmp_path / "nowhere.tif"))
        assert exc.value.code == 2

    def test_missing_required_option(self, flat_geotiff: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main([str(flat_geotiff), "--slope", "10"])
        assert exc.value.code == 2

    @pytest.mark.parametrize("value, expected", [("0", 0.0), ("90", 90.0), ("19.1", 19.1)])
    def test_slope_bounds_inclusive(self, value: str, expected: float) -> None:
        assert slope_degrees(value) == expected

    def test_grid_int_rejects_fraction(self) -> None:
        assert grid_int("7") == 7
        with pytest.raises(argparse.ArgumentTypeError):
            grid_int("7.5")
