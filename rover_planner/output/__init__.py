"""Writers for planned paths (terminal and JSON file)."""

from rover_planner.output.file_output import FileOutput, result_to_dict
from rover_planner.output.terminal_output import TerminalOutput, format_point, render_path

__all__ = [
    "TerminalOutput",
    "FileOutput",
    "render_path",
    "format_point",
    "result_to_dict",
]
