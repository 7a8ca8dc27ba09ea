"""Rover Planner - Slope-constrained route planning across elevation rasters.

Plans a traversable route for a simulated rover on a DEM, rejecting moves
whose local slope exceeds the rover's limit:
- Plateau-marching slope test that tolerates DEM quantization
- Greedy best-first search on an 8-connected pixel grid
- Terminal and JSON output of the resulting path

Modules:
    core: DEM access and slope traversability analysis
    model: Data structures (Coordinate, SearchNode, RoverState, PlanningResult)
    generators: Route search (BestFirstPlanner) and path reconstruction
    output: Terminal and file writers
    cli: Command-line interface

Example:
    from rover_planner.core import DEMService
    from rover_planner.model import Coordinate
    from rover_planner.model.rover import RoverState
    from rover_planner.generators import BestFirstPlanner
"""
