"""
ASCII map projection

Turns a drawn grid such as

    A----B
    |    |
    C----D

into a table of node letters to coordinates. Every character cell is
`gridsize_m` meters wide and tall; letters and digits are nodes, every
other character is decoration.
"""

import math
from typing import Dict, List, Optional

from loguru import logger

from ..config import get_config
from ..models import Coordinate


class GridProjector:
    """Projects ASCII maps onto a flat lon/lat grid"""

    def __init__(self, gridsize_m: Optional[float] = None, topleft: Optional[Coordinate] = None):
        self.config = get_config()
        self.gridsize_m = gridsize_m if gridsize_m is not None else self.config.projection.default_gridsize_m
        self.topleft = topleft or Coordinate(lon=0.0, lat=0.0)

    @property
    def degrees_per_cell(self) -> float:
        return degrees_per_cell(self.gridsize_m, self.config.projection.earth_mean_radius_m)

    def project(self, ascii_map: str) -> Dict[str, Coordinate]:
        """
        Decide coordinates for the nodes drawn on the grid

        Columns move east and rows move south from the top-left corner.
        A letter drawn twice keeps the position of its last occurrence.

        Args:
            ascii_map: Map text, typically a triple-quoted literal

        Returns:
            Dict of node letter to Coordinate, in scan order
        """
        lines = _dedent(ascii_map.split("\n"))
        step = self.degrees_per_cell

        result: Dict[str, Coordinate] = {}
        for y, line in enumerate(lines):
            for x, ch in enumerate(line):
                if not (ch.isascii() and ch.isalnum()):
                    continue
                if ch in result:
                    logger.warning(f"Node {ch} is drawn more than once, keeping position at row {y}, column {x}")
                result[ch] = Coordinate(
                    lon=self.topleft.lon + step * x,
                    lat=self.topleft.lat - step * y,
                )

        logger.debug(f"Projected {len(result)} nodes from {len(lines)} map lines")
        return result


def degrees_per_cell(gridsize_m: float, earth_mean_radius_m: float = 6371008.8) -> float:
    """Angular size of one grid character under the flat approximation"""
    metres_to_degrees = 1 / (math.pi / 180 * earth_mean_radius_m)
    return gridsize_m * metres_to_degrees


def _dedent(lines: List[str]) -> List[str]:
    # Leading blank lines come from literals that start on a new line
    lines = list(lines)
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        return []

    # Blank lines don't count towards the common indentation
    min_whitespace = None
    for line in lines:
        if not line.strip():
            continue
        indent = len(line) - len(line.lstrip())
        if min_whitespace is None or indent < min_whitespace:
            min_whitespace = indent
        if min_whitespace == 0:
            break
    if not min_whitespace:
        return lines

    return [line[min_whitespace:] if len(line) >= min_whitespace else line for line in lines]


def map_to_coordinates(
    ascii_map: str,
    gridsize_m: float,
    topleft: Optional[Coordinate] = None
) -> Dict[str, Coordinate]:
    """Project an ASCII map, see GridProjector.project"""
    return GridProjector(gridsize_m=gridsize_m, topleft=topleft).project(ascii_map)
