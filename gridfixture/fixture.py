"""
Fixture workspaces

Wraps projection and PBF generation for tests: prepares a clean working
directory, writes map.pbf into it and hands the file to a tile builder.

Usage:
    fixture = build_map(
        '''
        A----B
             |
             C
        ''',
        gridsize=100,
        ways={"AB": {"highway": "primary"}, "BC": {"highway": "residential"}},
        workdir="test/data/my_fixture",
        tile_builder=my_tile_builder,
    )
    start, end = fixture.locate("A", "C")
"""

import copy
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from loguru import logger

from .config import get_config, validate_config
from .exceptions import UndefinedNodeError
from .grid import map_to_coordinates
from .models import Coordinate, NodesInput, RelationsInput, WaysInput
from .osm import EntityGraph
from .pipeline import build_pbf

TileBuilder = Callable[[Dict[str, Any], List[str]], Any]


@dataclass
class GridMap:
    """Result of build_map"""
    config: Dict[str, Any]
    nodes: Dict[str, Coordinate]
    pbf_path: str
    graph: EntityGraph
    tiles: Any = None  # whatever the tile builder returned
    workdir: Optional[str] = field(default=None)

    def locate(self, *waypoints: str) -> List[Coordinate]:
        """Coordinates of the given map letters, in order"""
        result = []
        for waypoint in waypoints:
            if waypoint not in self.nodes:
                raise UndefinedNodeError(waypoint)
            result.append(self.nodes[waypoint])
        return result


def build_config(tile_dir: str, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Configuration tree handed to the tile builder

    Args:
        tile_dir: Directory the tiles are built in
        overrides: Dotted keys to set, e.g. {"builder.timezone": "/data/tz.sqlite"}
    """
    settings = get_config().tiles
    tree: Dict[str, Any] = {
        "builder": {
            "tile_dir": tile_dir,
            "concurrency": settings.concurrency,
        }
    }
    return apply_overrides(tree, overrides or {})


def apply_overrides(tree: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of `tree` with every dotted-key override set"""
    result = copy.deepcopy(tree)
    for dotted_key, value in overrides.items():
        parts = dotted_key.split(".")
        if not all(parts):
            raise ValueError(f"Invalid config key: {dotted_key!r}")

        node = result
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value
    return result


def prepare_workdir(workdir: str) -> Path:
    """Empty out (or create) the working directory"""
    if not workdir:
        raise ValueError("A working directory is required")
    path = Path(workdir).resolve()
    # We delete the directory first, so never accept the filesystem root
    if path == Path(path.anchor):
        raise ValueError(f"Can't use {workdir} for tests, as we need to clean it out first")

    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
    return path


def build_map(
    ascii_map: str,
    gridsize: float,
    ways: WaysInput,
    workdir: str,
    nodes: NodesInput = None,
    relations: RelationsInput = None,
    config_overrides: Optional[Mapping[str, Any]] = None,
    tile_builder: Optional[TileBuilder] = None,
    topleft: Optional[Coordinate] = None,
    initial_osm_id: int = 0,
) -> GridMap:
    """
    Project a map, write its PBF into `workdir` and build tiles from it

    The working directory is deleted and recreated on every call. If this
    raises, the directory contents must be considered invalid.
    """
    validate_config(get_config())
    path = prepare_workdir(workdir)
    config = build_config(str(path), config_overrides)
    locations = map_to_coordinates(ascii_map, gridsize, topleft)

    pbf_path = str(path / get_config().tiles.pbf_filename)
    logger.info(f"Generating map PBF at {pbf_path}")
    graph = build_pbf(locations, ways, nodes, relations, pbf_path, initial_osm_id=initial_osm_id)

    tiles = None
    if tile_builder is not None:
        logger.info(f"Building tiles in {config['builder']['tile_dir']}")
        tiles = tile_builder(config, [pbf_path])

    return GridMap(
        config=config,
        nodes=locations,
        pbf_path=pbf_path,
        graph=graph,
        tiles=tiles,
        workdir=str(path),
    )
