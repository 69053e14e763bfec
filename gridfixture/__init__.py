"""
Grid Fixture Generator

Draw a road network as ASCII art, get node coordinates and an OSM PBF file:

- grid: ASCII map to letter -> coordinate table
- osm: Entity graph building and PBF writing
- pipeline: build_pbf, descriptors to PBF in one call
- fixture: Working directory handling and tile builder hand-off
"""

from .config import FixtureConfig, get_config, validate_config
from .exceptions import GridFixtureError, UndefinedNodeError, UndefinedWayError, SerializationError
from .models import (
    Coordinate, MemberType, WayDescriptor, NodeDescriptor,
    RelationMember, RelationDescriptor, FixtureDocument,
)
from .grid import GridProjector, map_to_coordinates
from .osm import EntityGraph, EntityGraphBuilder, PBFWriter
from .pipeline import build_pbf
from .fixture import GridMap, build_map, build_config

__version__ = "1.0.0"

__all__ = [
    "FixtureConfig",
    "get_config",
    "validate_config",
    "GridFixtureError",
    "UndefinedNodeError",
    "UndefinedWayError",
    "SerializationError",
    "Coordinate",
    "MemberType",
    "WayDescriptor",
    "NodeDescriptor",
    "RelationMember",
    "RelationDescriptor",
    "FixtureDocument",
    "GridProjector",
    "map_to_coordinates",
    "EntityGraph",
    "EntityGraphBuilder",
    "PBFWriter",
    "build_pbf",
    "GridMap",
    "build_map",
    "build_config",
]
