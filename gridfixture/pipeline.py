"""
PBF generation pipeline

  1. Resolve ways, node tags and relations against the projected map
  2. Assign OSM ids (nodes, then ways, then relations)
  3. Write the PBF file

Everything that can be wrong with the descriptors is detected in step 1,
before the output file is opened.
"""

from typing import Mapping, Optional

from loguru import logger

from .config import WriterConfig
from .models import Coordinate, NodesInput, RelationsInput, WaysInput
from .osm import EntityGraph, EntityGraphBuilder, PBFWriter


def build_pbf(
    node_locations: Mapping[str, Coordinate],
    ways: WaysInput,
    nodes: NodesInput,
    relations: RelationsInput,
    filename: str,
    initial_osm_id: int = 0,
    writer_config: Optional[WriterConfig] = None,
) -> EntityGraph:
    """
    Generate an OSM PBF file from a projected map

    Args:
        node_locations: Letter -> Coordinate table from map_to_coordinates
        ways: {"ABC": {tags}} or WayDescriptor records
        nodes: {"A": {tags}} or NodeDescriptor records
        relations: RelationDescriptor records (or dicts of the same shape)
        filename: Output path, replaced if it exists
        initial_osm_id: First id handed out

    Returns:
        The EntityGraph that was written

    Raises:
        UndefinedNodeError, UndefinedWayError: bad references, nothing written
        SerializationError: the file could not be written
    """
    graph = EntityGraphBuilder(initial_osm_id=initial_osm_id).build(
        node_locations, ways=ways, nodes=nodes, relations=relations
    )
    PBFWriter(writer_config).write(graph, filename)
    logger.info(
        f"Generated map PBF at {filename} "
        f"({len(graph.nodes)} nodes, {len(graph.ways)} ways, {len(graph.relations)} relations)"
    )
    return graph
