"""
PBF serialization

Writes an EntityGraph to an OSM PBF file with pyosmium
"""

from datetime import datetime, timezone
from typing import Optional

import osmium
from loguru import logger

from ..config import WriterConfig, get_config
from ..exceptions import SerializationError
from .models import EntityGraph


class PBFWriter:
    """Writes nodes, then ways, then relations to a single file"""

    def __init__(self, writer_config: Optional[WriterConfig] = None):
        self.config = writer_config or get_config().writer

    def write(self, graph: EntityGraph, filename: str) -> None:
        """
        Serialize the graph and close the file

        An existing file at `filename` is replaced. A failure to open,
        write or close the output raises SerializationError and the file
        should be treated as garbage.
        """
        header = osmium.io.Header()
        header.set("generator", self.config.generator)
        timestamp = self.config.timestamp or datetime.now(timezone.utc).replace(microsecond=0)

        try:
            writer = osmium.SimpleWriter(
                osmium.io.File(filename, self.config.file_format),
                header=header,
                overwrite=self.config.overwrite,
            )
        except Exception as e:
            logger.error(f"Cannot open {filename} for writing: {e}")
            raise SerializationError(f"Cannot open {filename} for writing: {e}") from e

        try:
            try:
                self._write_entities(writer, graph, timestamp)
            finally:
                # close() reports errors that would otherwise be lost when
                # the writer is garbage collected
                writer.close()
        except Exception as e:
            logger.error(f"Failed to write {filename}: {e}")
            raise SerializationError(f"Failed to write {filename}: {e}") from e

        logger.debug(
            f"Wrote {len(graph.nodes)} nodes, {len(graph.ways)} ways, "
            f"{len(graph.relations)} relations to {filename}"
        )

    def _write_entities(self, writer, graph: EntityGraph, timestamp: datetime):
        version = self.config.entity_version
        for node in graph.nodes:
            writer.add_node(osmium.osm.mutable.Node(
                id=node.id,
                version=version,
                timestamp=timestamp,
                location=osmium.osm.Location(node.lon, node.lat),
                tags=node.tags,
            ))
        for way in graph.ways:
            writer.add_way(osmium.osm.mutable.Way(
                id=way.id,
                version=version,
                timestamp=timestamp,
                nodes=way.node_ids,
                tags=way.tags,
            ))
        for relation in graph.relations:
            writer.add_relation(osmium.osm.mutable.Relation(
                id=relation.id,
                version=version,
                timestamp=timestamp,
                members=[m.as_tuple() for m in relation.members],
                tags=relation.tags,
            ))
