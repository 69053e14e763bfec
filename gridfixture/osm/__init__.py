"""
OSM entity graph module

Separate components for:
- Models: Data structures (OSMNode, OSMWay, OSMRelation, EntityGraph)
- Ids: The shared id sequence
- Builder: Reference resolution and id assignment
- Writer: PBF serialization
"""

from .models import OSMNode, OSMWay, OSMMember, OSMRelation, EntityGraph
from .ids import IdSequence
from .builder import EntityGraphBuilder
from .writer import PBFWriter

__all__ = [
    "OSMNode",
    "OSMWay",
    "OSMMember",
    "OSMRelation",
    "EntityGraph",
    "IdSequence",
    "EntityGraphBuilder",
    "PBFWriter",
]
