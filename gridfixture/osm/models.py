"""
OSM data models

Data classes for the nodes, ways and relations written to the PBF file
"""

from typing import List, Dict, Optional, Tuple
from dataclasses import dataclass, field


@dataclass
class OSMNode:
    """Represents an OSM node (point)"""
    id: int
    lat: float
    lon: float
    tags: Dict[str, str]
    ref: str  # letter drawn on the map


@dataclass
class OSMWay:
    """Represents an OSM way (line)"""
    id: int
    nodes: List[OSMNode]
    tags: Dict[str, str]
    ref: str  # node string the way was declared with

    @property
    def node_ids(self) -> List[int]:
        return [n.id for n in self.nodes]

    def get_coordinates(self) -> List[List[float]]:
        """Get coordinates as [lon, lat] list"""
        return [[n.lon, n.lat] for n in self.nodes]


@dataclass
class OSMMember:
    """Relation member, type is "n" or "w" as osmium spells it"""
    type: str
    ref: int
    role: str = ""

    def as_tuple(self) -> Tuple[str, int, str]:
        return (self.type, self.ref, self.role)


@dataclass
class OSMRelation:
    """Represents an OSM relation"""
    id: int
    members: List[OSMMember]
    tags: Dict[str, str]


@dataclass
class EntityGraph:
    """Every entity of one fixture, with ids resolved, in write order"""
    nodes: List[OSMNode] = field(default_factory=list)
    ways: List[OSMWay] = field(default_factory=list)
    relations: List[OSMRelation] = field(default_factory=list)

    # Lookups from drawn letters / way strings to OSM ids
    node_ids: Dict[str, int] = field(default_factory=dict)
    way_ids: Dict[str, int] = field(default_factory=dict)

    # Position of every projected node, used or not
    ordinals: Dict[str, int] = field(default_factory=dict)

    def all_ids(self) -> List[int]:
        return (
            [n.id for n in self.nodes]
            + [w.id for w in self.ways]
            + [r.id for r in self.relations]
        )

    def id_range(self) -> Optional[Tuple[int, int]]:
        """First and last id assigned, None when the graph is empty"""
        ids = self.all_ids()
        if not ids:
            return None
        return ids[0], ids[-1]

    def summary(self) -> Dict[str, object]:
        id_range = self.id_range()
        return {
            "nodes": len(self.nodes),
            "ways": len(self.ways),
            "relations": len(self.relations),
            "first_id": id_range[0] if id_range else None,
            "last_id": id_range[1] if id_range else None,
        }
