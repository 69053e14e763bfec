"""
Pydantic models for fixture descriptors

Ways, node tags and relations are described by the characters drawn on
the ASCII map. These models give those descriptions an explicit shape.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Union

from pydantic import BaseModel, Field, field_validator


@dataclass(frozen=True)
class Coordinate:
    """Geographic coordinate in degrees"""
    lon: float
    lat: float

    def as_list(self) -> List[float]:
        """Get coordinate as [lon, lat] list"""
        return [self.lon, self.lat]


# ============================================================
# Descriptors
# ============================================================

class MemberType(str, Enum):
    NODE = "node"
    WAY = "way"


class WayDescriptor(BaseModel):
    """
    A way drawn through the map.

    The node string is both the identity of the way and its ordered
    polyline: "ABC" is the way running A -> B -> C, and relations refer
    to it as "ABC".
    """
    nodes: str = Field(min_length=1)
    tags: Dict[str, str] = Field(default_factory=dict)


class NodeDescriptor(BaseModel):
    """Tags attached to a node already drawn on the map"""
    node: str = Field(min_length=1)
    tags: Dict[str, str] = Field(default_factory=dict)


class RelationMember(BaseModel):
    type: MemberType
    ref: str = Field(min_length=1)
    role: str = ""


class RelationDescriptor(BaseModel):
    members: List[RelationMember] = Field(default_factory=list)
    tags: Dict[str, str] = Field(default_factory=dict)


WaysInput = Union[Mapping[str, Mapping[str, str]], Iterable[WayDescriptor]]
NodesInput = Union[Mapping[str, Mapping[str, str]], Iterable[NodeDescriptor]]
RelationsInput = Iterable[Union[RelationDescriptor, Mapping[str, Any]]]


def normalize_ways(ways: WaysInput) -> List[WayDescriptor]:
    """Accept {"AB": {tags}} mappings or WayDescriptor records"""
    if ways is None:
        return []
    if isinstance(ways, Mapping):
        result = [WayDescriptor(nodes=key, tags=dict(tags)) for key, tags in ways.items()]
    else:
        result = [w if isinstance(w, WayDescriptor) else WayDescriptor.model_validate(w) for w in ways]

    seen = set()
    for way in result:
        if way.nodes in seen:
            raise ValueError(f"Way {way.nodes} is declared more than once")
        seen.add(way.nodes)
    return result


def normalize_nodes(nodes: NodesInput) -> Dict[str, NodeDescriptor]:
    """Accept {"A": {tags}} mappings or NodeDescriptor records, keyed by node string"""
    if nodes is None:
        return {}
    if isinstance(nodes, Mapping):
        return {key: NodeDescriptor(node=key, tags=dict(tags)) for key, tags in nodes.items()}
    result = {}
    for n in nodes:
        descriptor = n if isinstance(n, NodeDescriptor) else NodeDescriptor.model_validate(n)
        result[descriptor.node] = descriptor
    return result


def normalize_relations(relations: RelationsInput) -> List[RelationDescriptor]:
    if relations is None:
        return []
    return [
        r if isinstance(r, RelationDescriptor) else RelationDescriptor.model_validate(r)
        for r in relations
    ]


# ============================================================
# Fixture documents
# ============================================================

class FixtureDocument(BaseModel):
    """A fixture stored on disk as JSON, as read by the CLI"""
    map: str
    gridsize: float = Field(default=100.0, gt=0)
    topleft: List[float] = Field(default_factory=lambda: [0.0, 0.0])  # [lon, lat]
    ways: Dict[str, Dict[str, str]] = Field(default_factory=dict)
    nodes: Dict[str, Dict[str, str]] = Field(default_factory=dict)
    relations: List[RelationDescriptor] = Field(default_factory=list)
    initial_osm_id: int = 0

    @field_validator("topleft")
    @classmethod
    def _check_topleft(cls, value: List[float]) -> List[float]:
        if len(value) != 2:
            raise ValueError(f"topleft must be [lon, lat], got {value}")
        return value

    @field_validator("ways")
    @classmethod
    def _check_way_keys(cls, value: Dict[str, Dict[str, str]]) -> Dict[str, Dict[str, str]]:
        for key in value:
            if not key:
                raise ValueError("way keys must contain at least one node")
        return value

    def topleft_coordinate(self) -> Coordinate:
        return Coordinate(lon=self.topleft[0], lat=self.topleft[1])
