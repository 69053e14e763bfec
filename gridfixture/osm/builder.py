"""
Entity graph construction

Resolves ways, node tags and relations against the projected map and
assigns the OSM ids that end up in the PBF file
"""

from typing import Dict, List, Mapping, Set

from loguru import logger

from ..exceptions import UndefinedNodeError, UndefinedWayError
from ..models import (
    Coordinate, MemberType, NodeDescriptor, RelationDescriptor, WayDescriptor,
    NodesInput, RelationsInput, WaysInput,
    normalize_nodes, normalize_relations, normalize_ways,
)
from .ids import IdSequence
from .models import EntityGraph, OSMMember, OSMNode, OSMRelation, OSMWay


class EntityGraphBuilder:
    """
    Builds an EntityGraph from a coordinate table and descriptors

    Ids are handed out by one IdSequence in three phases: used nodes in
    coordinate-table order, then ways, then relations. Projected nodes
    nobody refers to are left out.
    """

    def __init__(self, initial_osm_id: int = 0):
        self.initial_osm_id = initial_osm_id

    def build(
        self,
        node_locations: Mapping[str, Coordinate],
        ways: WaysInput = None,
        nodes: NodesInput = None,
        relations: RelationsInput = None,
    ) -> EntityGraph:
        """
        Resolve every reference and assign ids

        Raises:
            UndefinedNodeError: a descriptor uses a letter missing from the map
            UndefinedWayError: a relation member names an undeclared way
        """
        way_descriptors = normalize_ways(ways)
        node_descriptors = normalize_nodes(nodes)
        relation_descriptors = normalize_relations(relations)

        used_nodes = self.used_nodes(way_descriptors, node_descriptors, relation_descriptors)
        self._check_nodes(used_nodes, node_locations)

        graph = EntityGraph()
        graph.ordinals = {name: i for i, name in enumerate(node_locations)}

        ids = IdSequence(self.initial_osm_id)
        self._add_nodes(graph, ids, node_locations, used_nodes, node_descriptors)
        self._add_ways(graph, ids, way_descriptors)
        self._add_relations(graph, ids, relation_descriptors)

        dropped = len(node_locations) - len(graph.nodes)
        if dropped:
            logger.debug(f"Dropped {dropped} projected nodes that nothing refers to")
        logger.debug(
            f"Assigned {ids.issued} ids from {self.initial_osm_id}: "
            f"{len(graph.nodes)} nodes, {len(graph.ways)} ways, {len(graph.relations)} relations"
        )
        return graph

    @staticmethod
    def used_nodes(
        ways: List[WayDescriptor],
        nodes: Dict[str, NodeDescriptor],
        relations: List[RelationDescriptor],
    ) -> Set[str]:
        """Letters referred to by any way, node descriptor or node member"""
        used = set()
        for way in ways:
            used.update(way.nodes)
        for key in nodes:
            used.update(key)
        for relation in relations:
            for member in relation.members:
                if member.type == MemberType.NODE:
                    used.add(member.ref)
        return used

    def _check_nodes(self, used_nodes: Set[str], node_locations: Mapping[str, Coordinate]):
        for name in sorted(used_nodes):
            if name not in node_locations:
                logger.error(f"Node {name} is referenced but not drawn on the map")
                raise UndefinedNodeError(name)

    def _add_nodes(
        self,
        graph: EntityGraph,
        ids: IdSequence,
        node_locations: Mapping[str, Coordinate],
        used_nodes: Set[str],
        node_descriptors: Dict[str, NodeDescriptor],
    ):
        for name, location in node_locations.items():
            if name not in used_nodes:
                continue

            tags: Dict[str, str] = {}
            descriptor = node_descriptors.get(name)
            if descriptor is None or "name" not in descriptor.tags:
                tags["name"] = name
            if descriptor is not None:
                tags.update(descriptor.tags)

            node = OSMNode(id=ids.next(), lat=location.lat, lon=location.lon, tags=tags, ref=name)
            graph.nodes.append(node)
            graph.node_ids[name] = node.id

    def _add_ways(self, graph: EntityGraph, ids: IdSequence, ways: List[WayDescriptor]):
        nodes_by_ref = {n.ref: n for n in graph.nodes}
        for descriptor in ways:
            tags: Dict[str, str] = {}
            if "name" not in descriptor.tags:
                tags["name"] = descriptor.nodes
            tags.update(descriptor.tags)

            way = OSMWay(
                id=ids.next(),
                nodes=[nodes_by_ref[ch] for ch in descriptor.nodes],
                tags=tags,
                ref=descriptor.nodes,
            )
            graph.ways.append(way)
            graph.way_ids[descriptor.nodes] = way.id

    def _add_relations(self, graph: EntityGraph, ids: IdSequence, relations: List[RelationDescriptor]):
        for descriptor in relations:
            members = []
            for member in descriptor.members:
                if member.type == MemberType.NODE:
                    members.append(OSMMember(type="n", ref=graph.node_ids[member.ref], role=member.role))
                else:
                    if member.ref not in graph.way_ids:
                        logger.error(f"Relation member refers to undeclared way {member.ref}")
                        raise UndefinedWayError(member.ref)
                    members.append(OSMMember(type="w", ref=graph.way_ids[member.ref], role=member.role))

            graph.relations.append(
                OSMRelation(id=ids.next(), members=members, tags=dict(descriptor.tags))
            )
