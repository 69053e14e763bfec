import pytest
from pydantic import ValidationError

from gridfixture import (
    EntityGraphBuilder, MemberType, NodeDescriptor, RelationDescriptor,
    RelationMember, UndefinedNodeError, UndefinedWayError, WayDescriptor,
    map_to_coordinates,
)
from gridfixture.osm import IdSequence


ASCII_MAP = """
    A----B----C
         |
         D    E
"""


@pytest.fixture
def locations():
    return map_to_coordinates(ASCII_MAP, 100)


def test_id_sequence_counts_from_start():
    ids = IdSequence(7)

    assert [ids.next(), ids.next(), ids.next()] == [7, 8, 9]
    assert ids.issued == 3


def test_ids_are_dense_nodes_then_ways_then_relations(locations):
    graph = EntityGraphBuilder(initial_osm_id=100).build(
        locations,
        ways={"ABC": {"highway": "primary"}, "BD": {"highway": "service"}},
        relations=[RelationDescriptor(
            members=[RelationMember(type=MemberType.WAY, ref="BD")],
            tags={"type": "route"},
        )],
    )

    assert [n.ref for n in graph.nodes] == ["A", "B", "C", "D"]
    assert [n.id for n in graph.nodes] == [100, 101, 102, 103]
    assert [w.id for w in graph.ways] == [104, 105]
    assert [r.id for r in graph.relations] == [106]
    assert graph.all_ids() == list(range(100, 107))
    assert graph.id_range() == (100, 106)


def test_unreferenced_nodes_are_dropped(locations):
    graph = EntityGraphBuilder().build(locations, ways={"AB": {}})

    assert [n.ref for n in graph.nodes] == ["A", "B"]
    assert "E" not in graph.node_ids
    # every projected node still gets an ordinal
    assert graph.ordinals == {"A": 0, "B": 1, "C": 2, "D": 3, "E": 4}


def test_way_nodes_follow_the_key(locations):
    graph = EntityGraphBuilder().build(locations, ways={"CBD": {"highway": "residential"}})

    way = graph.ways[0]
    assert way.node_ids == [graph.node_ids["C"], graph.node_ids["B"], graph.node_ids["D"]]
    assert way.get_coordinates()[0] == locations["C"].as_list()


def test_default_names(locations):
    graph = EntityGraphBuilder().build(
        locations,
        ways={"AB": {"highway": "primary"}, "BC": {"name": "High Street"}},
    )

    assert graph.nodes[0].tags == {"name": "A"}
    assert graph.ways[0].tags == {"name": "AB", "highway": "primary"}
    assert graph.ways[1].tags == {"name": "High Street"}


def test_node_tags(locations):
    graph = EntityGraphBuilder().build(
        locations,
        ways={"ABC": {}},
        nodes={"B": {"highway": "traffic_signals"}, "C": {"name": "Terminus", "railway": "halt"}},
    )
    tags = {n.ref: n.tags for n in graph.nodes}

    assert list(tags["B"].items()) == [("name", "B"), ("highway", "traffic_signals")]
    assert tags["C"] == {"name": "Terminus", "railway": "halt"}
    assert tags["A"] == {"name": "A"}


def test_tagged_node_is_emitted_without_ways(locations):
    graph = EntityGraphBuilder().build(locations, nodes=[NodeDescriptor(node="E", tags={"barrier": "gate"})])

    assert [n.ref for n in graph.nodes] == ["E"]
    assert graph.ways == []


def test_relation_members_resolve_with_roles(locations):
    graph = EntityGraphBuilder().build(
        locations,
        ways=[
            WayDescriptor(nodes="AB", tags={"highway": "primary"}),
            WayDescriptor(nodes="BD", tags={"highway": "primary"}),
        ],
        relations=[{
            "members": [
                {"type": "way", "ref": "AB", "role": "from"},
                {"type": "node", "ref": "B", "role": "via"},
                {"type": "way", "ref": "BD", "role": "to"},
            ],
            "tags": {"type": "restriction", "restriction": "no_left_turn"},
        }],
    )
    relation = graph.relations[0]

    assert [m.as_tuple() for m in relation.members] == [
        ("w", graph.way_ids["AB"], "from"),
        ("n", graph.node_ids["B"], "via"),
        ("w", graph.way_ids["BD"], "to"),
    ]
    assert relation.tags == {"type": "restriction", "restriction": "no_left_turn"}


def test_relation_node_member_counts_as_used(locations):
    graph = EntityGraphBuilder().build(
        locations,
        relations=[RelationDescriptor(members=[RelationMember(type="node", ref="E")])],
    )

    assert [n.ref for n in graph.nodes] == ["E"]
    assert graph.nodes[0].tags == {"name": "E"}


def test_undefined_node_in_way(locations):
    with pytest.raises(UndefinedNodeError) as excinfo:
        EntityGraphBuilder().build(locations, ways={"AX": {"highway": "primary"}})

    assert excinfo.value.node == "X"
    assert "X" in str(excinfo.value)


def test_undefined_node_in_node_tags(locations):
    with pytest.raises(UndefinedNodeError):
        EntityGraphBuilder().build(locations, ways={"AB": {}}, nodes={"Q": {"highway": "stop"}})


def test_undefined_node_member(locations):
    with pytest.raises(UndefinedNodeError):
        EntityGraphBuilder().build(
            locations,
            relations=[RelationDescriptor(members=[RelationMember(type="node", ref="Z")])],
        )


def test_undefined_way_member(locations):
    with pytest.raises(UndefinedWayError) as excinfo:
        EntityGraphBuilder().build(
            locations,
            ways={"AB": {}},
            relations=[RelationDescriptor(members=[RelationMember(type="way", ref="BA")])],
        )

    assert excinfo.value.way == "BA"
    assert isinstance(excinfo.value, ValueError)


def test_empty_way_key_is_rejected(locations):
    with pytest.raises(ValidationError):
        EntityGraphBuilder().build(locations, ways={"": {"highway": "primary"}})


def test_duplicate_way_descriptors_are_rejected(locations):
    with pytest.raises(ValueError):
        EntityGraphBuilder().build(
            locations,
            ways=[WayDescriptor(nodes="AB"), WayDescriptor(nodes="AB", tags={"oneway": "yes"})],
        )


def test_summary(locations):
    graph = EntityGraphBuilder(initial_osm_id=1).build(locations, ways={"AB": {}})

    assert graph.summary() == {"nodes": 2, "ways": 1, "relations": 0, "first_id": 1, "last_id": 3}
