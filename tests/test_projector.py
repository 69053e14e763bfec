import math

import pytest

from gridfixture import Coordinate, GridProjector, map_to_coordinates
from gridfixture.grid import degrees_per_cell


DPC_100 = 100 * (1 / (math.pi / 180 * 6371008.8))


def test_degrees_per_cell_uses_mean_earth_radius():
    assert degrees_per_cell(100) == pytest.approx(DPC_100, rel=1e-15)
    assert GridProjector(gridsize_m=100).degrees_per_cell == pytest.approx(DPC_100, rel=1e-15)


def test_two_nodes_on_one_row():
    nodes = map_to_coordinates("A----B", 100)

    assert set(nodes) == {"A", "B"}
    assert nodes["A"] == Coordinate(lon=0.0, lat=0.0)
    assert nodes["B"].lon - nodes["A"].lon == pytest.approx(5 * DPC_100)
    assert nodes["B"].lat == nodes["A"].lat


def test_rows_go_south_and_columns_go_east():
    nodes = map_to_coordinates(
        """
        A--B
        |
        C
        """,
        100,
        topleft=Coordinate(lon=5.0, lat=52.0),
    )

    assert nodes["A"] == Coordinate(lon=5.0, lat=52.0)
    assert nodes["B"].lon == pytest.approx(5.0 + 3 * DPC_100)
    assert nodes["B"].lat == 52.0
    assert nodes["C"].lon == 5.0
    assert nodes["C"].lat == pytest.approx(52.0 - 2 * DPC_100)


@pytest.mark.parametrize("ascii_map", ["", "\n\n   \n", "---|---\n  |  \n", "+--+\n|  |\n+--+"])
def test_maps_without_nodes_are_empty(ascii_map):
    assert map_to_coordinates(ascii_map, 100) == {}


def test_uniform_indentation_is_ignored():
    plain = "A---B\n|   |\nC---D"
    indented = "\n".join("      " + line for line in plain.split("\n"))

    assert map_to_coordinates(indented, 50) == map_to_coordinates(plain, 50)


def test_leading_blank_lines_are_dropped():
    assert map_to_coordinates("\n   \n\nA-B", 10) == map_to_coordinates("A-B", 10)


def test_blank_lines_do_not_affect_indentation():
    nodes = map_to_coordinates("    A\n\n    B", 100)

    assert nodes["A"].lon == 0.0
    assert nodes["B"].lon == 0.0
    assert nodes["B"].lat == pytest.approx(-2 * DPC_100)


def test_least_indented_line_sets_the_margin():
    nodes = map_to_coordinates("    A\n  B", 100)

    assert nodes["A"].lon == pytest.approx(2 * DPC_100)
    assert nodes["B"].lon == 0.0


def test_duplicate_letters_keep_last_position():
    nodes = map_to_coordinates("A--A\n|\nA", 100)

    assert list(nodes) == ["A"]
    assert nodes["A"].lon == 0.0
    assert nodes["A"].lat == pytest.approx(-2 * DPC_100)


def test_only_ascii_letters_and_digits_are_nodes():
    nodes = map_to_coordinates("a-1-é-Z_*", 100)

    assert set(nodes) == {"a", "1", "Z"}


def test_default_gridsize_comes_from_config():
    projector = GridProjector()

    assert projector.gridsize_m == 100.0
    assert projector.project("A-B")["B"].lon == pytest.approx(2 * DPC_100)
