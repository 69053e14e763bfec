"""
Exceptions raised while generating fixtures
"""


class GridFixtureError(Exception):
    """Base class for fixture generation failures."""


class UndefinedNodeError(GridFixtureError, ValueError):
    """Raised when a way, node tag or relation refers to a node not drawn on the map."""

    def __init__(self, node: str):
        self.node = node
        super().__init__(f"Node {node} was referred to but was not in the ASCII map")


class UndefinedWayError(GridFixtureError, ValueError):
    """Raised when a relation member names a way that was never declared."""

    def __init__(self, way: str):
        self.way = way
        super().__init__(f"Relation member refers to an undefined way {way}")


class SerializationError(GridFixtureError, RuntimeError):
    """Raised when the PBF writer cannot finalize the output file."""
