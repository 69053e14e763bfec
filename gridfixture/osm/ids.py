"""
Synthetic OSM id assignment
"""


class IdSequence:
    """
    Hands out consecutive ids starting at `start`.

    One sequence is shared by the node, way and relation phases so the
    three entity kinds end up in one dense id range.
    """

    def __init__(self, start: int = 0):
        self.start = start
        self._next = start

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value

    @property
    def issued(self) -> int:
        return self._next - self.start

    def __repr__(self) -> str:
        return f"IdSequence(start={self.start}, next={self._next})"
