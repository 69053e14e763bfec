import osmium
import pytest
from loguru import logger


class PBFContents(osmium.SimpleHandler):
    """Collects everything in a PBF file into plain dicts keyed by id"""

    def __init__(self):
        super().__init__()
        self.nodes = {}
        self.ways = {}
        self.relations = {}

    def node(self, n):
        self.nodes[n.id] = {
            "lon": n.location.lon,
            "lat": n.location.lat,
            "version": n.version,
            "tags": {t.k: t.v for t in n.tags},
        }

    def way(self, w):
        self.ways[w.id] = {
            "nodes": [ref.ref for ref in w.nodes],
            "version": w.version,
            "tags": {t.k: t.v for t in w.tags},
        }

    def relation(self, r):
        self.relations[r.id] = {
            "members": [(m.type, m.ref, m.role) for m in r.members],
            "version": r.version,
            "tags": {t.k: t.v for t in r.tags},
        }


@pytest.fixture
def read_pbf():
    def _read(path):
        contents = PBFContents()
        contents.apply_file(str(path))
        return contents
    return _read


@pytest.fixture(autouse=True)
def reset_logging():
    # CLI tests install sinks bound to captured streams
    yield
    logger.remove()
