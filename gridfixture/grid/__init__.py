"""
Grid projection: ASCII map text to node coordinates
"""

from .projector import GridProjector, degrees_per_cell, map_to_coordinates

__all__ = [
    "GridProjector",
    "degrees_per_cell",
    "map_to_coordinates",
]
