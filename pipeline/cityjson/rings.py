"""
Ring-Codec: Polygonringe <-> Index-Listen der Boundaries.
"""

import logging
from typing import List, Sequence

import numpy as np
from shapely.geometry import Polygon

from .errors import CityJSONError, ErrorKind
from .vertices import VertexIndex

Boundary = List[List[int]]

def _open_ring(coords) -> list:
    """Entfernt den schließenden Punkt, den Shapely an jeden Ring anhängt."""
    coords = list(coords)
    if len(coords) > 1 and coords[0] == coords[-1]:
        coords = coords[:-1]
    return coords

class RingCodec:
    """Kodiert Ringe (Außenring plus Löcher) als Vertex-Indizes."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def encode(self, ring: Polygon, vertex_index: VertexIndex) -> Boundary:
        """Kodiert einen Ring als Boundary.

        Args:
            ring: Polygon mit Z-Koordinaten
            vertex_index: Gemeinsamer Vertex-Index des Dokuments

        Returns:
            Boundary: Erst der Außenring, dann jedes Loch, jeweils als Indexliste
        """
        if not ring.has_z:
            raise CityJSONError(ErrorKind.MISSING_FIELD, "Ring ohne Z-Koordinaten")

        boundary = [[vertex_index.intern(p) for p in _open_ring(ring.exterior.coords)]]
        for interior in ring.interiors:
            boundary.append([vertex_index.intern(p) for p in _open_ring(interior.coords)])
        return boundary

    def decode(self,
               boundary: Sequence[Sequence[int]],
               vertices: np.ndarray,
               scale: Sequence[float],
               translate: Sequence[float]) -> Polygon:
        """Dekodiert den Außenring einer Boundary.

        Löcher werden ignoriert.

        Args:
            boundary: Boundary aus dem Dokument
            vertices: Quantisierte Vertex-Tabelle als (n, 3)-Array
            scale: Skalierung je Achse
            translate: Verschiebung je Achse

        Returns:
            Polygon: Außenring in Weltkoordinaten
        """
        exterior = boundary[0]
        if len(exterior) < 3:
            raise CityJSONError(
                ErrorKind.MISSING_FIELD,
                f"Ring mit {len(exterior)} Punkten, mindestens 3 erwartet"
            )

        indices = np.asarray(exterior, dtype=int)
        if indices.ndim != 1 or indices.min() < 0 or indices.max() >= len(vertices):
            raise CityJSONError(
                ErrorKind.MISSING_FIELD,
                f"Ungültige Vertex-Indizes in Ring (Tabelle hat {len(vertices)} Einträge)"
            )

        coords = vertices[indices] * np.asarray(scale, dtype=float) + np.asarray(translate, dtype=float)
        return Polygon([tuple(p) for p in coords.tolist()])
