"""
Vertex-Index für die gemeinsame Koordinatentabelle eines Dokuments.
"""

import struct
from typing import Dict, List, Sequence, Tuple

import numpy as np

Point3 = Tuple[float, float, float]

class VertexIndex:
    """Dedupliziert 3D-Punkte in eine dichte Tabelle in Einfügereihenfolge.

    Zwei Punkte sind derselbe Vertex, wenn ihre Koordinaten bitweise gleich
    sind: -0.0 und 0.0 sind verschieden, NaN mit gleichem Bitmuster gleich.
    ``intern`` ist der einzige Weg, die Tabelle zu verändern. Nicht
    threadsicher.
    """

    def __init__(self):
        self._points: List[Point3] = []
        self._lookup: Dict[bytes, int] = {}

    def __len__(self) -> int:
        return len(self._points)

    def intern(self, point: Sequence[float]) -> int:
        """Gibt den Index eines Punktes zurück und fügt ihn bei Bedarf an.

        Args:
            point: Punkt mit drei Koordinaten

        Returns:
            int: Index in der Tabelle
        """
        coords = (float(point[0]), float(point[1]), float(point[2]))
        key = struct.pack('<3d', *coords)
        index = self._lookup.get(key)
        if index is None:
            index = len(self._points)
            self._points.append(coords)
            self._lookup[key] = index
        return index

    def table(self) -> List[Point3]:
        """Gibt die geordnete Punkttabelle zurück."""
        return list(self._points)

    def as_array(self) -> np.ndarray:
        """Gibt die Tabelle als (n, 3)-Array zurück."""
        if not self._points:
            return np.empty((0, 3), dtype=float)
        return np.asarray(self._points, dtype=float)
