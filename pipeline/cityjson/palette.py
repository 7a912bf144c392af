"""
Oberflächentypen und Paletten für die Semantik von Solids.

Beim Schreiben wird immer dieselbe Palette mit vier Einträgen ausgegeben
(Boden, Dach, Außenwand, Innenwand). Beim Lesen werden die Typnamen über
die acht CityJSON-Oberflächentypen auf Codes 0-7 abgebildet. Die beiden
Richtungen sind absichtlich nicht symmetrisch.
"""

import copy
import numbers
from enum import IntEnum
from typing import Dict, List, Any, Optional

from .errors import CityJSONError, ErrorKind

class SurfaceType(IntEnum):
    """Oberflächentyp-Codes beim Lesen."""
    ROOF = 0
    GROUND = 1
    WALL = 2
    CLOSURE = 3
    OUTER_CEILING = 4
    OUTER_FLOOR = 5
    WINDOW = 6
    DOOR = 7

DECODE_CODES: Dict[str, SurfaceType] = {
    'RoofSurface': SurfaceType.ROOF,
    'GroundSurface': SurfaceType.GROUND,
    'WallSurface': SurfaceType.WALL,
    'ClosureSurface': SurfaceType.CLOSURE,
    'OuterCeilingSurface': SurfaceType.OUTER_CEILING,
    'OuterFloorSurface': SurfaceType.OUTER_FLOOR,
    'Window': SurfaceType.WINDOW,
    'Door': SurfaceType.DOOR,
}

# Reihenfolge: Boden, Dach, Außenwand, Innenwand
ENCODE_SURFACES: List[Dict[str, Any]] = [
    {'type': 'GroundSurface'},
    {'type': 'RoofSurface'},
    {'type': 'WallSurface', 'on_footprint_edge': True},
    {'type': 'WallSurface', 'on_footprint_edge': False},
]

# Labels der Schreib-Palette
GROUND, ROOF, WALL_OUTER, WALL_INNER = range(4)

class SurfacePalette:
    """Bidirektionale Palette für die Semantik-Blöcke von Solids."""

    def __init__(self,
                 encode_surfaces: Optional[List[Dict[str, Any]]] = None,
                 decode_codes: Optional[Dict[str, int]] = None):
        """Initialisiert die Palette.

        Args:
            encode_surfaces: Oberflächen-Einträge, die beim Schreiben ausgegeben werden
            decode_codes: Abbildung Typname -> Code beim Lesen
        """
        self._encode_surfaces = copy.deepcopy(
            ENCODE_SURFACES if encode_surfaces is None else encode_surfaces
        )
        self._decode_codes = dict(DECODE_CODES if decode_codes is None else decode_codes)

    def __len__(self) -> int:
        return len(self._encode_surfaces)

    def surfaces(self) -> List[Dict[str, Any]]:
        """Gibt eine Kopie der Schreib-Palette zurück."""
        return copy.deepcopy(self._encode_surfaces)

    def check_label(self, label: int) -> int:
        """Prüft, ob ein Face-Label ein gültiger Index in die Schreib-Palette ist."""
        integral = isinstance(label, numbers.Integral) or (
            isinstance(label, float) and label.is_integer()
        )
        if isinstance(label, bool) or not integral or not 0 <= int(label) < len(self._encode_surfaces):
            raise CityJSONError(
                ErrorKind.INVALID_SURFACE_LABEL,
                f"Label {label!r} ist kein Index der Palette (0-{len(self._encode_surfaces) - 1})"
            )
        return int(label)

    def code_for(self, type_name: str) -> int:
        """Bildet einen CityJSON-Typnamen auf seinen Code ab.

        Raises:
            CityJSONError: Bei unbekanntem Typnamen
        """
        if type_name not in self._decode_codes:
            raise CityJSONError(
                ErrorKind.UNKNOWN_SURFACE_TYPE,
                f"Unbekannter Oberflächentyp: {type_name!r}"
            )
        return int(self._decode_codes[type_name])

    def surface_type(self, label: int) -> int:
        """Code, den ein Schreib-Label nach dem Lesen ergibt."""
        return self.code_for(self._encode_surfaces[self.check_label(label)]['type'])

DEFAULT_PALETTE = SurfacePalette()
