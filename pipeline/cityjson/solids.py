"""
Solid-Codec: Meshes <-> CityJSON-Geometrien vom Typ "Solid".
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from .errors import CityJSONError, ErrorKind
from .models import Face, Mesh
from .palette import SurfacePalette, DEFAULT_PALETTE
from .rings import RingCodec
from .vertices import VertexIndex

Lod = Union[str, int, float]

SUPPORTED_VERSIONS = ('1.0', '1.1')

def format_lod(lod: Lod, version: str) -> Lod:
    """Gibt die LoD als Zahl (CityJSON 1.0) oder als String (1.1) zurück."""
    text = normalize_lod(lod)
    if version == '1.0':
        value = float(text)
        return int(value) if value.is_integer() else value
    return text

def normalize_lod(lod: Lod) -> str:
    """Vergleichbare Textform einer LoD, z.B. 2 -> "2", "2.0" -> "2", 1.2 -> "1.2"."""
    if isinstance(lod, bool):
        raise CityJSONError(ErrorKind.MISSING_FIELD, f"Ungültige LoD: {lod!r}")
    try:
        return f"{float(lod):g}"
    except (TypeError, ValueError):
        return str(lod)

def lod_matches(lod: Lod, target_lod: Lod) -> bool:
    """Vergleicht zwei LoDs unabhängig davon, ob sie als Zahl oder Text vorliegen."""
    return normalize_lod(lod) == normalize_lod(target_lod)

class SolidCodec:
    """Kodiert Meshes als Solids mit Semantik-Block und liest sie zurück."""

    def __init__(self, palette: SurfacePalette = DEFAULT_PALETTE,
                 version: str = '1.1', ring_codec: Optional[RingCodec] = None):
        """Initialisiert den Solid-Codec.

        Args:
            palette: Oberflächen-Palette für Schreiben und Lesen
            version: CityJSON-Version ("1.0" oder "1.1")
            ring_codec: Optionaler Ring-Codec
        """
        if version not in SUPPORTED_VERSIONS:
            raise ValueError(f"Nicht unterstützte CityJSON-Version: {version}")
        self.logger = logging.getLogger(__name__)
        self.palette = palette
        self.version = version
        self.ring_codec = ring_codec or RingCodec()

    def encode(self, mesh: Mesh, lod: Lod, vertex_index: VertexIndex) -> Dict[str, Any]:
        """Kodiert ein Mesh als Solid mit einer Schale.

        Die Labels der Faces werden direkt als Index in die Palette
        übernommen und müssen daher bereits im Bereich der Palette liegen.

        Args:
            mesh: Geordnete Liste von Faces
            lod: LoD-Bezeichnung, z.B. "2.2"
            vertex_index: Gemeinsamer Vertex-Index des Dokuments

        Returns:
            Dict[str, Any]: CityJSON-Geometrie
        """
        shell = []
        values = []
        for face in mesh:
            values.append(self.palette.check_label(face.surface_type))
            shell.append(self.ring_codec.encode(face.ring, vertex_index))

        return {
            'type': 'Solid',
            'lod': format_lod(lod, self.version),
            'boundaries': [shell],
            'semantics': {
                'surfaces': self.palette.surfaces(),
                'values': [values],
            },
        }

    def decode(self,
               geometry: Dict[str, Any],
               vertices: np.ndarray,
               scale: Sequence[float],
               translate: Sequence[float],
               target_lod: Lod) -> Optional[List[Face]]:
        """Dekodiert die Außenschale eines Solids.

        Args:
            geometry: CityJSON-Geometrie
            vertices: Quantisierte Vertex-Tabelle als (n, 3)-Array
            scale: Skalierung je Achse
            translate: Verschiebung je Achse
            target_lod: Gesuchte LoD

        Returns:
            Optional[List[Face]]: Faces in Reihenfolge oder None, wenn Typ oder LoD nicht passen
        """
        if geometry['type'] != 'Solid' or not lod_matches(geometry['lod'], target_lod):
            return None

        semantics = geometry['semantics']
        surfaces = semantics['surfaces']
        values = semantics['values'][0]

        faces = []
        for position, boundary in enumerate(geometry['boundaries'][0]):
            ring = self.ring_codec.decode(boundary, vertices, scale, translate)
            value = values[position]
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < len(surfaces):
                raise CityJSONError(
                    ErrorKind.MISSING_FIELD,
                    f"Ungültiger Semantik-Wert {value!r} für Fläche {position}"
                )
            faces.append(Face(ring, self.palette.code_for(surfaces[value]['type'])))

        self.logger.debug(f"🔍 Solid mit {len(faces)} Flächen in LoD {normalize_lod(target_lod)} dekodiert")
        return faces
