"""
Datentypen für Gebäudegeometrien im Speicher.
"""

from typing import Any, Dict, List, NamedTuple, Optional

from shapely.geometry import Polygon

class Face(NamedTuple):
    """Ebene Fläche eines Meshes mit semantischem Label."""
    ring: Polygon
    surface_type: int

Mesh = List[Face]

class BuildingRecord(NamedTuple):
    """Eingabedaten eines Gebäudes für den Schreibpfad.

    Jede Part-ID aus ``lod22`` muss auch in ``lod12`` und ``lod13``
    vorkommen.
    """
    footprint: Polygon
    attributes: Dict[str, Any]
    lod12: Dict[int, Mesh]
    lod13: Dict[int, Mesh]
    lod22: Dict[int, Mesh]
    part_attributes: Optional[Dict[str, Any]] = None
