"""
Aufbau der CityObject-Hierarchie (Building -> BuildingPart).
"""

import itertools
import logging
from typing import Any, Dict, Optional, Sequence

import numpy as np

from core.logging_config import LoggedOperation
from .errors import CityJSONError, ErrorKind, Ok, Err, Result
from .models import BuildingRecord, Mesh
from .solids import SolidCodec, format_lod
from .vertices import VertexIndex

CityObjects = Dict[str, Dict[str, Any]]

FOOTPRINT_LOD = '0'
PART_LODS = ('1.2', '1.3', '2.2')

def _plain_value(value: Any) -> Any:
    """Wandelt NumPy-Skalare in Python-Werte um."""
    if isinstance(value, np.generic):
        return value.item()
    return value

class ObjectGraphBuilder:
    """Baut Buildings und BuildingParts über drei LoDs plus Grundriss auf."""

    def __init__(self,
                 solid_codec: Optional[SolidCodec] = None,
                 identifier_attribute: str = '',
                 attribute_renames: Optional[Dict[str, str]] = None,
                 composite_part_ids: bool = True):
        """Initialisiert den Builder.

        Args:
            solid_codec: Solid-Codec (bestimmt Palette und Version)
            identifier_attribute: Attribut, dessen Wert die Gebäude-ID liefert (leer = generierte IDs)
            attribute_renames: Umbenennung alter -> neuer Attributname
            composite_part_ids: Part-IDs als "{gebäude}-{part}" statt fortlaufender Zähler
        """
        self.logger = logging.getLogger(__name__)
        self.solid_codec = solid_codec or SolidCodec()
        self.ring_codec = self.solid_codec.ring_codec
        self.identifier_attribute = identifier_attribute or ''
        self.attribute_renames = dict(attribute_renames or {})
        self.composite_part_ids = composite_part_ids

    def build(self, records: Sequence[BuildingRecord]) -> Result:
        """Baut alle CityObjects eines Dokuments auf.

        Args:
            records: Gebäude in Eingabereihenfolge

        Returns:
            Result: Ok((city_objects, vertex_index)) oder Err bei fehlenden Parts
        """
        try:
            with LoggedOperation(f"Objektgraph für {len(records)} Gebäude aufbauen", self.logger):
                vertex_index = VertexIndex()
                city_objects: CityObjects = {}
                counter = itertools.count(1)
                for i, record in enumerate(records):
                    self._add_building(i, record, counter, vertex_index, city_objects)
        except CityJSONError as e:
            return Err(e)

        self.logger.info(
            f"✅ {len(city_objects)} CityObjects mit {len(vertex_index)} Vertices erstellt"
        )
        return Ok((city_objects, vertex_index))

    def building_id(self, attributes: Dict[str, Any], default_id: str) -> str:
        """Ermittelt die Gebäude-ID.

        Nur Ganzzahl- und Text-Attribute überschreiben die generierte ID,
        Wahrheitswerte und Gleitkommazahlen nicht.
        """
        if not self.identifier_attribute or self.identifier_attribute not in attributes:
            return default_id

        value = _plain_value(attributes[self.identifier_attribute])
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            self.logger.debug(
                f"🔍 Attribut {self.identifier_attribute} vom Typ {type(value).__name__} "
                f"wird nicht als ID verwendet"
            )
            return default_id
        return str(value)

    def rename_attributes(self, attributes: Dict[str, Any]) -> Dict[str, Any]:
        """Wendet die Umbenennungstabelle auf Gebäudeattribute an."""
        renamed = {}
        for name, value in attributes.items():
            new_name = self.attribute_renames.get(name) or name
            renamed[new_name] = _plain_value(value)
        return renamed

    def _add_building(self, i: int, record: BuildingRecord, counter,
                      vertex_index: VertexIndex, city_objects: CityObjects) -> None:
        building_id = self.building_id(record.attributes, str(next(counter)))

        footprint = {
            'type': 'MultiSurface',
            'lod': format_lod(FOOTPRINT_LOD, self.solid_codec.version),
            'boundaries': [self.ring_codec.encode(record.footprint, vertex_index)],
        }
        building = {
            'type': 'Building',
            'attributes': self.rename_attributes(record.attributes),
            'geometry': [footprint],
            'children': [],
        }
        self._insert(city_objects, building_id, building)

        # Part-Attribute hängen am Index des Gebäudes, nicht an einem eigenen Zähler
        part_attributes = {k: _plain_value(v) for k, v in (record.part_attributes or {}).items()}

        for part_id, mesh22 in record.lod22.items():
            mesh12 = self._lookup_part(record.lod12, part_id, '1.2', i)
            mesh13 = self._lookup_part(record.lod13, part_id, '1.3', i)

            geometries = [
                self.solid_codec.encode(mesh, lod, vertex_index)
                for mesh, lod in zip((mesh12, mesh13, mesh22), PART_LODS)
            ]

            if self.composite_part_ids:
                part_key = f"{building_id}-{part_id}"
            else:
                part_key = str(next(counter))

            part = {
                'type': 'BuildingPart',
                'parents': [building_id],
                'attributes': dict(part_attributes),
                'geometry': geometries,
            }
            building['children'].append(part_key)
            self._insert(city_objects, part_key, part)

        self.logger.debug(
            f"🏠 Gebäude {building_id}: {len(building['children'])} Parts"
        )

    def _lookup_part(self, meshes: Dict[int, Mesh], part_id: int, lod: str, i: int) -> Mesh:
        if part_id not in meshes:
            raise CityJSONError(
                ErrorKind.MISSING_PART,
                f"Part {part_id} von Gebäude {i} fehlt in LoD {lod}"
            )
        return meshes[part_id]

    def _insert(self, city_objects: CityObjects, object_id: str, city_object: Dict[str, Any]) -> None:
        if object_id in city_objects:
            self.logger.warning(f"⚠️ Doppelte ID {object_id}, vorhandenes Objekt wird überschrieben")
        city_objects[object_id] = city_object
