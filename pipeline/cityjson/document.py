"""
Zusammenbau und Auslesen kompletter CityJSON-Dokumente.

Schreibpfad: Gebäude -> Objektgraph -> Vertex-Quantisierung, Transform und
Metadaten -> JSON-Datei. Lesepfad: JSON-Datei -> alle Solids einer LoD ->
flache Listen von Ringen und Oberflächentypen.
"""

import datetime
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
from shapely.geometry import Polygon

from core.logging_config import LoggedOperation
from .config import CityJSONConfig, CityJSONConfigError
from .errors import CityJSONError, ErrorKind, Ok, Err, Result
from .models import BuildingRecord
from .objects import ObjectGraphBuilder, CityObjects
from .palette import SurfacePalette, DEFAULT_PALETTE
from .solids import SolidCodec, Lod, normalize_lod
from .vertices import VertexIndex

SCALE = [0.001, 0.001, 0.001]

def format_crs(crs: Union[str, int, None], version: str) -> Optional[str]:
    """Wandelt einen EPSG-Code in die Referenzsystem-Angabe der jeweiligen Version um.

    Beispiel: 'EPSG:7415' -> 'urn:ogc:def:crs:EPSG::7415' (1.0)
    bzw. 'https://www.opengis.net/def/crs/EPSG/0/7415' (1.1)
    """
    if crs is None or crs == '':
        return None
    text = str(crs)
    if text.upper().startswith('EPSG:'):
        text = text.split(':', 1)[1]
    if not text.isdigit():
        return text
    if version == '1.0':
        return f"urn:ogc:def:crs:EPSG::{text}"
    return f"https://www.opengis.net/def/crs/EPSG/0/{text}"

class DocumentAssembler:
    """Erzeugt CityJSON-Dokumente und liest Flächen daraus zurück."""

    def __init__(self, config: Optional[CityJSONConfig] = None,
                 palette: SurfacePalette = DEFAULT_PALETTE):
        """Initialisiert den Assembler.

        Args:
            config: CityJSON-Konfiguration (Standardwerte wenn None)
            palette: Oberflächen-Palette für Schreiben und Lesen
        """
        self.logger = logging.getLogger(__name__)
        self.config = config or CityJSONConfig()
        if not self.config.validate():
            raise CityJSONConfigError("Ungültige CityJSON-Konfiguration")

        self.version = self.config.version
        self.solid_codec = SolidCodec(palette=palette, version=self.version)
        self.builder = ObjectGraphBuilder(
            solid_codec=self.solid_codec,
            identifier_attribute=self.config.identifier_attribute,
            attribute_renames=self.config.attribute_renames,
            composite_part_ids=self.config.composite_part_ids,
        )

    # ------------------------------------------------------------------
    # Schreiben
    # ------------------------------------------------------------------
    def assemble(self, city_objects: CityObjects, vertex_index: VertexIndex) -> Dict[str, Any]:
        """Baut das Dokument aus fertigen CityObjects und dem Vertex-Index.

        Die Koordinaten im Speicher sind relativ zum Datenversatz, der als
        translate geschrieben wird. Quantisiert wird durch Runden auf die
        nächste Ganzzahl.
        """
        offset = np.asarray(self.config.data_offset, dtype=float)
        points = vertex_index.as_array()

        document = {
            'type': 'CityJSON',
            'version': self.version,
            'CityObjects': city_objects,
            'vertices': np.round(points / np.asarray(SCALE)).astype(np.int64).tolist(),
            'transform': {
                'scale': list(SCALE),
                'translate': offset.tolist(),
            },
        }

        if len(points):
            bbox = np.concatenate([points.min(axis=0) + offset, points.max(axis=0) + offset])
            extent = [float(v) for v in bbox]
        else:
            self.logger.warning("⚠️ Keine Vertices vorhanden, geographicalExtent entfällt")
            extent = None

        document['metadata'] = self._metadata(extent)
        return document

    def build_document(self, records: Sequence[BuildingRecord]) -> Result:
        """Baut ein komplettes Dokument aus Gebäuden.

        Returns:
            Result: Ok(dokument) oder Err
        """
        result = self.builder.build(records)
        if not result.is_ok:
            self.logger.error(f"❌ Objektgraph konnte nicht erstellt werden: {result.error}")
            return result

        city_objects, vertex_index = result.value
        return Ok(self.assemble(city_objects, vertex_index))

    def write(self, records: Sequence[BuildingRecord],
              output_path: Optional[Union[str, Path]] = None) -> Result:
        """Schreibt die Gebäude als CityJSON-Datei.

        Args:
            records: Gebäude in Eingabereihenfolge
            output_path: Zielpfad (sonst output_file aus der Konfiguration)

        Returns:
            Result: Ok(pfad) oder Err; bei einem Fehler wird keine Datei geschrieben
        """
        output_path = output_path or self.config.output_file
        if not output_path:
            return Err(CityJSONError(ErrorKind.IO, "Kein Ausgabepfad angegeben"))
        output_path = Path(output_path)

        result = self.build_document(records)
        if not result.is_ok:
            return result

        # Erst vollständig serialisieren, damit kein Dateifragment entsteht
        try:
            if self.config.pretty_print:
                text = json.dumps(result.value, indent=2, ensure_ascii=False)
            else:
                text = json.dumps(result.value, separators=(',', ':'), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            error = CityJSONError(ErrorKind.IO, f"Dokument nicht serialisierbar: {e}")
            self.logger.error(f"❌ {error}")
            return Err(error)

        try:
            with LoggedOperation(f"CityJSON schreiben: {output_path}", self.logger):
                output_path.parent.mkdir(parents=True, exist_ok=True)
                with open(output_path, 'w', encoding='utf-8') as f:
                    f.write(text)
        except OSError as e:
            return Err(CityJSONError(ErrorKind.IO, f"Ausgabedatei nicht schreibbar: {e}"))

        return Ok(output_path)

    def _metadata(self, extent: Optional[List[float]]) -> Dict[str, Any]:
        meta = self.config.metadata
        reference_date = meta.get('reference_date') or datetime.date.today().isoformat()

        if self.version == '1.0':
            metadata = {
                'referenceSystem': format_crs(meta.get('crs'), self.version),
                'datasetTitle': meta.get('title'),
                'datasetReferenceDate': str(reference_date),
                'geographicLocation': meta.get('geographic_location'),
            }
        else:
            metadata = {
                'referenceSystem': format_crs(meta.get('crs'), self.version),
                'title': meta.get('title'),
                'referenceDate': str(reference_date),
            }
        metadata['geographicalExtent'] = extent
        metadata.update(meta.get('extra') or {})

        return {k: v for k, v in metadata.items() if v is not None}

    # ------------------------------------------------------------------
    # Lesen
    # ------------------------------------------------------------------
    def read(self, document: Dict[str, Any], lod: Lod) -> Result:
        """Extrahiert alle Flächen der Solids einer LoD.

        Args:
            document: Geparstes CityJSON-Dokument
            lod: Gesuchte LoD, z.B. "2.2" oder 2.2

        Returns:
            Result: Ok((ringe, oberflächentypen)) oder Err
        """
        try:
            rings, surface_types = self._decode_document(document, lod)
        except CityJSONError as e:
            self.logger.error(f"❌ Fehler beim Dekodieren: {e}")
            return Err(e)
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            error = CityJSONError(ErrorKind.MISSING_FIELD, f"Fehlendes oder ungültiges Feld: {e!r}")
            self.logger.error(f"❌ Fehler beim Dekodieren: {error}")
            return Err(error)

        self.logger.info(f"✅ {len(rings)} Flächen in LoD {normalize_lod(lod)} gefunden")
        return Ok((rings, surface_types))

    def read_file(self, input_path: Union[str, Path], lod: Lod) -> Result:
        """Liest eine CityJSON-Datei und extrahiert die Flächen einer LoD."""
        self.logger.info(f"🔄 Lade CityJSON-Datei: {input_path}")
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            error = CityJSONError(ErrorKind.DOCUMENT_PARSE, f"Dokument nicht lesbar: {e}")
            self.logger.error(f"❌ {error}")
            return Err(error)

        return self.read(document, lod)

    def _decode_document(self, document: Dict[str, Any],
                         lod: Lod) -> Tuple[List[Polygon], List[int]]:
        vertices = np.asarray(document['vertices'], dtype=float)
        if len(vertices) == 0:
            vertices = vertices.reshape(0, 3)
        if vertices.ndim != 2 or vertices.shape[1] != 3:
            raise CityJSONError(ErrorKind.MISSING_FIELD, f"Vertices mit Form {vertices.shape}")

        transform = document['transform']
        scale = [float(v) for v in transform['scale']]
        translate = [float(v) for v in transform.get('translate', [0.0, 0.0, 0.0])]
        if len(scale) != 3 or len(translate) != 3:
            raise CityJSONError(ErrorKind.MISSING_FIELD, "transform braucht je drei Werte")

        rings = []
        surface_types = []
        for city_object in document['CityObjects'].values():
            for geometry in city_object.get('geometry', []):
                faces = self.solid_codec.decode(geometry, vertices, scale, translate, lod)
                if faces is None:
                    continue
                for face in faces:
                    rings.append(face.ring)
                    surface_types.append(face.surface_type)

        return rings, surface_types
