"""
Adapter zwischen dem CityJSON-Codec und pandas/geopandas.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import geopandas as gpd
import pandas as pd
from shapely.geometry import Polygon

from .document import DocumentAssembler
from .palette import DECODE_CODES
from .solids import Lod

logger = logging.getLogger(__name__)

SURFACE_NAMES = {int(code): name for name, code in DECODE_CODES.items()}

def attributes_from_frame(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Wandelt eine Attributtabelle (eine Zeile pro Gebäude) in Attribut-Dictionaries um.

    Fehlende Werte (NaN/None) werden weggelassen, NumPy-Skalare in
    Python-Werte umgewandelt.

    Args:
        df: DataFrame mit einer Zeile pro Gebäude in Eingabereihenfolge

    Returns:
        List[Dict[str, Any]]: Ein Dictionary pro Zeile
    """
    records = []
    for _, row in df.iterrows():
        attributes = {}
        for name, value in row.items():
            if pd.isna(value):
                continue
            attributes[str(name)] = value.item() if hasattr(value, 'item') else value
        records.append(attributes)
    return records

def faces_to_geodataframe(rings: Sequence[Polygon], surface_types: Sequence[int],
                          crs: Optional[str] = None) -> gpd.GeoDataFrame:
    """Erstellt ein GeoDataFrame mit einer Zeile pro Fläche.

    Args:
        rings: Dekodierte Ringe
        surface_types: Oberflächentyp-Codes parallel zu den Ringen
        crs: Optionales Koordinatensystem

    Returns:
        gpd.GeoDataFrame: Spalten surface_type, surface_name, geometry
    """
    if len(rings) != len(surface_types):
        raise ValueError(
            f"Anzahl Ringe ({len(rings)}) und Oberflächentypen ({len(surface_types)}) verschieden"
        )
    return gpd.GeoDataFrame(
        {
            'surface_type': pd.Series(list(surface_types), dtype='int64'),
            'surface_name': [SURFACE_NAMES[int(code)] for code in surface_types],
        },
        geometry=list(rings),
        crs=crs,
    )

def fetch_cityjson_faces(input_file: Union[str, Path], lod: Lod,
                         output_dir: Optional[Union[str, Path]] = None,
                         crs: Optional[str] = None,
                         assembler: Optional[DocumentAssembler] = None) -> gpd.GeoDataFrame:
    """Hilfsfunktion zum Extrahieren der Flächen einer LoD als GeoDataFrame.

    Args:
        input_file: Pfad zur CityJSON-Datei
        lod: Gesuchte LoD
        output_dir: Optionales Ausgabeverzeichnis für faces.gpkg
        crs: Optionales Koordinatensystem
        assembler: Optionaler, vorkonfigurierter Assembler

    Returns:
        gpd.GeoDataFrame: Flächen mit Oberflächentyp

    Raises:
        CityJSONError: Wenn das Dokument nicht gelesen werden kann
    """
    assembler = assembler or DocumentAssembler()
    rings, surface_types = assembler.read_file(input_file, lod).unwrap()
    faces = faces_to_geodataframe(rings, surface_types, crs=crs)

    if output_dir:
        output_path = Path(output_dir) / "faces.gpkg"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        faces.to_file(output_path, driver="GPKG")
        logger.info(f"✅ {len(faces)} Flächen gespeichert in {output_path}")

    return faces
