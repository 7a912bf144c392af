"""
CityJSON-Paket für das Schreiben und Lesen von Gebäudegeometrien.
"""

from .errors import ErrorKind, CityJSONError, Ok, Err, Result
from .palette import SurfaceType, SurfacePalette, DEFAULT_PALETTE
from .vertices import VertexIndex
from .models import Face, Mesh, BuildingRecord
from .rings import RingCodec
from .solids import SolidCodec
from .objects import ObjectGraphBuilder
from .config import CityJSONConfig, CityJSONConfigError
from .document import DocumentAssembler
from .frames import attributes_from_frame, faces_to_geodataframe, fetch_cityjson_faces

__all__ = [
    'ErrorKind',
    'CityJSONError',
    'Ok',
    'Err',
    'Result',
    'SurfaceType',
    'SurfacePalette',
    'DEFAULT_PALETTE',
    'VertexIndex',
    'Face',
    'Mesh',
    'BuildingRecord',
    'RingCodec',
    'SolidCodec',
    'ObjectGraphBuilder',
    'CityJSONConfig',
    'CityJSONConfigError',
    'DocumentAssembler',
    'attributes_from_frame',
    'faces_to_geodataframe',
    'fetch_cityjson_faces'
]
