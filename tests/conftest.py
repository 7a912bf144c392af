"""
Gemeinsame Test-Fixtures und Konfiguration.
"""
import sys
from pathlib import Path

import pytest

# Füge das Projekt-Root-Verzeichnis zum Python-Pfad hinzu
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tests.fixtures.cityjson_fixtures import sample_record, sample_box_record  # noqa: E402,F401

@pytest.fixture
def sample_cityjson_config():
    """Beispiel-Konfiguration für den CityJSON-Codec."""
    return {
        'cityjson': {
            'version': '1.1',
            'pretty_print': True,
            'identifier_attribute': '',
            'attribute_renames': {'rmse': 'rmse_lod22'},
            'composite_part_ids': True,
            'data_offset': [0.0, 0.0, 0.0],
            'metadata': {
                'crs': 'EPSG:7415',
                'title': 'Testdatensatz',
                'reference_date': '2024-01-01',
            },
            'read': {'lod': '2.2'},
        }
    }

@pytest.fixture
def sample_document():
    """Minimales CityJSON-Dokument mit Solids in LoD 1.2 und 2.2."""
    surfaces = [
        {'type': 'GroundSurface'},
        {'type': 'RoofSurface'},
        {'type': 'WallSurface'},
    ]
    return {
        'type': 'CityJSON',
        'version': '1.0',
        'CityObjects': {
            'B1': {
                'type': 'Building',
                'geometry': [
                    {'type': 'MultiSurface', 'lod': 0, 'boundaries': [[[0, 1, 2, 3]]]},
                    {
                        'type': 'Solid',
                        'lod': 2.2,
                        'boundaries': [[[[0, 1, 2, 3]], [[4, 5, 6, 7]], [[0, 1, 5, 4]]]],
                        'semantics': {'surfaces': surfaces, 'values': [[0, 1, 2]]},
                    },
                    {
                        'type': 'Solid',
                        'lod': 1.2,
                        'boundaries': [[[[4, 5, 6, 7]]]],
                        'semantics': {'surfaces': surfaces, 'values': [[1]]},
                    },
                ],
            }
        },
        'vertices': [
            [0, 0, 0], [1000, 0, 0], [1000, 1000, 0], [0, 1000, 0],
            [0, 0, 3000], [1000, 0, 3000], [1000, 1000, 3000], [0, 1000, 3000],
        ],
        'transform': {'scale': [0.001, 0.001, 0.001], 'translate': [100.0, 200.0, 0.0]},
    }
