"""
Tests für den Aufbau der CityObject-Hierarchie.
"""

import unittest
import numpy as np
from pipeline.cityjson.errors import ErrorKind, CityJSONError
from pipeline.cityjson.models import BuildingRecord
from pipeline.cityjson.objects import ObjectGraphBuilder
from pipeline.cityjson.solids import SolidCodec
from tests.fixtures.cityjson_fixtures import make_record, roof_mesh, box_mesh, square

class TestObjectGraphBuilder(unittest.TestCase):
    """Testklasse für ObjectGraphBuilder."""

    def setUp(self):
        """Test-Setup."""
        self.builder = ObjectGraphBuilder()

    def _build(self, records, builder=None):
        result = (builder or self.builder).build(records)
        self.assertTrue(result.is_ok)
        return result.value

    def test_single_building_scenario(self):
        """Test ein Gebäude mit Part 7 und je einer Dachfläche."""
        city_objects, vertex_index = self._build([make_record(part_ids=(7,))])

        self.assertEqual(set(city_objects), {'1', '1-7'})
        building = city_objects['1']
        part = city_objects['1-7']

        self.assertEqual(building['type'], 'Building')
        self.assertEqual(building['children'], ['1-7'])
        self.assertEqual(len(building['geometry']), 1)
        self.assertEqual(building['geometry'][0]['type'], 'MultiSurface')
        self.assertEqual(building['geometry'][0]['lod'], '0')

        self.assertEqual(part['type'], 'BuildingPart')
        self.assertEqual(part['parents'], ['1'])
        self.assertEqual([g['lod'] for g in part['geometry']], ['1.2', '1.3', '2.2'])
        for geometry in part['geometry']:
            self.assertEqual(geometry['type'], 'Solid')
            self.assertEqual(len(geometry['boundaries'][0]), 1)

        # Grundriss (z=0) und Dach (z=10) ohne Duplikate
        table = vertex_index.table()
        self.assertEqual(len(table), 8)
        self.assertEqual(len(set(table)), 8)

    def test_lods_share_vertices(self):
        """Test gleiche Punkte in verschiedenen LoDs ergeben gleiche Indizes."""
        city_objects, _ = self._build([make_record(part_ids=(7,))])
        boundaries = [g['boundaries'] for g in city_objects['1-7']['geometry']]
        self.assertEqual(boundaries[0], boundaries[1])
        self.assertEqual(boundaries[1], boundaries[2])

    def test_parent_child_links(self):
        """Test Eltern- und Kindverweise für mehrere Gebäude und Parts."""
        records = [
            make_record(part_ids=(1, 2, 3), mesh_factory=box_mesh),
            make_record(part_ids=(5,), footprint=square(0.0, x0=50.0)),
        ]
        city_objects, vertex_index = self._build(records)

        buildings = {k: v for k, v in city_objects.items() if v['type'] == 'Building'}
        parts = {k: v for k, v in city_objects.items() if v['type'] == 'BuildingPart'}
        self.assertEqual(set(buildings), {'1', '2'})
        self.assertEqual(len(parts), 4)

        for part_id, part in parts.items():
            self.assertEqual(len(part['parents']), 1)
            parent = buildings[part['parents'][0]]
            self.assertEqual(parent['children'].count(part_id), 1)
        self.assertEqual(buildings['1']['children'], ['1-1', '1-2', '1-3'])
        self.assertEqual(buildings['2']['children'], ['2-5'])

    def test_boundary_indices_in_range(self):
        """Test alle Indizes verweisen auf gültige Vertices."""
        records = [make_record(part_ids=(1, 2), mesh_factory=box_mesh) for _ in range(3)]
        city_objects, vertex_index = self._build(records)
        n = len(vertex_index)
        for city_object in city_objects.values():
            for geometry in city_object['geometry']:
                flat = np.asarray(list(_flatten(geometry['boundaries'])))
                self.assertTrue((flat < n).all())
                self.assertTrue((flat >= 0).all())

    def test_identifier_attribute_int(self):
        """Test Ganzzahl-Attribut überschreibt die generierte ID."""
        builder = ObjectGraphBuilder(identifier_attribute='identificatie')
        city_objects, _ = self._build([make_record(attributes={'identificatie': 42})], builder)
        self.assertIn('42', city_objects)
        self.assertNotIn('1', city_objects)
        self.assertEqual(city_objects['42-7']['parents'], ['42'])

    def test_identifier_attribute_str(self):
        """Test Text-Attribut überschreibt die generierte ID."""
        builder = ObjectGraphBuilder(identifier_attribute='identificatie')
        city_objects, _ = self._build(
            [make_record(attributes={'identificatie': 'NL.IMBAG.Pand.1'})], builder
        )
        self.assertEqual(city_objects['NL.IMBAG.Pand.1']['children'], ['NL.IMBAG.Pand.1-7'])

    def test_identifier_attribute_bool_and_float(self):
        """Test Wahrheitswerte und Gleitkommazahlen überschreiben die ID nicht."""
        builder = ObjectGraphBuilder(identifier_attribute='identificatie')
        records = [
            make_record(attributes={'identificatie': True}),
            make_record(attributes={'identificatie': 42.0}),
        ]
        city_objects, _ = self._build(records, builder)
        self.assertIn('1', city_objects)
        self.assertIn('2', city_objects)
        self.assertIs(city_objects['1']['attributes']['identificatie'], True)
        self.assertEqual(city_objects['2']['attributes']['identificatie'], 42.0)

    def test_identifier_attribute_numpy_int(self):
        """Test NumPy-Ganzzahlen werden wie Python-Ganzzahlen behandelt."""
        builder = ObjectGraphBuilder(identifier_attribute='id')
        city_objects, _ = self._build([make_record(attributes={'id': np.int64(17)})], builder)
        self.assertIn('17', city_objects)
        self.assertIsInstance(city_objects['17']['attributes']['id'], int)

    def test_attribute_renames(self):
        """Test Umbenennung nur für Gebäudeattribute."""
        builder = ObjectGraphBuilder(attribute_renames={'h_dak': 'roof_height', 'kas': ''})
        record = make_record(
            attributes={'h_dak': 12.5, 'kas': 'x', 'bouwjaar': 1950},
            part_attributes={'h_dak': 11.0},
        )
        city_objects, _ = self._build([record], builder)
        self.assertEqual(
            city_objects['1']['attributes'],
            {'roof_height': 12.5, 'kas': 'x', 'bouwjaar': 1950}
        )
        self.assertEqual(city_objects['1-7']['attributes'], {'h_dak': 11.0})

    def test_part_attributes_follow_building_index(self):
        """Test Part-Attribute gehören zum Gebäude mit demselben Index."""
        records = [
            make_record(part_ids=(1, 2), part_attributes={'rmse': 0.1}),
            make_record(part_ids=(1,), part_attributes={'rmse': 0.2}),
        ]
        city_objects, _ = self._build(records)
        self.assertEqual(city_objects['1-1']['attributes'], {'rmse': 0.1})
        self.assertEqual(city_objects['1-2']['attributes'], {'rmse': 0.1})
        self.assertEqual(city_objects['2-1']['attributes'], {'rmse': 0.2})

    def test_part_attributes_default(self):
        """Test ohne Part-Attribute erhalten Parts ein leeres Attribut-Dictionary."""
        record = BuildingRecord(
            footprint=square(),
            attributes={},
            lod12={1: roof_mesh()},
            lod13={1: roof_mesh()},
            lod22={1: roof_mesh()},
        )
        self.assertIsNone(record.part_attributes)
        city_objects, _ = self._build([record])
        self.assertEqual(city_objects['1-1']['attributes'], {})

    def test_missing_part_is_fatal(self):
        """Test fehlender Part in LoD 1.3 bricht den Aufbau ab."""
        record = BuildingRecord(
            footprint=square(),
            attributes={},
            lod12={3: roof_mesh()},
            lod13={},
            lod22={3: roof_mesh()},
        )
        result = self.builder.build([make_record(), record])
        self.assertFalse(result.is_ok)
        self.assertEqual(result.kind, ErrorKind.MISSING_PART)
        with self.assertRaises(CityJSONError):
            result.unwrap()

    def test_sequential_part_ids(self):
        """Test fortlaufende Part-IDs ohne zusammengesetzte IDs."""
        builder = ObjectGraphBuilder(composite_part_ids=False)
        city_objects, _ = self._build(
            [make_record(part_ids=(4, 9)), make_record(part_ids=(4,))], builder
        )
        self.assertEqual(city_objects['1']['children'], ['2', '3'])
        self.assertEqual(city_objects['4']['children'], ['5'])
        self.assertEqual(city_objects['5']['parents'], ['4'])

    def test_version_10_numeric_lods(self):
        """Test LoDs als Zahlen in CityJSON 1.0."""
        builder = ObjectGraphBuilder(solid_codec=SolidCodec(version='1.0'))
        city_objects, _ = self._build([make_record()], builder)
        self.assertEqual(city_objects['1']['geometry'][0]['lod'], 0)
        self.assertEqual([g['lod'] for g in city_objects['1-7']['geometry']], [1.2, 1.3, 2.2])

def _flatten(nested):
    """Flacht verschachtelte Boundary-Listen ab."""
    for item in nested:
        if isinstance(item, list):
            yield from _flatten(item)
        else:
            yield item

if __name__ == '__main__':
    unittest.main()
