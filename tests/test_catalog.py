"""
Unit tests for the region catalog and the auxiliary attribute table.
"""

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from bioterra.catalog.regions import RegionCatalog, REGION_RECORDS, region_from_record
from bioterra.catalog.attributes import (
    DEFAULT_ATTRIBUTES,
    lookup_attribute,
    get_groundwater_level,
    get_sdg_progress,
)
from bioterra.models.data_models import RiskLevel
from tests.fixtures.sample_data import create_sample_region_records


class TestRegionCatalog(unittest.TestCase):
    """Test suite for RegionCatalog."""

    def setUp(self):
        self.catalog = RegionCatalog.default()

    def test_default_catalog_has_nine_departments(self):
        self.assertEqual(len(self.catalog), 9)
        self.assertEqual(len(REGION_RECORDS), 9)

    def test_lookup_by_name(self):
        lima = self.catalog.get('Lima')
        self.assertIsNotNone(lima)
        self.assertEqual(lima.air_quality, 85)
        self.assertEqual(lima.risk_level, RiskLevel.MEDIUM)
        self.assertEqual(lima.coordinates, (-12.0464, -77.0428))

    def test_unknown_name_returns_none(self):
        self.assertIsNone(self.catalog.get('Atlantis'))
        self.assertNotIn('Atlantis', self.catalog)

    def test_names_are_unique(self):
        names = self.catalog.names()
        self.assertEqual(len(names), len(set(names)))

    def test_duplicate_names_rejected(self):
        records = create_sample_region_records()
        records.append(dict(records[0]))
        with self.assertRaises(ValueError) as context:
            RegionCatalog.from_records(records)
        self.assertIn("Duplicate", str(context.exception))

    def test_invalid_risk_level_rejected(self):
        record = dict(create_sample_region_records()[0], risk_level='extreme')
        with self.assertRaises(ValueError):
            region_from_record(record)

    def test_out_of_range_air_quality_rejected(self):
        record = dict(create_sample_region_records()[0], air_quality=900)
        with self.assertRaises(ValueError):
            region_from_record(record)

    def test_missing_field_rejected(self):
        record = dict(create_sample_region_records()[0])
        del record['coordinates']
        with self.assertRaises(ValueError) as context:
            region_from_record(record)
        self.assertIn("missing field", str(context.exception))

    def test_to_frame_sorts_worst_risk_first(self):
        df = self.catalog.to_frame()
        self.assertEqual(len(df), 9)
        self.assertEqual(df.iloc[0]['name'], 'Madre de Dios')
        self.assertEqual(df.iloc[0]['risk_level'], 'critical')
        self.assertIn('latitude', df.columns)
        self.assertIn('longitude', df.columns)

    def test_regions_are_immutable(self):
        lima = self.catalog.get('Lima')
        with self.assertRaises(Exception):
            lima.air_quality = 10


class TestAttributeLookup(unittest.TestCase):
    """Test suite for the region-keyed attribute fallbacks."""

    def test_known_region_value(self):
        self.assertEqual(get_groundwater_level('Lima'), 'Stable')
        self.assertEqual(get_sdg_progress('Arequipa'), '75% Complete')

    def test_unknown_region_falls_back_to_default(self):
        self.assertEqual(get_groundwater_level('Testville'), 'Moderate')
        self.assertEqual(get_sdg_progress('Testville'), '50% Complete')

    def test_every_default_resolves_for_unknown_region(self):
        for attribute, default in DEFAULT_ATTRIBUTES.items():
            self.assertEqual(lookup_attribute('Nowhere', attribute), default)

    def test_unknown_attribute_name_raises(self):
        with self.assertRaises(KeyError):
            lookup_attribute('Lima', 'not_an_attribute')


if __name__ == '__main__':
    unittest.main()
