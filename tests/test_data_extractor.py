"""
Tests for component classification and spec bag resolution.
"""

import copy
import pytest
from types import SimpleNamespace
from services.benchmark.config_manager import BenchmarkConfigManager
from services.benchmark.data_extractor import ComponentDataExtractor, SpecSourceKind
from tests import setup_test_environment, cpu_record, high_end_build


@pytest.fixture
def extractor():
    """Create ComponentDataExtractor instance"""
    setup_test_environment()
    return ComponentDataExtractor(BenchmarkConfigManager())


class TestResolveSpecs:
    """Test cases for picking a record's spec bag"""

    def test_flattened_specs_win(self, extractor):
        record = {
            'category': 'CPU',
            'specs': {'cores': 8},
            'detailedSpecs': {'cpu': {'cores': 16}},
            'specifications': {'cores': '4'}
        }
        source = extractor.resolve_specs(record, 'cpu')
        assert source.kind == SpecSourceKind.FLATTENED
        assert source.specs == {'cores': 8}

    def test_detailed_specs_before_generic(self, extractor):
        record = {
            'category': 'CPU',
            'detailedSpecs': {'cpu': {'cores': 16}},
            'specifications': {'cores': '4'}
        }
        source = extractor.resolve_specs(record, 'cpu')
        assert source.kind == SpecSourceKind.DETAILED
        assert source.specs == {'cores': 16}

    def test_generic_specifications_fallback(self, extractor):
        record = {
            'category': 'CPU',
            'detailedSpecs': {'gpu': {'cudaCores': 1024}},
            'specifications': {'cores': '4'}
        }
        source = extractor.resolve_specs(record, 'cpu')
        assert source.kind == SpecSourceKind.GENERIC
        assert source.specs == {'cores': '4'}

    def test_missing_specifications_is_empty_bag(self, extractor):
        source = extractor.resolve_specs({'category': 'RAM'}, 'ram')
        assert source.kind == SpecSourceKind.GENERIC
        assert source.specs == {}

    def test_specifications_as_pairs(self, extractor):
        record = {'category': 'RAM', 'specifications': [('capacity', '16GB')]}
        assert extractor.resolve_specs(record, 'ram').specs == {'capacity': '16GB'}

    def test_attribute_style_document(self, extractor):
        product = SimpleNamespace(category='GPU', name='RTX 4070', specs=None,
                                  detailedSpecs=None, specifications={'cudaCores': '5888'})
        result = extractor.extract([product])
        assert result.specs_for('gpu') == {'cudaCores': '5888'}


class TestClassification:
    """Test cases for assigning records to categories"""

    def test_one_source_per_category(self, extractor):
        result = extractor.extract(high_end_build())
        assert set(result.sources) == {'cpu', 'gpu', 'ram', 'storage', 'motherboard'}
        assert result.gpu_from_accessory is False

    def test_category_is_case_insensitive(self, extractor):
        result = extractor.extract([{'category': 'cpu', 'specs': {'cores': 6}}])
        assert result.specs_for('cpu') == {'cores': 6}

    def test_first_seen_wins(self, extractor):
        result = extractor.extract([cpu_record(cores=4), cpu_record(cores=16)])
        assert result.specs_for('cpu') == {'cores': 4}

    def test_unknown_categories_ignored(self, extractor):
        result = extractor.extract([
            {'category': 'Case', 'name': 'Mid tower', 'specifications': {}},
            {'category': 'Accessories', 'name': 'Gaming mouse', 'tags': ['peripherals']},
            {'name': 'no category'}
        ])
        assert result.sources == {}
        assert result.gpu_from_accessory is False

    def test_empty_input(self, extractor):
        assert extractor.extract([]).sources == {}
        assert extractor.extract(None).sources == {}


class TestGpuRescue:
    """Test cases for graphics cards filed under accessories"""

    @pytest.mark.parametrize('name', [
        'NVIDIA GeForce RTX 4090',
        'Sapphire Pulse RX 7800 XT',
        'Intel Arc A770',
        'Generic Graphics Card 8GB',
    ])
    def test_gpu_names(self, extractor, name):
        record = {'category': 'Accessories', 'name': name, 'specifications': {'cudaCores': '1'}}
        result = extractor.extract([record])
        assert result.gpu_from_accessory is True
        assert result.specs_for('gpu') == {'cudaCores': '1'}

    def test_gpu_tag(self, extractor):
        record = {'category': 'Accessories', 'name': 'Mystery card', 'tags': ['sale', 'Graphics Cards']}
        result = extractor.extract([record])
        assert result.gpu_from_accessory is True

    def test_rx_needs_model_number(self, extractor):
        record = {'category': 'Accessories', 'name': 'RX 1 adapter cable'}
        assert extractor.extract([record]).gpu_from_accessory is False

    def test_detailed_gpu_specs_used(self, extractor):
        record = {
            'category': 'Accessories',
            'name': 'GeForce RTX 3060',
            'detailedSpecs': {'gpu': {'cudaCores': 3584}},
            'specifications': {'cudaCores': '1'}
        }
        assert extractor.extract([record]).specs_for('gpu') == {'cudaCores': 3584}

    def test_existing_gpu_keeps_slot(self, extractor):
        records = [
            {'category': 'GPU', 'name': 'Radeon RX 7900 XTX', 'specifications': {'memorySize': '24GB'}},
            {'category': 'Accessories', 'name': 'GeForce RTX 4090', 'specifications': {'memorySize': '24GB'}}
        ]
        result = extractor.extract(records)
        assert result.gpu_from_accessory is False
        assert result.sources['gpu'].specs is records[0]['specifications']

    def test_accessory_seen_first_wins(self, extractor):
        records = [
            {'category': 'Accessories', 'name': 'GeForce RTX 4090', 'specifications': {'cudaCores': '16384'}},
            {'category': 'GPU', 'name': 'GeForce GTX 1650', 'specifications': {'cudaCores': '896'}}
        ]
        result = extractor.extract(records)
        assert result.gpu_from_accessory is True
        assert result.specs_for('gpu') == {'cudaCores': '16384'}

    def test_input_not_mutated(self, extractor):
        records = high_end_build() + [{'category': 'Accessories', 'name': 'RTX 4060', 'tags': ['gpu']}]
        snapshot = copy.deepcopy(records)
        extractor.extract(records)
        assert records == snapshot
