import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from services.benchmark.config_manager import BenchmarkConfigManager, CATEGORIES

logger = logging.getLogger(__name__)

ACCESSORIES = 'accessories'

GPU_ACCESSORY_NOTE = 'GPU detected under Accessories category'


class SpecSourceKind(Enum):
    FLATTENED = 'flattened'   # record['specs'], already in benchmark shape
    DETAILED = 'detailed'     # record['detailedSpecs'][category]
    GENERIC = 'generic'       # record['specifications'], name -> free text


@dataclass(frozen=True)
class SpecSource:
    kind: SpecSourceKind
    specs: Mapping


@dataclass
class ExtractionResult:
    sources: Dict[str, SpecSource] = field(default_factory=dict)
    gpu_from_accessory: bool = False

    def specs_for(self, category: str) -> Optional[Mapping]:
        source = self.sources.get(category)
        return source.specs if source is not None else None


def _field(record: Any, key: str) -> Any:
    """Read ``key`` from a mapping or from an attribute style document"""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def _as_mapping(value: Any) -> Mapping:
    if isinstance(value, Mapping):
        return value
    if value is None:
        return {}
    # e.g. a list of (name, value) pairs
    try:
        return dict(value)
    except (TypeError, ValueError):
        pass
    if hasattr(value, '__dict__'):
        return vars(value)
    return {}


class ComponentDataExtractor:
    """Locates the spec bag of each component record and assigns it to a category"""

    def __init__(self, config_manager: Optional[BenchmarkConfigManager] = None):
        self.config_manager = config_manager or BenchmarkConfigManager()
        self.gpu_name_re, self.gpu_tag_re = self.config_manager.get_gpu_patterns()

    def extract(self, products: Iterable[Any]) -> ExtractionResult:
        """Classify components in input order; the first record of each category wins"""
        result = ExtractionResult()

        for position, product in enumerate(products or []):
            category = str(_field(product, 'category') or '').lower()

            if category == ACCESSORIES:
                if 'gpu' in result.sources or not self.looks_like_gpu(product):
                    continue
                result.sources['gpu'] = self.resolve_specs(product, 'gpu')
                result.gpu_from_accessory = True
                logger.warning(f"Component {position} ({_field(product, 'name')}) treated as GPU: "
                               f"filed under Accessories")
                continue

            if category not in CATEGORIES:
                continue

            if category in result.sources:
                logger.debug(f"Ignoring duplicate {category} component at position {position}")
                continue

            result.sources[category] = self.resolve_specs(product, category)

        return result

    def resolve_specs(self, product: Any, category: str) -> SpecSource:
        """Pick the spec bag of a record: flattened, then detailed, then generic"""
        specs = _field(product, 'specs')
        if specs:
            if isinstance(specs, Mapping):
                return SpecSource(SpecSourceKind.FLATTENED, specs)
            return SpecSource(SpecSourceKind.FLATTENED, _as_mapping(product))

        detailed = _as_mapping(_field(product, 'detailedSpecs'))
        if detailed.get(category) is not None:
            return SpecSource(SpecSourceKind.DETAILED, _as_mapping(detailed[category]))

        return SpecSource(SpecSourceKind.GENERIC, _as_mapping(_field(product, 'specifications')))

    def looks_like_gpu(self, product: Any) -> bool:
        name = str(_field(product, 'name') or '')
        if self.gpu_name_re.search(name):
            return True

        tags = _field(product, 'tags') or []
        if isinstance(tags, str):
            tags = [tags]
        return any(self.gpu_tag_re.search(str(tag)) for tag in tags)
