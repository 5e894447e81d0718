import copy
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Pattern, Tuple

import yaml

logger = logging.getLogger(__name__)

CATEGORIES = ('cpu', 'gpu', 'ram', 'storage', 'motherboard')

DEFAULT_RULES_PATH = os.path.join('config', 'benchmark_rules.yml')


@dataclass(frozen=True)
class MetricRule:
    weight: float
    ceiling: Optional[float] = None      # larger is better, saturates at ceiling
    baseline: Optional[float] = None     # smaller is better, baseline / value
    range_min: Optional[float] = None    # smaller is better inside [min, max]
    range_max: Optional[float] = None


@dataclass(frozen=True)
class CategoryRules:
    name: str
    weight: float
    metrics: Dict[str, MetricRule] = field(default_factory=dict)

    @property
    def metric_weights(self) -> Dict[str, float]:
        return {metric: rule.weight for metric, rule in self.metrics.items()}


class BenchmarkConfigManager:
    """Holds category weights, metric ceilings and pattern tables for scoring"""

    DEFAULT_CONFIG: Dict[str, Any] = {
        'categories': {
            'cpu': {
                'weight': 0.35,
                'metrics': {
                    'cores': {'weight': 0.25, 'ceiling': 16},
                    'threads': {'weight': 0.15, 'ceiling': 32},
                    'base_clock': {'weight': 0.20, 'ceiling': 5.5},        # GHz
                    'boost_clock': {'weight': 0.10, 'ceiling': 6.0},       # GHz
                    'l3_cache': {'weight': 0.15, 'ceiling': 128},
                    'process': {'weight': 0.10, 'range_min': 3, 'range_max': 20},  # nm
                    'tdp_efficiency': {'weight': 0.05, 'baseline': 125},   # W
                }
            },
            'gpu': {
                'weight': 0.45,
                'metrics': {
                    'cuda_cores': {'weight': 0.35, 'ceiling': 16384},
                    'base_clock': {'weight': 0.10, 'ceiling': 2.5},
                    'boost_clock': {'weight': 0.10, 'ceiling': 3.0},
                    'vram': {'weight': 0.15, 'ceiling': 24},               # GB
                    'bandwidth': {'weight': 0.15, 'ceiling': 1000},        # GB/s
                    'tdp_efficiency': {'weight': 0.10, 'baseline': 300},
                    'ray_tracing': {'weight': 0.05},
                }
            },
            'ram': {
                'weight': 0.10,
                'metrics': {
                    'capacity': {'weight': 0.40, 'ceiling': 64},           # GB
                    'speed': {'weight': 0.40, 'ceiling': 6000},            # MT/s
                    'cas_latency': {'weight': 0.20, 'baseline': 16},
                }
            },
            'storage': {
                'weight': 0.05,
                'metrics': {
                    'capacity': {'weight': 0.30, 'ceiling': 2000},         # GB
                    'read': {'weight': 0.35, 'ceiling': 7000},             # MB/s
                    'write': {'weight': 0.35, 'ceiling': 6000},            # MB/s
                }
            },
            'motherboard': {
                'weight': 0.05,
                'metrics': {
                    'chipset_tier': {'weight': 0.40},
                    'wifi': {'weight': 0.20},
                    'max_memory': {'weight': 0.25, 'ceiling': 256},        # GB
                    'memory_slots': {'weight': 0.15, 'ceiling': 8},
                }
            },
        },
        # Evaluated top-down against the upper-cased chipset name
        'chipset_tiers': [
            {'pattern': r'Z79|X8|X7|X6|TRX|WRX', 'tier': 1.0},
            {'pattern': r'B65|B66|B67|B55|B56', 'tier': 0.7},
            {'pattern': r'H81|H6|A52|A55', 'tier': 0.4},
        ],
        'chipset_default_tier': 0.3,
        'gpu_name_pattern': r'graphics card|geforce|rtx|rx \d{3,4}|arc \w+',
        'gpu_tag_pattern': r'graphics cards?',
    }

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or os.environ.get('BENCHMARK_RULES_PATH', DEFAULT_RULES_PATH)
        self.config = self._load_config()
        self._categories = self._build_category_rules()
        try:
            self._compile_patterns(self.config)
        except (KeyError, TypeError, ValueError, re.error) as e:
            logger.error(f"Invalid chipset or GPU patterns in benchmark rules, using defaults: {str(e)}")
            self._compile_patterns(self.DEFAULT_CONFIG)

    def _load_config(self) -> Dict[str, Any]:
        """Load rule overrides from YAML and merge them over the defaults"""
        config = copy.deepcopy(self.DEFAULT_CONFIG)

        if not os.path.exists(self.config_path):
            return config

        try:
            with open(self.config_path, 'r') as f:
                overrides = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not read benchmark rules from {self.config_path}: {str(e)}")
            return config

        if not isinstance(overrides, dict):
            logger.warning(f"Ignoring benchmark rules in {self.config_path}: expected a mapping")
            return config

        logger.info(f"Loaded benchmark rule overrides from {self.config_path}")
        return _merge(config, overrides)

    def _compile_patterns(self, config: Dict[str, Any]):
        chipset_tiers = [
            (re.compile(entry['pattern']), float(entry['tier']))
            for entry in config['chipset_tiers']
        ]
        default_tier = float(config['chipset_default_tier'])
        gpu_name_re = re.compile(config['gpu_name_pattern'], re.IGNORECASE)
        gpu_tag_re = re.compile(config['gpu_tag_pattern'], re.IGNORECASE)

        self._chipset_tiers = chipset_tiers
        self._chipset_default_tier = default_tier
        self._gpu_name_re, self._gpu_tag_re = gpu_name_re, gpu_tag_re

    def _build_category_rules(self) -> Dict[str, CategoryRules]:
        rules = {}
        for name in CATEGORIES:
            try:
                rules[name] = _category_rules(name, self.config['categories'][name])
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Invalid benchmark rules for {name}, using defaults: {str(e)}")
                rules[name] = _category_rules(name, self.DEFAULT_CONFIG['categories'][name])
        return rules

    def get_category_rules(self, category: str) -> CategoryRules:
        return self._categories[category]

    def get_category_weights(self) -> Dict[str, float]:
        """Fixed category weights, i.e. the budget when every category is present"""
        return {name: rules.weight for name, rules in self._categories.items()}

    def get_chipset_tier(self, chipset: str) -> float:
        for pattern, tier in self._chipset_tiers:
            if pattern.search(chipset):
                return tier
        return self._chipset_default_tier

    def get_gpu_patterns(self) -> Tuple[Pattern, Pattern]:
        """Patterns used to spot graphics cards filed under accessories"""
        return self._gpu_name_re, self._gpu_tag_re

    def describe(self) -> Dict[str, Any]:
        """Active weights in a JSON friendly shape"""
        return {
            name: {
                'categoryWeight': rules.weight,
                'metrics': rules.metric_weights
            }
            for name, rules in self._categories.items()
        }


def _category_rules(name: str, raw: Dict[str, Any]) -> CategoryRules:
    metrics = {
        metric: MetricRule(**{key: float(value) for key, value in params.items()})
        for metric, params in raw['metrics'].items()
    }
    if sum(rule.weight for rule in metrics.values()) <= 0:
        raise ValueError("metric weights sum is zero or negative")
    return CategoryRules(name=name, weight=float(raw['weight']), metrics=metrics)


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge(base[key], value)
        else:
            base[key] = value
    return base


__all__ = ['BenchmarkConfigManager', 'CategoryRules', 'MetricRule', 'CATEGORIES']
