import logging
from typing import Any, Dict, Mapping, Optional

from services.benchmark.config_manager import BenchmarkConfigManager, CategoryRules
from services.benchmark.results import CategoryResult
from services.benchmark.spec_parsers import (
    baseline_ratio,
    clamp01,
    first_truthy,
    inv_range,
    norm_divide,
    parse_clock_ghz,
    parse_memory_gb,
    parse_number,
    weighted_composite,
)

logger = logging.getLogger(__name__)


class CategoryScoreCalculator:
    """Calculates the 0-1 composite of each component category"""

    def __init__(self, config_manager: Optional[BenchmarkConfigManager] = None):
        self.config_manager = config_manager or BenchmarkConfigManager()

    def calculate_category_scores(self, specs_by_category: Mapping[str, Optional[Mapping]],
                                  gpu_detected: bool = False) -> Dict[str, CategoryResult]:
        """Score every category; categories without a spec bag get an empty result"""
        scoring_methods = {
            'cpu': self.score_cpu,
            'gpu': lambda specs: self.score_gpu(specs, detected=gpu_detected),
            'ram': self.score_ram,
            'storage': self.score_storage,
            'motherboard': self.score_motherboard
        }

        results = {}
        for category, method in scoring_methods.items():
            try:
                result = method(specs_by_category.get(category))
            except Exception as e:
                logger.error(f"Failed to calculate {category} score: {str(e)}")
                result = CategoryResult()

            if result.category_weight:
                logger.debug(f"Calculated {category} score: {result.score:.3f}")
            results[category] = result

        return results

    def score_cpu(self, cpu: Optional[Mapping]) -> CategoryResult:
        if cpu is None:
            return CategoryResult()
        rules = self.config_manager.get_category_rules('cpu')

        cores = parse_number(cpu.get('cores'))
        threads = parse_number(cpu.get('threads'))
        base = parse_number(cpu.get('baseClock_GHz')) or \
            parse_clock_ghz(first_truthy(cpu, 'baseClock', 'baseFrequency'))
        boost = parse_number(cpu.get('boostClock_GHz')) or \
            parse_clock_ghz(first_truthy(cpu, 'boostClock', 'boostFrequency'))
        # l3Cache strings go through the GB parser, so "32MB" becomes 0.031
        l3_cache = parse_number(cpu.get('l3Cache_MB')) or \
            parse_memory_gb(first_truthy(cpu, 'l3Cache', 'cache'))
        process_nm = parse_number(cpu.get('manufacturing_nm')) or \
            parse_number(first_truthy(cpu, 'manufacturingProcess', 'manufacturing'))
        tdp = parse_number(cpu.get('tdp_W')) or parse_number(cpu.get('tdp'))

        metrics = {
            'cores': self._normalize(rules, 'cores', cores),
            'threads': self._normalize(rules, 'threads', threads),
            'base_clock': self._normalize(rules, 'base_clock', base),
            'boost_clock': self._normalize(rules, 'boost_clock', boost),
            'l3_cache': self._normalize(rules, 'l3_cache', l3_cache),
            'process': self._normalize(rules, 'process', process_nm or None),
            'tdp_efficiency': self._normalize(rules, 'tdp_efficiency', tdp)
        }
        details = {
            'cores': cores,
            'threads': threads,
            'base_clock_ghz': base,
            'boost_clock_ghz': boost,
            'l3_cache': l3_cache,
            'process_nm': process_nm,
            'tdp_w': tdp
        }
        return self._composite(rules, metrics, details)

    def score_gpu(self, gpu: Optional[Mapping], detected: bool = False) -> CategoryResult:
        if gpu is None:
            return CategoryResult()
        rules = self.config_manager.get_category_rules('gpu')

        cuda_cores = parse_number(gpu.get('cudaCores'))
        base = parse_number(gpu.get('baseClock_GHz')) or \
            parse_clock_ghz(first_truthy(gpu, 'baseClock', 'coreClock'))
        boost = parse_number(gpu.get('boostClock_GHz')) or parse_clock_ghz(gpu.get('boostClock'))
        vram = parse_number(gpu.get('memorySize_GB')) or \
            parse_memory_gb(first_truthy(gpu, 'memorySize', 'memory'))
        tdp = parse_number(gpu.get('tdp_W')) or parse_number(gpu.get('tdp'))
        bandwidth = parse_number(gpu.get('memoryBandwidth_GBps')) or \
            parse_number(gpu.get('memoryBandwidth'))
        ray_tracing = bool(first_truthy(gpu, 'rayTracing', 'rayTracingCores'))

        metrics = {
            'cuda_cores': self._normalize(rules, 'cuda_cores', cuda_cores),
            'base_clock': self._normalize(rules, 'base_clock', base),
            'boost_clock': self._normalize(rules, 'boost_clock', boost),
            'vram': self._normalize(rules, 'vram', vram),
            'bandwidth': self._normalize(rules, 'bandwidth', bandwidth),
            'tdp_efficiency': self._normalize(rules, 'tdp_efficiency', tdp),
            'ray_tracing': 1.0 if ray_tracing else 0.0
        }
        details = {
            'cuda_cores': cuda_cores,
            'base_clock_ghz': base,
            'boost_clock_ghz': boost,
            'vram_gb': vram,
            'tdp_w': tdp,
            'bandwidth_gbps': bandwidth,
            'ray_tracing': ray_tracing,
            'detected': detected
        }
        return self._composite(rules, metrics, details)

    def score_ram(self, ram: Optional[Mapping]) -> CategoryResult:
        if ram is None:
            return CategoryResult()
        rules = self.config_manager.get_category_rules('ram')

        capacity = parse_number(ram.get('totalCapacity_GB')) or \
            parse_memory_gb(first_truthy(ram, 'totalCapacity', 'capacity', 'capacity_GB', 'memorySize'))
        speed = parse_number(first_truthy(ram, 'speed', 'testedSpeed'))
        cas = parse_number(ram.get('casLatency'))

        metrics = {
            'capacity': self._normalize(rules, 'capacity', capacity),
            'speed': self._normalize(rules, 'speed', speed),
            'cas_latency': self._normalize(rules, 'cas_latency', cas)
        }
        details = {'capacity_gb': capacity, 'speed_mts': speed, 'cas_latency': cas}
        return self._composite(rules, metrics, details)

    def score_storage(self, storage: Optional[Mapping]) -> CategoryResult:
        if storage is None:
            return CategoryResult()
        rules = self.config_manager.get_category_rules('storage')

        capacity = parse_number(storage.get('capacity_GB')) or parse_memory_gb(storage.get('capacity'))
        read = parse_number(storage.get('sequentialRead_MBps')) or \
            parse_number(storage.get('sequentialRead'))
        write = parse_number(storage.get('sequentialWrite_MBps')) or \
            parse_number(storage.get('sequentialWrite'))

        metrics = {
            'capacity': self._normalize(rules, 'capacity', capacity),
            'read': self._normalize(rules, 'read', read),
            'write': self._normalize(rules, 'write', write)
        }
        details = {'capacity_gb': capacity, 'read_mbps': read, 'write_mbps': write}
        return self._composite(rules, metrics, details)

    def score_motherboard(self, board: Optional[Mapping]) -> CategoryResult:
        if board is None:
            return CategoryResult()
        rules = self.config_manager.get_category_rules('motherboard')

        wifi = bool(first_truthy(board, 'wifi', 'WiFi', 'wireless'))
        chipset = str(board.get('chipset') or '').upper()
        max_memory = parse_number(board.get('maxMemory_GB')) or parse_memory_gb(board.get('maxMemory'))
        slots = parse_number(board.get('memorySlots'))

        metrics = {
            'chipset_tier': self.config_manager.get_chipset_tier(chipset),
            'wifi': 1.0 if wifi else 0.0,
            'max_memory': self._normalize(rules, 'max_memory', max_memory),
            'memory_slots': self._normalize(rules, 'memory_slots', slots)
        }
        details = {'chipset': chipset, 'wifi': wifi, 'max_memory_gb': max_memory, 'memory_slots': slots}
        return self._composite(rules, metrics, details)

    def _normalize(self, rules: CategoryRules, metric: str, value: Optional[float]) -> Optional[float]:
        """Map a raw value onto [0, 1] following the metric's rule"""
        rule = rules.metrics.get(metric)
        if rule is None or value is None:
            return None

        if rule.baseline is not None:
            return baseline_ratio(value, rule.baseline)
        if rule.range_min is not None and rule.range_max is not None:
            return clamp01(inv_range(value, rule.range_min, rule.range_max))
        if rule.ceiling:
            return norm_divide(value, rule.ceiling)
        return clamp01(value)

    def _composite(self, rules: CategoryRules, metrics: Dict[str, Optional[float]],
                   details: Dict[str, Any]) -> CategoryResult:
        score = weighted_composite(rules.metric_weights, metrics)
        return CategoryResult(score=score, details=details, metrics=metrics, category_weight=rules.weight)
