# Public entry point for benchmark scoring - delegates to services.benchmark

from typing import Any, Dict, Iterable, Optional

from services.benchmark.benchmark_service import BenchmarkService
from services.benchmark.config_manager import BenchmarkConfigManager

_default_service: Optional[BenchmarkService] = None


def get_benchmark_service() -> BenchmarkService:
    """Shared service instance built from the active rule configuration"""
    global _default_service
    if _default_service is None:
        _default_service = BenchmarkService(BenchmarkConfigManager())
    return _default_service


def score_build(products: Iterable[Any]) -> Dict[str, Any]:
    """Score component records and return the camelCase result mapping

    Output shape: totalScore, normalizedComposite, breakdown (cpu, gpu, ram,
    storage, motherboard) and notes.
    """
    return get_benchmark_service().score_build(products).to_dict()


__all__ = ['BenchmarkService', 'get_benchmark_service', 'score_build']
