import logging
import math
from typing import Any, Iterable, Optional

from services.benchmark.config_manager import BenchmarkConfigManager, CATEGORIES
from services.benchmark.data_extractor import ComponentDataExtractor, GPU_ACCESSORY_NOTE
from services.benchmark.results import ScoringResult
from services.benchmark.score_calculator import CategoryScoreCalculator
from services.benchmark.weight_manager import WeightManager

logger = logging.getLogger(__name__)

MAX_SCORE = 1000


class BenchmarkService:
    """Main benchmark service - coordinates extraction, category scoring and weighting

    The service keeps no per-call state, so one instance can score any number
    of builds, including from several threads at once.
    """

    def __init__(self, config_manager: Optional[BenchmarkConfigManager] = None):
        self.config_manager = config_manager or BenchmarkConfigManager()
        self.data_extractor = ComponentDataExtractor(self.config_manager)
        self.score_calculator = CategoryScoreCalculator(self.config_manager)
        self.weight_manager = WeightManager()

    def score_build(self, products: Iterable[Any]) -> ScoringResult:
        """Score an ordered list of component records on a 0-1000 scale"""
        extraction = self.data_extractor.extract(products)

        specs_by_category = {category: extraction.specs_for(category) for category in CATEGORIES}
        breakdown = self.score_calculator.calculate_category_scores(
            specs_by_category, gpu_detected=extraction.gpu_from_accessory
        )

        composite = self.weight_manager.combine(breakdown)
        total_score = _round_half_up(composite * MAX_SCORE)

        notes = [GPU_ACCESSORY_NOTE] if extraction.gpu_from_accessory else []

        logger.info(f"Calculated benchmark score {total_score} "
                    f"from {len(extraction.sources)} categories: {sorted(extraction.sources)}")

        return ScoringResult(
            total_score=total_score,
            normalized_composite=composite,
            breakdown=breakdown,
            notes=notes
        )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
