import logging
from typing import Dict

from services.benchmark.results import CategoryResult

logger = logging.getLogger(__name__)


class WeightManager:
    """Combines category composites using their fixed category weights"""

    def normalize_weights(self, weights: Dict[str, float]) -> Dict[str, float]:
        """Normalize weights to sum to 1.0"""
        if not weights:
            return {}

        total_weight = sum(weights.values())
        if total_weight <= 0:
            logger.error("Invalid weights: sum is zero or negative")
            return {}

        normalized = {k: v / total_weight for k, v in weights.items()}

        new_sum = sum(normalized.values())
        if abs(new_sum - 1.0) > 0.001:
            logger.warning(f"Weight normalization imprecise: sum={new_sum:.6f}")

        return normalized

    def effective_weights(self, results: Dict[str, CategoryResult]) -> Dict[str, float]:
        """Category weights renormalized over the categories that scored above zero.

        A category whose composite is exactly 0 is dropped the same way as an
        absent one.
        """
        present = {name: result.category_weight for name, result in results.items() if result.score > 0}
        return self.normalize_weights(present)

    def combine(self, results: Dict[str, CategoryResult]) -> float:
        """Weighted sum of category composites in [0, 1]"""
        weights = self.effective_weights(results)
        if not weights:
            logger.debug("No category scored above zero")
            return 0.0

        composite = sum(results[name].score * weight for name, weight in weights.items())
        return min(1.0, max(0.0, composite))
