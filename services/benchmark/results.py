from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class CategoryResult:
    """Composite score of one component category"""
    score: float = 0.0
    details: Dict[str, Any] = field(default_factory=dict)
    metrics: Dict[str, Optional[float]] = field(default_factory=dict)
    category_weight: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'details': dict(self.details),
            'metrics': dict(self.metrics),
            'categoryWeight': self.category_weight
        }


@dataclass
class ScoringResult:
    total_score: int
    normalized_composite: float
    breakdown: Dict[str, CategoryResult]
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalScore': self.total_score,
            'normalizedComposite': self.normalized_composite,
            'breakdown': {name: result.to_dict() for name, result in self.breakdown.items()},
            'notes': list(self.notes)
        }
