"""Domain modules for star-rating calculation."""

from .curves import BasicCurve, CRCurve, LinearCurve, apply_curve, parse_curve
from .models import LeaderboardInfo, RankedList, Score
from .weighting import WeightedAccuracy, weighted_average_accuracy

__all__ = [
    "BasicCurve",
    "CRCurve",
    "LeaderboardInfo",
    "LinearCurve",
    "RankedList",
    "Score",
    "WeightedAccuracy",
    "apply_curve",
    "parse_curve",
    "weighted_average_accuracy",
]
