"""Weighted feature risk scoring.

The risk score is a weighted sum of per-feature sub-scores:
1. For each feature in the weight table, look the value up in the input
2. Absent features score neutral (0.5)
3. Known features are scored through monotonic threshold bands
4. Sum of weight * sub-score, capped at 1.0

Scoring never raises to the caller; a failure is reported to the error sink
and the neutral default score is returned.
"""

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

import structlog

from .config import DEFAULT_FEATURE_WEIGHTS, FraudConfig, default_config
from .error_sink import ErrorSink
from .errors import ScoringFailure

logger = structlog.get_logger()

ANALYZE_CONTEXT = "RiskScorer.analyze"


def _require_number(feature: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ScoringFailure(f"{feature} expects a number, got {type(value).__name__}")
    return float(value)


def _require_text(feature: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ScoringFailure(f"{feature} expects a string, got {type(value).__name__}")
    return value


def _band(value: float, bands, floor: float) -> float:
    for lower_bound, score in bands:
        if value > lower_bound:
            return score
    return floor


class RiskScorer:
    """Computes a [0, 1] risk score from a transaction's feature mapping."""

    def __init__(
        self,
        weights: Mapping[str, float] | None = None,
        config: FraudConfig | None = None,
        error_sink: ErrorSink | None = None,
    ) -> None:
        table = dict(DEFAULT_FEATURE_WEIGHTS if weights is None else weights)
        for feature, weight in table.items():
            if not 0.0 <= weight <= 1.0:
                raise ValueError(f"weight for {feature} must be within [0, 1], got {weight}")
        self._weights = MappingProxyType(table)
        self._config = config if config is not None else default_config
        self._error_sink = error_sink if error_sink is not None else ErrorSink()

        bands = self._config.bands
        self._band_scorers: dict[str, Callable[[Any], float]] = {
            "transaction_amount": lambda v: _band(
                _require_number("transaction_amount", v), bands.amount, bands.amount_floor
            ),
            "transaction_frequency": lambda v: _band(
                _require_number("transaction_frequency", v), bands.frequency, bands.frequency_floor
            ),
            "merchant_category": self._score_category,
            "geographic_location": self._score_location,
        }

    @property
    def weights(self) -> Mapping[str, float]:
        return self._weights

    def analyze(self, features: Mapping[str, Any]) -> float:
        """Weighted risk score for ``features``, or 0.5 if scoring fails."""
        try:
            sub_scores = self.feature_scores(features)
            risk_score = sum(sub_scores[name] * weight for name, weight in self._weights.items())
            risk_score = min(risk_score, 1.0)
            logger.debug("risk_scored", risk_score=round(risk_score, 4), sub_scores=sub_scores)
            return risk_score
        except Exception as exc:
            self._error_sink.handle_exception(exc, ANALYZE_CONTEXT)
            return self._config.bands.neutral_score

    def feature_scores(self, features: Mapping[str, Any]) -> dict[str, float]:
        """Unweighted sub-score for every feature in the weight table.

        Raises ScoringFailure for input that cannot be scored.
        """
        if not isinstance(features, Mapping):
            raise ScoringFailure(f"features must be a mapping, got {type(features).__name__}")

        neutral = self._config.bands.neutral_score
        scores: dict[str, float] = {}
        for name in self._weights:
            value = features.get(name)
            if value is None:
                scores[name] = neutral
                continue
            scorer = self._band_scorers.get(name)
            scores[name] = scorer(value) if scorer else neutral
        return scores

    def _score_category(self, value: Any) -> float:
        bands = self._config.bands
        category = _require_text("merchant_category", value)
        if category in bands.high_risk_categories:
            return bands.high_risk_category_score
        if category == "INTERNATIONAL":
            return bands.international_category_score
        return bands.category_floor

    def _score_location(self, value: Any) -> float:
        bands = self._config.bands
        location = _require_text("geographic_location", value)
        if "UNKNOWN" in location:
            return bands.unknown_location_score
        if "INTERNATIONAL" in location:
            return bands.international_location_score
        return bands.location_floor
