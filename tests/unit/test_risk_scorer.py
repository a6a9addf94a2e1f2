"""Unit tests for weighted feature risk scoring."""

import pytest

from src.domains.fraud.config import DEFAULT_FEATURE_WEIGHTS
from src.domains.fraud.error_sink import ErrorSink
from src.domains.fraud.scorer import ANALYZE_CONTEXT, RiskScorer


def _scorer(**kwargs) -> RiskScorer:
    kwargs.setdefault("error_sink", ErrorSink())
    return RiskScorer(**kwargs)


class TestWeightTable:
    def test_default_weights_sum_to_one(self):
        assert sum(DEFAULT_FEATURE_WEIGHTS.values()) == pytest.approx(1.0)

    def test_weights_read_only(self):
        scorer = _scorer()
        with pytest.raises(TypeError):
            scorer.weights["transaction_amount"] = 1.0

    def test_rejects_out_of_range_weight(self):
        with pytest.raises(ValueError):
            _scorer(weights={"transaction_amount": 1.5})


class TestAnalyze:
    def test_empty_mapping_is_neutral(self):
        assert _scorer().analyze({}) == pytest.approx(0.5)

    def test_empty_mapping_custom_weights(self):
        scorer = _scorer(weights={"transaction_amount": 0.4, "merchant_category": 0.2})
        assert scorer.analyze({}) == pytest.approx(0.5 * 0.6)

    def test_amount_monotonic(self):
        scorer = _scorer()
        assert scorer.analyze({"transaction_amount": 50001.0}) >= scorer.analyze(
            {"transaction_amount": 4999.0}
        )

    def test_none_value_treated_as_absent(self):
        scorer = _scorer()
        assert scorer.analyze({"transaction_amount": None}) == pytest.approx(0.5)

    def test_high_risk_profile(self):
        features = {
            "transaction_amount": 60000.0,
            "transaction_frequency": 150,
            "merchant_category": "GAMBLING",
            "geographic_location": "UNKNOWN-REGION",
        }
        expected = 0.9 * 0.25 + 0.8 * 0.20 + 0.9 * 0.15 + 0.8 * 0.20 + 0.5 * 0.10 + 0.5 * 0.10
        assert _scorer().analyze(features) == pytest.approx(expected)

    def test_low_risk_profile(self):
        features = {
            "transaction_amount": 100.0,
            "transaction_frequency": 2,
            "merchant_category": "GROCERY",
            "geographic_location": "US-BOSTON",
            "time_of_day": "14:00",
            "device_fingerprint": "device_abc123",
        }
        expected = 0.2 * 0.25 + 0.2 * 0.20 + 0.3 * 0.15 + 0.2 * 0.20 + 0.5 * 0.10 + 0.5 * 0.10
        assert _scorer().analyze(features) == pytest.approx(expected)

    def test_clamped_to_one(self):
        scorer = _scorer(weights={"transaction_amount": 1.0, "merchant_category": 1.0})
        score = scorer.analyze({"transaction_amount": 60000, "merchant_category": "ADULT"})
        assert score == 1.0

    @pytest.mark.parametrize(
        "features",
        [
            {},
            {"transaction_amount": 0},
            {"transaction_amount": 1e9, "transaction_frequency": 10_000},
            {"merchant_category": "INTERNATIONAL", "geographic_location": "INTERNATIONAL"},
        ],
    )
    def test_within_unit_interval(self, features):
        assert 0.0 <= _scorer().analyze(features) <= 1.0


class TestFeatureBands:
    scorer = RiskScorer(error_sink=ErrorSink())

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [(50001, 0.9), (50000, 0.7), (10001, 0.7), (5001, 0.5), (5000, 0.2), (0, 0.2)],
    )
    def test_amount(self, amount, expected):
        assert self.scorer.feature_scores({"transaction_amount": amount})[
            "transaction_amount"
        ] == expected

    @pytest.mark.parametrize(
        ("count", "expected"), [(101, 0.8), (100, 0.6), (51, 0.6), (21, 0.4), (20, 0.2)]
    )
    def test_frequency(self, count, expected):
        assert self.scorer.feature_scores({"transaction_frequency": count})[
            "transaction_frequency"
        ] == expected

    @pytest.mark.parametrize(
        ("category", "expected"),
        [("GAMBLING", 0.9), ("ADULT", 0.9), ("INTERNATIONAL", 0.6), ("GROCERY", 0.3)],
    )
    def test_category(self, category, expected):
        assert self.scorer.feature_scores({"merchant_category": category})[
            "merchant_category"
        ] == expected

    @pytest.mark.parametrize(
        ("location", "expected"),
        [("UNKNOWN", 0.8), ("INTERNATIONAL-UNKNOWN", 0.8), ("INTERNATIONAL", 0.5), ("US", 0.2)],
    )
    def test_location(self, location, expected):
        assert self.scorer.feature_scores({"geographic_location": location})[
            "geographic_location"
        ] == expected

    def test_unbanded_features_neutral(self):
        scores = self.scorer.feature_scores({"time_of_day": 3, "device_fingerprint": "d1"})
        assert scores["time_of_day"] == 0.5
        assert scores["device_fingerprint"] == 0.5


class TestScoringFailures:
    def test_wrong_type_returns_default_and_records(self):
        sink = ErrorSink()
        scorer = RiskScorer(error_sink=sink)
        assert scorer.analyze({"transaction_amount": "lots"}) == 0.5
        assert sink.snapshot() == {f"{ANALYZE_CONTEXT}:ScoringFailure": 1}

    def test_non_mapping_input(self):
        sink = ErrorSink()
        scorer = RiskScorer(error_sink=sink)
        assert scorer.analyze(None) == 0.5
        assert sink.snapshot()[f"{ANALYZE_CONTEXT}:ScoringFailure"] == 1

    def test_bool_amount_rejected(self):
        sink = ErrorSink()
        assert RiskScorer(error_sink=sink).analyze({"transaction_amount": True}) == 0.5
        assert sink.snapshot()
