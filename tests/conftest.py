"""Shared test fixtures for the fraud engine tests."""

from unittest.mock import MagicMock

import pytest

from src.domains.fraud.detectors import (
    DetectorToolkit,
    ThresholdDetector,
    VelocityAmountDetector,
)
from src.domains.fraud.error_sink import ErrorSink
from src.domains.fraud.events import EventBus
from src.domains.fraud.scorer import RiskScorer


@pytest.fixture
def alert_handler() -> MagicMock:
    return MagicMock()


@pytest.fixture
def error_sink(alert_handler) -> ErrorSink:
    return ErrorSink(alert_threshold=5, alert_handler=alert_handler)


@pytest.fixture
def event_bus(error_sink) -> EventBus:
    return EventBus(capacity=1000, error_sink=error_sink)


@pytest.fixture
def scorer(error_sink) -> RiskScorer:
    return RiskScorer(error_sink=error_sink)


@pytest.fixture
def toolkit(error_sink, event_bus, scorer) -> DetectorToolkit:
    return DetectorToolkit(error_sink=error_sink, event_bus=event_bus, scorer=scorer)


@pytest.fixture
def velocity_detector(toolkit) -> VelocityAmountDetector:
    return VelocityAmountDetector(toolkit=toolkit)


@pytest.fixture
def threshold_detector(toolkit) -> ThresholdDetector:
    return ThresholdDetector(name="Generic", threshold=0.6, toolkit=toolkit)


@pytest.fixture
def sample_transaction() -> dict:
    return {
        "transactionId": "txn-0001",
        "fromAccount": "12345678",
        "toAccount": "87654321",
        "amount": 500.0,
        "timestamp": "2026-01-15T14:00:00+00:00",
        "merchant_category": "GROCERY",
        "geographic_location": "US-BOSTON",
    }
