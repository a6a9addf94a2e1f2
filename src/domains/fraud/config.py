"""Fraud detection configuration with sensible defaults."""

import os
from dataclasses import dataclass, field
from types import MappingProxyType

# Weights for the shipped feature set sum to 1.0.
DEFAULT_FEATURE_WEIGHTS = MappingProxyType(
    {
        "transaction_amount": 0.25,
        "transaction_frequency": 0.20,
        "merchant_category": 0.15,
        "geographic_location": 0.20,
        "time_of_day": 0.10,
        "device_fingerprint": 0.10,
    }
)


@dataclass
class ScoringBands:
    """Threshold bands for each scored feature, highest band first."""

    amount: tuple[tuple[float, float], ...] = ((50_000.0, 0.9), (10_000.0, 0.7), (5_000.0, 0.5))
    amount_floor: float = 0.2
    frequency: tuple[tuple[int, float], ...] = ((100, 0.8), (50, 0.6), (20, 0.4))
    frequency_floor: float = 0.2
    high_risk_categories: tuple[str, ...] = ("GAMBLING", "ADULT")
    high_risk_category_score: float = 0.9
    international_category_score: float = 0.6
    category_floor: float = 0.3
    unknown_location_score: float = 0.8
    international_location_score: float = 0.5
    location_floor: float = 0.2
    neutral_score: float = 0.5


@dataclass
class DetectorDefaults:
    threshold: float = 0.6
    velocity_detector_name: str = "VelocityDetector"
    threshold_detector_name: str = "ThresholdDetector"
    velocity_threshold: int = 5
    amount_threshold: float = 5_000.0
    invalid_transaction_score: float = 0.9
    amount_breach_score: float = 0.8
    velocity_breach_score: float = 0.75


@dataclass
class EventBusSettings:
    capacity: int = 1000


@dataclass
class ErrorSinkSettings:
    alert_threshold: int = 5


@dataclass
class FraudConfig:
    bands: ScoringBands = field(default_factory=ScoringBands)
    detectors: DetectorDefaults = field(default_factory=DetectorDefaults)
    events: EventBusSettings = field(default_factory=EventBusSettings)
    errors: ErrorSinkSettings = field(default_factory=ErrorSinkSettings)

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        config = cls()

        # Detector overrides
        if v := os.getenv("FRAUD_DETECTOR_THRESHOLD"):
            config.detectors.threshold = float(v)
        if v := os.getenv("FRAUD_VELOCITY_THRESHOLD"):
            config.detectors.velocity_threshold = int(v)
        if v := os.getenv("FRAUD_AMOUNT_THRESHOLD"):
            config.detectors.amount_threshold = float(v)

        # Event bus / error sink overrides
        if v := os.getenv("FRAUD_EVENT_QUEUE_CAPACITY"):
            config.events.capacity = int(v)
        if v := os.getenv("FRAUD_ERROR_ALERT_THRESHOLD"):
            config.errors.alert_threshold = int(v)

        return config


# Module-level default instance
default_config = FraudConfig()
