"""Fraud detection domain."""

from .config import DEFAULT_FEATURE_WEIGHTS, FraudConfig, default_config
from .detectors import Detector, DetectorToolkit, ThresholdDetector, VelocityAmountDetector
from .engine import FraudEngine
from .error_sink import ErrorAlert, ErrorSink
from .errors import (
    ErrorKind,
    FraudEngineError,
    ListenerFailure,
    ScoringFailure,
    ValidationFailure,
)
from .events import EventBus, FraudEventListener
from .models import FraudEvent, Transaction
from .scorer import RiskScorer

__all__ = [
    "DEFAULT_FEATURE_WEIGHTS",
    "Detector",
    "DetectorToolkit",
    "ErrorAlert",
    "ErrorKind",
    "ErrorSink",
    "EventBus",
    "FraudConfig",
    "FraudEngine",
    "FraudEngineError",
    "FraudEvent",
    "FraudEventListener",
    "ListenerFailure",
    "RiskScorer",
    "ScoringFailure",
    "ThresholdDetector",
    "Transaction",
    "ValidationFailure",
    "VelocityAmountDetector",
    "default_config",
]
