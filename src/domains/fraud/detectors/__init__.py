"""Fraud detectors.

Exports the Detector contract, the shared DetectorToolkit and the two
shipped detector implementations.
"""

from .base import FRAUD_EVENT_SUFFIX, Detector, DetectorToolkit, TransactionInput
from .threshold import ThresholdDetector
from .velocity import VelocityAmountDetector

__all__ = [
    "FRAUD_EVENT_SUFFIX",
    "Detector",
    "DetectorToolkit",
    "ThresholdDetector",
    "TransactionInput",
    "VelocityAmountDetector",
]
