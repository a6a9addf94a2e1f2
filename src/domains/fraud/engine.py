"""Wires one error sink, event bus and scorer to the shipped detectors."""

import structlog

from src.config import settings
from src.shared.logging import setup_logging

from .config import FraudConfig, default_config
from .detectors import (
    Detector,
    DetectorToolkit,
    ThresholdDetector,
    TransactionInput,
    VelocityAmountDetector,
)
from .error_sink import AlertHandler, ErrorSink
from .events import EventBus
from .scorer import RiskScorer

logger = structlog.get_logger()


class FraudEngine:
    """Runs every registered detector against a transaction."""

    def __init__(self, toolkit: DetectorToolkit, detectors: list[Detector]) -> None:
        self.toolkit = toolkit
        self._detectors = list(detectors)

    @classmethod
    def create(
        cls,
        config: FraudConfig | None = None,
        alert_handler: AlertHandler | None = None,
        configure_logging: bool = False,
    ) -> "FraudEngine":
        if configure_logging:
            setup_logging(settings.log_level, settings.json_logs)

        cfg = config if config is not None else default_config
        error_sink = ErrorSink(
            alert_threshold=cfg.errors.alert_threshold, alert_handler=alert_handler
        )
        event_bus = EventBus(capacity=cfg.events.capacity, error_sink=error_sink)
        scorer = RiskScorer(config=cfg, error_sink=error_sink)
        toolkit = DetectorToolkit(error_sink=error_sink, event_bus=event_bus, scorer=scorer)

        detectors: list[Detector] = [
            ThresholdDetector(
                name=cfg.detectors.threshold_detector_name,
                threshold=cfg.detectors.threshold,
                toolkit=toolkit,
            ),
            VelocityAmountDetector(
                name=cfg.detectors.velocity_detector_name,
                threshold=cfg.detectors.threshold,
                velocity_threshold=cfg.detectors.velocity_threshold,
                amount_threshold=cfg.detectors.amount_threshold,
                toolkit=toolkit,
                config=cfg,
            ),
        ]
        logger.info("fraud_engine_initialized", detector_count=len(detectors))
        return cls(toolkit, detectors)

    @property
    def error_sink(self) -> ErrorSink:
        return self.toolkit.error_sink

    @property
    def event_bus(self) -> EventBus:
        return self.toolkit.event_bus

    @property
    def scorer(self) -> RiskScorer:
        return self.toolkit.scorer

    @property
    def detectors(self) -> tuple[Detector, ...]:
        return tuple(self._detectors)

    def add_detector(self, detector: Detector) -> None:
        self._detectors.append(detector)

    def get_detector(self, name: str) -> Detector:
        for detector in self._detectors:
            if detector.name == name:
                return detector
        raise KeyError(name)

    def detect(self, transaction: TransactionInput) -> dict[str, bool]:
        """Verdict from every detector, keyed by detector name."""
        return {detector.name: detector.detect(transaction) for detector in self._detectors}
