"""Detector contract and the shared helpers detectors are composed with."""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import structlog

from ..error_sink import ErrorSink
from ..events import EventBus
from ..models import FraudEvent, Transaction
from ..scorer import RiskScorer

logger = structlog.get_logger()

FRAUD_EVENT_SUFFIX = "_FRAUD_DETECTED"

TransactionInput = Transaction | Mapping[str, Any] | None


@runtime_checkable
class Detector(Protocol):
    """Anything that decides fraud/not-fraud for a single transaction.

    ``detect`` must never raise: failures are reported to the error sink and
    the call answers False.
    """

    name: str
    threshold: float

    def detect(self, transaction: TransactionInput) -> bool: ...

    def enable(self) -> None: ...

    def disable(self) -> None: ...

    def is_enabled(self) -> bool: ...

    def set_threshold(self, threshold: float) -> None: ...


class DetectorToolkit:
    """Error sink, event bus and scorer shared by a group of detectors.

    Custom detectors take one of these so they report errors and publish
    events through the same pipeline as the built-in ones.
    """

    def __init__(
        self,
        error_sink: ErrorSink | None = None,
        event_bus: EventBus | None = None,
        scorer: RiskScorer | None = None,
    ) -> None:
        self.error_sink = error_sink if error_sink is not None else ErrorSink()
        self.event_bus = (
            event_bus if event_bus is not None else EventBus(error_sink=self.error_sink)
        )
        self.scorer = scorer if scorer is not None else RiskScorer(error_sink=self.error_sink)

    def log_attempt(
        self,
        detector: str,
        transaction: Mapping[str, Any],
        risk_score: float,
        threshold: float,
    ) -> None:
        logger.info(
            "detection_attempt",
            detector=detector,
            transaction_id=transaction.get("transactionId"),
            risk_score=round(risk_score, 4),
            threshold=threshold,
            status="FRAUD" if risk_score >= threshold else "NORMAL",
        )

    def publish_fraud(
        self,
        detector: str,
        transaction: Mapping[str, Any],
        risk_score: float,
    ) -> FraudEvent:
        """Publish a ``<detector>_FRAUD_DETECTED`` event for ``transaction``."""
        return self.publish_custom_event(transaction, detector + FRAUD_EVENT_SUFFIX, risk_score)

    def publish_custom_event(
        self,
        transaction: Mapping[str, Any],
        event_type: str,
        risk_score: float,
    ) -> FraudEvent:
        event = FraudEvent.create(transaction, event_type, risk_score)
        self.event_bus.publish(event)
        return event

    def report(self, exc: BaseException, context: str) -> None:
        self.error_sink.handle_exception(exc, context)

