"""Process error tracking with threshold alerting.

Counts occurrences per (context, error kind). When a key reaches the alert
threshold an alert is raised and that key's counter drops back to zero, so a
chronic low-rate error re-alerts every ``alert_threshold`` occurrences.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from .config import default_config
from .errors import ErrorKind

logger = structlog.get_logger()

# Used only when the sink cannot record through its normal path.
last_resort_logger = logging.getLogger("src.fraud.last_resort")


@dataclass(frozen=True)
class ErrorAlert:
    context: str
    kind: str
    count: int
    raised_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def key(self) -> str:
        return f"{self.context}:{self.kind}"


AlertHandler = Callable[[ErrorAlert], None]


class ErrorSink:
    """Thread-safe error counter with per-key alerting."""

    def __init__(
        self,
        alert_threshold: int | None = None,
        alert_handler: AlertHandler | None = None,
    ) -> None:
        if alert_threshold is None:
            alert_threshold = default_config.errors.alert_threshold
        if alert_threshold < 1:
            raise ValueError(f"alert_threshold must be at least 1, got {alert_threshold}")
        self._alert_threshold = alert_threshold
        self._alert_handler = alert_handler
        self._counts: dict[tuple[str, str], int] = {}
        self._lock = threading.Lock()
        self.alerts_raised = 0

    @property
    def alert_threshold(self) -> int:
        return self._alert_threshold

    def record(self, context: str, kind: str) -> int:
        """Count one occurrence and return the counter value afterwards.

        Returns 0 when this occurrence triggered an alert, and -1 if the sink
        itself failed.
        """
        try:
            alert = None
            with self._lock:
                key = (context, str(kind))
                count = self._counts.get(key, 0) + 1
                if count >= self._alert_threshold:
                    alert = ErrorAlert(context=context, kind=str(kind), count=count)
                    self._counts[key] = 0
                    self.alerts_raised += 1
                else:
                    self._counts[key] = count

            logger.debug("error_recorded", context=context, kind=str(kind), count=count)
            if alert is None:
                return count

            self._alert(alert)
            return 0
        except Exception as exc:
            last_resort_logger.error(
                "%s while recording %s:%s: %r", ErrorKind.SINK_FAILURE, context, kind, exc
            )
            return -1

    def handle_exception(self, exc: BaseException, context: str) -> int:
        """Log ``exc`` with its traceback and record it under its class name."""
        try:
            logger.error(
                "error_handled",
                context=context,
                kind=type(exc).__name__,
                error=str(exc),
                exc_info=exc,
            )
        except Exception as log_exc:
            last_resort_logger.error("%s logging %r: %r", ErrorKind.SINK_FAILURE, exc, log_exc)
        return self.record(context, type(exc).__name__)

    def snapshot(self) -> dict[str, int]:
        """Copy of all counters keyed ``"context:kind"``."""
        with self._lock:
            return {f"{context}:{kind}": count for (context, kind), count in self._counts.items()}

    def _alert(self, alert: ErrorAlert) -> None:
        logger.warning(
            "error_threshold_exceeded",
            key=alert.key,
            context=alert.context,
            kind=alert.kind,
            occurrences=alert.count,
        )
        if self._alert_handler is not None:
            self._alert_handler(alert)
