"""Velocity and single-amount detector with per-account running counts."""

import threading
from collections.abc import Mapping

import structlog

from ..config import FraudConfig, default_config
from ..errors import ValidationFailure
from ..models import as_mapping
from ..validation import is_valid_transaction
from .base import DetectorToolkit, TransactionInput

logger = structlog.get_logger()


class VelocityAmountDetector:
    """Flags invalid transactions, large amounts and high-velocity accounts.

    Checks run in order and the first hit wins:
    1. Invalid transaction (bad accounts, amount, or self-transfer) -> 0.9
    2. Amount above ``amount_threshold`` -> 0.8
    3. Source-account count above ``velocity_threshold`` -> 0.75

    An invalid transaction counts as a fraud signal here, unlike in
    ThresholdDetector. Counters grow with every new source account until
    ``reset()`` is called.

    The fixed scores are published as-is and never compared to ``threshold``;
    ``threshold`` is only reported in the detection log. Raising it above
    0.75 (or 0.8) therefore does not suppress velocity (or amount) hits.
    """

    def __init__(
        self,
        name: str | None = None,
        threshold: float | None = None,
        velocity_threshold: int | None = None,
        amount_threshold: float | None = None,
        toolkit: DetectorToolkit | None = None,
        config: FraudConfig | None = None,
    ) -> None:
        defaults = (config if config is not None else default_config).detectors
        self._defaults = defaults
        self.name = name or defaults.velocity_detector_name
        self.threshold = defaults.threshold if threshold is None else threshold
        self.velocity_threshold = (
            defaults.velocity_threshold if velocity_threshold is None else velocity_threshold
        )
        self.amount_threshold = (
            defaults.amount_threshold if amount_threshold is None else amount_threshold
        )
        self.enabled = True
        self._toolkit = toolkit if toolkit is not None else DetectorToolkit()
        self._context = f"{type(self).__name__}.detect"
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def detect(self, transaction: TransactionInput) -> bool:
        try:
            if not self.enabled:
                return False

            data = as_mapping(transaction)
            if not isinstance(data, Mapping):
                self._toolkit.report(ValidationFailure("Transaction data is null"), self._context)
                return False

            defaults = self._defaults
            from_account = data.get("fromAccount")
            amount = data.get("amount", 0)

            if not is_valid_transaction(from_account, data.get("toAccount"), amount):
                return self._flag(data, defaults.invalid_transaction_score, "invalid_transaction")

            with self._lock:
                count = self._counts.get(from_account, 0) + 1
                self._counts[from_account] = count

            if amount > self.amount_threshold:
                return self._flag(data, defaults.amount_breach_score, "amount_threshold")

            if count > self.velocity_threshold:
                return self._flag(data, defaults.velocity_breach_score, "velocity_threshold")

            logger.debug(
                "velocity_check_passed",
                detector=self.name,
                transaction_id=data.get("transactionId"),
                account_count=count,
            )
            return False
        except Exception as exc:
            self._toolkit.report(exc, self._context)
            return False

    def reset(self) -> None:
        """Forget every tracked account."""
        with self._lock:
            tracked = len(self._counts)
            self._counts.clear()
        logger.info("velocity_counters_reset", detector=self.name, accounts_cleared=tracked)

    def transaction_count(self, account: str) -> int:
        with self._lock:
            return self._counts.get(account, 0)

    def tracked_accounts(self) -> int:
        with self._lock:
            return len(self._counts)

    def set_velocity_threshold(self, threshold: int) -> None:
        self.velocity_threshold = threshold

    def set_amount_threshold(self, threshold: float) -> None:
        self.amount_threshold = threshold

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def is_enabled(self) -> bool:
        return self.enabled

    def set_threshold(self, threshold: float) -> None:
        self.threshold = threshold

    def _flag(self, data: Mapping, risk_score: float, reason: str) -> bool:
        self._toolkit.log_attempt(self.name, data, risk_score, self.threshold)
        logger.info(
            "velocity_fraud_flagged",
            detector=self.name,
            transaction_id=data.get("transactionId"),
            reason=reason,
            risk_score=risk_score,
        )
        self._toolkit.publish_fraud(self.name, data, risk_score)
        return True
