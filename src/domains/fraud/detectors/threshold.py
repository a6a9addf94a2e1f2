"""Generic score-versus-threshold detector."""

from ..config import default_config
from ..errors import ValidationFailure
from ..models import as_mapping
from .base import DetectorToolkit, TransactionInput


class ThresholdDetector:
    """Flags a transaction when its weighted risk score reaches the threshold.

    A missing transaction is reported as a validation failure and treated as
    not fraudulent.
    """

    def __init__(
        self,
        name: str | None = None,
        threshold: float | None = None,
        toolkit: DetectorToolkit | None = None,
    ) -> None:
        defaults = default_config.detectors
        self.name = name or defaults.threshold_detector_name
        self.threshold = defaults.threshold if threshold is None else threshold
        self.enabled = True
        self._toolkit = toolkit if toolkit is not None else DetectorToolkit()
        self._context = f"{type(self).__name__}.detect"

    def detect(self, transaction: TransactionInput) -> bool:
        try:
            if not self.enabled:
                return False

            data = as_mapping(transaction)
            if data is None:
                self._toolkit.report(ValidationFailure("Transaction data is null"), self._context)
                return False

            risk_score = self._toolkit.scorer.analyze(data)
            self._toolkit.log_attempt(self.name, data, risk_score, self.threshold)

            if risk_score >= self.threshold:
                self._toolkit.publish_fraud(self.name, data, risk_score)
                return True
            return False
        except Exception as exc:
            self._toolkit.report(exc, self._context)
            return False

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def is_enabled(self) -> bool:
        return self.enabled

    def set_threshold(self, threshold: float) -> None:
        self.threshold = threshold
