"""Error taxonomy for the fraud engine.

None of these ever escape ``detect``/``analyze``/``publish``; they are raised
internally, caught at the component boundary and routed to the ErrorSink.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    VALIDATION_FAILURE = "ValidationFailure"
    SCORING_FAILURE = "ScoringFailure"
    LISTENER_FAILURE = "ListenerFailure"
    SINK_FAILURE = "SinkFailure"


class FraudEngineError(Exception):
    """Base class for engine errors."""


class ValidationFailure(FraudEngineError):
    """Transaction fields are missing or malformed."""


class ScoringFailure(FraudEngineError):
    """A feature value could not be scored."""


class ListenerFailure(FraudEngineError):
    """A registered listener raised during notification."""
