"""Pydantic models for the fraud domain."""

import copy
from collections.abc import Mapping
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# Keys of the open transaction mapping that are not features.
IDENTITY_FIELDS = {
    "transactionId": "transaction_id",
    "fromAccount": "from_account",
    "toAccount": "to_account",
    "amount": "amount",
    "timestamp": "timestamp",
}


def _now() -> datetime:
    return datetime.now(UTC)


def freeze(value: Any) -> Any:
    """Read-only snapshot of ``value``.

    Mappings become MappingProxyType, lists and tuples become tuples and sets
    become frozensets, all recursively. Other values are deep-copied, or kept
    as-is when they cannot be copied (locks, sockets, client handles).
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(value)
    try:
        return copy.deepcopy(value)
    except Exception:
        return value


def thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


class Transaction(BaseModel):
    """Immutable transaction record handed to detectors."""

    model_config = ConfigDict(frozen=True)

    transaction_id: str
    from_account: str
    to_account: str
    amount: float = Field(ge=0)
    timestamp: datetime = Field(default_factory=_now)
    features: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Transaction":
        """Build from the camelCase mapping collaborators exchange."""
        fields = {attr: data[key] for key, attr in IDENTITY_FIELDS.items() if key in data}
        fields["features"] = {k: v for k, v in data.items() if k not in IDENTITY_FIELDS}
        return cls(**fields)

    def to_mapping(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.features)
        data.update(
            transactionId=self.transaction_id,
            fromAccount=self.from_account,
            toAccount=self.to_account,
            amount=self.amount,
            timestamp=self.timestamp,
        )
        return data


class FraudEvent(BaseModel):
    """Record of a positive fraud decision."""

    model_config = ConfigDict(frozen=True)

    transaction_id: str
    event_type: str
    risk_score: float = Field(ge=0.0, le=1.0)
    created_at: datetime = Field(default_factory=_now)
    details: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("details", mode="after")
    @classmethod
    def _freeze_details(cls, details: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze(details)

    @field_serializer("details")
    def _serialize_details(self, details: Mapping[str, Any]) -> dict[str, Any]:
        return thaw(details)

    @classmethod
    def create(
        cls,
        transaction: Mapping[str, Any],
        event_type: str,
        risk_score: float,
    ) -> "FraudEvent":
        """Snapshot ``transaction`` into a new event.

        The details are a read-only snapshot: later changes to the caller's
        mapping never show up in the event, and the event itself cannot be
        changed through ``details``.
        """
        transaction_id = transaction.get("transactionId") or "UNKNOWN"
        return cls(
            transaction_id=str(transaction_id),
            event_type=event_type,
            risk_score=risk_score,
            details=dict(transaction),
        )


def as_mapping(transaction: Transaction | Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    """Normalize detector input to the open mapping form."""
    if isinstance(transaction, Transaction):
        return transaction.to_mapping()
    return transaction
