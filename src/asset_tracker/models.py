"""Data models for asset valuation syncing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class AssetKind(str, Enum):
    VEHICLE = "vehicle"
    HOME = "home"
    UNSUPPORTED = "unsupported"


class AssetEntry(BaseModel):
    """One ledger asset and the valuation pages configured for it.

    Maps to an assets.json entry: { "<asset_id>": { "url"?, "redfin"? } }
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    asset_id: int
    url: str | None = None     # kbb.com or zillow.com page
    redfin: str | None = None  # redfin.com page

    @field_validator("url", "redfin", mode="before")
    @classmethod
    def _strict_optional_str(cls, value: object) -> object:
        # Reject numbers/lists instead of letting them coerce to strings
        if value is not None and not isinstance(value, str):
            raise ValueError("source URL must be a string")
        return value or None

    @property
    def has_source(self) -> bool:
        return bool(self.url or self.redfin)


class FailureReason(str, Enum):
    NAVIGATION_FAILED = "navigation_failed"
    NODE_NOT_FOUND = "node_not_found"
    EVALUATION_ERROR = "evaluation_error"
    INVALID_VALUE = "invalid_value"


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of one extraction step: a value on success, a reason on failure.

    The browser yields text values; site extractors yield parsed prices.
    """

    value: str | float | None = None
    reason: FailureReason | None = None
    detail: str = ""

    @classmethod
    def ok(cls, value: str | float) -> ExtractionResult:
        return cls(value=value)

    @classmethod
    def fail(cls, reason: FailureReason, detail: str = "") -> ExtractionResult:
        return cls(reason=reason, detail=detail)

    @property
    def succeeded(self) -> bool:
        return self.reason is None


@dataclass
class AssetOutcome:
    """What happened to a single asset during a run."""

    asset_id: int
    kind: AssetKind
    source_values: dict[str, float | None] = field(default_factory=dict)
    reconciled_value: float | None = None
    updated: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "asset_id": self.asset_id,
            "kind": self.kind.value,
            # NaN is not valid JSON
            "source_values": {
                k: (None if v is None or math.isnan(v) else v)
                for k, v in self.source_values.items()
            },
            "reconciled_value": self.reconciled_value,
            "updated": self.updated,
            "error": self.error,
        }


@dataclass
class RunSummary:
    """Totals for one sync run."""

    outcomes: list[AssetOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def updated(self) -> int:
        return sum(1 for o in self.outcomes if o.updated)

    @property
    def skipped(self) -> int:
        return sum(
            1 for o in self.outcomes
            if not o.updated and o.reconciled_value is None
        )

    @property
    def failed(self) -> int:
        # Value extracted but the ledger rejected it
        return sum(
            1 for o in self.outcomes
            if not o.updated and o.reconciled_value is not None
        )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "updated": self.updated,
            "skipped": self.skipped,
            "failed": self.failed,
            "assets": [o.to_dict() for o in self.outcomes],
        }
