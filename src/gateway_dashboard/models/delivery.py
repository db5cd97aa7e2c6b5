"""
Module: delivery.py
Description: Webhook delivery record model.

Defines the DeliveryRecord model for webhook delivery outcomes pushed
by the gateway. Ingestion is deliberately lenient: push payloads are
parsed best-effort and unknown fields are kept as-is.

Key Components:
- DeliveryRecord: One logged attempt to call a webhook endpoint
- utc_now_iso(): Insertion timestamp in millisecond ISO-8601 UTC form
- SENTINEL: Placeholder shown for absent values

Dependencies: pydantic, datetime, typing
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SENTINEL = "-"


def utc_now_iso() -> str:
    """Return the current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DeliveryRecord(BaseModel):
    """
    Outcome of one outbound webhook delivery.

    Field names follow the gateway's camelCase wire format through
    aliases, so records round-trip through persistence unchanged.

    Attributes:
        session_id: Gateway session that triggered the delivery
        event: Delivery event label (e.g. 'message.received')
        url: Destination endpoint
        success: Whether the delivery succeeded
        status: HTTP status code returned by the endpoint
        timestamp: ISO-8601 insertion time, assigned once
        payload: Outbound request body
        response: Outcome body of any JSON type
        error: Error message for failed deliveries
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="allow",
    )

    session_id: Optional[str] = Field(default=None, alias="sessionId")
    event: Optional[str] = Field(default=None)
    url: Optional[str] = Field(default=None)
    success: bool = Field(default=False)
    status: Optional[int] = Field(default=None)
    timestamp: Optional[str] = Field(default=None)
    payload: Any = Field(default_factory=dict)
    response: Any = Field(default=None)
    error: Optional[str] = Field(default=None)

    @field_validator('session_id', 'event', 'url', 'error', 'timestamp', mode='before')
    @classmethod
    def coerce_text(cls, v: Any) -> Optional[str]:
        """Keep text fields textual; empty values count as absent."""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return v
        return str(v)

    @field_validator('success', mode='before')
    @classmethod
    def coerce_success(cls, v: Any) -> bool:
        return bool(v)

    @field_validator('status', mode='before')
    @classmethod
    def coerce_status(cls, v: Any) -> Optional[int]:
        """Accept integer-like status codes, drop anything else."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, int):
            return v
        if isinstance(v, float):
            return int(v) if v.is_integer() else None
        try:
            return int(str(v).strip())
        except ValueError:
            return None

    @field_validator('payload', mode='before')
    @classmethod
    def default_payload(cls, v: Any) -> Any:
        return {} if v is None else v

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "DeliveryRecord":
        """
        Build a record from a raw push payload or persisted entry.

        Args:
            raw: Mapping in the gateway's wire format

        Returns:
            DeliveryRecord with a timestamp assigned if the input had none

        Raises:
            ValueError: If raw is not a mapping
        """
        if not isinstance(raw, Mapping):
            raise ValueError("record must be a mapping")

        data: Dict[str, Any] = dict(raw)
        if not data.get("timestamp"):
            data["timestamp"] = utc_now_iso()
        return cls.model_validate(data)

    def to_wire(self) -> Dict[str, Any]:
        """Serialize back to the camelCase wire format, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

    @property
    def resolved_session_id(self) -> str:
        """Session id from the top level, then the payload, then the sentinel."""
        if self.session_id:
            return self.session_id
        if isinstance(self.payload, Mapping):
            nested = self.payload.get("sessionId")
            if nested:
                return str(nested)
        return SENTINEL
