"""
Module: projector.py
Description: Display projection of webhook delivery records.

Maps stored delivery records into table rows and detail views. The
response body of a delivery may be any JSON type (or a JSON document
carried as text), so it is classified into a tagged union before it
is rendered.

Key Components:
- classify_response(): Absent / Scalar / Text / Structured
- render_response(): Priority-ordered response normalization
- status_label(): "HTTP {status}" or Success/Failed
- Projector: project_row(), project_detail()

Dependencies: json, dataclasses, datetime, zoneinfo, logger
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo

from gateway_dashboard.models.delivery import SENTINEL, DeliveryRecord
from gateway_dashboard.models.response import DeliveryDetail, DeliveryRow
from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

ROW_TIME_FORMAT = "%d/%m/%Y, %H.%M"
DETAIL_TIME_FORMAT = "%d/%m/%Y, %H.%M.%S"


@dataclass(frozen=True)
class Absent:
    pass


@dataclass(frozen=True)
class Scalar:
    value: Union[int, float, bool]


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Structured:
    value: Union[dict, list]


ResponseBody = Union[Absent, Scalar, Text, Structured]


def classify_response(value: Any) -> ResponseBody:
    """Classify a delivery response by its runtime type."""
    if value is None:
        return Absent()
    if isinstance(value, (dict, list, tuple)):
        return Structured(value)
    if isinstance(value, str):
        return Text(value)
    return Scalar(value)


def scalar_text(value: Any) -> str:
    """
    Textual form of a scalar, spelled the way JSON spells it.

    Booleans render as ``true``/``false`` and integral floats drop
    their fractional part. Anything else uses ``str()``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def render_response(record: DeliveryRecord) -> str:
    """
    Normalize a delivery outcome for the detail view.

    First matching rule wins:

    1. error present: ``"Error: {error}"``
    2. structured response: pretty JSON
    3. text that parses as JSON: pretty JSON of the parsed value
    4. text that does not parse: the text unchanged
    5. scalar: its textual form
    6. absent: ``"-"``

    Unexpected failures fall back to the scalar textual form of the
    original response.
    """
    if record.error:
        return f"Error: {record.error}"

    body = classify_response(record.response)
    try:
        if isinstance(body, Structured):
            return pretty_json(body.value)
        if isinstance(body, Text):
            try:
                parsed = json.loads(body.value)
            except ValueError:
                return body.value
            return pretty_json(parsed)
        if isinstance(body, Scalar):
            return scalar_text(body.value)
        return SENTINEL
    except Exception as e:
        logger.warning(
            "Failed to format webhook response",
            response_type=type(record.response).__name__,
            error=str(e)
        )
        return scalar_text(record.response)


def render_payload(record: DeliveryRecord) -> str:
    payload = record.payload if record.payload is not None else {}
    try:
        return pretty_json(payload)
    except (TypeError, ValueError) as e:
        logger.warning(
            "Failed to format webhook payload",
            payload_type=type(payload).__name__,
            error=str(e)
        )
        return scalar_text(payload)


def status_label(record: DeliveryRecord) -> str:
    if record.status:
        return f"HTTP {record.status}"
    return "Success" if record.success else "Failed"


def _tone(record: DeliveryRecord) -> str:
    return "success" if record.success else "error"


class Projector:
    """
    Renders delivery records for the history table and the detail view.

    Attributes:
        tz: Timezone timestamps are rendered in
        row_format: strftime format for table rows
        detail_format: strftime format for the detail view
    """

    def __init__(
        self,
        timezone_name: str = "UTC",
        row_format: str = ROW_TIME_FORMAT,
        detail_format: str = DETAIL_TIME_FORMAT,
    ):
        self.tz = ZoneInfo(timezone_name)
        self.row_format = row_format
        self.detail_format = detail_format

    def project_row(self, record: DeliveryRecord, position: int) -> DeliveryRow:
        return DeliveryRow(
            position=position,
            session_id=record.resolved_session_id,
            event=record.event or SENTINEL,
            url=record.url or SENTINEL,
            status_label=status_label(record),
            tone=_tone(record),
            time=self.format_time(record.timestamp, self.row_format),
        )

    def project_detail(
        self,
        record: DeliveryRecord,
        position: Optional[int] = None
    ) -> DeliveryDetail:
        return DeliveryDetail(
            position=position,
            session_id=record.resolved_session_id,
            event=record.event or SENTINEL,
            status_label=status_label(record),
            tone=_tone(record),
            time=self.format_time(record.timestamp, self.detail_format),
            url=record.url or SENTINEL,
            payload_text=render_payload(record),
            response_text=render_response(record),
        )

    def format_time(self, timestamp: Optional[str], fmt: str) -> str:
        """Render an ISO-8601 timestamp; unparsable text is returned as-is."""
        if not timestamp:
            moment = datetime.now(timezone.utc)
        else:
            try:
                moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
            except ValueError:
                return timestamp
            if moment.tzinfo is None:
                moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(self.tz).strftime(fmt)
