"""
Module: test_delivery.py
Description: Unit tests for the DeliveryRecord model and page settings.

Tests lenient ingestion of push payloads, timestamp assignment,
session id resolution, wire serialization, and page setting parsing.
"""

import pytest
from pydantic import ValidationError

from gateway_dashboard.models.delivery import SENTINEL, DeliveryRecord, utc_now_iso
from gateway_dashboard.models.page import (
    ALL,
    capacity_for,
    parse_page_setting,
    serialize_page_setting,
)


class TestDeliveryRecord:
    """Test cases for DeliveryRecord ingestion and serialization."""

    def test_from_raw_keeps_wire_fields(self, sample_webhook):
        """Test a complete webhook payload is parsed field by field."""
        record = DeliveryRecord.from_raw(sample_webhook)

        assert record.session_id == "sales-01"
        assert record.event == "message.received"
        assert record.url == "https://hooks.example.com/whatsapp"
        assert record.success is True
        assert record.status == 200
        assert record.response == {"ok": True}
        assert record.timestamp == "2026-10-19T07:30:15.250Z"

    def test_from_raw_assigns_timestamp_when_missing(self):
        """Test a timestamp is assigned at insertion when absent."""
        record = DeliveryRecord.from_raw({"event": "message.received"})

        assert record.timestamp is not None
        assert record.timestamp.endswith("Z")
        assert "T" in record.timestamp

    def test_from_raw_does_not_reassign_timestamp(self, sample_webhook):
        """Test an existing timestamp is kept verbatim."""
        record = DeliveryRecord.from_raw(sample_webhook)
        again = DeliveryRecord.from_raw(record.to_wire())

        assert again.timestamp == sample_webhook["timestamp"]

    def test_from_raw_rejects_non_mapping(self):
        """Test only mappings are accepted as records."""
        with pytest.raises(ValueError, match="record must be a mapping"):
            DeliveryRecord.from_raw(["not", "a", "record"])

        with pytest.raises(ValueError, match="record must be a mapping"):
            DeliveryRecord.from_raw(None)

    def test_defaults_for_minimal_record(self):
        """Test absent fields fall back to their defaults."""
        record = DeliveryRecord.from_raw({})

        assert record.session_id is None
        assert record.event is None
        assert record.url is None
        assert record.success is False
        assert record.status is None
        assert record.payload == {}
        assert record.response is None
        assert record.error is None

    def test_lenient_status_coercion(self):
        """Test status codes are coerced best-effort."""
        assert DeliveryRecord.from_raw({"status": "404"}).status == 404
        assert DeliveryRecord.from_raw({"status": "teapot"}).status is None
        assert DeliveryRecord.from_raw({"status": True}).status is None

    def test_float_status_coercion(self):
        """Test integral float status codes keep their value."""
        assert DeliveryRecord.from_raw({"status": 200.0}).status == 200
        assert DeliveryRecord.from_raw({"status": 200.5}).status is None
        assert DeliveryRecord.from_raw({"status": float("nan")}).status is None

    def test_null_payload_becomes_empty(self):
        """Test a null payload is stored as an empty structure."""
        assert DeliveryRecord.from_raw({"payload": None}).payload == {}

    def test_response_type_is_unconstrained(self):
        """Test any JSON type is accepted as a response."""
        for response in ['{"ok":true}', "plain text", 42, 1.5, False, [1, 2], {"a": 1}]:
            record = DeliveryRecord.from_raw({"response": response})
            assert record.response == response

    def test_extra_fields_are_preserved(self):
        """Test unknown gateway fields survive a wire round trip."""
        record = DeliveryRecord.from_raw({"event": "x", "attempt": 3})

        assert record.to_wire()["attempt"] == 3

    def test_to_wire_uses_camel_case(self, sample_webhook):
        """Test serialization uses the gateway's field names."""
        wire = DeliveryRecord.from_raw(sample_webhook).to_wire()

        assert wire["sessionId"] == "sales-01"
        assert "session_id" not in wire

    def test_to_wire_omits_unset_fields(self):
        """Test fields absent from the input are not invented on output."""
        wire = DeliveryRecord.from_raw({"event": "message.sent"}).to_wire()

        assert set(wire) == {"event", "timestamp"}

    def test_records_are_immutable(self, sample_webhook):
        """Test stored records cannot be modified."""
        record = DeliveryRecord.from_raw(sample_webhook)

        with pytest.raises(ValidationError):
            record.success = False

    def test_resolved_session_id_fallback_chain(self):
        """Test the top-level id, then payload id, then the sentinel."""
        top = DeliveryRecord.from_raw({"sessionId": "a", "payload": {"sessionId": "b"}})
        nested = DeliveryRecord.from_raw({"payload": {"sessionId": "b"}})
        neither = DeliveryRecord.from_raw({"payload": ["no", "mapping"]})

        assert top.resolved_session_id == "a"
        assert nested.resolved_session_id == "b"
        assert neither.resolved_session_id == SENTINEL

    def test_utc_now_iso_format(self):
        """Test insertion timestamps use millisecond precision and Z suffix."""
        stamp = utc_now_iso()

        assert stamp.endswith("Z")
        assert len(stamp) == len("2026-10-19T07:30:15.250Z")


class TestPageSetting:
    """Test cases for page setting parsing and capacity policy."""

    OPTIONS = [10, 25, 50, 100]

    def test_parse_fixed_sizes(self):
        """Test integers and decimal strings within the options parse."""
        assert parse_page_setting(50, self.OPTIONS) == 50
        assert parse_page_setting("25", self.OPTIONS) == 25
        assert parse_page_setting(" 100 ", self.OPTIONS) == 100

    def test_parse_all(self):
        """Test the ALL sentinel is case-insensitive."""
        assert parse_page_setting("all", self.OPTIONS) == ALL
        assert parse_page_setting("ALL", self.OPTIONS) == ALL

    def test_parse_rejects_unknown_values(self):
        """Test values outside the enumerated set are rejected."""
        for value in [0, 7, -10, "abc", "", "12.5", True, 3.0]:
            with pytest.raises(ValueError):
                parse_page_setting(value, self.OPTIONS)

    def test_serialize(self):
        """Test persisted forms are a decimal string or "all"."""
        assert serialize_page_setting(50) == "50"
        assert serialize_page_setting(ALL) == "all"

    def test_capacity_policy(self):
        """Test ten pages of scrollback, or the ceiling for ALL."""
        assert capacity_for(50) == 500
        assert capacity_for(10) == 100
        assert capacity_for(ALL) == 10000
        assert capacity_for(25, multiplier=4) == 100
        assert capacity_for(ALL, ceiling=2000) == 2000
