"""Unit tests for shared/logging_config.py"""

import json
import logging
import sys
from uuid import UUID

from shared.logging_config import JSONFormatter


def make_record(**extra):
    record = logging.LogRecord(
        name="scheduling.transactions.booking_transaction",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Appointment committed",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_base_fields(self):
        payload = json.loads(JSONFormatter().format(make_record()))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "scheduling.transactions.booking_transaction"
        assert payload["message"] == "Appointment committed"
        assert "timestamp" in payload

    def test_booking_fields_serialised(self):
        appointment_id = UUID("550e8400-e29b-41d4-a716-446655440000")
        record = make_record(
            appointment_id=appointment_id,
            appointment_date="2026-10-20",
            appointment_time="10:00",
        )

        payload = json.loads(JSONFormatter().format(record))

        assert payload["appointment_id"] == str(appointment_id)
        assert payload["appointment_date"] == "2026-10-20"
        assert payload["appointment_time"] == "10:00"

    def test_unknown_extra_ignored(self):
        payload = json.loads(JSONFormatter().format(make_record(customer_contact="11987654321")))

        assert "customer_contact" not in payload

    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record()
            record.exc_info = sys.exc_info()

        payload = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in payload["exception"]
