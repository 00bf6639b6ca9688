"""
Unit tests for scheduling/services/notification_service.py

The notification is best-effort: failures return None instead of raising.
"""

from datetime import date, time
from unittest.mock import patch

from scheduling.services.notification_service import (
    build_booking_message,
    format_friendly_date,
    notify_booking_created,
)


def test_format_friendly_date():
    assert format_friendly_date(date(2026, 10, 20)) == "terça-feira, 20 de outubro de 2026"
    assert format_friendly_date(date(2026, 3, 1)) == "domingo, 1 de março de 2026"


def test_build_booking_message():
    message = build_booking_message("Ana Souza", "Corte Masculino", date(2026, 10, 20), time(9, 30))

    assert "Ana Souza" in message
    assert "Serviço: Corte Masculino" in message
    assert "Data: terça-feira, 20 de outubro de 2026" in message
    assert message.endswith("Horário: 09:30")


class TestNotifyBookingCreated:
    def test_with_whatsapp_number(self):
        notification = notify_booking_created(
            "Ana Souza", "Corte Masculino", date(2026, 10, 20), time(10, 0), "11987654321"
        )

        assert notification is not None
        assert notification.whatsapp_link.startswith("https://wa.me/5511987654321?text=")

    def test_without_whatsapp_number(self):
        notification = notify_booking_created(
            "Ana Souza", "Corte Masculino", date(2026, 10, 20), time(10, 0), None
        )

        assert notification.message
        assert notification.whatsapp_link is None

    def test_failure_is_swallowed(self):
        """An unusable business number must not fail an already committed booking."""
        notification = notify_booking_created(
            "Ana Souza", "Corte Masculino", date(2026, 10, 20), time(10, 0), "sem numero"
        )

        assert notification is None

    def test_failure_is_logged(self):
        with patch("scheduling.services.notification_service.logger") as mock_logger:
            notify_booking_created(
                "Ana Souza", "Corte Masculino", date(2026, 10, 20), time(10, 0), "---"
            )

        mock_logger.warning.assert_called_once()
