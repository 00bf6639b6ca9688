"""
Utility functions shared by services and the API layer.

- whatsapp_link: wa.me deep links and phone number formatting
"""

from scheduling.utils.whatsapp_link import (
    format_phone_number,
    generate_whatsapp_link,
)

__all__ = ["format_phone_number", "generate_whatsapp_link"]
