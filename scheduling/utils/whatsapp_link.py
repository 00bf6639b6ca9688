"""
WhatsApp Link Generator.

Builds public wa.me "click to chat" URLs so the customer can send the booking
details to the business with one tap. Works on mobile (opens the app) and web.
"""

from urllib.parse import quote

BASE_URL = "https://wa.me"

# Country code prepended to national Brazilian numbers (DDD + number)
DEFAULT_COUNTRY_CODE = "55"


def digits_only(phone: str) -> str:
    """Strip everything but digits from a phone number."""
    return "".join(ch for ch in phone if ch.isdigit())


def format_phone_number(phone: str) -> str:
    """
    Format a Brazilian phone number for display.

    Example:
        >>> format_phone_number("11987654321")
        '(11) 98765-4321'
        >>> format_phone_number("1134567890")
        '(11) 3456-7890'

    Numbers that are not 10 or 11 digits long are returned unchanged.
    """
    digits = digits_only(phone)
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return phone


def to_international(phone: str) -> str:
    """Digits with country code, as wa.me expects."""
    digits = digits_only(phone)
    if len(digits) in (10, 11):
        return DEFAULT_COUNTRY_CODE + digits
    return digits


def generate_whatsapp_link(phone_number: str, message: str) -> str:
    """
    Generate a wa.me link with a pre-filled message.

    Args:
        phone_number: Business WhatsApp number, any formatting
        message: Text placed in the chat input

    Returns:
        Full URL ready to open

    Example:
        >>> generate_whatsapp_link("(11) 98765-4321", "Olá")
        'https://wa.me/5511987654321?text=Ol%C3%A1'

    Raises:
        ValueError: If phone_number has no digits
    """
    number = to_international(phone_number)
    if not number:
        raise ValueError(f"Phone number '{phone_number}' has no digits")
    return f"{BASE_URL}/{number}?text={quote(message)}"
