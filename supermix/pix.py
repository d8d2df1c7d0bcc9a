"""PIX BR Code payload generator following the BCB EMV QR Code layout.

Builds the payload string for a static, reusable PIX QR code. The functions
here are pure and depend only on the standard library: they never validate
their input and never raise, so degenerate input produces a degenerate (but
well-formed) payload. Rendering lives in ``supermix.qrcode``.
"""

from __future__ import annotations

import re
import unicodedata
from decimal import Decimal
from functools import reduce

PIX_GUI = "BR.GOV.BCB.PIX"
PIX_TXID = "SUPERMIXCONCRETO"
BR_COUNTRY_PREFIX = "+55"

MERCHANT_NAME_MAX_LENGTH = 25
MERCHANT_CITY_MAX_LENGTH = 15
# Tag 26 holds "0014BR.GOV.BCB.PIX" + "01" + LEN + key within 99 bytes
PIX_KEY_MAX_BYTES = 77

_NOT_ALLOWED = re.compile(r"[^A-Za-z0-9 ]")
_NON_DIGITS = re.compile(r"\D")

_CRC_POLY = 0x1021
_CRC_INIT = 0xFFFF


def _tlv(tag: str, value: str) -> str:
    """Build a TLV (Tag-Length-Value) field. LEN counts UTF-8 bytes."""
    return f"{tag}{len(value.encode('utf-8')):02d}{value}"


def _truncate_bytes(text: str, max_bytes: int) -> str:
    """Cut text to at most max_bytes of UTF-8 without splitting a character."""
    return text.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")


def _crc16_step(crc: int, byte: int) -> int:
    crc ^= byte << 8
    for _ in range(8):
        if crc & 0x8000:
            crc = (crc << 1) ^ _CRC_POLY
        else:
            crc <<= 1
        crc &= 0xFFFF
    return crc


def crc16(payload: str) -> str:
    """Compute CRC16/CCITT-FALSE (init 0xFFFF, poly 0x1021) as 4 uppercase hex digits."""
    crc = reduce(_crc16_step, payload.encode("utf-8"), _CRC_INIT)
    return f"{crc:04X}"


def normalize_text(text: str, max_length: int) -> str:
    """Reduce a merchant field to uppercase ASCII letters, digits and spaces.

    Accents are stripped (``"São Paulo"`` -> ``"SAO PAULO"``), anything else
    outside the allowed set is dropped, the result is cut to ``max_length``
    characters and only then trimmed.
    """
    decomposed = unicodedata.normalize("NFD", text or "")
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    cleaned = _NOT_ALLOWED.sub("", stripped).upper()
    return cleaned[: max(max_length, 0)].strip()


def normalize_pix_key(key: str) -> str:
    """Add the +55 country prefix to keys that look like local phone numbers.

    A key whose digits count 10 or 11 is treated as a phone number, which also
    matches 11-digit CPFs. Every other key is returned untouched.
    """
    digits = _NON_DIGITS.sub("", key)
    if len(digits) in (10, 11) and not key.startswith(BR_COUNTRY_PREFIX):
        return f"{BR_COUNTRY_PREFIX}{key}"
    return key


def format_amount(amount: float | int | Decimal) -> str:
    """Format an amount in reais as the payload expects: ``1234.5`` -> ``"1234.50"``."""
    return f"{amount:.2f}"


def build_pix_payload(key: str, name: str, city: str, amount: float | int | Decimal) -> str:
    """Generate a PIX BR Code payload string.

    Args:
        key: The PIX key (CPF, CNPJ, phone, email, or random key), cut to 77 bytes.
        name: Recipient name, normalized to at most 25 ASCII characters.
        city: Recipient city, normalized to at most 15 ASCII characters.
        amount: Transaction amount in reais (e.g. 150.50).

    Returns:
        The complete BR Code payload string ending with its CRC16.
    """
    pix_key = _truncate_bytes(normalize_pix_key(key), PIX_KEY_MAX_BYTES)
    merchant_name = normalize_text(name, MERCHANT_NAME_MAX_LENGTH)
    merchant_city = normalize_text(city, MERCHANT_CITY_MAX_LENGTH)

    # Merchant Account Information (tag 26)
    mai = _tlv("00", PIX_GUI) + _tlv("01", pix_key)
    # Additional Data Field Template (tag 62)
    adft = _tlv("05", PIX_TXID)

    payload = (
        _tlv("00", "01")  # Payload Format Indicator
        + _tlv("01", "12")  # Point of Initiation Method (reusable)
        + _tlv("26", mai)  # Merchant Account Information
        + _tlv("52", "0000")  # Merchant Category Code
        + _tlv("53", "986")  # Transaction Currency (BRL)
        + _tlv("54", format_amount(amount))  # Transaction Amount
        + _tlv("58", "BR")  # Country Code
        + _tlv("59", merchant_name)  # Merchant Name
        + _tlv("60", merchant_city)  # Merchant City
        + _tlv("62", adft)  # Additional Data
    )

    # CRC16 placeholder: tag "63" + length "04" + actual CRC
    payload += "6304"
    payload += crc16(payload)
    return payload
