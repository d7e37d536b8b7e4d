# app/core/pix.py
"""
PIX "copia e cola" payment codes.

The code follows the EMV QR / BR Code layout: a flat sequence of
TLV fields (2-digit id, 2-digit length, value) closed by a CRC16
checksum over everything before it, including the "6304" header of
the CRC field itself.

Nothing settles these codes. Callers treat the string as opaque.
"""

import secrets
from decimal import Decimal

PIX_GUI = "BR.GOV.BCB.PIX"
CURRENCY_BRL = "986"
COUNTRY_CODE = "BR"


def _tlv(tag: str, value: str) -> str:
    if len(value) > 99:
        raise ValueError(f"PIX field {tag} is too long ({len(value)} chars)")
    return f"{tag}{len(value):02d}{value}"


def crc16_ccitt(payload: str) -> str:
    """CRC16/CCITT-FALSE (poly 0x1021, init 0xFFFF) as 4 uppercase hex digits."""
    crc = 0xFFFF
    for byte in payload.encode("utf-8"):
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ 0x1021) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return f"{crc:04X}"


def generate_pix_code(
    amount: Decimal,
    merchant_name: str,
    merchant_city: str,
    key: str | None = None,
) -> str:
    """
    Build a PIX payment code for `amount` (BRL).

    Args:
        amount: order total; rendered with two decimals.
        merchant_name: max 25 chars per BR Code rules (truncated).
        merchant_city: max 15 chars (truncated).
        key: PIX key; a random one is generated when omitted.

    Returns:
        The full payment string, CRC included.
    """
    if key is None:
        key = secrets.token_hex(16)

    merchant_account = _tlv("00", PIX_GUI) + _tlv("01", key)

    payload = "".join(
        [
            _tlv("00", "01"),  # payload format indicator
            _tlv("26", merchant_account),
            _tlv("52", "0000"),  # merchant category code
            _tlv("53", CURRENCY_BRL),
            _tlv("54", f"{amount.quantize(Decimal('0.01'))}"),
            _tlv("58", COUNTRY_CODE),
            _tlv("59", merchant_name[:25]),
            _tlv("60", merchant_city[:15]),
            _tlv("62", _tlv("05", "***")),  # reference label
            "6304",
        ]
    )
    return payload + crc16_ccitt(payload)
