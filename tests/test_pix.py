from decimal import Decimal

import pytest

from app.core.pix import crc16_ccitt, generate_pix_code


def test_crc16_check_value():
    assert crc16_ccitt("123456789") == "29B1"


def test_code_layout():
    code = generate_pix_code(Decimal("17"), "ORGANICOVIDA", "BRASILIA", key="abc123")

    assert code.startswith("000201")
    assert "0014BR.GOV.BCB.PIX" in code
    assert "5303986" in code
    assert "540517.00" in code
    assert "5802BR" in code
    assert "5912ORGANICOVIDA" in code
    assert "6008BRASILIA" in code
    assert code[-8:-4] == "6304"


def test_checksum_covers_payload():
    code = generate_pix_code(Decimal("8.50"), "ORGANICOVIDA", "BRASILIA")

    assert crc16_ccitt(code[:-4]) == code[-4:]


def test_random_key_differs_between_codes():
    first = generate_pix_code(Decimal("1.00"), "M", "C")
    second = generate_pix_code(Decimal("1.00"), "M", "C")

    assert first != second


def test_long_key_is_rejected():
    with pytest.raises(ValueError):
        generate_pix_code(Decimal("1.00"), "M", "C", key="x" * 120)
