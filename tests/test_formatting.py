from decimal import Decimal

import pytest

from storefront.utils.formatting import format_price


@pytest.mark.parametrize("value, expected", [
    (None, "$0"),
    (0, "$0"),
    (6000, "$6.000"),
    (Decimal("55000"), "$55.000"),
    (Decimal("1234567"), "$1.234.567"),
    (Decimal("1234.5"), "$1.234,5"),
    (Decimal("49999.99"), "$49.999,99"),
    ("4200.00", "$4.200"),
])
def test_format_price(value, expected):
    assert format_price(value) == expected
