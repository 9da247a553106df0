# storefront/utils/formatting.py
from decimal import Decimal, ROUND_HALF_EVEN


def format_price(value) -> str:
    """
    Display-only price string in es-CO style: "$" + "." thousands, "," decimals,
    0-2 fraction digits ($55.000, $1.234,5). Never feed the result back into arithmetic.
    """
    if value is None or value == "":
        return "$0"

    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)
    sign = "-" if amount < 0 else ""
    whole, _, frac = f"{abs(amount):.2f}".partition(".")
    frac = frac.rstrip("0")

    grouped = f"{int(whole):,}".replace(",", ".")
    if frac:
        return f"${sign}{grouped},{frac}"
    return f"${sign}{grouped}"
