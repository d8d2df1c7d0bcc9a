from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


def format_brl(centavos: int) -> str:
    """Format centavos as Brazilian reais: 285000 -> 'R$ 2.850,00'"""
    formatted = f"{centavos / 100:,.2f}"
    return "R$ " + formatted.replace(",", "_").replace(".", ",").replace("_", ".")


def parse_brl(text: str) -> int | None:
    """Parse an amount typed by the operator into centavos.

    Accepts '2850', '2850.00', '2.850,00' and '2850,50'. Returns None when the
    text is not a number.
    """
    text = text.strip()
    if not text:
        return None
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
