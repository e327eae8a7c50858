"""
utils/money_utils.py

Purpose: Currency formatting

- Brazilian real amounts as shown to users ("R$ 1.234,56")
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Union


def format_brl(amount: Union[Decimal, float, int]) -> str:
    """
    Formats an amount in pt-BR currency style.

    Args:
        amount: Value in reais

    Returns:
        String like "R$ 2.000,00"
    """
    value = Decimal(str(amount))

    # Room for every integer digit plus the two cents digits
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        value = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        sign = "-" if value < 0 else ""

        # Format with US separators, then swap them
        us_style = f"{abs(value):,.2f}"

    br_style = us_style.replace(",", "_").replace(".", ",").replace("_", ".")

    return f"{sign}R$ {br_style}"
