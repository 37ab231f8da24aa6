"""SOL/lamport conversion and display formatting."""

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import Union

LAMPORTS_PER_SOL = 1_000_000_000
SOL_DECIMALS = 9

Amount = Union[int, float, str, Decimal]


def sol_to_lamports(sol: Amount) -> int:
    """Convert SOL to lamports without floating point drift.

    Floats go through their 9-decimal representation, strings are parsed
    exactly. Digits beyond 9 decimals are truncated.
    """
    if isinstance(sol, float):
        value = Decimal(f"{sol:.{SOL_DECIMALS}f}")
    else:
        value = Decimal(str(sol).strip())

    lamports = (value * LAMPORTS_PER_SOL).quantize(Decimal("1"), rounding=ROUND_DOWN)
    return int(lamports)


def lamports_to_sol(lamports: Union[int, str, Decimal]) -> Decimal:
    """Convert lamports to SOL."""
    return Decimal(str(lamports)) / LAMPORTS_PER_SOL


def _round(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_sol(sol: Amount) -> str:
    """Format a SOL amount for display."""
    value = Decimal(str(sol))
    if value < 1:
        return f"{_round(value, 4):f} SOL"
    if value < 100:
        return f"{_round(value, 2):f} SOL"
    return f"{_round(value, 0):,} SOL"


def format_price(price: Amount) -> str:
    """Format a USD price for display, switching to exponent form when tiny."""
    value = Decimal(str(price))
    if value == 0:
        return "$0.00"
    if value < Decimal("0.000001"):
        mantissa, exponent = f"{float(value):.2e}".split("e")
        return f"${mantissa}e{int(exponent)}"
    if value < Decimal("0.01"):
        return f"${_round(value, 6):f}"
    if value < 1:
        return f"${_round(value, 4):f}"
    return f"${_round(value, 2):f}"
