"""Preset curve configurations offered to creators.

Only these presets can be launched, which keeps rug-style curves out.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CurvePresetInfo:
    """Display parameters of a curve preset."""

    name: str
    description: str
    base_price: Decimal
    price_slope: Decimal
    virtual_liquidity: int
    buy_fee_bps: int
    sell_fee_bps: int
    max_supply: int

    def to_dict(self) -> dict:
        return asdict(self)


CURVE_PRESETS: dict[str, CurvePresetInfo] = {
    # Gentle curve for community tokens
    "community": CurvePresetInfo(
        name="Community",
        description="Gentle price curve. Good for community tokens.",
        base_price=Decimal("0.0001"),
        price_slope=Decimal("0.0000001"),
        virtual_liquidity=50_000,
        buy_fee_bps=50,
        sell_fee_bps=50,
        max_supply=1_000_000_000,
    ),
    # Balanced curve, pump.fun-like dynamics
    "standard": CurvePresetInfo(
        name="Standard",
        description="Balanced curve. Similar to pump.fun dynamics.",
        base_price=Decimal("0.0001"),
        price_slope=Decimal("0.0000005"),
        virtual_liquidity=10_000,
        buy_fee_bps=100,
        sell_fee_bps=100,
        max_supply=1_000_000_000,
    ),
    # Steeper curve for limited supply tokens
    "scarce": CurvePresetInfo(
        name="Scarce",
        description="Steeper curve for limited editions.",
        base_price=Decimal("0.001"),
        price_slope=Decimal("0.000005"),
        virtual_liquidity=5_000,
        buy_fee_bps=100,
        sell_fee_bps=100,
        max_supply=100_000_000,
    ),
}


def get_preset(preset_id: str) -> CurvePresetInfo:
    """Look up a preset. Raises ValueError for unknown ids."""
    try:
        return CURVE_PRESETS[preset_id]
    except KeyError:
        raise ValueError(f"Unknown curve preset: {preset_id}") from None
