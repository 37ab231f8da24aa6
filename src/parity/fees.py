"""Trading fee schedule and fee distribution.

Fees start high while a token is small and taper off as market cap grows,
so established tokens can sustain volume. Collected fees are split between
the platform, Meteora, the creator and the launch's charity.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

# Percent of collected fees per recipient. Platform share is hard-capped.
FEE_DISTRIBUTION = {
    "platform": 15,
    "meteora": 30,
    "creator": 25,
    "charity": 30,
}

PLATFORM_FEE_CAP_PCT = 15

# (market cap in USD, fee in basis points), ascending by market cap
FEE_CURVE_ANCHORS: tuple[tuple[Decimal, int], ...] = (
    (Decimal("60000"), 95),
    (Decimal("300000"), 50),
    (Decimal("2000000"), 5),
)

Number = Union[int, float, str, Decimal]


def fee_bps_for_market_cap(market_cap_usd: Number) -> int:
    """Fee rate in basis points for a market cap.

    Flat at the first anchor below it, flat at the last anchor above it and
    linear between neighbouring anchors, rounded to the nearest bp.
    """
    market_cap = Decimal(str(market_cap_usd))
    if market_cap < 0:
        raise ValueError("Market cap cannot be negative")

    first_cap, first_bps = FEE_CURVE_ANCHORS[0]
    if market_cap <= first_cap:
        return first_bps

    for (low_cap, low_bps), (high_cap, high_bps) in zip(FEE_CURVE_ANCHORS, FEE_CURVE_ANCHORS[1:]):
        if market_cap <= high_cap:
            ratio = (market_cap - low_cap) / (high_cap - low_cap)
            bps = Decimal(low_bps) + (Decimal(high_bps) - Decimal(low_bps)) * ratio
            return int(bps.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return FEE_CURVE_ANCHORS[-1][1]


def fee_pct_for_market_cap(market_cap_usd: Number) -> Decimal:
    """Fee rate as a percentage, e.g. Decimal('0.95')."""
    return Decimal(fee_bps_for_market_cap(market_cap_usd)) / Decimal(100)


def split_fee(amount: int) -> dict[str, int]:
    """Split a fee amount (base units) between recipients.

    Integer division leaves a remainder of a few units; it goes to charity
    so the parts always add up to ``amount``.
    """
    if amount < 0:
        raise ValueError("Fee amount cannot be negative")

    shares = {
        recipient: amount * pct // 100
        for recipient, pct in FEE_DISTRIBUTION.items()
    }
    shares["charity"] += amount - sum(shares.values())
    return shares


def fee_curve_table() -> list[dict]:
    """Anchor points for display."""
    return [
        {
            "market_cap_usd": int(cap),
            "fee_bps": bps,
            "fee_pct": str(Decimal(bps) / Decimal(100)),
        }
        for cap, bps in FEE_CURVE_ANCHORS
    ]


def _check_distribution() -> None:
    if sum(FEE_DISTRIBUTION.values()) != 100:
        raise RuntimeError("Fee distribution must add up to 100%")
    if FEE_DISTRIBUTION["platform"] > PLATFORM_FEE_CAP_PCT:
        raise RuntimeError("Platform fee share exceeds its cap")


_check_distribution()
