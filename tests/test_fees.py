"""Tests for the fee schedule and fee split."""

from decimal import Decimal

import pytest

from parity.fees import (
    FEE_DISTRIBUTION,
    fee_bps_for_market_cap,
    fee_curve_table,
    fee_pct_for_market_cap,
    split_fee,
)


class TestFeeCurve:
    """Tests for market-cap based fee rates."""

    @pytest.mark.parametrize(
        "market_cap, expected_bps",
        [
            (0, 95),
            (60_000, 95),
            (180_000, 73),
            (300_000, 50),
            (1_150_000, 28),
            (2_000_000, 5),
            (50_000_000, 5),
        ],
    )
    def test_fee_bps(self, market_cap, expected_bps):
        assert fee_bps_for_market_cap(market_cap) == expected_bps

    def test_fee_never_increases_with_market_cap(self):
        """Fees only taper off as the token grows."""
        caps = [0, 10_000, 60_001, 120_000, 299_999, 300_001, 900_000, 1_999_999, 3_000_000]
        rates = [fee_bps_for_market_cap(cap) for cap in caps]
        assert rates == sorted(rates, reverse=True)

    def test_accepts_decimal_and_string(self):
        assert fee_bps_for_market_cap(Decimal("300000")) == 50
        assert fee_bps_for_market_cap("2000000") == 5

    def test_negative_market_cap_rejected(self):
        with pytest.raises(ValueError):
            fee_bps_for_market_cap(-1)

    def test_fee_pct(self):
        assert fee_pct_for_market_cap(0) == Decimal("0.95")
        assert fee_pct_for_market_cap(2_000_000) == Decimal("0.05")

    def test_curve_table(self):
        table = fee_curve_table()
        assert [row["market_cap_usd"] for row in table] == [60_000, 300_000, 2_000_000]
        assert table[0]["fee_pct"] == "0.95"


class TestFeeSplit:
    """Tests for splitting collected fees between recipients."""

    def test_distribution_adds_up(self):
        assert sum(FEE_DISTRIBUTION.values()) == 100
        assert FEE_DISTRIBUTION["platform"] <= 15
        assert FEE_DISTRIBUTION["charity"] == 30

    def test_even_split(self):
        shares = split_fee(1_000)
        assert shares == {"platform": 150, "meteora": 300, "creator": 250, "charity": 300}

    def test_remainder_goes_to_charity(self):
        """Rounding dust is never lost."""
        shares = split_fee(7)
        assert sum(shares.values()) == 7
        assert shares["charity"] == 3

    def test_zero_amount(self):
        assert sum(split_fee(0).values()) == 0

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError):
            split_fee(-5)
