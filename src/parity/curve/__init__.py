"""Bonding curve clients for the external DBC program."""

from parity.curve.base import (
    CreatePoolParams,
    CurveClient,
    PoolConfigState,
    PoolPriceData,
    PoolState,
    PreparedPool,
)
from parity.curve.factory import close_curve_client, get_curve_client, reset_curve_client
from parity.curve.presets import CURVE_PRESETS, get_preset

__all__ = [
    "CURVE_PRESETS",
    "CreatePoolParams",
    "CurveClient",
    "PoolConfigState",
    "PoolPriceData",
    "PoolState",
    "PreparedPool",
    "close_curve_client",
    "get_curve_client",
    "get_preset",
    "reset_curve_client",
]
