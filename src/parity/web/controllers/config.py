"""Static configuration endpoints: curve presets, fees, charities."""

from decimal import Decimal

from fastapi import APIRouter, HTTPException, Query

from parity.charities import list_charities
from parity.curve.presets import CURVE_PRESETS
from parity.fees import (
    FEE_DISTRIBUTION,
    fee_bps_for_market_cap,
    fee_curve_table,
    fee_pct_for_market_cap,
    split_fee,
)

router = APIRouter(prefix="/config", tags=["config"])


@router.get("/curve-presets")
async def get_curve_presets() -> list[dict]:
    """Curve presets a launch can use."""
    return [{"id": preset_id, **preset.to_dict()} for preset_id, preset in CURVE_PRESETS.items()]


@router.get("/fee-distribution")
async def get_fee_distribution() -> dict:
    """Percent of trading fees per recipient."""
    return FEE_DISTRIBUTION


@router.get("/fee-curve")
async def get_fee_curve(market_cap: Decimal | None = Query(None, ge=0)) -> dict:
    """Fee curve anchors, and the fee at ``market_cap`` when given."""
    response: dict = {"anchors": fee_curve_table()}
    if market_cap is not None:
        try:
            bps = fee_bps_for_market_cap(market_cap)
            pct = fee_pct_for_market_cap(market_cap)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        response["market_cap_usd"] = str(market_cap)
        response["fee_bps"] = bps
        response["fee_pct"] = str(pct)
    return response


@router.get("/fee-split")
async def get_fee_split(amount: int = Query(..., description="Fee amount in base units")) -> dict:
    """Split a collected fee amount between recipients."""
    try:
        shares = split_fee(amount)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"amount": amount, "shares": shares}


@router.get("/charities")
async def get_charities() -> list[dict]:
    """Verified charities, including the random option."""
    return list_charities()
