"""Public launch exploration."""

from typing import Optional

from fastapi import APIRouter, Query

from parity.curve.factory import get_curve_client
from parity.ledger.database import get_db
from parity.ledger.models import LaunchStatus
from parity.web.contracts.launches import LaunchResponse, TickerItemResponse
from parity.web.services.launch_service import LaunchService

router = APIRouter(prefix="/explore", tags=["explore"])


@router.get("", response_model=list[LaunchResponse])
async def explore_launches(
    limit: int = Query(50, ge=1, le=200),
    status: Optional[LaunchStatus] = Query(None),
) -> list[LaunchResponse]:
    """Launches from all creators, newest first.

    Without ``status`` only deployed (active and migrated) launches are listed.
    """
    async with get_db() as session:
        service = LaunchService(session, get_curve_client())
        launches = await service.list_public_launches(limit, status)
        return [LaunchResponse.model_validate(launch) for launch in launches]


@router.get("/ticker", response_model=list[TickerItemResponse])
async def explore_ticker(limit: int = Query(20, ge=1, le=100)) -> list[TickerItemResponse]:
    """Active launches with live spot price and pool liquidity."""
    async with get_db() as session:
        service = LaunchService(session, get_curve_client())
        return await service.ticker(limit)
