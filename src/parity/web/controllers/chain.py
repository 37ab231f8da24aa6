"""Solana cluster API endpoints."""

from fastapi import APIRouter, HTTPException

from parity.solana.addresses import is_valid_address
from parity.web.contracts.chain import BalanceResponse, ChainStatusResponse, SupplyResponse
from parity.web.dependencies import get_rpc_client
from parity.web.services.chain_service import ChainService

router = APIRouter(prefix="/chain", tags=["chain"])


@router.get("/status", response_model=ChainStatusResponse)
async def chain_status() -> ChainStatusResponse:
    """Slot, block height and epoch progress of the cluster."""
    return await ChainService(get_rpc_client()).get_status()


@router.get("/supply", response_model=SupplyResponse)
async def chain_supply() -> SupplyResponse:
    return await ChainService(get_rpc_client()).get_supply()


@router.get("/balance/{address}", response_model=BalanceResponse)
async def wallet_balance(address: str) -> BalanceResponse:
    """SOL balance of a wallet."""
    if not is_valid_address(address):
        raise HTTPException(status_code=422, detail="Invalid Solana address")
    return await ChainService(get_rpc_client()).get_balance(address)
