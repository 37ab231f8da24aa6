"""Chain status contracts."""

from decimal import Decimal

from pydantic import BaseModel


class ChainStatusResponse(BaseModel):
    slot: int
    block_height: int
    epoch: int
    slot_index: int
    slots_in_epoch: int
    epoch_progress: float
    solana_version: str
    rpc_provider: str


class SupplyResponse(BaseModel):
    """Supply in SOL."""

    total: Decimal
    circulating: Decimal
    non_circulating: Decimal


class BalanceResponse(BaseModel):
    address: str
    lamports: int
    sol: Decimal
