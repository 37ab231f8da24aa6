"""Chain service for Solana cluster status and balances."""

import asyncio

from parity.solana.addresses import rpc_provider_name
from parity.solana.rpc import SolanaRpcClient
from parity.solana.units import lamports_to_sol
from parity.web.contracts.chain import BalanceResponse, ChainStatusResponse, SupplyResponse


class ChainService:
    """Read-only cluster information."""

    def __init__(self, rpc: SolanaRpcClient):
        self.rpc = rpc

    async def get_status(self) -> ChainStatusResponse:
        slot, block_height, epoch_info, version = await asyncio.gather(
            self.rpc.get_slot(),
            self.rpc.get_block_height(),
            self.rpc.get_epoch_info(),
            self.rpc.get_version(),
        )

        slots_in_epoch = epoch_info["slotsInEpoch"]
        slot_index = epoch_info["slotIndex"]
        return ChainStatusResponse(
            slot=slot,
            block_height=block_height,
            epoch=epoch_info["epoch"],
            slot_index=slot_index,
            slots_in_epoch=slots_in_epoch,
            epoch_progress=(slot_index / slots_in_epoch) * 100 if slots_in_epoch else 0.0,
            solana_version=version.get("solana-core", "unknown"),
            rpc_provider=rpc_provider_name(self.rpc.rpc_url),
        )

    async def get_supply(self) -> SupplyResponse:
        supply = await self.rpc.get_supply()
        return SupplyResponse(
            total=lamports_to_sol(supply["total"]),
            circulating=lamports_to_sol(supply["circulating"]),
            non_circulating=lamports_to_sol(supply["nonCirculating"]),
        )

    async def get_balance(self, address: str) -> BalanceResponse:
        lamports = await self.rpc.get_balance(address)
        return BalanceResponse(
            address=address,
            lamports=lamports,
            sol=lamports_to_sol(lamports),
        )
