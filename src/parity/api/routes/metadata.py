"""Token metadata served as the on-chain URI of launches without an image URI.

Public: wallets and explorers fetch it without credentials.
"""

from fastapi import APIRouter, HTTPException

from parity.config import get_settings
from parity.ledger.database import get_db
from parity.ledger.repository import LaunchRepository

router = APIRouter()


@router.get("/api/metadata/{launch_id}.json")
async def get_token_metadata(launch_id: str) -> dict:
    """Metaplex-style JSON metadata for a launch."""
    async with get_db() as session:
        launch = await LaunchRepository(session).get_launch(launch_id)
        if launch is None:
            raise HTTPException(status_code=404, detail="Launch not found")

        base_url = get_settings().public_base_url.rstrip("/")
        attributes = [
            {"trait_type": "Curve", "value": launch.curve_preset},
            {"trait_type": "Charity Wallet", "value": launch.charity_wallet},
        ]
        if launch.charity_name:
            attributes.append({"trait_type": "Charity", "value": launch.charity_name})

        return {
            "name": launch.name,
            "symbol": launch.symbol,
            "description": launch.description or "",
            "image": launch.image or "",
            "external_url": f"{base_url}/launch/{launch.id}",
            "attributes": attributes,
        }
