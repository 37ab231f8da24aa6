"""Verified charity wallets a launch can route fees to."""

import random
from dataclasses import dataclass
from typing import Optional

RANDOM_CHARITY = "random"


@dataclass(frozen=True)
class Charity:
    name: str
    address: str
    description: str


VERIFIED_CHARITIES: tuple[Charity, ...] = (
    Charity(
        name="Aid for Ukraine",
        address="66pJhhESDjdeBBDdkKmxYYd7q6GUggYPWjxpMKNX39KV",
        description="Official Solana wallet for Ukraine aid.",
    ),
    Charity(
        name="Rainforest Foundation US",
        address="8r2EpKVHLf1ASuDtj2up8TDwjkTbHbDY94UcT7jcEQ1s",
        description="Protecting rainforests and indigenous rights.",
    ),
    Charity(
        name="Come Back Alive",
        address="8icxpGYCoR8SRKqLYsSarcAjBjBPuXAuHkeJjJx5ju7a",
        description="Support for the Ukrainian Army.",
    ),
)

_BY_ADDRESS = {charity.address: charity for charity in VERIFIED_CHARITIES}


def find_charity(address: str) -> Optional[Charity]:
    return _BY_ADDRESS.get(address)


def resolve_charity(
    wallet: str,
    name: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> tuple[str, Optional[str]]:
    """Turn the creator's choice into a concrete (wallet, name) pair.

    ``random`` picks one of the verified charities. A verified wallet
    without a name gets its registered name; any other wallet is kept as is.
    """
    if wallet == RANDOM_CHARITY:
        charity = (rng or random).choice(VERIFIED_CHARITIES)
        return charity.address, charity.name

    if not name:
        known = find_charity(wallet)
        if known:
            return wallet, known.name

    return wallet, name


def list_charities() -> list[dict]:
    """Charity options including the random sentinel, for display."""
    options = [
        {
            "name": "Random Charity",
            "address": RANDOM_CHARITY,
            "description": "We'll populate a random verified charity for you.",
        }
    ]
    options.extend(
        {"name": c.name, "address": c.address, "description": c.description}
        for c in VERIFIED_CHARITIES
    )
    return options
