"""Record store for launches."""

from parity.ledger.database import get_db, init_db
from parity.ledger.models import CurvePreset, Launch, LaunchStatus
from parity.ledger.repository import LaunchRepository

__all__ = [
    # Models
    "Launch",
    # Enums
    "CurvePreset",
    "LaunchStatus",
    # Database
    "get_db",
    "init_db",
    "LaunchRepository",
]
