"""Web layer: contracts, services and controllers for the Parity API."""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
