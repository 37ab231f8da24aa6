"""Parity - Solana token launchpad where trading fees fund charities."""

__version__ = "0.1.0"
