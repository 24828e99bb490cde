"""Balances, call payloads, environment checks, contract info and storage decoding for ink! contracts."""

__version__ = "0.1.0"

__all__ = [
    "balance",
    "calls",
    "contract_info",
    "contract_storage",
    "env_check",
    "units",
    "urls",
]