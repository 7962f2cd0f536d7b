"""
X-Cash Crypto Module

Address handling for ledger account identities:
- checksum normalization and validation
- the zero-address sentinel
- CREATE-style deployment address derivation
"""

from .address import (
    normalize_address,
    is_valid_address,
    is_zero_address,
    generate_contract_address,
)

__all__ = [
    "normalize_address",
    "is_valid_address",
    "is_zero_address",
    "generate_contract_address",
]
