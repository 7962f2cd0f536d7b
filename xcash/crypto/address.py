"""
X-Cash Account Addresses

Account identities are Ethereum-style 20-byte addresses. Every address that
enters the ledger is normalized to its EIP-55 checksum form, so two spellings
of the same account always map to the same balance.
"""

from eth_utils import is_hex_address, keccak, to_checksum_address
import rlp

from ..constants import ADDRESS_LENGTH, ZERO_ADDRESS
from ..exceptions import InvalidAddress


def normalize_address(address: str) -> str:
    """
    Normalize an account identity to checksum format.

    Args:
        address: Hex address with 0x prefix, any casing

    Returns:
        EIP-55 checksum address

    Raises:
        InvalidAddress: if *address* is not a 20-byte hex address
    """
    if not isinstance(address, str) or not is_hex_address(address):
        raise InvalidAddress(f"Not a valid account address: {address!r}")
    return to_checksum_address(address)


def is_valid_address(address: str) -> bool:
    """Check if *address* is a well-formed 20-byte hex address."""
    return isinstance(address, str) and is_hex_address(address)


def is_zero_address(address: str) -> bool:
    """Check if *address* is the reserved "no account" sentinel."""
    return normalize_address(address) == ZERO_ADDRESS


def generate_contract_address(deployer: str, nonce: int) -> str:
    """
    Derive a deployment address using CREATE opcode logic.

    Address = keccak256(rlp([deployer, nonce]))[-20:]

    Args:
        deployer: Deploying account address
        nonce: Deployer's account nonce at deployment time

    Returns:
        Contract address (checksum format)
    """
    if nonce < 0:
        raise ValueError(f"Nonce cannot be negative, got {nonce}")

    deployer_bytes = bytes.fromhex(normalize_address(deployer)[2:])
    address_bytes = keccak(rlp.encode([deployer_bytes, nonce]))[-ADDRESS_LENGTH:]
    return to_checksum_address(address_bytes)
