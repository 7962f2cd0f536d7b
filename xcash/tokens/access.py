"""
Administrator access control.

A single check, called at the top of every restricted ledger operation.
Once administration is renounced the administrator is the zero address, which
no caller can match, so every restricted operation is permanently closed.
"""

from ..constants import ZERO_ADDRESS
from ..exceptions import NotAuthorized

NOT_OWNER = "Ownable: caller is not the owner"


def is_administrator(administrator: str, caller: str) -> bool:
    """True if *caller* currently holds administration."""
    return administrator != ZERO_ADDRESS and caller == administrator


def require_administrator(administrator: str, caller: str) -> None:
    """
    Raise NotAuthorized unless *caller* is the current administrator.

    Both arguments must already be normalized addresses.
    """
    if not is_administrator(administrator, caller):
        raise NotAuthorized(NOT_OWNER)
