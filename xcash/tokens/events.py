"""
Ledger notifications.

Every successful ledger operation emits one or more of these records. They
form an append-only side channel for observers (deployment console, indexers)
and are not part of the ledger's queryable state.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Transfer:
    """Emitted on transfers, mints (sender is the zero address) and burns
    (recipient is the zero address)."""
    sender: str
    recipient: str
    value: int
    timestamp: float = field(default_factory=time.time, compare=False)

    name = "Transfer"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.name,
            "from": self.sender,
            "to": self.recipient,
            "value": str(self.value),
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class Approval:
    """Emitted whenever an allowance is set, including decrements by
    transfer_from and burn_from."""
    owner: str
    spender: str
    value: int
    timestamp: float = field(default_factory=time.time, compare=False)

    name = "Approval"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.name,
            "owner": self.owner,
            "spender": self.spender,
            "value": str(self.value),
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class AdministrationTransferred:
    """Emitted on deployment, administration transfer and renouncement."""
    previous_admin: str
    new_admin: str
    timestamp: float = field(default_factory=time.time, compare=False)

    name = "AdministrationTransferred"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.name,
            "previousOwner": self.previous_admin,
            "newOwner": self.new_admin,
            "timestamp": self.timestamp,
        }
