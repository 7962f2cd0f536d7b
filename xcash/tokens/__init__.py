"""
X-Cash Token

Provides:
  - TokenLedger             : capped, mintable, burnable ERC-20 style ledger
  - require_administrator   : administrator access check
  - Transfer / Approval / AdministrationTransferred : ledger notifications
"""

from .access import is_administrator, require_administrator
from .events import AdministrationTransferred, Approval, Transfer
from .ledger import TokenLedger

__all__ = [
    "TokenLedger",
    "is_administrator",
    "require_administrator",
    "Transfer",
    "Approval",
    "AdministrationTransferred",
]
