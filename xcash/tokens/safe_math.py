"""
Checked unsigned 256-bit arithmetic for ledger amounts.

Python integers never wrap, so the EVM word range (0..2**256-1) is
enforced explicitly: results outside it raise instead of being clamped or
wrapped.
"""

from ..constants import U256_MAX
from ..exceptions import ArithmeticOverflow, InvalidAmount


def require_amount(amount) -> int:
    """Validate a caller-supplied amount and return it unchanged."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(f"Amount must be an integer, got {type(amount).__name__}")
    if amount < 0:
        raise InvalidAmount(f"Amount cannot be negative, got {amount}")
    if amount > U256_MAX:
        raise ArithmeticOverflow(f"Amount {amount} exceeds the 256-bit range")
    return amount


def u256_add(x: int, y: int, message: str = "SafeMath: addition overflow") -> int:
    """Checked add: raise ArithmeticOverflow if x + y exceeds U256_MAX."""
    result = x + y
    if result > U256_MAX:
        raise ArithmeticOverflow(message)
    return result


def u256_sub(x: int, y: int, error=ArithmeticOverflow,
             message: str = "SafeMath: subtraction overflow") -> int:
    """Checked subtract: raise *error* if y > x."""
    if y > x:
        raise error(message)
    return x - y
