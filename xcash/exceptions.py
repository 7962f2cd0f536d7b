"""
X-Cash Exceptions

Custom exception classes for the X-Cash token. Every ledger error aborts the
whole operation: no state is mutated and no event is emitted.
"""


class XCashError(Exception):
    """Base exception for X-Cash."""
    pass


class ConfigError(XCashError, ValueError):
    """Configuration is invalid."""
    pass


class InvalidAddress(XCashError, ValueError):
    """Account identity is not a well-formed address."""
    pass


class TokenError(XCashError):
    """Base exception for rejected ledger operations."""
    pass


class NotAuthorized(TokenError):
    """Caller lacks the administrator privilege."""
    pass


class InvalidRecipient(TokenError):
    """Target account is the zero address where a real account is required."""
    pass


class InvalidSender(TokenError):
    """Debited or approving account is the zero address."""
    pass


class InsufficientBalance(TokenError):
    """A debit would drive a balance below zero."""
    pass


class InsufficientAllowance(TokenError):
    """A delegated debit exceeds the remaining approved amount."""
    pass


class AllowanceUnderflow(TokenError):
    """An allowance decrease exceeds the current allowance."""
    pass


class CapExceeded(TokenError):
    """A mint would push total supply above the cap."""
    pass


class ArithmeticOverflow(TokenError):
    """A result would exceed the representable integer range."""
    pass


class InvalidAmount(TokenError):
    """Amount is negative or not an integer."""
    pass


class InvalidCap(TokenError):
    """Supply cap is zero or out of range."""
    pass


class LedgerCorrupted(TokenError):
    """Ledger state violates a supply or sign invariant."""
    pass
