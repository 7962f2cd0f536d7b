"""
X-Cash Token Package

Core imports are lazily loaded so that importing a submodule does not
configure logging or load configuration. For direct module access, import
from submodules:

    from xcash.tokens import TokenLedger
    from xcash.deploy import deploy_token
    from xcash.exceptions import InsufficientBalance
"""

__version__ = "1.0.0"


# Lazy imports to avoid loading everything at package import
def __getattr__(name):
    """Lazy module loading."""
    if name == 'TokenLedger':
        from .tokens import TokenLedger
        return TokenLedger
    elif name == 'deploy_token':
        from .deploy import deploy_token
        return deploy_token
    elif name == 'XCashError':
        from .exceptions import XCashError
        return XCashError
    raise AttributeError(f"module 'xcash' has no attribute {name!r}")

__all__ = ['TokenLedger', 'deploy_token', 'XCashError']
