"""
X-Cash Configuration

Loads config.toml at startup. Environment variables override TOML values.
"""

from .loader import (
    XCashConfig,
    TokenConfig,
    DeployConfig,
    LoggingConfig,
    load_config,
)

__all__ = [
    "XCashConfig",
    "TokenConfig",
    "DeployConfig",
    "LoggingConfig",
    "load_config",
]
