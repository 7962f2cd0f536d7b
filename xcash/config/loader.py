"""
X-Cash TOML Configuration Loader

Loads config.toml with environment variable overrides.

Environment variable mapping:
    [token]   name     → XCASH_TOKEN_NAME
    [token]   cap      → XCASH_TOKEN_CAP
    [deploy]  network  → XCASH_NETWORK
    [logging] level    → XCASH_LOG_LEVEL
    ...
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib as tomli  # Python 3.11+
except ImportError:
    import tomli  # type: ignore[no-redef]

from ..constants import (
    DEFAULT_NETWORK,
    TOKEN_CAP,
    TOKEN_DECIMALS,
    TOKEN_NAME,
    TOKEN_SYMBOL,
    U256_MAX,
)
from ..exceptions import ConfigError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_int(value: Any, key: str) -> int:
    """Accept ints and decimal strings (TOML has no 256-bit integers)."""
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).replace("_", ""))
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None


# -- Token --------------------------------------------------------------

@dataclass
class TokenConfig:
    """[token] section."""
    name: str = TOKEN_NAME
    symbol: str = TOKEN_SYMBOL
    decimals: int = TOKEN_DECIMALS
    cap: int = TOKEN_CAP
    initial_supply: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenConfig":
        return cls(
            name=data.get("name", TOKEN_NAME),
            symbol=data.get("symbol", TOKEN_SYMBOL),
            decimals=_parse_int(data.get("decimals", TOKEN_DECIMALS), "token.decimals"),
            cap=_parse_int(data.get("cap", TOKEN_CAP), "token.cap"),
            initial_supply=_parse_int(data.get("initial_supply", 0), "token.initial_supply"),
        )

    def apply_env(self) -> None:
        """Override from environment variables."""
        if v := os.environ.get("XCASH_TOKEN_NAME"):
            self.name = v
        if v := os.environ.get("XCASH_TOKEN_SYMBOL"):
            self.symbol = v
        if v := os.environ.get("XCASH_TOKEN_DECIMALS"):
            self.decimals = _parse_int(v, "XCASH_TOKEN_DECIMALS")
        if v := os.environ.get("XCASH_TOKEN_CAP"):
            self.cap = _parse_int(v, "XCASH_TOKEN_CAP")

    def validate(self) -> None:
        if not self.name:
            raise ConfigError("token.name cannot be empty")
        if not self.symbol:
            raise ConfigError("token.symbol cannot be empty")
        if not 0 <= self.decimals <= 255:
            raise ConfigError(f"token.decimals must be 0-255, got {self.decimals}")
        if not 0 < self.cap <= U256_MAX:
            raise ConfigError(f"token.cap must be in 1..2**256-1, got {self.cap}")
        if not 0 <= self.initial_supply <= self.cap:
            raise ConfigError("token.initial_supply must be between 0 and token.cap")


# -- Deploy -------------------------------------------------------------

@dataclass
class DeployConfig:
    """[deploy] section."""
    network: str = DEFAULT_NETWORK
    nonce: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeployConfig":
        return cls(
            network=data.get("network", DEFAULT_NETWORK),
            nonce=_parse_int(data.get("nonce", 0), "deploy.nonce"),
        )

    def apply_env(self) -> None:
        if v := os.environ.get("XCASH_NETWORK"):
            self.network = v
        if v := os.environ.get("XCASH_DEPLOY_NONCE"):
            self.nonce = _parse_int(v, "XCASH_DEPLOY_NONCE")

    def validate(self) -> None:
        if self.nonce < 0:
            raise ConfigError(f"deploy.nonce cannot be negative, got {self.nonce}")


# -- Logging ------------------------------------------------------------

@dataclass
class LoggingConfig:
    """[logging] section."""
    level: str = "INFO"
    file_output: bool = False
    log_file: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingConfig":
        return cls(
            level=str(data.get("level", "INFO")).upper(),
            file_output=data.get("file_output", False),
            log_file=data.get("log_file", ""),
        )

    def apply_env(self) -> None:
        if v := os.environ.get("XCASH_LOG_LEVEL"):
            self.level = v.upper()
        if v := os.environ.get("XCASH_LOG_FILE"):
            self.log_file = v
            self.file_output = True

    def validate(self) -> None:
        if self.level not in LOG_LEVELS:
            raise ConfigError(f"Invalid logging.level: {self.level}")
        if not isinstance(self.file_output, bool):
            raise ConfigError(
                f"logging.file_output must be true or false, got {self.file_output!r}"
            )


# -----------------------------------------------------------------------
# Top-level unified config
# -----------------------------------------------------------------------

@dataclass
class XCashConfig:
    """
    Unified configuration.

    Loads every section of config.toml and applies environment variable
    overrides.
    """
    token: TokenConfig = field(default_factory=TokenConfig)
    deploy: DeployConfig = field(default_factory=DeployConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # --- factories --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "XCashConfig":
        """Create XCashConfig from a parsed TOML dict."""
        return cls(
            token=TokenConfig.from_dict(data.get("token", {})),
            deploy=DeployConfig.from_dict(data.get("deploy", {})),
            logging=LoggingConfig.from_dict(data.get("logging", {})),
        )

    @classmethod
    def from_file(cls, config_path: str) -> "XCashConfig":
        """
        Load configuration from a TOML file.

        A missing file is not an error: defaults (with env overrides) are used.
        """
        path = Path(config_path)
        if not path.exists():
            logger.warning("Config file not found: %s, using defaults", config_path)
            cfg = cls()
            cfg.apply_env()
            return cfg

        try:
            with open(path, "rb") as f:
                raw = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"Cannot parse {config_path}: {e}") from e

        cfg = cls.from_dict(raw)
        cfg.apply_env()
        return cfg

    # --- env overrides ----------------------------------------------------

    def apply_env(self) -> None:
        """Apply environment variable overrides to all sections."""
        self.token.apply_env()
        self.deploy.apply_env()
        self.logging.apply_env()

    # --- validation -------------------------------------------------------

    def validate(self) -> bool:
        """
        Validate all configuration sections.

        Raises:
            ConfigError: on invalid config
        """
        self.token.validate()
        self.deploy.validate()
        self.logging.validate()
        return True

    # --- serialisation ----------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict (for diagnostics, NOT for re-creating TOML)."""
        return {
            "token": {
                "name": self.token.name,
                "symbol": self.token.symbol,
                "decimals": self.token.decimals,
                "cap": str(self.token.cap),
                "initial_supply": str(self.token.initial_supply),
            },
            "deploy": {
                "network": self.deploy.network,
                "nonce": self.deploy.nonce,
            },
            "logging": {
                "level": self.logging.level,
                "file_output": self.logging.file_output,
                "log_file": self.logging.log_file,
            },
        }


# -----------------------------------------------------------------------
# Convenience function
# -----------------------------------------------------------------------

def load_config(path: Optional[str] = None) -> XCashConfig:
    """
    Load configuration.

    Resolution order:
        1. Explicit *path* argument
        2. XCASH_CONFIG env var
        3. ./config.toml in current directory
        4. Defaults (with env overrides)
    """
    if path is None:
        path = os.environ.get("XCASH_CONFIG", "config.toml")

    return XCashConfig.from_file(path)
