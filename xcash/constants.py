"""
X-Cash Token Constants

Protocol constants of the token, plus the logging settings that may be
overridden from a local `.env` file.
"""
from dotenv import dotenv_values

# =============================================================================
# LOGGING (overridable from .env)
# =============================================================================
_env = dotenv_values(".env")


def _env_str(key: str, default: str) -> str:
    value = _env.get(key)
    return default if value is None or not value.strip() else value.strip()


def _env_flag(key: str, default: bool) -> bool:
    value = _env.get(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

LOG_LEVEL = _env_str("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = _env_str("LOG_FORMAT", DEFAULT_LOG_FORMAT)
LOG_DATE_FORMAT = _env_str("LOG_DATE_FORMAT", "%Y-%m-%dT%H:%M:%S")
LOG_CONSOLE_HIGHLIGHTING = _env_flag("LOG_CONSOLE_HIGHLIGHTING", True)
LOG_FILE_OUTPUT = _env_flag("LOG_FILE_OUTPUT", False)

LOG_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 5


# WARNING: THE TOKEN PARAMETERS BELOW ARE FIXED AT DEPLOYMENT. CHANGING THEM PRODUCES A
# DIFFERENT TOKEN; USE config.toml FOR TEST DEPLOYMENTS INSTEAD OF EDITING THIS FILE.

# ==================================================================================
# ARITHMETIC
# ==================================================================================
U256_MAX = 2 ** 256 - 1  # Largest representable balance, allowance or supply


# ==================================================================================
# ACCOUNTS
# ==================================================================================
# Reserved "no account" identity: source of minted and sink of burned supply
ZERO_ADDRESS = '0x' + '0' * 40
ADDRESS_LENGTH = 20  # bytes


# ==================================================================================
# TOKEN PARAMETERS
# ==================================================================================
TOKEN_NAME = 'X-Cash'
TOKEN_SYMBOL = 'XCASH'
TOKEN_DECIMALS = 18  # Display scaling only, never enforced by the ledger
TOKEN_CAP = 100_000_000_000 * 10 ** TOKEN_DECIMALS  # 100 billion XCASH in base units


# ==================================================================================
# DEPLOYMENT
# ==================================================================================
DEFAULT_NETWORK = 'development'
QUIET_NETWORKS = ('test',)  # Networks on which the deployment summary is not printed


