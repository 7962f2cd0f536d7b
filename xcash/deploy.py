"""
X-Cash Deployment

Bootstraps the token ledger once from configuration and renders the summary
block printed after deployment:

    | Token | -------------------------------------------------
    |      Address: 0x...
    |     Deployer: 0x...
    |        Owner: 0x...
    ...
"""

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Optional

from .config import XCashConfig
from .constants import QUIET_NETWORKS
from .crypto.address import generate_contract_address, normalize_address
from .logger import get_logger
from .tokens.ledger import TokenLedger

logger = get_logger(__name__)


@dataclass
class Deployment:
    """A deployed ledger together with where and by whom it was deployed."""
    token: TokenLedger
    address: str
    deployer: str
    network: str
    nonce: int = 0


def format_units(value: int, decimals: int) -> str:
    """Scale a base-unit amount for display, e.g. 10**18 with 18 decimals → "1"."""
    with localcontext() as ctx:
        ctx.prec = 200
        scaled = Decimal(value).scaleb(-decimals)
        text = format(scaled, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def deploy_token(
    deployer: str,
    config: Optional[XCashConfig] = None,
    *,
    nonce: Optional[int] = None,
    network: Optional[str] = None,
) -> Deployment:
    """
    Construct the token ledger with *deployer* as administrator.

    Args:
        deployer: Deploying account; becomes the administrator
        config: Token/deploy configuration (defaults: X-Cash, XCASH, 18, 100bn cap)
        nonce: Deployer nonce used to derive the address (overrides config)
        network: Network name (overrides config)
    """
    config = config or XCashConfig()
    config.validate()

    deployer = normalize_address(deployer)
    nonce = config.deploy.nonce if nonce is None else nonce
    network = network or config.deploy.network

    token = TokenLedger(
        name=config.token.name,
        symbol=config.token.symbol,
        cap=config.token.cap,
        deployer=deployer,
        decimals=config.token.decimals,
        initial_supply=config.token.initial_supply,
    )
    address = generate_contract_address(deployer, nonce)

    logger.info(f"Deployed {token.symbol} at {address} on {network} (deployer={deployer})")
    return Deployment(token=token, address=address, deployer=deployer, network=network, nonce=nonce)


def should_announce(network: str) -> bool:
    """The summary block is suppressed on test networks."""
    return network not in QUIET_NETWORKS


def format_deployment(deployment: Deployment) -> str:
    token = deployment.token
    lines = [
        "| Token | -------------------------------------------------",
        f"|      Address: {deployment.address}",
        f"|     Deployer: {deployment.deployer}",
        f"|        Owner: {token.owner}",
        f"|         Name: {token.name}",
        f"|       Symbol: {token.symbol}",
        f"|     Decimals: {token.decimals}",
        f"|          Cap: {format_units(token.cap, token.decimals)}",
        f"| Total supply: {format_units(token.total_supply, token.decimals)}",
        "|----------------------------------------------------------",
    ]
    return "\n".join(lines)
