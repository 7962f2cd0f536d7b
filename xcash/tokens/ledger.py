"""
X-Cash Token Ledger

Capped, administrator-mintable, burnable fungible token with ERC-20 semantics:
  - balance_of / allowance / total_supply / cap queries
  - transfer, approve, increase_allowance, decrease_allowance, transfer_from
  - mint, burn, burn_from (administrator only)
  - transfer_administration, renounce_administration

Every mutating call takes the caller's identity explicitly; the ledger trusts
it as asserted by the invoking environment. Each call is atomic: all checks
run before any state is touched, and the whole transition happens under one
lock.
"""

import functools
import threading
from collections import deque
from typing import Any, Callable, Dict, List, Tuple

from ..constants import TOKEN_DECIMALS, U256_MAX, ZERO_ADDRESS
from ..crypto.address import normalize_address
from ..exceptions import (
    AllowanceUnderflow,
    CapExceeded,
    InsufficientAllowance,
    InsufficientBalance,
    InvalidCap,
    InvalidRecipient,
    InvalidSender,
    LedgerCorrupted,
    TokenError,
)
from ..logger import get_logger
from .access import require_administrator
from .events import AdministrationTransferred, Approval, Transfer
from .safe_math import require_amount, u256_add, u256_sub

logger = get_logger(__name__)

Event = Any  # Transfer | Approval | AdministrationTransferred
Observer = Callable[[Event], None]


def _logged(operation):
    """Log rejected operations at DEBUG before re-raising."""
    @functools.wraps(operation)
    def wrapper(self, *args, **kwargs):
        try:
            return operation(self, *args, **kwargs)
        except TokenError as e:
            logger.debug(f"{operation.__name__} rejected ({type(e).__name__}): {e}")
            raise
    return wrapper


class TokenLedger:
    """
    X-Cash token ledger.

    Holds balances, allowances, total supply, the immutable supply cap and the
    current administrator. Invariants held in every committed state:

        total_supply == sum(balances)
        total_supply <= cap
        no balance or allowance is negative
    """

    def __init__(
        self,
        name: str,
        symbol: str,
        cap: int,
        deployer: str,
        decimals: int = TOKEN_DECIMALS,
        *,
        initial_supply: int = 0,
    ):
        """
        Args:
            name: Human-readable token name
            symbol: Short ticker (e.g. "XCASH")
            cap: Maximum total supply in base units, fixed for the token's life
            deployer: Creating account; becomes the administrator
            decimals: Display scaling only
            initial_supply: Base units minted to the deployer at creation
        """
        if not name:
            raise TokenError("Token name cannot be empty")
        if not symbol:
            raise TokenError("Token symbol cannot be empty")
        if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= 255:
            raise TokenError(f"Decimals must be 0-255, got {decimals}")
        if isinstance(cap, bool) or not isinstance(cap, int) or cap <= 0:
            raise InvalidCap("ERC20Capped: cap is 0")
        if cap > U256_MAX:
            raise InvalidCap(f"Cap {cap} exceeds the 256-bit range")

        deployer = normalize_address(deployer)
        if deployer == ZERO_ADDRESS:
            raise InvalidSender("Ownable: deployer is the zero address")
        require_amount(initial_supply)
        if initial_supply > cap:
            raise CapExceeded("ERC20Capped: cap exceeded")

        self._name = name
        self._symbol = symbol
        self._decimals = decimals
        self._cap = cap
        self._administrator = deployer
        self.deployer = deployer

        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}  # (owner, spender)
        self._total_supply = 0

        self._events: List[Event] = []
        self._observers: List[Observer] = []
        self._lock = threading.RLock()
        self._pending = deque()  # committed, not yet delivered
        self._delivering = False

        self._events.append(AdministrationTransferred(ZERO_ADDRESS, deployer))
        if initial_supply > 0:
            self._balances[deployer] = initial_supply
            self._total_supply = initial_supply
            self._events.append(Transfer(ZERO_ADDRESS, deployer, initial_supply))

        logger.info(f"Token deployed: {symbol} ({name}), cap={cap}, administrator={deployer}")

    # ── Read-only views ───────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def cap(self) -> int:
        return self._cap

    @property
    def total_supply(self) -> int:
        return self._total_supply

    @property
    def administrator(self) -> str:
        return self._administrator

    # Ownable-style tooling calls the administrator the "owner".
    owner = administrator

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def allowance(self, owner: str, spender: str) -> int:
        key = (normalize_address(owner), normalize_address(spender))
        return self._allowances.get(key, 0)

    @property
    def events(self) -> List[Event]:
        with self._lock:
            return list(self._events)

    def holders(self) -> Dict[str, int]:
        """Accounts with a non-zero balance."""
        with self._lock:
            return {a: b for a, b in self._balances.items() if b > 0}

    # ── Observers ─────────────────────────────────────────────────────

    def subscribe(self, observer: Observer) -> None:
        """Call *observer* with every event emitted from now on."""
        with self._lock:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        with self._lock:
            self._observers = [o for o in self._observers if o != observer]

    def _commit(self, events: List[Event]) -> None:
        # Caller holds the lock.
        self._events.extend(events)
        self._pending.extend(events)

    def _notify(self) -> None:
        """
        Deliver committed events to observers, in commit order.

        Runs after the state lock is released. One thread drains the pending
        queue at a time; a call that finds delivery already in progress leaves
        its events to the draining thread, which also covers operations
        started from inside an observer.
        """
        with self._lock:
            if self._delivering:
                return
            self._delivering = True

        while True:
            with self._lock:
                if not self._pending:
                    self._delivering = False
                    return
                event = self._pending.popleft()
                observers = list(self._observers)
            try:
                for observer in observers:
                    try:
                        observer(event)
                    except Exception as e:
                        logger.error(f"Observer {observer!r} failed on {event.name}: {e}")
            except BaseException:
                with self._lock:
                    self._delivering = False
                raise

    # ── Internal state transitions (caller holds the lock) ────────────

    def _check_transfer(self, sender: str, recipient: str, amount: int) -> None:
        if sender == ZERO_ADDRESS:
            raise InvalidSender("ERC20: transfer from the zero address")
        if recipient == ZERO_ADDRESS:
            raise InvalidRecipient("ERC20: transfer to the zero address")
        balance = self._balances.get(sender, 0)
        if balance < amount:
            raise InsufficientBalance("ERC20: transfer amount exceeds balance")

    def _move(self, sender: str, recipient: str, amount: int) -> Transfer:
        self._balances[sender] = self._balances.get(sender, 0) - amount
        self._balances[recipient] = self._balances.get(recipient, 0) + amount
        return Transfer(sender, recipient, amount)

    @staticmethod
    def _check_approve(owner: str, spender: str) -> None:
        if owner == ZERO_ADDRESS:
            raise InvalidSender("ERC20: approve from the zero address")
        if spender == ZERO_ADDRESS:
            raise InvalidRecipient("ERC20: approve to the zero address")

    def _set_allowance(self, owner: str, spender: str, amount: int) -> Approval:
        self._allowances[(owner, spender)] = amount
        return Approval(owner, spender, amount)

    # ── Core ERC-20 operations ────────────────────────────────────────

    @_logged
    def transfer(self, caller: str, to: str, amount: int) -> List[Event]:
        """Move *amount* from *caller* to *to*."""
        caller, to = normalize_address(caller), normalize_address(to)
        require_amount(amount)

        with self._lock:
            self._check_transfer(caller, to, amount)
            events = [self._move(caller, to, amount)]
            self._commit(events)

        logger.debug(f"Transfer: {caller} → {to} {amount} {self._symbol}")
        self._notify()
        return events

    @_logged
    def approve(self, caller: str, spender: str, amount: int) -> List[Event]:
        """Set the allowance of *spender* over *caller*'s balance to *amount*."""
        caller, spender = normalize_address(caller), normalize_address(spender)
        require_amount(amount)

        with self._lock:
            self._check_approve(caller, spender)
            events = [self._set_allowance(caller, spender, amount)]
            self._commit(events)

        logger.debug(f"Approval: {caller} → {spender} allowance={amount} {self._symbol}")
        self._notify()
        return events

    @_logged
    def increase_allowance(self, caller: str, spender: str, added: int) -> List[Event]:
        caller, spender = normalize_address(caller), normalize_address(spender)
        require_amount(added)

        with self._lock:
            current = self._allowances.get((caller, spender), 0)
            new_allowance = u256_add(current, added)
            self._check_approve(caller, spender)
            events = [self._set_allowance(caller, spender, new_allowance)]
            self._commit(events)

        logger.debug(f"Approval: {caller} → {spender} allowance={new_allowance} {self._symbol}")
        self._notify()
        return events

    @_logged
    def decrease_allowance(self, caller: str, spender: str, subtracted: int) -> List[Event]:
        """
        Lower an allowance by *subtracted*.

        Raises AllowanceUnderflow rather than clamping at zero when
        *subtracted* exceeds the current allowance.
        """
        caller, spender = normalize_address(caller), normalize_address(spender)
        require_amount(subtracted)

        with self._lock:
            current = self._allowances.get((caller, spender), 0)
            new_allowance = u256_sub(
                current, subtracted,
                AllowanceUnderflow, "ERC20: decreased allowance below zero",
            )
            self._check_approve(caller, spender)
            events = [self._set_allowance(caller, spender, new_allowance)]
            self._commit(events)

        logger.debug(f"Approval: {caller} → {spender} allowance={new_allowance} {self._symbol}")
        self._notify()
        return events

    @_logged
    def transfer_from(self, caller: str, owner: str, to: str, amount: int) -> List[Event]:
        """Move *amount* from *owner* to *to* using *caller*'s allowance."""
        caller, owner, to = (
            normalize_address(caller), normalize_address(owner), normalize_address(to)
        )
        require_amount(amount)

        with self._lock:
            self._check_transfer(owner, to, amount)
            current = self._allowances.get((owner, caller), 0)
            remaining = u256_sub(
                current, amount,
                InsufficientAllowance, "ERC20: transfer amount exceeds allowance",
            )
            events = [
                self._move(owner, to, amount),
                self._set_allowance(owner, caller, remaining),
            ]
            self._commit(events)

        logger.debug(
            f"transferFrom: spender={caller} {owner} → {to} {amount} {self._symbol}"
        )
        self._notify()
        return events

    # ── Supply control (administrator only) ───────────────────────────

    @_logged
    def mint(self, caller: str, to: str, amount: int) -> List[Event]:
        """Create *amount* new tokens for *to*, bounded by the cap."""
        caller, to = normalize_address(caller), normalize_address(to)
        require_amount(amount)

        with self._lock:
            require_administrator(self._administrator, caller)
            if to == ZERO_ADDRESS:
                raise InvalidRecipient("ERC20: mint to the zero address")
            new_supply = u256_add(self._total_supply, amount)
            if new_supply > self._cap:
                raise CapExceeded("ERC20Capped: cap exceeded")

            self._total_supply = new_supply
            self._balances[to] = self._balances.get(to, 0) + amount
            events = [Transfer(ZERO_ADDRESS, to, amount)]
            self._commit(events)

        logger.info(f"Mint: {amount} {self._symbol} → {to} (supply={new_supply})")
        self._notify()
        return events

    def _burn(self, account: str, amount: int) -> Transfer:
        self._balances[account] -= amount
        self._total_supply -= amount
        return Transfer(account, ZERO_ADDRESS, amount)

    @_logged
    def burn(self, caller: str, amount: int) -> List[Event]:
        """Destroy *amount* of the administrator's own tokens."""
        caller = normalize_address(caller)
        require_amount(amount)

        with self._lock:
            require_administrator(self._administrator, caller)
            if self._balances.get(caller, 0) < amount:
                raise InsufficientBalance("ERC20: burn amount exceeds balance")
            self._balances.setdefault(caller, 0)
            events = [self._burn(caller, amount)]
            self._commit(events)

        logger.info(f"Burn: {caller} burned {amount} {self._symbol}")
        self._notify()
        return events

    @_logged
    def burn_from(self, caller: str, owner: str, amount: int) -> List[Event]:
        """
        Destroy *amount* of *owner*'s tokens.

        Only the administrator may call this, and only within the allowance
        *owner* has granted the administrator.
        """
        caller, owner = normalize_address(caller), normalize_address(owner)
        require_amount(amount)

        with self._lock:
            require_administrator(self._administrator, caller)
            if owner == ZERO_ADDRESS:
                raise InvalidSender("ERC20: burn from the zero address")
            if self._balances.get(owner, 0) < amount:
                raise InsufficientBalance("ERC20: burn amount exceeds balance")
            remaining = u256_sub(
                self._allowances.get((owner, caller), 0), amount,
                InsufficientAllowance, "ERC20: burn amount exceeds allowance",
            )
            self._balances.setdefault(owner, 0)
            events = [
                self._set_allowance(owner, caller, remaining),
                self._burn(owner, amount),
            ]
            self._commit(events)

        logger.info(f"BurnFrom: {caller} burned {amount} {self._symbol} of {owner}")
        self._notify()
        return events

    # ── Administration ────────────────────────────────────────────────

    @_logged
    def transfer_administration(self, caller: str, new_admin: str) -> List[Event]:
        caller, new_admin = normalize_address(caller), normalize_address(new_admin)

        with self._lock:
            require_administrator(self._administrator, caller)
            if new_admin == ZERO_ADDRESS:
                raise InvalidRecipient("Ownable: new owner is the zero address")
            self._administrator = new_admin
            events = [AdministrationTransferred(caller, new_admin)]
            self._commit(events)

        logger.info(f"Administration transferred: {caller} → {new_admin}")
        self._notify()
        return events

    @_logged
    def renounce_administration(self, caller: str) -> List[Event]:
        """Leave the token without an administrator. Irreversible."""
        caller = normalize_address(caller)

        with self._lock:
            require_administrator(self._administrator, caller)
            self._administrator = ZERO_ADDRESS
            events = [AdministrationTransferred(caller, ZERO_ADDRESS)]
            self._commit(events)

        logger.warning(f"Administration renounced by {caller}; {self._symbol} supply is now fixed")
        self._notify()
        return events

    # ── Diagnostics ───────────────────────────────────────────────────

    def check_invariants(self) -> None:
        """Raise LedgerCorrupted if any supply or sign invariant is broken."""
        with self._lock:
            if any(b < 0 for b in self._balances.values()):
                raise LedgerCorrupted("Negative balance")
            if any(a < 0 for a in self._allowances.values()):
                raise LedgerCorrupted("Negative allowance")
            held = sum(self._balances.values())
            if held != self._total_supply:
                raise LedgerCorrupted(
                    f"Total supply {self._total_supply} != sum of balances {held}"
                )
            if self._total_supply > self._cap:
                raise LedgerCorrupted(f"Total supply {self._total_supply} exceeds cap {self._cap}")

    # ── Serialization ─────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "name": self._name,
                "symbol": self._symbol,
                "decimals": self._decimals,
                "cap": str(self._cap),
                "totalSupply": str(self._total_supply),
                "owner": self._administrator,
                "deployer": self.deployer,
                "holders": len([b for b in self._balances.values() if b > 0]),
            }

    def __repr__(self) -> str:
        return f"<TokenLedger {self._symbol} supply={self._total_supply} cap={self._cap}>"
