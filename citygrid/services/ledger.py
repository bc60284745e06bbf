# citygrid/services/ledger.py
"""
Value-transfer and height substrate.

In production this is the settlement layer that moves funds between accounts
and advances the height counter. InMemoryLedger is the stand-in used for
local runs and tests: balances in a dict, height advanced explicitly.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict

from citygrid.errors import CityError, ErrorCode
from citygrid.utils.logger import get_logger

logger = get_logger(__name__)


class LedgerError(Exception):
    """Transfer refused by the ledger."""


class InsufficientFunds(LedgerError):
    def __init__(self, account: str, balance: int, amount: int):
        self.account = account
        self.balance = balance
        self.amount = amount
        super().__init__(f"{account} has {balance}, needs {amount}")


class Ledger(ABC):

    @abstractmethod
    def current_height(self) -> int:
        ...

    @abstractmethod
    def transfer(self, amount: int, sender: str, recipient: str) -> None:
        """Move `amount` from sender to recipient or raise LedgerError."""


class InMemoryLedger(Ledger):

    def __init__(self, balances: Dict[str, int] = None, height: int = 0):
        self._balances: Dict[str, int] = dict(balances or {})
        self._height = height
        self._lock = threading.Lock()

    def current_height(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        if blocks < 1:
            raise ValueError("height only moves forward")
        with self._lock:
            self._height += blocks
            return self._height

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def credit(self, account: str, amount: int) -> int:
        if amount <= 0:
            raise LedgerError("credit amount must be positive")
        with self._lock:
            self._balances[account] = self._balances.get(account, 0) + amount
            return self._balances[account]

    def transfer(self, amount, sender, recipient):
        if amount <= 0:
            raise LedgerError("transfer amount must be positive")
        with self._lock:
            balance = self._balances.get(sender, 0)
            if balance < amount:
                raise InsufficientFunds(sender, balance, amount)
            self._balances[sender] = balance - amount
            self._balances[recipient] = self._balances.get(recipient, 0) + amount
        logger.debug(f"[LEDGER] {sender} → {recipient}: {amount}")


def collect_payment(ledger: Ledger, amount: int, payer: str, payee: str):
    """Charge `payer`. Any ledger refusal surfaces as TRANSFER_FAILED."""
    try:
        ledger.transfer(amount, payer, payee)
    except LedgerError as exc:
        logger.warning(f"[LEDGER] Transfer of {amount} from {payer} refused: {exc}")
        raise CityError(ErrorCode.TRANSFER_FAILED, str(exc)) from exc


def refund_payment(ledger: Ledger, amount: int, payer: str, payee: str):
    """Send a collected payment back when the state change it paid for did not commit."""
    try:
        ledger.transfer(amount, payee, payer)
    except LedgerError as exc:
        logger.error(f"[LEDGER] Refund of {amount} to {payer} failed, settle by hand: {exc}")
        return
    logger.warning(f"[LEDGER] Refunded {amount} to {payer} after a failed commit")
