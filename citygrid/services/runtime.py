# citygrid/services/runtime.py
"""
Wiring for the transition engine: store + ledger + governance.
Operations take the Runtime plus an explicit CallContext (who is calling,
at which height) — nothing is read from ambient global state.
"""

from dataclasses import dataclass

from citygrid.services.governance import Governance
from citygrid.services.ledger import InMemoryLedger, Ledger
from citygrid.services.store import KeyedStore, MemoryStore, SqlStore
from citygrid.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CallContext:
    caller: str
    height: int


@dataclass
class Runtime:
    store: KeyedStore
    ledger: Ledger
    governance: Governance

    def context(self, caller: str) -> CallContext:
        return CallContext(caller=caller, height=self.ledger.current_height())


def build_runtime(settings) -> Runtime:
    """Build the runtime the API serves, choosing the store backend from settings."""
    backend = settings.STORE_BACKEND.lower()
    if backend == "memory":
        store = MemoryStore()
    elif backend == "sql":
        from citygrid.database import SessionLocal, create_tables

        create_tables()
        store = SqlStore(SessionLocal)
    else:
        raise ValueError(f"Unknown STORE_BACKEND '{settings.STORE_BACKEND}' (expected sql or memory)")

    logger.info(f"Store backend: {backend}")
    return Runtime(store=store, ledger=InMemoryLedger(), governance=Governance.from_settings(settings))
