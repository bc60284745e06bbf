# citygrid/services/store.py
"""
Keyed record store.

Every piece of city state lives here as an immutable record addressed by
(table, key). Reads are single-key snapshot lookups. Writes only happen
through a transaction: changes are staged, then committed together when the
block exits cleanly, or dropped if it raises. A transaction holds the store
lock for its whole lifetime, so state-changing operations never interleave.

Two backends:
  - MemoryStore — plain dicts, used for tests and STORE_BACKEND=memory
  - SqlStore    — SQLAlchemy rows, one table per record kind
"""

import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import asdict, fields, replace
from typing import Any, Callable, Dict, Hashable, Iterator, Optional, Tuple

from citygrid.services.records import (
    ASSETS, COUNTERS, DEVICES, PARKING_SLOTS, POWER_ALLOCATIONS, WASTE_CONTAINERS,
    Asset, Counter, Device, ParkingSlot, PowerAllocation, WasteContainer,
)
from citygrid.utils.logger import get_logger

logger = get_logger(__name__)

Reader = Callable[[str, Hashable], Optional[Any]]


class Transaction:
    """Staged view over a store. Reads see this transaction's own pending writes."""

    def __init__(self, reader: Reader):
        self._read = reader
        self._writes: Dict[Tuple[str, Hashable], Any] = {}

    def get(self, table: str, key: Hashable) -> Optional[Any]:
        if (table, key) in self._writes:
            return self._writes[(table, key)]
        return self._read(table, key)

    def set(self, table: str, key: Hashable, record: Any) -> None:
        self._writes[(table, key)] = record

    def update(self, table: str, key: Hashable, **changes) -> Any:
        """Merge-update: copy the current record with the given fields changed."""
        current = self.get(table, key)
        if current is None:
            raise KeyError(f"{table}[{key!r}] does not exist")
        updated = replace(current, **changes)
        self.set(table, key, updated)
        return updated

    @property
    def writes(self) -> Dict[Tuple[str, Hashable], Any]:
        return dict(self._writes)


class KeyedStore(ABC):

    @abstractmethod
    def get(self, table: str, key: Hashable) -> Optional[Any]:
        """Single-key read. Never blocks on an open transaction."""

    @abstractmethod
    def transaction(self) -> Iterator[Transaction]:
        """Context manager yielding a Transaction; commits on clean exit."""

    def set(self, table: str, key: Hashable, record: Any) -> None:
        with self.transaction() as txn:
            txn.set(table, key, record)

    def compare_and_swap(self, table: str, key: Hashable, expected: Any, new: Any) -> bool:
        with self.transaction() as txn:
            if txn.get(table, key) != expected:
                return False
            txn.set(table, key, new)
            return True

    def ping(self) -> bool:
        return True


class MemoryStore(KeyedStore):

    def __init__(self):
        self._tables: Dict[str, Dict[Hashable, Any]] = defaultdict(dict)
        self._lock = threading.RLock()

    def get(self, table, key):
        rows = self._tables.get(table)
        return rows.get(key) if rows is not None else None

    @contextmanager
    def transaction(self):
        with self._lock:
            txn = Transaction(self.get)
            yield txn
            writes = txn.writes
            for (table, key), record in writes.items():
                self._tables[table][key] = record
            if writes:
                logger.debug(f"Committed {len(writes)} record(s)")


def _row_models() -> Dict[str, Tuple[type, type]]:
    from citygrid.models.asset import AssetRow
    from citygrid.models.parking_slot import ParkingSlotRow
    from citygrid.models.waste_container import WasteContainerRow
    from citygrid.models.power_allocation import PowerAllocationRow
    from citygrid.models.device import DeviceRow
    from citygrid.models.counter import CounterRow

    return {
        ASSETS: (Asset, AssetRow),
        PARKING_SLOTS: (ParkingSlot, ParkingSlotRow),
        WASTE_CONTAINERS: (WasteContainer, WasteContainerRow),
        POWER_ALLOCATIONS: (PowerAllocation, PowerAllocationRow),
        DEVICES: (Device, DeviceRow),
        COUNTERS: (Counter, CounterRow),
    }


class SqlStore(KeyedStore):
    """
    KeyedStore over SQLAlchemy. Record fields map 1:1 onto row columns and the
    store key is the row's primary key (a tuple for composite keys).
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory
        self._lock = threading.RLock()
        self._models = _row_models()

    def _load(self, db, table, key):
        record_cls, row_cls = self._models[table]
        row = db.get(row_cls, key)
        if row is None:
            return None
        return record_cls(**{f.name: getattr(row, f.name) for f in fields(record_cls)})

    def _to_row(self, table, record):
        _, row_cls = self._models[table]
        return row_cls(**asdict(record))

    def get(self, table, key):
        db = self._session_factory()
        try:
            return self._load(db, table, key)
        finally:
            db.close()

    @contextmanager
    def transaction(self):
        with self._lock:
            db = self._session_factory()
            try:
                txn = Transaction(lambda table, key: self._load(db, table, key))
                yield txn
                writes = txn.writes
                for (table, _), record in writes.items():
                    db.merge(self._to_row(table, record))
                db.commit()
                if writes:
                    logger.debug(f"Committed {len(writes)} row(s)")
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def ping(self) -> bool:
        from sqlalchemy import text

        db = self._session_factory()
        try:
            db.execute(text("SELECT 1"))
            return True
        finally:
            db.close()
