# tests/test_store.py
"""Unit tests for the keyed store backends."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from citygrid.database import create_tables
from citygrid.services.records import (
    ASSETS, DEVICES, POWER_ALLOCATIONS, Asset, AssetType, Device, PowerAllocation,
)
from citygrid.services.store import MemoryStore, SqlStore


def make_asset(asset_id=1, available=10):
    return Asset(asset_id=asset_id, asset_type=AssetType.PARKING, location="Main St",
                 allocation=10, available_units=available, active=True, cost=200)


def make_sql_store():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_tables(bind=engine)
    return SqlStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))


class TestMemoryStore:
    def test_missing_key_is_none(self):
        assert MemoryStore().get(ASSETS, 1) is None

    def test_transaction_commits_on_exit(self):
        store = MemoryStore()
        with store.transaction() as txn:
            txn.set(ASSETS, 1, make_asset())
            assert store.get(ASSETS, 1) is None      # staged, not yet visible
        assert store.get(ASSETS, 1) == make_asset()

    def test_exception_discards_all_writes(self):
        store = MemoryStore()
        store.set(ASSETS, 1, make_asset())

        with pytest.raises(RuntimeError):
            with store.transaction() as txn:
                txn.update(ASSETS, 1, available_units=3)
                txn.set(ASSETS, 2, make_asset(2))
                raise RuntimeError("boom")

        assert store.get(ASSETS, 1).available_units == 10
        assert store.get(ASSETS, 2) is None

    def test_transaction_reads_its_own_writes(self):
        store = MemoryStore()
        with store.transaction() as txn:
            txn.set(ASSETS, 1, make_asset())
            updated = txn.update(ASSETS, 1, available_units=7)
            assert txn.get(ASSETS, 1) is updated
        assert store.get(ASSETS, 1).available_units == 7

    def test_update_of_missing_record_raises(self):
        store = MemoryStore()
        with pytest.raises(KeyError):
            with store.transaction() as txn:
                txn.update(ASSETS, 99, available_units=1)

    def test_compare_and_swap(self):
        store = MemoryStore()
        original = make_asset()
        store.set(ASSETS, 1, original)

        assert store.compare_and_swap(ASSETS, 1, make_asset(available=5), make_asset(available=4)) is False
        assert store.get(ASSETS, 1) == original
        assert store.compare_and_swap(ASSETS, 1, original, make_asset(available=4)) is True
        assert store.get(ASSETS, 1).available_units == 4


class TestSqlStore:
    def test_asset_round_trip_keeps_enum(self):
        store = make_sql_store()
        store.set(ASSETS, 1, make_asset())

        loaded = store.get(ASSETS, 1)
        assert loaded == make_asset()
        assert loaded.asset_type is AssetType.PARKING

    def test_composite_key_power_allocation(self):
        store = make_sql_store()
        store.set(POWER_ALLOCATIONS, (3, "alice"), PowerAllocation(3, "alice", 50, 0, 12))
        store.set(POWER_ALLOCATIONS, (3, "bob"), PowerAllocation(3, "bob", 20, 5, 13))

        assert store.get(POWER_ALLOCATIONS, (3, "alice")).reserved == 50
        assert store.get(POWER_ALLOCATIONS, (3, "bob")).consumed == 5
        assert store.get(POWER_ALLOCATIONS, (4, "alice")) is None

    def test_merge_update_overwrites_row(self):
        store = make_sql_store()
        device = Device(owner="s1", label="bin", device_type=AssetType.WASTE, asset_id=1,
                        active=True, last_heartbeat=1, authorized=True)
        store.set(DEVICES, "s1", device)

        with store.transaction() as txn:
            txn.update(DEVICES, "s1", active=False, authorized=False)

        loaded = store.get(DEVICES, "s1")
        assert loaded.active is False
        assert loaded.authorized is False
        assert loaded.label == "bin"

    def test_exception_rolls_back(self):
        store = make_sql_store()
        store.set(ASSETS, 1, make_asset())

        with pytest.raises(ValueError):
            with store.transaction() as txn:
                txn.update(ASSETS, 1, available_units=0)
                raise ValueError("abort")

        assert store.get(ASSETS, 1).available_units == 10

    def test_ping(self):
        assert make_sql_store().ping() is True
