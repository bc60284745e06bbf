# tests/test_waste_service.py
"""Unit tests for sensor-reported waste levels."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging
import pytest
from citygrid.errors import CityError, ErrorCode
from citygrid.services.asset_registry import register_resource
from citygrid.services.device_service import deactivate_device, register_device
from citygrid.services.governance import Governance
from citygrid.services.ledger import InMemoryLedger
from citygrid.services.records import WASTE_CONTAINERS
from citygrid.services.runtime import CallContext, Runtime
from citygrid.services.store import MemoryStore
from citygrid.services.waste_service import get_waste_status, update_waste_level

ADMIN = "city-admin"
SENSOR = "sensor-bin-1"


def make_runtime(height=50):
    """Runtime with one WASTE asset (#1) watched by SENSOR, and one PARKING asset (#2)."""
    rt = Runtime(
        store=MemoryStore(),
        ledger=InMemoryLedger(height=height),
        governance=Governance(ADMIN, power_rate=10, min_parking_fee=1000),
    )
    admin = CallContext(ADMIN, 1)
    register_resource(rt, admin, "WASTE", "Market square", 1, 1)
    register_resource(rt, admin, "PARKING", "Main St lot", 10, 200)
    register_device(rt, admin, SENSOR, "bin-sensor", "WASTE", 1)
    return rt


def snapshot(store):
    return {table: dict(rows) for table, rows in store._tables.items()}


class TestUpdateWasteLevel:
    def test_level_above_threshold_flags_maintenance(self):
        rt = make_runtime()
        update_waste_level(rt, rt.context(SENSOR), 1, 85)

        container = get_waste_status(rt.store, 1)
        assert container.fill_level == 85
        assert container.requires_maintenance is True
        assert container.last_serviced == 50

    def test_returns_the_container_it_wrote(self):
        rt = make_runtime()
        written = update_waste_level(rt, rt.context(SENSOR), 1, 85)
        update_waste_level(rt, rt.context(SENSOR), 1, 10)

        assert written.fill_level == 85
        assert written.requires_maintenance is True
        assert get_waste_status(rt.store, 1).fill_level == 10

    def test_exactly_eighty_is_not_maintenance(self):
        rt = make_runtime()
        update_waste_level(rt, rt.context(SENSOR), 1, 85)
        update_waste_level(rt, rt.context(SENSOR), 1, 80)

        container = get_waste_status(rt.store, 1)
        assert container.fill_level == 80
        assert container.requires_maintenance is False

    def test_maintenance_alert_logged_once_on_crossing(self, caplog):
        rt = make_runtime()
        with caplog.at_level(logging.WARNING):
            update_waste_level(rt, rt.context(SENSOR), 1, 90)
            update_waste_level(rt, rt.context(SENSOR), 1, 95)
        assert caplog.text.count("[ALERT][MAINTENANCE]") == 1

    @pytest.mark.parametrize("level", [-1, 101])
    def test_out_of_range_level(self, level):
        rt = make_runtime()
        before = snapshot(rt.store)
        with pytest.raises(CityError) as exc:
            update_waste_level(rt, rt.context(SENSOR), 1, level)
        assert exc.value.code == ErrorCode.BAD_PARAMS
        assert snapshot(rt.store) == before

    def test_unknown_asset(self):
        rt = make_runtime()
        with pytest.raises(CityError) as exc:
            update_waste_level(rt, rt.context(SENSOR), 99, 10)
        assert exc.value.code == ErrorCode.INVALID_ASSET

    def test_asset_without_container_is_not_auto_created(self):
        rt = make_runtime()
        with pytest.raises(CityError) as exc:
            update_waste_level(rt, rt.context(SENSOR), 2, 10)
        assert exc.value.code == ErrorCode.INVALID_ASSET
        assert rt.store.get(WASTE_CONTAINERS, 2) is None


class TestWasteAuthorization:
    def test_unregistered_caller_is_unauthorized(self):
        rt = make_runtime()
        with pytest.raises(CityError) as exc:
            update_waste_level(rt, rt.context("stranger"), 1, 10)
        assert exc.value.code == ErrorCode.UNAUTHORIZED

    def test_admin_is_not_a_sensor(self):
        rt = make_runtime()
        with pytest.raises(CityError) as exc:
            update_waste_level(rt, rt.context(ADMIN), 1, 10)
        assert exc.value.code == ErrorCode.UNAUTHORIZED

    @pytest.mark.parametrize("level", [0, 50, 100, 101, -5])
    def test_deactivated_sensor_always_unauthorized(self, level):
        rt = make_runtime()
        deactivate_device(rt, CallContext(ADMIN, 2), SENSOR)
        before = snapshot(rt.store)

        with pytest.raises(CityError) as exc:
            update_waste_level(rt, rt.context(SENSOR), 1, level)

        assert exc.value.code == ErrorCode.UNAUTHORIZED
        assert snapshot(rt.store) == before
