# tests/test_api.py
"""End-to-end tests of the HTTP surface on an in-memory runtime."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient
from citygrid.config import settings
from citygrid.main import app
from citygrid.services.governance import Governance
from citygrid.services.ledger import InMemoryLedger
from citygrid.services.runtime import Runtime
from citygrid.services.store import MemoryStore

ADMIN = "city-admin"
CITIZEN = "citizen-1"
SENSOR = "sensor-bin-1"


def as_(caller):
    return {"X-Caller-Identity": caller}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(settings, "ENABLE_DEV_LEDGER", True)
    app.state.runtime = Runtime(
        store=MemoryStore(),
        ledger=InMemoryLedger({CITIZEN: 5_000}, height=100),
        governance=Governance(ADMIN, power_rate=10, min_parking_fee=1000),
    )
    yield TestClient(app)
    app.state.runtime = None


def register(client, asset_type, allocation=20, cost=200):
    resp = client.post("/api/v1/assets", headers=as_(ADMIN), json={
        "asset_type": asset_type, "location": "Main St", "allocation": allocation, "cost": cost,
    })
    assert resp.status_code == 201
    return resp.json()["asset_id"]


class TestAssetsApi:
    def test_register_and_read(self, client):
        asset_id = register(client, "PARKING")
        resp = client.get(f"/api/v1/assets/{asset_id}")
        assert resp.status_code == 200
        assert resp.json()["asset_type"] == "PARKING"
        assert resp.json()["available_units"] == 20

    def test_non_admin_gets_typed_error(self, client):
        resp = client.post("/api/v1/assets", headers=as_(CITIZEN), json={
            "asset_type": "PARKING", "location": "Main St", "allocation": 20, "cost": 200,
        })
        assert resp.status_code == 403
        assert resp.json()["error"] == "UNAUTHORIZED"
        assert resp.json()["code"] == 100

    def test_missing_caller_header(self, client):
        resp = client.post("/api/v1/assets", json={
            "asset_type": "PARKING", "location": "Main St", "allocation": 20, "cost": 200,
        })
        assert resp.status_code == 422

    def test_unknown_asset_is_404(self, client):
        assert client.get("/api/v1/assets/42").status_code == 404


class TestParkingApi:
    def test_reserve_and_status(self, client):
        lot = register(client, "PARKING")
        resp = client.post(f"/api/v1/parking/{lot}/reserve", headers=as_(CITIZEN),
                           json={"vehicle_id": "V1", "duration": 5})
        assert resp.status_code == 200
        assert resp.json()["expiration_height"] == 105

        status = client.get(f"/api/v1/parking/{lot}").json()
        assert status["occupied"] is True
        assert status["is_expired"] is False

        client.post("/api/v1/ledger/advance", headers=as_(ADMIN), params={"blocks": 6})
        assert client.get(f"/api/v1/parking/{lot}").json()["is_expired"] is True

    def test_fee_below_floor(self, client):
        lot = register(client, "PARKING")
        resp = client.post(f"/api/v1/parking/{lot}/reserve", headers=as_(CITIZEN),
                           json={"vehicle_id": "V1", "duration": 4})
        assert resp.status_code == 402
        assert resp.json()["error"] == "LOW_BALANCE"


class TestSensorApi:
    def test_waste_report_flow(self, client):
        bin_id = register(client, "WASTE", allocation=1, cost=1)
        resp = client.post("/api/v1/devices", headers=as_(ADMIN), json={
            "device_identity": SENSOR, "device_label": "bin-sensor", "device_type": "WASTE", "asset_id": bin_id,
        })
        assert resp.status_code == 201

        resp = client.put(f"/api/v1/waste/{bin_id}/level", headers=as_(SENSOR), json={"level": 80})
        assert resp.json()["requires_maintenance"] is False

        resp = client.put(f"/api/v1/waste/{bin_id}/level", headers=as_(SENSOR), json={"level": 85})
        assert resp.status_code == 200
        assert resp.json()["requires_maintenance"] is True

        client.post(f"/api/v1/devices/{SENSOR}/deactivate", headers=as_(ADMIN))
        resp = client.put(f"/api/v1/waste/{bin_id}/level", headers=as_(SENSOR), json={"level": 10})
        assert resp.status_code == 403

        assert client.post("/api/v1/devices/heartbeat", headers=as_(SENSOR)).status_code == 200
        device = client.get(f"/api/v1/devices/{SENSOR}").json()
        assert device["authorized"] is False
        assert device["device_type"] == "WASTE"

    def test_heartbeat_from_unknown_device(self, client):
        resp = client.post("/api/v1/devices/heartbeat", headers=as_("ghost"))
        assert resp.status_code == 404
        assert resp.json()["error"] == "SENSOR_NOT_FOUND"


class TestPowerAndGovernanceApi:
    def test_allocate_and_read(self, client):
        substation = register(client, "POWER", allocation=500, cost=1)
        resp = client.post(f"/api/v1/power/{substation}/allocate", headers=as_(CITIZEN), json={"amount": 40})
        assert resp.status_code == 200

        allocation = client.get(f"/api/v1/power/{substation}/{CITIZEN}").json()
        assert allocation["reserved"] == 40
        assert client.get(f"/api/v1/ledger/balances/{CITIZEN}").json()["balance"] == 4_600

    def test_power_rate_update(self, client):
        resp = client.put("/api/v1/governance/power-rate", headers=as_(ADMIN), json={"value": 3})
        assert resp.status_code == 200
        assert client.get("/api/v1/governance").json()["power_rate"] == 3

    def test_health(self, client):
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert body["height"] == 100


class TestDevLedgerApi:
    def test_faucet_and_advance_off_when_disabled(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ENABLE_DEV_LEDGER", False)

        resp = client.post("/api/v1/ledger/credit", headers=as_(ADMIN), json={"account": CITIZEN, "amount": 1})
        assert resp.status_code == 404
        assert client.post("/api/v1/ledger/advance", headers=as_(ADMIN)).status_code == 404
        assert client.get(f"/api/v1/ledger/balances/{CITIZEN}").json()["balance"] == 5_000
        assert client.get("/api/v1/ledger/height").json()["height"] == 100

    def test_faucet_is_admin_only_when_enabled(self, client):
        resp = client.post("/api/v1/ledger/credit", headers=as_(CITIZEN), json={"account": CITIZEN, "amount": 1})
        assert resp.status_code == 403

        resp = client.post("/api/v1/ledger/credit", headers=as_(ADMIN), json={"account": CITIZEN, "amount": 1})
        assert resp.status_code == 200
        assert resp.json()["balance"] == 5_001

    def test_overlong_duration_is_rejected_without_charge(self, client):
        lot = register(client, "PARKING", cost=1)
        resp = client.post(f"/api/v1/parking/{lot}/reserve", headers=as_(CITIZEN),
                           json={"vehicle_id": "V1", "duration": 2 ** 63})
        assert resp.status_code == 400
        assert resp.json()["error"] == "BAD_PARAMS"
        assert client.get(f"/api/v1/ledger/balances/{CITIZEN}").json()["balance"] == 5_000
