# citygrid/services/device_service.py
"""
IoT sensor lifecycle: register, deactivate, heartbeat.

Registration and deactivation are admin-only. A heartbeat comes from the
device identity itself and only refreshes last_heartbeat — it never
re-authorizes a deactivated device.
"""

from dataclasses import replace
from typing import Optional

from citygrid.errors import CityError, ErrorCode
from citygrid.services.guard import require_admin
from citygrid.services.records import ASSETS, DEVICES, AssetType, Device
from citygrid.services.runtime import CallContext, Runtime
from citygrid.utils.logger import get_logger

logger = get_logger(__name__)


def register_device(runtime: Runtime, ctx: CallContext, device_identity: str, device_label: str,
                    device_type, asset_id: int):
    gov = runtime.governance
    require_admin(gov, ctx.caller)
    if not device_identity or len(device_identity) > gov.limits.max_identity_length:
        raise CityError(ErrorCode.BAD_SENSOR, "device identity is empty or too long")
    if not device_label or len(device_label) > gov.limits.max_device_label_length:
        raise CityError(ErrorCode.BAD_SENSOR, "device label is empty or too long")

    with runtime.store.transaction() as txn:
        if txn.get(ASSETS, asset_id) is None:
            raise CityError(ErrorCode.INVALID_ASSET, f"no asset #{asset_id}")
        kind = AssetType.parse(device_type)
        if kind is None:
            raise CityError(ErrorCode.BAD_SENSOR, f"unknown device type {device_type!r}")

        txn.set(DEVICES, device_identity, Device(
            owner=device_identity,
            label=device_label,
            device_type=kind,
            asset_id=asset_id,
            active=True,
            last_heartbeat=ctx.height,
            authorized=True,
        ))

    logger.info(f"[DEVICE] Registered {kind.value} sensor '{device_label}' ({device_identity}) on asset #{asset_id}")


def deactivate_device(runtime: Runtime, ctx: CallContext, device_identity: str):
    require_admin(runtime.governance, ctx.caller)

    with runtime.store.transaction() as txn:
        device = txn.get(DEVICES, device_identity)
        if device is None:
            raise CityError(ErrorCode.SENSOR_NOT_FOUND, f"no device for {device_identity}")
        txn.set(DEVICES, device_identity, replace(device, active=False, authorized=False))

    logger.warning(f"[DEVICE] Deactivated {device_identity}")


def update_device_heartbeat(runtime: Runtime, ctx: CallContext):
    with runtime.store.transaction() as txn:
        device = txn.get(DEVICES, ctx.caller)
        if device is None:
            raise CityError(ErrorCode.SENSOR_NOT_FOUND, f"no device for {ctx.caller}")
        txn.set(DEVICES, ctx.caller, replace(device, last_heartbeat=ctx.height))

    logger.debug(f"[DEVICE] Heartbeat from {ctx.caller} at height {ctx.height}")


def get_device_info(store, device_identity: str) -> Optional[Device]:
    return store.get(DEVICES, device_identity)
