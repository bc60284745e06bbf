# citygrid/routers/devices.py
"""IoT sensor registry — register, deactivate, heartbeat, lookup."""

from fastapi import APIRouter, Depends, HTTPException
from citygrid.routers.deps import call_context, get_caller, get_runtime
from citygrid.schemas.device import DeviceCreate, DeviceOut
from citygrid.services.device_service import (
    deactivate_device, get_device_info, register_device, update_device_heartbeat,
)
from citygrid.services.runtime import Runtime

router = APIRouter()


@router.post("/devices", status_code=201, summary="Register a sensor on an asset (admin)")
def create_device(body: DeviceCreate, runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    register_device(runtime, call_context(runtime, caller),
                    body.device_identity, body.device_label, body.device_type, body.asset_id)
    return {"status": "registered", "device": body.device_identity}


@router.post("/devices/heartbeat", summary="Heartbeat from the calling device")
def heartbeat(runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    ctx = call_context(runtime, caller)
    update_device_heartbeat(runtime, ctx)
    return {"status": "ok", "device": caller, "height": ctx.height}


@router.post("/devices/{identity}/deactivate", summary="Revoke a sensor (admin)")
def deactivate(identity: str, runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    deactivate_device(runtime, call_context(runtime, caller), identity)
    return {"status": "deactivated", "device": identity}


@router.get("/devices/{identity}", response_model=DeviceOut)
def read_device(identity: str, runtime: Runtime = Depends(get_runtime)):
    device = get_device_info(runtime.store, identity)
    if device is None:
        raise HTTPException(status_code=404, detail=f"Device '{identity}' not found")
    return device
