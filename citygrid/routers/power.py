# citygrid/routers/power.py
"""Energy allocation, metering and lookup."""

from fastapi import APIRouter, Depends, HTTPException
from citygrid.routers.deps import call_context, get_caller, get_runtime
from citygrid.schemas.power import PowerAllocationOut, PowerConsumption, PowerRequest
from citygrid.services.power_service import allocate_power, get_power_allocation, record_power_consumption
from citygrid.services.runtime import Runtime

router = APIRouter()


@router.post("/power/{asset_id}/allocate", summary="Reserve energy units and pay for them")
def allocate(asset_id: int, body: PowerRequest,
             runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    allocation = allocate_power(runtime, call_context(runtime, caller), asset_id, body.amount)
    return {"status": "allocated", "asset_id": asset_id, "reserved": allocation.reserved}


@router.post("/power/{asset_id}/consume", summary="Meter consumption against a reservation (authorized sensor)")
def consume(asset_id: int, body: PowerConsumption,
            runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    record_power_consumption(runtime, call_context(runtime, caller), asset_id, body.user, body.units)
    return {"status": "recorded", "asset_id": asset_id, "user": body.user}


@router.get("/power/{asset_id}/{user}", response_model=PowerAllocationOut)
def read_allocation(asset_id: int, user: str, runtime: Runtime = Depends(get_runtime)):
    allocation = get_power_allocation(runtime.store, asset_id, user)
    if allocation is None:
        raise HTTPException(status_code=404, detail=f"No allocation for {user} on asset #{asset_id}")
    return allocation
