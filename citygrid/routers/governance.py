# citygrid/routers/governance.py
"""Administrator and pricing settings."""

from fastapi import APIRouter, Depends
from citygrid.routers.deps import get_caller, get_runtime
from citygrid.schemas.governance import AdminUpdate, GovernanceOut, PriceUpdate
from citygrid.services.runtime import Runtime

router = APIRouter()


@router.get("/governance", response_model=GovernanceOut)
def read_governance(runtime: Runtime = Depends(get_runtime)):
    return runtime.governance.snapshot()


@router.put("/governance/power-rate", summary="Set the price per energy unit (admin)")
def update_power_rate(body: PriceUpdate, runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    runtime.governance.set_power_rate(caller, body.value)
    return {"status": "updated", "power_rate": body.value}


@router.put("/governance/min-parking-fee", summary="Set the parking fee floor (admin)")
def update_min_parking_fee(body: PriceUpdate, runtime: Runtime = Depends(get_runtime),
                           caller: str = Depends(get_caller)):
    runtime.governance.set_min_parking_fee(caller, body.value)
    return {"status": "updated", "min_parking_fee": body.value}


@router.put("/governance/admin", summary="Hand administration to another identity (admin)")
def update_admin(body: AdminUpdate, runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    runtime.governance.transfer_admin(caller, body.new_admin)
    return {"status": "updated", "admin": body.new_admin}
