# citygrid/routers/waste.py
"""Waste container fill levels (sensor-reported) + status."""

from fastapi import APIRouter, Depends, HTTPException
from citygrid.routers.deps import call_context, get_caller, get_runtime
from citygrid.schemas.waste import WasteContainerOut, WasteLevelUpdate
from citygrid.services.runtime import Runtime
from citygrid.services.waste_service import get_waste_status, update_waste_level

router = APIRouter()


@router.put("/waste/{asset_id}/level", summary="Report a fill level (authorized sensor)")
def report_level(asset_id: int, body: WasteLevelUpdate,
                 runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    container = update_waste_level(runtime, call_context(runtime, caller), asset_id, body.level)
    return {"status": "updated", "asset_id": asset_id,
            "requires_maintenance": container.requires_maintenance}


@router.get("/waste/{asset_id}", response_model=WasteContainerOut)
def read_waste(asset_id: int, runtime: Runtime = Depends(get_runtime)):
    container = get_waste_status(runtime.store, asset_id)
    if container is None:
        raise HTTPException(status_code=404, detail=f"No waste container for asset #{asset_id}")
    return container
