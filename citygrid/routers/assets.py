# citygrid/routers/assets.py
"""Asset registration + lookup."""

from fastapi import APIRouter, Depends, HTTPException
from citygrid.routers.deps import call_context, get_caller, get_runtime
from citygrid.schemas.asset import AssetCreate, AssetOut
from citygrid.services.asset_registry import get_asset_info, register_resource
from citygrid.services.runtime import Runtime

router = APIRouter()


@router.post("/assets", status_code=201, summary="Register a parking, waste or power resource (admin)")
def create_asset(body: AssetCreate, runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    ctx = call_context(runtime, caller)
    asset_id = register_resource(runtime, ctx, body.asset_type, body.location, body.allocation, body.cost)
    return {"status": "registered", "asset_id": asset_id}


@router.get("/assets/{asset_id}", response_model=AssetOut)
def read_asset(asset_id: int, runtime: Runtime = Depends(get_runtime)):
    asset = get_asset_info(runtime.store, asset_id)
    if asset is None:
        raise HTTPException(status_code=404, detail=f"Asset #{asset_id} not found")
    return asset
