# citygrid/routers/parking.py
"""Parking reservations + slot status."""

from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException
from citygrid.routers.deps import call_context, get_caller, get_runtime
from citygrid.schemas.parking import ParkingReservation, ParkingSlotOut
from citygrid.services.parking_service import get_parking_status, is_expired, reserve_parking
from citygrid.services.runtime import Runtime

router = APIRouter()


@router.post("/parking/{asset_id}/reserve", summary="Book a parking slot and pay the fee")
def reserve(asset_id: int, body: ParkingReservation,
            runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    slot = reserve_parking(runtime, call_context(runtime, caller), asset_id, body.vehicle_id, body.duration)
    return {"status": "reserved", "asset_id": asset_id, "expiration_height": slot.expiration_height}


@router.get("/parking/{asset_id}", response_model=ParkingSlotOut)
def read_parking(asset_id: int, runtime: Runtime = Depends(get_runtime)):
    """Slot status. is_expired compares the stored expiration with the current height."""
    slot = get_parking_status(runtime.store, asset_id)
    if slot is None:
        raise HTTPException(status_code=404, detail=f"No parking slot for asset #{asset_id}")
    return ParkingSlotOut(**asdict(slot), is_expired=is_expired(slot, runtime.ledger.current_height()))
