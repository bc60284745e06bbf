# citygrid/schemas/parking.py
from pydantic import BaseModel
from typing import Optional


class ParkingReservation(BaseModel):
    vehicle_id: str
    duration: int            # in heights


class ParkingSlotOut(BaseModel):
    asset_id: int
    occupied: bool
    vehicle_id: Optional[str]
    expiration_height: int
    is_expired: Optional[bool] = None

    class Config:
        from_attributes = True
