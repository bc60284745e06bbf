# citygrid/models/parking_slot.py
"""
Parking slot state table.
One row per PARKING asset, created on registration and overwritten by each reservation.
"""

from sqlalchemy import Boolean, Column, Integer, String
from citygrid.database import Base


class ParkingSlotRow(Base):
    __tablename__ = "parking_slots"

    asset_id = Column(Integer, primary_key=True, autoincrement=False)
    occupied = Column(Boolean, default=False, nullable=False)
    vehicle_id = Column(String(64))
    expiration_height = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<ParkingSlotRow {self.asset_id} occupied={self.occupied} until={self.expiration_height}>"
