# citygrid/models/power_allocation.py
"""
Energy reservations per (asset, user) pair.
Each allocate call overwrites the pair's row; consumption is metered against it.
"""

from sqlalchemy import Column, Integer, String
from citygrid.database import Base


class PowerAllocationRow(Base):
    __tablename__ = "power_allocations"

    asset_id = Column(Integer, primary_key=True, autoincrement=False)
    user = Column(String(128), primary_key=True)
    reserved = Column(Integer, nullable=False)
    consumed = Column(Integer, default=0, nullable=False)
    last_modified = Column(Integer, nullable=False)

    def __repr__(self):
        return f"<PowerAllocationRow {self.asset_id}/{self.user} {self.consumed}/{self.reserved}>"
