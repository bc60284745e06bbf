# citygrid/models/waste_container.py
"""
Waste container fill-level table.
Updated by authorized sensors through the waste service.
"""

from sqlalchemy import Boolean, Column, Integer
from citygrid.database import Base


class WasteContainerRow(Base):
    __tablename__ = "waste_containers"

    asset_id = Column(Integer, primary_key=True, autoincrement=False)
    fill_level = Column(Integer, default=0, nullable=False)          # percent, 0–100
    last_serviced = Column(Integer, default=0, nullable=False)       # height
    requires_maintenance = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<WasteContainerRow {self.asset_id} level={self.fill_level}%>"
