# citygrid/models/asset.py
"""
Assets table — every registered city resource (parking, waste, power).
Rows are created once by the asset registry and never deleted.
"""

from sqlalchemy import Boolean, Column, Enum, Integer, String
from citygrid.database import Base
from citygrid.services.records import AssetType


class AssetRow(Base):
    __tablename__ = "assets"

    asset_id = Column(Integer, primary_key=True, autoincrement=False)
    asset_type = Column(Enum(AssetType, native_enum=False, length=16), nullable=False, index=True)
    location = Column(String(255), nullable=False)
    allocation = Column(Integer, nullable=False)
    available_units = Column(Integer, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    cost = Column(Integer, nullable=False)

    def __repr__(self):
        return f"<AssetRow {self.asset_id} type={self.asset_type} available={self.available_units}/{self.allocation}>"
