# citygrid/models/device.py
"""
IoT sensor registry table — one device per owning identity.
The authorized flag gates sensor-reported updates.
"""

from sqlalchemy import Boolean, Column, Enum, Integer, String
from citygrid.database import Base
from citygrid.services.records import AssetType


class DeviceRow(Base):
    __tablename__ = "devices"

    owner = Column(String(128), primary_key=True)
    label = Column(String(128), nullable=False)
    device_type = Column(Enum(AssetType, native_enum=False, length=16), nullable=False)
    asset_id = Column(Integer, nullable=False, index=True)
    active = Column(Boolean, default=True, nullable=False)
    last_heartbeat = Column(Integer, nullable=False)
    authorized = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<DeviceRow {self.owner} asset={self.asset_id} authorized={self.authorized}>"
