# citygrid/schemas/device.py
from pydantic import BaseModel
from citygrid.services.records import AssetType


class DeviceCreate(BaseModel):
    device_identity: str
    device_label: str
    device_type: str         # PARKING | WASTE | POWER
    asset_id: int


class DeviceOut(BaseModel):
    owner: str
    label: str
    device_type: AssetType
    asset_id: int
    active: bool
    last_heartbeat: int
    authorized: bool

    class Config:
        from_attributes = True
