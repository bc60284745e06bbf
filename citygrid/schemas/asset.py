# citygrid/schemas/asset.py
from pydantic import BaseModel
from citygrid.services.records import AssetType


class AssetCreate(BaseModel):
    asset_type: str          # PARKING | WASTE | POWER
    location: str
    allocation: int
    cost: int


class AssetOut(BaseModel):
    asset_id: int
    asset_type: AssetType
    location: str
    allocation: int
    available_units: int
    active: bool
    cost: int

    class Config:
        from_attributes = True
