# citygrid/schemas/waste.py
from pydantic import BaseModel


class WasteLevelUpdate(BaseModel):
    level: int               # percent full, 0–100


class WasteContainerOut(BaseModel):
    asset_id: int
    fill_level: int
    last_serviced: int
    requires_maintenance: bool

    class Config:
        from_attributes = True
