# citygrid/schemas/power.py
from pydantic import BaseModel


class PowerRequest(BaseModel):
    amount: int


class PowerConsumption(BaseModel):
    user: str
    units: int


class PowerAllocationOut(BaseModel):
    asset_id: int
    user: str
    reserved: int
    consumed: int
    last_modified: int

    class Config:
        from_attributes = True
