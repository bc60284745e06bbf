# citygrid/schemas/governance.py
from pydantic import BaseModel


class GovernanceOut(BaseModel):
    admin: str
    power_rate: int
    min_parking_fee: int
    max_allocation: int
    max_cost: int


class PriceUpdate(BaseModel):
    value: int


class AdminUpdate(BaseModel):
    new_admin: str


class CreditRequest(BaseModel):
    account: str
    amount: int
