# citygrid/services/records.py
"""
Immutable records held by the keyed store.
Records are never mutated in place — build a new one with
dataclasses.replace() and write it back inside a transaction.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Store tables
ASSETS = "assets"
PARKING_SLOTS = "parking_slots"
WASTE_CONTAINERS = "waste_containers"
POWER_ALLOCATIONS = "power_allocations"   # keyed by (asset_id, user)
DEVICES = "devices"                       # keyed by owning identity
COUNTERS = "counters"

ASSET_COUNTER = "assets"


class AssetType(str, Enum):
    PARKING = "PARKING"
    WASTE = "WASTE"
    POWER = "POWER"

    @classmethod
    def parse(cls, value) -> Optional["AssetType"]:
        """Return the matching type, or None for anything unrecognised."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Asset:
    asset_id: int
    asset_type: AssetType
    location: str
    allocation: int
    available_units: int
    active: bool
    cost: int


@dataclass(frozen=True)
class ParkingSlot:
    asset_id: int
    occupied: bool = False
    vehicle_id: Optional[str] = None
    expiration_height: int = 0


@dataclass(frozen=True)
class WasteContainer:
    asset_id: int
    fill_level: int = 0                   # 0–100
    last_serviced: int = 0
    requires_maintenance: bool = False


@dataclass(frozen=True)
class PowerAllocation:
    asset_id: int
    user: str
    reserved: int
    consumed: int
    last_modified: int


@dataclass(frozen=True)
class Device:
    owner: str
    label: str
    device_type: AssetType
    asset_id: int
    active: bool
    last_heartbeat: int
    authorized: bool


@dataclass(frozen=True)
class Counter:
    name: str
    value: int
