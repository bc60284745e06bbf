# citygrid/services/asset_registry.py
"""
Asset registration: parking spaces, waste containers, energy capacity.
Admin-only. A PARKING asset gets an empty parking slot and a WASTE asset an
empty container in the same transaction that stores the asset.
"""

from typing import Optional

from citygrid.errors import CityError, ErrorCode
from citygrid.services.guard import require_admin
from citygrid.services.records import (
    ASSET_COUNTER, ASSETS, COUNTERS, PARKING_SLOTS, WASTE_CONTAINERS,
    Asset, AssetType, Counter, ParkingSlot, WasteContainer,
)
from citygrid.services.runtime import CallContext, Runtime
from citygrid.utils.logger import get_logger

logger = get_logger(__name__)


def register_resource(runtime: Runtime, ctx: CallContext, asset_type, location: str,
                      allocation: int, cost: int) -> int:
    gov = runtime.governance
    limits = gov.limits

    require_admin(gov, ctx.caller)
    if not location or len(location) > limits.max_location_length:
        raise CityError(ErrorCode.BAD_LOCATION, f"location must be 1–{limits.max_location_length} characters")
    if not 0 < allocation <= limits.max_allocation:
        raise CityError(ErrorCode.BAD_CAPACITY, f"allocation must be in (0, {limits.max_allocation}]")
    if not 0 < cost <= limits.max_cost:
        raise CityError(ErrorCode.BAD_PRICE, f"cost must be in (0, {limits.max_cost}]")
    kind = AssetType.parse(asset_type)
    if kind is None:
        raise CityError(ErrorCode.INVALID_ASSET_TYPE, f"unknown asset type {asset_type!r}")

    with runtime.store.transaction() as txn:
        counter = txn.get(COUNTERS, ASSET_COUNTER) or Counter(name=ASSET_COUNTER, value=0)
        if counter.value >= limits.max_assets:
            raise CityError(ErrorCode.ASSET_LIMIT_REACHED, f"asset counter exhausted at {counter.value}")
        asset_id = counter.value + 1

        txn.set(ASSETS, asset_id, Asset(
            asset_id=asset_id,
            asset_type=kind,
            location=location,
            allocation=allocation,
            available_units=allocation,
            active=True,
            cost=cost,
        ))
        if kind is AssetType.PARKING:
            txn.set(PARKING_SLOTS, asset_id, ParkingSlot(asset_id=asset_id))
        elif kind is AssetType.WASTE:
            txn.set(WASTE_CONTAINERS, asset_id, WasteContainer(asset_id=asset_id, last_serviced=ctx.height))
        txn.set(COUNTERS, ASSET_COUNTER, Counter(name=ASSET_COUNTER, value=asset_id))

    logger.info(f"[ASSET] Registered {kind.value} #{asset_id} at '{location}' ({allocation} units @ {cost})")
    return asset_id


def get_asset_info(store, asset_id: int) -> Optional[Asset]:
    return store.get(ASSETS, asset_id)
