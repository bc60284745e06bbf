# citygrid/services/parking_service.py
"""
Parking reservations against PARKING assets.

Fee = unit cost × duration, paid by the caller to the administrator before
anything is written, and refunded if the write then fails to commit. Expiry
is advisory: the slot stores an expiration height and callers compare it
against the current height themselves. Nothing here returns units to the
asset when a reservation lapses.
"""

from typing import Optional

from citygrid.errors import CityError, ErrorCode
from citygrid.services.ledger import collect_payment, refund_payment
from citygrid.services.records import ASSETS, PARKING_SLOTS, AssetType, ParkingSlot
from citygrid.services.runtime import CallContext, Runtime
from citygrid.utils.logger import get_logger

logger = get_logger(__name__)


def reserve_parking(runtime: Runtime, ctx: CallContext, asset_id: int, vehicle_id: str, duration: int) -> ParkingSlot:
    gov = runtime.governance
    payee = gov.admin
    fee = 0
    paid = False

    try:
        with runtime.store.transaction() as txn:
            asset = txn.get(ASSETS, asset_id)
            if asset is None or asset.asset_type is not AssetType.PARKING:
                raise CityError(ErrorCode.INVALID_ASSET, f"no parking asset #{asset_id}")
            if not vehicle_id or len(vehicle_id) > gov.limits.max_vehicle_id_length:
                raise CityError(ErrorCode.BAD_VEHICLE, "vehicle identifier is empty or too long")
            if not 0 < duration <= gov.limits.max_duration:
                raise CityError(ErrorCode.BAD_PARAMS, f"duration must be in (0, {gov.limits.max_duration}]")
            if asset.available_units < 1:
                raise CityError(ErrorCode.ASSET_UNAVAILABLE, f"parking asset #{asset_id} is full")

            fee = asset.cost * duration
            if fee < gov.min_parking_fee:
                raise CityError(ErrorCode.LOW_BALANCE, f"fee {fee} below minimum {gov.min_parking_fee}")

            collect_payment(runtime.ledger, fee, ctx.caller, payee)
            paid = True

            current = txn.get(PARKING_SLOTS, asset_id) or ParkingSlot(asset_id=asset_id)
            slot = ParkingSlot(
                asset_id=current.asset_id,
                occupied=True,
                vehicle_id=vehicle_id,
                expiration_height=ctx.height + duration,
            )
            txn.set(PARKING_SLOTS, asset_id, slot)
            txn.update(ASSETS, asset_id, available_units=asset.available_units - 1)
    except Exception:
        if paid:
            refund_payment(runtime.ledger, fee, ctx.caller, payee)
        raise

    logger.info(f"[PARKING] #{asset_id} reserved for {vehicle_id} until height {slot.expiration_height} (fee {fee})")
    return slot


def get_parking_status(store, asset_id: int) -> Optional[ParkingSlot]:
    return store.get(PARKING_SLOTS, asset_id)


def is_expired(slot: ParkingSlot, height: int) -> bool:
    """True when an occupied slot's reservation has lapsed at `height`."""
    return slot.occupied and slot.expiration_height < height
