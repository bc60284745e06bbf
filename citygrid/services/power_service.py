# citygrid/services/power_service.py
"""
Energy capacity reservations per (asset, user) and metered consumption.

allocate_power overwrites the pair's allocation on every call — a second
call replaces the first, it does not add to it. The charge is refunded if
the allocation fails to commit. Consumption is reported by an authorized
sensor bound to the same asset and can never exceed the reservation.
"""

from typing import Optional

from citygrid.errors import CityError, ErrorCode
from citygrid.services.guard import is_authorized_device
from citygrid.services.ledger import collect_payment, refund_payment
from citygrid.services.records import ASSETS, DEVICES, POWER_ALLOCATIONS, AssetType, PowerAllocation
from citygrid.services.runtime import CallContext, Runtime
from citygrid.utils.logger import get_logger

logger = get_logger(__name__)


def allocate_power(runtime: Runtime, ctx: CallContext, asset_id: int, amount: int) -> PowerAllocation:
    gov = runtime.governance
    payee = gov.admin
    energy_cost = 0
    paid = False

    try:
        with runtime.store.transaction() as txn:
            asset = txn.get(ASSETS, asset_id)
            if asset is None or asset.asset_type is not AssetType.POWER:
                raise CityError(ErrorCode.INVALID_ASSET, f"no power asset #{asset_id}")
            if not 0 < amount <= gov.limits.max_allocation:
                raise CityError(ErrorCode.BAD_CAPACITY, f"amount must be in (0, {gov.limits.max_allocation}]")
            if asset.available_units < amount:
                raise CityError(ErrorCode.ASSET_UNAVAILABLE,
                                f"asset #{asset_id} has {asset.available_units} units, {amount} requested")
            if len(ctx.caller) > gov.limits.max_identity_length:
                raise CityError(ErrorCode.BAD_PARAMS,
                                f"caller identity longer than {gov.limits.max_identity_length} characters")

            energy_cost = amount * gov.power_rate
            collect_payment(runtime.ledger, energy_cost, ctx.caller, payee)
            paid = True

            allocation = PowerAllocation(
                asset_id=asset_id,
                user=ctx.caller,
                reserved=amount,
                consumed=0,
                last_modified=ctx.height,
            )
            txn.set(POWER_ALLOCATIONS, (asset_id, ctx.caller), allocation)
            txn.update(ASSETS, asset_id, available_units=asset.available_units - amount)
    except Exception:
        if paid:
            refund_payment(runtime.ledger, energy_cost, ctx.caller, payee)
        raise

    logger.info(f"[POWER] #{asset_id}: {amount} units reserved by {ctx.caller} (cost {energy_cost})")
    return allocation


def record_power_consumption(runtime: Runtime, ctx: CallContext, asset_id: int, user: str, units: int):
    """Meter `units` of energy against `user`'s reservation on `asset_id`."""
    with runtime.store.transaction() as txn:
        device = txn.get(DEVICES, ctx.caller)
        if not is_authorized_device(txn, ctx.caller) or device.asset_id != asset_id:
            raise CityError(ErrorCode.UNAUTHORIZED, f"{ctx.caller} is not a sensor on asset #{asset_id}")
        if units <= 0:
            raise CityError(ErrorCode.BAD_PARAMS, "consumed units must be positive")
        allocation = txn.get(POWER_ALLOCATIONS, (asset_id, user))
        if allocation is None:
            raise CityError(ErrorCode.INVALID_ASSET, f"{user} holds no allocation on asset #{asset_id}")
        if allocation.consumed + units > allocation.reserved:
            raise CityError(ErrorCode.BAD_CAPACITY,
                            f"{allocation.consumed} + {units} exceeds reserved {allocation.reserved}")

        updated = txn.update(POWER_ALLOCATIONS, (asset_id, user),
                             consumed=allocation.consumed + units, last_modified=ctx.height)

    logger.info(f"[POWER] #{asset_id}/{user}: consumed {updated.consumed}/{updated.reserved}")


def get_power_allocation(store, asset_id: int, user: str) -> Optional[PowerAllocation]:
    return store.get(POWER_ALLOCATIONS, (asset_id, user))
