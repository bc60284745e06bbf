# citygrid/services/waste_service.py
"""
Waste container fill levels, reported by authorized sensors.
Containers exist only for WASTE assets (created at registration) — a report
for anything else is rejected, never auto-created.
"""

from dataclasses import replace
from typing import Optional

from citygrid.errors import CityError, ErrorCode
from citygrid.services.guard import is_authorized_device
from citygrid.services.records import ASSETS, WASTE_CONTAINERS, WasteContainer
from citygrid.services.runtime import CallContext, Runtime
from citygrid.utils.logger import get_logger

logger = get_logger(__name__)

MAX_FILL_LEVEL = 100
MAINTENANCE_THRESHOLD = 80      # strictly above this needs a pickup


def update_waste_level(runtime: Runtime, ctx: CallContext, asset_id: int, level: int) -> WasteContainer:
    with runtime.store.transaction() as txn:
        if not is_authorized_device(txn, ctx.caller):
            raise CityError(ErrorCode.UNAUTHORIZED, f"{ctx.caller} is not an authorized sensor")
        if not 0 <= level <= MAX_FILL_LEVEL:
            raise CityError(ErrorCode.BAD_PARAMS, f"fill level {level} outside 0–{MAX_FILL_LEVEL}")
        if txn.get(ASSETS, asset_id) is None:
            raise CityError(ErrorCode.INVALID_ASSET, f"no asset #{asset_id}")
        container = txn.get(WASTE_CONTAINERS, asset_id)
        if container is None:
            raise CityError(ErrorCode.INVALID_ASSET, f"asset #{asset_id} has no waste container")

        updated = replace(
            container,
            fill_level=level,
            requires_maintenance=level > MAINTENANCE_THRESHOLD,
            last_serviced=ctx.height,
        )
        txn.set(WASTE_CONTAINERS, asset_id, updated)

    logger.info(f"[WASTE] #{asset_id}: {level}% (reported by {ctx.caller})")
    if updated.requires_maintenance and not container.requires_maintenance:
        logger.warning(f"[ALERT][MAINTENANCE] Waste container #{asset_id} at {level}% needs service")
    return updated


def get_waste_status(store, asset_id: int) -> Optional[WasteContainer]:
    return store.get(WASTE_CONTAINERS, asset_id)
