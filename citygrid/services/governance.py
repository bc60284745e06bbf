# citygrid/services/governance.py
"""
Administrator identity, pricing, and validation limits.
Loaded from settings once and injected into the runtime — never read from
module globals by the services. Every mutator is admin-only.
"""

import threading
from dataclasses import dataclass

from citygrid.errors import CityError, ErrorCode
from citygrid.services.guard import require_admin
from citygrid.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Limits:
    max_allocation: int = 1_000_000
    max_cost: int = 1_000_000
    max_assets: int = 1_000_000
    max_location_length: int = 100
    max_vehicle_id_length: int = 20
    max_device_label_length: int = 50
    max_identity_length: int = 128
    max_duration: int = 1_000_000


class Governance:

    def __init__(self, admin: str, power_rate: int, min_parking_fee: int, limits: Limits = None):
        self.limits = limits or Limits()
        if not admin:
            raise ValueError("administrator identity must be set")
        if not 0 < power_rate <= self.limits.max_cost:
            raise ValueError(f"power rate {power_rate} outside (0, {self.limits.max_cost}]")
        if not 0 < min_parking_fee:
            raise ValueError("minimum parking fee must be positive")
        self._admin = admin
        self._power_rate = power_rate
        self._min_parking_fee = min_parking_fee
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "Governance":
        return cls(
            admin=settings.ADMIN_IDENTITY,
            power_rate=settings.POWER_RATE,
            min_parking_fee=settings.MIN_PARKING_FEE,
            limits=Limits(
                max_allocation=settings.MAX_ALLOCATION,
                max_cost=settings.MAX_COST,
                max_assets=settings.MAX_ASSETS,
                max_location_length=settings.MAX_LOCATION_LENGTH,
                max_vehicle_id_length=settings.MAX_VEHICLE_ID_LENGTH,
                max_device_label_length=settings.MAX_DEVICE_LABEL_LENGTH,
                max_identity_length=settings.MAX_IDENTITY_LENGTH,
                max_duration=settings.MAX_DURATION,
            ),
        )

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def power_rate(self) -> int:
        return self._power_rate

    @property
    def min_parking_fee(self) -> int:
        return self._min_parking_fee

    def _check_price(self, value: int, what: str):
        if not 0 < value <= self.limits.max_cost:
            raise CityError(ErrorCode.BAD_PRICE, f"{what} must be in (0, {self.limits.max_cost}]")

    def set_power_rate(self, caller: str, rate: int):
        with self._lock:
            require_admin(self, caller)
            self._check_price(rate, "power rate")
            self._power_rate = rate
        logger.info(f"[GOV] Power rate set to {rate} by {caller}")

    def set_min_parking_fee(self, caller: str, fee: int):
        with self._lock:
            require_admin(self, caller)
            self._check_price(fee, "minimum parking fee")
            self._min_parking_fee = fee
        logger.info(f"[GOV] Minimum parking fee set to {fee} by {caller}")

    def transfer_admin(self, caller: str, new_admin: str):
        with self._lock:
            require_admin(self, caller)
            if not new_admin:
                raise CityError(ErrorCode.BAD_PARAMS, "new administrator identity is empty")
            self._admin = new_admin
        logger.warning(f"[GOV] Administrator changed from {caller} to {new_admin}")

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "admin": self._admin,
                "power_rate": self._power_rate,
                "min_parking_fee": self._min_parking_fee,
                "max_allocation": self.limits.max_allocation,
                "max_cost": self.limits.max_cost,
            }
