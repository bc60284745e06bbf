# citygrid/services/guard.py
"""
Caller authorization checks.
Pure predicates — they read state but never change it.
"""

from citygrid.errors import CityError, ErrorCode
from citygrid.services.records import DEVICES


def is_admin(governance, caller: str) -> bool:
    return bool(caller) and caller == governance.admin


def is_authorized_device(reader, caller: str) -> bool:
    """`reader` is a KeyedStore or an open Transaction. Unknown devices are not authorized."""
    device = reader.get(DEVICES, caller)
    return device is not None and device.authorized


def require_admin(governance, caller: str):
    if not is_admin(governance, caller):
        raise CityError(ErrorCode.UNAUTHORIZED, f"{caller or 'anonymous'} is not the administrator")
