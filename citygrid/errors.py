# citygrid/errors.py
"""
Typed errors raised by every state-changing operation.
Codes are stable discriminants — clients and the HTTP layer key off the
integer value, so never renumber an existing entry.
"""

from enum import IntEnum


class ErrorCode(IntEnum):
    UNAUTHORIZED = 100
    INVALID_ASSET = 101
    ASSET_UNAVAILABLE = 102
    BAD_PARAMS = 103
    LOW_BALANCE = 104
    SENSOR_NOT_FOUND = 105
    BAD_CAPACITY = 106
    BAD_PRICE = 107
    BAD_LOCATION = 108
    BAD_VEHICLE = 109
    BAD_SENSOR = 110
    # Added after the core set
    INVALID_ASSET_TYPE = 111
    TRANSFER_FAILED = 112
    ASSET_LIMIT_REACHED = 113


class CityError(Exception):
    """Raised when an operation is rejected. No state has changed when this is raised."""

    def __init__(self, code: ErrorCode, message: str = ""):
        self.code = code
        self.message = message or code.name.lower().replace("_", " ")
        super().__init__(f"[{code.name}] {self.message}")

    def __repr__(self):
        return f"<CityError {self.code.name}({int(self.code)}) {self.message!r}>"
