# citygrid/routers/deps.py
"""
Shared FastAPI dependencies: the engine runtime and the calling identity.

X-Caller-Identity is taken as-is. Deploy behind a gateway that authenticates
the caller and sets the header itself, and enable API_KEY so the backend is
not reachable around it.
"""

from fastapi import Header, Request
from citygrid.services.runtime import CallContext, Runtime


def get_runtime(request: Request) -> Runtime:
    return request.app.state.runtime


def get_caller(x_caller_identity: str = Header(..., description="Identity invoking the operation")) -> str:
    return x_caller_identity


def call_context(runtime: Runtime, caller: str) -> CallContext:
    """Pin caller and the ledger's current height for one operation."""
    return runtime.context(caller)
