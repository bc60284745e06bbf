# citygrid/routers/ledger.py
"""
Development ledger endpoints — height, balances, faucet.
Only meaningful while the runtime runs on InMemoryLedger. The faucet and
height advance answer 404 unless ENABLE_DEV_LEDGER is set.
"""

from fastapi import APIRouter, Depends, HTTPException
from citygrid.config import settings
from citygrid.routers.deps import get_caller, get_runtime
from citygrid.schemas.governance import CreditRequest
from citygrid.services.guard import require_admin
from citygrid.services.ledger import InMemoryLedger, LedgerError
from citygrid.services.runtime import Runtime

router = APIRouter()


def _dev_ledger(runtime: Runtime) -> InMemoryLedger:
    if not isinstance(runtime.ledger, InMemoryLedger):
        raise HTTPException(status_code=501, detail="Ledger is external — not managed by this service")
    return runtime.ledger


def require_dev_ledger():
    if not settings.ENABLE_DEV_LEDGER:
        raise HTTPException(status_code=404, detail="Development ledger is disabled")


@router.get("/ledger/height")
def read_height(runtime: Runtime = Depends(get_runtime)):
    return {"height": runtime.ledger.current_height()}


@router.get("/ledger/balances/{account}")
def read_balance(account: str, runtime: Runtime = Depends(get_runtime)):
    return {"account": account, "balance": _dev_ledger(runtime).balance_of(account)}


@router.post("/ledger/credit", summary="Mint funds into an account (admin, dev only)",
             dependencies=[Depends(require_dev_ledger)])
def credit(body: CreditRequest, runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    require_admin(runtime.governance, caller)
    try:
        balance = _dev_ledger(runtime).credit(body.account, body.amount)
    except LedgerError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"account": body.account, "balance": balance}


@router.post("/ledger/advance", summary="Advance the height counter (admin, dev only)",
             dependencies=[Depends(require_dev_ledger)])
def advance(blocks: int = 1, runtime: Runtime = Depends(get_runtime), caller: str = Depends(get_caller)):
    require_admin(runtime.governance, caller)
    if blocks < 1:
        raise HTTPException(status_code=400, detail="blocks must be >= 1")
    return {"height": _dev_ledger(runtime).advance(blocks)}
