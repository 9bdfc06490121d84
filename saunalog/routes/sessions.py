"""
Day Session Routes

JSON endpoints for one day's session list and metadata, always scoped to the
authenticated principal.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from saunalog.auth import get_current_user
from saunalog.routes.dependencies import get_ledger
from saunalog.routes.schemas import (
    AppendSessionRequest,
    DayMetaRequest,
    ReplaceSessionsRequest,
)
from saunalog.services.ledger import SessionLedger

router = APIRouter(prefix="/api", tags=["sessions"])


@router.get("/today")
def today(
    principal: dict = Depends(get_current_user),
    ledger: SessionLedger = Depends(get_ledger),
):
    """Summary of today's sessions in the app timezone."""
    return ledger.today_summary(principal["user_id"])


@router.get("/days/{date}")
def day_summary(
    date: str,
    principal: dict = Depends(get_current_user),
    ledger: SessionLedger = Depends(get_ledger),
):
    return ledger.day_summary(principal["user_id"], date)


@router.get("/days/{date}/sessions")
def list_sessions(
    date: str,
    principal: dict = Depends(get_current_user),
    ledger: SessionLedger = Depends(get_ledger),
):
    return {"date": date, "sessions": ledger.list_sessions(principal["user_id"], date)}


@router.post("/days/{date}/sessions")
def append_session(
    date: str,
    payload: AppendSessionRequest,
    principal: dict = Depends(get_current_user),
    ledger: SessionLedger = Depends(get_ledger),
):
    """Append one session; metadata fields sent with it overwrite the day's."""
    meta = payload.meta.supplied() if payload.meta is not None else None
    order = ledger.append(principal["user_id"], date, payload.minutes, meta)
    return JSONResponse({"date": date, "order": order}, status_code=201)


@router.put("/days/{date}/sessions")
def replace_sessions(
    date: str,
    payload: ReplaceSessionsRequest,
    principal: dict = Depends(get_current_user),
    ledger: SessionLedger = Depends(get_ledger),
):
    ledger.replace_all(principal["user_id"], date, payload.sessions)
    return {"date": date, "sessions": ledger.list_sessions(principal["user_id"], date)}


@router.delete("/days/{date}/sessions/{index}")
def remove_session(
    date: str,
    index: int,
    principal: dict = Depends(get_current_user),
    ledger: SessionLedger = Depends(get_ledger),
):
    ledger.remove_at(principal["user_id"], date, index)
    return {"date": date, "sessions": ledger.list_sessions(principal["user_id"], date)}


@router.get("/days/{date}/meta")
def get_day_meta(
    date: str,
    principal: dict = Depends(get_current_user),
    ledger: SessionLedger = Depends(get_ledger),
):
    return ledger.get_day_meta(principal["user_id"], date)


@router.put("/days/{date}/meta")
def set_day_meta(
    date: str,
    payload: DayMetaRequest,
    principal: dict = Depends(get_current_user),
    ledger: SessionLedger = Depends(get_ledger),
):
    """Update metadata of a day that has sessions. A day without sessions is left untouched."""
    applied = ledger.set_day_meta(principal["user_id"], date, payload.supplied())
    return {
        "applied": applied,
        "meta": ledger.get_day_meta(principal["user_id"], date),
    }
