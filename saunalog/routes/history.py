"""
History Routes

Browsing across days: dates with sessions (optionally by facility), the
facilities used, and the overall per-session average.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from saunalog.auth import get_current_user
from saunalog.routes.dependencies import get_ledger
from saunalog.services.ledger import SessionLedger

router = APIRouter(prefix="/api", tags=["history"])


@router.get("/days")
def list_days(
    facility: Optional[str] = Query(None, description="Exact facility name"),
    principal: dict = Depends(get_current_user),
    ledger: SessionLedger = Depends(get_ledger),
):
    return {"dates": ledger.list_days_with_sessions(principal["user_id"], facility)}


@router.get("/facilities")
def list_facilities(
    principal: dict = Depends(get_current_user),
    ledger: SessionLedger = Depends(get_ledger),
):
    return {"facilities": ledger.list_facilities(principal["user_id"])}


@router.get("/stats/average")
def overall_average(
    principal: dict = Depends(get_current_user),
    ledger: SessionLedger = Depends(get_ledger),
):
    return {"average": ledger.overall_average(principal["user_id"])}
