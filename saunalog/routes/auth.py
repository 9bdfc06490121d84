from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from saunalog.auth import get_current_user
from saunalog.database import get_db
from saunalog.services.users import save_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/session")
def start_session(
    principal: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Called by the client when a session starts; syncs the profile name."""
    try:
        user = save_user(db, principal["user_id"], principal.get("name"))
        db.commit()
    except Exception:
        db.rollback()
        raise
    return {"user_id": user.id, "name": user.name}
