"""User profile sync with the external identity provider."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from saunalog.errors import Unauthorized
from saunalog.models import User

logger = logging.getLogger(__name__)


def save_user(db: Session, user_id: str, name: Optional[str]) -> User:
    """
    Create or refresh the profile for a principal.

    A new user is inserted with the given name. An existing user's name is
    only written when it is still empty or already equal to `name`, so a
    name edited elsewhere is never overwritten.

    Args:
        db: Database session (caller commits)
        user_id: Principal id from the identity provider
        name: Display name from the identity provider

    Returns:
        The User row
    """
    if not user_id:
        raise Unauthorized()

    user = db.query(User).filter(User.id == user_id).first()
    if user:
        if not user.name or user.name == name:
            user.name = name
    else:
        user = User(id=user_id, name=name)
        db.add(user)
        logger.info(f"Created profile for {user_id}")

    db.flush()
    return user
