"""
Principal resolution.

Identity is owned by an external provider. Requests carry a signed token
(itsdangerous) holding the provider's user id and display name, either as
`Authorization: Bearer <token>` or in the `session` cookie. This module only
verifies tokens; `create_session_token` exists for development tooling.
"""

import os
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from fastapi import Request
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from saunalog.errors import Unauthorized

load_dotenv()

SECRET_KEY = os.getenv("SECRET_KEY", "your-super-secret-key-change-in-production-min-32-chars")
SESSION_EXPIRE_MINUTES = int(os.getenv("SESSION_EXPIRE_MINUTES", "43200"))
serializer = URLSafeTimedSerializer(SECRET_KEY, salt="saunalog-principal")


def create_session_token(user_id: str, name: Optional[str] = None) -> str:
    """Create a signed principal token."""
    data = {
        "user_id": user_id,
        "name": name,
        "created": datetime.now(timezone.utc).isoformat(),
    }
    return serializer.dumps(data)


def decode_session_token(token: str) -> Optional[dict]:
    """Decode and validate a principal token."""
    try:
        data = serializer.loads(token, max_age=SESSION_EXPIRE_MINUTES * 60)
    except (BadSignature, SignatureExpired):
        return None
    if not isinstance(data, dict) or not data.get("user_id"):
        return None
    return data


def get_session_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get("session")


def get_current_user_optional(request: Request) -> Optional[dict]:
    """
    Get the current principal from the request.
    Returns None if not authenticated.
    """
    token = get_session_token(request)
    if not token:
        return None
    return decode_session_token(token)


def get_current_user(request: Request) -> dict:
    """
    Get the current principal from the request.
    Raises Unauthorized if not authenticated.
    """
    principal = get_current_user_optional(request)
    if not principal:
        raise Unauthorized()
    return principal
