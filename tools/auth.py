"""
Studio CRM - Session Validation

Sessions are issued by Supabase Auth; the API only verifies the access token
and resolves the user it belongs to.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Request
from supabase import AuthError

from tools.database import db

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "sb-access-token"


@dataclass
class SessionUser:
    """Authenticated user resolved from a Supabase access token"""

    id: str
    email: Optional[str] = None


def extract_access_token(request: Request) -> Optional[str]:
    """Bearer token from the Authorization header, else the auth cookie."""
    auth_header = request.headers.get("Authorization")
    if auth_header:
        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            return None
        return parts[1]
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


async def get_current_user(request: Request) -> SessionUser:
    """FastAPI dependency: 401 unless the request carries a valid session."""
    token = extract_access_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        response = db.client.auth.get_user(token)
    except AuthError as exc:
        logger.info("Rejected access token: %s", exc)
        raise HTTPException(status_code=401, detail="Unauthorized") from exc

    user = getattr(response, "user", None) if response else None
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return SessionUser(id=str(user.id), email=getattr(user, "email", None))
