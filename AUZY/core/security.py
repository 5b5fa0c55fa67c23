# file: AUZY/core/security.py
import asyncio
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer
from firebase_admin import auth

from AUZY.core.config import USER_META_COLLECTION
from AUZY.core.firebase import get_app, get_db

# ---------------------------
# Logging
# ---------------------------
logger = logging.getLogger("core.security")

security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "administrator"


# ---------------------------
# Identity verification
# ---------------------------
async def verify_token(header: Optional[str]) -> dict:
    """
    Verify an `Authorization: Bearer <Firebase ID token>` header.
    Returns the decoded token (uid, email, ...) or raises 401.
    """
    if not header:
        raise HTTPException(status_code=401, detail="Missing authorization token")

    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Malformed authorization header")

    try:
        decoded = await asyncio.to_thread(auth.verify_id_token, token.strip(), get_app())
    except (auth.InvalidIdTokenError, auth.ExpiredIdTokenError, auth.RevokedIdTokenError, ValueError) as e:
        logger.warning("Token verification failed: %s", e)
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    except Exception:
        logger.exception("❌ Error verifying token")
        raise HTTPException(status_code=500, detail="Error validating user")

    logger.debug("Token verified → uid=%s", decoded.get("uid"))
    return decoded


async def is_admin(user_id: str) -> bool:
    """True when user-meta/{user_id} carries the administrator role."""
    def _role():
        snap = get_db().collection(USER_META_COLLECTION).document(user_id).get()
        if not snap.exists:
            logger.warning("User metadata not found for uid=%s", user_id)
            return None
        return (snap.to_dict() or {}).get("role")

    return await asyncio.to_thread(_role) == ADMIN_ROLE


# ---------------------------
# Dependencies
# ---------------------------
async def get_current_user(request: Request, credentials=Depends(security)):
    header = request.headers.get("authorization") if credentials is None else f"Bearer {credentials.credentials}"
    user = await verify_token(header)
    request.scope["user"] = user
    return user


async def get_current_admin(current_user: dict = Depends(get_current_user)):
    try:
        admin = await is_admin(current_user.get("uid"))
    except Exception:
        logger.exception("❌ Error checking administrator role")
        raise HTTPException(status_code=500, detail="Error validating user")
    if not admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user
