import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from delivery.auth.permissions import PERMISSIONS, is_allowed
from delivery.core.config import Settings
from delivery.core.security import decode_access_token

logger = logging.getLogger("delivery.auth")

bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    settings: Settings = Depends(get_settings),
):
    if creds is None:
        raise HTTPException(status_code=401, detail="Not Authorized")

    try:
        payload = decode_access_token(creds.credentials, settings)
    except JWTError:
        raise HTTPException(status_code=401, detail="Token expired or invalid")

    user_id = payload.get("id")
    role = payload.get("role")
    if not user_id or not role:
        raise HTTPException(status_code=401, detail="Token expired or invalid")
    return {"id": user_id, "role": role}


def require_permission(endpoint: str):
    if endpoint not in PERMISSIONS:
        raise KeyError(f"no permission entry for {endpoint}")

    def _guard(user=Depends(get_current_user)):
        if not is_allowed(endpoint, user["role"]):
            logger.warning(f"[Auth] role '{user['role']}' denied for {endpoint}")
            raise HTTPException(status_code=403, detail="Not authorized for this role")
        return user
    return _guard
