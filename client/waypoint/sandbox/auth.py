"""Sandbox tokens: HS256 JWTs carrying the user's email as subject."""

from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, Query, Request
from jose import JWTError, jwt

from waypoint.config import settings
from waypoint.sandbox.state import SandboxState


def create_access_token(email: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.sandbox_token_expire_minutes)
    payload = {"sub": email, "exp": expire}
    return jwt.encode(payload, settings.sandbox_secret_key, algorithm=settings.sandbox_algorithm)


def get_state(request: Request) -> SandboxState:
    return request.app.state.sandbox


def current_user(request: Request, token: str = Query(...)) -> dict:
    try:
        payload = jwt.decode(token, settings.sandbox_secret_key, algorithms=[settings.sandbox_algorithm])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    user = get_state(request).users.get(payload.get("sub", ""))
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user
