from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from waypoint.sandbox.auth import create_access_token, get_state
from waypoint.sandbox.state import SandboxState

router = APIRouter()


class LoginRequest(BaseModel):
    email: str
    password: str


@router.post("/login")
async def login(req: LoginRequest, state: SandboxState = Depends(get_state)):
    if state.passwords.get(req.email) != req.password:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return {
        "access_token": create_access_token(req.email),
        "token_type": "bearer",
        "user": state.users[req.email],
    }
