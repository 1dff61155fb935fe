import logging

from fastapi import APIRouter, Depends

from waypoint.sandbox.auth import current_user, get_state
from waypoint.sandbox.state import SandboxState

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/page-visit/{page}")
async def track_page_visit(
    page: str,
    user: dict = Depends(current_user),
    state: SandboxState = Depends(get_state),
):
    state.record_visit(user["email"], page)
    logger.debug(f"Page visit: {user['email']} → {page}")
    return f"Page visit tracked: {page}"
