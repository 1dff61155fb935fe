from fastapi import APIRouter, Depends

from waypoint.sandbox.auth import current_user, get_state
from waypoint.sandbox.state import NO_WIDGET_MESSAGE, SandboxState

router = APIRouter()


@router.post("/widget/{page}")
async def get_widget(
    page: str,
    user: dict = Depends(current_user),
    state: SandboxState = Depends(get_state),
):
    """Directive object, JSON-encoded directive string, or a plain acknowledgement."""
    return state.widgets.get(page, NO_WIDGET_MESSAGE)
