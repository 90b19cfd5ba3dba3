import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from ..errors import ClientError
from ..schemas import Identity, User
from ..services.workspace import Workspace
from .deps import get_client, get_identity, get_settings, get_workspace, load_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/user/profile", response_model=User)
async def profile(
    workspace: Workspace = Depends(get_workspace),
    identity: Identity = Depends(get_identity),
):
    return await load_user(workspace, identity)


@router.post("/auth/logout")
async def logout(request: Request):
    """End the session with the backend and drop the local state."""
    settings = get_settings(request)
    try:
        await get_client(request).logout()
    except ClientError as exc:
        logger.error("Logout error: %s", exc.message)

    token = request.cookies.get(settings.token_cookie)
    if token:
        request.app.state.workspaces.discard(token)

    response = RedirectResponse(settings.login_path, status_code=303)
    response.delete_cookie(settings.token_cookie)
    return response
