from typing import Any
from fastapi import APIRouter, Body, Depends

from ..schemas import AnalyticsPage, Identity, PageUser, User
from ..services.workspace import Workspace
from .deps import get_identity, get_workspace
from .pages import analytics_view

router = APIRouter()


def _token_user(identity: Identity) -> User:
    return User(id=identity.subject, username=identity.username, email=identity.email)


@router.patch("/filter", response_model=AnalyticsPage)
async def edit_filter(
    changes: dict[str, Any] = Body(...),
    workspace: Workspace = Depends(get_workspace),
    identity: Identity = Depends(get_identity),
):
    """Edit the draft filter; the displayed breakdown does not change."""
    await workspace.categories.ensure_loaded()
    workspace.filters.edit_draft_many(changes)
    return analytics_view(workspace, _token_user(identity))


@router.post("/filter/submit", response_model=AnalyticsPage)
async def submit_filter(
    workspace: Workspace = Depends(get_workspace),
    identity: Identity = Depends(get_identity),
):
    """Apply the draft filter and recompute the breakdown."""
    await workspace.categories.ensure_loaded()
    await workspace.filters.submit()
    return analytics_view(workspace, _token_user(identity))


@router.post("/filter/reset", response_model=AnalyticsPage)
async def reset_filter(
    workspace: Workspace = Depends(get_workspace),
    identity: Identity = Depends(get_identity),
):
    """Back to the default filter, recomputed from the loaded transactions."""
    workspace.filters.reset()
    return analytics_view(workspace, _token_user(identity))
