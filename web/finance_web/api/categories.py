from typing import Any
from fastapi import APIRouter, Body, Depends

from ..schemas import CategorySet
from ..services.workspace import Workspace
from .deps import get_workspace

router = APIRouter()


@router.get("", response_model=CategorySet)
async def list_categories(workspace: Workspace = Depends(get_workspace)):
    """Income and expense category names."""
    return await workspace.categories.refresh()


@router.get("/for-type", response_model=list[str])
async def categories_for_type(type: str, workspace: Workspace = Depends(get_workspace)):
    """Names for one type; any other value gives all names."""
    await workspace.categories.ensure_loaded()
    return workspace.categories.categories_for_type(type)


@router.post("", response_model=CategorySet, status_code=201)
async def create_category(
    form: dict[str, Any] = Body(...),
    workspace: Workspace = Depends(get_workspace),
):
    """Add a category and return the refreshed set."""
    await workspace.categories.ensure_loaded()
    return await workspace.categories.add_category(form.get("name", ""), form.get("type", ""))
