from typing import Any
from fastapi import APIRouter, Body, Depends

from ..schemas import Transaction
from ..services.workspace import Workspace
from .deps import get_workspace

router = APIRouter()


@router.post("", response_model=list[Transaction], status_code=201)
async def create_transaction(
    form: dict[str, Any] = Body(...),
    workspace: Workspace = Depends(get_workspace),
):
    """Create a transaction and return the refreshed list."""
    await workspace.categories.ensure_loaded()
    return await workspace.store.create(form)


@router.delete("/{transaction_id}", response_model=list[Transaction])
async def delete_transaction(
    transaction_id: str,
    workspace: Workspace = Depends(get_workspace),
):
    """Delete a transaction and return the refreshed list."""
    return await workspace.store.delete(transaction_id)
