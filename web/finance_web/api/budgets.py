from typing import Any
from fastapi import APIRouter, Body, Depends

from ..schemas import BudgetStatus
from ..services.workspace import Workspace
from .deps import get_workspace

router = APIRouter()


@router.get("", response_model=list[BudgetStatus])
async def list_budgets(workspace: Workspace = Depends(get_workspace)):
    """Budgets with spending for the current month."""
    await workspace.budgets.refresh()
    return workspace.budgets.statuses()


@router.post("", response_model=list[BudgetStatus], status_code=201)
async def create_budget(
    form: dict[str, Any] = Body(...),
    workspace: Workspace = Depends(get_workspace),
):
    await workspace.budgets.create(form)
    return workspace.budgets.statuses()


@router.put("/{budget_id}", response_model=list[BudgetStatus])
async def update_budget(
    budget_id: str,
    form: dict[str, Any] = Body(...),
    workspace: Workspace = Depends(get_workspace),
):
    """Change a budget's cap."""
    await workspace.budgets.update_amount(budget_id, form)
    return workspace.budgets.statuses()


@router.delete("/{budget_id}", response_model=list[BudgetStatus])
async def delete_budget(budget_id: str, workspace: Workspace = Depends(get_workspace)):
    await workspace.budgets.delete(budget_id)
    return workspace.budgets.statuses()
