import asyncio
from fastapi import APIRouter, Depends

from ..schemas import (
    AnalyticsPage,
    BudgetPage,
    DashboardPage,
    Identity,
    PageUser,
    PublicPage,
)
from ..services.aggregation import category_insights
from ..services.workspace import Workspace
from .deps import get_identity, get_workspace, load_user

router = APIRouter()


@router.get("/dashboard", response_model=DashboardPage)
async def dashboard(
    workspace: Workspace = Depends(get_workspace),
    identity: Identity = Depends(get_identity),
):
    """Totals, recent transactions and the monthly expense series."""
    user, _, monthly, categories = await asyncio.gather(
        load_user(workspace, identity),
        workspace.store.refresh(),
        workspace.client.fetch_monthly(),
        workspace.categories.refresh(),
    )
    return DashboardPage(
        user=PageUser.from_user(user),
        stats=workspace.stats(),
        recent_transactions=workspace.store.recent(),
        monthly=monthly,
        categories=categories,
        form=workspace.transaction_form_defaults(),
    )


def analytics_view(workspace: Workspace, user) -> AnalyticsPage:
    filters = workspace.filters
    return AnalyticsPage(
        user=PageUser.from_user(user),
        draft=filters.draft,
        applied=filters.applied,
        category_data=filters.category_data,
        insights=category_insights(filters.category_data),
        available_categories=filters.available_categories(),
        loading=filters.loading,
    )


@router.get("/analytics", response_model=AnalyticsPage)
async def analytics(
    workspace: Workspace = Depends(get_workspace),
    identity: Identity = Depends(get_identity),
):
    """Category breakdown for the applied filter."""
    user, _, _ = await asyncio.gather(
        load_user(workspace, identity),
        workspace.store.refresh(),
        workspace.categories.refresh(),
    )
    workspace.filters.recompute()
    return analytics_view(workspace, user)


@router.get("/budget", response_model=BudgetPage)
async def budget(
    workspace: Workspace = Depends(get_workspace),
    identity: Identity = Depends(get_identity),
):
    """Budgets with this month's spending, totals and the comparison series."""
    user, _, _, comparison = await asyncio.gather(
        load_user(workspace, identity),
        workspace.budgets.refresh(),
        workspace.categories.refresh(),
        workspace.budgets.comparison(),
    )
    return BudgetPage(
        user=PageUser.from_user(user),
        budgets=workspace.budgets.statuses(),
        totals=workspace.budgets.totals(),
        insights=workspace.budgets.insights(),
        comparison=comparison,
        expense_categories=workspace.categories.categories_for_type("expense"),
        form=workspace.budgets.form_defaults(),
    )


@router.get("/auth/login", response_model=PublicPage)
def login_page():
    return PublicPage(page="login", links={"register": "/auth/register"})


@router.get("/auth/register", response_model=PublicPage)
def register_page():
    return PublicPage(page="register", links={"login": "/auth/login"})
