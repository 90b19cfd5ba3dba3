from datetime import date
from decimal import Decimal

import pytest
from conftest import TODAY, budget, tx

from finance_web.errors import AuthFailure, BackendRejected, NetworkFailure, ValidationFailure
from finance_web.services.category_registry import FALLBACK_CATEGORIES
from finance_web.services.workspace import Workspace, WorkspaceRegistry


# --- Category registry ---

@pytest.mark.asyncio
async def test_registry_loads_categories(workspace):
    categories = await workspace.categories.refresh()
    assert categories.expense == ["Food", "Rent", "Travel"]
    assert workspace.categories.default_category("income") == "Salary"
    assert workspace.categories.error is None


@pytest.mark.asyncio
@pytest.mark.parametrize("failure", ["network", "garbage", 500])
async def test_registry_falls_back_on_failure(backend, workspace, failure):
    backend.failures["/api/categories"] = failure
    categories = await workspace.categories.refresh()
    assert categories == FALLBACK_CATEGORIES
    assert workspace.categories.error


@pytest.mark.asyncio
async def test_add_category_trims_and_refreshes(backend, workspace):
    await workspace.categories.refresh()
    categories = await workspace.categories.add_category("  Gifts ", "expense")
    assert categories.expense[-1] == "Gifts"
    assert backend.calls("POST", "/api/categories")


@pytest.mark.asyncio
@pytest.mark.parametrize("name, type_", [("   ", "expense"), ("Food", "expense"), ("Gifts", "transfer")])
async def test_add_category_validation_happens_before_network(backend, workspace, name, type_):
    await workspace.categories.refresh()
    with pytest.raises(ValidationFailure):
        await workspace.categories.add_category(name, type_)
    assert not backend.calls("POST", "/api/categories")


@pytest.mark.asyncio
async def test_add_category_surfaces_backend_failure(backend, workspace):
    backend.failures["/api/categories"] = 500
    with pytest.raises(BackendRejected):
        await workspace.categories.add_category("Gifts", "expense")


# --- Transaction store ---

@pytest.mark.asyncio
async def test_create_transaction_refetches(backend, workspace):
    await workspace.categories.refresh()
    form = {"amount": "250", "description": "Groceries", "category": "Food", "type": "expense", "date": "2026-10-18"}

    transactions = await workspace.store.create(form)

    assert len(transactions) == 1
    assert transactions[0].amount == Decimal("250")
    assert len(backend.calls("GET", "/api/transactions")) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("form, field", [
    ({"amount": "0", "description": "x", "category": "Food", "type": "expense", "date": "2026-10-18"}, "amount"),
    ({"amount": "-5", "description": "x", "category": "Food", "type": "expense", "date": "2026-10-18"}, "amount"),
    ({"amount": "5", "description": " ", "category": "Food", "type": "expense", "date": "2026-10-18"}, "description"),
    ({"amount": "5", "description": "x", "category": "Salary", "type": "expense", "date": "2026-10-18"}, "category"),
    ({"amount": "5", "description": "x", "category": "Food", "type": "expense"}, "date"),
])
async def test_create_transaction_validation(backend, workspace, form, field):
    await workspace.categories.refresh()
    with pytest.raises(ValidationFailure) as info:
        await workspace.store.create(form)
    assert info.value.field == field
    assert not backend.calls("POST", "/api/transactions")


@pytest.mark.asyncio
async def test_create_transaction_network_failure_propagates(backend, workspace):
    backend.failures["/api/transactions"] = "network"
    form = {"amount": "5", "description": "x", "category": "Food", "type": "expense", "date": "2026-10-18"}
    with pytest.raises(NetworkFailure):
        await workspace.store.create(form)


@pytest.mark.asyncio
async def test_delete_transaction_refetches(backend, workspace):
    backend.transactions = [tx("t1", 10, "Food"), tx("t2", 20, "Rent")]
    transactions = await workspace.store.delete("t1")
    assert [t.id for t in transactions] == ["t2"]


@pytest.mark.asyncio
async def test_recent_is_newest_first(backend, workspace):
    backend.transactions = [
        tx("t1", 10, "Food", date=date(2026, 10, 1)),
        tx("t2", 20, "Rent", date=date(2026, 10, 9)),
        tx("t3", 30, "Food", date=date(2026, 9, 9)),
    ]
    await workspace.store.refresh()
    assert [t.id for t in workspace.store.recent(2)] == ["t2", "t1"]


# --- Budget book ---

@pytest.mark.asyncio
async def test_budget_refresh_joins_both_lists(backend, workspace):
    backend.transactions = [
        tx("t1", 1200, "Food"),
        tx("t2", 300, "Food", date=date(2026, 9, 2)),
    ]
    backend.budgets = [budget("b1", "Food", 1000, month=9)]

    await workspace.budgets.refresh()
    [status] = workspace.budgets.statuses()

    assert status.spent == Decimal("1200")
    assert status.over_budget is True
    assert status.remaining == Decimal("-200")
    assert status.status_text == "Over by ₹200.00"


@pytest.mark.asyncio
async def test_budget_refresh_degrades_each_side(backend, workspace):
    backend.budgets = [budget("b1", "Food", 1000)]
    backend.failures["/api/transactions"] = "garbage"

    budgets = await workspace.budgets.refresh()

    assert len(budgets) == 1
    assert workspace.budgets.statuses()[0].spent == 0


@pytest.mark.asyncio
async def test_budget_refresh_short_circuits_on_401(backend, workspace):
    backend.failures["/api/budgets"] = 401
    with pytest.raises(AuthFailure):
        await workspace.budgets.refresh()


@pytest.mark.asyncio
async def test_budget_create_update_delete(backend, workspace):
    await workspace.budgets.create({"category": "Rent", "amount": "500", "month": 10, "year": 2026})
    assert workspace.budgets.budgets[0].amount == Decimal("500")

    budget_id = workspace.budgets.budgets[0].id
    await workspace.budgets.update_amount(budget_id, {"amount": "750"})
    assert workspace.budgets.budgets[0].amount == Decimal("750")

    await workspace.budgets.delete(budget_id)
    assert workspace.budgets.budgets == []


@pytest.mark.asyncio
@pytest.mark.parametrize("form, message", [
    ({"category": "", "amount": "500", "month": 10, "year": 2026}, "Please fill in all fields"),
    ({"category": "Rent", "amount": "", "month": 10, "year": 2026}, "Please fill in all fields"),
    ({"category": "Rent", "amount": "abc", "month": 10, "year": 2026}, "Please enter a valid amount greater than 0"),
    ({"category": "Rent", "amount": "0", "month": 10, "year": 2026}, "Please enter a valid amount greater than 0"),
])
async def test_budget_create_validation(backend, workspace, form, message):
    with pytest.raises(ValidationFailure) as info:
        await workspace.budgets.create(form)
    assert info.value.message == message
    assert not backend.calls("POST", "/api/budgets")


@pytest.mark.asyncio
async def test_budget_update_rejects_non_positive_amount(backend, workspace):
    with pytest.raises(ValidationFailure):
        await workspace.budgets.update_amount("b1", {"amount": "-1"})
    assert not backend.calls("PUT", "/api/budgets/b1")


@pytest.mark.asyncio
async def test_budget_update_missing_budget_is_rejected(backend, workspace):
    with pytest.raises(BackendRejected) as info:
        await workspace.budgets.update_amount("missing", {"amount": "10"})
    assert info.value.status_code == 404


@pytest.mark.asyncio
async def test_budget_form_defaults(workspace):
    await workspace.categories.refresh()
    defaults = workspace.budgets.form_defaults()
    assert defaults.category == "Food"
    assert (defaults.month, defaults.year) == (TODAY.month, TODAY.year)


@pytest.mark.asyncio
async def test_workspace_stats_and_form_defaults(backend, workspace):
    backend.transactions = [
        tx("t1", 5000, "Salary", type="income"),
        tx("t2", 700, "Rent"),
        tx("t3", 100, "Food", date=date(2026, 8, 1)),
    ]
    await workspace.store.refresh()
    await workspace.categories.refresh()

    stats = workspace.stats()
    assert stats.balance == Decimal("4200")
    assert stats.monthly_expenses == Decimal("700")

    form = workspace.transaction_form_defaults()
    assert form.category == "Food"
    assert form.date == TODAY


# --- Workspace registry ---

def test_registry_keeps_one_workspace_per_token(backend):
    registry = WorkspaceRegistry(lambda client: Workspace(client, clock=lambda: TODAY))
    first = registry.get("token-a", backend.client("token-a"))

    assert registry.get("token-a", backend.client("token-a")) is first
    assert registry.get("token-b", backend.client("token-b")) is not first
    assert first.client.token == "token-a"


def test_registry_evicts_least_recently_used(backend):
    registry = WorkspaceRegistry(lambda client: Workspace(client, clock=lambda: TODAY), max_size=2)
    for token in ("a", "b"):
        registry.get(token, backend.client(token))
    registry.get("a", backend.client("a"))
    registry.get("c", backend.client("c"))

    assert list(registry.workspaces) == ["a", "c"]

    registry.discard("a")
    assert list(registry.workspaces) == ["c"]
