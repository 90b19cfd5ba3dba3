import json
import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from ..errors import AuthFailure, BackendRejected, NetworkFailure, ParseFailure
from ..schemas import (
    Budget,
    BudgetAggregate,
    BudgetCreate,
    BudgetUpdate,
    CategoryAggregate,
    CategoryCreate,
    CategorySet,
    MonthlyAggregate,
    Transaction,
    TransactionCreate,
    User,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_transactions = TypeAdapter(list[Transaction])
_budgets = TypeAdapter(list[Budget])
_category_aggregates = TypeAdapter(list[CategoryAggregate])
_monthly = TypeAdapter(list[MonthlyAggregate])
_budget_comparison = TypeAdapter(list[BudgetAggregate])


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase or f"HTTP {response.status_code}"


class BackendClient:
    """Calls to the finance REST backend on behalf of one signed-in user.

    The underlying ``httpx.AsyncClient`` is shared by the whole process; the
    user's session token is attached to every request.
    """

    def __init__(self, http: httpx.AsyncClient, token: str | None, cookie_name: str = "token"):
        self.http = http
        self.token = token
        self.cookie_name = cookie_name

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
            headers["Cookie"] = f"{self.cookie_name}={self.token}"
        return headers

    async def request(self, method: str, path: str, payload: Any = None) -> Any:
        """Send a request and return the decoded JSON body (None when empty).

        Raises NetworkFailure, AuthFailure, BackendRejected or ParseFailure.
        """
        try:
            response = await self.http.request(method, path, json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            raise NetworkFailure(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 401:
            raise AuthFailure(f"{method} {path} returned 401")
        if response.is_error:
            raise BackendRejected(_error_message(response), response.status_code)

        if not response.content.strip():
            return None
        try:
            return json.loads(response.content)
        except ValueError as exc:
            raise ParseFailure(f"{method} {path} returned a non-JSON body") from exc

    async def _read(self, path: str, adapter: TypeAdapter[T], fallback: T) -> T:
        """GET a resource, degrading to ``fallback`` on anything but a 401."""
        try:
            body = await self.request("GET", path)
            if not isinstance(body, list):
                raise ParseFailure(f"GET {path} did not return a list")
            return adapter.validate_python(body)
        except ValidationError as exc:
            logger.warning("Malformed body from GET %s: %s", path, exc.error_count())
        except (NetworkFailure, ParseFailure, BackendRejected) as exc:
            logger.warning("Using fallback for GET %s: %s", path, exc.message)
        return fallback

    # --- Transactions ---

    async def fetch_transactions(self) -> list[Transaction]:
        return await self._read("/api/transactions", _transactions, [])

    async def create_transaction(self, data: TransactionCreate) -> Any:
        return await self.request("POST", "/api/transactions", data.model_dump(mode="json"))

    async def delete_transaction(self, transaction_id: str) -> None:
        await self.request("DELETE", f"/api/transactions/{transaction_id}")

    # --- Budgets ---

    async def fetch_budgets(self) -> list[Budget]:
        return await self._read("/api/budgets", _budgets, [])

    async def create_budget(self, data: BudgetCreate) -> Any:
        return await self.request("POST", "/api/budgets", data.model_dump(mode="json"))

    async def update_budget(self, budget_id: str, data: BudgetUpdate) -> Any:
        return await self.request("PUT", f"/api/budgets/{budget_id}", data.model_dump(mode="json"))

    async def delete_budget(self, budget_id: str) -> None:
        await self.request("DELETE", f"/api/budgets/{budget_id}")

    # --- Categories ---

    async def fetch_categories(self) -> CategorySet:
        """Raises on failure; the registry decides on the fallback set."""
        body = await self.request("GET", "/api/categories")
        try:
            return CategorySet.model_validate(body)
        except ValidationError as exc:
            raise ParseFailure("GET /api/categories returned a malformed category set") from exc

    async def create_category(self, data: CategoryCreate) -> Any:
        return await self.request("POST", "/api/categories", data.model_dump(mode="json"))

    # --- Analytics ---

    async def fetch_category_summary(self, type_: str) -> list[CategoryAggregate]:
        path = str(httpx.URL("/api/analytics/categories", params={"type": type_}))
        return await self._read(path, _category_aggregates, [])

    async def fetch_monthly(self) -> list[MonthlyAggregate]:
        return await self._read("/api/analytics/monthly", _monthly, [])

    async def fetch_budget_comparison(self) -> list[BudgetAggregate]:
        return await self._read("/api/analytics/budget-comparison", _budget_comparison, [])

    # --- User ---

    async def fetch_profile(self) -> User | None:
        """The user's profile, or None when it cannot be read."""
        try:
            body = await self.request("GET", "/api/user/profile")
            return User.model_validate(body)
        except ValidationError:
            logger.warning("Malformed profile body")
        except (NetworkFailure, ParseFailure, BackendRejected) as exc:
            logger.warning("Could not load profile: %s", exc.message)
        return None

    async def logout(self) -> None:
        await self.request("POST", "/api/auth/logout")
