import itertools
import json
import time
from datetime import date

import httpx
import jwt
import pytest

from finance_web.config import Settings
from finance_web.services.backend_client import BackendClient
from finance_web.services.workspace import Workspace

TODAY = date(2026, 10, 19)
SECRET = "test-secret"


def tx(id, amount, category, type="expense", date=TODAY, description=""):
    """Transaction in the backend's wire format."""
    return {
        "id": id,
        "amount": amount,
        "description": description or category,
        "category": category,
        "type": type,
        "date": date.isoformat() if hasattr(date, "isoformat") else date,
    }


def budget(id, category, amount, month=TODAY.month, year=TODAY.year):
    return {"id": id, "category": category, "amount": amount, "month": month, "year": year}


def make_token(secret=SECRET, expires_in=3600, **claims):
    payload = {
        "userId": "u1",
        "email": "asha@example.com",
        "username": "asha",
        "exp": int(time.time()) + expires_in,
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


class FakeBackend:
    """In-memory stand-in for the finance REST backend."""

    def __init__(self):
        self.transactions: list[dict] = []
        self.budgets: list[dict] = []
        self.categories = {
            "income": ["Salary", "Freelance"],
            "expense": ["Food", "Rent", "Travel"],
        }
        self.category_summary: list[dict] = []
        self.monthly: list[dict] = []
        self.comparison: list[dict] = []
        self.profile = {"id": "u1", "username": "asha", "email": "asha@example.com"}
        self.requests: list[httpx.Request] = []
        # path -> "network", "garbage" or an HTTP status code
        self.failures: dict[str, object] = {}
        self._ids = itertools.count(100)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, token: str | None = "token") -> BackendClient:
        http = httpx.AsyncClient(transport=self.transport(), base_url="http://backend")
        return BackendClient(http, token)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        method = request.method

        failure = self.failures.get(path)
        if failure == "network":
            raise httpx.ConnectError("connection refused", request=request)
        if failure == "garbage":
            return httpx.Response(200, text="<html>oops</html>")
        if isinstance(failure, int):
            return httpx.Response(failure, json={"error": f"failed with {failure}"})

        body = json.loads(request.content) if request.content else None
        parts = path.strip("/").split("/")

        if path == "/api/transactions":
            if method == "GET":
                return httpx.Response(200, json=self.transactions)
            record = {"id": str(next(self._ids)), **body}
            self.transactions.append(record)
            return httpx.Response(201, json=record)
        if parts[:2] == ["api", "transactions"] and method == "DELETE":
            self.transactions = [t for t in self.transactions if t["id"] != parts[2]]
            return httpx.Response(204)

        if path == "/api/budgets":
            if method == "GET":
                return httpx.Response(200, json=self.budgets)
            record = {"id": str(next(self._ids)), **body}
            self.budgets.append(record)
            return httpx.Response(201, json=record)
        if parts[:2] == ["api", "budgets"]:
            budget_id = parts[2]
            if method == "PUT":
                for b in self.budgets:
                    if b["id"] == budget_id:
                        b["amount"] = body["amount"]
                        return httpx.Response(200, json=b)
                return httpx.Response(404, json={"error": "Budget not found"})
            if method == "DELETE":
                self.budgets = [b for b in self.budgets if b["id"] != budget_id]
                return httpx.Response(204)

        if path == "/api/categories":
            if method == "GET":
                return httpx.Response(200, json=self.categories)
            names = self.categories[body["type"]]
            if body["name"] in names:
                return httpx.Response(409, json={"error": "Category already exists"})
            names.append(body["name"])
            return httpx.Response(201, json=body)

        if path == "/api/analytics/categories":
            return httpx.Response(200, json=self.category_summary)
        if path == "/api/analytics/monthly":
            return httpx.Response(200, json=self.monthly)
        if path == "/api/analytics/budget-comparison":
            return httpx.Response(200, json=self.comparison)
        if path == "/api/user/profile":
            return httpx.Response(200, json=self.profile)
        if path == "/api/auth/logout":
            return httpx.Response(200, json={"message": "Logged out"})

        return httpx.Response(404, json={"error": "Not found"})


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def workspace(backend):
    return Workspace(backend.client(), clock=lambda: TODAY)


@pytest.fixture
def settings():
    return Settings(jwt_secret=SECRET, api_url="http://backend", log_level="WARNING")
