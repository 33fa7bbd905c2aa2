import time
from typing import Any

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from services.admin.main import app as admin_app
from services.common.claims import BonusClaimRepository
from services.common.dependencies import get_repository
from services.user.main import app as user_app


class FakeTable:
    """In-memory stand-in for a boto3 DynamoDB Table keyed on PK and SK."""

    def __init__(self, page_size: int = 100) -> None:
        self.rows: dict[tuple[str, str], dict[str, Any]] = {}
        self.page_size = page_size
        self.fail_with: str | None = None
        self.calls: list[str] = []
        self.delay = 0.0

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if self.delay:
            time.sleep(self.delay)
        if self.fail_with:
            raise ClientError({"Error": {"Code": self.fail_with, "Message": "boom"}}, operation)

    def put_item(self, Item: dict[str, Any]) -> dict:
        self._check("PutItem")
        self.rows[(Item["PK"], Item["SK"])] = dict(Item)
        return {}

    def get_item(self, Key: dict[str, str]) -> dict:
        self._check("GetItem")
        row = self.rows.get((Key["PK"], Key["SK"]))
        return {"Item": dict(row)} if row else {}

    def _page(self, items: list[dict[str, Any]], start_key: dict | None) -> dict:
        items = sorted(items, key=lambda r: (r["PK"], r["SK"]))
        if start_key:
            marker = (start_key["PK"], start_key["SK"])
            items = [r for r in items if (r["PK"], r["SK"]) > marker]
        page = items[: self.page_size]
        response: dict[str, Any] = {"Items": [dict(r) for r in page]}
        if len(items) > self.page_size:
            response["LastEvaluatedKey"] = {"PK": page[-1]["PK"], "SK": page[-1]["SK"]}
        return response

    def query(self, KeyConditionExpression, ExclusiveStartKey: dict | None = None) -> dict:
        self._check("Query")
        pk = KeyConditionExpression.get_expression()["values"][1]
        return self._page([r for r in self.rows.values() if r["PK"] == pk], ExclusiveStartKey)

    def scan(self, ExclusiveStartKey: dict | None = None) -> dict:
        self._check("Scan")
        return self._page(list(self.rows.values()), ExclusiveStartKey)


@pytest.fixture
def table() -> FakeTable:
    return FakeTable()


@pytest.fixture
def repository(table) -> BonusClaimRepository:
    return BonusClaimRepository(table)


@pytest.fixture
def user_client(repository):
    """User service wired to the in-memory table."""
    user_app.dependency_overrides[get_repository] = lambda: repository
    yield TestClient(user_app)
    user_app.dependency_overrides.clear()


@pytest.fixture
def admin_client(repository):
    """Admin service wired to the same in-memory table."""
    admin_app.dependency_overrides[get_repository] = lambda: repository
    yield TestClient(admin_app)
    admin_app.dependency_overrides.clear()
