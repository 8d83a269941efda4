# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# STATUS: Tests - In-memory Table Storage double and wiring helpers
# PURPOSE: Exercise repositories, services and handlers without Azure
# CREATED: 18 OCT 2026
# ============================================================================
"""
Shared fixtures.

FakeTableClient mimics the parts of azure.data.tables.aio.TableClient the
repositories use: rows carry etag/timestamp metadata, every write issues a
new etag, and failures surface as the real azure.core exceptions.
"""

import itertools
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from azure.core import MatchConditions
from azure.core.exceptions import (
    ResourceExistsError,
    ResourceModifiedError,
    ResourceNotFoundError,
)

from core.config import reset_defaults


class FakeEntity(dict):
    """dict with a .metadata attribute, like azure.data.tables.TableEntity."""

    def __init__(self, data: Dict[str, Any], metadata: Dict[str, Any]):
        super().__init__(data)
        self.metadata = metadata


class _AsyncEntityIterator:
    def __init__(self, entities: List[FakeEntity], error: Optional[Exception] = None):
        self._entities = iter(entities)
        self._error = error

    def __aiter__(self):
        return self

    async def __anext__(self) -> FakeEntity:
        if self._error is not None:
            raise self._error
        try:
            return next(self._entities)
        except StopIteration:
            raise StopAsyncIteration


class FakeTableClient:
    """In-memory stand-in for an async TableClient."""

    def __init__(self, table_name: str = "Products", exists: bool = True):
        self.table_name = table_name
        self.exists = exists
        self.rows: Dict[Tuple[str, str], FakeEntity] = {}
        self.error: Optional[Exception] = None
        # Runs once, just before the next update_entity precondition check
        self.before_update: Optional[Callable[["FakeTableClient"], None]] = None
        self.update_calls: List[Dict[str, Any]] = []
        # Runs once, just before the next delete_entity precondition check
        self.before_delete: Optional[Callable[["FakeTableClient"], None]] = None
        self.delete_calls: List[Dict[str, Any]] = []
        self._versions = itertools.count(1)

    # -- helpers for tests -------------------------------------------------

    def _metadata(self) -> Dict[str, Any]:
        return {
            "etag": f"W/\"datetime'{next(self._versions)}'\"",
            "timestamp": datetime.now(timezone.utc),
        }

    def seed(self, partition_key: str, row_key: str, **properties) -> str:
        """Insert a row directly; returns its etag."""
        metadata = self._metadata()
        row = {"PartitionKey": partition_key, "RowKey": row_key, **properties}
        self.rows[(partition_key, row_key)] = FakeEntity(row, metadata)
        return metadata["etag"]

    def touch(self, partition_key: str, row_key: str, **properties) -> str:
        """Simulate another writer replacing a row; returns the new etag."""
        return self.seed(partition_key, row_key, **properties)

    def etag_of(self, partition_key: str, row_key: str) -> str:
        return self.rows[(partition_key, row_key)].metadata["etag"]

    def _check(self) -> None:
        if self.error is not None:
            raise self.error
        if not self.exists:
            raise ResourceNotFoundError("The table specified does not exist.")

    # -- TableClient surface -----------------------------------------------

    async def create_table(self) -> None:
        if self.exists:
            raise ResourceExistsError("The table specified already exists.")
        self.exists = True

    async def get_entity(self, partition_key: str, row_key: str, **kwargs) -> FakeEntity:
        self._check()
        row = self.rows.get((partition_key, row_key))
        if row is None:
            raise ResourceNotFoundError("The specified resource does not exist.")
        return FakeEntity(row, dict(row.metadata))

    def query_entities(self, query_filter: str, parameters: Optional[Dict[str, Any]] = None, **kwargs):
        if self.error is not None or not self.exists:
            error = self.error or ResourceNotFoundError("The table specified does not exist.")
            return _AsyncEntityIterator([], error)
        partition_key = (parameters or {}).get("pk")
        matches = [
            FakeEntity(row, dict(row.metadata))
            for (pk, _), row in self.rows.items()
            if pk == partition_key
        ]
        return _AsyncEntityIterator(matches)

    async def create_entity(self, entity: Dict[str, Any], **kwargs) -> Dict[str, Any]:
        self._check()
        key = (entity["PartitionKey"], entity["RowKey"])
        if key in self.rows:
            raise ResourceExistsError("The specified entity already exists.")
        metadata = self._metadata()
        self.rows[key] = FakeEntity(entity, metadata)
        return dict(metadata)

    async def update_entity(
        self,
        entity: Dict[str, Any],
        mode=None,
        etag: Optional[str] = None,
        match_condition: Optional[MatchConditions] = None,
        **kwargs,
    ) -> Dict[str, Any]:
        self._check()
        self.update_calls.append({"entity": dict(entity), "etag": etag, "match_condition": match_condition})

        if self.before_update is not None:
            hook, self.before_update = self.before_update, None
            hook(self)

        key = (entity["PartitionKey"], entity["RowKey"])
        current = self.rows.get(key)
        if current is None:
            raise ResourceNotFoundError("The specified resource does not exist.")
        if match_condition == MatchConditions.IfNotModified and etag != current.metadata["etag"]:
            raise ResourceModifiedError("The update condition specified in the request was not satisfied.")

        metadata = self._metadata()
        self.rows[key] = FakeEntity(entity, metadata)
        return dict(metadata)

    async def delete_entity(
        self,
        partition_key: str,
        row_key: str,
        etag: Optional[str] = None,
        match_condition: Optional[MatchConditions] = None,
        **kwargs,
    ) -> None:
        self._check()
        self.delete_calls.append({"row_key": row_key, "etag": etag, "match_condition": match_condition})

        if self.before_delete is not None:
            hook, self.before_delete = self.before_delete, None
            hook(self)

        current = self.rows.get((partition_key, row_key))
        # The async SDK treats a 404 on delete as success
        if current is None:
            return
        if match_condition == MatchConditions.IfNotModified and etag != current.metadata["etag"]:
            raise ResourceModifiedError("The update condition specified in the request was not satisfied.")
        del self.rows[(partition_key, row_key)]


def service_factory(service):
    """Wrap a ready-made service as an `open_service` factory for handlers."""

    @asynccontextmanager
    async def _open():
        yield service

    return _open


@pytest.fixture
def products_table():
    return FakeTableClient("Products")


@pytest.fixture
def orders_table():
    return FakeTableClient("Orders")


@pytest.fixture(autouse=True)
def _fresh_defaults():
    reset_defaults()
    yield
    reset_defaults()
