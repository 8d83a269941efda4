# ============================================================================
# PRODUCT QUEUE RECONCILER TESTS
# ============================================================================
# STATUS: Tests - product-queue message handling
# PURPOSE: Verify ProductQueueReconciler dispatch, skips and conflict retries
# CREATED: 18 OCT 2026
# ============================================================================
"""
Product Queue Reconciler Tests

Unit tests for:
- create / update / delete dispatch (action matched case-insensitively)
- missing targets and unknown actions consumed without error
- re-read and retry on version conflicts, bounded by max_update_attempts
- queue body deserialization (PascalCase wire keys)

Run with:
    pytest tests/test_product_reconciler.py -v
"""

import asyncio
import logging
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from core.contracts import ReconcileOutcome
from core.models import Product, ProductQueueMessage, UpdateResult
from function.blueprints.product_queue_bp import reconcile_product_message
from repositories.product_repo import PARTITION_KEY, ProductRepository
from services import ProductConflictError, ProductQueueReconciler, ProductService

from conftest import service_factory


# ============================================================================
# HELPERS
# ============================================================================

def _make_message(action="update", product_id="", name="Widget", price="9.99", quantity=10):
    """Create a test ProductQueueMessage."""
    return ProductQueueMessage(
        product_id=product_id,
        action=action,
        product_name=name,
        price=Decimal(price),
        quantity=quantity,
    )


def _build(table, max_update_attempts=3):
    service = ProductService(ProductRepository(table))
    return service, ProductQueueReconciler(service, max_update_attempts=max_update_attempts)


def _seed(table, product_id="p1", name="Widget", price=9.99, quantity=10):
    return table.seed(PARTITION_KEY, product_id, Name=name, Price=price, Quantity=quantity)


# ============================================================================
# DISPATCH
# ============================================================================

class TestDispatch:
    """Each recognized action maps onto one ProductService call."""

    def test_create(self, products_table):
        service, reconciler = _build(products_table)

        outcome = asyncio.run(reconciler.apply(_make_message("create", name="Gizmo", price="4.50", quantity=7)))

        assert outcome == ReconcileOutcome.CREATED
        products = asyncio.run(service.get_all_products())
        assert len(products) == 1
        assert products[0].name == "Gizmo"
        assert products[0].price == Decimal("4.5")
        assert products[0].quantity == 7

    def test_create_ignores_message_product_id(self, products_table):
        service, reconciler = _build(products_table)

        asyncio.run(reconciler.apply(_make_message("create", product_id="caller-id")))

        products = asyncio.run(service.get_all_products())
        assert products[0].id != "caller-id"

    def test_update_overwrites_fields(self, products_table):
        _seed(products_table)
        service, reconciler = _build(products_table)

        outcome = asyncio.run(
            reconciler.apply(_make_message("update", "p1", name="Gadget", price="12.5", quantity=8))
        )

        assert outcome == ReconcileOutcome.UPDATED
        product = asyncio.run(service.get_product("p1"))
        assert (product.name, product.price, product.quantity) == ("Gadget", Decimal("12.5"), 8)

    def test_delete(self, products_table):
        _seed(products_table)
        service, reconciler = _build(products_table)

        outcome = asyncio.run(reconciler.apply(_make_message("delete", "p1")))

        assert outcome == ReconcileOutcome.DELETED
        assert asyncio.run(service.get_product("p1")) is None

    @pytest.mark.parametrize("action", ["Update", "UPDATE", " update "])
    def test_action_is_case_insensitive(self, products_table, action):
        _seed(products_table)
        _, reconciler = _build(products_table)

        outcome = asyncio.run(reconciler.apply(_make_message(action, "p1", quantity=1)))

        assert outcome == ReconcileOutcome.UPDATED


# ============================================================================
# SKIPPED MESSAGES
# ============================================================================

class TestSkipped:
    """Business conditions consume the message and leave the store alone."""

    def test_update_nonexistent_leaves_store_unchanged(self, products_table):
        _seed(products_table, "other")
        before = {k: (dict(v), dict(v.metadata)) for k, v in products_table.rows.items()}
        _, reconciler = _build(products_table)

        outcome = asyncio.run(reconciler.apply(_make_message("update", "nonexistent-id")))

        assert outcome == ReconcileOutcome.SKIPPED_NOT_FOUND
        assert outcome.is_skipped()
        after = {k: (dict(v), dict(v.metadata)) for k, v in products_table.rows.items()}
        assert after == before

    def test_delete_nonexistent(self, products_table):
        _seed(products_table, "other")
        _, reconciler = _build(products_table)

        outcome = asyncio.run(reconciler.apply(_make_message("delete", "nonexistent-id")))

        assert outcome == ReconcileOutcome.SKIPPED_NOT_FOUND
        assert (PARTITION_KEY, "other") in products_table.rows

    def test_update_without_product_id(self, products_table):
        _, reconciler = _build(products_table)

        outcome = asyncio.run(reconciler.apply(_make_message("update", "")))

        assert outcome == ReconcileOutcome.SKIPPED_NOT_FOUND
        assert products_table.update_calls == []

    @pytest.mark.parametrize("action", ["archive", "", "creat"])
    def test_unknown_action(self, products_table, action):
        _seed(products_table)
        _, reconciler = _build(products_table)

        outcome = asyncio.run(reconciler.apply(_make_message(action, "p1", name="Changed")))

        assert outcome == ReconcileOutcome.SKIPPED_UNKNOWN_ACTION
        assert products_table.rows[(PARTITION_KEY, "p1")]["Name"] == "Widget"


# ============================================================================
# CONFLICTS
# ============================================================================

class TestConflicts:
    """A lost race is re-read and re-applied, a bounded number of times."""

    def test_conflict_then_success(self, products_table):
        _seed(products_table)
        service, reconciler = _build(products_table)
        products_table.before_update = lambda t: t.touch(
            PARTITION_KEY, "p1", Name="Concurrent", Price=1.0, Quantity=1
        )

        outcome = asyncio.run(reconciler.apply(_make_message("update", "p1", name="Queued")))

        assert outcome == ReconcileOutcome.UPDATED
        assert len(products_table.update_calls) == 2
        assert asyncio.run(service.get_product("p1")).name == "Queued"

    def test_gives_up_after_max_attempts(self):
        service = AsyncMock()
        service.get_product.return_value = Product(id="p1", name="Widget", price=Decimal("1"), quantity=1, etag="t1")
        service.update_product.return_value = UpdateResult.conflict()
        reconciler = ProductQueueReconciler(service, max_update_attempts=2)

        with pytest.raises(ProductConflictError, match="2 attempts") as exc_info:
            asyncio.run(reconciler.apply(_make_message("update", "p1")))

        assert exc_info.value.product_id == "p1"
        assert service.update_product.await_count == 2

    def test_deleted_during_retry(self):
        service = AsyncMock()
        service.get_product.side_effect = [
            Product(id="p1", name="Widget", price=Decimal("1"), quantity=1, etag="t1"),
            None,
        ]
        service.update_product.return_value = UpdateResult.conflict()
        reconciler = ProductQueueReconciler(service, max_update_attempts=3)

        outcome = asyncio.run(reconciler.apply(_make_message("update", "p1")))

        assert outcome == ReconcileOutcome.SKIPPED_NOT_FOUND
        assert service.update_product.await_count == 1

    def test_attempts_default_from_environment(self, monkeypatch):
        monkeypatch.setenv("PRODUCT_UPDATE_MAX_ATTEMPTS", "5")

        reconciler = ProductQueueReconciler(AsyncMock())

        assert reconciler.max_update_attempts == 5


# ============================================================================
# QUEUE BODY
# ============================================================================

class TestQueueBody:
    """reconcile_product_message() parses the wire body, then applies it."""

    def test_pascal_case_body(self, products_table):
        _seed(products_table)
        service = ProductService(ProductRepository(products_table))
        body = '{"ProductId": "p1", "Action": "Update", "ProductName": "Gadget", "Price": 12.5, "Quantity": 8}'

        outcome = asyncio.run(reconcile_product_message(body, open_service=service_factory(service)))

        assert outcome == ReconcileOutcome.UPDATED
        assert products_table.rows[(PARTITION_KEY, "p1")]["Name"] == "Gadget"

    def test_nonexistent_update_body_completes(self, products_table):
        service = ProductService(ProductRepository(products_table))
        body = '{"ProductId": "nonexistent-id", "Action": "update", "ProductName": "X", "Price": 1, "Quantity": 1}'

        outcome = asyncio.run(reconcile_product_message(body, open_service=service_factory(service)))

        assert outcome == ReconcileOutcome.SKIPPED_NOT_FOUND
        assert products_table.rows == {}

    def test_skipped_message_is_logged_as_warning(self, products_table, caplog):
        service = ProductService(ProductRepository(products_table))
        body = '{"ProductId": "p1", "Action": "archive"}'

        with caplog.at_level(logging.WARNING, logger="function.blueprints.product_queue_bp"):
            outcome = asyncio.run(reconcile_product_message(body, open_service=service_factory(service)))

        assert outcome == ReconcileOutcome.SKIPPED_UNKNOWN_ACTION
        assert "consumed without changes: skipped_unknown_action" in caplog.text

    def test_applied_message_logs_no_warning(self, products_table, caplog):
        _seed(products_table)
        service = ProductService(ProductRepository(products_table))
        body = '{"ProductId": "p1", "Action": "update", "ProductName": "Gadget", "Price": 1, "Quantity": 1}'

        with caplog.at_level(logging.WARNING, logger="function.blueprints.product_queue_bp"):
            asyncio.run(reconcile_product_message(body, open_service=service_factory(service)))

        assert "consumed without changes" not in caplog.text

    def test_invalid_json_propagates(self, products_table):
        service = ProductService(ProductRepository(products_table))

        with pytest.raises(ValidationError):
            asyncio.run(reconcile_product_message("not json", open_service=service_factory(service)))
