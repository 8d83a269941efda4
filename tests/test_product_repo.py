# ============================================================================
# PRODUCT REPOSITORY TESTS
# ============================================================================
# STATUS: Tests - Product CRUD and optimistic concurrency
# PURPOSE: Verify ProductRepository against an in-memory table client
# CREATED: 18 OCT 2026
# ============================================================================
"""
Product Repository Tests

Unit tests for:
- create / get_by_id round trip and id assignment
- update outcomes (UPDATED, NOT_FOUND, CONFLICT) and the ETag precondition
- delete of present and absent rows
- row mapping (Price stored as an exact decimal string, read back as Decimal)
- transport failures surfacing as RepositoryError

Run with:
    pytest tests/test_product_repo.py -v
"""

import asyncio
from decimal import Decimal

import pytest
from azure.core import MatchConditions
from azure.core.exceptions import HttpResponseError, ServiceRequestError

from conftest import FakeTableClient
from core.contracts import UpdateOutcome
from core.models import Product
from infrastructure.base_repository import RepositoryError
from repositories.product_repo import PARTITION_KEY, ProductRepository


# ============================================================================
# HELPERS
# ============================================================================

def _make_product(name="Widget", price="9.99", quantity=10, **kwargs):
    """Create a test Product."""
    return Product(name=name, price=Decimal(price), quantity=quantity, **kwargs)


def _create(repo, product=None):
    return asyncio.run(repo.create(product or _make_product()))


# ============================================================================
# CREATE / READ
# ============================================================================

class TestCreateAndRead:
    """create() assigns ids; get_by_id() returns what was stored."""

    def test_create_assigns_id_and_etag(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)

        assert created.id
        assert created.etag == products_table.etag_of(PARTITION_KEY, created.id)

    def test_create_ignores_caller_id(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo, _make_product(id="chosen-by-caller"))

        assert created.id != "chosen-by-caller"
        assert (PARTITION_KEY, "chosen-by-caller") not in products_table.rows

    def test_round_trip_matches_except_id_and_etag(self, products_table):
        repo = ProductRepository(products_table)
        original = _make_product()
        created = _create(repo, original)

        fetched = asyncio.run(repo.get_by_id(created.id))

        assert fetched is not None
        assert fetched.id == created.id
        assert (fetched.name, fetched.price, fetched.quantity) == (original.name, original.price, original.quantity)
        assert fetched.price == Decimal("9.99")
        assert fetched.etag == created.etag
        assert fetched.timestamp is not None

    def test_sequential_creates_have_distinct_ids(self, products_table):
        repo = ProductRepository(products_table)
        ids = {_create(repo).id for _ in range(25)}

        assert len(ids) == 25
        assert len(products_table.rows) == 25

    def test_get_missing_returns_none(self, products_table):
        repo = ProductRepository(products_table)
        assert asyncio.run(repo.get_by_id("never-created")) is None

    def test_get_all_returns_every_product(self, products_table):
        repo = ProductRepository(products_table)
        _create(repo, _make_product(name="A"))
        _create(repo, _make_product(name="B"))
        products_table.seed("Other", "x", Name="not a product")

        names = sorted(p.name for p in asyncio.run(repo.get_all()))

        assert names == ["A", "B"]

    def test_get_all_empty(self, products_table):
        repo = ProductRepository(products_table)
        assert asyncio.run(repo.get_all()) == []


# ============================================================================
# ROW MAPPING
# ============================================================================

class TestRowMapping:
    """Products rows: Name, Price (decimal string), Quantity (int)."""

    def test_row_shape(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo, _make_product(price="12.50", quantity=3))

        row = products_table.rows[(PARTITION_KEY, created.id)]

        assert row["Name"] == "Widget"
        assert row["Price"] == "12.50"
        assert row["Quantity"] == 3

    def test_long_price_survives_round_trip(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo, _make_product(price="1234567890.123456789"))

        product = asyncio.run(repo.get_by_id(created.id))

        assert product.price == Decimal("1234567890.123456789")
        assert (product.name, product.quantity) == ("Widget", 10)

    def test_long_price_survives_update(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)

        result = asyncio.run(repo.update(created.model_copy(update={"price": Decimal("0.10000000000000000555")})))

        assert result.ok
        assert asyncio.run(repo.get_by_id(created.id)).price == Decimal("0.10000000000000000555")

    def test_double_price_row_still_loads(self, products_table):
        products_table.seed(PARTITION_KEY, "p1", Name="Widget", Price=9.99, Quantity=1)
        repo = ProductRepository(products_table)

        product = asyncio.run(repo.get_by_id("p1"))

        assert isinstance(product.price, Decimal)
        assert product.price == Decimal("9.99")


# ============================================================================
# UPDATE
# ============================================================================

class TestUpdate:
    """update() is conditioned on an ETag and reports outcomes as values."""

    def test_update_with_current_etag(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)

        changed = created.model_copy(update={"name": "Gadget", "price": Decimal("12.5"), "quantity": 8})
        result = asyncio.run(repo.update(changed))

        assert result.outcome == UpdateOutcome.UPDATED
        assert result.ok
        assert result.product.name == "Gadget"
        assert result.product.etag != created.etag
        assert result.product.etag == products_table.etag_of(PARTITION_KEY, created.id)

        stored = asyncio.run(repo.get_by_id(created.id))
        assert stored.name == "Gadget"
        assert stored.price == Decimal("12.5")
        assert stored.quantity == 8

    def test_update_without_etag_uses_live_etag(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)
        live = products_table.etag_of(PARTITION_KEY, created.id)

        result = asyncio.run(repo.update(_make_product(id=created.id, name="Gadget")))

        assert result.outcome == UpdateOutcome.UPDATED
        call = products_table.update_calls[-1]
        assert call["etag"] == live
        assert call["match_condition"] == MatchConditions.IfNotModified

    def test_stale_etag_is_a_conflict(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)

        first = asyncio.run(repo.update(created.model_copy(update={"quantity": 9})))
        # Second write still presents the tag from the create response
        second = asyncio.run(repo.update(created.model_copy(update={"quantity": 1})))

        assert first.outcome == UpdateOutcome.UPDATED
        assert second.outcome == UpdateOutcome.CONFLICT
        assert second.product is None
        assert asyncio.run(repo.get_by_id(created.id)).quantity == 9

    def test_concurrent_writers_with_same_tag(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)

        a = created.model_copy(update={"name": "A"})
        b = created.model_copy(update={"name": "B"})
        results = [asyncio.run(repo.update(a)), asyncio.run(repo.update(b))]

        outcomes = [r.outcome for r in results]
        assert outcomes.count(UpdateOutcome.UPDATED) == 1
        assert outcomes.count(UpdateOutcome.CONFLICT) == 1
        assert asyncio.run(repo.get_by_id(created.id)).name == "A"

    def test_write_between_read_and_update_is_a_conflict(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)
        products_table.before_update = lambda t: t.touch(
            PARTITION_KEY, created.id, Name="Other", Price=1.0, Quantity=1
        )

        result = asyncio.run(repo.update(_make_product(id=created.id, name="Mine")))

        assert result.outcome == UpdateOutcome.CONFLICT
        assert asyncio.run(repo.get_by_id(created.id)).name == "Other"

    def test_update_missing_is_not_found(self, products_table):
        repo = ProductRepository(products_table)

        result = asyncio.run(repo.update(_make_product(id="never-created")))

        assert result.outcome == UpdateOutcome.NOT_FOUND
        assert products_table.update_calls == []
        assert products_table.rows == {}

    def test_update_without_id_is_not_found(self, products_table):
        repo = ProductRepository(products_table)
        assert asyncio.run(repo.update(_make_product())).outcome == UpdateOutcome.NOT_FOUND

    def test_delete_between_read_and_update_is_not_found(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)
        products_table.before_update = lambda t: t.rows.pop((PARTITION_KEY, created.id))

        result = asyncio.run(repo.update(created.model_copy(update={"name": "Gone"})))

        assert result.outcome == UpdateOutcome.NOT_FOUND

    def test_plain_412_is_a_conflict(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)
        error = HttpResponseError("Precondition Failed")
        error.status_code = 412

        def _raise(_table):
            raise error

        products_table.before_update = _raise

        assert asyncio.run(repo.update(created)).outcome == UpdateOutcome.CONFLICT

    def test_other_http_errors_raise(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)
        error = HttpResponseError("Server Busy")
        error.status_code = 503

        def _raise(_table):
            raise error

        products_table.before_update = _raise

        with pytest.raises(RepositoryError, match="product update failed"):
            asyncio.run(repo.update(created))


# ============================================================================
# DELETE
# ============================================================================

class TestDelete:
    """delete() reports whether a row was removed."""

    def test_delete_existing(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)

        assert asyncio.run(repo.delete(created.id)) is True
        assert asyncio.run(repo.get_by_id(created.id)) is None

    def test_delete_never_created_returns_false(self, products_table):
        repo = ProductRepository(products_table)
        keep = _create(repo)
        before = dict(products_table.rows)

        assert asyncio.run(repo.delete("never-created")) is False
        assert products_table.rows == before
        assert asyncio.run(repo.get_by_id(keep.id)) is not None

    def test_delete_twice(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)

        assert asyncio.run(repo.delete(created.id)) is True
        assert asyncio.run(repo.delete(created.id)) is False

    def test_delete_is_conditioned_on_read_etag(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)

        asyncio.run(repo.delete(created.id))

        call = products_table.delete_calls[0]
        assert call["etag"] == created.etag
        assert call["match_condition"] == MatchConditions.IfNotModified

    def test_row_replaced_before_delete_is_reread(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)
        products_table.before_delete = lambda table: table.touch(
            PARTITION_KEY, created.id, Name="Other", Price="1", Quantity=1
        )

        assert asyncio.run(repo.delete(created.id)) is True

        assert len(products_table.delete_calls) == 2
        assert products_table.delete_calls[1]["etag"] != created.etag
        assert products_table.rows == {}

    def test_row_kept_changing_raises(self, products_table):
        repo = ProductRepository(products_table)
        created = _create(repo)
        original = products_table.delete_entity

        async def always_modified(*args, **kwargs):
            products_table.touch(PARTITION_KEY, created.id, Name="Other", Price="1", Quantity=1)
            return await original(*args, **kwargs)

        products_table.delete_entity = always_modified

        with pytest.raises(RepositoryError):
            asyncio.run(repo.delete(created.id))
        assert (PARTITION_KEY, created.id) in products_table.rows


# ============================================================================
# TRANSPORT FAILURES
# ============================================================================

class TestTransportFailures:
    """Connectivity errors are wrapped, never mapped to business outcomes."""

    def test_get_wraps_error(self):
        table = FakeTableClient()
        table.error = ServiceRequestError("connection refused")
        repo = ProductRepository(table)

        with pytest.raises(RepositoryError, match="connection refused") as exc_info:
            asyncio.run(repo.get_by_id("p1"))

        assert exc_info.value.operation == "product lookup"
        assert exc_info.value.entity_id == "p1"

    def test_list_wraps_error(self):
        table = FakeTableClient()
        table.error = ServiceRequestError("connection refused")

        with pytest.raises(RepositoryError):
            asyncio.run(ProductRepository(table).get_all())

    def test_create_wraps_error(self):
        table = FakeTableClient()
        table.error = ServiceRequestError("connection refused")

        with pytest.raises(RepositoryError, match="product creation failed"):
            asyncio.run(ProductRepository(table).create(_make_product()))
