from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from stockroom.domain import catalog
from stockroom.domain.errors import (
    DependencyConflictError,
    DuplicateNameError,
    InvalidPriceError,
    InvalidPriceRangeError,
    MissingProductsError,
    NegativeStockError,
    NotFoundError,
)
from stockroom.domain.model import ProductSortField, new_id
from stockroom.domain.mutator import ProductMutator  # noqa: TC001
from stockroom.domain.pagination import PageRequest
from stockroom.domain.product_updates import ProductChanges, ProductFields
from tests.helpers.products import InMemoryCatalogStore, make_product


@pytest.fixture
def store() -> InMemoryCatalogStore:
    return InMemoryCatalogStore()


def _fields(name: str, price: str = "9.99", stock: int = 10) -> ProductFields:
    return ProductFields(name=name, price=Decimal(price), stock=stock)


# create ----------------------------------------------------------------------


def test_create_product_stores_and_assigns_id(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = catalog.create_product(
        _fields("Widget"), mutator=mutator, unit_of_work_factory=store.unit_of_work
    )

    assert product.id is not None
    assert store.products[product.id].name == "Widget"
    assert store.commits == 1


def test_create_product_rejects_live_duplicate_name(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    store.seed(make_product("Widget"))

    with pytest.raises(DuplicateNameError):
        catalog.create_product(
            _fields("Widget"), mutator=mutator, unit_of_work_factory=store.unit_of_work
        )

    assert store.commits == 0


def test_create_product_reuses_name_of_soft_deleted_product(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    store.seed(make_product("Widget", deleted=True))

    product = catalog.create_product(
        _fields("Widget"), mutator=mutator, unit_of_work_factory=store.unit_of_work
    )

    assert product.is_live
    assert len(store.products) == 2


def test_create_products_is_all_or_nothing(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    batch = [_fields("One"), _fields("Two", price="0.50"), _fields("Three")]

    with pytest.raises(InvalidPriceError):
        catalog.create_products(batch, mutator=mutator, unit_of_work_factory=store.unit_of_work)

    assert store.products == {}
    assert store.commits == 0


def test_create_products_rejects_duplicates_within_batch(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    with pytest.raises(DuplicateNameError, match="Twin"):
        catalog.create_products(
            [_fields("Twin"), _fields("Twin")],
            mutator=mutator,
            unit_of_work_factory=store.unit_of_work,
        )

    assert store.products == {}


def test_create_products_returns_products_in_order(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    created = catalog.create_products(
        [_fields("First"), _fields("Second")],
        mutator=mutator,
        unit_of_work_factory=store.unit_of_work,
    )

    assert [product.name for product in created] == ["First", "Second"]
    assert all(product.id in store.products for product in created)
    assert store.commits == 1


# read ------------------------------------------------------------------------


def test_get_product_includes_soft_deleted(store: InMemoryCatalogStore) -> None:
    deleted = make_product(deleted=True)
    store.seed(deleted)
    assert deleted.id is not None

    found = catalog.get_product(deleted.id, unit_of_work_factory=store.unit_of_work)

    assert found.id == deleted.id
    assert found.is_deleted


def test_get_product_raises_for_unknown_id(store: InMemoryCatalogStore) -> None:
    missing = new_id()

    with pytest.raises(NotFoundError, match=str(missing)) as excinfo:
        catalog.get_product(missing, unit_of_work_factory=store.unit_of_work)

    assert excinfo.value.product_id == missing


def test_product_exists(store: InMemoryCatalogStore) -> None:
    product = make_product()
    store.seed(product)
    assert product.id is not None

    assert catalog.product_exists(product.id, unit_of_work_factory=store.unit_of_work) is True
    assert catalog.product_exists(new_id(), unit_of_work_factory=store.unit_of_work) is False


def test_list_products_hides_soft_deleted(store: InMemoryCatalogStore) -> None:
    store.seed(
        make_product("Bravo", price=Decimal("2.00")),
        make_product("Alpha", price=Decimal("3.00")),
        make_product("Gone", deleted=True),
    )

    page = catalog.list_products(unit_of_work_factory=store.unit_of_work)

    assert [product.name for product in page.items] == ["Alpha", "Bravo"]
    assert page.total == 2
    assert page.total_pages == 1


def test_list_products_honours_page_request(store: InMemoryCatalogStore) -> None:
    store.seed(*(make_product(f"Item {index}", price=Decimal(index + 1)) for index in range(5)))

    page = catalog.list_products(
        PageRequest(page=1, size=2, sort=ProductSortField.PRICE, descending=True),
        unit_of_work_factory=store.unit_of_work,
    )

    assert [product.name for product in page.items] == ["Item 2", "Item 1"]
    assert page.total == 5
    assert page.total_pages == 3
    assert page.has_next is True


def test_search_products_is_case_insensitive_and_live_only(store: InMemoryCatalogStore) -> None:
    store.seed(
        make_product("Blue Widget"),
        make_product("widget stand"),
        make_product("Hammer"),
        make_product("Old widget", deleted=True),
    )

    found = catalog.search_products("WIDGET", unit_of_work_factory=store.unit_of_work)

    assert [product.name for product in found] == ["Blue Widget", "widget stand"]


def test_find_products_by_price_is_inclusive(store: InMemoryCatalogStore) -> None:
    store.seed(
        make_product("Low", price=Decimal("1.00")),
        make_product("Mid", price=Decimal("5.00")),
        make_product("High", price=Decimal("10.00")),
        make_product("Hidden", price=Decimal("5.00"), deleted=True),
    )

    found = catalog.find_products_by_price(
        Decimal("1.00"), Decimal("5.00"), unit_of_work_factory=store.unit_of_work
    )

    assert [product.name for product in found] == ["Low", "Mid"]


def test_find_products_by_price_rejects_inverted_range(store: InMemoryCatalogStore) -> None:
    with pytest.raises(InvalidPriceRangeError):
        catalog.find_products_by_price(
            Decimal("5.00"), Decimal("1.00"), unit_of_work_factory=store.unit_of_work
        )


# update ----------------------------------------------------------------------


def test_update_product_replaces_fields(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = make_product("Widget", description="Old")
    store.seed(product)
    assert product.id is not None

    updated = catalog.update_product(
        product.id,
        _fields("Widget", price="12.00", stock=1),
        mutator=mutator,
        unit_of_work_factory=store.unit_of_work,
    )

    assert updated.price == Decimal("12.00")
    assert updated.description is None
    assert store.products[product.id].stock == 1


def test_update_product_rejects_name_of_other_live_product(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    target = make_product("Widget")
    store.seed(target, make_product("Gadget"))
    assert target.id is not None

    with pytest.raises(DuplicateNameError):
        catalog.update_product(
            target.id,
            _fields("Gadget"),
            mutator=mutator,
            unit_of_work_factory=store.unit_of_work,
        )

    assert store.products[target.id].name == "Widget"


def test_update_product_raises_for_unknown_id(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    with pytest.raises(NotFoundError):
        catalog.update_product(
            new_id(), _fields("Widget"), mutator=mutator, unit_of_work_factory=store.unit_of_work
        )


def test_update_product_rejects_soft_deleted_product(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = make_product("Widget", deleted=True)
    store.seed(product, make_product("Gadget"))
    assert product.id is not None

    with pytest.raises(NotFoundError, match="deleted"):
        catalog.update_product(
            product.id,
            _fields("Gadget"),
            mutator=mutator,
            unit_of_work_factory=store.unit_of_work,
        )


def test_patch_product_changes_given_fields_only(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = make_product("Widget", description="Keep", stock=4)
    store.seed(product)
    assert product.id is not None

    patched = catalog.patch_product(
        product.id,
        ProductChanges(price=Decimal("2.50")),
        mutator=mutator,
        unit_of_work_factory=store.unit_of_work,
    )

    assert patched.price == Decimal("2.50")
    assert patched.description == "Keep"
    assert patched.stock == 4


def test_patch_product_without_fields_logs_timestamp_only(
    store: InMemoryCatalogStore, mutator: ProductMutator, caplog: pytest.LogCaptureFixture
) -> None:
    product = make_product("Widget")
    store.seed(product)
    assert product.id is not None

    with caplog.at_level(logging.INFO, logger="stockroom.domain.catalog"):
        patched = catalog.patch_product(
            product.id, ProductChanges(), mutator=mutator, unit_of_work_factory=store.unit_of_work
        )

    assert "no fields, timestamp only" in caplog.text
    assert patched.name == "Widget"
    assert store.commits == 1


def test_patch_product_allows_keeping_own_name(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = make_product("Widget")
    store.seed(product)
    assert product.id is not None

    patched = catalog.patch_product(
        product.id,
        ProductChanges(name="Widget", stock=0),
        mutator=mutator,
        unit_of_work_factory=store.unit_of_work,
    )

    assert patched.name == "Widget"
    assert patched.stock == 0


def test_patch_product_rejects_name_of_other_live_product(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = make_product("Widget")
    store.seed(product, make_product("Gadget"))
    assert product.id is not None

    with pytest.raises(DuplicateNameError):
        catalog.patch_product(
            product.id,
            ProductChanges(name="Gadget"),
            mutator=mutator,
            unit_of_work_factory=store.unit_of_work,
        )


def test_adjust_product_stock_commits_new_level(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = make_product(stock=5)
    store.seed(product)
    assert product.id is not None

    catalog.adjust_product_stock(
        product.id, -5, mutator=mutator, unit_of_work_factory=store.unit_of_work
    )

    assert store.products[product.id].stock == 0


def test_adjust_product_stock_rejects_negative_result(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = make_product(stock=5)
    store.seed(product)
    assert product.id is not None

    with pytest.raises(NegativeStockError):
        catalog.adjust_product_stock(
            product.id, -6, mutator=mutator, unit_of_work_factory=store.unit_of_work
        )

    assert store.products[product.id].stock == 5
    assert store.commits == 0


# delete ----------------------------------------------------------------------


def test_soft_delete_product_keeps_record(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = make_product()
    store.seed(product)
    assert product.id is not None

    catalog.soft_delete_product(
        product.id, mutator=mutator, unit_of_work_factory=store.unit_of_work
    )

    assert store.products[product.id].is_deleted
    assert catalog.list_products(unit_of_work_factory=store.unit_of_work).total == 0


def test_delete_product_removes_record(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = make_product()
    store.seed(product)
    assert product.id is not None

    catalog.delete_product(product.id, mutator=mutator, unit_of_work_factory=store.unit_of_work)

    assert product.id not in store.products


def test_delete_product_refuses_when_dependents_exist(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = make_product()
    store.seed(product)
    assert product.id is not None
    store.dependents.add(product.id)

    with pytest.raises(DependencyConflictError):
        catalog.delete_product(product.id, mutator=mutator, unit_of_work_factory=store.unit_of_work)

    assert product.id in store.products


def test_delete_products_removes_all_and_counts(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    first, second = make_product("One"), make_product("Two")
    store.seed(first, second)
    assert first.id is not None
    assert second.id is not None

    removed = catalog.delete_products(
        [first.id, second.id, first.id],
        mutator=mutator,
        unit_of_work_factory=store.unit_of_work,
    )

    assert removed == 2
    assert store.products == {}


def test_delete_products_reports_missing_ids_and_keeps_everything(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    product = make_product()
    store.seed(product)
    assert product.id is not None
    missing = new_id()

    with pytest.raises(MissingProductsError) as excinfo:
        catalog.delete_products(
            [product.id, missing], mutator=mutator, unit_of_work_factory=store.unit_of_work
        )

    assert excinfo.value.missing == (missing,)
    assert product.id in store.products


def test_delete_products_aborts_when_any_has_dependents(
    store: InMemoryCatalogStore, mutator: ProductMutator
) -> None:
    free, blocked = make_product("Free"), make_product("Blocked")
    store.seed(free, blocked)
    assert blocked.id is not None
    assert free.id is not None
    store.dependents.add(blocked.id)

    with pytest.raises(DependencyConflictError):
        catalog.delete_products(
            [free.id, blocked.id], mutator=mutator, unit_of_work_factory=store.unit_of_work
        )

    assert set(store.products) == {free.id, blocked.id}
