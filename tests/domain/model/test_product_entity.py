from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from stockroom.domain.model import Product
from tests.helpers.products import make_product


def test_new_product_has_no_identity() -> None:
    product = Product(name="Widget", price=Decimal("2.00"), stock=1)

    assert product.id is None
    assert product.is_persisted is False
    assert product.is_live is True
    assert product.active is True


def test_assign_id_sets_identity_once() -> None:
    product = make_product(assign_id=False)
    identifier = uuid.uuid4()

    product.assign_id(identifier)
    product.assign_id(identifier)

    assert product.id == identifier
    assert product.is_persisted is True


def test_assign_id_rejects_a_different_identifier() -> None:
    product = make_product()

    with pytest.raises(ValueError, match="already assigned"):
        product.assign_id(uuid.uuid4())


def test_deleted_product_is_not_live() -> None:
    product = make_product(deleted=True)

    assert product.is_deleted is True
    assert product.is_live is False


def test_products_compare_by_identity() -> None:
    first = make_product()
    second = make_product()

    assert first != second
    assert first == first  # noqa: PLR0124


def test_repr_mentions_name_and_deleted_flag() -> None:
    product = make_product("Lamp", deleted=True)

    assert "name='Lamp'" in repr(product)
    assert "deleted=True" in repr(product)
