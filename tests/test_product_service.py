from decimal import Decimal

import pytest
from fastapi import HTTPException

from app.models.product import Product, SEED_PRODUCTS
from app.models.record import Collection, Record
from app.repositories.record_repo import RecordRepository, StoreOutcome
from app.schemas.product import ProductWrite
from app.services.product_service import ProductService

from conftest import make_product

repo = RecordRepository()
service = ProductService(repo)


def test_first_read_seeds_and_persists_four_products(session):
    products = service.get_products(session)

    assert [p.id for p in products] == ["1", "2", "3", "4"]
    assert repo.read_list(session, Collection.PRODUCTS, Product) == products


def test_second_read_does_not_reseed(session):
    service.get_products(session)
    service.delete_product(session, "1")

    assert [p.id for p in service.get_products(session)] == ["2", "3", "4"]


def test_empty_catalog_is_not_reseeded(session):
    for p in SEED_PRODUCTS:
        service.delete_product(session, p.id)

    assert service.get_products(session) == []


def test_unreadable_catalog_falls_back_to_seed(session):
    session.add(Record(key=Collection.PRODUCTS.value, value="corrupted"))
    session.commit()

    assert len(service.get_products(session)) == 4
    assert repo.read_list(session, Collection.PRODUCTS, Product) is not None


def test_save_new_product_is_appended_last(session):
    service.get_products(session)

    assert service.save_product(session, make_product("new")).ok

    ids = [p.id for p in service.get_products(session)]
    assert ids == ["1", "2", "3", "4", "new"]


def test_save_existing_id_replaces_in_place(session):
    service.get_products(session)
    replacement = make_product("2", price="4.10", name="Alface Roxa", stock=0)

    service.save_product(session, replacement)

    products = service.get_products(session)
    assert len(products) == 4
    assert products[1] == replacement
    assert products[1].price == Decimal("4.10")


def test_delete_unknown_id_is_noop(session):
    before = service.get_products(session)

    outcome = service.delete_product(session, "missing")

    assert outcome.ok
    assert service.get_products(session) == before


def test_get_product_raises_404(session):
    with pytest.raises(HTTPException) as exc:
        service.get_product(session, "missing")
    assert exc.value.status_code == 404


def test_upsert_from_form_generates_id(session):
    payload = ProductWrite(name="Banana", price=Decimal("5.00"), unit="kg", category="Frutas", stock=3)

    product = service.upsert_from_form(session, payload)

    assert product.id
    assert service.get_products(session)[-1].id == product.id


def test_upsert_from_form_surfaces_store_failure(session, monkeypatch):
    service.get_products(session)
    monkeypatch.setattr(repo, "write", lambda *args, **kwargs: StoreOutcome.failure("boom"))
    payload = ProductWrite(name="Banana", price=Decimal("5.00"), unit="kg", category="Frutas")

    with pytest.raises(HTTPException) as exc:
        service.upsert_from_form(session, payload)
    assert exc.value.status_code == 503
