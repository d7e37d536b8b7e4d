import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.core.storefront import Storefront
from app.database import get_session
from app.main import app
from app.models.product import Product


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def storefront():
    return Storefront()


@pytest.fixture
def client(engine, storefront):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.state.storefront = storefront
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "admin@organico.com", "password": "admin"},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def customer_client(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Maria", "email": "maria@mail.com", "password": "s3cret"},
    )
    assert response.status_code == 201
    return client


def make_product(product_id: str = "p1", price: str = "10.00", stock: int = 5, **kwargs) -> Product:
    data = {
        "id": product_id,
        "name": f"Product {product_id}",
        "description": "",
        "price": price,
        "unit": "un",
        "category": "Frutas",
        "image_url": "",
        "stock": stock,
    }
    data.update(kwargs)
    return Product.model_validate(data)
