import pytest
from fastapi.testclient import TestClient

from order_service.config import Settings
from order_service.database import Database
from order_service.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'orders.db'}",
        auto_migrate=True,
        log_level="DEBUG",
        db_echo=False,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def db_session(settings):
    database = Database(settings.database_url)
    database.open()
    database.create_tables()
    session = database.session()
    try:
        yield session
    finally:
        session.close()
        database.close()


@pytest.fixture
def order_payload():
    return {
        "orderedAt": "2019-11-09T21:21:46Z",
        "customerName": "Tom",
        "items": [
            {"itemCode": "123", "description": "IPhone 10X", "quantity": 1},
            {"itemCode": "A45", "description": "Charger", "quantity": 2},
        ],
    }
