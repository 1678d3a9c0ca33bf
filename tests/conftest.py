import pytest

from book_catalog import create_app
from book_catalog.config import Config
from book_catalog.extensions import db


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SERVICE_PORT = 8081


@pytest.fixture
def app():
    # Her test için temiz, bellekte bir veritabanı
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield


def book_payload(**overrides):
    data = {
        "title": "Cien años de soledad",
        "author": "Gabriel García Márquez",
        "isbn": "978-0307474728",
        "category": "FICTION",
        "totalCopies": 5,
        "availableCopies": 3,
    }
    data.update(overrides)
    return data
