"""
Pytest fixtures: a freshly opened, seeded in-memory store per test, a session
on it, and an API client wired to the same store.
"""
import pytest
from fastapi.testclient import TestClient

from stockroom.database import Store
from stockroom.main import create_app


@pytest.fixture(scope="function")
def store():
    store = Store("sqlite://").open(seed=True)
    yield store
    store.close()


@pytest.fixture(scope="function")
def db(store):
    session = store.session()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(store):
    app = create_app(store)

    with TestClient(app) as client:
        yield client


# Seeded rows, by id
RICE, WHEAT_FLOUR, TOMATOES, APPLES, CHICKEN, MILK = 1, 2, 3, 4, 5, 6
FRESH_FOODS, ORGANIC_FARMS, GLOBAL_GRAINS = 1, 2, 3
CENTRAL, NORTH, SOUTH = 1, 2, 3
MICHAEL, SARAH, DAVID = 1, 2, 3
