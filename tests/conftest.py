"""
Pytest fixtures shared by the store tests.

Each test gets a fresh in-memory MongoDB (mongomock-motor) wired into the
singleton client, with collections and indexes set up the same way
``store.init()`` does against a real server.
"""
import uuid

import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

from projectstore import store
from projectstore.database.conn import mongo_client


@pytest_asyncio.fixture
async def db():
    await store.init(AsyncMongoMockClient())
    yield mongo_client.database
    await store.disconnect()


@pytest.fixture
def userid() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def classid() -> str:
    return str(uuid.uuid4())
