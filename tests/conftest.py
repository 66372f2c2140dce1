"""
Test configuration and fixtures for the Club Directory API tests.
"""
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from club_directory_api.app.main import create_app
from club_directory_api.app.services.id_generator import SequentialIdGenerator
from club_directory_api.app.services.member_store import MemberStore


SEED_MEMBERS = [
    {"id": "1", "name": "Ana", "age": 29, "rating": 5, "activities": ["Chess", "Hiking"]},
    {"id": "2", "name": "Dan", "age": 41, "rating": 3, "activities": ["Photography"]},
    {"id": "3", "name": "Bob", "age": 35, "activities": ["Cycling", "Hiking"]},
]


@pytest.fixture
def store() -> MemberStore:
    """A fresh store holding ``SEED_MEMBERS`` with deterministic new ids."""
    return MemberStore(SEED_MEMBERS, id_generator=SequentialIdGenerator(start=100))


@pytest_asyncio.fixture
async def client(store: MemberStore) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client for an app serving ``store``."""
    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
