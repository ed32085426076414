import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import Base, get_db
from app.main import app
from app.services.dispatcher import get_http_client


class FakeWebhookServer:
    """Records outbound webhook calls and answers them from per-url settings."""

    def __init__(self):
        self.requests = []
        self.status_by_url = {}
        self.unreachable = set()

    def handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if url in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        self.requests.append(request)
        return httpx.Response(self.status_by_url.get(url, 200), json={"ok": True})

    def calls_to(self, url):
        return [request for request in self.requests if str(request.url) == url]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def webhook_server():
    return FakeWebhookServer()


@pytest.fixture
def client(engine, webhook_server):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    async def override_get_http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(webhook_server.handle)) as http_client:
            yield http_client

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_http_client] = override_get_http_client
    yield TestClient(app)
    app.dependency_overrides.clear()
