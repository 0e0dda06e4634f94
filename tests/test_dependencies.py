import asyncio

import pytest

from conftest import FakeSupabase
from dreamrate import dependencies
from dreamrate.config import Settings
from dreamrate.services import auth_service
from dreamrate.utils.exceptions import AuthenticationError, ConfigurationError


@pytest.fixture(autouse=True)
def fresh_client():
    dependencies.reset_db_client()
    yield
    dependencies.reset_db_client()


def test_gateway_fails_fast_without_settings(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("PUBLIC_SUPABASE_URL", raising=False)
    monkeypatch.setattr(dependencies, "get_settings", Settings)

    with pytest.raises(ConfigurationError):
        asyncio.run(dependencies.get_db_client())


def test_gateway_builds_one_shared_client(monkeypatch):
    calls = []

    async def fake_create(url, key):
        calls.append((url, key))
        return object()

    monkeypatch.setenv("SUPABASE_URL", "https://proj.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.setattr(dependencies, "get_settings", Settings)
    monkeypatch.setattr(dependencies, "acreate_client", fake_create)

    async def scenario():
        return await dependencies.get_db_client(), await dependencies.get_db_client()

    first, second = asyncio.run(scenario())

    assert first is second
    assert calls == [("https://proj.supabase.co", "anon")]


@pytest.mark.parametrize("header", [None, "", "Token abc", "bearer abc"])
def test_bearer_token_rejects_bad_headers(header):
    with pytest.raises(AuthenticationError):
        dependencies.get_bearer_token(header)


def test_bearer_token_extracted():
    assert dependencies.get_bearer_token("Bearer abc.def") == "abc.def"


def test_gateway_concurrent_first_calls_share_one_client(monkeypatch):
    calls = []

    async def slow_create(url, key):
        calls.append(url)
        await asyncio.sleep(0)
        return object()

    monkeypatch.setattr(dependencies, "acreate_client", slow_create)

    async def scenario():
        return await asyncio.gather(*(dependencies.get_db_client() for _ in range(5)))

    clients = asyncio.run(scenario())

    assert len(calls) == 1
    assert all(client is clients[0] for client in clients)


def test_auth_service_concurrent_first_calls_share_one_service(monkeypatch):
    async def shared_client():
        await asyncio.sleep(0)
        return FakeSupabase()

    auth_service.reset_auth_service()
    monkeypatch.setattr(dependencies, "get_db_client", shared_client)

    async def scenario():
        return await asyncio.gather(*(auth_service.get_auth_service() for _ in range(5)))

    try:
        services = asyncio.run(scenario())
    finally:
        auth_service.reset_auth_service()

    assert all(service is services[0] for service in services)


class RecordingPostgrest:
    def __init__(self, url, headers):
        self.url = url
        self.headers = headers
        self.closed = False

    async def aclose(self):
        self.closed = True


def test_user_db_carries_caller_token_and_closes(monkeypatch):
    monkeypatch.setattr(dependencies, "AsyncPostgrestClient", RecordingPostgrest)
    settings = Settings()

    async def scenario():
        requests = dependencies.get_user_db(token="caller.jwt", settings=settings)
        client = await requests.__anext__()
        open_while_in_use = not client.closed
        with pytest.raises(StopAsyncIteration):
            await requests.__anext__()
        return client, open_while_in_use

    client, open_while_in_use = asyncio.run(scenario())

    assert open_while_in_use
    assert client.closed
    assert client.url == f"{settings.supabase_url}/rest/v1"
    assert client.headers["Authorization"] == "Bearer caller.jwt"
    assert client.headers["apikey"] == settings.supabase_anon_key


def test_user_db_closes_when_request_fails(monkeypatch):
    monkeypatch.setattr(dependencies, "AsyncPostgrestClient", RecordingPostgrest)

    async def scenario():
        requests = dependencies.get_user_db(token="caller.jwt", settings=Settings())
        client = await requests.__anext__()
        with pytest.raises(RuntimeError):
            await requests.athrow(RuntimeError("handler failed"))
        return client

    assert asyncio.run(scenario()).closed
