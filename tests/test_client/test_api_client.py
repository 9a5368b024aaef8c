"""Tests for the authenticated request executor."""

from __future__ import annotations

import httpx
import pytest
from pydantic import BaseModel

from codeproject.client import ApiClient, SharedTransport, to_query_string
from codeproject.config import ClientConfig
from codeproject.exceptions import ConfigError, ConnectionError_, InvalidTokenError, ResponseParseError
from codeproject.models import BearerToken, PagedData

from conftest import RecordingTransport, json_handler


class DummyModel(BaseModel):
    message: str


def _client(
    token: BearerToken,
    shared: SharedTransport,
    handler=json_handler({"message": "ok"}),
) -> tuple[ApiClient, RecordingTransport]:
    transport = RecordingTransport(handler)
    return ApiClient(token, shared_transport=shared, transport=transport), transport


# ---------------------------------------------------------------------------
# to_query_string
# ---------------------------------------------------------------------------


class TestToQueryString:
    def test_empty(self) -> None:
        assert to_query_string({}) == ""

    def test_single_pair(self) -> None:
        assert to_query_string({"parameter": "value_for_parameter"}) == "?parameter=value_for_parameter"

    def test_pairs_keep_order(self) -> None:
        assert to_query_string({"a": "1", "b": "2", "c": "3"}) == "?a=1&b=2&c=3"

    def test_escapes_keys_and_values(self) -> None:
        assert to_query_string({"my key": "c#, c++", "x": "a&b=c"}) == "?my%20key=c%23%2C%20c%2B%2B&x=a%26b%3Dc"


# ---------------------------------------------------------------------------
# Construction & token
# ---------------------------------------------------------------------------


class TestConstruction:
    @pytest.mark.parametrize("value", ["", "   \t \n"])
    async def test_blank_token_rejected(self, shared_transport: SharedTransport, value: str) -> None:
        with pytest.raises(InvalidTokenError, match="valid contents"):
            ApiClient(BearerToken(token=value), shared_transport=shared_transport)
        assert shared_transport.is_released

    async def test_none_token_rejected(self, shared_transport: SharedTransport) -> None:
        with pytest.raises(InvalidTokenError):
            ApiClient(None, shared_transport=shared_transport)
        assert shared_transport.is_released

    async def test_initial_status(self, shared_transport: SharedTransport, valid_token: BearerToken) -> None:
        api, _ = _client(valid_token, shared_transport)
        assert api.last_status_code == 200
        assert api.last_status_message == "OK"
        assert api.token is valid_token
        assert api.shared_transport is shared_transport

    async def test_config_builds_private_handle(self, valid_token: BearerToken) -> None:
        transport = RecordingTransport(json_handler({"message": "ok"}))
        api = ApiClient(
            valid_token,
            config=ClientConfig(base_url="https://sandbox.example.com", timeout=7),
            transport=transport,
        )
        try:
            await api.get("v1/Test", DummyModel)

            assert str(transport.last_request.url) == "https://sandbox.example.com/v1/Test"
            assert transport.last_request.extensions["timeout"]["read"] == 7
            assert api.shared_transport.ref_count == 1
            assert api.shared_transport.config.base_url == "https://sandbox.example.com"
        finally:
            await api.release()

        assert ApiClient.all_released(api.shared_transport)

    async def test_config_with_shared_transport_rejected(
        self, shared_transport: SharedTransport, valid_token: BearerToken
    ) -> None:
        with pytest.raises(ConfigError):
            ApiClient(valid_token, shared_transport=shared_transport, config=ClientConfig())
        assert shared_transport.is_released

    async def test_sends_bearer_token(self, shared_transport: SharedTransport, valid_token: BearerToken) -> None:
        api, transport = _client(valid_token, shared_transport)

        await api.get("v1/Test", DummyModel)

        request = transport.last_request
        assert request.headers["authorization"] == "Bearer whatever"
        assert request.headers["accept"] == "application/json"
        assert str(request.url) == "https://api.codeproject.com/v1/Test"

    async def test_invalid_set_token_keeps_previous(
        self, shared_transport: SharedTransport, valid_token: BearerToken
    ) -> None:
        api, transport = _client(valid_token, shared_transport)

        with pytest.raises(InvalidTokenError):
            api.set_token(BearerToken(token=" "))
        with pytest.raises(InvalidTokenError):
            api.set_token(None)

        assert api.token is valid_token
        await api.get("v1/Test", DummyModel)
        assert transport.last_request.headers["authorization"] == "Bearer whatever"

    async def test_set_token_changes_identity_of_all_clients(
        self, shared_transport: SharedTransport, valid_token: BearerToken
    ) -> None:
        first, transport = _client(valid_token, shared_transport)
        second = ApiClient(valid_token, shared_transport=shared_transport)

        second.set_token(BearerToken(token="other", expires_in=10))
        await first.get("v1/Test", DummyModel)

        assert transport.last_request.headers["authorization"] == "Bearer other"
        assert first.token is valid_token

    async def test_set_token_after_release_changes_nothing(
        self, shared_transport: SharedTransport, valid_token: BearerToken
    ) -> None:
        released, transport = _client(valid_token, shared_transport)
        live = ApiClient(valid_token, shared_transport=shared_transport)
        await released.release()

        with pytest.raises(RuntimeError, match="released"):
            released.set_token(BearerToken(token="other", expires_in=10))

        assert released.token is valid_token
        await live.get("v1/Test", DummyModel)
        assert transport.last_request.headers["authorization"] == "Bearer whatever"

    async def test_set_token_after_last_release(self, shared_transport: SharedTransport, valid_token: BearerToken) -> None:
        api, _ = _client(valid_token, shared_transport)
        await api.release()

        with pytest.raises(RuntimeError):
            api.set_token(BearerToken(token="other", expires_in=10))
        assert api.token is valid_token


# ---------------------------------------------------------------------------
# GET
# ---------------------------------------------------------------------------


class TestGet:
    async def test_decodes_body(self, shared_transport: SharedTransport, valid_token: BearerToken) -> None:
        api, _ = _client(valid_token, shared_transport)

        result = await api.get("v1/Test", DummyModel)

        assert result == DummyModel(message="ok")
        assert api.last_status_code == 200

    async def test_server_error_is_soft(self, shared_transport: SharedTransport, valid_token: BearerToken) -> None:
        api, _ = _client(valid_token, shared_transport, json_handler({"message": "boom"}, 500))

        assert await api.get("v1/Test", DummyModel) is None
        assert api.last_status_code == 500
        assert api.last_status_message == "Internal Server Error"

    async def test_unauthorized_is_soft(self, shared_transport: SharedTransport, valid_token: BearerToken) -> None:
        api, _ = _client(valid_token, shared_transport, lambda request: httpx.Response(401))

        assert await api.get("v1/My/Profile", DummyModel) is None
        assert api.last_status_code == 401

    async def test_status_tracks_last_request(
        self, shared_transport: SharedTransport, valid_token: BearerToken
    ) -> None:
        responses = iter([httpx.Response(404), httpx.Response(200, json={"message": "ok"})])
        api, _ = _client(valid_token, shared_transport, lambda request: next(responses))

        assert await api.get("v1/Test", DummyModel) is None
        assert api.last_status_code == 404
        assert await api.get("v1/Test", DummyModel) is not None
        assert api.last_status_code == 200

    async def test_empty_body_is_none(self, shared_transport: SharedTransport, valid_token: BearerToken) -> None:
        api, _ = _client(valid_token, shared_transport, lambda request: httpx.Response(200, content=b""))

        assert await api.get("v1/Test", DummyModel) is None
        assert api.last_status_code == 200

    async def test_garbage_body_raises(self, shared_transport: SharedTransport, valid_token: BearerToken) -> None:
        api, _ = _client(
            valid_token,
            shared_transport,
            lambda request: httpx.Response(200, text="This is a garbage response."),
        )

        with pytest.raises(ResponseParseError):
            await api.get("v1/Test", DummyModel)

    async def test_transport_error_raises(self, shared_transport: SharedTransport, valid_token: BearerToken) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        api, _ = _client(valid_token, shared_transport, handler)

        with pytest.raises(ConnectionError_) as exc_info:
            await api.get("v1/Test", DummyModel)

        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    async def test_timeout_override(self, shared_transport: SharedTransport, valid_token: BearerToken) -> None:
        api, transport = _client(valid_token, shared_transport)

        await api.get("v1/Test", DummyModel, timeout=1.5)
        assert transport.last_request.extensions["timeout"]["read"] == 1.5

        await api.get("v1/Test", DummyModel)
        assert transport.last_request.extensions["timeout"]["read"] == 30.0

    async def test_get_paged(self, shared_transport: SharedTransport, valid_token: BearerToken) -> None:
        body = {"pagination": {"page": 3, "pageSize": 1, "totalPages": 5, "totalItems": 5}, "items": [{"id": 9}]}
        api, transport = _client(valid_token, shared_transport, json_handler(body))

        page = await api.get_paged("v1/My/Articles", 3)

        assert str(transport.last_request.url) == "https://api.codeproject.com/v1/My/Articles?page=3"
        assert isinstance(page, PagedData)
        assert page.pagination.page == 3
        assert page.items[0].id == "9"


# ---------------------------------------------------------------------------
# Release
# ---------------------------------------------------------------------------


class TestRelease:
    async def test_not_released_while_any_instance_lives(
        self, shared_transport: SharedTransport, valid_token: BearerToken
    ) -> None:
        clients = [ApiClient(valid_token, shared_transport=shared_transport) for _ in range(3)]

        for api in clients[:-1]:
            await api.release()
            assert not ApiClient.all_released(shared_transport)

        await clients[-1].release()
        assert ApiClient.all_released(shared_transport)

    async def test_double_release_is_noop(
        self, shared_transport: SharedTransport, valid_token: BearerToken
    ) -> None:
        first = ApiClient(valid_token, shared_transport=shared_transport)
        second = ApiClient(valid_token, shared_transport=shared_transport)

        await first.release()
        await first.release()

        assert first.is_released
        assert not second.is_released
        assert shared_transport.ref_count == 1

    async def test_context_manager_releases(
        self, shared_transport: SharedTransport, valid_token: BearerToken
    ) -> None:
        async with ApiClient(valid_token, shared_transport=shared_transport) as api:
            assert not ApiClient.all_released(shared_transport)

        assert api.is_released
        assert ApiClient.all_released(shared_transport)

    async def test_context_manager_releases_on_error(
        self, shared_transport: SharedTransport, valid_token: BearerToken
    ) -> None:
        with pytest.raises(RuntimeError):
            async with ApiClient(valid_token, shared_transport=shared_transport):
                raise RuntimeError("boom")

        assert ApiClient.all_released(shared_transport)

    async def test_new_client_after_full_release(
        self, shared_transport: SharedTransport, valid_token: BearerToken
    ) -> None:
        async with ApiClient(valid_token, shared_transport=shared_transport):
            pass

        api, transport = _client(valid_token, shared_transport)
        try:
            assert await api.get("v1/Test", DummyModel) == DummyModel(message="ok")
            assert transport.call_count == 1
        finally:
            await api.release()
