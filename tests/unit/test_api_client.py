"""
Unit Tests for the Intrinio API Client (dispatcher + transport)

These tests verify that IntrinioAPIClient:
- Attaches a Basic Authentication header to every call
- Sends GET parameters as a query string and POST parameters as a body
- Makes exactly one round trip per call (no retry)
- Maps success, remote rejection, malformed body, transport failure and
  cancellation onto ApiResult

Run with:
    pytest tests/unit/test_api_client.py -v
"""

import asyncio
import base64
import warnings
from typing import Optional

import aiohttp
import pytest
from pydantic import Field

from core.config import Settings
from core.schemas import Price
from intrinio.api_client import IntrinioAPIClient, encode_basic_auth
from intrinio.catalog import EndpointBinding, HttpMethod, get_binding
from intrinio.decoder import ResponseShape
from intrinio.errors import ErrorKind
from intrinio.messages import (
    FinancialStatement,
    GetCompanyDetails,
    GetPrices,
    GetStandardizedFundamentals,
    IntrinioRequest,
)


PRICE_BODY = b'{"date": "2020-01-02", "close": 300.35}'


def expected_auth(username="user", password="secret"):
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return f"Basic {token}"


# ============================================
# Authentication
# ============================================

class TestBasicAuth:
    """Every call carries the configured credentials"""

    @pytest.mark.asyncio
    async def test_authorization_header_is_basic_of_credentials(self, stub_client):
        client = stub_client((200, PRICE_BODY), client_cls=IntrinioAPIClient)

        await client.call("prices", GetPrices(identifier="AAPL"))

        headers = client.session.calls[0]["headers"]
        assert headers["Authorization"] == expected_auth()
        assert headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_header_attached_on_every_endpoint(self, stub_client):
        client = stub_client((500, b"boom", "Internal Server Error"), client_cls=IntrinioAPIClient)

        requests = {
            "prices": GetPrices(identifier="AAPL"),
            "company_details": GetCompanyDetails(identifier="AAPL"),
            "standardized_fundamentals": GetStandardizedFundamentals(
                identifier="AAPL", statement=FinancialStatement.CALCULATIONS
            ),
        }
        for operation, request in requests.items():
            await client.call(operation, request)

        assert len(client.session.calls) == len(requests)
        for call in client.session.calls:
            assert call["headers"]["Authorization"] == expected_auth()

    @pytest.mark.asyncio
    async def test_non_ascii_password_is_encoded(self, stub_client):
        client = stub_client((200, PRICE_BODY), client_cls=IntrinioAPIClient, password="pässwörd")

        await client.call("prices", GetPrices(identifier="AAPL"))

        header = client.session.calls[0]["headers"]["Authorization"]
        assert base64.b64decode(header.split(" ", 1)[1]).decode("latin1") == "user:pässwörd"

    def test_encode_basic_auth_known_value(self):
        assert encode_basic_auth("Aladdin", "open sesame") == "Basic QWxhZGRpbjpvcGVuIHNlc2FtZQ=="

    def test_construction_emits_no_deprecation_warning(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            client = IntrinioAPIClient("user", "secret")

        assert client._headers()["Authorization"] == expected_auth()

    def test_username_with_colon_fails_at_construction(self):
        with pytest.raises(ValueError):
            IntrinioAPIClient("us:er", "secret")

    def test_repr_hides_password(self):
        client = IntrinioAPIClient("user", "secret")

        assert "secret" not in repr(client)


# ============================================
# Request Construction
# ============================================

class TestRequestConstruction:
    """URL, method and parameter placement"""

    @pytest.mark.asyncio
    async def test_get_sends_query_params_to_base_url_plus_path(self, stub_client):
        client = stub_client((200, PRICE_BODY), client_cls=IntrinioAPIClient)

        await client.call("prices", GetPrices(identifier="AAPL"))

        call = client.session.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == "https://api.intrinio.com/prices"
        assert call["params"] == [("identifier", "AAPL")]
        assert "data" not in call

    @pytest.mark.asyncio
    async def test_post_sends_params_as_body(self, stub_client):
        class Note(IntrinioRequest):
            identifier: str
            comment: Optional[str] = Field(None, alias="text")

        binding = EndpointBinding(
            name="notes",
            path="/notes",
            method=HttpMethod.POST,
            request_type=Note,
            response_type=Price,
            shape=ResponseShape.OBJECT
        )
        client = stub_client((201, PRICE_BODY, "Created"), client_cls=IntrinioAPIClient)

        result = await client.dispatch(binding, Note(identifier="AAPL", comment="hi"))

        call = client.session.calls[0]
        assert result.ok
        assert call["method"] == "POST"
        assert call["data"] == [("identifier", "AAPL"), ("text", "hi")]
        assert "params" not in call
        assert call["headers"]["Authorization"] == expected_auth()

    @pytest.mark.asyncio
    async def test_custom_base_url_trailing_slash(self, stub_client):
        client = stub_client((200, PRICE_BODY), client_cls=IntrinioAPIClient, base_url="https://example.test/")

        await client.call("prices", GetPrices(identifier="AAPL"))

        assert client.session.calls[0]["url"] == "https://example.test/prices"

    @pytest.mark.asyncio
    async def test_no_timeout_unless_configured(self, stub_client):
        client = stub_client((200, PRICE_BODY), client_cls=IntrinioAPIClient)

        await client.call("prices", GetPrices(identifier="AAPL"))

        assert "timeout" not in client.session.calls[0]

    @pytest.mark.asyncio
    async def test_configured_timeout_is_passed(self, stub_client):
        client = stub_client((200, PRICE_BODY), client_cls=IntrinioAPIClient, timeout=5)

        await client.call("prices", GetPrices(identifier="AAPL"))

        timeout = client.session.calls[0]["timeout"]
        assert isinstance(timeout, aiohttp.ClientTimeout)
        assert timeout.total == 5

    @pytest.mark.asyncio
    async def test_wrong_descriptor_type_is_rejected_without_network(self, stub_client):
        client = stub_client((200, PRICE_BODY), client_cls=IntrinioAPIClient)

        result = await client.dispatch(get_binding("prices"), GetCompanyDetails(identifier="AAPL"))

        assert result.error.kind == ErrorKind.INVALID_REQUEST
        assert "expects GetPrices" in result.error.error_message
        assert client.session.calls == []

    @pytest.mark.asyncio
    async def test_execute_finds_binding_by_descriptor_type(self, stub_client):
        client = stub_client((200, PRICE_BODY), client_cls=IntrinioAPIClient)

        result = await client.execute(GetPrices(identifier="AAPL"))

        assert result.ok
        assert client.session.calls[0]["url"].endswith("/prices")

    @pytest.mark.asyncio
    async def test_unknown_operation_raises_key_error(self, stub_client):
        client = stub_client(client_cls=IntrinioAPIClient)

        with pytest.raises(KeyError, match="Unknown operation"):
            await client.call("nope", GetPrices(identifier="AAPL"))


# ============================================
# Outcomes
# ============================================

class TestOutcomes:
    """Success and every failure class"""

    @pytest.mark.asyncio
    async def test_prices_end_to_end(self, stub_client):
        client = stub_client((200, PRICE_BODY), client_cls=IntrinioAPIClient)

        result = await client.call("prices", GetPrices(identifier="AAPL"))

        assert result.ok
        assert result.error is None
        assert isinstance(result.data, Price)
        assert str(result.data.date) == "2020-01-02"
        assert result.data.close == 300.35

    @pytest.mark.asyncio
    async def test_list_endpoint_decodes_sequence(self, stub_client):
        body = b'[{"fiscal_year": 2019, "fiscal_period": "FY"}, {"fiscal_year": 2018, "fiscal_period": "FY"}]'
        client = stub_client((200, body), client_cls=IntrinioAPIClient)

        result = await client.call(
            "standardized_fundamentals",
            GetStandardizedFundamentals(identifier="AAPL", statement="income_statement")
        )

        assert [row.fiscal_year for row in result.unwrap()] == [2019, 2018]

    @pytest.mark.asyncio
    async def test_remote_400_is_structured_error(self, stub_client):
        body = (b'{"status": 400, "error_code": "ArgumentNullException", '
                b'"message": "Value cannot be null. Parameter name: Name"}')
        client = stub_client((400, body, "Bad Request"), client_cls=IntrinioAPIClient)

        result = await client.call("prices", GetPrices(identifier="AAPL"))

        assert not result.ok
        assert result.data is None
        assert result.error.kind == ErrorKind.REMOTE
        assert result.error.status_code == 400
        assert result.error.error_code == "ArgumentNullException"
        assert result.error.error_message == "Value cannot be null. Parameter name: Name"
        assert result.error.field_errors == []

    @pytest.mark.asyncio
    async def test_5xx_reported_once_without_retry(self, stub_client):
        client = stub_client(
            (503, b"down", "Service Unavailable"),
            (200, PRICE_BODY),
            client_cls=IntrinioAPIClient
        )

        result = await client.call("prices", GetPrices(identifier="AAPL"))

        assert result.error.status_code == 503
        assert len(client.session.calls) == 1

    @pytest.mark.asyncio
    async def test_shape_mismatch_is_malformed_response(self, stub_client):
        client = stub_client((200, b'[{"close": 1.0}]'), client_cls=IntrinioAPIClient)

        result = await client.call("prices", GetPrices(identifier="AAPL"))

        assert result.error.kind == ErrorKind.MALFORMED_RESPONSE
        assert result.error.error_code == "MalformedResponse"
        assert result.error.status_code == 200
        assert result.error.raw_body == '[{"close": 1.0}]'

    @pytest.mark.asyncio
    async def test_non_json_success_body_is_malformed_response(self, stub_client):
        client = stub_client((200, b"<html>maintenance</html>"), client_cls=IntrinioAPIClient)

        result = await client.call("prices", GetPrices(identifier="AAPL"))

        assert result.error.kind == ErrorKind.MALFORMED_RESPONSE

    @pytest.mark.asyncio
    async def test_connection_failure_is_transport_error(self, stub_client):
        client = stub_client(aiohttp.ClientConnectionError("Cannot connect to host"), client_cls=IntrinioAPIClient)

        result = await client.call("prices", GetPrices(identifier="AAPL"))

        assert result.error.kind == ErrorKind.TRANSPORT
        assert result.error.status_code == 0
        assert result.error.error_code == "TransportConnectionError"

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self, stub_client):
        client = stub_client(asyncio.TimeoutError(), client_cls=IntrinioAPIClient)

        result = await client.call("prices", GetPrices(identifier="AAPL"))

        assert result.error.kind == ErrorKind.TRANSPORT
        assert result.error.error_code == "TransportTimeout"

    @pytest.mark.asyncio
    async def test_transport_cancellation_is_distinct_error(self, stub_client):
        """CancelledError raised by the transport while the task itself is not cancelled"""
        client = stub_client(asyncio.CancelledError(), client_cls=IntrinioAPIClient)

        result = await client.call("prices", GetPrices(identifier="AAPL"))

        assert result.error.kind == ErrorKind.CANCELLED
        assert result.error.error_code == "RequestCancelled"

    @pytest.mark.asyncio
    async def test_task_cancel_propagates_to_caller(self, stub_client, hang):
        client = stub_client(hang, client_cls=IntrinioAPIClient)
        reached = []

        async def worker():
            await client.call("prices", GetPrices(identifier="AAPL"))
            reached.append("after call")

        task = asyncio.create_task(worker())
        while not client.session.calls:
            await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert task.cancelled()
        assert reached == []

    @pytest.mark.asyncio
    async def test_outer_timeout_scope_still_fires(self, stub_client, hang):
        client = stub_client(hang, client_cls=IntrinioAPIClient)

        with pytest.raises(TimeoutError):
            async with asyncio.timeout(0.01):
                await client.call("prices", GetPrices(identifier="AAPL"))

    @pytest.mark.asyncio
    async def test_concurrent_calls_do_not_interfere(self, stub_client):
        client = stub_client((200, PRICE_BODY), client_cls=IntrinioAPIClient)

        results = await asyncio.gather(*[
            client.call("prices", GetPrices(identifier=ticker))
            for ticker in ("AAPL", "MSFT", "IBM")
        ])

        assert all(r.ok for r in results)
        assert sorted(c["params"][0][1] for c in client.session.calls) == ["AAPL", "IBM", "MSFT"]


# ============================================
# Real Transport
# ============================================

class TestRealTransport:
    """Uses a real aiohttp session against an unreachable address"""

    @pytest.mark.asyncio
    async def test_unreachable_host_is_transport_error(self):
        async with IntrinioAPIClient("user", "secret", base_url="http://127.0.0.1:1", timeout=5) as client:
            result = await client.call("prices", GetPrices(identifier="AAPL"))

        assert result.error.kind == ErrorKind.TRANSPORT
        assert result.error.status_code == 0
        assert result.error.error_code in ("TransportConnectionError", "TransportTimeout")


# ============================================
# Context Manager
# ============================================

class TestContextManager:
    """Tests for async context manager functionality"""

    @pytest.mark.asyncio
    async def test_context_manager_creates_and_closes_session(self):
        client = IntrinioAPIClient("user", "secret")
        assert client.session is None

        async with client as c:
            assert c.session is not None
            session = c.session

        assert session.closed
        assert client.session is None

    @pytest.mark.asyncio
    async def test_dispatch_raises_if_not_used(self):
        client = IntrinioAPIClient("user", "secret")

        with pytest.raises(RuntimeError, match="not initialized"):
            await client.call("prices", GetPrices(identifier="AAPL"))

    def test_from_settings(self):
        config = Settings(
            intrinio_username="user",
            intrinio_password="secret",
            intrinio_base_url="https://example.test",
            request_timeout=12.5
        )

        client = IntrinioAPIClient.from_settings(config)

        assert client.base_url == "https://example.test"
        assert client.timeout == 12.5

    def test_from_settings_requires_credentials(self):
        with pytest.raises(ValueError, match="INTRINIO_USERNAME"):
            IntrinioAPIClient.from_settings(Settings(intrinio_username="", intrinio_password=""))
