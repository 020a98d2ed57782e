"""Tests for the hosted data API gateway."""

import json

import httpx
import pytest

from bonapp.gateway import GatewayError, Order, eq, escape_like, ilike, in_, lte, neq
from bonapp.gateway.rest import RestGateway, encode_filter

BASE_URL = "https://project.example.co"


def make_gateway(handler, access_token=None):
    return RestGateway(
        BASE_URL,
        "anon-key",
        access_token=access_token,
        transport=httpx.MockTransport(handler),
    )


class TestEncodeFilter:
    """PostgREST query parameter encoding."""

    def test_eq_values(self):
        assert encode_filter(eq("is_bought", True)) == ("is_bought", "eq.true")
        assert encode_filter(eq("product_id", 7)) == ("product_id", "eq.7")
        assert encode_filter(eq("category_id", None)) == ("category_id", "is.null")

    def test_neq(self):
        assert encode_filter(neq("id", 3)) == ("id", "neq.3")

    def test_in_list(self):
        assert encode_filter(in_("id", [1, 2, 3])) == ("id", "in.(1,2,3)")
        assert encode_filter(in_("name", ["a,b", "c"])) == ("name", 'in.("a,b",c)')

    def test_lte(self):
        assert encode_filter(lte("prepare_time", 30)) == ("prepare_time", "lte.30")

    def test_ilike_uses_star_wildcard(self):
        assert encode_filter(ilike("name", "%mak%")) == ("name", "ilike.*mak*")

    def test_escape_like(self):
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


@pytest.mark.asyncio
async def test_select_builds_postgrest_query():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json=[{"id": 1, "quantity": 2.5}])

    gateway = make_gateway(handler, access_token="user-jwt")
    rows = await gateway.select(
        "product_on_list",
        columns=["id", "quantity"],
        filters=[eq("shopping_list_id", "abc"), eq("is_bought", True)],
        order=[Order("id"), Order("quantity", descending=True)],
        limit=10,
    )

    request = seen["request"]
    assert rows == [{"id": 1, "quantity": 2.5}]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/product_on_list"
    assert request.url.params.get("select") == "id,quantity"
    assert request.url.params.get("shopping_list_id") == "eq.abc"
    assert request.url.params.get("is_bought") == "eq.true"
    assert request.url.params.get("order") == "id.asc,quantity.desc"
    assert request.url.params.get("limit") == "10"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer user-jwt"


@pytest.mark.asyncio
async def test_insert_posts_list_and_returns_representation():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.headers["Prefer"] == "return=representation"
        assert request.headers["Authorization"] == "Bearer anon-key"
        body = json.loads(request.content)
        return httpx.Response(201, json=[{"id": 41, **body[0]}])

    rows = await make_gateway(handler).insert(
        "pantry", {"user_id": "o-1", "product_id": 7, "quantity": 400.0}
    )
    assert rows == [{"id": 41, "user_id": "o-1", "product_id": 7, "quantity": 400.0}]


@pytest.mark.asyncio
async def test_update_and_delete_count_returned_rows():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "PATCH":
            assert json.loads(request.content) == {"quantity": 700.0}
            assert request.url.params.get("id") == "eq.1"
            return httpx.Response(200, json=[{"id": 1}])
        assert request.method == "DELETE"
        assert request.url.params.get("id") == "in.(3,4)"
        return httpx.Response(200, json=[{"id": 3}, {"id": 4}])

    gateway = make_gateway(handler)
    assert await gateway.update("pantry", {"quantity": 700.0}, [eq("id", 1)]) == 1
    assert await gateway.delete("product_on_list", [in_("id", [3, 4])]) == 2


@pytest.mark.asyncio
async def test_http_error_becomes_gateway_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "JWT expired", "code": "PGRST301"})

    with pytest.raises(GatewayError) as exc_info:
        await make_gateway(handler).select("pantry")
    assert "JWT expired" in exc_info.value.message
    assert exc_info.value.collection == "pantry"


@pytest.mark.asyncio
async def test_transport_error_becomes_gateway_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GatewayError) as exc_info:
        await make_gateway(handler).select("pantry")
    assert "unreachable" in exc_info.value.message


@pytest.mark.asyncio
async def test_unfiltered_delete_is_refused_without_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(GatewayError):
        await make_gateway(handler).delete("product_on_list", [])
