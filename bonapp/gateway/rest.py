"""Gateway implementation against a hosted PostgREST-style data API."""

import logging
from typing import Any

import httpx

from bonapp.gateway.base import DataGateway, Filter, GatewayError, Order, Row

logger = logging.getLogger(__name__)

_RESERVED = set(',()":')


def _format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _format_list_value(value: Any) -> str:
    text = _format_value(value)
    if isinstance(value, str) and (_RESERVED & set(text) or " " in text):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def encode_filter(f: Filter) -> tuple[str, str]:
    """Translate a filter into a PostgREST query parameter."""
    if f.op == "eq":
        if f.value is None:
            return f.column, "is.null"
        return f.column, f"eq.{_format_value(f.value)}"
    if f.op == "neq":
        if f.value is None:
            return f.column, "not.is.null"
        return f.column, f"neq.{_format_value(f.value)}"
    if f.op == "lte":
        return f.column, f"lte.{_format_value(f.value)}"
    if f.op == "in":
        values = ",".join(_format_list_value(v) for v in f.value)
        return f.column, f"in.({values})"
    if f.op == "ilike":
        return f.column, f"ilike.{str(f.value).replace('%', '*')}"
    raise GatewayError(f"Unsupported filter operator '{f.op}'")


def encode_order(order: list[Order]) -> str:
    return ",".join(f"{o.column}.{'desc' if o.descending else 'asc'}" for o in order)


class RestGateway(DataGateway):
    """Talks to ``{base_url}/rest/v1/{collection}`` over HTTP."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout
        self.transport = transport

    def _headers(self, prefer_representation: bool = False) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
        }
        if prefer_representation:
            headers["Prefer"] = "return=representation"
        return headers

    async def _request(
        self,
        method: str,
        collection: str,
        params: list[tuple[str, str]],
        json: Any = None,
        prefer_representation: bool = False,
    ) -> Any:
        url = f"{self.base_url}/rest/v1/{collection}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=self._headers(prefer_representation),
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.error(f"{method} {collection} returned {e.response.status_code}: {detail}")
            raise GatewayError(
                f"Data API rejected {method} on '{collection}': {detail}", collection
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {collection} failed: {e}")
            raise GatewayError(f"Data API unreachable for '{collection}': {e}", collection) from e

        if not response.content:
            return []
        return response.json()

    async def select(
        self,
        collection: str,
        columns: list[str] | None = None,
        filters: list[Filter] | None = None,
        order: list[Order] | None = None,
        limit: int | None = None,
    ) -> list[Row]:
        params = [("select", ",".join(columns) if columns else "*")]
        params.extend(encode_filter(f) for f in filters or [])
        if order:
            params.append(("order", encode_order(order)))
        if limit is not None:
            params.append(("limit", str(limit)))
        return await self._request("GET", collection, params)

    async def insert(self, collection: str, rows: Row | list[Row]) -> list[Row]:
        payload = [rows] if isinstance(rows, dict) else list(rows)
        return await self._request(
            "POST", collection, [], json=payload, prefer_representation=True
        )

    async def update(self, collection: str, values: Row, filters: list[Filter]) -> int:
        self._require_filters(collection, filters, "update")
        params = [encode_filter(f) for f in filters]
        rows = await self._request(
            "PATCH", collection, params, json=values, prefer_representation=True
        )
        return len(rows)

    async def delete(self, collection: str, filters: list[Filter]) -> int:
        self._require_filters(collection, filters, "delete from")
        params = [encode_filter(f) for f in filters]
        rows = await self._request("DELETE", collection, params, prefer_representation=True)
        return len(rows)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or str(body)
    return str(body)
