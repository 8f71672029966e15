from __future__ import annotations

import json
from typing import Any

import httpx

from config.defaults import NOTION_API_BASE_URL
from config.defaults import NOTION_VERSION
from schedule.errors import SourceFetchError


class NotionClient:
    """Minimal Notion REST client: one database query and page lookup by id."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = NOTION_API_BASE_URL,
        notion_version: str = NOTION_VERSION,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._token = str(token or "")
        self._base_url = base_url.rstrip("/")
        self._notion_version = notion_version
        self._owns_http_client = http_client is None
        self._http_client = (
            http_client
            if http_client is not None
            else httpx.AsyncClient(timeout=httpx.Timeout(20.0, connect=10.0))
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Notion-Version": self._notion_version,
            "Content-Type": "application/json",
        }

    async def _request(self, method: str, path: str, *, body: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = await self._http_client.request(method, url, json=body, headers=self._headers())
        except httpx.HTTPError as exc:
            raise SourceFetchError(None, f"{type(exc).__name__}: {exc}") from exc

        if response.status_code < 200 or response.status_code >= 300:
            raise SourceFetchError(response.status_code, _notion_error_message(response))

        try:
            payload = response.json()
        except ValueError as exc:
            raise SourceFetchError(response.status_code, "Invalid JSON payload from Notion API") from exc
        if not isinstance(payload, dict):
            raise SourceFetchError(response.status_code, "Notion API payload must be a JSON object")
        return payload

    async def query_database(self, database_id: str, body: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/databases/{database_id}/query", body=body)

    async def get_page(self, page_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/pages/{page_id}")

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()


def _notion_error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
        return json.dumps(payload, ensure_ascii=False)

    text = response.text.strip()
    return text or "unknown error"
