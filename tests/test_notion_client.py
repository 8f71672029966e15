from __future__ import annotations

import json
import unittest

import httpx

from schedule.errors import SourceFetchError
from schedule.notion_client import NotionClient


class NotionClientTests(unittest.IsolatedAsyncioTestCase):
    def _client(self, handler) -> NotionClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        self.addAsyncCleanup(http_client.aclose)
        return NotionClient(token="secret-token", http_client=http_client)

    async def test_query_posts_body_with_auth_and_version_headers(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"results": []})

        client = self._client(handler)
        out = await client.query_database("db123", {"page_size": 100})

        self.assertEqual(out, {"results": []})
        req = requests[0]
        self.assertEqual(req.method, "POST")
        self.assertEqual(str(req.url), "https://api.notion.com/v1/databases/db123/query")
        self.assertEqual(req.headers["Authorization"], "Bearer secret-token")
        self.assertEqual(req.headers["Notion-Version"], "2022-06-28")
        self.assertEqual(json.loads(req.content), {"page_size": 100})

    async def test_get_page_uses_get(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(f"{request.method} {request.url.path}")
            return httpx.Response(200, json={"id": "p1", "properties": {}})

        client = self._client(handler)
        page = await client.get_page("p1")
        self.assertEqual(page["id"], "p1")
        self.assertEqual(seen, ["GET /v1/pages/p1"])

    async def test_non_2xx_raises_with_status_and_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                404,
                json={"object": "error", "status": 404, "message": "Could not find database with ID: db123."},
            )

        client = self._client(handler)
        with self.assertRaises(SourceFetchError) as ctx:
            await client.query_database("db123", {})
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(str(ctx.exception), "Notion API 404: Could not find database with ID: db123.")

    async def test_error_body_without_message_is_serialized(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"code": "internal"})

        client = self._client(handler)
        with self.assertRaises(SourceFetchError) as ctx:
            await client.get_page("p1")
        self.assertIn('"code": "internal"', str(ctx.exception))

    async def test_transport_errors_become_source_fetch_errors(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("boom", request=request)

        client = self._client(handler)
        with self.assertRaises(SourceFetchError) as ctx:
            await client.get_page("p1")
        self.assertIsNone(ctx.exception.status_code)
        self.assertIn("ConnectError", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
