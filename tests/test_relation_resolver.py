from __future__ import annotations

import unittest

from schedule.errors import SourceFetchError
from schedule.resolver import RelationResolver


class _FakeNotion:
    def __init__(self, titles: dict[str, str], failing: set[str] | None = None):
        self.titles = titles
        self.failing = failing or set()
        self.page_calls: list[str] = []

    async def get_page(self, page_id: str):
        self.page_calls.append(page_id)
        if page_id in self.failing:
            raise SourceFetchError(404, f"Could not find page with ID: {page_id}.")
        return {"properties": {"Name": {"type": "title", "title": [{"plain_text": self.titles.get(page_id, "")}]}}}


class RelationResolverTests(unittest.IsolatedAsyncioTestCase):
    async def test_caps_names_and_appends_overflow_marker(self):
        notion = _FakeNotion({f"p{i}": f"Name {i}" for i in range(5)})
        resolver = RelationResolver(notion)

        names = await resolver.resolve_names([f"p{i}" for i in range(5)], max_names=2)

        self.assertEqual(names, ["Name 0", "Name 1", "+3"])
        self.assertEqual(notion.page_calls, ["p0", "p1"])

    async def test_empty_field_resolves_to_nothing(self):
        resolver = RelationResolver(_FakeNotion({}))
        self.assertEqual(await resolver.resolve_names([]), [])

    async def test_each_page_fetched_once_per_resolver(self):
        notion = _FakeNotion({"a": "Alpha", "b": "Beta"})
        resolver = RelationResolver(notion)

        await resolver.resolve_names(["a", "b"])
        await resolver.resolve_names(["b", "a"])

        self.assertEqual(sorted(notion.page_calls), ["a", "b"])

    async def test_fresh_resolver_refetches_renamed_pages(self):
        notion = _FakeNotion({"a": "Old"})
        self.assertEqual(await RelationResolver(notion).resolve_names(["a"]), ["Old"])
        notion.titles["a"] = "New"
        self.assertEqual(await RelationResolver(notion).resolve_names(["a"]), ["New"])

    async def test_failed_and_untitled_pages_are_omitted(self):
        notion = _FakeNotion({"ok": "Fine", "blank": ""}, failing={"gone"})
        resolver = RelationResolver(notion)

        names = await resolver.resolve_names(["gone", "ok"])
        self.assertEqual(names, ["Fine"])
        self.assertEqual(resolver.failed_ids, ["gone"])

        self.assertEqual(await resolver.resolve_names(["blank", "gone"]), [])
        self.assertEqual(notion.page_calls.count("gone"), 1)


if __name__ == "__main__":
    unittest.main()
