from __future__ import annotations

from schedule.errors import SourceFetchError
from schedule.notion_props import first_title_from_page


class RelationResolver:
    """Resolves relation page ids to titles.

    One instance serves a single month query; its cache dies with it so renamed
    pages show up on the next sync. A page that cannot be fetched is cached as an
    empty name and left out of the output.
    """

    def __init__(self, client) -> None:
        self.client = client
        self._titles: dict[str, str] = {}
        self.failed_ids: list[str] = []

    async def page_title(self, page_id: str) -> str:
        if page_id in self._titles:
            return self._titles[page_id]
        try:
            page = await self.client.get_page(page_id)
        except SourceFetchError as e:
            print(f"[Notion] relation lookup failed page={page_id}: {e}")
            self.failed_ids.append(page_id)
            page = None
        title = first_title_from_page(page) if page else ""
        self._titles[page_id] = title
        return title

    async def resolve_names(self, ids: list[str], max_names: int = 2) -> list[str]:
        if not ids:
            return []
        limit = max(0, int(max_names))
        names: list[str] = []
        for page_id in ids[:limit]:
            title = await self.page_title(page_id)
            if title:
                names.append(title)
        if len(ids) > limit:
            names.append(f"+{len(ids) - limit}")
        return names
