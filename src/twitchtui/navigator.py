"""Pages and the navigation between them.

Each page other than home owns the page it was opened from, so going back
unwinds the chain one page at a time and lands on the row that was selected
before leaving.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union

from twitchtui.api import queries
from twitchtui.api.client import GqlClient
from twitchtui.api.models import (
    ContentNode,
    DirectoryData,
    PersonalSectionsData,
    SearchData,
    ShelvesData,
    WireModel,
    decode_response,
)
from twitchtui.projector import DisplayRow, ProjectionConfig, project

logger = logging.getLogger(__name__)


@dataclass
class HomePage:
    selection: int = 0

    previous = None

    @property
    def title(self) -> str:
        return "Home"


@dataclass
class CategoryPage:
    name: str
    previous: "Page"
    selection: int = 0

    @property
    def title(self) -> str:
        return self.name


@dataclass
class SearchPage:
    query: str
    previous: "Page"
    selection: int = 0

    @property
    def title(self) -> str:
        return self.query


Page = Union[HomePage, CategoryPage, SearchPage]

Loader = Callable[[Page], List[DisplayRow]]


def depth(page: Page) -> int:
    n = 0
    while page.previous is not None:
        page = page.previous
        n += 1
    return n


class CatalogLoader:
    """Fetches, decodes and projects the rows for a page."""

    def __init__(
        self,
        client: GqlClient,
        *,
        home: Tuple[str, str] = ("personal_section", ""),
        config: Optional[ProjectionConfig] = None,
    ) -> None:
        self.client = client
        self.home = home
        self.config = config or ProjectionConfig()

    @classmethod
    def from_settings(cls, client: GqlClient, settings) -> "CatalogLoader":
        return cls(client, home=settings.home(), config=ProjectionConfig.from_settings(settings))

    def request_for(self, page: Page) -> Tuple[Dict[str, Any], Type[WireModel]]:
        if isinstance(page, CategoryPage):
            return queries.directory_page(page.name), DirectoryData
        if isinstance(page, SearchPage):
            return queries.search_results(page.query), SearchData

        kind, arg = self.home
        if kind == "shelves":
            return queries.shelves(), ShelvesData
        if kind == "game":
            return queries.directory_page(arg), DirectoryData
        if kind == "search":
            return queries.search_results(arg), SearchData
        return queries.personal_sections(), PersonalSectionsData

    def __call__(self, page: Page) -> List[DisplayRow]:
        body, expect = self.request_for(page)
        envelope = decode_response(self.client.query(body), expect)
        rows = project(envelope, self.config)
        logger.debug("%s: %d rows", page.title, len(rows))
        return rows


class Navigator:
    """Tracks the current page, its rows and the selected row.

    Every transition fetches the new page before committing to it, so a
    failed request leaves the current page, rows and selection untouched.
    """

    def __init__(self, loader: Loader) -> None:
        self._loader = loader
        self.page: Page = HomePage()
        self.rows: List[DisplayRow] = []

    @property
    def selection(self) -> int:
        return self.page.selection

    @property
    def current(self) -> Optional[DisplayRow]:
        if not self.rows:
            return None
        return self.rows[self.selection]

    def _clamp(self, index: int, rows: Optional[List[DisplayRow]] = None) -> int:
        rows = self.rows if rows is None else rows
        return max(0, min(index, len(rows) - 1))

    def _commit(self, page: Page, rows: List[DisplayRow], selection: int) -> None:
        page.selection = self._clamp(selection, rows)
        self.page = page
        self.rows = rows

    def load(self) -> None:
        self.refresh()

    def select(self, index: int) -> None:
        self.page.selection = self._clamp(index)

    def move(self, delta: int) -> None:
        self.select(self.selection + delta)

    def refresh(self) -> None:
        rows = self._loader(self.page)
        self._commit(self.page, rows, self.page.selection)

    def _push(self, page: Page) -> None:
        logger.info("Opening %s (depth %d)", page.title, depth(page))
        rows = self._loader(page)
        self._commit(page, rows, 0)

    def enter_category(self, name: str) -> None:
        self._push(CategoryPage(name=name, previous=self.page))

    def search(self, query: str) -> None:
        self._push(SearchPage(query=query, previous=self.page))

    def home(self) -> None:
        self._push(HomePage())

    def back(self) -> None:
        previous = self.page.previous
        if previous is None:
            self.page.selection = 0
            return
        logger.info("Back to %s", previous.title)
        rows = self._loader(previous)
        self._commit(previous, rows, previous.selection)

    def activate(self, dispatch: Callable[[ContentNode], Optional[str]]) -> bool:
        """Select the current row. Returns True if that moved to another page."""
        row = self.current
        if row is None:
            return False
        name = dispatch(row.node)
        if name is None:
            return False
        self.enter_category(name)
        return True
