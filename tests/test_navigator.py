"""
Tests for page navigation and the catalog loader.
"""
from unittest.mock import Mock

import pytest
from rich.text import Text

from twitchtui.api import queries
from twitchtui.api.models import EMPTY, Category, StreamNode
from twitchtui.config import Settings
from twitchtui.errors import MalformedResponseError, TransportError
from twitchtui.navigator import (
    CatalogLoader,
    CategoryPage,
    HomePage,
    Navigator,
    SearchPage,
    depth,
)
from twitchtui.projector import DisplayRow


def _rows(n, node=EMPTY):
    return [DisplayRow(label=Text(f"row {i}"), detail=Text(), node=node) for i in range(n)]


class FakeLoader:
    """Returns ``sizes[title]`` rows for a page, or raises ``errors[title]``."""

    def __init__(self, sizes, errors=None):
        self.sizes = sizes
        self.errors = errors or {}
        self.calls = []

    def __call__(self, page):
        self.calls.append(page.title)
        if page.title in self.errors:
            raise self.errors[page.title]
        return _rows(self.sizes.get(page.title, 0))


@pytest.fixture
def loader():
    return FakeLoader({"Home": 10, "Chess": 4, "speedrun": 3})


@pytest.fixture
def nav(loader):
    navigator = Navigator(loader)
    navigator.load()
    return navigator


class TestSelection:

    def test_initial_state(self, nav):
        assert isinstance(nav.page, HomePage)
        assert len(nav.rows) == 10
        assert nav.selection == 0
        assert nav.current is nav.rows[0]

    def test_select_clamps(self, nav):
        nav.select(99)
        assert nav.selection == 9
        nav.select(-5)
        assert nav.selection == 0

    def test_move(self, nav):
        nav.move(3)
        nav.move(-1)
        assert nav.selection == 2
        nav.move(100)
        assert nav.selection == 9

    def test_empty_page(self):
        nav = Navigator(FakeLoader({}))
        nav.load()
        nav.move(1)
        assert nav.rows == []
        assert nav.selection == 0
        assert nav.current is None


class TestTransitions:

    def test_enter_category_and_back_restores_selection(self, nav, loader):
        nav.select(6)
        nav.enter_category("Chess")

        assert isinstance(nav.page, CategoryPage)
        assert nav.page.title == "Chess"
        assert nav.selection == 0
        assert depth(nav.page) == 1

        nav.back()
        assert isinstance(nav.page, HomePage)
        assert nav.selection == 6
        assert loader.calls == ["Home", "Chess", "Home"]

    def test_back_clamps_to_new_row_count(self, nav, loader):
        nav.select(8)
        nav.search("speedrun")
        loader.sizes["Home"] = 5

        nav.back()
        assert nav.selection == 4

    def test_back_unwinds_one_page_at_a_time(self, nav):
        nav.select(2)
        nav.search("speedrun")
        nav.select(1)
        nav.enter_category("Chess")
        assert depth(nav.page) == 2

        nav.back()
        assert isinstance(nav.page, SearchPage)
        assert nav.selection == 1

        nav.back()
        assert isinstance(nav.page, HomePage)
        assert nav.selection == 2

    def test_back_on_home_resets_selection(self, nav, loader):
        nav.select(5)
        nav.back()

        assert isinstance(nav.page, HomePage)
        assert nav.selection == 0
        assert loader.calls == ["Home"]

    def test_home_starts_fresh(self, nav):
        nav.search("speedrun")
        nav.enter_category("Chess")
        nav.home()

        assert isinstance(nav.page, HomePage)
        assert depth(nav.page) == 0

    def test_refresh_keeps_selection(self, nav, loader):
        nav.select(7)
        nav.refresh()
        assert nav.selection == 7
        assert loader.calls == ["Home", "Home"]


class TestFailedTransitions:
    """A failed fetch leaves the navigator where it was."""

    def test_failed_push(self, loader, nav):
        loader.errors["Chess"] = TransportError("offline")
        nav.select(3)

        with pytest.raises(TransportError):
            nav.enter_category("Chess")

        assert isinstance(nav.page, HomePage)
        assert nav.selection == 3
        assert len(nav.rows) == 10

    def test_failed_back(self, loader, nav):
        nav.search("speedrun")
        nav.select(2)
        loader.errors["Home"] = MalformedResponseError("bad")

        with pytest.raises(MalformedResponseError):
            nav.back()

        assert isinstance(nav.page, SearchPage)
        assert nav.selection == 2

    def test_failed_refresh(self, loader, nav):
        nav.select(4)
        loader.errors["Home"] = TransportError("timeout")

        with pytest.raises(TransportError):
            nav.refresh()

        assert nav.selection == 4
        assert len(nav.rows) == 10


class TestActivate:

    def test_category_enters_page(self):
        loader = FakeLoader({"Home": 1, "chess": 2})
        nav = Navigator(loader)
        nav.load()
        nav.rows = _rows(1, node=Category(name="chess"))

        assert nav.activate(lambda node: node.name) is True
        assert isinstance(nav.page, CategoryPage)
        assert nav.page.name == "chess"

    def test_playback_stays(self, nav):
        dispatch = Mock(return_value=None)
        nav.select(1)

        assert nav.activate(dispatch) is False
        dispatch.assert_called_once_with(nav.rows[1].node)
        assert isinstance(nav.page, HomePage)
        assert nav.selection == 1

    def test_empty_page(self):
        nav = Navigator(FakeLoader({}))
        nav.load()
        dispatch = Mock()

        assert nav.activate(dispatch) is False
        dispatch.assert_not_called()


class TestCatalogLoader:

    @pytest.mark.parametrize(
        "home_page, operation, variables",
        [
            ("personal_section", "PersonalSections", {}),
            ("shelves", "Shelves", {}),
            ("game:Chess", "DirectoryPage_Game", {"name": "Chess"}),
            ("search:speedrun", "SearchResultsPage_SearchResults", {"query": "speedrun"}),
            ("bogus", "PersonalSections", {}),
        ],
    )
    def test_home_request(self, home_page, operation, variables):
        loader = CatalogLoader.from_settings(Mock(), Settings(home_page=home_page))
        body, _ = loader.request_for(HomePage())

        assert body["operationName"] == operation
        for key, value in variables.items():
            assert body["variables"][key] == value

    def test_page_requests(self):
        loader = CatalogLoader(Mock())
        body, _ = loader.request_for(CategoryPage(name="Chess", previous=HomePage()))
        assert body == queries.directory_page("Chess")

        body, _ = loader.request_for(SearchPage(query="speedrun", previous=HomePage()))
        assert body == queries.search_results("speedrun")

    def test_loads_and_projects(self, respond, directory_data, projection_config):
        client = Mock()
        client.query.return_value = respond(directory_data)
        loader = CatalogLoader(client, config=projection_config)

        rows = loader(CategoryPage(name="Chess", previous=HomePage()))

        client.query.assert_called_once_with(queries.directory_page("Chess"))
        assert [row.label.plain for row in rows] == ["Gina", "Hank"]
        assert isinstance(rows[0].node, StreamNode)

    def test_wrong_shape_is_malformed(self, respond, personal_sections_data):
        client = Mock()
        client.query.return_value = respond(personal_sections_data)
        loader = CatalogLoader(client)

        with pytest.raises(MalformedResponseError):
            loader(SearchPage(query="x", previous=HomePage()))
