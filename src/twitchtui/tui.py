from __future__ import annotations

import logging
from typing import Callable, Optional

from rich.text import Text
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.containers import Container, Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import DataTable, Input, Static

from twitchtui.api.client import GqlClient
from twitchtui.config import Settings
from twitchtui.errors import TwitchTuiError
from twitchtui.navigator import CatalogLoader, Navigator
from twitchtui.quality import QualitySelector
from twitchtui.usecases.select import NodeDispatcher

logger = logging.getLogger(__name__)

# Settings names to textual border types
BORDERS = {
    "plain": "solid",
    "thick": "heavy",
    "double": "double",
    "rounded": "round",
}


class CatalogTable(DataTable):
    BINDINGS = [
        ("enter", "app.activate", ""),
        ("l", "app.activate", ""),
        ("right", "app.activate", ""),
        ("b", "app.back", ""),
        ("left", "app.back", ""),
        ("j", "cursor_down", ""),
        ("k", "cursor_up", ""),
    ]


class SearchScreen(ModalScreen[Optional[str]]):
    DEFAULT_CSS = """
    SearchScreen {
        align: center middle;
    }
    SearchScreen #search_box {
        width: 60;
        height: auto;
        padding: 0 1;
    }
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, *, border: str = "solid", title_align: str = "left") -> None:
        super().__init__()
        self._border = border
        self._title_align = title_align

    def compose(self) -> ComposeResult:
        with Container(id="search_box"):
            yield Input(placeholder="Search for streams", id="query")

    def on_mount(self) -> None:
        box = self.query_one("#search_box", Container)
        box.border_title = "Search for streams"
        box.styles.border = (self._border, "white")
        box.styles.border_title_align = self._title_align
        self.query_one("#query", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)


class TwitchApp(App[None]):
    BINDINGS = [
        ("q", "quit", "Quit"),
        ("h", "home", "Home"),
        ("s", "search", "Search"),
        ("slash", "search", "Search"),
        ("r", "refresh", "Refresh"),
        ("plus", "quality_up", "Quality +"),
        ("minus", "quality_down", "Quality -"),
    ]

    CSS = """
    #body {
        layout: horizontal;
        height: 1fr;
    }

    #list_panel {
        width: 1fr;
        padding: 1 1;
    }

    #list_panel DataTable {
        height: 1fr;
    }

    #info_panel {
        width: 1fr;
        padding: 1 1;
    }

    #detail_scroll {
        height: 1fr;
    }

    #keys {
        height: auto;
        text-align: right;
    }
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        client: Optional[GqlClient] = None,
        debug: bool = False,
    ) -> None:
        super().__init__()
        self._debug_logging = debug
        self.settings = settings or Settings()
        self.client = client or GqlClient.from_settings(self.settings)
        self.quality = QualitySelector(self.settings.qualities())
        self.navigator = Navigator(CatalogLoader.from_settings(self.client, self.settings))
        self.dispatcher = NodeDispatcher(
            self.client,
            player=self.settings.player,
            quality=self.quality,
            suspend=self.suspend,
        )

    def compose(self) -> ComposeResult:
        with Horizontal(id="body"):
            with Vertical(id="list_panel"):
                yield CatalogTable(id="rows", show_header=False, cursor_type="row", zebra_stripes=False)
            with Vertical(id="info_panel"):
                with VerticalScroll(id="detail_scroll"):
                    yield Static("", id="detail")
                yield Static("", id="keys")

    def on_mount(self) -> None:
        border = BORDERS.get(self.settings.border_type, "solid")
        for panel_id in ("#list_panel", "#info_panel"):
            panel = self.query_one(panel_id)
            panel.styles.border = (border, "white")
            panel.styles.border_title_align = self.settings.title_alignment

        table = self.query_one("#rows", CatalogTable)
        table.add_column("", key="label")
        table.focus()

        self._show_keys()
        self._attempt("Loading", self.navigator.load)

    # Display

    def _show_keys(self) -> None:
        keys = "\n".join(
            [
                "back: b",
                "search: s",
                "refresh: r",
                "quit: q",
                "",
                "quality: +-",
                self.quality.current,
            ]
        )
        self.query_one("#keys", Static).update(keys)

    def _show_detail(self) -> None:
        row = self.navigator.current
        self.query_one("#detail", Static).update(row.detail if row is not None else Text())

    def _show_page(self) -> None:
        nav = self.navigator
        self.query_one("#list_panel").border_title = nav.page.title

        table = self.query_one("#rows", CatalogTable)
        table.clear()
        for i, row in enumerate(nav.rows):
            # The second line spaces the rows out
            table.add_row(row.label, height=2, key=str(i))

        if nav.rows:
            table.move_cursor(row=nav.selection)
        else:
            self.notify("No results")
        self._show_detail()

    def _attempt(self, what: str, action: Callable[[], object]) -> None:
        """Run a navigation step, redrawing the page unless it returned False."""
        try:
            result = action()
        except (TwitchTuiError, SuspendNotSupported) as exc:
            logger.error("%s failed: %s", what, exc, exc_info=self._debug_logging)
            self.notify(f"{what} failed: {exc}", severity="error")
            return
        if result is not False:
            self._show_page()

    # Events

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        event.stop()
        self.navigator.select(event.cursor_row)
        self._show_detail()

    # Actions

    def action_activate(self) -> None:
        self._attempt("Selecting", lambda: self.navigator.activate(self.dispatcher))

    def action_back(self) -> None:
        self._attempt("Going back", self.navigator.back)

    def action_home(self) -> None:
        self._attempt("Loading home", self.navigator.home)

    def action_refresh(self) -> None:
        self._attempt("Refreshing", self.navigator.refresh)

    def action_search(self) -> None:
        def submitted(query: Optional[str]) -> None:
            query = (query or "").strip()
            if not query:
                return
            self._attempt("Searching", lambda: self.navigator.search(query))

        self.push_screen(
            SearchScreen(
                border=BORDERS.get(self.settings.border_type, "solid"),
                title_align=self.settings.title_alignment,
            ),
            submitted,
        )

    def action_quality_up(self) -> None:
        self.quality.increase()
        self._show_keys()

    def action_quality_down(self) -> None:
        self.quality.decrease()
        self._show_keys()
