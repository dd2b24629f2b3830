from __future__ import annotations

from collections.abc import Iterable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.events import Key, Paste
from textual.widgets import OptionList, Static

from flx_score.models import RankedCandidate
from flx_score.ranking import rank_candidates
from flx_score.rendering import format_ranked_line


class FuzzyPickerApp(App[str | None]):
    CSS_PATH = "picker.tcss"
    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+c", "cancel", show=False),
    ]

    def __init__(
        self,
        candidates: Iterable[str],
        *,
        initial_query: str = "",
        group_separator: str | None = None,
        limit: int | None = None,
    ) -> None:
        super().__init__()
        self._candidates: list[str] = list(candidates)
        self._search_query = initial_query
        self._group_separator = group_separator
        self._limit = limit
        self._ranked: list[RankedCandidate] = []

    def compose(self) -> ComposeResult:
        with Vertical(id="sidebar"):
            yield OptionList(id="candidate-list")
            yield Static("", id="status")

    def on_mount(self) -> None:
        self.query_one("#candidate-list", OptionList).focus()
        self._filter_candidates()

    def _filter_candidates(self) -> None:
        self._ranked = rank_candidates(
            self._search_query,
            self._candidates,
            limit=self._limit,
            group_separator=self._group_separator,
        )
        self._render_candidate_options()
        self._update_status()
        self._update_query_indicator()

    def _render_candidate_options(self) -> None:
        candidate_list = self.query_one("#candidate-list", OptionList)
        candidate_list.clear_options()
        if self._ranked:
            candidate_list.add_options(
                [format_ranked_line(item) for item in self._ranked]
            )
            candidate_list.highlighted = 0
            return
        candidate_list.add_option("No candidates match")

    def _update_status(self) -> None:
        self.query_one("#status", Static).update(
            f"{len(self._ranked)} of {len(self._candidates)} candidates"
        )

    def _query_indicator_text(self) -> Text:
        indicator = Text()
        indicator.append(">", style="bold red")
        indicator.append(f" {self._search_query}_", style="bold white")
        return indicator

    def _update_query_indicator(self) -> None:
        sidebar = self.query_one("#sidebar", Vertical)
        sidebar.border_title = self._query_indicator_text()

    def _append_query_text(self, text: str) -> None:
        self._search_query += text
        self._filter_candidates()

    def _delete_query_char(self) -> None:
        if not self._search_query:
            return
        self._search_query = self._search_query[:-1]
        self._filter_candidates()

    def _accept_candidate_at(self, option_index: int | None) -> None:
        if option_index is None or not 0 <= option_index < len(self._ranked):
            self.bell()
            return
        self.exit(self._ranked[option_index].candidate)

    def action_cancel(self) -> None:
        self.exit(None)

    def on_key(self, event: Key) -> None:
        if event.key == "backspace":
            self._delete_query_char()
            event.stop()
            return

        if event.key == "space":
            self._append_query_text(" ")
            event.stop()
            return

        if event.character and event.character.isprintable():
            self._append_query_text(event.character)
            event.stop()
            return

    def on_paste(self, event: Paste) -> None:
        sanitized = event.text.replace("\r", "").replace("\n", "")
        if not sanitized:
            return
        self._append_query_text(sanitized)
        event.stop()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id != "candidate-list":
            return
        self._accept_candidate_at(event.option_index)
