from __future__ import annotations

import webbrowser
from typing import List, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.screen import Screen
from textual.worker import Worker, WorkerState
from textual.widgets import (
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Markdown,
    Select,
    Static,
)

from .config import logger
from .datamodels import (
    DIFFICULTIES,
    PRACTICE_SITE_NAMES,
    PRACTICE_SITES,
    ProgressEntry,
    Question,
    TaggedQuestion,
)
from .errors import LoadError
from .fetcher import RequestSequencer
from .search import GlobalSearch
from .widgets import STATUS_LABELS, StatusBar

DIFFICULTY_OPTIONS = [(d, d) for d in DIFFICULTIES]


def select_value(select: Select) -> str:
    """Return the selected option, or an empty string when nothing is chosen."""
    value = select.value
    return value if isinstance(value, str) else ""


def first_practice_link(question: Question) -> Optional[str]:
    for site in PRACTICE_SITES:
        url = question.practice_links.get(site)
        if url:
            return url
    return None


def question_markdown(question: Question, entry: ProgressEntry) -> str:
    """Render the full question detail as Markdown."""
    parts = [
        f"# {question.title}\n",
        f"**{question.difficulty}** · {question.category} · {STATUS_LABELS[entry.status]}"
        + (" · ★ Bookmarked" if entry.bookmarked else "")
        + "\n",
        "## Description\n",
        f"{question.description}\n",
    ]
    if question.hints:
        parts.append("## Hints\n")
        parts.extend(f"- {hint}\n" for hint in question.hints)
        parts.append("")
    if question.time_complexity or question.space_complexity:
        parts.append("## Complexity\n")
        parts.append(f"- **Time:** {question.time_complexity or 'n/a'}")
        parts.append(f"- **Space:** {question.space_complexity or 'n/a'}\n")
    links = [
        f"- [{PRACTICE_SITE_NAMES[site]}]({question.practice_links[site]})"
        for site in PRACTICE_SITES
        if question.practice_links.get(site)
    ]
    if links:
        parts.append("## Practice Links\n")
        parts.extend(links)
        parts.append("")
    if question.companies:
        parts.append("## Companies\n")
        parts.append(", ".join(question.companies) + "\n")
    if question.tags:
        parts.append("## Tags\n")
        parts.append(" ".join(f"`#{tag}`" for tag in question.tags) + "\n")
    return "\n".join(parts)


# --- Question detail screen ---
class QuestionDetailScreen(Screen):
    BINDINGS = [
        Binding("escape,q,left", "app.pop_screen", "Back"),
        Binding("s", "cycle_status", "Cycle status"),
        Binding("b", "bookmark", "Bookmark"),
        Binding("o", "open_link", "Open practice link"),
        Binding("down", "scroll_down", "Scroll Down"),
        Binding("up", "scroll_up", "Scroll Up"),
    ]

    def __init__(self, question: Question, dataset_id: str):
        super().__init__()
        self.question = question
        self.dataset_id = dataset_id

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(Markdown("", id="question-markdown"), id="question-scroll")
        yield StatusBar()

    def on_mount(self) -> None:
        self.title = self.question.title
        self.sub_title = self.app.catalog.label(self.dataset_id)
        self.refresh_detail()
        self.query_one("#question-scroll").focus()

        keybinding_style = self.app.get_keybinding_style()
        self.query_one(StatusBar).set_keybindings(
            f"[b {keybinding_style}]s[/] status, [b {keybinding_style}]b[/] bookmark, "
            f"[b {keybinding_style}]o[/] open link"
        )

    def refresh_detail(self) -> None:
        entry = self.app.progress.get_status(self.dataset_id, self.question.id)
        self.query_one("#question-markdown", Markdown).update(question_markdown(self.question, entry))

    def action_cycle_status(self) -> None:
        if self.app.cycle_status(self.dataset_id, self.question.id) is not None:
            self.refresh_detail()

    def action_bookmark(self) -> None:
        if self.app.toggle_bookmark(self.dataset_id, self.question.id) is not None:
            self.refresh_detail()

    def action_open_link(self) -> None:
        url = first_practice_link(self.question)
        if url:
            webbrowser.open(url)
        else:
            self.app.notify("No practice link for this question.", severity="warning")

    def action_scroll_down(self) -> None:
        self.query_one("#question-scroll").scroll_down()

    def action_scroll_up(self) -> None:
        self.query_one("#question-scroll").scroll_up()


class ErrorScreen(Screen):
    BINDINGS = [Binding("q", "app.quit", "Quit"), Binding("escape", "app.pop_screen", "Back")]

    def __init__(self, title: str, message: str):
        super().__init__()
        self.error_title = title
        self.message = message

    def compose(self) -> ComposeResult:
        yield Header()
        yield Label(self.error_title, classes="error-title")
        yield Markdown(self.message)
        yield Footer()


# --- Search across every dataset ---
class GlobalSearchScreen(Screen):
    """
    Query every dataset at once. Dismisses with ``(dataset_id, question_id)``
    when a result is chosen, or None.
    """

    BINDINGS = [
        Binding("escape", "close", "Back"),
    ]

    def __init__(self, search: GlobalSearch):
        super().__init__()
        self.search = search
        self.sequencer = RequestSequencer()
        self.results: List[TaggedQuestion] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="search-controls"):
            yield Input(placeholder="Search all questions...", id="global-search")
            yield Select(DIFFICULTY_OPTIONS, prompt="Any difficulty", id="global-difficulty")
            yield Select([], prompt="Any category", id="global-category")
        yield Static("", id="search-summary")
        yield DataTable(id="search-results")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "Search all questions"
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.add_column("Dataset", key="dataset")
        table.add_column("Difficulty", key="difficulty")
        table.add_column("Category", key="category")
        table.add_column("Title", key="title")
        self.query_one("#global-search", Input).focus()
        self.run_worker(self._load_categories, name="category_loader", thread=True)

    def _load_categories(self) -> List[str]:
        return self.search.display_categories(self.search.fetcher.load_all().values())

    def run_query(self) -> None:
        term = self.query_one("#global-search", Input).value
        difficulty = select_value(self.query_one("#global-difficulty", Select))
        category = select_value(self.query_one("#global-category", Select))
        ticket = self.sequencer.next()
        if not term.strip() and not difficulty and not category:
            self.query_one(DataTable).clear()
            self.query_one("#search-summary", Static).update("")
            return

        def _query() -> List[TaggedQuestion]:
            return self.search.query(term, difficulty, category)

        self.query_one("#search-summary", Static).update("Searching...")
        self.run_worker(
            _query, name=RequestSequencer.worker_name("global_search", ticket), thread=True
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "global-search":
            self.run_query()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id in ("global-difficulty", "global-category"):
            self.run_query()

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        name = getattr(event.worker, "name", None)
        if name == "category_loader":
            if event.state is WorkerState.SUCCESS:
                categories = event.worker.result or []
                self.query_one("#global-category", Select).set_options([(c, c) for c in categories])
            elif event.state is WorkerState.ERROR:
                logger.error("Category loader failed: %s", event.worker.error)
                self.notify("Could not load categories.", severity="error")
            return

        ticket = RequestSequencer.ticket_of(name, "global_search")
        if ticket is None or event.state not in (WorkerState.SUCCESS, WorkerState.ERROR):
            return
        if not self.sequencer.is_current(ticket):
            logger.debug("Dropping stale search %s (ticket %d)", event.state.name, ticket)
            return
        if event.state is WorkerState.SUCCESS:
            self._show_results(event.worker.result)
        else:
            self._show_search_error(event.worker.error)

    def _show_search_error(self, error: Optional[BaseException]) -> None:
        logger.error("Global search worker failed: %s", error)
        if isinstance(error, LoadError):
            message = f"Error loading search results: {error}"
        else:
            message = "Error loading search results. Please try again."
        self.query_one(DataTable).clear()
        self.results = []
        self.query_one("#search-summary", Static).update(message)

    def _show_results(self, results: List[TaggedQuestion]) -> None:
        self.results = results
        table = self.query_one(DataTable)
        table.clear()
        for index, q in enumerate(results):
            table.add_row(q.source_name, q.difficulty, q.category, q.title, key=str(index))
        summary = (
            f"{len(results)} matching questions"
            if results
            else "No questions found matching your criteria."
        )
        self.query_one("#search-summary", Static).update(summary)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        question = self.results[int(event.row_key.value)]
        self.dismiss((question.source, question.id))

    def action_close(self) -> None:
        self.dismiss(None)
