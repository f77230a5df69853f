from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.worker import Worker, WorkerState
from textual.widgets import (
    Header,
    Input,
    ListView,
    LoadingIndicator,
    Rule,
    Select,
    Static,
)

from .config import (
    EXPORT_FILE,
    UI_DEFAULTS,
    DatasetCatalog,
    logger,
    save_config,
)
from .datamodels import Question
from .errors import LoadError
from .fetcher import Fetcher, RequestSequencer
from .filtering import SORT_KEYS, QuestionFilter
from .progress import ProgressStore
from .screens import (
    DIFFICULTY_OPTIONS,
    ErrorScreen,
    GlobalSearchScreen,
    QuestionDetailScreen,
    select_value,
)
from .search import GlobalSearch
from .themes import DARK_THEME, load_themes, toggled_theme
from .widgets import DatasetListItem, ErrorMessage, QuestionItem, StatusBar


class PracticeApp(App):
    TITLE = "Practice"
    SUB_TITLE = "Coding practice questions"

    CSS_PATH = "app.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("s", "cycle_status", "Status"),
        Binding("b", "bookmark", "Bookmark"),
        Binding("f", "toggle_bookmarked", "Bookmarked only"),
        Binding("o", "sort", "Sort"),
        Binding("x", "reset_filters", "Reset filters"),
        Binding("g", "global_search", "Search all"),
        Binding("t", "toggle_theme", "Light/Dark"),
        Binding("e", "export", "Export progress"),
        Binding("left", "nav_left", "Navigate Left"),
        Binding("right", "nav_right", "Navigate Right"),
        Binding("ctrl+l", "toggle_left_pane", "Toggle Datasets"),
        Binding("/", "focus_filter", "Search"),
    ]

    def __init__(
        self,
        progress: ProgressStore,
        fetcher: Fetcher,
        catalog: DatasetCatalog,
        theme: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.progress = progress
        self.fetcher = fetcher
        self.catalog = catalog
        self.config = config or {}
        self._theme_name = theme or DARK_THEME
        self.theme_defs = load_themes(self.config)
        self.question_filter = QuestionFilter(progress)
        self.sequencer = RequestSequencer()
        self.current_dataset: Optional[str] = None
        self.sort_index = 0
        self._pending_question: Optional[str] = None

    def get_keybinding_style(self) -> str:
        return "$accent"

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main"):
            with Vertical(id="left"):
                yield Static("Datasets", classes="pane-title")
                yield ListView(id="datasets-list")
            yield Rule(orientation="vertical")
            with Vertical(id="right"):
                yield Static("Questions", id="questions-title", classes="pane-title")
                with Horizontal(id="filters"):
                    yield Input(placeholder="Search questions...", id="question-filter")
                    yield Select(DIFFICULTY_OPTIONS, prompt="Any difficulty", id="difficulty-filter")
                    yield Select([], prompt="Any category", id="category-filter")
                yield Static("", id="question-stats")
                yield ListView(id="questions-list")
        yield StatusBar()

    def on_mount(self) -> None:
        for theme in self.theme_defs.values():
            self.register_theme(theme)
        self.theme = self._theme_name if self._theme_name in self.theme_defs else DARK_THEME

        keybindings_text = self.config.get("ui", {}).get(
            "statusbar_keybindings", UI_DEFAULTS["statusbar_keybindings"]
        )
        self.query_one(StatusBar).set_keybindings(
            keybindings_text.format(color=self.get_keybinding_style())
        )

        if not len(self.catalog):
            self.push_screen(
                ErrorScreen(
                    "No datasets configured",
                    "Please configure at least one dataset in `~/.config/practice/config.json`.",
                )
            )
            return

        view = self.query_one("#datasets-list", ListView)
        for dataset in self.catalog:
            view.append(DatasetListItem(dataset, self._stats_for(dataset.id)))
        view.focus()

        self.query_one("#questions-list", ListView).cursor_type = "row"
        self.load_dataset(self.catalog.ids[0])

    # --- Loading ---
    def load_dataset(self, dataset_id: str) -> None:
        self.current_dataset = dataset_id
        ticket = self.sequencer.next()
        label = self.catalog.label(dataset_id)
        self.query_one(StatusBar).loading_status = f"Loading {label}..."
        self.query_one("#questions-title", Static).update(label)

        questions_list = self.query_one("#questions-list", ListView)
        questions_list.clear()
        questions_list.mount(LoadingIndicator())

        def _load() -> Tuple[str, List[Question]]:
            return dataset_id, self.fetcher.load(dataset_id)

        self.run_worker(
            _load, name=RequestSequencer.worker_name("questions_loader", ticket), thread=True
        )

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        ticket = RequestSequencer.ticket_of(getattr(event.worker, "name", None), "questions_loader")
        if ticket is None or event.state not in (WorkerState.SUCCESS, WorkerState.ERROR):
            return
        if not self.sequencer.is_current(ticket):
            logger.debug("Dropping stale questions load %s (ticket %d)", event.state.name, ticket)
            return
        if event.state is WorkerState.SUCCESS:
            dataset_id, questions = event.worker.result
            self._handle_questions_loaded(dataset_id, questions)
        else:
            self._handle_questions_error(event.worker.error)

    def _handle_questions_loaded(self, dataset_id: str, questions: List[Question]) -> None:
        self.query_one(StatusBar).loading_status = ""
        self.question_filter.set_questions(questions)

        categories = sorted({q.category for q in questions if q.category})
        self.query_one("#category-filter", Select).set_options([(c, c) for c in categories])
        self._apply_filters_from_widgets()

        if self._pending_question:
            pending, self._pending_question = self._pending_question, None
            for question in questions:
                if question.id == pending:
                    self.push_screen(QuestionDetailScreen(question, dataset_id))
                    break

    def _handle_questions_error(self, error: Optional[BaseException]) -> None:
        self.query_one(StatusBar).loading_status = "Error loading questions."
        self.question_filter.set_questions([])
        questions_list = self.query_one("#questions-list", ListView)
        questions_list.clear()
        if isinstance(error, LoadError):
            logger.error("Questions worker failed: %s", error)
            questions_list.mount(ErrorMessage(f"Error loading questions: {error}"))
        else:
            logger.error("Questions worker failed: %r", error)
            questions_list.mount(ErrorMessage("Error loading questions. Please try again."))

    # --- Filtering and rendering ---
    def _apply_filters_from_widgets(self) -> None:
        qf = self.question_filter
        qf.filters.search = self.query_one("#question-filter", Input).value
        qf.filters.difficulty = select_value(self.query_one("#difficulty-filter", Select))
        qf.filters.category = select_value(self.query_one("#category-filter", Select))
        qf.apply_filters(self.current_dataset)
        self._sort_and_render()

    def _update_filter(self, axis: str, value: Any) -> None:
        self.question_filter.update_filter(axis, value, dataset=self.current_dataset)
        self._sort_and_render()

    def _sort_and_render(self) -> None:
        self.question_filter.sort(SORT_KEYS[self.sort_index])
        self._render_questions()

    def _render_questions(self) -> None:
        questions_list = self.query_one("#questions-list", ListView)
        questions_list.clear()
        questions = self.question_filter.filtered_questions
        if not questions:
            questions_list.mount(Static("No questions found matching your criteria.", classes="no-results"))
        for q in questions:
            entry = self.progress.get_status(self.current_dataset, q.id)
            questions_list.append(QuestionItem(q, entry))
        self.update_stats()

    def _stats_for(self, dataset_id: str):
        return self.progress.get_category_stats(dataset_id, self.catalog.total(dataset_id))

    def update_stats(self) -> None:
        if not self.current_dataset:
            return
        stats = self._stats_for(self.current_dataset)
        shown = len(self.question_filter.filtered_questions)
        self.query_one("#question-stats", Static).update(
            f"Total: {stats.total}  Solved: {stats.solved}  "
            f"Attempted: {stats.attempted}  Showing: {shown}"
        )
        for item in self.query(DatasetListItem):
            if item.dataset.id == self.current_dataset:
                item.update_stats(stats)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "question-filter":
            self._update_filter("search", event.value)

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "difficulty-filter":
            self._update_filter("difficulty", select_value(event.select))
        elif event.select.id == "category-filter":
            self._update_filter("category", select_value(event.select))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if event.list_view.id == "datasets-list":
            if isinstance(event.item, DatasetListItem):
                self.load_dataset(event.item.dataset.id)
        elif event.list_view.id == "questions-list":
            if isinstance(event.item, QuestionItem):
                self.push_screen(QuestionDetailScreen(event.item.question, self.current_dataset))

    # --- Progress updates, shared with the detail screen ---
    def cycle_status(self, dataset_id: str, question_id: str) -> Optional[str]:
        try:
            status = self.progress.cycle_status(dataset_id, question_id)
        except OSError as e:
            logger.error("Failed to save progress: %s", e)
            self.notify(f"Failed to save progress: {e}", severity="error")
            return None
        self._refresh_question(dataset_id, question_id)
        return status

    def toggle_bookmark(self, dataset_id: str, question_id: str) -> Optional[bool]:
        try:
            bookmarked = self.progress.toggle_bookmark(dataset_id, question_id)
        except OSError as e:
            logger.error("Failed to save progress: %s", e)
            self.notify(f"Failed to save progress: {e}", severity="error")
            return None
        self._refresh_question(dataset_id, question_id)
        return bookmarked

    def _refresh_question(self, dataset_id: str, question_id: str) -> None:
        if dataset_id != self.current_dataset:
            return
        entry = self.progress.get_status(dataset_id, question_id)
        for item in self.query(QuestionItem):
            if item.question.id == question_id:
                item.update_entry(entry)
        self.update_stats()

    def _highlighted_question(self) -> Optional[QuestionItem]:
        questions_list = self.query_one("#questions-list", ListView)
        if not questions_list.has_focus:
            return None
        item = questions_list.highlighted_child
        return item if isinstance(item, QuestionItem) else None

    def action_cycle_status(self) -> None:
        item = self._highlighted_question()
        if item:
            self.cycle_status(self.current_dataset, item.question.id)

    def action_bookmark(self) -> None:
        item = self._highlighted_question()
        if item:
            self.toggle_bookmark(self.current_dataset, item.question.id)

    def action_toggle_bookmarked(self) -> None:
        bookmarked = not self.question_filter.filters.bookmarked
        self._update_filter("bookmarked", bookmarked)
        self.notify("Showing bookmarked questions only." if bookmarked else "Showing all questions.")

    def action_sort(self) -> None:
        self.sort_index = (self.sort_index + 1) % len(SORT_KEYS)
        key = SORT_KEYS[self.sort_index]
        if key == "default":
            self.question_filter.apply_filters(self.current_dataset)
        self._sort_and_render()
        self.notify(f"Sorted by {key}.")

    def action_reset_filters(self) -> None:
        self.query_one("#question-filter", Input).value = ""
        self.query_one("#difficulty-filter", Select).clear()
        self.query_one("#category-filter", Select).clear()
        self.question_filter.reset_filters(self.current_dataset)
        self._sort_and_render()

    # --- Other screens ---
    def action_global_search(self) -> None:
        search = GlobalSearch(self.fetcher, self.catalog, self.progress)
        self.push_screen(GlobalSearchScreen(search), self.on_search_closed)

    def on_search_closed(self, result: Optional[Tuple[str, str]]) -> None:
        if not result:
            return
        dataset_id, question_id = result
        self._pending_question = question_id
        self.load_dataset(dataset_id)

    def action_toggle_theme(self) -> None:
        self.theme = toggled_theme(self.theme_defs, self.theme)
        self.config["theme"] = self.theme
        save_config(self.config)

    def action_export(self) -> None:
        try:
            with open(EXPORT_FILE, "w", encoding="utf-8") as f:
                f.write(self.progress.export_json())
        except OSError as e:
            logger.error("Failed to export progress to %s: %s", EXPORT_FILE, e)
            self.notify(f"Export failed: {e}", severity="error")
            return
        self.notify(f"Progress exported to {EXPORT_FILE}")

    # --- Navigation ---
    def action_nav_left(self) -> None:
        if self.query_one("#questions-list").has_focus:
            self.query_one("#datasets-list").focus()

    def action_nav_right(self) -> None:
        if self.query_one("#datasets-list").has_focus:
            self.query_one("#questions-list").focus()

    def action_toggle_left_pane(self) -> None:
        """Toggle the left pane."""
        left_pane = self.query_one("#left")
        left_pane.display = not left_pane.display

    def action_focus_filter(self) -> None:
        """Focus the filter input."""
        self.query_one("#question-filter").focus()
