from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import ListItem, ProgressBar, Static
from rich.text import Text

from .config import DatasetInfo
from .datamodels import CategoryStats, ProgressEntry, Question

STATUS_LABELS = {
    "unsolved": "○ Unsolved",
    "attempted": "◔ Attempted",
    "solved": "● Solved",
}
BOOKMARK_MARK = "★"


def progress_text(stats: CategoryStats) -> str:
    return f"{stats.solved}/{stats.total} Completed"


# --- UI Widgets ---
class DatasetListItem(ListItem):
    def __init__(self, dataset: DatasetInfo, stats: CategoryStats):
        super().__init__()
        self.dataset = dataset
        self.stats = stats

    def compose(self) -> ComposeResult:
        with Vertical(classes="dataset-container"):
            yield Static(self.dataset.label, classes="dataset-title")
            yield Static(progress_text(self.stats), classes="dataset-progress-text")
            yield ProgressBar(
                total=max(self.stats.total, 1),
                show_eta=False,
                show_percentage=False,
                classes="dataset-progress",
            )

    def on_mount(self) -> None:
        self.update_stats(self.stats)

    def update_stats(self, stats: CategoryStats) -> None:
        self.stats = stats
        self.query_one(".dataset-progress-text", Static).update(progress_text(stats))
        bar = self.query_one(ProgressBar)
        bar.update(total=max(stats.total, 1), progress=min(stats.solved, max(stats.total, 1)))


class QuestionItem(ListItem):
    def __init__(self, question: Question, entry: ProgressEntry, source_name: str = ""):
        super().__init__()
        self.question = question
        self.entry = entry
        self.source_name = source_name

    def compose(self) -> ComposeResult:
        with Horizontal(classes="question-container"):
            yield Static(BOOKMARK_MARK if self.entry.bookmarked else " ", classes="question-bookmark")
            yield Static(
                self.question.difficulty,
                classes=f"question-difficulty difficulty-{self.question.difficulty.lower()}",
            )
            yield Static(self.question.category, classes="question-category")
            yield Static(self.question.title, classes="question-title")
            yield Static(STATUS_LABELS[self.entry.status], classes="question-status")

    def on_mount(self) -> None:
        self.set_class(self.entry.status == "solved", "solved")

    def update_entry(self, entry: ProgressEntry) -> None:
        self.entry = entry
        self.query_one(".question-bookmark", Static).update(BOOKMARK_MARK if entry.bookmarked else " ")
        self.query_one(".question-status", Static).update(STATUS_LABELS[entry.status])
        self.set_class(entry.status == "solved", "solved")


class StatusBar(Static):
    """Bottom line: the current loading state followed by key hints."""

    loading_status = reactive("")
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self._render_status()

    def set_keybindings(self, hint: str) -> None:
        self.keybinding_hint = hint

    def _render_status(self) -> None:
        self.update(" | ".join(part for part in (self.loading_status, self.keybinding_hint) if part))

    def watch_loading_status(self, _: str) -> None:
        self._render_status()

    def watch_keybinding_hint(self, _: str) -> None:
        self._render_status()


class ErrorMessage(Static):
    def __init__(self, message: str):
        super().__init__(Text(message, style="bold red"))
