from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from textual.worker import WorkerState

from practice_tui.app import PracticeApp
from practice_tui.errors import LoadError
from practice_tui.fetcher import RequestSequencer
from practice_tui.screens import GlobalSearchScreen


def state_changed(name, state, result=None, error=None):
    worker = SimpleNamespace(name=name, result=result, error=error)
    return SimpleNamespace(worker=worker, state=state)


@pytest.fixture
def app():
    # Only the sequencer and the two handlers are used by the state handler.
    return MagicMock(sequencer=RequestSequencer())


@pytest.fixture
def screen():
    return MagicMock(sequencer=RequestSequencer())


def loader(ticket):
    return RequestSequencer.worker_name("questions_loader", ticket)


def test_stale_load_error_after_newer_load_is_dropped(app, make_question):
    older = app.sequencer.next()
    newer = app.sequencer.next()
    questions = [make_question("dsa1")]

    PracticeApp.on_worker_state_changed(
        app, state_changed(loader(newer), WorkerState.SUCCESS, result=("zoho-dsa", questions))
    )
    PracticeApp.on_worker_state_changed(
        app, state_changed(loader(older), WorkerState.ERROR, error=LoadError("timed out", "lld"))
    )

    app._handle_questions_loaded.assert_called_once_with("zoho-dsa", questions)
    app._handle_questions_error.assert_not_called()


def test_stale_load_success_is_dropped(app):
    older = app.sequencer.next()
    app.sequencer.next()
    PracticeApp.on_worker_state_changed(
        app, state_changed(loader(older), WorkerState.SUCCESS, result=("lld", []))
    )
    app._handle_questions_loaded.assert_not_called()


def test_current_load_error_is_shown(app):
    ticket = app.sequencer.next()
    error = LoadError("timed out", "lld")
    PracticeApp.on_worker_state_changed(app, state_changed(loader(ticket), WorkerState.ERROR, error=error))
    app._handle_questions_error.assert_called_once_with(error)


def test_unrelated_and_running_workers_are_ignored(app):
    ticket = app.sequencer.next()
    PracticeApp.on_worker_state_changed(app, state_changed("category_loader", WorkerState.ERROR))
    PracticeApp.on_worker_state_changed(app, state_changed(loader(ticket), WorkerState.RUNNING))
    app._handle_questions_loaded.assert_not_called()
    app._handle_questions_error.assert_not_called()


def test_stale_search_error_is_dropped(screen):
    older = screen.sequencer.next()
    newer = screen.sequencer.next()

    GlobalSearchScreen.on_worker_state_changed(
        screen,
        state_changed(RequestSequencer.worker_name("global_search", newer), WorkerState.SUCCESS, result=[]),
    )
    GlobalSearchScreen.on_worker_state_changed(
        screen,
        state_changed(
            RequestSequencer.worker_name("global_search", older),
            WorkerState.ERROR,
            error=LoadError("timed out"),
        ),
    )

    screen._show_results.assert_called_once_with([])
    screen._show_search_error.assert_not_called()


def test_current_search_error_is_shown(screen):
    ticket = screen.sequencer.next()
    error = LoadError("timed out")
    GlobalSearchScreen.on_worker_state_changed(
        screen,
        state_changed(RequestSequencer.worker_name("global_search", ticket), WorkerState.ERROR, error=error),
    )
    screen._show_search_error.assert_called_once_with(error)
