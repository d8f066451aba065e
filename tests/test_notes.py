# tests/test_notes.py
"""Tests for note creation with slash commands."""

from datetime import date

import pytest
from pydantic import ValidationError

from slashnote.config import settings
from slashnote.core.commands.updates import UpdateKey, UpdateSet
from slashnote.core.notes import (
    COMMANDS_ONLY_MESSAGE,
    InMemoryNoteStore,
    InMemoryWorkItemUpdater,
    NoteCreateService,
    NoteParams,
)
from slashnote.core.workitems.models import Issue, ItemState, Label, Project
from slashnote.utils.logging import get_request_id, set_request_id


@pytest.fixture(autouse=True)
def clear_request_id():
    set_request_id("")
    yield
    set_request_id("")


@pytest.fixture
def store() -> InMemoryNoteStore:
    return InMemoryNoteStore()


@pytest.fixture
def updater(repo, todos) -> InMemoryWorkItemUpdater:
    return InMemoryWorkItemUpdater(repo, todos=todos)


@pytest.fixture
def service(project, alice, interpreter, store, updater) -> NoteCreateService:
    return NoteCreateService(project, alice, interpreter, store, updater)


class TestNoteParams:
    def test_defaults_to_empty_note(self, issue) -> None:
        params = NoteParams(noteable=issue)
        assert params.note == ""

    def test_keeps_noteable_identity(self, issue) -> None:
        params = NoteParams(note="hi", noteable=issue)
        assert params.noteable is issue

    def test_rejects_non_work_item(self) -> None:
        with pytest.raises(ValidationError):
            NoteParams(note="hi", noteable="issue 10")


class TestNoteCreateService:
    """Test suite for NoteCreateService.execute."""

    def test_plain_note_saved(self, service, store, issue) -> None:
        note = service.execute(NoteParams(note="Looks good to me.", noteable=issue))

        assert note.persisted
        assert note.note == "Looks good to me."
        assert note.errors == {}
        assert store.notes == [note]
        assert note.created_at.tzinfo == settings.tzinfo

    def test_prose_and_commands(self, service, store, issue, project) -> None:
        note = service.execute(
            NoteParams(note="Fixing the bug.\n/close\n/label ~bug\n", noteable=issue)
        )

        assert note.persisted
        assert note.note == "Fixing the bug."
        assert issue.state == ItemState.CLOSED
        assert [label.title for label in issue.labels] == ["bug"]
        assert note.errors == {}

    def test_commands_only(self, service, store, issue, alice) -> None:
        note = service.execute(NoteParams(note="/close\n/subscribe", noteable=issue))

        assert not note.persisted
        assert store.notes == []
        assert note.errors == {"commands_only": [COMMANDS_ONLY_MESSAGE]}
        assert issue.is_closed
        assert issue.is_subscribed(alice)

    def test_denied_commands_only_note(
        self, project, bob, interpreter, store, updater, issue
    ) -> None:
        """Test that a note whose commands all drop is neither saved nor flagged."""
        service = NoteCreateService(project, bob, interpreter, store, updater)
        note = service.execute(NoteParams(note="/close", noteable=issue))

        assert not note.persisted
        assert note.errors == {}
        assert issue.is_open

    def test_blank_note(self, service, store, issue) -> None:
        note = service.execute(NoteParams(note="   \n", noteable=issue))

        assert not note.persisted
        assert note.errors == {}

    def test_update_failure_not_flagged(self, service, updater, issue, mocker) -> None:
        mocker.patch.object(updater, "apply", return_value=False)
        note = service.execute(NoteParams(note="/close", noteable=issue))

        assert note.errors == {}

    def test_updater_receives_update_set(
        self, service, updater, issue, alice, project, mocker
    ) -> None:
        spy = mocker.spy(updater, "apply")
        service.execute(NoteParams(note="Soon.\n/due in 2 days", noteable=issue))

        spy.assert_called_once()
        noteable, updates, user, called_project = spy.call_args.args
        assert noteable is issue
        assert updates.to_dict() == {"due_date": date(2026, 10, 20)}
        assert (user, called_project) == (alice, project)

    def test_updater_not_called_without_updates(self, service, updater, issue, mocker) -> None:
        spy = mocker.spy(updater, "apply")
        service.execute(NoteParams(note="Nothing to do.", noteable=issue))
        spy.assert_not_called()

    def _capture_request_ids(self, service, mocker) -> list[str]:
        seen: list[str] = []
        interpret = service.interpreter.interpret

        def capture(text, context):
            seen.append(get_request_id())
            return interpret(text, context)

        mocker.patch.object(service.interpreter, "interpret", side_effect=capture)
        return seen

    def test_binds_request_id_while_running(self, service, issue, mocker) -> None:
        seen = self._capture_request_ids(service, mocker)
        service.execute(NoteParams(note="hello", noteable=issue))

        assert len(seen[0]) == 32
        assert get_request_id() == ""

    def test_keeps_existing_request_id(self, service, issue, mocker) -> None:
        seen = self._capture_request_ids(service, mocker)
        set_request_id("req-123")
        service.execute(NoteParams(note="hello", noteable=issue))

        assert seen == ["req-123"]
        assert get_request_id() == "req-123"

    def test_todo_then_done(self, service, todos, issue, alice) -> None:
        service.execute(NoteParams(note="/todo", noteable=issue))
        assert todos.todo_exists(issue, alice)

        service.execute(NoteParams(note="/done", noteable=issue))
        assert not todos.todo_exists(issue, alice)

    def test_default_collaborators_share_todos(self, project, alice, interpreter, issue) -> None:
        """Test that /done sees the todo added by /todo without explicit wiring."""
        service = NoteCreateService(project, alice, interpreter)

        service.execute(NoteParams(note="/todo", noteable=issue))
        assert interpreter.todos.todo_exists(issue, alice)

        note = service.execute(NoteParams(note="/done", noteable=issue))
        assert not interpreter.todos.todo_exists(issue, alice)
        assert note.errors == {"commands_only": [COMMANDS_ONLY_MESSAGE]}

    def test_default_store_keeps_visible_notes(self, project, alice, interpreter, issue) -> None:
        service = NoteCreateService(project, alice, interpreter)
        note = service.execute(NoteParams(note="Thanks!\n/label ~bug", noteable=issue))

        assert service.note_store.notes == [note]
        assert [label.title for label in issue.labels] == ["bug"]


class TestInMemoryWorkItemUpdater:
    """Test suite for applying update-sets."""

    def _updates(self, **values) -> UpdateSet:
        updates = UpdateSet()
        for key, value in values.items():
            updates.set(key, value)
        return updates

    def test_label_keys_order(self, updater, issue, alice, project, labels) -> None:
        """Test replace, then remove, then add."""
        issue.labels = [labels[0]]
        updates = self._updates(add_label_ids=[3, 2], remove_label_ids=[2], label_ids=[1, 2])

        updater.apply(issue, updates, alice, project)
        assert [label.id for label in issue.labels] == [1, 3, 2]

    def test_unknown_label_ids_ignored(self, updater, issue, alice, project) -> None:
        updater.apply(issue, self._updates(add_label_ids=[1, 42]), alice, project)
        assert [label.id for label in issue.labels] == [1]

    def test_labels_looked_up_in_references(self, updater, repo, alice) -> None:
        """Test that a label stored after the project was built can be applied."""
        fresh = Project(id=3, path="group/fresh")
        label = repo.add_label(Label(id=0, title="ops", project_id=fresh.id))
        item = Issue(id=40, project_id=fresh.id, author_id=alice.id)

        updater.apply(item, self._updates(add_label_ids=[label.id]), alice, fresh)
        assert item.labels == [label]

    def test_clears_fields(self, updater, issue, alice, project) -> None:
        issue.assignee_id = 2
        issue.milestone_id = 1
        issue.due_date = date(2026, 11, 1)
        updates = self._updates(assignee_id=None, milestone_id=None, due_date=None)

        assert updater.apply(issue, updates, alice, project)
        assert (issue.assignee_id, issue.milestone_id, issue.due_date) == (None, None, None)

    def test_reopen_and_title(self, updater, issue, alice, project) -> None:
        issue.state = ItemState.CLOSED
        updater.apply(issue, self._updates(state_event="reopen", title="New"), alice, project)

        assert issue.is_open
        assert issue.title == "New"

    def test_due_date_ignored_on_merge_request(
        self, updater, merge_request, alice, project
    ) -> None:
        updates = self._updates(**{UpdateKey.DUE_DATE.value: date(2026, 1, 1)})
        updater.apply(merge_request, updates, alice, project)
        assert not hasattr(merge_request, "due_date")

    def test_unsubscribe(self, updater, issue, alice, project) -> None:
        issue.subscriber_ids.add(alice.id)
        updater.apply(issue, self._updates(subscription_event="unsubscribe"), alice, project)
        assert not issue.is_subscribed(alice)
