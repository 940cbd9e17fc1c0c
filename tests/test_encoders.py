"""Tests for document, folder and task encoders."""

from datetime import UTC, datetime

import pytest

from db.models import Document, Folder, Task, User
from links import LinkContext, encode_document, encode_folder, encode_task, tasks_folder
from links.encoders import priority_color, task_actions, task_additional_data

from conftest import BASE_URL


def make_task(**overrides) -> Task:
    owner = overrides.pop("owner", User(id=1, username="alice", workplace_id="wp-alice"))
    defaults = {
        "id": 7,
        "title": "Ship preview",
        "priority": None,
        "completed": False,
        "owner": owner,
        "created_at": datetime(2026, 1, 1, 9, 0, tzinfo=UTC),
    }
    defaults.update(overrides)
    return Task(**defaults)


class TestLinkContext:
    """Test URL building."""

    def test_url_joins_single_slash(self):
        assert LinkContext(base_url="https://x.test/").url("document/1") == "https://x.test/document/1"
        assert LinkContext(base_url="https://x.test").url("/document/1") == "https://x.test/document/1"

    def test_icon_and_tasks_url(self):
        context = LinkContext(base_url="https://x.test/", icon_path="logo.png")
        assert context.icon == "https://x.test/logo.png"
        assert context.personalized_tasks_url == "https://x.test/personalized-tasks"


class TestEncodeDocument:
    """Test encode_document."""

    def test_public_document(self, link_context):
        doc = Document(id=42, name="Roadmap", content="x" * 500, privacy="public", owner_id=1)

        item = encode_document(doc, link_context, link="https://taaskly.test/a/document/42")

        assert item.model_dump(exclude_none=True) == {
            "link": "https://taaskly.test/a/document/42",
            "title": "Roadmap",
            "description": "x" * 200,
            "privacy": "organization",
            "icon": f"{BASE_URL}taaskly.png",
            "download_url": f"{BASE_URL}download/42/",
            "canonical_link": f"{BASE_URL}document/42",
            "type": "doc",
        }

    def test_private_document_defaults_link_to_canonical(self, link_context):
        doc = Document(id=5, name="Notes", content="short", privacy="private", owner_id=1)

        item = encode_document(doc, link_context)

        assert item.privacy == "accessible"
        assert item.link == f"{BASE_URL}document/5"
        assert item.description == "short"


class TestEncodeFolder:
    """Test encode_folder and the synthetic tasks folder."""

    def test_folder(self, link_context):
        folder = Folder(id=3, name="Specs", privacy="public", owner_id=1)

        assert encode_folder(folder, link_context).model_dump(exclude_none=True) == {
            "link": f"{BASE_URL}folder/3",
            "title": "Specs",
            "privacy": "organization",
            "canonical_link": f"{BASE_URL}folder/3",
            "type": "folder",
        }

    def test_tasks_folder_has_no_canonical_link(self, link_context):
        assert tasks_folder(link_context).model_dump(exclude_none=True) == {
            "link": f"{BASE_URL}personalized-tasks",
            "title": "Tasks",
            "privacy": "personalized",
            "type": "folder",
        }


class TestTaskAdditionalData:
    """Test owner, created and priority rows."""

    @pytest.mark.parametrize(
        "priority, color",
        [("high", "red"), ("medium", "orange"), ("low", "yellow"), ("urgent", "yellow")],
    )
    def test_priority_colors(self, priority, color):
        assert priority_color(priority) == color
        rows = task_additional_data(make_task(priority=priority))
        assert rows[-1].model_dump(exclude_none=True) == {
            "title": "Priority",
            "format": "text",
            "value": priority,
            "color": color,
        }

    def test_no_priority_row_when_priority_is_none(self):
        rows = task_additional_data(make_task(priority=None))
        assert [row.title for row in rows] == ["Owner", "Created"]

    def test_linked_owner_is_rendered_as_user(self):
        owner_row = task_additional_data(make_task())[0]
        assert owner_row.format == "user"
        assert owner_row.value == "wp-alice"

    def test_unlinked_owner_is_rendered_as_text(self):
        owner = User(id=3, username="carol", workplace_id=None)
        owner_row = task_additional_data(make_task(owner=owner))[0]
        assert owner_row.format == "text"
        assert owner_row.value == "carol"

    def test_created_is_iso_datetime(self):
        created_row = task_additional_data(make_task())[1]
        assert created_row.format == "datetime"
        assert created_row.value == "2026-01-01T09:00:00+00:00"


class TestTaskActions:
    """Test button selection."""

    def test_open_unsubscribed(self):
        actions = task_actions(make_task(completed=False), subscribed=False)
        assert [(a.value, a.payload) for a in actions] == [
            ("Close", "Task.Close"),
            ("Subscribe", "Subscribe"),
        ]

    def test_completed_subscribed(self):
        actions = task_actions(make_task(completed=True), subscribed=True)
        assert [(a.value, a.payload) for a in actions] == [
            ("Reopen", "Task.Reopen"),
            ("Unsubscribe", "Unsubscribe"),
        ]

    def test_button_shape(self):
        action = task_actions(make_task(), subscribed=False)[0]
        assert action.model_dump() == {
            "value": "Close",
            "color": "red",
            "payload": "Task.Close",
            "disabled": False,
            "type": "postback_button",
        }


class TestEncodeTask:
    """Test encode_task against stored subscribers."""

    @pytest.mark.asyncio
    async def test_task_for_subscriber(self, store, seed, link_context):
        await store.tasks.add_subscriber(seed.task, seed.bob)

        item = await encode_task(seed.task, seed.bob, link_context, store.tasks)

        assert item.link == f"{BASE_URL}task/{seed.task.id}"
        assert item.canonical_link == f"{BASE_URL}task/{seed.task.id}"
        assert item.privacy == "personalized"
        assert item.type == "task"
        assert item.icon == f"{BASE_URL}taaskly.png"
        assert [a.payload for a in item.actions] == ["Task.Close", "Unsubscribe"]
        assert [row.title for row in item.additional_data] == ["Owner", "Created", "Priority"]

    @pytest.mark.asyncio
    async def test_task_for_non_subscriber(self, store, seed, link_context):
        await store.tasks.add_subscriber(seed.task, seed.bob)

        item = await encode_task(seed.task, seed.alice, link_context, store.tasks, link="https://x/task/1")

        assert item.link == "https://x/task/1"
        assert [a.payload for a in item.actions] == ["Task.Close", "Subscribe"]
