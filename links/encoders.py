"""
Encoders turning stored records into the platform's link item shapes.

Every encoder receives a LinkContext carrying the public base URL, so
nothing here reads configuration on its own. Document and folder
encoders are pure; the task encoder is async because the subscribe
button depends on the task's current subscriber set.
"""

from dataclasses import dataclass

from config import Settings
from db.models import Document, Folder, Task, User
from db.repositories import TaskRepository
from schemas.common import EntityKind, ItemPrivacy, PostbackPayload, Privacy, TaskPriority
from schemas.items import AdditionalData, DocumentItem, FolderItem, PostbackAction, TaskItem

DESCRIPTION_LENGTH = 200
PERSONALIZED_TASKS_PATH = "personalized-tasks"

PRIORITY_COLORS = {
    TaskPriority.HIGH.value: "red",
    TaskPriority.MEDIUM.value: "orange",
    TaskPriority.LOW.value: "yellow",
}
DEFAULT_PRIORITY_COLOR = "yellow"


@dataclass(frozen=True)
class LinkContext:
    """URL settings needed to build links in encoded items."""

    base_url: str
    icon_path: str = "taaskly.png"

    @classmethod
    def from_settings(cls, settings: Settings) -> "LinkContext":
        return cls(base_url=settings.base_url, icon_path=settings.icon_path)

    def url(self, path: str) -> str:
        """Join ``path`` onto the base URL."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def entity_url(self, kind: EntityKind, record_id: int) -> str:
        return self.url(f"{kind.value}/{record_id}")

    @property
    def icon(self) -> str:
        return self.url(self.icon_path)

    @property
    def personalized_tasks_url(self) -> str:
        return self.url(PERSONALIZED_TASKS_PATH)


def item_privacy(privacy: str) -> ItemPrivacy:
    """Public records are shared with the whole organization, others are only accessible."""
    if privacy == Privacy.PUBLIC:
        return ItemPrivacy.ORGANIZATION
    return ItemPrivacy.ACCESSIBLE


def priority_color(priority: str) -> str:
    return PRIORITY_COLORS.get(priority, DEFAULT_PRIORITY_COLOR)


def encode_document(document: Document, context: LinkContext, link: str | None = None) -> DocumentItem:
    """
    Encode a document preview.

    Args:
        document: Stored document
        context: URL settings
        link: Link as shared by the user; defaults to the canonical link

    Returns:
        DocumentItem
    """
    canonical = context.entity_url(EntityKind.DOCUMENT, document.id)
    return DocumentItem(
        link=link or canonical,
        title=document.name,
        description=(document.content or "")[:DESCRIPTION_LENGTH],
        privacy=item_privacy(document.privacy),
        icon=context.icon,
        download_url=context.url(f"download/{document.id}/"),
        canonical_link=canonical,
    )


def encode_folder(folder: Folder, context: LinkContext, link: str | None = None) -> FolderItem:
    """Encode a folder preview."""
    canonical = context.entity_url(EntityKind.FOLDER, folder.id)
    return FolderItem(
        link=link or canonical,
        title=folder.name,
        privacy=item_privacy(folder.privacy),
        canonical_link=canonical,
    )


def tasks_folder(context: LinkContext) -> FolderItem:
    """The synthetic folder offering the caller's personalized task list."""
    return FolderItem(
        link=context.personalized_tasks_url,
        title="Tasks",
        privacy=ItemPrivacy.PERSONALIZED,
    )


def _owner_entry(owner: User) -> AdditionalData:
    if owner.workplace_id:
        return AdditionalData(title="Owner", format="user", value=owner.workplace_id)
    return AdditionalData(title="Owner", format="text", value=owner.username)


def task_additional_data(task: Task) -> list[AdditionalData]:
    """Owner, creation time and (when set) priority rows of a task preview."""
    additional_data = [
        _owner_entry(task.owner),
        AdditionalData(title="Created", format="datetime", value=task.created_at.isoformat()),
    ]
    if task.priority is not None:
        additional_data.append(
            AdditionalData(
                title="Priority",
                format="text",
                value=task.priority,
                color=priority_color(task.priority),
            )
        )
    return additional_data


def task_actions(task: Task, subscribed: bool) -> list[PostbackAction]:
    """Completion toggle followed by the subscribe or unsubscribe button."""
    if task.completed:
        toggle = PostbackAction(value="Reopen", payload=PostbackPayload.TASK_REOPEN.value)
    else:
        toggle = PostbackAction(value="Close", payload=PostbackPayload.TASK_CLOSE.value)

    if subscribed:
        subscription = PostbackAction(value="Unsubscribe", payload=PostbackPayload.UNSUBSCRIBE.value)
    else:
        subscription = PostbackAction(value="Subscribe", payload=PostbackPayload.SUBSCRIBE.value)

    return [toggle, subscription]


async def encode_task(
    task: Task,
    user: User,
    context: LinkContext,
    tasks: TaskRepository,
    link: str | None = None,
) -> TaskItem:
    """
    Encode a task preview personalized for ``user``.

    The owner relationship must already be loaded. Subscribers are read
    from the store, so this reflects any subscription change flushed
    earlier in the same request.

    Args:
        task: Stored task with owner loaded
        user: Calling (linked) user
        context: URL settings
        tasks: Task repository used to read subscribers
        link: Link as shared by the user; defaults to the canonical link

    Returns:
        TaskItem
    """
    subscribers = await tasks.list_subscribers(task)
    subscribed = user.workplace_id in {subscriber.workplace_id for subscriber in subscribers}

    canonical = context.entity_url(EntityKind.TASK, task.id)
    return TaskItem(
        link=link or canonical,
        title=task.title,
        icon=context.icon,
        canonical_link=canonical,
        actions=task_actions(task, subscribed),
        additional_data=task_additional_data(task),
    )
