"""
Handlers for the three link change types.

- preview: one rich item for a shared link
- collection: a short list of items for the composer picker
- postback: apply a task button click and re-render the task

Every handler resolves the caller first and returns a HandlerResult.
"""

from dataclasses import dataclass, field

from db.models import User
from db.queries import ListQuery
from db.repositories import Store
from links.actions import PostbackActionProcessor
from links.authorization import Authorization, AuthorizationResolver
from links.encoders import (
    PERSONALIZED_TASKS_PATH,
    LinkContext,
    encode_document,
    encode_folder,
    encode_task,
    tasks_folder,
)
from links.errors import InvalidUrl
from links.extractor import extract_entity_reference
from schemas.common import EntityKind
from schemas.items import DocumentItem, FolderItem, TaskItem
from schemas.webhook import ChangeValue

EncodedItemModel = DocumentItem | FolderItem | TaskItem


@dataclass
class HandlerResult:
    """Items to send back and the resolved caller (None when unlinked)."""

    data: list[EncodedItemModel] = field(default_factory=list)
    user: User | None = None


class LinkHandlers:
    """Preview, collection and postback handlers sharing one store and link context."""

    def __init__(self, store: Store, context: LinkContext, collection_limit: int = 5):
        self.store = store
        self.context = context
        self.collection_limit = collection_limit
        self.resolver = AuthorizationResolver(store)
        self.actions = PostbackActionProcessor(store.tasks)

    # --- Preview ---

    async def preview(self, value: ChangeValue) -> HandlerResult:
        """Render a single preview for ``value.link``."""
        auth = await self.resolver.resolve(value)
        reference = extract_entity_reference(value.link)

        if reference.kind is EntityKind.DOCUMENT:
            document = await self.store.documents.get_visible(reference.id, auth.privacy)
            if document is None:
                return HandlerResult(user=auth.user)
            return HandlerResult(
                data=[encode_document(document, self.context, link=value.link)],
                user=auth.user,
            )

        if reference.kind is EntityKind.FOLDER:
            folder = await self.store.folders.get_visible(reference.id, auth.privacy)
            if folder is None:
                return HandlerResult(user=auth.user)
            return HandlerResult(
                data=[encode_folder(folder, self.context, link=value.link)],
                user=auth.user,
            )

        if reference.kind is EntityKind.TASK:
            return await self._task_result(auth, reference.id, value.link)

        raise InvalidUrl()

    # --- Collection ---

    async def collection(self, value: ChangeValue) -> HandlerResult:
        """List items for the composer picker; requires a linked caller."""
        auth = await self.resolver.resolve(value)
        if not auth.linked:
            return HandlerResult()

        if value.link and value.link.endswith(PERSONALIZED_TASKS_PATH):
            tasks = await self.store.tasks.list_all(load_owner=True)
            data = [
                await encode_task(task, auth.user, self.context, self.store.tasks)
                for task in tasks
            ]
            return HandlerResult(data=data, user=auth.user)

        if value.link:
            folder_id = extract_entity_reference(value.link).id
            documents = await self.store.documents.list_visible(
                ListQuery(privacy=auth.privacy, folder_id=folder_id, limit=self.collection_limit)
            )
            return HandlerResult(
                data=[encode_document(document, self.context) for document in documents],
                user=auth.user,
            )

        query = ListQuery(privacy=auth.privacy, limit=self.collection_limit)
        folders = await self.store.folders.list_visible(query)
        documents = await self.store.documents.list_visible(query)
        data: list[EncodedItemModel] = [tasks_folder(self.context)]
        data.extend(encode_folder(folder, self.context) for folder in folders)
        data.extend(encode_document(document, self.context) for document in documents)
        return HandlerResult(data=data, user=auth.user)

    # --- Postback ---

    async def postback(self, value: ChangeValue) -> HandlerResult:
        """Apply a button click to a task and return its updated preview."""
        auth = await self.resolver.resolve(value)
        if not auth.linked:
            return HandlerResult()

        reference = extract_entity_reference(value.link)
        if reference.kind is not EntityKind.TASK:
            raise InvalidUrl()

        task = await self.store.tasks.get_by_id(reference.id, load_owner=True)
        if task is None:
            return HandlerResult(user=auth.user)

        await self.actions.apply(task, auth.user, value.payload)
        item = await encode_task(task, auth.user, self.context, self.store.tasks, link=value.link)
        return HandlerResult(data=[item], user=auth.user)

    async def _task_result(self, auth: Authorization, task_id: int, link: str | None) -> HandlerResult:
        # Task previews are personalized, so unlinked callers get nothing
        if not auth.linked:
            return HandlerResult()
        task = await self.store.tasks.get_by_id(task_id, load_owner=True)
        if task is None:
            return HandlerResult(user=auth.user)
        item = await encode_task(task, auth.user, self.context, self.store.tasks, link=link)
        return HandlerResult(data=[item], user=auth.user)
