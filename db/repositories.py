"""Repository pattern for database access.

Provides clean abstraction layer between the link pipeline and database
operations. Follows async patterns for FastAPI integration.
"""

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from db.models import Community, Document, Folder, Task, User, task_subscribers
from db.queries import ListQuery, PrivacyFilter

# Upper bound of the INTEGER primary key columns
MAX_ID = 2**31 - 1


def storable_id(value: int) -> bool:
    """Whether ``value`` fits an INTEGER id column; other ids cannot exist."""
    return 0 <= value <= MAX_ID


class CommunityRepository:
    """Repository for community lookups."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, community_id: int) -> Community | None:
        """Retrieve a community by ID.

        Args:
            community_id: Platform community ID

        Returns:
            Community instance if found, None otherwise
        """
        if not storable_id(community_id):
            return None
        return await self.session.get(Community, community_id)


class UserRepository:
    """Repository for user lookups and account linking."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> User | None:
        """Retrieve a user by local ID."""
        if not storable_id(user_id):
            return None
        return await self.session.get(User, user_id)

    async def get_by_workplace_id(self, workplace_id: str) -> User | None:
        """Retrieve the local user linked to a platform identity.

        Args:
            workplace_id: Platform user ID

        Returns:
            User instance if the identity is linked, None otherwise
        """
        query = select(User).where(User.workplace_id == workplace_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def link_workplace_identity(
        self, user: User, community: Community, workplace_id: str
    ) -> User:
        """Attach a platform identity and community to a local user.

        Args:
            user: Local user to update
            community: Community the identity belongs to
            workplace_id: Platform user ID

        Returns:
            The updated User instance
        """
        user.workplace_id = workplace_id
        user.community_id = community.id
        await self.session.flush()
        return user


class _PrivacyScopedRepository:
    """Shared lookups for models carrying ``privacy`` and ``owner_id`` columns."""

    model: type[Document] | type[Folder]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_visible(self, record_id: int, privacy: PrivacyFilter):
        """Retrieve a record by ID if the caller is allowed to see it.

        Args:
            record_id: ID of the record
            privacy: Visibility rule for the caller

        Returns:
            The record if it exists and is visible, None otherwise
        """
        if not storable_id(record_id):
            return None
        query = select(self.model).where(
            and_(self.model.id == record_id, privacy.clause(self.model))
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    def _list_query(self, params: ListQuery):
        query = select(self.model).where(params.privacy.clause(self.model))
        if params.newest_first:
            query = query.order_by(self.model.created_at.desc(), self.model.id.desc())
        else:
            query = query.order_by(self.model.created_at.asc(), self.model.id.asc())
        if params.limit is not None:
            query = query.limit(params.limit)
        return query

    async def list_visible(self, params: ListQuery) -> list:
        """List records visible under ``params.privacy``.

        Args:
            params: Privacy filter, ordering and limit

        Returns:
            List of records ordered by created_at
        """
        if params.folder_id is not None and not storable_id(params.folder_id):
            return []
        result = await self.session.execute(self._list_query(params))
        return list(result.scalars().all())


class FolderRepository(_PrivacyScopedRepository):
    """Repository for folder lookups."""

    model = Folder


class DocumentRepository(_PrivacyScopedRepository):
    """Repository for document lookups."""

    model = Document

    def _list_query(self, params: ListQuery):
        query = super()._list_query(params)
        if params.folder_id is not None:
            query = query.where(Document.folder_id == params.folder_id)
        return query


class TaskRepository:
    """Repository for task lookups, state changes and subscriptions."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, task_id: int, load_owner: bool = False) -> Task | None:
        """Retrieve a task by ID.

        Args:
            task_id: ID of the task to retrieve
            load_owner: Whether to eagerly load the owner relationship

        Returns:
            Task instance if found, None otherwise
        """
        if not storable_id(task_id):
            return None

        query = select(Task).where(Task.id == task_id)

        if load_owner:
            query = query.options(selectinload(Task.owner))

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_all(self, load_owner: bool = False) -> list[Task]:
        """Retrieve every task, newest first."""
        query = select(Task).order_by(Task.created_at.desc(), Task.id.desc())

        if load_owner:
            query = query.options(selectinload(Task.owner))

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def save(self, task: Task) -> Task:
        """Flush pending changes on ``task`` so later reads observe them."""
        self.session.add(task)
        await self.session.flush()
        return task

    async def list_subscribers(self, task: Task) -> list[User]:
        """Retrieve the users subscribed to a task.

        Args:
            task: Task whose subscribers to load

        Returns:
            List of subscribed User instances ordered by ID
        """
        query = (
            select(User)
            .join(task_subscribers, task_subscribers.c.user_id == User.id)
            .where(task_subscribers.c.task_id == task.id)
            .order_by(User.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def is_subscribed(self, task: Task, user: User) -> bool:
        """Check whether ``user`` is subscribed to ``task``."""
        query = select(task_subscribers.c.user_id).where(
            task_subscribers.c.task_id == task.id,
            task_subscribers.c.user_id == user.id,
        )
        result = await self.session.execute(query)
        return result.first() is not None

    async def add_subscriber(self, task: Task, user: User) -> bool:
        """Subscribe a user to a task.

        Returns:
            True if the subscription was created, False if it already existed
        """
        if await self.is_subscribed(task, user):
            return False
        await self.session.execute(
            insert(task_subscribers).values(task_id=task.id, user_id=user.id)
        )
        await self.session.flush()
        return True

    async def remove_subscriber(self, task: Task, user: User) -> bool:
        """Unsubscribe a user from a task.

        Returns:
            True if a subscription was removed, False if there was none
        """
        result = await self.session.execute(
            delete(task_subscribers).where(
                task_subscribers.c.task_id == task.id,
                task_subscribers.c.user_id == user.id,
            )
        )
        await self.session.flush()
        return result.rowcount > 0


class Store:
    """Bundle of repositories sharing one session, handed to the link pipeline."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.communities = CommunityRepository(session)
        self.users = UserRepository(session)
        self.folders = FolderRepository(session)
        self.documents = DocumentRepository(session)
        self.tasks = TaskRepository(session)
