"""Postback button actions applied to tasks."""

from db.models import Task, User
from db.repositories import TaskRepository
from schemas.common import PostbackPayload
from utils.logging import get_webhook_logger

logger = get_webhook_logger("link.actions")


class PostbackActionProcessor:
    """
    Applies a button payload to a task and persists the change.

    Supported payloads are the PostbackPayload values. Unknown payloads
    leave the task untouched.
    """

    def __init__(self, tasks: TaskRepository):
        self.tasks = tasks

    async def apply(self, task: Task, user: User, payload: str | None) -> PostbackPayload | None:
        """
        Apply ``payload`` to ``task`` on behalf of ``user``.

        Every mutation is flushed before returning, so a subsequent encode
        reads the post-mutation state.

        Args:
            task: Task to act on
            user: Linked user who clicked the button
            payload: Button payload from the change

        Returns:
            The applied action, or None if the payload was not recognized
        """
        try:
            action = PostbackPayload(payload)
        except ValueError:
            logger.warning("Ignoring unknown postback payload", payload=payload, task_id=task.id)
            return None

        if action is PostbackPayload.TASK_CLOSE:
            task.completed = True
            await self.tasks.save(task)
        elif action is PostbackPayload.TASK_REOPEN:
            task.completed = False
            await self.tasks.save(task)
        elif action is PostbackPayload.SUBSCRIBE:
            await self.tasks.add_subscriber(task, user)
        elif action is PostbackPayload.UNSUBSCRIBE:
            await self.tasks.remove_subscriber(task, user)

        logger.action(action.value, details={"task_id": task.id, "user_id": user.id})
        return action
