"""
TASKTRACK API - Task Repository

Repository pattern for task data access.
Includes MongoDB implementation for runtime and in-memory for testing.
"""

from abc import ABC, abstractmethod
from typing import Optional, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from tasktrack.tasks.models import Task
from tasktrack.tasks.enums import TaskStatus


class TaskRepositoryInterface(ABC):
    """
    Abstract interface for task repository.

    All operations are scoped by user_id. A task owned by someone else
    looks exactly like a task that does not exist.
    """

    @abstractmethod
    async def create(self, task: Task) -> Task:
        pass

    @abstractmethod
    async def get_by_id(self, task_id: str, user_id: str) -> Optional[Task]:
        pass

    @abstractmethod
    async def list_by_owner(self, user_id: str) -> List[Task]:
        """List tasks for owner, newest first."""
        pass

    @abstractmethod
    async def update(self, task_id: str, user_id: str, updates: dict) -> Optional[Task]:
        pass

    @abstractmethod
    async def toggle_status(self, task_id: str, user_id: str) -> Optional[Task]:
        """Flip Pending <-> Completed in one step."""
        pass

    @abstractmethod
    async def delete(self, task_id: str, user_id: str) -> bool:
        pass


class TaskRepository(TaskRepositoryInterface):
    """
    MongoDB implementation of the task repository.

    Every read-by-id and mutation is a single statement filtered on both
    _id and user_id.
    """

    COLLECTION_NAME = "tasks"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def create(self, task: Task) -> Task:
        await self.collection.insert_one(task.to_dict())
        return task

    async def get_by_id(self, task_id: str, user_id: str) -> Optional[Task]:
        doc = await self.collection.find_one({"_id": task_id, "user_id": user_id})
        if doc is None:
            return None
        return Task.from_dict(doc)

    async def list_by_owner(self, user_id: str) -> List[Task]:
        cursor = self.collection.find({"user_id": user_id}).sort("created_at", -1)
        tasks: List[Task] = []
        async for doc in cursor:
            tasks.append(Task.from_dict(doc))
        return tasks

    async def update(self, task_id: str, user_id: str, updates: dict) -> Optional[Task]:
        result = await self.collection.find_one_and_update(
            {"_id": task_id, "user_id": user_id},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        if result is None:
            return None
        return Task.from_dict(result)

    async def toggle_status(self, task_id: str, user_id: str) -> Optional[Task]:
        # Pipeline update so the read of the old status and the write are atomic
        result = await self.collection.find_one_and_update(
            {"_id": task_id, "user_id": user_id},
            [{
                "$set": {
                    "status": {
                        "$cond": [
                            {"$eq": ["$status", TaskStatus.COMPLETED.value]},
                            TaskStatus.PENDING.value,
                            TaskStatus.COMPLETED.value,
                        ]
                    }
                }
            }],
            return_document=ReturnDocument.AFTER,
        )
        if result is None:
            return None
        return Task.from_dict(result)

    async def delete(self, task_id: str, user_id: str) -> bool:
        result = await self.collection.delete_one({"_id": task_id, "user_id": user_id})
        return result.deleted_count > 0


class InMemoryTaskRepository(TaskRepositoryInterface):
    """
    In-memory implementation for CI-safe testing.
    """

    def __init__(self):
        self._tasks: dict[str, Task] = {}

    def clear(self) -> None:
        self._tasks.clear()

    async def create(self, task: Task) -> Task:
        self._tasks[task.id] = task
        return task

    async def get_by_id(self, task_id: str, user_id: str) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None or task.user_id != user_id:
            return None
        return task

    async def list_by_owner(self, user_id: str) -> List[Task]:
        results = [t for t in self._tasks.values() if t.user_id == user_id]
        results.sort(key=lambda t: t.created_at, reverse=True)
        return results

    async def update(self, task_id: str, user_id: str, updates: dict) -> Optional[Task]:
        task = await self.get_by_id(task_id, user_id)
        if task is None:
            return None

        # Apply the update in storage form, as $set would
        doc = task.to_dict()
        doc.update(updates)
        updated = Task.from_dict(doc)
        self._tasks[task_id] = updated
        return updated

    async def toggle_status(self, task_id: str, user_id: str) -> Optional[Task]:
        task = await self.get_by_id(task_id, user_id)
        if task is None:
            return None
        task.status = task.status.toggled()
        return task

    async def delete(self, task_id: str, user_id: str) -> bool:
        task = await self.get_by_id(task_id, user_id)
        if task is None:
            return False
        del self._tasks[task_id]
        return True
