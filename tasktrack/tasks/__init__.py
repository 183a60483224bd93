"""
TASKTRACK API - Tasks Module

Ownership-scoped task CRUD.
"""

from tasktrack.tasks.router import router as tasks_router

__all__ = ["tasks_router"]
