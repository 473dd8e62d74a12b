"""
FastAPI dependencies giving endpoints access to the services.

The store and settings live on ``app.state`` (see ``main.create_app``),
so every application instance, and therefore every test, has its own
data.
"""

from fastapi import Request

from ..core.config import Settings
from ..core.store import InMemoryStore
from ..services.task_service import TaskService
from ..services.user_service import UserService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_task_service(request: Request) -> TaskService:
    return TaskService(get_store(request), get_settings(request))


def get_user_service(request: Request) -> UserService:
    return UserService(get_store(request), get_settings(request))
