"""
Client 模块：任务 API 客户端 + 控制器 + 控制台视图

供 scripts/task_console.py 组装使用。
"""

from taskboard.client.api_client import (
    ApiError,
    ApiNotFoundError,
    ApiUnavailableError,
    ApiValidationError,
    TaskApiClient,
)
from taskboard.client.controller import TaskController, ViewState, filter_tasks
from taskboard.client.notifier import ConsoleNotifier, Notifier
from taskboard.client.theme import ThemeStore
from taskboard.client.view import render_view

__all__ = [
    "ApiError",
    "ApiNotFoundError",
    "ApiUnavailableError",
    "ApiValidationError",
    "ConsoleNotifier",
    "Notifier",
    "TaskApiClient",
    "TaskController",
    "ThemeStore",
    "ViewState",
    "filter_tasks",
    "render_view",
]
