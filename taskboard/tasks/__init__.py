"""
Tasks 模块：任务实体的出入参模型、异常体系与存储层

TaskStore 供 API 层按请求实例化；schemas 同时被客户端控制器复用。
"""

from taskboard.tasks.errors import (
    StoreUnavailableError,
    TaskError,
    TaskNotFoundError,
    TaskValidationError,
)
from taskboard.tasks.schemas import PRIORITIES, TaskCreate, TaskOut, TaskUpdate

__all__ = [
    "PRIORITIES",
    "StoreUnavailableError",
    "TaskCreate",
    "TaskError",
    "TaskNotFoundError",
    "TaskOut",
    "TaskUpdate",
    "TaskValidationError",
]
