"""
任务存储层：tasks 表的 CRUD

约定：
- find_all() 不保证顺序（实现上按创建时间返回，便于控制台展示稳定）
- create() 校验标题非空、优先级合法
- update_by_id() 只允许修改 completed / priority，id 不存在抛 TaskNotFoundError
- delete_by_id() 幂等：id 不存在（或格式非法）视为成功

连接类故障（OperationalError / InterfaceError）统一转为 StoreUnavailableError，
由 API 层映射为 503。
"""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.models.task import Task
from taskboard.observability.metrics import TASK_OPERATION_TOTAL
from taskboard.tasks.errors import StoreUnavailableError, TaskNotFoundError, TaskValidationError
from taskboard.tasks.schemas import DEFAULT_PRIORITY, PRIORITIES

log = structlog.get_logger()

TITLE_REQUIRED = "Title is required"
INVALID_PRIORITY = f"Priority must be one of: {', '.join(PRIORITIES)}"


def _parse_id(task_id: str) -> uuid.UUID | None:
    """外部 id 为不透明字符串，格式非法时返回 None（按不存在处理）"""
    try:
        return uuid.UUID(str(task_id))
    except ValueError:
        return None


def _check_priority(priority: object) -> str:
    if priority not in PRIORITIES:
        raise TaskValidationError(INVALID_PRIORITY)
    return priority


@contextmanager
def _store_io(operation: str) -> Iterator[None]:
    """包裹一次存储 I/O：连接故障转 StoreUnavailableError 并计数"""
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        TASK_OPERATION_TOTAL.labels(operation=operation, status="error").inc()
        log.error("存储操作失败", operation=operation, error=str(e))
        raise StoreUnavailableError() from e


class TaskStore:
    """任务集合的持久化访问，一个请求一个实例（绑定该请求的 AsyncSession）"""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_all(self) -> list[Task]:
        """返回全部任务，无过滤；为空时返回空列表"""
        with _store_io("list"):
            result = await self._db.execute(select(Task).order_by(Task.created_at, Task.id))
            tasks = list(result.scalars().all())
        TASK_OPERATION_TOTAL.labels(operation="list", status="success").inc()
        return tasks

    async def create(self, title: object, priority: object = None) -> Task:
        """创建任务：title 必填，priority 缺省为 low，completed 恒为 false"""
        if not isinstance(title, str) or not title.strip():
            TASK_OPERATION_TOTAL.labels(operation="create", status="invalid").inc()
            raise TaskValidationError(TITLE_REQUIRED)
        if priority is None:
            priority = DEFAULT_PRIORITY
        try:
            priority = _check_priority(priority)
        except TaskValidationError:
            TASK_OPERATION_TOTAL.labels(operation="create", status="invalid").inc()
            raise

        task = Task(title=title.strip(), priority=priority, completed=False)
        with _store_io("create"):
            self._db.add(task)
            await self._db.commit()
            await self._db.refresh(task)

        TASK_OPERATION_TOTAL.labels(operation="create", status="success").inc()
        log.info("任务已创建", task_id=str(task.id), priority=task.priority)
        return task

    async def update_by_id(
        self,
        task_id: str,
        *,
        completed: bool | None = None,
        priority: str | None = None,
    ) -> Task:
        """按 id 更新 completed / priority，None 表示该字段不修改"""
        if priority is not None:
            try:
                _check_priority(priority)
            except TaskValidationError:
                TASK_OPERATION_TOTAL.labels(operation="update", status="invalid").inc()
                raise

        task_uuid = _parse_id(task_id)
        with _store_io("update"):
            task = await self._db.get(Task, task_uuid) if task_uuid else None
            if task is None:
                TASK_OPERATION_TOTAL.labels(operation="update", status="not_found").inc()
                raise TaskNotFoundError(task_id)

            if completed is not None:
                task.completed = completed
            if priority is not None:
                task.priority = priority
            await self._db.commit()

        TASK_OPERATION_TOTAL.labels(operation="update", status="success").inc()
        log.info("任务已更新", task_id=task_id, completed=task.completed, priority=task.priority)
        return task

    async def delete_by_id(self, task_id: str) -> bool:
        """按 id 删除；返回是否真的删掉了记录，不存在时不报错"""
        task_uuid = _parse_id(task_id)
        if task_uuid is None:
            TASK_OPERATION_TOTAL.labels(operation="delete", status="not_found").inc()
            return False

        with _store_io("delete"):
            result = await self._db.execute(delete(Task).where(Task.id == task_uuid))
            await self._db.commit()

        deleted = result.rowcount > 0
        TASK_OPERATION_TOTAL.labels(operation="delete", status="success" if deleted else "not_found").inc()
        log.info("任务删除", task_id=task_id, deleted=deleted)
        return deleted
