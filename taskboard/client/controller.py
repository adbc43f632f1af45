"""
客户端控制器：本地任务缓存 + 界面状态，与 /tasks 接口保持同步

每个变更操作都按同一模式执行：
1. 发起远程调用
2. 成功：按 id 用服务端返回的记录替换/追加/移除缓存
3. 失败：缓存保持调用前的样子，通过 Notifier 报告失败类别

过滤视图是缓存 + 当前过滤器的纯投影，每次渲染重新计算，不单独持有状态。
"""

from dataclasses import dataclass, field
from typing import Literal

import structlog

from taskboard.client.api_client import (
    ApiError,
    ApiNotFoundError,
    ApiUnavailableError,
    ApiValidationError,
    TaskApiClient,
)
from taskboard.client.notifier import Notifier
from taskboard.client.theme import ThemeStore
from taskboard.tasks.schemas import DEFAULT_PRIORITY, PRIORITIES, TaskOut

log = structlog.get_logger()

TaskFilter = Literal["all", "completed", "pending"]
FILTERS: tuple[str, ...] = ("all", "completed", "pending")

EMPTY_TITLE = "Task cannot be empty!"


@dataclass
class ViewState:
    """界面临时状态，不写入任务存储"""

    input_text: str = ""
    priority: str = DEFAULT_PRIORITY
    filter: TaskFilter = "all"
    dark_mode: bool = False


def filter_tasks(tasks: list[TaskOut], task_filter: str) -> list[TaskOut]:
    """all 返回全部；completed / pending 按完成标记取子集"""
    if task_filter == "completed":
        return [t for t in tasks if t.completed]
    if task_filter == "pending":
        return [t for t in tasks if not t.completed]
    return list(tasks)


def _failure_message(action: str, exc: ApiError) -> str:
    """按失败类别生成用户可读提示，不透出内部细节"""
    if isinstance(exc, ApiValidationError):
        return f"Could not {action} task: {exc.message}"
    if isinstance(exc, ApiNotFoundError):
        return f"Could not {action} task: it no longer exists"
    if isinstance(exc, ApiUnavailableError):
        return f"Could not {action} task: server unavailable"
    return f"Could not {action} task: request failed"


@dataclass
class TaskController:
    api: TaskApiClient
    notifier: Notifier
    state: ViewState = field(default_factory=ViewState)
    theme_store: ThemeStore | None = None
    tasks: list[TaskOut] = field(default_factory=list)

    def __post_init__(self) -> None:
        # 主题偏好只在启动时读取一次
        if self.theme_store is not None:
            self.state.dark_mode = self.theme_store.get()

    # ── 同步 ──

    async def load(self) -> bool:
        """拉取全量任务覆盖本地缓存；失败时缓存不变"""
        try:
            tasks = await self.api.list_tasks()
        except ApiError as e:
            log.warning("任务列表拉取失败", error=e.message)
            reason = "server unavailable" if isinstance(e, ApiUnavailableError) else "request failed"
            self.notifier.error(f"Could not load tasks: {reason}")
            return False
        self.tasks = tasks
        return True

    # ── 变更 ──

    async def add_task(self, title: str | None = None, priority: str | None = None) -> TaskOut | None:
        """新建任务：标题为空时直接提示，不发请求"""
        title = self.state.input_text if title is None else title
        priority = priority or self.state.priority
        if not title or not title.strip():
            self.notifier.error(EMPTY_TITLE)
            return None

        try:
            created = await self.api.create_task(title, priority)
        except ApiError as e:
            self.notifier.error(_failure_message("add", e))
            return None

        self.tasks = [*self.tasks, created]
        self.state.input_text = ""
        self.notifier.success("Task added!")
        return created

    async def toggle_task(self, task_id: str, current_completed: bool) -> TaskOut | None:
        """切换完成状态：先用服务端返回值替换本地记录，再全量同步"""
        try:
            updated = await self.api.update_task(task_id, completed=not current_completed)
        except ApiError as e:
            self.notifier.error(_failure_message("update", e))
            return None

        self._replace(updated)
        await self.load()
        self.notifier.success("Task moved to Pending!" if current_completed else "Task marked as Completed!")
        return updated

    async def change_priority(self, task_id: str, priority: str) -> TaskOut | None:
        """单独修改优先级（PUT 只带 priority）"""
        if priority not in PRIORITIES:
            self.notifier.error(f"Priority must be one of: {', '.join(PRIORITIES)}")
            return None
        try:
            updated = await self.api.update_task(task_id, priority=priority)
        except ApiError as e:
            self.notifier.error(_failure_message("update", e))
            return None

        self._replace(updated)
        self.notifier.success("Priority updated!")
        return updated

    async def delete_task(self, task_id: str) -> bool:
        """删除任务：服务端确认后从缓存移除"""
        try:
            await self.api.delete_task(task_id)
        except ApiError as e:
            self.notifier.error(_failure_message("delete", e))
            return False

        self.tasks = [t for t in self.tasks if t.id != task_id]
        self.notifier.success("Task deleted!")
        return True

    def _replace(self, updated: TaskOut) -> None:
        self.tasks = [updated if t.id == updated.id else t for t in self.tasks]

    # ── 界面状态 ──

    def filtered_view(self, task_filter: str | None = None) -> list[TaskOut]:
        return filter_tasks(self.tasks, task_filter or self.state.filter)

    def set_filter(self, task_filter: str) -> bool:
        if task_filter not in FILTERS:
            self.notifier.error(f"Unknown filter: {task_filter}")
            return False
        self.state.filter = task_filter
        return True

    def set_priority(self, priority: str) -> bool:
        """设置新建任务时使用的优先级"""
        if priority not in PRIORITIES:
            self.notifier.error(f"Priority must be one of: {', '.join(PRIORITIES)}")
            return False
        self.state.priority = priority
        return True

    def toggle_theme(self) -> bool:
        self.state.dark_mode = not self.state.dark_mode
        if self.theme_store is not None:
            self.theme_store.set(self.state.dark_mode)
        return self.state.dark_mode
