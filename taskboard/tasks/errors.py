"""
任务域异常体系

- TaskValidationError   → 400（缺少必填字段 / 取值非法）
- TaskNotFoundError     → 404（更新不存在的 id；删除时视为成功）
- StoreUnavailableError → 503（存储不可达，记录日志，不重试）

Method Not Allowed 由路由层直接产生，不在此定义。
"""


class TaskError(Exception):
    """任务域异常基类，message 会原样返回给调用方"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskValidationError(TaskError):
    status_code = 400


class TaskNotFoundError(TaskError):
    status_code = 404

    def __init__(self, task_id: str):
        super().__init__("Task not found")
        self.task_id = task_id


class StoreUnavailableError(TaskError):
    status_code = 503

    def __init__(self, message: str = "Task store unavailable"):
        super().__init__(message)
