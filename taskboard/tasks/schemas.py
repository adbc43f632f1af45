"""
任务数据模型（API 出入参 + 客户端缓存共用）

TaskOut 即对外的 Task JSON 表示：{id, title, completed, priority}。
入参模型为严格模式："yes"、1 之类不会被当成布尔值，类型不符由
request_validation_handler 转成 400。字段缺失/取值非法由存储层统一抛
TaskValidationError，HTTP 层同样返回 400 + {"message"} 而不是框架默认的 422。
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

Priority = Literal["low", "medium", "high"]
PRIORITIES: tuple[str, ...] = ("low", "medium", "high")
DEFAULT_PRIORITY = "low"


class TaskCreate(BaseModel):
    """POST /tasks 请求体"""

    model_config = ConfigDict(strict=True)

    title: str | None = None
    priority: str | None = None


class TaskUpdate(BaseModel):
    """PUT /tasks/{id} 请求体：任意子集，未出现的字段不修改"""

    model_config = ConfigDict(strict=True)

    completed: bool | None = None
    priority: str | None = None


class TaskOut(BaseModel):
    """单个任务的对外表示"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    completed: bool = False
    priority: Priority = "low"

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id_to_str(cls, v: object) -> str:
        """ORM 返回 UUID 对象，统一转为不透明字符串"""
        return str(v)


class MessageResponse(BaseModel):
    """通用消息响应（删除确认 / 错误说明）"""

    message: str
