"""
任务模型：系统唯一的持久化实体

id 由存储层生成（uuid7），创建后不可变；
priority 取值受 CHECK 约束限制在 low / medium / high。
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, String, Text, Uuid, false, func
from sqlalchemy.orm import Mapped, mapped_column
from uuid6 import uuid7

from taskboard.db.models.base import Base, schema_table_args
from taskboard.tasks.schemas import DEFAULT_PRIORITY, PRIORITIES

_PRIORITY_SQL = ", ".join(f"'{p}'" for p in PRIORITIES)


class Task(Base):
    """任务表"""

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(f"priority IN ({_PRIORITY_SQL})", name="ck_tasks_priority"),
        CheckConstraint("length(title) > 0", name="ck_tasks_title_not_empty"),
        schema_table_args(),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid7)
    title: Mapped[str] = mapped_column(Text, nullable=False, comment="任务标题")
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false(), comment="是否完成"
    )
    priority: Mapped[str] = mapped_column(
        String(8), nullable=False, default=DEFAULT_PRIORITY, server_default=DEFAULT_PRIORITY,
        comment="优先级: low / medium / high",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), comment="创建时间（仅内部排序用）"
    )
