"""
模型统一导出：Alembic 自动发现需要导入所有模型
"""

from taskboard.db.models.base import Base
from taskboard.db.models.task import Task

__all__ = ["Base", "Task"]
