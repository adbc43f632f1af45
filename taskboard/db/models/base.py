"""
SQLAlchemy 声明基类：所有模型继承此 Base
配置了 DB_SCHEMA 时（PG）所有表放在该 schema 下做数据隔离
"""

from sqlalchemy.orm import DeclarativeBase

from taskboard.config import get_settings

settings = get_settings()


class Base(DeclarativeBase):
    """声明基类"""

    __abstract__ = True


def schema_table_args() -> dict:
    """表级参数：仅 PG 且配置了 schema 时注入，其他方言下为空"""
    if settings.DB_SCHEMA and settings.db_backend == "postgresql":
        return {"schema": settings.DB_SCHEMA}
    return {}
