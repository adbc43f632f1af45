"""
全局配置模块：通过 pydantic-settings 读取 .env 环境变量
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import make_url


class Settings(BaseSettings):
    """应用全局配置，从 .env 文件加载"""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── 数据库 ──
    DATABASE_URL: str = "sqlite+aiosqlite:///./taskboard.db"
    DB_SCHEMA: str | None = None  # 仅 PG 使用，SQLite 保持为空

    DB_ECHO: bool = False  # 打印 SQL 日志，调试时可在 .env 设为 true
    DB_AUTO_CREATE: bool = True  # connect() 时自动建表；生产环境走 Alembic

    # ── 连接池（SQLite 文件库同样适用） ──
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800

    # ── 客户端 ──
    API_BASE_URL: str = "http://127.0.0.1:8000"
    API_TIMEOUT: float = 10.0  # 客户端请求超时（秒）
    CLIENT_STATE_PATH: str = str(Path.home() / ".taskboard" / "client_state.json")

    # ── 应用 ──
    ENV: str = "development"  # development | production
    APP_NAME: str = "taskboard"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"  # DEBUG | INFO | WARNING | ERROR

    @property
    def db_backend(self) -> str:
        """数据库方言名：postgresql / sqlite"""
        return make_url(self.DATABASE_URL).get_backend_name()

    @model_validator(mode="after")
    def _check_production_schema(self) -> "Settings":
        """生产环境禁止自动建表，表结构变更必须走 Alembic 迁移"""
        if self.ENV == "production" and self.DB_AUTO_CREATE:
            raise ValueError(
                "生产环境不允许 DB_AUTO_CREATE=true，"
                "请在 .env 中关闭并执行 alembic upgrade head。"
            )
        return self

    @model_validator(mode="after")
    def _check_schema_backend(self) -> "Settings":
        """DB_SCHEMA 只对 PG 有意义，其他方言下配置即报错"""
        if self.DB_SCHEMA and self.db_backend != "postgresql":
            raise ValueError(f"DB_SCHEMA 仅支持 PostgreSQL，当前方言为 {self.db_backend}")
        return self

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"未知日志级别: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """单例获取配置（带缓存）"""
    return Settings()
