"""
数据库引擎：惰性连接 + AsyncSession 工厂

connect() 幂等：进程内只建一次引擎，之后所有请求复用同一连接池。
每个请求入口（get_db 依赖）都会先 await connect()，未连接时才真正建连。
"""

import asyncio
from collections.abc import AsyncIterator

import structlog
from sqlalchemy import make_url, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from taskboard.config import Settings, get_settings
from taskboard.db.models import Base
from taskboard.tasks.errors import StoreUnavailableError

log = structlog.get_logger()

# ── 进程级连接状态 ──
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None
_connect_lock = asyncio.Lock()


def _engine_kwargs(settings: Settings) -> dict:
    """按方言组装引擎参数：连接池参数只对 PG 生效，SQLite 使用默认池"""
    kwargs: dict = {"echo": settings.DB_ECHO}
    if settings.db_backend == "postgresql":
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
        if settings.DB_SCHEMA:
            kwargs["connect_args"] = {"server_settings": {"search_path": settings.DB_SCHEMA}}
    return kwargs


def is_connected() -> bool:
    return _session_factory is not None


async def connect() -> async_sessionmaker[AsyncSession]:
    """建立连接（幂等），返回 session 工厂；存储不可达时抛 StoreUnavailableError"""
    global _engine, _session_factory

    if _session_factory is not None:
        return _session_factory

    async with _connect_lock:
        # 双重检查：并发首请求只建一次
        if _session_factory is not None:
            return _session_factory

        settings = get_settings()
        engine = create_async_engine(settings.DATABASE_URL, **_engine_kwargs(settings))
        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                if settings.DB_AUTO_CREATE:
                    await conn.run_sync(Base.metadata.create_all)
        except (OSError, SQLAlchemyError) as e:
            await engine.dispose()
            log.error("存储连接失败", url=make_url(settings.DATABASE_URL).render_as_string(), error=str(e))
            raise StoreUnavailableError() from e

        _engine = engine
        _session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        log.info("存储连接已建立", backend=engine.dialect.name, auto_create=settings.DB_AUTO_CREATE)
        return _session_factory


async def disconnect() -> None:
    """释放连接池并清除连接标记（应用关闭 / 测试隔离）"""
    global _engine, _session_factory, _connect_lock

    if _engine is not None:
        await _engine.dispose()
        log.info("存储连接已释放")
    _engine = None
    _session_factory = None
    _connect_lock = asyncio.Lock()


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI 依赖注入：确保已连接后获取数据库会话"""
    session_factory = await connect()
    async with session_factory() as session:
        yield session
