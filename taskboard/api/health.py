"""
健康检查接口：探活 + 存储状态
"""

import structlog
from fastapi import APIRouter
from sqlalchemy import text

from taskboard.db.engine import connect

router = APIRouter(tags=["健康检查"])
log = structlog.get_logger()


@router.get("/health")
async def health_check():
    """健康检查：校验数据库连接，失败时标记 degraded 但仍返回 200"""
    status = {"status": "ok", "database": "ok"}

    try:
        session_factory = await connect()
        async with session_factory() as db:
            await db.execute(text("SELECT 1"))
    except Exception as e:
        status["database"] = f"error: {e}"
        status["status"] = "degraded"
        log.error("数据库健康检查失败", error=str(e))

    return status
