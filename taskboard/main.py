"""
FastAPI 应用主入口
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from taskboard.api.errors import register_exception_handlers
from taskboard.config import get_settings
from taskboard.db.engine import connect, disconnect
from taskboard.observability.logging_config import setup_logging
from taskboard.observability.metrics_middleware import MetricsMiddleware
from taskboard.observability.request_logger import RequestLoggerMiddleware
from taskboard.tasks.errors import StoreUnavailableError

settings = get_settings()

# 初始化日志（在 import 时就生效）
setup_logging(settings)
log = structlog.get_logger()


@asynccontextmanager
async def lifespan(application: FastAPI):
    """应用生命周期：启动时预热存储连接，关闭时释放连接池"""
    log.info("应用启动", env=settings.ENV, app=settings.APP_NAME)

    # ── Warm-up：存储暂不可用时不阻止启动，首个请求会再次尝试 connect() ──
    try:
        await connect()
    except StoreUnavailableError:
        log.warning("启动时存储不可用，将在首个请求时重试连接")

    yield

    await disconnect()
    log.info("应用关闭，资源已释放")


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

# ── 中间件（执行顺序：从下往上注册，从上往下执行） ──
app.add_middleware(RequestLoggerMiddleware)
app.add_middleware(MetricsMiddleware)

# ── Prometheus 指标端点 ──
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

# ── 路由注册 ──
from taskboard.api.health import router as health_router  # noqa: E402
from taskboard.api.tasks import router as tasks_router  # noqa: E402

app.include_router(health_router)
app.include_router(tasks_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("taskboard.main:app", host="0.0.0.0", port=settings.APP_PORT, reload=True)
