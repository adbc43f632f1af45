"""
结构化日志配置：structlog + contextvars 自动注入 trace_id

日志级别、输出格式均取自 Settings：
- ENV=production：JSON 输出（便于 Loki/ELK 解析）
- 其他环境：彩色文本输出
- LOG_LEVEL 同时作用于 structlog 和标准 logging
- DB_ECHO 关闭时把 SQLAlchemy 引擎日志压到 WARNING，避免 SQL 刷屏
- uvicorn.access 关闭，请求日志统一由 RequestLoggerMiddleware 输出
"""

import logging
import sys

import structlog

from taskboard.config import Settings


def _add_app_name(app_name: str):
    """处理器：每条日志都带上服务名，多服务共用日志平台时便于筛选"""

    def processor(logger, method_name: str, event_dict: dict) -> dict:
        event_dict.setdefault("app", app_name)
        return event_dict

    return processor


def setup_logging(settings: Settings) -> None:
    """按配置初始化结构化日志"""
    level = logging.getLevelName(settings.LOG_LEVEL)

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _add_app_name(settings.APP_NAME),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.ENV == "production":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.DB_ECHO else logging.WARNING)
    logging.getLogger("uvicorn.access").disabled = True
