"""
全局异常处理：所有错误响应统一为 {"message": ...}

- TaskError 子类            → 自带 status_code（400 / 404 / 503）
- 路由层 HTTPException      → 原状态码（405 Method Not Allowed / 404 路由不存在）
- 请求体解析 / 类型校验失败  → 400
- 其他 SQLAlchemyError      → 500，只记日志，不暴露内部细节
"""

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from taskboard.observability.metrics import ERROR_TOTAL
from taskboard.tasks.errors import (
    StoreUnavailableError,
    TaskError,
    TaskNotFoundError,
    TaskValidationError,
)

log = structlog.get_logger()


def _error_type(exc: TaskError) -> str:
    if isinstance(exc, TaskValidationError):
        return "validation"
    if isinstance(exc, TaskNotFoundError):
        return "not_found"
    if isinstance(exc, StoreUnavailableError):
        return "store_unavailable"
    return "unknown"


async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    error_type = _error_type(exc)
    ERROR_TOTAL.labels(error_type=error_type).inc()
    if isinstance(exc, StoreUnavailableError):
        log.error("任务存储不可用", path=request.url.path, error=str(exc.__cause__ or exc))
    else:
        log.warning("任务请求被拒绝", path=request.url.path, error_type=error_type, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    ERROR_TOTAL.labels(error_type="validation").inc()
    errors = exc.errors()
    log.warning("请求体校验失败", path=request.url.path, errors=len(errors))
    if errors and errors[0].get("type") == "json_invalid":
        message = "Invalid JSON body"
    else:
        message = "Invalid request body"
    return JSONResponse(status_code=400, content={"message": message})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    ERROR_TOTAL.labels(error_type="unknown").inc()
    log.error("数据库异常", path=request.url.path, error=str(exc), exc_info=True)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskError, task_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
