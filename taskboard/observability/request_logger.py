"""
请求日志中间件：每个 /tasks 请求一条开始 + 一条结束日志

- trace_id 取自 X-Trace-ID 请求头，缺省时生成，绑定到 structlog 上下文并回写响应头
- path 记录路由模板（/tasks/{task_id}），具体 id 单独作为 task_id 字段
- 结束日志按状态码分级：5xx error、4xx warning、其余 info
- /metrics、/health 属于探活流量，只回写 trace_id，不记日志
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from taskboard.observability.metrics_middleware import route_template

log = structlog.get_logger()

_QUIET_PREFIXES = ("/metrics", "/health")


def _log_method(status_code: int):
    if status_code >= 500:
        return log.error
    if status_code >= 400:
        return log.warning
    return log.info


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """HTTP 请求日志 + trace_id 上下文注入"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = request.headers.get("X-Trace-ID") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(trace_id=trace_id)

        quiet = request.url.path.startswith(_QUIET_PREFIXES)
        start = time.monotonic()
        if not quiet:
            log.debug("请求开始", method=request.method)

        try:
            response = await call_next(request)
        except Exception:
            log.exception("请求处理异常", method=request.method, path=route_template(request))
            raise

        duration_ms = int((time.monotonic() - start) * 1000)
        response.headers["X-Trace-ID"] = trace_id
        response.headers["X-Duration-Ms"] = str(duration_ms)

        if not quiet:
            task_id = request.scope.get("path_params", {}).get("task_id")
            _log_method(response.status_code)(
                "请求结束",
                method=request.method,
                path=route_template(request),
                task_id=task_id,
                status_code=response.status_code,
                duration_ms=duration_ms,
                client_ip=request.client.host if request.client else "unknown",
            )

        return response
