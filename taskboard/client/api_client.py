"""
任务 API 客户端：httpx.AsyncClient 封装

HTTP 层错误按类别映射为 ApiError 子类，控制器据此决定提示文案：
- 400 → ApiValidationError
- 404 → ApiNotFoundError
- 超时 / 连接失败 / 5xx → ApiUnavailableError
"""

import httpx
import structlog

from taskboard.config import get_settings
from taskboard.tasks.schemas import TaskOut

log = structlog.get_logger()


class ApiError(Exception):
    """API 调用失败基类"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiValidationError(ApiError):
    pass


class ApiNotFoundError(ApiError):
    pass


class ApiUnavailableError(ApiError):
    pass


def _response_message(resp: httpx.Response) -> str:
    """从 {"message": ...} 响应体取文案，非 JSON 时退回状态码描述"""
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase or f"HTTP {resp.status_code}"
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return resp.reason_phrase or f"HTTP {resp.status_code}"


class TaskApiClient:
    """/tasks 接口的异步客户端，一个控制台会话共用一个连接池"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT,
            transport=transport,
            headers={"User-Agent": "taskboard-client/0.1"},
        )

    async def __aenter__(self) -> "TaskApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: dict | None = None) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            log.warning("API 请求超时", method=method, path=path)
            raise ApiUnavailableError("Request timed out") from e
        except httpx.TransportError as e:
            log.warning("API 连接失败", method=method, path=path, error=str(e))
            raise ApiUnavailableError("Server unreachable") from e

        if resp.is_success:
            return resp

        message = _response_message(resp)
        log.warning("API 返回错误", method=method, path=path, status_code=resp.status_code, message=message)
        if resp.status_code == 400:
            raise ApiValidationError(message, resp.status_code)
        if resp.status_code == 404:
            raise ApiNotFoundError(message, resp.status_code)
        if resp.status_code >= 500:
            raise ApiUnavailableError(message, resp.status_code)
        raise ApiError(message, resp.status_code)

    @staticmethod
    def _json(resp: httpx.Response) -> object:
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError("Malformed response body", resp.status_code) from e

    @staticmethod
    def _parse_task(data: object) -> TaskOut:
        try:
            return TaskOut.model_validate(data)
        except ValueError as e:
            raise ApiError("Malformed task in response") from e

    async def list_tasks(self) -> list[TaskOut]:
        resp = await self._request("GET", "/tasks")
        items = self._json(resp)
        if not isinstance(items, list):
            raise ApiError("Malformed response body")
        return [self._parse_task(item) for item in items]

    async def create_task(self, title: str, priority: str | None = None) -> TaskOut:
        payload: dict = {"title": title}
        if priority is not None:
            payload["priority"] = priority
        resp = await self._request("POST", "/tasks", json=payload)
        return self._parse_task(self._json(resp))

    async def update_task(
        self,
        task_id: str,
        *,
        completed: bool | None = None,
        priority: str | None = None,
    ) -> TaskOut:
        payload: dict = {}
        if completed is not None:
            payload["completed"] = completed
        if priority is not None:
            payload["priority"] = priority
        resp = await self._request("PUT", f"/tasks/{task_id}", json=payload)
        return self._parse_task(self._json(resp))

    async def delete_task(self, task_id: str) -> str:
        resp = await self._request("DELETE", f"/tasks/{task_id}")
        return _response_message(resp)
