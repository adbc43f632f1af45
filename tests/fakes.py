# tests/fakes.py

from __future__ import annotations

import json

import httpx


class RecordingNotifier:
    """Collects notifications instead of printing them."""

    def __init__(self) -> None:
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class FakeTaskServer:
    """
    In-memory stand-in for the /tasks API behind httpx.MockTransport.

    `fail_with` lets a test force the next responses to an error status
    (or a transport error) to exercise the controller's failure path.
    """

    def __init__(self) -> None:
        self.tasks: dict[str, dict] = {}
        self.requests: list[tuple[str, str]] = []
        self.fail_with: int | type[Exception] | None = None
        self._next_id = 1

    def add(self, title: str, completed: bool = False, priority: str = "low") -> dict:
        task = {"id": f"t{self._next_id}", "title": title, "completed": completed, "priority": priority}
        self._next_id += 1
        self.tasks[task["id"]] = task
        return task

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))

        if isinstance(self.fail_with, type) and issubclass(self.fail_with, Exception):
            raise self.fail_with("boom", request=request)
        if isinstance(self.fail_with, int):
            return httpx.Response(self.fail_with, json={"message": "Task store unavailable"})

        body = json.loads(request.content) if request.content else {}
        parts = request.url.path.strip("/").split("/")

        if parts == ["tasks"] and request.method == "GET":
            return httpx.Response(200, json=list(self.tasks.values()))
        if parts == ["tasks"] and request.method == "POST":
            if not body.get("title"):
                return httpx.Response(400, json={"message": "Title is required"})
            task = self.add(body["title"], priority=body.get("priority") or "low")
            return httpx.Response(201, json=task)
        if len(parts) == 2 and request.method == "PUT":
            task = self.tasks.get(parts[1])
            if task is None:
                return httpx.Response(404, json={"message": "Task not found"})
            task.update({k: v for k, v in body.items() if k in ("completed", "priority")})
            return httpx.Response(200, json=task)
        if len(parts) == 2 and request.method == "DELETE":
            self.tasks.pop(parts[1], None)
            return httpx.Response(200, json={"message": "Task deleted"})
        return httpx.Response(405, json={"message": "Method Not Allowed"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def count(self, method: str) -> int:
        return sum(1 for m, _ in self.requests if m == method)
