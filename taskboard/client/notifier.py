"""
提示通知：控制器只依赖 Notifier 协议（success / error，发后即忘）
"""

from typing import Protocol


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """控制台彩色提示：绿色成功，红色错误"""

    def success(self, message: str) -> None:
        print(f"\033[32m  ✔ {message}\033[0m")

    def error(self, message: str) -> None:
        print(f"\033[31m  ✘ {message}\033[0m")
