"""
主题偏好持久化：本地 JSON 文件中的 dark_mode 布尔标记

启动时读取一次，切换时写回；与任务存储无任何交互。
文件缺失或损坏时按浅色主题处理。
"""

import json
import os
from pathlib import Path

import structlog

log = structlog.get_logger()

_KEY = "dark_mode"


class ThemeStore:
    """持久化的暗色模式开关"""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            log.warning("客户端状态文件损坏，按默认值处理", path=str(self._path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def get(self) -> bool:
        return self._read().get(_KEY) is True

    def set(self, dark_mode: bool) -> None:
        """写入标记（保留文件中的其他键），先写临时文件再 replace"""
        data = self._read()
        data[_KEY] = bool(dark_mode)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self._path)
