"""
控制台任务客户端：通过 /tasks 接口管理任务

运行方式：
    poetry run python scripts/task_console.py [--base-url http://127.0.0.1:8000]

支持命令（列表序号对应当前过滤视图中的编号）：
    add <标题>             — 以当前优先级新建任务
    done <n>               — 切换第 n 个任务的完成状态
    del <n>                — 删除第 n 个任务
    priority <level>       — 设置新建任务的优先级（low / medium / high）
    priority <n> <level>   — 修改第 n 个任务的优先级
    filter <all|completed|pending>
    theme                  — 切换暗色模式
    refresh                — 重新拉取任务列表
    /quit                  — 退出
"""

import argparse
import asyncio
import sys
from pathlib import Path

from prompt_toolkit import PromptSession

# 确保项目根目录在 sys.path 中
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from taskboard.client import (  # noqa: E402
    ConsoleNotifier,
    TaskApiClient,
    TaskController,
    ThemeStore,
    render_view,
)
from taskboard.config import get_settings  # noqa: E402
from taskboard.observability.logging_config import setup_logging  # noqa: E402
from taskboard.tasks.schemas import TaskOut  # noqa: E402


def _pick(controller: TaskController, raw: str) -> TaskOut | None:
    """按当前视图中的序号取任务"""
    visible = controller.filtered_view()
    try:
        index = int(raw)
    except ValueError:
        controller.notifier.error(f"Not a task number: {raw}")
        return None
    if not 1 <= index <= len(visible):
        controller.notifier.error(f"No task #{index} in this view")
        return None
    return visible[index - 1]


async def handle_command(controller: TaskController, line: str) -> None:
    """执行一条控制台命令"""
    command, _, rest = line.partition(" ")
    rest = rest.strip()

    if command == "add":
        controller.state.input_text = rest
        await controller.add_task()
    elif command == "done":
        task = _pick(controller, rest)
        if task:
            await controller.toggle_task(task.id, task.completed)
    elif command == "del":
        task = _pick(controller, rest)
        if task:
            await controller.delete_task(task.id)
    elif command == "priority":
        args = rest.split()
        if len(args) == 1:
            controller.set_priority(args[0])
        elif len(args) == 2:
            task = _pick(controller, args[0])
            if task:
                await controller.change_priority(task.id, args[1])
        else:
            controller.notifier.error("Usage: priority <level> | priority <n> <level>")
    elif command == "filter":
        controller.set_filter(rest)
    elif command == "theme":
        controller.toggle_theme()
    elif command == "refresh":
        await controller.load()
    else:
        controller.notifier.error(f"Unknown command: {command}")


async def main() -> None:
    """交互式主循环"""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="taskboard console client")
    parser.add_argument("--base-url", default=settings.API_BASE_URL)
    parser.add_argument("--state-file", default=settings.CLIENT_STATE_PATH)
    args = parser.parse_args()

    setup_logging(settings)

    print("=" * 60)
    print("  taskboard 控制台")
    print("  命令: add / done / del / priority / filter / theme / refresh / /quit")
    print("=" * 60)

    pt_session = PromptSession()
    async with TaskApiClient(base_url=args.base_url) as api:
        controller = TaskController(
            api=api,
            notifier=ConsoleNotifier(),
            theme_store=ThemeStore(args.state_file),
        )
        await controller.load()

        while True:
            print()
            print(render_view(controller.tasks, controller.state))
            try:
                line = (await pt_session.prompt_async("> ")).strip()
            except (EOFError, KeyboardInterrupt):
                print("\n再见！")
                break

            if not line:
                continue
            if line == "/quit":
                print("再见！")
                break

            await handle_command(controller, line)


if __name__ == "__main__":
    asyncio.run(main())
