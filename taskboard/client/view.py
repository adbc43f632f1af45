"""
控制台视图：把过滤后的任务列表渲染成文本

渲染只读取传入的任务缓存与 ViewState，不持有任何状态。
"""

from taskboard.client.controller import FILTERS, ViewState, filter_tasks
from taskboard.tasks.schemas import TaskOut

PRIORITY_MARKERS = {"high": "🔴", "medium": "🟡", "low": "🟢"}
EMPTY_MESSAGE = "No tasks found in this category."

# 亮/暗主题下的配色（ANSI）
_PALETTE = {
    False: {"title": "\033[1;34m", "done": "\033[90m", "text": "\033[30m", "dim": "\033[37m"},
    True: {"title": "\033[1;33m", "done": "\033[90m", "text": "\033[97m", "dim": "\033[90m"},
}
_RESET = "\033[0m"


def _filter_bar(state: ViewState) -> str:
    return "  ".join(f"[{f.capitalize()}]" if f == state.filter else f.capitalize() for f in FILTERS)


def render_task(index: int, task: TaskOut, dark_mode: bool = False) -> str:
    colors = _PALETTE[dark_mode]
    check = "✔" if task.completed else "⌛"
    marker = PRIORITY_MARKERS.get(task.priority, PRIORITY_MARKERS["low"])
    if task.completed:
        title = f"{colors['done']}\033[9m{task.title}{_RESET}"
    else:
        title = f"{colors['text']}{task.title}{_RESET}"
    return f"{index:>3}. {check} {title} {marker}"


def render_view(tasks: list[TaskOut], state: ViewState) -> str:
    """渲染标题、过滤器栏、当前优先级和过滤后的任务列表"""
    colors = _PALETTE[state.dark_mode]
    visible = filter_tasks(tasks, state.filter)

    lines = [
        f"{colors['title']}📝 Task Manager{_RESET}",
        f"{colors['dim']}Filter: {_filter_bar(state)}   Priority: "
        f"{PRIORITY_MARKERS.get(state.priority, '')} {state.priority.capitalize()}{_RESET}",
    ]
    if not visible:
        lines.append(f"{colors['dim']}{EMPTY_MESSAGE}{_RESET}")
    else:
        lines.extend(render_task(i, task, state.dark_mode) for i, task in enumerate(visible, start=1))
    return "\n".join(lines)
