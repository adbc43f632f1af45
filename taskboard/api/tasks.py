"""
/tasks 任务接口：集合资源 + 单个资源

端点：
- GET    /tasks       — 全部任务
- POST   /tasks       — 创建任务（title 必填）
- PUT    /tasks/{id}  — 更新 completed / priority 任意子集
- DELETE /tasks/{id}  — 删除任务（幂等）

其余方法由路由层返回 405，错误响应统一为 {"message": ...}（见 api/errors.py）。
"""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.engine import get_db
from taskboard.tasks.schemas import MessageResponse, TaskCreate, TaskOut, TaskUpdate
from taskboard.tasks.store import TaskStore

router = APIRouter(prefix="/tasks", tags=["任务"])
log = structlog.get_logger()


@router.get("", response_model=list[TaskOut])
async def list_tasks(db: AsyncSession = Depends(get_db)):
    """返回全部任务"""
    tasks = await TaskStore(db).find_all()
    return [TaskOut.model_validate(t) for t in tasks]


@router.post("", response_model=TaskOut, status_code=201)
async def create_task(body: TaskCreate | None = None, db: AsyncSession = Depends(get_db)):
    """创建任务：缺少 title 返回 400"""
    body = body or TaskCreate()
    task = await TaskStore(db).create(body.title, body.priority)
    return TaskOut.model_validate(task)


@router.put("/{task_id}", response_model=TaskOut)
async def update_task(
    task_id: str,
    body: TaskUpdate | None = None,
    db: AsyncSession = Depends(get_db),
):
    """更新任务：只处理请求体中出现的 completed / priority"""
    patch = (body or TaskUpdate()).model_dump(exclude_none=True)
    task = await TaskStore(db).update_by_id(task_id, **patch)
    return TaskOut.model_validate(task)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(task_id: str, db: AsyncSession = Depends(get_db)):
    """删除任务：不存在的 id 同样返回成功"""
    await TaskStore(db).delete_by_id(task_id)
    return MessageResponse(message="Task deleted")
