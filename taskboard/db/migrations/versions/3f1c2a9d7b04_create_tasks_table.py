"""create_tasks_table

Revision ID: 3f1c2a9d7b04
Revises:
Create Date: 2026-10-19 10:12:08.417305
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from taskboard.config import get_settings


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b04'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SCHEMA = get_settings().DB_SCHEMA


def upgrade() -> None:
    op.create_table(
        'tasks',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False, comment='任务标题'),
        sa.Column('completed', sa.Boolean(), server_default=sa.false(), nullable=False, comment='是否完成'),
        sa.Column('priority', sa.String(length=8), server_default='low', nullable=False,
                  comment='优先级: low / medium / high'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(),
                  nullable=True, comment='创建时间（仅内部排序用）'),
        sa.CheckConstraint("priority IN ('low', 'medium', 'high')", name='ck_tasks_priority'),
        sa.CheckConstraint('length(title) > 0', name='ck_tasks_title_not_empty'),
        sa.PrimaryKeyConstraint('id'),
        schema=SCHEMA,
    )


def downgrade() -> None:
    op.drop_table('tasks', schema=SCHEMA)
