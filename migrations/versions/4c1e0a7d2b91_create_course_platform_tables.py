"""create course platform tables

Revision ID: 4c1e0a7d2b91
Revises:
Create Date: 2026-10-18 09:12:44.102355

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = '4c1e0a7d2b91'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(with_updated: bool = True):
    columns = [sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True)]
    if with_updated:
        columns.append(sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True))
    return columns


def _module_content(name: str, *columns):
    op.create_table(
        name,
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('module_id', sa.Integer(), nullable=False),
        *columns,
        sa.Column('order', sa.Integer(), nullable=False),
        *_timestamps(with_updated=False),
        sa.ForeignKeyConstraint(['module_id'], ['modules.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f(f'ix_{name}_id'), name, ['id'], unique=False)
    op.create_index(op.f(f'ix_{name}_module_id'), name, ['module_id'], unique=False)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('student', 'admin', name='roleenum'), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_full_name'), 'users', ['full_name'], unique=False)

    op.create_table(
        'courses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('modality', sa.String(), nullable=True),
        sa.Column('duration', sa.String(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.Enum('draft', 'published', 'archived', name='coursestatusenum'), nullable=False),
        sa.Column('image', sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_courses_id'), 'courses', ['id'], unique=False)
    op.create_index(op.f('ix_courses_title'), 'courses', ['title'], unique=False)

    op.create_table(
        'modules',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_modules_id'), 'modules', ['id'], unique=False)
    op.create_index(op.f('ix_modules_course_id'), 'modules', ['course_id'], unique=False)

    _module_content('lessons', sa.Column('title', sa.String(), nullable=False))
    _module_content(
        'videos',
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('url', sa.String(), nullable=False),
    )
    _module_content(
        'live_sessions',
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('meeting_link', sa.String(), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('password', sa.String(), nullable=True),
    )
    _module_content(
        'quizzes',
        sa.Column('question', sa.String(), nullable=False),
        sa.Column('options', sa.JSON(), nullable=False),
        sa.Column('correct_answer', sa.String(), nullable=False),
        sa.Column('min_score', sa.Numeric(5, 2), nullable=False),
    )
    _module_content(
        'uploads',
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('instructions', sa.String(), nullable=True),
        sa.Column('url', sa.String(), nullable=False),
    )
    _module_content(
        'forums',
        sa.Column('course_id', sa.Integer(), sa.ForeignKey('courses.id'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
    )
    op.create_index(op.f('ix_forums_course_id'), 'forums', ['course_id'], unique=False)

    op.create_table(
        'enrollments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('active', 'inactive', 'cancelled', name='enrollmentstatusenum'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_enrollments_id'), 'enrollments', ['id'], unique=False)
    op.create_index(op.f('ix_enrollments_user_id'), 'enrollments', ['user_id'], unique=False)
    op.create_index(op.f('ix_enrollments_course_id'), 'enrollments', ['course_id'], unique=False)
    op.create_index(
        'uq_enrollments_active_user_course', 'enrollments', ['user_id', 'course_id'],
        unique=True, postgresql_where=sa.text("status = 'active'")
    )

    op.create_table(
        'progress_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('module_id', sa.Integer(), nullable=False),
        sa.Column('lesson_id', sa.Integer(), nullable=False),
        sa.Column('watched', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ),
        sa.ForeignKeyConstraint(['module_id'], ['modules.id'], ),
        sa.ForeignKeyConstraint(['lesson_id'], ['lessons.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'course_id', 'module_id', 'lesson_id', name='uq_progress_user_lesson')
    )
    op.create_index(op.f('ix_progress_records_id'), 'progress_records', ['id'], unique=False)
    op.create_index(op.f('ix_progress_records_user_id'), 'progress_records', ['user_id'], unique=False)
    op.create_index(op.f('ix_progress_records_course_id'), 'progress_records', ['course_id'], unique=False)

    op.create_table(
        'quiz_responses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('quiz_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('answer', sa.String(), nullable=False),
        sa.Column('is_correct', sa.Boolean(), nullable=False),
        sa.Column('score', sa.Numeric(5, 2), nullable=False),
        *_timestamps(with_updated=False),
        sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_quiz_responses_id'), 'quiz_responses', ['id'], unique=False)
    op.create_index(op.f('ix_quiz_responses_quiz_id'), 'quiz_responses', ['quiz_id'], unique=False)
    op.create_index(op.f('ix_quiz_responses_user_id'), 'quiz_responses', ['user_id'], unique=False)

    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('status', sa.Enum('pending', 'submitted', 'reviewed', name='taskstatusenum'), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tasks_id'), 'tasks', ['id'], unique=False)
    op.create_index(op.f('ix_tasks_course_id'), 'tasks', ['course_id'], unique=False)

    op.create_table(
        'task_responses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('task_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('url', sa.String(), nullable=False),
        *_timestamps(with_updated=False),
        sa.ForeignKeyConstraint(['task_id'], ['tasks.id'], ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_task_responses_id'), 'task_responses', ['id'], unique=False)
    op.create_index(op.f('ix_task_responses_task_id'), 'task_responses', ['task_id'], unique=False)
    op.create_index(op.f('ix_task_responses_user_id'), 'task_responses', ['user_id'], unique=False)

    op.create_table(
        'course_tests',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('status', sa.Enum('pending', 'in_progress', 'completed', name='courseteststatusenum'), nullable=False),
        sa.Column('score', sa.Numeric(5, 2), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_course_tests_id'), 'course_tests', ['id'], unique=False)
    op.create_index(op.f('ix_course_tests_course_id'), 'course_tests', ['course_id'], unique=False)

    op.create_table(
        'grades',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('value', sa.Numeric(5, 2), nullable=False),
        *_timestamps(with_updated=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_grades_id'), 'grades', ['id'], unique=False)
    op.create_index(op.f('ix_grades_user_id'), 'grades', ['user_id'], unique=False)
    op.create_index(op.f('ix_grades_course_id'), 'grades', ['course_id'], unique=False)


def downgrade() -> None:
    for table in (
        'grades', 'course_tests', 'task_responses', 'tasks', 'quiz_responses', 'progress_records',
        'enrollments', 'forums', 'uploads', 'quizzes', 'live_sessions', 'videos',
        'lessons', 'modules', 'courses', 'users',
    ):
        op.drop_table(table)
    for enum_name in ('courseteststatusenum', 'taskstatusenum', 'enrollmentstatusenum', 'coursestatusenum', 'roleenum'):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
