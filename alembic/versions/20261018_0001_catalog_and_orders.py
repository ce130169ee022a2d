"""courses, lessons and orders tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261018_0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'courses',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('subtitle', sa.String(length=300), nullable=True),
        sa.Column(
            'price', sa.Numeric(10, 2), nullable=False, server_default='0'
        ),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('thumbnail_url', sa.String(length=2048), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('level', sa.String(length=50), nullable=True),
        sa.Column(
            'published', sa.Boolean(), nullable=False,
            server_default=sa.false()
        ),
        sa.Column(
            'created_at', sa.DateTime(), nullable=False,
            server_default=sa.text('CURRENT_TIMESTAMP')
        ),
        sa.Column(
            'updated_at', sa.DateTime(), nullable=False,
            server_default=sa.text('CURRENT_TIMESTAMP')
        ),
    )
    op.create_index('ix_courses_published', 'courses', ['published'])

    op.create_table(
        'lessons',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'course_id',
            sa.Integer(),
            sa.ForeignKey('courses.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('video_url', sa.String(length=2048), nullable=True),
        sa.Column(
            'order_index', sa.Integer(), nullable=False, server_default='0'
        ),
        sa.Column(
            'free_preview', sa.Boolean(), nullable=False,
            server_default=sa.false()
        ),
        sa.Column(
            'created_at', sa.DateTime(), nullable=False,
            server_default=sa.text('CURRENT_TIMESTAMP')
        ),
    )
    op.create_index('ix_lessons_course_id', 'lessons', ['course_id'])
    op.create_index(
        'ix_lessons_course_order', 'lessons', ['course_id', 'order_index']
    )

    # course_id is a plain column so orders survive course deletion
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('course_title', sa.String(length=200), nullable=False),
        sa.Column('buyer_name', sa.String(length=200), nullable=False),
        sa.Column('buyer_email', sa.String(length=320), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column(
            'status', sa.String(length=32), nullable=False,
            server_default='completed'
        ),
        sa.Column(
            'created_at', sa.DateTime(), nullable=False,
            server_default=sa.text('CURRENT_TIMESTAMP')
        ),
    )
    op.create_index('ix_orders_course_id', 'orders', ['course_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])


def downgrade() -> None:
    op.drop_index('ix_orders_status', table_name='orders')
    op.drop_index('ix_orders_course_id', table_name='orders')
    op.drop_table('orders')
    op.drop_index('ix_lessons_course_order', table_name='lessons')
    op.drop_index('ix_lessons_course_id', table_name='lessons')
    op.drop_table('lessons')
    op.drop_index('ix_courses_published', table_name='courses')
    op.drop_table('courses')
