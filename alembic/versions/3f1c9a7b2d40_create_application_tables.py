"""create profiles, user roles, applications, memberships and projects

Revision ID: 3f1c9a7b2d40
Revises:
Create Date: 2026-09-28 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c9a7b2d40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('class_year', sa.String(length=32), nullable=True),
        sa.Column('github_username', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=False)

    op.create_table(
        'user_roles',
        sa.Column('user_id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False, server_default='prospect'),
    )

    op.create_table(
        'applications',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('application_type', sa.String(length=16), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='pending'),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('class_year', sa.String(length=32), nullable=False),
        sa.Column('project_id', sa.Uuid(), nullable=True),
        sa.Column('class_id', sa.Uuid(), nullable=True),
        sa.Column('board_position', sa.String(length=120), nullable=True),
        sa.Column('project_role', sa.String(length=16), nullable=True),
        sa.Column('class_role', sa.String(length=16), nullable=True),
        sa.Column('why_join', sa.Text(), nullable=True),
        sa.Column('why_position', sa.Text(), nullable=True),
        sa.Column('relevant_experience', sa.Text(), nullable=True),
        sa.Column('other_commitments', sa.Text(), nullable=True),
        sa.Column('project_detail', sa.Text(), nullable=True),
        sa.Column('problem_solved', sa.Text(), nullable=True),
        sa.Column('previous_experience', sa.Text(), nullable=True),
        sa.Column('resume_url', sa.String(length=1024), nullable=True),
        sa.Column('transcript_url', sa.String(length=1024), nullable=True),
        sa.Column('reviewed_by', sa.Uuid(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_applications_user_id', 'applications', ['user_id'], unique=False)

    op.create_table(
        'project_members',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('project_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.UniqueConstraint('project_id', 'user_id', name='ux_project_members_project_id_user_id'),
    )
    op.create_index('ix_project_members_project_id', 'project_members', ['project_id'], unique=False)
    op.create_index('ix_project_members_user_id', 'project_members', ['user_id'], unique=False)

    op.create_table(
        'class_enrollments',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('class_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.UniqueConstraint('class_id', 'user_id', name='ux_class_enrollments_class_id_user_id'),
    )
    op.create_index('ix_class_enrollments_class_id', 'class_enrollments', ['class_id'], unique=False)
    op.create_index('ix_class_enrollments_user_id', 'class_enrollments', ['user_id'], unique=False)

    op.create_table(
        'projects',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('semester_code', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='pending'),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('repository_url', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('projects')
    op.drop_index('ix_class_enrollments_user_id', table_name='class_enrollments')
    op.drop_index('ix_class_enrollments_class_id', table_name='class_enrollments')
    op.drop_table('class_enrollments')
    op.drop_index('ix_project_members_user_id', table_name='project_members')
    op.drop_index('ix_project_members_project_id', table_name='project_members')
    op.drop_table('project_members')
    op.drop_index('ix_applications_user_id', table_name='applications')
    op.drop_table('applications')
    op.drop_table('user_roles')
    op.drop_index('ix_profiles_email', table_name='profiles')
    op.drop_table('profiles')
