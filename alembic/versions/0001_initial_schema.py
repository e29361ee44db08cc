"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

USER_ROLES = ('admin', 'pm', 'ra', 'finance')


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=True),
        sa.Column('role', sa.Enum(*USER_ROLES, name='user_role'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('must_change_password', sa.Boolean(), nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('client_organizations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('industry', sa.String(length=255), nullable=True),
        sa.Column('main_pm_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('total_cu_used', sa.Numeric(10, 2), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_client_organizations_id', 'client_organizations', ['id'])
    op.create_index('ix_client_organizations_name', 'client_organizations', ['name'])

    op.create_table('client_pocs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.Integer(),
                  sa.ForeignKey('client_organizations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('job_title', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_client_pocs_id', 'client_pocs', ['id'])
    op.create_index('ix_client_pocs_organization_id', 'client_pocs', ['organization_id'])

    op.create_table('projects',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('project_overview', sa.Text(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('industry', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('client_organization_id', sa.Integer(),
                  sa.ForeignKey('client_organizations.id', ondelete='SET NULL'), nullable=True),
        sa.Column('client_name', sa.String(length=255), nullable=False),
        sa.Column('client_poc_name', sa.String(length=255), nullable=True),
        sa.Column('client_poc_email', sa.String(length=255), nullable=True),
        sa.Column('budget', sa.Numeric(10, 2), nullable=True),
        sa.Column('start_date', sa.DateTime(), nullable=True),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('created_by_pm_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('assigned_ra_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('total_cu_used', sa.Numeric(10, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_projects_id', 'projects', ['id'])
    op.create_index('ix_projects_client_organization_id', 'projects', ['client_organization_id'])

    op.create_table('experts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('linkedin_url', sa.String(length=500), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('region', sa.String(length=100), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('timezone', sa.String(length=100), nullable=True),
        sa.Column('expertise', sa.String(length=255), nullable=False),
        sa.Column('areas_of_expertise', sa.JSON(), nullable=True),
        sa.Column('industry', sa.String(length=255), nullable=False),
        sa.Column('company', sa.String(length=255), nullable=True),
        sa.Column('job_title', sa.String(length=255), nullable=True),
        sa.Column('years_of_experience', sa.Integer(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('work_history', sa.Text(), nullable=True),
        sa.Column('employment_history', sa.JSON(), nullable=True),
        sa.Column('can_consult_in_english', sa.Boolean(), nullable=False),
        sa.Column('hourly_rate', sa.Numeric(10, 2), nullable=True),
        sa.Column('currency', sa.String(length=10), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('terms_accepted', sa.Boolean(), nullable=False),
        sa.Column('lgpd_accepted', sa.Boolean(), nullable=False),
        sa.Column('sourced_by_ra_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('sourced_at', sa.DateTime(), nullable=True),
        sa.Column('recruited_by', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_experts_id', 'experts', ['id'])
    op.create_index('ix_experts_email', 'experts', ['email'], unique=True)
    op.create_index('ix_experts_sourced_by_ra_id', 'experts', ['sourced_by_ra_id'])

    op.create_table('vetting_questions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('question', sa.Text(), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('is_required', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_vetting_questions_id', 'vetting_questions', ['id'])
    op.create_index('ix_vetting_questions_project_id', 'vetting_questions', ['project_id'])

    op.create_table('project_experts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('expert_id', sa.Integer(), sa.ForeignKey('experts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('invitation_status', sa.String(length=50), nullable=False),
        sa.Column('pipeline_status', sa.String(length=50), nullable=True),
        sa.Column('invitation_token', sa.String(length=255), nullable=True),
        sa.Column('assigned_at', sa.DateTime(), nullable=False),
        sa.Column('invited_at', sa.DateTime(), nullable=True),
        sa.Column('opened_at', sa.DateTime(), nullable=True),
        sa.Column('responded_at', sa.DateTime(), nullable=True),
        sa.Column('selected_at', sa.DateTime(), nullable=True),
        sa.Column('scheduled_at', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('vq_answers', sa.JSON(), nullable=True),
        sa.Column('availability_note', sa.Text(), nullable=True),
        sa.Column('decline_reason', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('angles', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('project_id', 'expert_id', name='uq_project_expert')
    )
    op.create_index('ix_project_experts_id', 'project_experts', ['id'])
    op.create_index('ix_project_experts_project_id', 'project_experts', ['project_id'])
    op.create_index('ix_project_experts_expert_id', 'project_experts', ['expert_id'])
    op.create_index('ix_project_experts_invitation_token', 'project_experts', ['invitation_token'], unique=True)

    op.create_table('call_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('project_expert_id', sa.Integer(),
                  sa.ForeignKey('project_experts.id', ondelete='SET NULL'), nullable=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('expert_id', sa.Integer(), sa.ForeignKey('experts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('call_date', sa.DateTime(), nullable=True),
        sa.Column('scheduled_start_time', sa.DateTime(), nullable=True),
        sa.Column('scheduled_end_time', sa.DateTime(), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('actual_duration_minutes', sa.Integer(), nullable=True),
        sa.Column('cu_used', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('zoom_link', sa.String(length=500), nullable=True),
        sa.Column('recording_url', sa.String(length=500), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_call_records_id', 'call_records', ['id'])
    op.create_index('ix_call_records_project_expert_id', 'call_records', ['project_expert_id'])
    op.create_index('ix_call_records_project_id', 'call_records', ['project_id'])
    op.create_index('ix_call_records_expert_id', 'call_records', ['expert_id'])

    op.create_table('expert_invitation_links',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('token', sa.String(length=255), nullable=False),
        sa.Column('invite_type', sa.String(length=20), nullable=False),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=True),
        sa.Column('ra_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('expert_id', sa.Integer(), sa.ForeignKey('experts.id', ondelete='CASCADE'), nullable=True),
        sa.Column('project_expert_id', sa.Integer(),
                  sa.ForeignKey('project_experts.id', ondelete='CASCADE'), nullable=True),
        sa.Column('recruited_by', sa.String(length=255), nullable=True),
        sa.Column('created_by_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.Column('used_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_expert_invitation_links_id', 'expert_invitation_links', ['id'])
    op.create_index('ix_expert_invitation_links_token', 'expert_invitation_links', ['token'], unique=True)
    op.create_index('ix_expert_invitation_links_project_id', 'expert_invitation_links', ['project_id'])

    op.create_table('usage_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('expert_id', sa.Integer(), sa.ForeignKey('experts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('call_date', sa.DateTime(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('credits_used', sa.Numeric(10, 2), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_usage_records_id', 'usage_records', ['id'])
    op.create_index('ix_usage_records_project_id', 'usage_records', ['project_id'])
    op.create_index('ix_usage_records_expert_id', 'usage_records', ['expert_id'])

    op.create_table('project_activities',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('activity_type', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_project_activities_id', 'project_activities', ['id'])
    op.create_index('ix_project_activities_project_id', 'project_activities', ['project_id'])


def downgrade() -> None:
    # Children first
    for table in (
        'project_activities', 'usage_records', 'expert_invitation_links', 'call_records',
        'project_experts', 'vetting_questions', 'experts', 'projects', 'client_pocs',
        'client_organizations', 'users',
    ):
        op.drop_table(table)
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
