"""
Initial schema: accounts, verification codes and dashboard collections
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '20261001'
down_revision = None
branch_labels = None
depends_on = None

JSON_DOCUMENT = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(28), primary_key=True),
        sa.Column('email', sa.String(256), nullable=False),
        sa.Column('display_name', sa.String, nullable=False, server_default=''),
        sa.Column('first_name', sa.String, nullable=False, server_default=''),
        sa.Column('last_name', sa.String, nullable=False, server_default=''),
        sa.Column('phone_number', sa.String, nullable=False, server_default=''),
        sa.Column('address', sa.String, nullable=False, server_default=''),
        sa.Column('location', sa.String, nullable=False, server_default=''),
        sa.Column('photo_url', sa.String, nullable=True),
        sa.Column('profile_complete', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('auth_provider', sa.String(16), nullable=False),
        sa.Column('user_type', sa.String(16), nullable=True),
        sa.Column('categories', JSON_DOCUMENT, nullable=True),
        sa.Column('role', sa.String(16), nullable=False, server_default='USER'),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('google_id', sa.String(64), nullable=True, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_user_type', 'users', ['user_type'])

    op.create_table(
        'verification_codes',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(256), nullable=False),
        sa.Column('code', sa.String(6), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('used', sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_verification_codes_email', 'verification_codes', ['email'])
    op.create_index('idx_verification_codes_email_code_used', 'verification_codes', ['email', 'code', 'used'])

    op.create_table(
        'missions',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('title', sa.String, nullable=False),
        sa.Column('type', sa.String, nullable=True),
        sa.Column('brand_id', sa.String(28), nullable=False),
        sa.Column('brand', JSON_DOCUMENT, nullable=True),
        sa.Column('assigned_to', JSON_DOCUMENT, nullable=True),
        sa.Column('assigned_creators', JSON_DOCUMENT, nullable=True),
        sa.Column('deadline', sa.DateTime(timezone=True), nullable=True),
        sa.Column('budget', sa.Integer, nullable=False, server_default='0'),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_missions_brand_id', 'missions', ['brand_id'])

    op.create_table(
        'activities',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('user_id', sa.String(28), nullable=False),
        sa.Column('title', sa.String, nullable=False),
        sa.Column('description', sa.String, nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_activities_user_id', 'activities', ['user_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('user_id', sa.String(28), nullable=False),
        sa.Column('message', sa.String, nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('read', sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

    op.create_table(
        'dashboard_stats',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('user_type', sa.String(16), nullable=False),
        sa.Column('user_id', sa.String(28), nullable=False),
        sa.Column('stats', JSON_DOCUMENT, nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_dashboard_stats_user_id', 'dashboard_stats', ['user_id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('mission_id', sa.String(32), nullable=False),
        sa.Column('creator_id', sa.String(28), nullable=False),
        sa.Column('amount', sa.Integer, nullable=False),
        sa.Column('currency', sa.String(3), nullable=False, server_default='USD'),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_payments_mission_id', 'payments', ['mission_id'])
    op.create_index('ix_payments_creator_id', 'payments', ['creator_id'])


def downgrade():
    op.drop_index('ix_payments_creator_id', table_name='payments')
    op.drop_index('ix_payments_mission_id', table_name='payments')
    op.drop_table('payments')
    op.drop_index('ix_dashboard_stats_user_id', table_name='dashboard_stats')
    op.drop_table('dashboard_stats')
    op.drop_index('ix_notifications_user_id', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_activities_user_id', table_name='activities')
    op.drop_table('activities')
    op.drop_index('ix_missions_brand_id', table_name='missions')
    op.drop_table('missions')
    op.drop_index('idx_verification_codes_email_code_used', table_name='verification_codes')
    op.drop_index('ix_verification_codes_email', table_name='verification_codes')
    op.drop_table('verification_codes')
    op.drop_index('ix_users_user_type', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
