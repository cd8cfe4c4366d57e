"""Initial schema: users, sessions, results, environments, custom forms

Revision ID: 001_initial_schema
Revises: 000_create_trigger_function
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = '000_create_trigger_function'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('username', sa.Text, nullable=False, unique=True),
        sa.Column('password_hash', sa.Text, nullable=False),
        sa.Column('full_name', sa.Text, nullable=False),
        sa.Column('role', sa.String(32), nullable=False, server_default='technician',
                 comment="technician, support_center or super_admin"),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_check_constraint(
        'chk_users_role',
        'users',
        "role IN ('technician', 'support_center', 'super_admin')"
    )
    op.execute("""
        CREATE TRIGGER users_set_updated_at
        BEFORE UPDATE ON users
        FOR EACH ROW EXECUTE FUNCTION set_updated_at()
    """)

    op.create_table('test_sessions',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('service_type', sa.String(32), nullable=False, server_default='electrical'),
        sa.Column('test_date', sa.String(10), nullable=False),
        sa.Column('technician_name', sa.Text, nullable=False),
        sa.Column('client_name', sa.Text, nullable=False),
        sa.Column('site_contact', sa.Text, nullable=False),
        sa.Column('address', sa.Text, nullable=False),
        sa.Column('country', sa.String(32), nullable=False),
        sa.Column('starting_asset_number', sa.Integer, nullable=True),
        sa.Column('technician_licensed', sa.Boolean, nullable=True),
        sa.Column('compliance_standard', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_check_constraint(
        'chk_test_sessions_service_type',
        'test_sessions',
        "service_type IN ('electrical', 'emergency_exit_light', 'fire_testing')"
    )
    op.create_check_constraint(
        'chk_test_sessions_country',
        'test_sessions',
        "country IN ('australia', 'newzealand')"
    )
    op.create_index('idx_test_sessions_user', 'test_sessions', ['user_id'])

    op.create_table('test_results',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('session_id', sa.Integer, sa.ForeignKey('test_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('asset_number', sa.Text, nullable=False),
        sa.Column('item_name', sa.Text, nullable=False),
        sa.Column('item_type', sa.Text, nullable=False),
        sa.Column('location', sa.Text, nullable=False),
        sa.Column('classification', sa.Text, nullable=False),
        sa.Column('result', sa.String(8), nullable=False),
        sa.Column('frequency', sa.String(32), nullable=False),
        sa.Column('failure_reason', sa.Text, nullable=True),
        sa.Column('action_taken', sa.Text, nullable=True),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('photo_data', sa.Text, nullable=True, comment="Base64 encoded photo"),
        sa.Column('vision_inspection', sa.Boolean, server_default=sa.text('true')),
        sa.Column('electrical_test', sa.Boolean, server_default=sa.text('true')),

        # Emergency exit lighting
        sa.Column('maintenance_type', sa.Text, nullable=True),
        sa.Column('globe_type', sa.Text, nullable=True),
        sa.Column('discharge_test', sa.Boolean, nullable=True),
        sa.Column('switching_test', sa.Boolean, nullable=True),
        sa.Column('charging_test', sa.Boolean, nullable=True),
        sa.Column('manufacturer_info', sa.Text, nullable=True),
        sa.Column('installation_date', sa.Text, nullable=True),
        sa.Column('lux_test', sa.Boolean, nullable=True),
        sa.Column('lux_reading', sa.Text, nullable=True),
        sa.Column('lux_compliant', sa.Boolean, nullable=True),

        # Fire equipment
        sa.Column('equipment_type', sa.Text, nullable=True),
        sa.Column('extinguisher_type', sa.Text, nullable=True),
        sa.Column('size', sa.Text, nullable=True),
        sa.Column('weight', sa.Text, nullable=True),
        sa.Column('test_type', sa.Text, nullable=True),
        sa.Column('fire_visual_inspection', sa.Boolean, nullable=True),
        sa.Column('accessibility_check', sa.Boolean, nullable=True),
        sa.Column('signage_check', sa.Boolean, nullable=True),
        sa.Column('operational_test', sa.Boolean, nullable=True),
        sa.Column('pressure_test', sa.Boolean, nullable=True),
        sa.Column('push_button_test', sa.Boolean, nullable=True),
        sa.Column('injection_timed_test', sa.Boolean, nullable=True),

        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_check_constraint(
        'chk_test_results_result',
        'test_results',
        "result IN ('pass', 'fail')"
    )
    op.create_index('ix_test_results_session_id', 'test_results', ['session_id'])

    op.create_table('environments',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('service_type', sa.String(32), nullable=False),
        sa.Column('items', JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('idx_environments_user', 'environments', ['user_id'])

    op.create_table('custom_form_types',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text, nullable=False, unique=True),
        sa.Column('service_type', sa.String(32), nullable=False, server_default='electrical'),
        sa.Column('csv_data', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table('custom_form_items',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('form_type_id', sa.Integer, sa.ForeignKey('custom_form_types.id', ondelete='CASCADE'), nullable=False),
        sa.Column('code', sa.Text, nullable=False),
        sa.Column('item_name', sa.Text, nullable=False),
        sa.Column('position', sa.Integer, nullable=False, server_default='0'),
    )
    op.create_index('idx_custom_form_items_form', 'custom_form_items', ['form_type_id'])

    op.create_table('revoked_tokens',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('token_jti', sa.String(64), nullable=False, unique=True),
        sa.Column('user_id', sa.Integer, nullable=True),
        sa.Column('revoked_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_revoked_tokens_expires', 'revoked_tokens', ['expires_at'])


def downgrade():
    op.drop_index('idx_revoked_tokens_expires', 'revoked_tokens')
    op.drop_table('revoked_tokens')

    op.drop_index('idx_custom_form_items_form', 'custom_form_items')
    op.drop_table('custom_form_items')
    op.drop_table('custom_form_types')

    op.drop_index('idx_environments_user', 'environments')
    op.drop_table('environments')

    op.drop_index('ix_test_results_session_id', 'test_results')
    op.drop_table('test_results')

    op.drop_index('idx_test_sessions_user', 'test_sessions')
    op.drop_table('test_sessions')

    op.execute("DROP TRIGGER IF EXISTS users_set_updated_at ON users")
    op.drop_table('users')
