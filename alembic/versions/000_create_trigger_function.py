"""Create set_updated_at trigger function

Revision ID: 000_create_trigger_function
Revises:
Create Date: 2026-10-18

Reusable trigger function that stamps updated_at on every row update.
"""
from alembic import op

# revision identifiers, used by Alembic.
revision = '000_create_trigger_function'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.execute("""
        CREATE OR REPLACE FUNCTION set_updated_at()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = CURRENT_TIMESTAMP;
            RETURN NEW;
        END;
        $$ language 'plpgsql';
    """)


def downgrade():
    # CASCADE drops dependent triggers
    op.execute("DROP FUNCTION IF EXISTS set_updated_at() CASCADE;")
