from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_create_owners_and_properties'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'owners',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('phone', sa.String(30), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())
    )
    op.create_index('uq_owners_email', 'owners', ['email'], unique=True)
    op.create_index('idx_owners_name', 'owners', ['name'])

    op.create_table(
        'properties',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('id_owner', sa.String(50), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('address', sa.String(200), nullable=False),
        sa.Column('price', sa.Numeric(18, 2), nullable=False),
        sa.Column('image', sa.String(2048), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())
    )
    op.create_index('uq_properties_name_owner', 'properties', ['name', 'id_owner'], unique=True)
    op.create_index('idx_properties_id_owner', 'properties', ['id_owner'])
    op.create_index('idx_properties_price', 'properties', ['price'])
    op.create_index('idx_properties_created_at', 'properties', ['created_at'])


def downgrade():
    op.drop_table('properties')
    op.drop_table('owners')
