"""create product package units

Revision ID: 001_create_product_package_units
Revises: 
Create Date: 2024-06-03 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers, used by Alembic.
revision = '001_create_product_package_units'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """
    Cria a tabela de unidades de embalagem com histórico por geração.
    Os índices únicos parciais só consideram linhas ativas: gerações
    encerradas podem repetir nomes e valores.
    """
    op.create_table(
        'product_package_units',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('product_id', sa.String(64), nullable=False),
        sa.Column('unit_name', sa.String(50), nullable=False),
        sa.Column('unit_value', sa.Integer(), nullable=False),
        sa.Column('is_base_unit', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('effective_from', sa.DateTime(timezone=True), nullable=False),
        sa.Column('effective_to', sa.DateTime(timezone=True), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('unit_value >= 1', name='ck_package_units_unit_value_positive'),
        sa.CheckConstraint('version >= 1', name='ck_package_units_version_positive'),
        sa.CheckConstraint(
            'effective_to IS NULL OR effective_to > effective_from',
            name='ck_package_units_effective_window',
        ),
    )
    op.create_index('ix_product_package_units_id', 'product_package_units', ['id'])
    op.create_index('ix_product_package_units_product_id', 'product_package_units', ['product_id'])
    op.create_index(
        'ix_package_units_product_window',
        'product_package_units',
        ['product_id', 'effective_from', 'effective_to'],
    )

    # Nomes, valores e unidade base únicos dentro da geração ativa
    op.create_index(
        'uq_package_units_active_name',
        'product_package_units',
        ['product_id', 'unit_name'],
        unique=True,
        postgresql_where=sa.text('is_active'),
    )
    op.create_index(
        'uq_package_units_active_value',
        'product_package_units',
        ['product_id', 'unit_value'],
        unique=True,
        postgresql_where=sa.text('is_active'),
    )
    op.create_index(
        'uq_package_units_active_base_unit',
        'product_package_units',
        ['product_id'],
        unique=True,
        postgresql_where=sa.text('is_active AND is_base_unit'),
    )

    # Uma linha por produto com geração ativa
    op.create_table(
        'product_package_unit_generations',
        sa.Column('product_id', sa.String(64), primary_key=True),
        sa.Column('effective_from', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )


def downgrade():
    """Remove as tabelas de unidades de embalagem"""
    op.drop_table('product_package_unit_generations')
    op.drop_index('uq_package_units_active_base_unit', table_name='product_package_units')
    op.drop_index('uq_package_units_active_value', table_name='product_package_units')
    op.drop_index('uq_package_units_active_name', table_name='product_package_units')
    op.drop_index('ix_package_units_product_window', table_name='product_package_units')
    op.drop_index('ix_product_package_units_product_id', table_name='product_package_units')
    op.drop_index('ix_product_package_units_id', table_name='product_package_units')
    op.drop_table('product_package_units')
