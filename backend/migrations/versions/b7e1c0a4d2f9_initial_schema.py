"""initial schema

Revision ID: b7e1c0a4d2f9
Revises:
Create Date: 2026-10-18 00:00:00.000000

Creates the back-office schema:
- usuarios: seeded operators (hashed passwords)
- revendedores, clientes: people records
- campanias: marketing messages (one active at a time, enforced in code)
- productos: catalogue with stock and promotion triple
- ventas: append-only sales with JSON line items
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'b7e1c0a4d2f9'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'usuarios',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('usuario', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('nombre', sa.String(length=128), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_usuarios_usuario', 'usuarios', ['usuario'], unique=True)

    op.create_table(
        'revendedores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nombre', sa.String(length=255), nullable=False),
        sa.Column('telefono', sa.String(length=64), nullable=False),
        sa.Column('zona', sa.String(length=128), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('acepta_whatsapp', sa.Boolean(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )

    op.create_table(
        'campanias',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('titulo', sa.String(length=255), nullable=False),
        sa.Column('texto', sa.Text(), nullable=False),
        sa.Column('activa', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('creada_en', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_campanias_activa_creada', 'campanias', ['activa', 'creada_en'])

    # ============================================================================
    # productos: promotion triple (oferta_tipo, oferta_valor, oferta_etiqueta)
    # is written as a unit; cleared state is ('', NULL, '')
    # ============================================================================
    op.create_table(
        'productos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nombre', sa.String(length=255), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=False),
        sa.Column('precio', sa.Float(), nullable=False),
        sa.Column('categoria', sa.String(length=128), nullable=False),
        sa.Column('imagen_url', sa.String(length=512), nullable=False),
        sa.Column('colores', sa.JSON(), nullable=False),
        sa.Column('tamanos', sa.JSON(), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('oferta_tipo', sa.String(length=32), nullable=False, server_default=''),
        sa.Column('oferta_valor', sa.Float(), nullable=True),
        sa.Column('oferta_etiqueta', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('creado_en', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('actualizado_en', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_productos_activo', 'productos', ['activo'])

    op.create_table(
        'clientes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nombre', sa.String(length=255), nullable=False),
        sa.Column('telefono', sa.String(length=64), nullable=False),
        sa.Column('zona', sa.String(length=128), nullable=False),
        sa.Column('notas', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )

    # ============================================================================
    # ventas: ids of resellers/customers/products are plain integers, not
    # foreign keys; names are snapshots taken at sale time
    # ============================================================================
    op.create_table(
        'ventas',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('revendedor_id', sa.Integer(), nullable=True),
        sa.Column('revendedor_nombre', sa.String(length=255), nullable=False),
        sa.Column('fecha', sa.String(length=10), nullable=False),
        sa.Column('total', sa.Float(), nullable=False),
        sa.Column('comision_porcentaje', sa.Float(), nullable=False),
        sa.Column('comision_calculada', sa.Integer(), nullable=False),
        sa.Column('cliente_id', sa.Integer(), nullable=True),
        sa.Column('cliente', sa.String(length=255), nullable=False),
        sa.Column('detalle', sa.Text(), nullable=False),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column('producto_id', sa.Integer(), nullable=True),
        sa.Column('cantidad_producto', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_ventas_fecha', 'ventas', ['fecha'])
    op.create_index('ix_ventas_revendedor_id', 'ventas', ['revendedor_id'])
    op.create_index('ix_ventas_cliente_id', 'ventas', ['cliente_id'])


def downgrade():
    """Drop all tables (destructive operation)."""
    op.drop_table('ventas')
    op.drop_table('clientes')
    op.drop_table('productos')
    op.drop_table('campanias')
    op.drop_table('revendedores')
    op.drop_table('usuarios')
