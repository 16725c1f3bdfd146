"""Create users, properties, type-detail, image, review and transaction tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Every property has exactly one row in apartments, bungalows,
commercial_complexes or lands (matching properties.property_type); all
dependents cascade from properties.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _property_pk() -> list:
    return [
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('property_id'),
    ]


def _property_fk(table: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ['property_id'],
        ['properties.property_id'],
        name=f'fk_{table}_property_id',
        ondelete='CASCADE'
    )


def upgrade() -> None:
    """Create the listing tables."""
    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('user_id', name='pk_users'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'properties',
        sa.Column('property_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            'status',
            sa.Enum('available', 'rented', 'sold', name='property_status', create_constraint=True),
            nullable=False,
            server_default='available'
        ),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column(
            'property_type',
            sa.Enum('apartment', 'bungalow', 'commercial', 'land', name='property_type', create_constraint=True),
            nullable=False
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('property_id', name='pk_properties'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.user_id'], name='fk_properties_owner_id'),
    )
    op.create_index('ix_properties_owner_id', 'properties', ['owner_id'])
    op.create_index('ix_properties_status', 'properties', ['status'])
    op.create_index('ix_properties_property_type', 'properties', ['property_type'])

    op.create_table(
        'apartments',
        *_property_pk(),
        sa.Column('rooms', sa.Integer(), nullable=False),
        sa.Column('bathrooms', sa.Integer(), nullable=False),
        sa.Column('kitchen', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('carpet_area', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('super_built_up', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('floor_number', sa.Integer(), nullable=True),
        _property_fk('apartments'),
    )
    op.create_table(
        'bungalows',
        *_property_pk(),
        sa.Column('bedrooms', sa.Integer(), nullable=False),
        sa.Column('bathrooms', sa.Integer(), nullable=False),
        sa.Column('kitchen', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('garden', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('parking', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('total_area', sa.Numeric(precision=10, scale=2), nullable=False),
        _property_fk('bungalows'),
    )
    op.create_table(
        'commercial_complexes',
        *_property_pk(),
        sa.Column('floors', sa.Integer(), nullable=False),
        sa.Column('total_area', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('parking_space', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('lift_available', sa.Boolean(), nullable=False, server_default=sa.false()),
        _property_fk('commercial_complexes'),
    )
    op.create_table(
        'lands',
        *_property_pk(),
        sa.Column('area', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('zone', sa.String(length=100), nullable=True),
        _property_fk('lands'),
    )

    op.create_table(
        'property_images',
        sa.Column('image_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.String(length=500), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('image_id', name='pk_property_images'),
        _property_fk('property_images'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_property_images_property_id', 'property_images', ['property_id'])

    op.create_table(
        'reviews',
        sa.Column('review_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('review_id', name='pk_reviews'),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_reviews_rating_range'),
        _property_fk('reviews'),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], name='fk_reviews_user_id', ondelete='CASCADE'),
    )
    op.create_index('ix_reviews_property_id', 'reviews', ['property_id'])

    op.create_table(
        'transactions',
        sa.Column('transaction_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('buyer_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('date', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('transaction_id', name='pk_transactions'),
        _property_fk('transactions'),
        sa.ForeignKeyConstraint(['buyer_id'], ['users.user_id'], name='fk_transactions_buyer_id'),
    )
    op.create_index('ix_transactions_buyer_id', 'transactions', ['buyer_id'])
    op.create_index('ix_transactions_property_id', 'transactions', ['property_id'])


def downgrade() -> None:
    """Drop the listing tables, children first."""
    op.drop_index('ix_transactions_property_id', table_name='transactions')
    op.drop_index('ix_transactions_buyer_id', table_name='transactions')
    op.drop_table('transactions')
    op.drop_index('ix_reviews_property_id', table_name='reviews')
    op.drop_table('reviews')
    op.drop_index('ix_property_images_property_id', table_name='property_images')
    op.drop_table('property_images')
    for table in ('lands', 'commercial_complexes', 'bungalows', 'apartments'):
        op.drop_table(table)
    op.drop_index('ix_properties_property_type', table_name='properties')
    op.drop_index('ix_properties_status', table_name='properties')
    op.drop_index('ix_properties_owner_id', table_name='properties')
    op.drop_table('properties')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
