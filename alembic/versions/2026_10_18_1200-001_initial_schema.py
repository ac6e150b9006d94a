"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-18 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY, JSONB

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _catalog_columns() -> list[sa.Column]:
    """id, soft-delete flag, owner and timestamps shared by every catalog table."""
    return [
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_by', sa.String(length=100), nullable=False, server_default='system'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    # Create genres table
    op.create_table(
        'genres',
        *_catalog_columns(),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('tags', ARRAY(sa.String()), nullable=False, server_default='{}'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_genres_is_active'), 'genres', ['is_active'], unique=False)
    op.create_index('uq_genres_name_lower', 'genres', [sa.text('lower(name)')], unique=True)

    # Create directors table
    op.create_table(
        'directors',
        *_catalog_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('biography', sa.Text(), nullable=False, server_default=''),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('nationality', sa.String(length=50), nullable=True),
        sa.Column('awards', JSONB(), nullable=False, server_default='[]'),
        sa.Column('social_media', JSONB(), nullable=False, server_default='{}'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_directors_is_active'), 'directors', ['is_active'], unique=False)
    op.create_index(op.f('ix_directors_nationality'), 'directors', ['nationality'], unique=False)
    op.create_index('uq_directors_name_lower', 'directors', [sa.text('lower(name)')], unique=True)

    # Create producers table
    op.create_table(
        'producers',
        *_catalog_columns(),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('founded_year', sa.Integer(), nullable=True),
        sa.Column('country', sa.String(length=50), nullable=False),
        sa.Column('headquarters', JSONB(), nullable=False, server_default='{}'),
        sa.Column('contact', JSONB(), nullable=False, server_default='{}'),
        sa.Column('specialties', ARRAY(sa.String()), nullable=False, server_default='{}'),
        sa.Column('budget', JSONB(), nullable=False, server_default='{"currency": "USD", "range": "medium"}'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_producers_is_active'), 'producers', ['is_active'], unique=False)
    op.create_index(op.f('ix_producers_country'), 'producers', ['country'], unique=False)
    op.create_index('uq_producers_name_lower', 'producers', [sa.text('lower(name)')], unique=True)

    # Create types table
    op.create_table(
        'types',
        *_catalog_columns(),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('format', sa.String(length=50), nullable=False, server_default='Único'),
        sa.Column('duration', JSONB(), nullable=False, server_default='{}'),
        sa.Column('characteristics', ARRAY(sa.String()), nullable=False, server_default='{}'),
        sa.Column('platforms', ARRAY(sa.String()), nullable=False, server_default='{}'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_types_is_active'), 'types', ['is_active'], unique=False)
    op.create_index(op.f('ix_types_category'), 'types', ['category'], unique=False)
    op.create_index('uq_types_name_lower', 'types', [sa.text('lower(name)')], unique=True)

    # Create media table
    op.create_table(
        'media',
        *_catalog_columns(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('original_title', sa.String(length=200), nullable=True),
        sa.Column('synopsis', sa.Text(), nullable=False),
        sa.Column('release_date', sa.Date(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('type_id', sa.String(length=36), nullable=False),
        sa.Column('director_id', sa.String(length=36), nullable=False),
        sa.Column('producer_id', sa.String(length=36), nullable=False),
        sa.Column('rating', JSONB(), nullable=False, server_default='{}'),
        sa.Column('average_rating', sa.Float(), nullable=True),
        sa.Column('cast', JSONB(), nullable=False, server_default='[]'),
        sa.Column('crew', JSONB(), nullable=False, server_default='[]'),
        sa.Column('technical', JSONB(), nullable=False, server_default='{}'),
        sa.Column('series_info', JSONB(), nullable=True),
        sa.Column('poster', sa.String(length=500), nullable=True),
        sa.Column('trailer', sa.String(length=500), nullable=True),
        sa.Column('tags', ARRAY(sa.String()), nullable=False, server_default='{}'),
        sa.ForeignKeyConstraint(['type_id'], ['types.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['director_id'], ['directors.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['producer_id'], ['producers.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_media_is_active'), 'media', ['is_active'], unique=False)
    op.create_index(op.f('ix_media_release_date'), 'media', ['release_date'], unique=False)
    op.create_index(op.f('ix_media_average_rating'), 'media', ['average_rating'], unique=False)
    op.create_index(op.f('ix_media_type_id'), 'media', ['type_id'], unique=False)
    op.create_index(op.f('ix_media_director_id'), 'media', ['director_id'], unique=False)
    op.create_index(op.f('ix_media_producer_id'), 'media', ['producer_id'], unique=False)
    # Titles are unique among active media only
    op.create_index(
        'uq_media_title_lower_active',
        'media',
        [sa.text('lower(title)')],
        unique=True,
        postgresql_where=sa.text('is_active'),
    )

    # Create media_genres association table
    op.create_table(
        'media_genres',
        sa.Column('media_id', sa.String(length=36), nullable=False),
        sa.Column('genre_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['media_id'], ['media.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['genre_id'], ['genres.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('media_id', 'genre_id')
    )
    op.create_index(op.f('ix_media_genres_genre_id'), 'media_genres', ['genre_id'], unique=False)

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='user'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('avatar', sa.String(length=500), nullable=False, server_default=''),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)
    op.create_index(op.f('ix_users_is_active'), 'users', ['is_active'], unique=False)


def downgrade() -> None:
    op.drop_table('users')
    op.drop_table('media_genres')
    op.drop_table('media')
    op.drop_table('types')
    op.drop_table('producers')
    op.drop_table('directors')
    op.drop_table('genres')
