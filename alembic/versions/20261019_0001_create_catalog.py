# mypy: ignore-errors
"""
Migration Alembic initiale du catalogue de sites de plongée.

Crée les comptes, sites (et leurs types), avis, photos, favoris, le référentiel de faune marine et
les associations site <-> taxon, avec leurs contraintes d'unicité.
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None

ROLE = sa.Enum("ADMIN", "GUIDE", "USER", "GUEST", name="role")
DIFFICULTY = sa.Enum("BEGINNER", "INTERMEDIATE", "ADVANCED", "TECHNICAL", name="difficulty_level")
CURRENT = sa.Enum("NONE", "MILD", "MODERATE", "STRONG", name="current_condition")
DIVE_TYPE = sa.Enum(
    "SHORE", "BOAT", "WRECK", "CAVE", "DRIFT", "WALL", "REEF", "NIGHT", "TECHNICAL",
    name="dive_type",
)
MARINE_LIFE_TYPE = sa.Enum(
    "FISH", "PLANT", "CORAL", "INVERTEBRATE", "MAMMAL", "REPTILE", name="marine_life_type"
)


def _site_fk() -> sa.Column:
    return sa.Column(
        "dive_site_id",
        sa.String(length=32),
        sa.ForeignKey("dive_sites.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def upgrade() -> None:
    """Crée le schéma du catalogue."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=True),
        sa.Column("role", ROLE, nullable=False),
        sa.Column("avatar", sa.String(length=512), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "dive_sites",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False, index=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("depth_min", sa.Integer(), nullable=True),
        sa.Column("depth_max", sa.Integer(), nullable=True),
        sa.Column("difficulty", DIFFICULTY, nullable=False),
        sa.Column("required_certification", sa.JSON(), nullable=False),
        sa.Column("current_conditions", CURRENT, nullable=True),
        sa.Column("drift_potential", sa.Boolean(), nullable=True),
        sa.Column("entry_point", sa.Text(), nullable=True),
        sa.Column("visibility_min", sa.Integer(), nullable=True),
        sa.Column("visibility_max", sa.Integer(), nullable=True),
        sa.Column("temperature_min", sa.Integer(), nullable=True),
        sa.Column("temperature_max", sa.Integer(), nullable=True),
        sa.Column("marine_life", sa.Text(), nullable=True),
        sa.Column("emergency_info", sa.Text(), nullable=True),
        sa.Column("average_dive_duration", sa.Integer(), nullable=True),
        sa.Column("hazards", sa.Text(), nullable=True),
        sa.Column("permits_fees", sa.Text(), nullable=True),
        sa.Column("eco_data", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, index=True),
        sa.Column(
            "created_by_id", sa.String(length=32), sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "dive_site_types",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _site_fk(),
        sa.Column("dive_type", DIVE_TYPE, nullable=False),
        sa.UniqueConstraint("dive_site_id", "dive_type", name="uq_site_dive_type"),
    )
    op.create_table(
        "reviews",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "user_id",
            sa.String(length=32),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _site_fk(),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "dive_site_id", name="uq_review_user_site"),
    )
    op.create_table(
        "photos",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("url", sa.String(length=1024), nullable=False),
        sa.Column("caption", sa.String(length=255), nullable=True),
        sa.Column(
            "user_id",
            sa.String(length=32),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _site_fk(),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "favorites",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.String(length=32),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _site_fk(),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "dive_site_id", name="uq_favorite_user_site"),
    )
    op.create_table(
        "marine_life",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False, index=True),
        sa.Column("latin_name", sa.String(length=160), nullable=True),
        sa.Column("type", MARINE_LIFE_TYPE, nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
    )
    op.create_table(
        "dive_site_marine_life",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _site_fk(),
        sa.Column(
            "marine_life_id",
            sa.String(length=32),
            sa.ForeignKey("marine_life.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.UniqueConstraint("dive_site_id", "marine_life_id", name="uq_site_marine_life"),
    )


def downgrade() -> None:
    """Supprime le schéma du catalogue (ordre inverse des dépendances)."""
    for table in (
        "dive_site_marine_life",
        "marine_life",
        "favorites",
        "photos",
        "reviews",
        "dive_site_types",
        "dive_sites",
        "users",
    ):
        op.drop_table(table)
