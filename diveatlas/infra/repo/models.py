"""SQLAlchemy models for the dive-site catalog persistence layer."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship

from diveatlas.domain.entities import (
    CurrentCondition,
    DifficultyLevel,
    DiveType,
    MarineLifeType,
    Role,
)


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Classe de base pour tous les modèles SQLAlchemy."""

    metadata = MetaData()


class UserORM(Base):
    """Compte utilisateur (identité, rôle, profil public)."""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(120), nullable=True)
    role = Column(Enum(Role, name="role"), nullable=False, default=Role.USER)
    avatar = Column(String(512), nullable=True)
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    reviews = relationship("ReviewORM", back_populates="user")


class DiveSiteORM(Base):
    """Fiche d'un site de plongée."""

    __tablename__ = "dive_sites"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(120), nullable=False, index=True)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    depth_min = Column(Integer, nullable=True)
    depth_max = Column(Integer, nullable=True)
    difficulty = Column(Enum(DifficultyLevel, name="difficulty_level"), nullable=False)
    required_certification = Column(JSON, nullable=False, default=list)
    current_conditions = Column(Enum(CurrentCondition, name="current_condition"), nullable=True)
    drift_potential = Column(Boolean, nullable=True)
    entry_point = Column(Text, nullable=True)
    visibility_min = Column(Integer, nullable=True)
    visibility_max = Column(Integer, nullable=True)
    temperature_min = Column(Integer, nullable=True)
    temperature_max = Column(Integer, nullable=True)
    marine_life = Column(Text, nullable=True)
    emergency_info = Column(Text, nullable=True)
    average_dive_duration = Column(Integer, nullable=True)
    hazards = Column(Text, nullable=True)
    permits_fees = Column(Text, nullable=True)
    eco_data = Column(JSON, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_by_id = Column(String(32), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    created_by = relationship("UserORM")
    dive_type_tags = relationship(
        "DiveSiteTypeORM",
        cascade="all, delete-orphan",
        order_by="DiveSiteTypeORM.dive_type",
        lazy="selectin",
    )

    @property
    def dive_types(self) -> list[str]:
        return [t.dive_type.value for t in self.dive_type_tags]


class DiveSiteTypeORM(Base):
    """Étiquette de type de plongée rattachée à un site (une ligne par étiquette)."""

    __tablename__ = "dive_site_types"
    __table_args__ = (UniqueConstraint("dive_site_id", "dive_type", name="uq_site_dive_type"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    dive_site_id = Column(
        String(32), ForeignKey("dive_sites.id", ondelete="CASCADE"), nullable=False, index=True
    )
    dive_type = Column(Enum(DiveType, name="dive_type"), nullable=False)


class ReviewORM(Base):
    """Avis d'un utilisateur sur un site; au plus un par couple (utilisateur, site)."""

    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("user_id", "dive_site_id", name="uq_review_user_site"),)

    id = Column(String(32), primary_key=True, default=_new_id)
    rating = Column(Integer, nullable=False)
    title = Column(String(100), nullable=True)
    content = Column(Text, nullable=False)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    dive_site_id = Column(
        String(32), ForeignKey("dive_sites.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    user = relationship("UserORM", back_populates="reviews", lazy="joined")


class PhotoORM(Base):
    """Photo publiée par un utilisateur pour un site."""

    __tablename__ = "photos"

    id = Column(String(32), primary_key=True, default=_new_id)
    url = Column(String(1024), nullable=False)
    caption = Column(String(255), nullable=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    dive_site_id = Column(
        String(32), ForeignKey("dive_sites.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    user = relationship("UserORM", lazy="joined")


class FavoriteORM(Base):
    """Site marqué comme favori par un utilisateur."""

    __tablename__ = "favorites"
    __table_args__ = (UniqueConstraint("user_id", "dive_site_id", name="uq_favorite_user_site"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    dive_site_id = Column(
        String(32), ForeignKey("dive_sites.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class MarineLifeORM(Base):
    """Taxon de référence (faune et flore marines)."""

    __tablename__ = "marine_life"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(120), nullable=False, index=True)
    latin_name = Column(String(160), nullable=True)
    type = Column(Enum(MarineLifeType, name="marine_life_type"), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=True)


class DiveSiteMarineLifeORM(Base):
    """Association site <-> taxon, unique par couple."""

    __tablename__ = "dive_site_marine_life"
    __table_args__ = (
        UniqueConstraint("dive_site_id", "marine_life_id", name="uq_site_marine_life"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    dive_site_id = Column(
        String(32), ForeignKey("dive_sites.id", ondelete="CASCADE"), nullable=False, index=True
    )
    marine_life_id = Column(
        String(32), ForeignKey("marine_life.id", ondelete="CASCADE"), nullable=False
    )

    marine_life = relationship("MarineLifeORM", lazy="joined")
