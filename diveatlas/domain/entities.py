"""
Entités du domaine métier.

Ce module définit les énumérations du catalogue de sites de plongée et l'identité de l'appelant
telle que la consomme le cœur (utilisateur de session).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from diveatlas.core.http_constants import (
    RATING_MAX,
    RATING_MIN,
    REVIEW_CONTENT_MAX_LEN,
    REVIEW_CONTENT_MIN_LEN,
    REVIEW_TITLE_MAX_LEN,
)


class Role(str, Enum):
    """Rôles applicatifs; `GUEST` désigne un appelant non authentifié."""

    ADMIN = "ADMIN"
    GUIDE = "GUIDE"
    USER = "USER"
    GUEST = "GUEST"


ROLE_LEVELS = {
    Role.GUEST: 0,
    Role.USER: 1,
    Role.GUIDE: 2,
    Role.ADMIN: 3,
}


class DiveType(str, Enum):
    SHORE = "SHORE"
    BOAT = "BOAT"
    WRECK = "WRECK"
    CAVE = "CAVE"
    DRIFT = "DRIFT"
    WALL = "WALL"
    REEF = "REEF"
    NIGHT = "NIGHT"
    TECHNICAL = "TECHNICAL"


class DifficultyLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    TECHNICAL = "TECHNICAL"


class CertificationLevel(str, Enum):
    OPEN_WATER = "OPEN_WATER"
    ADVANCED = "ADVANCED"
    RESCUE = "RESCUE"
    DIVEMASTER = "DIVEMASTER"
    INSTRUCTOR = "INSTRUCTOR"
    NITROX = "NITROX"
    DEEP = "DEEP"
    WRECK = "WRECK"
    CAVE = "CAVE"
    TECHNICAL = "TECHNICAL"


class CurrentCondition(str, Enum):
    NONE = "NONE"
    MILD = "MILD"
    MODERATE = "MODERATE"
    STRONG = "STRONG"


class MarineLifeType(str, Enum):
    FISH = "FISH"
    PLANT = "PLANT"
    CORAL = "CORAL"
    INVERTEBRATE = "INVERTEBRATE"
    MAMMAL = "MAMMAL"
    REPTILE = "REPTILE"


def parse_enum(enum_cls: type[Enum], raw: str | None):
    """Retourne le membre correspondant à `raw`, ou None si la valeur est inconnue."""
    if not raw:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        return None


class User(BaseModel):
    """Utilisateur de session (identité + rôle), tel que fourni par le fournisseur d'identité."""

    id: str
    email: str
    name: str | None = None
    role: Role = Role.USER
    avatar: str | None = None


class ReviewInput(BaseModel):
    """Contenu d'un avis soumis (création ou mise à jour)."""

    rating: int = Field(ge=RATING_MIN, le=RATING_MAX)
    title: str | None = Field(default=None, max_length=REVIEW_TITLE_MAX_LEN)
    content: str = Field(min_length=REVIEW_CONTENT_MIN_LEN, max_length=REVIEW_CONTENT_MAX_LEN)


class SiteInput(BaseModel):
    """Données de création d'un site (clés JSON en camelCase)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=2, max_length=120)
    description: str | None = None
    location: str = Field(min_length=2, max_length=255)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    depth_min: int | None = Field(default=None, ge=0, alias="depthMin")
    depth_max: int | None = Field(default=None, ge=0, alias="depthMax")
    dive_type: list[DiveType] = Field(default_factory=list, alias="diveType")
    difficulty: DifficultyLevel
    required_certification: list[CertificationLevel] = Field(
        default_factory=list, alias="requiredCertification"
    )
    current_conditions: CurrentCondition | None = Field(default=None, alias="currentConditions")
    drift_potential: bool | None = Field(default=None, alias="driftPotential")
    entry_point: str | None = Field(default=None, alias="entryPoint")
    visibility_min: int | None = Field(default=None, ge=0, alias="visibilityMin")
    visibility_max: int | None = Field(default=None, ge=0, alias="visibilityMax")
    temperature_min: int | None = Field(default=None, alias="temperatureMin")
    temperature_max: int | None = Field(default=None, alias="temperatureMax")
    marine_life: str | None = Field(default=None, alias="marineLife")
    emergency_info: str | None = Field(default=None, alias="emergencyInfo")
    average_dive_duration: int | None = Field(default=None, ge=0, alias="averageDiveDuration")
    hazards: str | None = None
    permits_fees: str | None = Field(default=None, alias="permitsFees")
    eco_data: dict[str, Any] | None = Field(default=None, alias="ecoData")

    @model_validator(mode="after")
    def _check_ranges(self) -> "SiteInput":
        for low, high in (
            ("depth_min", "depth_max"),
            ("visibility_min", "visibility_max"),
            ("temperature_min", "temperature_max"),
        ):
            lo, hi = getattr(self, low), getattr(self, high)
            if lo is not None and hi is not None and lo > hi:
                raise ValueError(f"{low} must not exceed {high}")
        return self
