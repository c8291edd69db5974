# Schémas Pydantic exposés par l'API (requêtes et réponses hors entités du domaine).

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from diveatlas.core.http_constants import PASSWORD_MIN_LEN
from diveatlas.domain.entities import Role


class SignupPayload(BaseModel):
    """Payload pour l'inscription d'un nouvel utilisateur (rôle USER)."""

    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LEN)
    name: str | None = Field(default=None, max_length=120)


class LoginPayload(BaseModel):
    """Payload pour la connexion d'un utilisateur."""

    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """Profil public du compte courant."""

    id: str
    email: str
    name: str | None = None
    role: Role
    avatar: str | None = None


class MarineLifeAssignment(BaseModel):
    """Remplacement des taxons associés à un site.

    Champs:
    - marineLifeIds: list[str] (liste complète; une liste vide retire toutes les associations)
    """

    model_config = ConfigDict(populate_by_name=True)

    marine_life_ids: list[str] = Field(alias="marineLifeIds")
