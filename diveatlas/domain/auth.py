"""
Identité de session: mots de passe et jetons JWT.

Le jeton porte l'identifiant du compte (`sub`), son email, son nom et son rôle. Un jeton expiré,
mal signé ou dont le contenu ne respecte pas `TokenData` est simplement considéré comme absent.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError
from passlib.context import CryptContext
from pydantic import BaseModel, EmailStr, ValidationError

from diveatlas.domain.entities import Role

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class TokenData(BaseModel):
    """Revendications d'un jeton de session."""

    sub: str
    email: EmailStr
    name: str | None = None
    role: Role = Role.USER


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Compare un mot de passe à son empreinte; une empreinte vide ne valide jamais."""
    return bool(password_hash) and pwd_context.verify(password, password_hash)


def create_access_token(
    secret: str, alg: str, expires_min: int, payload: dict[str, Any]
) -> str:
    """Signe `payload` en y ajoutant l'échéance `exp` (maintenant + `expires_min`)."""
    claims = {**payload, "exp": datetime.now(UTC) + timedelta(minutes=expires_min)}
    return jwt.encode(claims, secret, algorithm=alg)


def decode_token(token: str, secret: str, alg: str) -> TokenData | None:
    try:
        claims = jwt.decode(token, secret, algorithms=[alg])
        return TokenData.model_validate(claims)
    except (InvalidTokenError, ValidationError):
        return None
