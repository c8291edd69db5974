"""
Routes d'authentification pour l'API.

Fournisseur d'identité minimal: inscription, connexion (jeton JWT portant identité et rôle) et
profil de l'utilisateur courant.
"""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from diveatlas.api.deps import get_container, get_current_user, get_session
from diveatlas.api.errors import conflict, unauthorized
from diveatlas.api.schemas import LoginPayload, SignupPayload, TokenResponse, UserResponse
from diveatlas.core.container import Container
from diveatlas.core.http_constants import HTTP_CREATED
from diveatlas.domain.auth import create_access_token, hash_password, verify_password
from diveatlas.domain.entities import User
from diveatlas.infra.repo.user_repo import EmailTaken, UserRepo

router = APIRouter(prefix="/auth", tags=["auth"])
log = structlog.get_logger(__name__)


@router.post("/signup", status_code=HTTP_CREATED, response_model=UserResponse)
def signup(p: SignupPayload, session: Session = Depends(get_session)):
    """Inscrit un nouvel utilisateur; le rôle est toujours USER."""
    repo = UserRepo(session)
    if repo.get_by_email(str(p.email)):
        raise conflict("Email already registered")
    try:
        user = repo.create(str(p.email), hash_password(p.password), name=p.name)
    except EmailTaken as err:
        raise conflict("Email already registered") from err
    session.commit()
    log.info("auth_signup", user_id=user.id)
    return UserResponse(id=user.id, email=user.email, name=user.name, role=user.role)


@router.post("/login", response_model=TokenResponse)
def login(
    p: LoginPayload,
    session: Session = Depends(get_session),
    container: Container = Depends(get_container),
):
    """Authentifie un utilisateur et retourne un token d'accès."""
    user = UserRepo(session).get_by_email(str(p.email))
    if not user or not verify_password(p.password, user.password_hash):
        log.info("auth_login_failed")
        raise unauthorized("Invalid credentials")
    settings = container.settings
    token = create_access_token(
        secret=settings.JWT_SECRET,
        alg=settings.JWT_ALG,
        expires_min=settings.JWT_EXPIRES_MIN,
        payload={
            "sub": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role.value,
        },
    )
    return TokenResponse(access_token=token)


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    """Profil de l'utilisateur authentifié."""
    return UserResponse(**user.model_dump())
