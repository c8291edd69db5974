"""
Gestion des rôles utilisateur pour l'autorisation.

Hiérarchie: ADMIN > GUIDE > USER > GUEST. Un rôle satisfait toute exigence de niveau inférieur ou
égal.
"""

from diveatlas.domain.entities import ROLE_LEVELS, Role, User
from diveatlas.domain.errors import PermissionDenied


def has_role(user: User | None, role: Role) -> bool:
    """Indique si `user` atteint au moins le niveau `role` (un invité n'atteint que GUEST)."""
    level = ROLE_LEVELS[user.role] if user else ROLE_LEVELS[Role.GUEST]
    return level >= ROLE_LEVELS[role]


def require_role(user: User | None, role: Role):
    """
    Vérifie qu'un utilisateur possède au moins le rôle demandé.

    Raises:
        PermissionDenied: Si le rôle de l'utilisateur est insuffisant.
    """
    if not has_role(user, role):
        raise PermissionDenied(f"{role.value} role required")
