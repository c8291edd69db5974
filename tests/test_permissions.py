"""Tests de la hiérarchie des rôles."""

import pytest

from diveatlas.domain.entities import Role, User
from diveatlas.domain.errors import PermissionDenied
from diveatlas.domain.permissions import has_role, require_role


def _user(role: Role) -> User:
    return User(id="u1", email="u1@example.com", role=role)


def test_hierarchy():
    assert has_role(_user(Role.ADMIN), Role.GUIDE)
    assert has_role(_user(Role.GUIDE), Role.GUIDE)
    assert has_role(_user(Role.USER), Role.USER)
    assert not has_role(_user(Role.USER), Role.GUIDE)


def test_guest_only_reaches_guest():
    assert has_role(None, Role.GUEST)
    assert not has_role(None, Role.USER)


def test_require_role_raises_with_role_name():
    with pytest.raises(PermissionDenied) as exc:
        require_role(_user(Role.USER), Role.GUIDE)
    assert exc.value.message == "GUIDE role required"
    require_role(_user(Role.ADMIN), Role.GUIDE)
