"""Role to permission mapping and checks."""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Mapping, FrozenSet

from ..domain.enums import Role


class Permission(str, Enum):
    MANAGE_USERS = "MANAGE_USERS"
    MANAGE_ROLES = "MANAGE_ROLES"
    DELETE_POST = "DELETE_POST"
    VIEW_ANALYTICS = "VIEW_ANALYTICS"
    MODERATE_COMMENTS = "MODERATE_COMMENTS"
    CREATE_POST = "CREATE_POST"
    PUBLISH_POST = "PUBLISH_POST"
    EDIT_ALL_POSTS = "EDIT_ALL_POSTS"
    EDIT_OWN_POST = "EDIT_OWN_POST"
    DELETE_OWN_POST = "DELETE_OWN_POST"


_AUTHOR = frozenset({Permission.CREATE_POST, Permission.EDIT_OWN_POST, Permission.DELETE_OWN_POST})
_EDITOR = _AUTHOR | {Permission.PUBLISH_POST, Permission.EDIT_ALL_POSTS, Permission.MODERATE_COMMENTS}

ROLE_PERMISSIONS: Mapping[Role, FrozenSet[Permission]] = {
    Role.ADMIN: frozenset(Permission),
    Role.EDITOR: _EDITOR,
    Role.AUTHOR: _AUTHOR,
}


def _as_roles(roles: Iterable[str]) -> list[Role]:
    known = {r.value for r in Role}
    return [Role(r) for r in roles if r in known]


def has_permission(roles: Iterable[str], permission: Permission) -> bool:
    return any(permission in ROLE_PERMISSIONS[r] for r in _as_roles(roles))
