"""
Role to capability resolution.

Every access decision goes through resolve_capabilities(); routers never
compare role strings directly.
"""

from enum import Enum
from typing import FrozenSet, Optional

from ..schemas.enums import UserRole


class Capability(str, Enum):
    CREATE_SESSION = "create_session"
    MANAGE_OWN_SESSIONS = "manage_own_sessions"
    MANAGE_ENVIRONMENTS = "manage_environments"
    VIEW_CUSTOM_FORMS = "view_custom_forms"
    VIEW_ALL_SESSIONS = "view_all_sessions"
    EDIT_ANY_SESSION = "edit_any_session"
    DELETE_ANY_SESSION = "delete_any_session"
    MANAGE_USERS = "manage_users"
    MANAGE_CUSTOM_FORMS = "manage_custom_forms"
    MANAGE_ADMINS = "manage_admins"


_TECHNICIAN = frozenset({
    Capability.CREATE_SESSION,
    Capability.MANAGE_OWN_SESSIONS,
    Capability.MANAGE_ENVIRONMENTS,
    Capability.VIEW_CUSTOM_FORMS,
})

_SUPPORT_CENTER = _TECHNICIAN | frozenset({
    Capability.VIEW_ALL_SESSIONS,
    Capability.EDIT_ANY_SESSION,
    Capability.DELETE_ANY_SESSION,
    Capability.MANAGE_USERS,
    Capability.MANAGE_CUSTOM_FORMS,
})

_SUPER_ADMIN = _SUPPORT_CENTER | frozenset({Capability.MANAGE_ADMINS})

ROLE_CAPABILITIES = {
    UserRole.TECHNICIAN: _TECHNICIAN,
    UserRole.SUPPORT_CENTER: _SUPPORT_CENTER,
    UserRole.SUPER_ADMIN: _SUPER_ADMIN,
}


def resolve_capabilities(role) -> FrozenSet[Capability]:
    """Unknown roles resolve to no capabilities"""
    try:
        return ROLE_CAPABILITIES[UserRole(getattr(role, "value", role))]
    except ValueError:
        return frozenset()


def has_capability(role, capability: Capability) -> bool:
    return capability in resolve_capabilities(role)


def can_view_session(role, user_id: int, owner_id: Optional[int]) -> bool:
    caps = resolve_capabilities(role)
    if Capability.VIEW_ALL_SESSIONS in caps:
        return True
    return Capability.MANAGE_OWN_SESSIONS in caps and owner_id == user_id


def can_manage_results(role, user_id: int, owner_id: Optional[int]) -> bool:
    """Owners may add and edit results in their own sessions"""
    caps = resolve_capabilities(role)
    if Capability.EDIT_ANY_SESSION in caps:
        return True
    return Capability.MANAGE_OWN_SESSIONS in caps and owner_id == user_id


def can_delete_session(role, user_id: int, owner_id: Optional[int], result_count: int) -> bool:
    """Owners may only delete a session while it is unfinished (no stored results)"""
    caps = resolve_capabilities(role)
    if Capability.DELETE_ANY_SESSION in caps:
        return True
    return (
        Capability.MANAGE_OWN_SESSIONS in caps
        and owner_id == user_id
        and result_count == 0
    )


def can_assign_role(actor_role, target_role) -> bool:
    """Only super admins may create or modify super admin accounts"""
    caps = resolve_capabilities(actor_role)
    if Capability.MANAGE_USERS not in caps:
        return False
    if getattr(target_role, "value", target_role) == UserRole.SUPER_ADMIN.value:
        return Capability.MANAGE_ADMINS in caps
    return True
