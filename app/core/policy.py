"""Authorization lookups against a member's permission policy."""

from app.core.exceptions import (
    InvalidActionError,
    InvalidAdminPermissionError,
    InvalidModuleError,
)
from app.core.role_catalog import default_policy
from app.models.member import Member
from app.models.permissions import ModulePermission, Permissions
from app.models.role import AdminPermission, AppModule, PermissionAction, TeamRole


def _module_key(module: AppModule | str) -> AppModule:
    try:
        return AppModule(module)
    except ValueError:
        raise InvalidModuleError(f"Unknown module: {module}") from None


def _action_key(action: PermissionAction | str) -> PermissionAction:
    try:
        return PermissionAction(action)
    except ValueError:
        raise InvalidActionError(f"Unknown action: {action}") from None


def _admin_key(key: AdminPermission | str) -> AdminPermission:
    try:
        return AdminPermission(key)
    except ValueError:
        raise InvalidAdminPermissionError(f"Unknown admin permission: {key}") from None


def module_permission(policy: Permissions, module: AppModule | str) -> ModulePermission:
    """CRUD flags of one module in a policy"""
    return getattr(policy.modules, _module_key(module).value)


def has_module_permission(
    member: Member, module: AppModule | str, action: PermissionAction | str
) -> bool:
    """
    Check a per-module CRUD flag on the member's policy.

    Raises:
        InvalidModuleError: If module is not an AppModule value
        InvalidActionError: If action is not a PermissionAction value
    """
    flags = module_permission(member.policy, module)
    return getattr(flags, _action_key(action).value)


def has_admin_permission(member: Member, key: AdminPermission | str) -> bool:
    """
    Check an administrative flag on the member's policy.

    Raises:
        InvalidAdminPermissionError: If key is not an AdminPermission value
    """
    return getattr(member.policy.admin, _admin_key(key).value)


def can_modify_permissions(member: Member) -> bool:
    return has_admin_permission(member, AdminPermission.MANAGE_PERMISSIONS)


def can_assign_roles(member: Member) -> bool:
    return has_admin_permission(member, AdminPermission.MANAGE_ROLES)


def apply_template(role: TeamRole | str) -> Permissions:
    """
    Role baseline used when an operator resets a member's policy.

    The result replaces the member's policy outright; custom grants are not
    merged in. Calling it repeatedly yields equal, independent copies.
    """
    return default_policy(role)


def policies_equal(first: Permissions, second: Permissions) -> bool:
    """Deep equality over module flags, admin flags and data scope"""
    return first == second
