"""
Static role catalog: rank order, display labels and default policy templates.

Authorization and validation rules compare ranks only. Policies are presets
an operator applies to a member and may then customize.
"""

from dataclasses import dataclass

from app.models.permissions import (
    AdminPermissions,
    ModulePermission,
    ModulePermissions,
    Permissions,
)
from app.models.role import DataScope, Department, TeamRole


ROLE_RANKS: dict[TeamRole, int] = {
    TeamRole.CEO: 1,
    TeamRole.C_LEVEL: 2,
    TeamRole.DIRECTOR: 3,
    TeamRole.MANAGER: 4,
    TeamRole.TEAM_LEAD: 5,
    TeamRole.SENIOR: 6,
    TeamRole.MID_LEVEL: 7,
    TeamRole.JUNIOR: 8,
    TeamRole.INTERN: 9,
}

ROLE_LABELS: dict[TeamRole, str] = {
    TeamRole.CEO: "CEO",
    TeamRole.C_LEVEL: "C-Level",
    TeamRole.DIRECTOR: "Diretor(a)",
    TeamRole.MANAGER: "Gerente",
    TeamRole.TEAM_LEAD: "Tech Lead",
    TeamRole.SENIOR: "Sênior",
    TeamRole.MID_LEVEL: "Pleno",
    TeamRole.JUNIOR: "Júnior",
    TeamRole.INTERN: "Estagiário(a)",
}

ROLE_DESCRIPTIONS: dict[TeamRole, str] = {
    TeamRole.CEO: "Full access to everything",
    TeamRole.C_LEVEL: "Near full access, cannot manage permissions",
    TeamRole.DIRECTOR: "Broad access, no billing",
    TeamRole.MANAGER: "Manages team and tasks",
    TeamRole.TEAM_LEAD: "Technical lead, does not manage people",
    TeamRole.SENIOR: "Senior contributor",
    TeamRole.MID_LEVEL: "Mid-level contributor",
    TeamRole.JUNIOR: "Junior contributor",
    TeamRole.INTERN: "Intern with very limited access",
}

DEPARTMENT_LABELS: dict[Department, str] = {
    Department.ENGINEERING: "Engenharia",
    Department.PRODUCT: "Produto",
    Department.DESIGN: "Design",
    Department.MARKETING: "Marketing",
    Department.SALES: "Vendas",
    Department.CUSTOMER_SUCCESS: "Customer Success",
    Department.FINANCE: "Financeiro",
    Department.HR: "RH",
    Department.OPERATIONS: "Operações",
    Department.OTHER: "Outro",
}


def empty_module_permission() -> ModulePermission:
    """Module permission with every action denied"""
    return ModulePermission()


def full_module_permission() -> ModulePermission:
    """Module permission with every action granted"""
    return ModulePermission(view=True, create=True, edit=True, delete=True)


def _view_only() -> ModulePermission:
    return ModulePermission(view=True)


def _no_admin() -> AdminPermissions:
    return AdminPermissions()


_TEMPLATES: dict[TeamRole, Permissions] = {
    TeamRole.CEO: Permissions(
        modules=ModulePermissions(
            dashboard=full_module_permission(),
            tasks=full_module_permission(),
            clients=full_module_permission(),
            calendar=full_module_permission(),
            team=full_module_permission(),
            analytics=full_module_permission(),
            tags=full_module_permission(),
            settings=full_module_permission(),
        ),
        admin=AdminPermissions(
            manage_users=True,
            manage_roles=True,
            manage_permissions=True,
            view_reports=True,
            export_data=True,
            manage_billing=True,
        ),
        data_scope=DataScope.ALL,
    ),
    TeamRole.C_LEVEL: Permissions(
        modules=ModulePermissions(
            dashboard=full_module_permission(),
            tasks=full_module_permission(),
            clients=full_module_permission(),
            calendar=full_module_permission(),
            team=ModulePermission(view=True, create=True, edit=True),
            analytics=full_module_permission(),
            tags=full_module_permission(),
            settings=ModulePermission(view=True, edit=True),
        ),
        admin=AdminPermissions(
            manage_users=True,
            manage_roles=True,
            view_reports=True,
            export_data=True,
            manage_billing=True,
        ),
        data_scope=DataScope.ALL,
    ),
    TeamRole.DIRECTOR: Permissions(
        modules=ModulePermissions(
            dashboard=full_module_permission(),
            tasks=full_module_permission(),
            clients=full_module_permission(),
            calendar=full_module_permission(),
            team=ModulePermission(view=True, create=True, edit=True),
            analytics=_view_only(),
            tags=full_module_permission(),
            settings=_view_only(),
        ),
        admin=AdminPermissions(manage_users=True, view_reports=True, export_data=True),
        data_scope=DataScope.ALL,
    ),
    TeamRole.MANAGER: Permissions(
        modules=ModulePermissions(
            dashboard=_view_only(),
            tasks=full_module_permission(),
            clients=ModulePermission(view=True, create=True, edit=True),
            calendar=full_module_permission(),
            team=ModulePermission(view=True, edit=True),
            analytics=_view_only(),
            tags=ModulePermission(view=True, create=True, edit=True),
            settings=_view_only(),
        ),
        admin=AdminPermissions(view_reports=True),
        data_scope=DataScope.TEAM,
    ),
    TeamRole.TEAM_LEAD: Permissions(
        modules=ModulePermissions(
            dashboard=_view_only(),
            tasks=full_module_permission(),
            clients=ModulePermission(view=True, edit=True),
            calendar=full_module_permission(),
            team=_view_only(),
            analytics=_view_only(),
            tags=ModulePermission(view=True, create=True, edit=True),
            settings=_view_only(),
        ),
        admin=_no_admin(),
        data_scope=DataScope.TEAM,
    ),
    TeamRole.SENIOR: Permissions(
        modules=ModulePermissions(
            dashboard=_view_only(),
            tasks=full_module_permission(),
            clients=_view_only(),
            calendar=full_module_permission(),
            team=_view_only(),
            analytics=empty_module_permission(),
            tags=full_module_permission(),
            settings=_view_only(),
        ),
        admin=_no_admin(),
        data_scope=DataScope.OWN,
    ),
    TeamRole.MID_LEVEL: Permissions(
        modules=ModulePermissions(
            dashboard=_view_only(),
            tasks=ModulePermission(view=True, create=True, edit=True),
            clients=_view_only(),
            calendar=full_module_permission(),
            team=_view_only(),
            analytics=empty_module_permission(),
            tags=ModulePermission(view=True, create=True),
            settings=_view_only(),
        ),
        admin=_no_admin(),
        data_scope=DataScope.OWN,
    ),
    TeamRole.JUNIOR: Permissions(
        modules=ModulePermissions(
            dashboard=_view_only(),
            tasks=ModulePermission(view=True, create=True, edit=True),
            clients=empty_module_permission(),
            calendar=ModulePermission(view=True, create=True, edit=True),
            team=_view_only(),
            analytics=empty_module_permission(),
            tags=_view_only(),
            settings=_view_only(),
        ),
        admin=_no_admin(),
        data_scope=DataScope.OWN,
    ),
    TeamRole.INTERN: Permissions(
        modules=ModulePermissions(
            dashboard=_view_only(),
            tasks=ModulePermission(view=True, create=True),
            clients=empty_module_permission(),
            calendar=ModulePermission(view=True, create=True),
            team=_view_only(),
            analytics=empty_module_permission(),
            tags=_view_only(),
            settings=empty_module_permission(),
        ),
        admin=_no_admin(),
        data_scope=DataScope.OWN,
    ),
}


@dataclass(frozen=True)
class RoleConfig:
    """Catalog entry describing a role and its baseline policy"""

    role: TeamRole
    rank: int
    label: str
    description: str
    default_policy: Permissions


def rank(role: TeamRole | str) -> int:
    """Seniority rank of a role (1 = CEO, 9 = intern)"""
    return ROLE_RANKS[TeamRole(role)]


def label(role: TeamRole | str) -> str:
    """Display label of a role"""
    return ROLE_LABELS[TeamRole(role)]


def department_label(department: Department | str) -> str:
    """Display label of a department, falling back to the raw value"""
    try:
        return DEPARTMENT_LABELS[Department(department)]
    except ValueError:
        return str(department)


def default_policy(role: TeamRole | str) -> Permissions:
    """
    Baseline policy for a role.

    Always returns a fresh deep copy; callers may mutate the result freely
    without touching the template table.
    """
    return _TEMPLATES[TeamRole(role)].clone()


def role_configs() -> list[RoleConfig]:
    """All roles ordered from most to least senior"""
    return [
        RoleConfig(
            role=role,
            rank=ROLE_RANKS[role],
            label=ROLE_LABELS[role],
            description=ROLE_DESCRIPTIONS[role],
            default_policy=default_policy(role),
        )
        for role in sorted(ROLE_RANKS, key=ROLE_RANKS.__getitem__)
    ]
