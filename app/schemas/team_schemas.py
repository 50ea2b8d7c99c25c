from datetime import date, datetime
from pydantic import BaseModel, Field
from app.models.permissions import Permissions
from app.models.role import (
    AppModule,
    Department,
    MemberStatus,
    PermissionAction,
    TeamRole,
)


class MemberPatch(BaseModel):
    """
    Partial update applied by the directory store.

    Only explicitly set fields are written. Callers build patches after
    validation; the store does not validate hierarchy rules.
    """

    manager_id: int | None = None
    permissions: Permissions | None = None


class MemberResponse(BaseModel):
    """Team member details"""

    id: int
    user_id: int | None
    full_name: str
    email: str | None
    role: TeamRole
    department: Department
    manager_id: int | None
    status: MemberStatus
    permissions: Permissions
    hire_date: date | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MemberDetailResponse(MemberResponse):
    """Team member with its position in the hierarchy"""

    depth: int
    ancestor_ids: list[int]
    direct_report_ids: list[int]


class ManagerReassignRequest(BaseModel):
    """Move a member under a new manager"""

    manager_id: int = Field(..., description="Team member ID of the new manager")


class PermissionsUpdate(BaseModel):
    """Replace a member's policy"""

    permissions: Permissions


class PermissionCheckResponse(BaseModel):
    """Answer to a module/action permission check"""

    module: AppModule
    action: PermissionAction
    allowed: bool


class HierarchyNodeResponse(BaseModel):
    """Org chart node"""

    id: int
    full_name: str
    role: TeamRole
    department: Department
    status: MemberStatus
    children: list["HierarchyNodeResponse"] = []


class HierarchyResponse(BaseModel):
    """Org chart; root is null when the tenant has no single CEO"""

    root: HierarchyNodeResponse | None
    is_degenerate: bool


class HierarchyStatsResponse(BaseModel):
    """Structural statistics of a tenant's hierarchy"""

    total_members: int
    active_members: int
    max_depth: int
    distribution: dict[int, int]
    has_ceo: bool
    is_degenerate: bool

    model_config = {"from_attributes": True}


class RoleConfigResponse(BaseModel):
    """Role catalog entry"""

    role: TeamRole
    rank: int
    label: str
    description: str
    default_policy: Permissions

    model_config = {"from_attributes": True}
